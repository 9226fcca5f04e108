"""設定管理モジュール"""

from summarylog.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
from summarylog.config.models import (
    AgentConfig,
    Config,
    DatabaseConfig,
    LLMConfig,
    LoggingConfig,
    SummaryConfig,
)

__all__ = [
    "AgentConfig",
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "DatabaseConfig",
    "EnvironmentVariableError",
    "LLMConfig",
    "LoggingConfig",
    "SummaryConfig",
    "expand_env_vars",
    "load_config",
]
