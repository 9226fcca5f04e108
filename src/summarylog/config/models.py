"""設定データクラス"""

from dataclasses import dataclass, field
from typing import Any, Literal

GeneratorBackend = Literal["strands", "litellm"]


@dataclass
class LLMConfig:
    """LLM設定（LiteLLMのcompletionに渡すdict）"""

    model: str
    temperature: float = 0.3
    max_tokens: int = 1000


@dataclass
class AgentConfig:
    """strands-agents 設定

    Attributes:
        model_id: LiteLLM model ID.
        params: Model parameters (temperature, max_tokens...).
        client_args: LiteLLM client arguments (api_key, api_base...).
        system_prompt: Optional system prompt prepended to every request.
    """

    model_id: str
    params: dict[str, Any] = field(default_factory=dict)
    client_args: dict[str, Any] | None = None
    system_prompt: str | None = None


@dataclass
class SummaryConfig:
    """要約設定

    Attributes:
        backend: Structured generator implementation.
        generation_timeout_seconds: Upper bound for one AI generation call.
    """

    backend: GeneratorBackend = "strands"
    generation_timeout_seconds: float = 60.0


@dataclass
class DatabaseConfig:
    """データベース設定"""

    database_path: str


@dataclass
class LoggingConfig:
    """ログ設定"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None
    debug_llm_messages: bool = False


@dataclass
class Config:
    """アプリケーション設定"""

    llm: dict[str, LLMConfig]
    database: DatabaseConfig
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    agent: AgentConfig | None = None
    logging: LoggingConfig | None = None
