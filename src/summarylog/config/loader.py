"""YAML設定ファイルの読み込みと環境変数展開"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from summarylog.config.models import (
    AgentConfig,
    Config,
    DatabaseConfig,
    LLMConfig,
    LoggingConfig,
    SummaryConfig,
)


class ConfigError(Exception):
    """設定関連の基底例外"""


class ConfigValidationError(ConfigError):
    """設定値のバリデーションエラー"""


class EnvironmentVariableError(ConfigError):
    """環境変数が見つからないエラー"""


# 環境変数パターン: ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

_BACKENDS = ("strands", "litellm")


def expand_env_vars(value: str) -> str:
    """文字列中の ${VAR_NAME} を環境変数の値に置換する

    Args:
        value: 置換対象の文字列

    Returns:
        環境変数が展開された文字列

    Raises:
        EnvironmentVariableError: 環境変数が未設定
    """
    if not value:
        return value

    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise EnvironmentVariableError(
                f"Environment variable '{var_name}' is not set"
            )
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, value)


def _expand_recursive(data: Any) -> Any:
    """データ構造を再帰的に走査し、文字列中の環境変数を展開する"""
    if isinstance(data, dict):
        return {key: _expand_recursive(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def _require(section: dict[str, Any], key: str, path: str) -> Any:
    """必須キーの値を返す（欠落・null はエラー）

    Raises:
        ConfigValidationError: キーが存在しない
    """
    value = section.get(key)
    if value is None:
        raise ConfigValidationError(f"Required field '{path}.{key}' is missing")
    return value


def _section(
    data: dict[str, Any], name: str, required: bool = False
) -> dict[str, Any]:
    """トップレベルのセクションを取り出す

    Raises:
        ConfigValidationError: 必須セクションの欠落、またはマッピング以外
    """
    value = data.get(name)
    if value is None:
        if required:
            raise ConfigValidationError(f"Required field '{name}' is missing")
        return {}
    if not isinstance(value, dict):
        raise ConfigValidationError(f"'{name}' must be a mapping")
    return value


def _load_llm(data: dict[str, Any]) -> dict[str, LLMConfig]:
    section = _section(data, "llm", required=True)
    _require(section, "default", "llm")
    for name, item in section.items():
        if not isinstance(item, dict):
            raise ConfigValidationError(f"'llm.{name}' must be a mapping")
    return {
        name: LLMConfig(
            model=_require(item, "model", f"llm.{name}"),
            temperature=item.get("temperature", 0.3),
            max_tokens=item.get("max_tokens", 1000),
        )
        for name, item in section.items()
    }


def _load_database(data: dict[str, Any]) -> DatabaseConfig:
    section = _section(data, "database", required=True)
    return DatabaseConfig(database_path=_require(section, "database_path", "database"))


def _load_summary(data: dict[str, Any]) -> SummaryConfig:
    section = _section(data, "summary")
    backend = section.get("backend", "strands")
    if backend not in _BACKENDS:
        raise ConfigValidationError(
            f"summary.backend must be one of {', '.join(_BACKENDS)}, got '{backend}'"
        )

    raw_timeout = section.get("generation_timeout_seconds", 60.0)
    try:
        timeout = float(raw_timeout)
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(
            f"summary.generation_timeout_seconds must be a number, got '{raw_timeout}'"
        ) from e
    if timeout <= 0:
        raise ConfigValidationError(
            "summary.generation_timeout_seconds must be positive"
        )
    return SummaryConfig(backend=backend, generation_timeout_seconds=timeout)


def _load_agent(data: dict[str, Any], llm: dict[str, LLMConfig]) -> AgentConfig:
    """agent セクションを読む（省略時は llm.default から組み立てる）"""
    section = _section(data, "agent")
    if not section:
        fallback = llm["default"]
        return AgentConfig(
            model_id=fallback.model,
            params={
                "temperature": fallback.temperature,
                "max_tokens": fallback.max_tokens,
            },
        )
    return AgentConfig(
        model_id=_require(section, "model_id", "agent"),
        params=section.get("params") or {},
        client_args=section.get("client_args"),
        system_prompt=section.get("system_prompt"),
    )


def _load_logging(data: dict[str, Any]) -> LoggingConfig | None:
    section = _section(data, "logging")
    if not section:
        return None
    defaults = LoggingConfig()
    return LoggingConfig(
        level=section.get("level", defaults.level),
        format=section.get("format", defaults.format),
        loggers=section.get("loggers"),
        debug_llm_messages=bool(section.get("debug_llm_messages", False)),
    )


def load_config(path: str | Path) -> Config:
    """設定ファイルを読み込む

    Args:
        path: config.yaml のパス

    Returns:
        Config オブジェクト

    Raises:
        FileNotFoundError: ファイルが存在しない
        ConfigValidationError: 必須項目の欠落、または不正な値
        EnvironmentVariableError: 環境変数が未設定
        yaml.YAMLError: YAML構文エラー
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ConfigValidationError("Config root must be a mapping")

    data = _expand_recursive(raw)
    llm = _load_llm(data)
    return Config(
        llm=llm,
        database=_load_database(data),
        summary=_load_summary(data),
        agent=_load_agent(data, llm),
        logging=_load_logging(data),
    )
