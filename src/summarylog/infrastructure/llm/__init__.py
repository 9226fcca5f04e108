"""LLM integration."""

from summarylog.infrastructure.llm.client import LLMClient
from summarylog.infrastructure.llm.decision_engine import (
    RECENT_ENTRY_LIMIT,
    LLMDecisionEngine,
)
from summarylog.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMError,
    LLMModelNotFoundError,
    LLMRateLimitError,
    LLMResponseFormatError,
    LLMTimeoutError,
)
from summarylog.infrastructure.llm.factory import create_structured_generator
from summarylog.infrastructure.llm.models import DecisionOutput
from summarylog.infrastructure.llm.structured_generator import (
    LiteLLMStructuredGenerator,
)

__all__ = [
    "DecisionOutput",
    "LLMAuthenticationError",
    "LLMClient",
    "LLMDecisionEngine",
    "LLMError",
    "LLMModelNotFoundError",
    "LLMRateLimitError",
    "LLMResponseFormatError",
    "LLMTimeoutError",
    "LiteLLMStructuredGenerator",
    "RECENT_ENTRY_LIMIT",
    "create_structured_generator",
]
