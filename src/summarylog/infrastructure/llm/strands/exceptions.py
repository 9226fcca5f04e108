"""Translation of strands-agents failures into LLMError."""

from litellm.exceptions import (
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    Timeout,
)
from pydantic import ValidationError
from strands.types.exceptions import ModelThrottledException

from summarylog.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMError,
    LLMModelNotFoundError,
    LLMRateLimitError,
    LLMResponseFormatError,
    LLMTimeoutError,
)

# Exceptions that reach us unwrapped through LiteLLMModel
_TYPE_MAP: tuple[tuple[type[Exception], type[LLMError]], ...] = (
    (AuthenticationError, LLMAuthenticationError),
    (RateLimitError, LLMRateLimitError),
    (ModelThrottledException, LLMRateLimitError),
    (Timeout, LLMTimeoutError),
    (NotFoundError, LLMModelNotFoundError),
    (ValidationError, LLMResponseFormatError),
)

# Lower-case message fragments, checked in order, for wrapped errors
_MESSAGE_PATTERNS: tuple[tuple[tuple[str, ...], type[LLMError]], ...] = (
    (("authentication", "api key", "unauthorized"), LLMAuthenticationError),
    (("rate limit", "too many requests", "throttl"), LLMRateLimitError),
    (("timeout", "timed out"), LLMTimeoutError),
    (("model not found", "invalid model", "does not exist"), LLMModelNotFoundError),
    (("structured output", "validation error"), LLMResponseFormatError),
)


def map_strands_exception(e: Exception) -> LLMError:
    """Convert an error raised during an agent invocation to an LLMError.

    The exception type decides when it is known. Otherwise the message is
    matched against common provider wordings. LLMError instances are returned
    unchanged.

    Args:
        e: Exception raised by strands-agents or the model provider.

    Returns:
        The matching LLMError subclass instance (LLMError when unknown).
    """
    if isinstance(e, LLMError):
        return e

    for source, target in _TYPE_MAP:
        if isinstance(e, source):
            return target(str(e))

    message = str(e)
    lowered = message.lower()
    for patterns, target in _MESSAGE_PATTERNS:
        if any(pattern in lowered for pattern in patterns):
            return target(message)
    return LLMError(message)
