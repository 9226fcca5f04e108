"""Async LiteLLM chat client."""

import logging
import time
from typing import Any

import litellm
from litellm.exceptions import (
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    Timeout,
)

from summarylog.config import LLMConfig
from summarylog.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMError,
    LLMModelNotFoundError,
    LLMRateLimitError,
    LLMTimeoutError,
)

logger = logging.getLogger(__name__)

# (LiteLLM exception, raised as, log level)
_ERROR_MAP: tuple[tuple[type[Exception], type[LLMError], int], ...] = (
    (AuthenticationError, LLMAuthenticationError, logging.ERROR),
    (RateLimitError, LLMRateLimitError, logging.WARNING),
    (Timeout, LLMTimeoutError, logging.WARNING),
    (NotFoundError, LLMModelNotFoundError, logging.ERROR),
)

JSON_RESPONSE_FORMAT = {"type": "json_object"}


class LLMClient:
    """Chat completion over litellm.acompletion.

    Sampling parameters come from an LLMConfig. LiteLLM errors are raised as
    LLMError subclasses.
    """

    def __init__(self, config: LLMConfig) -> None:
        """Initialize the client.

        Args:
            config: Model name and sampling parameters.
        """
        self._config = config

    @property
    def model(self) -> str:
        return self._config.model

    async def complete(
        self,
        messages: list[dict[str, str]],
        json_mode: bool = False,
        **kwargs: Any,
    ) -> str:
        """Run one chat completion.

        Args:
            messages: OpenAI-format message list.
            json_mode: Ask the provider for a JSON object response.
            **kwargs: Extra LiteLLM parameters (override config).

        Returns:
            Response text ("" when the provider returned no content).

        Raises:
            LLMAuthenticationError: Invalid API key.
            LLMRateLimitError: Rate limit exceeded.
            LLMTimeoutError: Request timed out.
            LLMModelNotFoundError: Unknown model.
            LLMError: Other API errors.
        """
        params: dict[str, Any] = {
            "model": self._config.model,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
        }
        if json_mode:
            params["response_format"] = JSON_RESPONSE_FORMAT
        params.update(kwargs)

        started = time.monotonic()
        try:
            response = await litellm.acompletion(messages=messages, **params)
        except Exception as e:
            raise self._convert_error(e) from e

        logger.debug(
            "LLM response from %s in %.2fs (usage: %s)",
            params["model"],
            time.monotonic() - started,
            getattr(response, "usage", None),
        )
        return response.choices[0].message.content or ""

    def _convert_error(self, error: Exception) -> LLMError:
        for source, target, level in _ERROR_MAP:
            if isinstance(error, source):
                logger.log(level, "LLM request to %s failed: %s", self.model, error)
                return target(str(error))
        logger.error("LLM request to %s failed: %s", self.model, error)
        return LLMError(str(error))
