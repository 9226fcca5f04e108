"""Tests for LLMClient."""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from litellm.exceptions import (
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    Timeout,
)

from summarylog.config import LLMConfig
from summarylog.infrastructure.llm import (
    LLMAuthenticationError,
    LLMClient,
    LLMError,
    LLMModelNotFoundError,
    LLMRateLimitError,
    LLMTimeoutError,
)

MESSAGES = [{"role": "user", "content": "Hello"}]


@pytest.fixture
def client() -> LLMClient:
    """Create LLMClient instance."""
    return LLMClient(LLMConfig(model="gpt-4o", temperature=0.7, max_tokens=1000))


@pytest.fixture
def mock_response() -> MagicMock:
    """Create mock LiteLLM response."""
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = '{"action": "new"}'
    return response


class TestComplete:
    """LLMClient.complete tests."""

    async def test_returns_content(
        self, client: LLMClient, mock_response: MagicMock
    ) -> None:
        with patch(
            "litellm.acompletion", new=AsyncMock(return_value=mock_response)
        ) as mock_completion:
            result = await client.complete(MESSAGES)

        assert result == '{"action": "new"}'
        mock_completion.assert_awaited_once()

    async def test_applies_config(
        self, client: LLMClient, mock_response: MagicMock
    ) -> None:
        with patch(
            "litellm.acompletion", new=AsyncMock(return_value=mock_response)
        ) as mock_completion:
            await client.complete(MESSAGES)

        call_kwargs = mock_completion.call_args.kwargs
        assert call_kwargs["model"] == "gpt-4o"
        assert call_kwargs["temperature"] == 0.7
        assert call_kwargs["max_tokens"] == 1000
        assert call_kwargs["messages"] == MESSAGES
        assert "response_format" not in call_kwargs

    async def test_json_mode(self, client: LLMClient, mock_response: MagicMock) -> None:
        with patch(
            "litellm.acompletion", new=AsyncMock(return_value=mock_response)
        ) as mock_completion:
            await client.complete(MESSAGES, json_mode=True)

        assert mock_completion.call_args.kwargs["response_format"] == {
            "type": "json_object"
        }

    async def test_kwargs_override_config(
        self, client: LLMClient, mock_response: MagicMock
    ) -> None:
        with patch(
            "litellm.acompletion", new=AsyncMock(return_value=mock_response)
        ) as mock_completion:
            await client.complete(MESSAGES, max_tokens=500)

        assert mock_completion.call_args.kwargs["max_tokens"] == 500

    async def test_none_content(
        self, client: LLMClient, mock_response: MagicMock
    ) -> None:
        mock_response.choices[0].message.content = None
        with patch("litellm.acompletion", new=AsyncMock(return_value=mock_response)):
            assert await client.complete(MESSAGES) == ""


class TestErrorMapping:
    """LiteLLM errors are raised as LLMError subclasses."""

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (
                AuthenticationError(
                    message="Invalid API key", llm_provider="openai", model="gpt-4o"
                ),
                LLMAuthenticationError,
            ),
            (
                RateLimitError(
                    message="Rate limit exceeded", llm_provider="openai", model="gpt-4o"
                ),
                LLMRateLimitError,
            ),
            (
                Timeout(
                    message="Request timed out", model="gpt-4o", llm_provider="openai"
                ),
                LLMTimeoutError,
            ),
            (
                NotFoundError(
                    message="No such model", model="gpt-4o", llm_provider="openai"
                ),
                LLMModelNotFoundError,
            ),
        ],
    )
    async def test_mapped(
        self, client: LLMClient, error: Exception, expected: type[LLMError]
    ) -> None:
        with patch("litellm.acompletion", new=AsyncMock(side_effect=error)):
            with pytest.raises(expected) as exc_info:
                await client.complete(MESSAGES)

        assert exc_info.value.__cause__ is error

    async def test_unknown_error(
        self, client: LLMClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        with patch(
            "litellm.acompletion", new=AsyncMock(side_effect=Exception("Unknown error"))
        ):
            with caplog.at_level(logging.ERROR):
                with pytest.raises(LLMError, match="Unknown error") as exc_info:
                    await client.complete(MESSAGES)

        assert type(exc_info.value) is LLMError
        assert "gpt-4o" in caplog.text
