"""Tests for LiteLLMStructuredGenerator."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from summarylog.infrastructure.llm import (
    DecisionOutput,
    LiteLLMStructuredGenerator,
    LLMError,
    LLMResponseFormatError,
)

VALID_JSON = json.dumps(
    {"action": "update", "index": 0, "title": "Setup", "summary": "Did setup."}
)


@pytest.fixture
def mock_client() -> MagicMock:
    client = MagicMock()
    client.complete = AsyncMock(return_value=VALID_JSON)
    return client


class TestLiteLLMStructuredGenerator:
    """LiteLLMStructuredGenerator.generate tests."""

    async def test_generate_valid_json(self, mock_client: MagicMock) -> None:
        generator = LiteLLMStructuredGenerator(mock_client)

        output = await generator.generate("prompt", DecisionOutput)

        assert output == DecisionOutput(
            action="update", index=0, title="Setup", summary="Did setup."
        )

    async def test_requests_json_object(self, mock_client: MagicMock) -> None:
        generator = LiteLLMStructuredGenerator(mock_client)

        await generator.generate("the prompt", DecisionOutput)

        messages = mock_client.complete.call_args.args[0]
        assert messages[0]["role"] == "system"
        assert '"summary"' in messages[0]["content"]
        assert messages[1] == {"role": "user", "content": "the prompt"}
        assert mock_client.complete.call_args.kwargs["json_mode"] is True

    async def test_system_prompt_prepended(self, mock_client: MagicMock) -> None:
        generator = LiteLLMStructuredGenerator(mock_client, system_prompt="Be brief.")

        await generator.generate("prompt", DecisionOutput)

        system = mock_client.complete.call_args.args[0][0]["content"]
        assert system.startswith("Be brief.\n\n")

    async def test_code_fence_stripped(self, mock_client: MagicMock) -> None:
        mock_client.complete.return_value = f"```json\n{VALID_JSON}\n```"
        generator = LiteLLMStructuredGenerator(mock_client)

        output = await generator.generate("prompt", DecisionOutput)

        assert output.title == "Setup"

    @pytest.mark.parametrize(
        "response",
        [
            "not json at all",
            json.dumps({"action": "merge", "title": "t", "summary": "s"}),
            json.dumps({"action": "new", "title": "", "summary": "s"}),
            json.dumps({"action": "new"}),
        ],
    )
    async def test_invalid_response(
        self, mock_client: MagicMock, response: str
    ) -> None:
        mock_client.complete.return_value = response
        generator = LiteLLMStructuredGenerator(mock_client)

        with pytest.raises(LLMResponseFormatError):
            await generator.generate("prompt", DecisionOutput)

    async def test_client_error_propagates(self, mock_client: MagicMock) -> None:
        mock_client.complete.side_effect = LLMError("boom")
        generator = LiteLLMStructuredGenerator(mock_client)

        with pytest.raises(LLMError, match="boom"):
            await generator.generate("prompt", DecisionOutput)
