"""Tests for StrandsStructuredGenerator."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from summarylog.config.models import AgentConfig
from summarylog.infrastructure.llm.exceptions import (
    LLMError,
    LLMRateLimitError,
    LLMResponseFormatError,
)
from summarylog.infrastructure.llm.models import DecisionOutput
from summarylog.infrastructure.llm.strands import StrandsStructuredGenerator

AGENT_PATH = "summarylog.infrastructure.llm.strands.factory.Agent"


@pytest.fixture
def mock_model() -> MagicMock:
    """Create mock LiteLLMModel."""
    return MagicMock()


def create_mock_result(output: object) -> MagicMock:
    """Create a mock Agent result with structured_output."""
    result = MagicMock()
    result.structured_output = output
    return result


def decision_output() -> DecisionOutput:
    return DecisionOutput(action="new", title="Setup", summary="Did setup.")


class TestStrandsStructuredGenerator:
    """Tests for StrandsStructuredGenerator.generate."""

    async def test_generate_returns_structured_output(
        self, mock_model: MagicMock
    ) -> None:
        generator = StrandsStructuredGenerator(model=mock_model)
        expected = decision_output()

        with patch(AGENT_PATH) as mock_agent_class:
            mock_agent = MagicMock()
            mock_agent.invoke_async = AsyncMock(
                return_value=create_mock_result(expected)
            )
            mock_agent_class.return_value = mock_agent

            output = await generator.generate("prompt", DecisionOutput)

        assert output == expected
        mock_agent.invoke_async.assert_awaited_once_with(
            "prompt", structured_output_model=DecisionOutput
        )

    async def test_agent_uses_system_prompt(self, mock_model: MagicMock) -> None:
        generator = StrandsStructuredGenerator(
            model=mock_model,
            agent_config=AgentConfig(model_id="m", system_prompt="Be brief."),
        )

        with patch(AGENT_PATH) as mock_agent_class:
            mock_agent_class.return_value.invoke_async = AsyncMock(
                return_value=create_mock_result(decision_output())
            )
            await generator.generate("prompt", DecisionOutput)

        mock_agent_class.assert_called_once_with(
            model=mock_model, system_prompt="Be brief.", tools=[]
        )

    async def test_wrong_output_type(self, mock_model: MagicMock) -> None:
        generator = StrandsStructuredGenerator(model=mock_model)

        with patch(AGENT_PATH) as mock_agent_class:
            mock_agent_class.return_value.invoke_async = AsyncMock(
                return_value=create_mock_result(None)
            )
            with pytest.raises(LLMResponseFormatError, match="DecisionOutput"):
                await generator.generate("prompt", DecisionOutput)

    async def test_errors_are_mapped(self, mock_model: MagicMock) -> None:
        generator = StrandsStructuredGenerator(model=mock_model)

        with patch(AGENT_PATH) as mock_agent_class:
            mock_agent_class.return_value.invoke_async = AsyncMock(
                side_effect=Exception("Rate limit exceeded")
            )
            with pytest.raises(LLMRateLimitError):
                await generator.generate("prompt", DecisionOutput)

    async def test_unknown_error(self, mock_model: MagicMock) -> None:
        generator = StrandsStructuredGenerator(model=mock_model)

        with patch(AGENT_PATH) as mock_agent_class:
            mock_agent_class.return_value.invoke_async = AsyncMock(
                side_effect=RuntimeError("boom")
            )
            with pytest.raises(LLMError, match="boom"):
                await generator.generate("prompt", DecisionOutput)
