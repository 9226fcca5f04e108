"""Tests for strands model/agent factories."""

from unittest.mock import MagicMock, patch

from summarylog.config.models import AgentConfig
from summarylog.infrastructure.llm.strands import create_agent, create_model


class TestCreateModel:
    """create_model tests."""

    def test_passes_agent_config(self) -> None:
        config = AgentConfig(
            model_id="openai/gpt-4o-mini",
            params={"temperature": 0.2},
            client_args={"api_key": "sk-test"},
        )

        with patch(
            "summarylog.infrastructure.llm.strands.factory.LiteLLMModel"
        ) as mock_model_class:
            model = create_model(config)

        mock_model_class.assert_called_once_with(
            model_id="openai/gpt-4o-mini",
            params={"temperature": 0.2},
            client_args={"api_key": "sk-test"},
        )
        assert model is mock_model_class.return_value


class TestCreateAgent:
    """create_agent tests."""

    def test_creates_toolless_agent(self) -> None:
        model = MagicMock()

        with patch(
            "summarylog.infrastructure.llm.strands.factory.Agent"
        ) as mock_agent_class:
            create_agent(model, system_prompt="Be brief.")

        mock_agent_class.assert_called_once_with(
            model=model,
            system_prompt="Be brief.",
            tools=[],
            callback_handler=None,
        )
