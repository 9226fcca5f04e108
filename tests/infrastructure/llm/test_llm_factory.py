"""Tests for create_structured_generator."""

from unittest.mock import patch

from summarylog.config import (
    AgentConfig,
    Config,
    DatabaseConfig,
    LLMConfig,
    SummaryConfig,
)
from summarylog.infrastructure.llm import (
    LiteLLMStructuredGenerator,
    create_structured_generator,
)
from summarylog.infrastructure.llm.strands import StrandsStructuredGenerator


def make_config(backend: str, agent: AgentConfig | None = None) -> Config:
    return Config(
        llm={"default": LLMConfig(model="openai/gpt-4o-mini")},
        database=DatabaseConfig(database_path=":memory:"),
        summary=SummaryConfig(backend=backend),  # type: ignore[arg-type]
        agent=agent,
    )


class TestCreateStructuredGenerator:
    """create_structured_generator tests."""

    def test_strands_backend(self) -> None:
        agent = AgentConfig(model_id="openai/gpt-4o-mini")

        with patch(
            "summarylog.infrastructure.llm.factory.create_model"
        ) as mock_create_model:
            generator = create_structured_generator(make_config("strands", agent))

        assert isinstance(generator, StrandsStructuredGenerator)
        mock_create_model.assert_called_once_with(agent)

    def test_strands_backend_without_agent(self) -> None:
        with patch(
            "summarylog.infrastructure.llm.factory.create_model"
        ) as mock_create_model:
            create_structured_generator(make_config("strands"))

        agent_config = mock_create_model.call_args.args[0]
        assert agent_config.model_id == "openai/gpt-4o-mini"

    def test_litellm_backend(self) -> None:
        generator = create_structured_generator(make_config("litellm"))

        assert isinstance(generator, LiteLLMStructuredGenerator)
