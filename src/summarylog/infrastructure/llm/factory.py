"""StructuredGenerator construction from configuration."""

from summarylog.config.models import AgentConfig, Config
from summarylog.domain.services.protocols import StructuredGenerator
from summarylog.infrastructure.llm.client import LLMClient
from summarylog.infrastructure.llm.strands import (
    StrandsStructuredGenerator,
    create_model,
)
from summarylog.infrastructure.llm.structured_generator import (
    LiteLLMStructuredGenerator,
)


def create_structured_generator(config: Config) -> StructuredGenerator:
    """Create the StructuredGenerator selected by summary.backend.

    Args:
        config: Application configuration.

    Returns:
        StrandsStructuredGenerator for "strands",
        LiteLLMStructuredGenerator for "litellm".
    """
    if config.summary.backend == "litellm":
        system_prompt = config.agent.system_prompt if config.agent else None
        return LiteLLMStructuredGenerator(
            LLMClient(config.llm["default"]), system_prompt=system_prompt
        )

    agent_config = config.agent or AgentConfig(model_id=config.llm["default"].model)
    return StrandsStructuredGenerator(create_model(agent_config), agent_config)
