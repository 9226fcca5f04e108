"""Construction of strands-agents models and single-use agents."""

from strands import Agent
from strands.models.litellm import LiteLLMModel

from summarylog.config.models import AgentConfig


def create_model(config: AgentConfig) -> LiteLLMModel:
    """Build the LiteLLM-backed model shared by all generation requests."""
    return LiteLLMModel(
        model_id=config.model_id,
        params=config.params,
        client_args=config.client_args,
    )


def create_agent(model: LiteLLMModel, system_prompt: str | None = None) -> Agent:
    """Build an agent for one structured-output request.

    The agent has no tools, and callback_handler=None keeps the streamed
    response off stdout.

    Args:
        model: Shared model from create_model.
        system_prompt: Optional system prompt.

    Returns:
        A fresh Agent with empty conversation history.
    """
    return Agent(
        model=model,
        system_prompt=system_prompt,
        tools=[],
        callback_handler=None,
    )
