"""strands-agents based StructuredGenerator implementation."""

import logging

from strands.models.litellm import LiteLLMModel

from summarylog.config.models import AgentConfig
from summarylog.domain.services.protocols import OutputT
from summarylog.infrastructure.llm.exceptions import LLMResponseFormatError
from summarylog.infrastructure.llm.strands.exceptions import map_strands_exception
from summarylog.infrastructure.llm.strands.factory import create_agent

logger = logging.getLogger(__name__)


class StrandsStructuredGenerator:
    """strands-agents based StructuredGenerator implementation.

    Uses Structured Output for type-safe JSON output.
    """

    def __init__(
        self,
        model: LiteLLMModel,
        agent_config: AgentConfig | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            model: LiteLLMModel instance to be reused across requests.
            agent_config: Agent configuration with optional system_prompt.
        """
        self._model = model
        self._agent_config = agent_config

    async def generate(self, prompt: str, output_model: type[OutputT]) -> OutputT:
        """Generate a value of output_model.

        Args:
            prompt: Complete instruction for the model.
            output_model: Pydantic model describing the expected output.

        Returns:
            Validated output_model instance.

        Raises:
            LLMError: Generation failed (mapped from strands-agents errors).
        """
        system_prompt = (
            self._agent_config.system_prompt if self._agent_config else None
        )
        # Agent keeps conversation state, so one is created per request
        agent = create_agent(self._model, system_prompt)

        try:
            result = await agent.invoke_async(
                prompt,
                structured_output_model=output_model,
            )
        except Exception as e:
            raise map_strands_exception(e) from e

        output = result.structured_output
        if not isinstance(output, output_model):
            raise LLMResponseFormatError(
                f"Expected {output_model.__name__} but got {type(output).__name__}"
            )
        logger.debug("Structured output: %s", output)
        return output
