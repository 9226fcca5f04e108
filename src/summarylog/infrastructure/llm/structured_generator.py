"""LiteLLM based StructuredGenerator implementation."""

import json
import logging
import re

from pydantic import ValidationError

from summarylog.domain.services.protocols import OutputT
from summarylog.infrastructure.llm.client import LLMClient
from summarylog.infrastructure.llm.exceptions import LLMResponseFormatError

logger = logging.getLogger(__name__)

# ```json ... ``` fences some models wrap around JSON answers
_CODE_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class LiteLLMStructuredGenerator:
    """StructuredGenerator that asks a chat model for a JSON object.

    The JSON schema of the output model is sent as the system message and
    the answer is validated with pydantic.
    """

    def __init__(self, client: LLMClient, system_prompt: str | None = None) -> None:
        """Initialize the generator.

        Args:
            client: LLM client.
            system_prompt: Optional instructions placed before the schema.
        """
        self._client = client
        self._system_prompt = system_prompt

    async def generate(self, prompt: str, output_model: type[OutputT]) -> OutputT:
        """Generate a value of output_model.

        Args:
            prompt: Complete instruction for the model.
            output_model: Pydantic model describing the expected output.

        Returns:
            Validated output_model instance.

        Raises:
            LLMResponseFormatError: Response is not valid for output_model.
            LLMError: Request failed.
        """
        messages = [
            {"role": "system", "content": self._build_system_message(output_model)},
            {"role": "user", "content": prompt},
        ]
        response = await self._client.complete(messages, json_mode=True)
        logger.debug("Structured response: %s", response)
        return self._parse_response(response, output_model)

    def _build_system_message(self, output_model: type[OutputT]) -> str:
        schema = json.dumps(output_model.model_json_schema(), ensure_ascii=False)
        parts = []
        if self._system_prompt:
            parts.append(self._system_prompt)
        parts.append(
            "Respond with a single JSON object that conforms to this JSON schema "
            "and nothing else:\n" + schema
        )
        return "\n\n".join(parts)

    def _parse_response(self, response: str, output_model: type[OutputT]) -> OutputT:
        """Validate a raw response against output_model.

        Args:
            response: Raw response text, optionally wrapped in a code fence.
            output_model: Expected output model.

        Returns:
            Validated output_model instance.

        Raises:
            LLMResponseFormatError: Response does not validate.
        """
        text = response.strip()
        fence_match = _CODE_FENCE_PATTERN.match(text)
        if fence_match:
            text = fence_match.group(1)

        try:
            return output_model.model_validate_json(text)
        except ValidationError as e:
            logger.warning("Failed to parse structured response: %s", e)
            raise LLMResponseFormatError(
                f"Response does not match {output_model.__name__}: {e}"
            ) from e
