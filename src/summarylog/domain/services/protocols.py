"""Domain service protocols."""

from typing import Protocol, TypeVar

from pydantic import BaseModel

from summarylog.domain.entities import ConversationDigest, SummaryDecision

OutputT = TypeVar("OutputT", bound=BaseModel)


class StructuredGenerator(Protocol):
    """AI structured-output generation abstraction.

    Implementations send a prompt to a model and return its answer
    validated against a pydantic model.
    """

    async def generate(self, prompt: str, output_model: type[OutputT]) -> OutputT:
        """Generate a structured value.

        Args:
            prompt: Complete instruction for the model.
            output_model: Pydantic model describing the expected output.

        Returns:
            Validated output_model instance.

        Raises:
            LLMError: Generation failed or returned invalid output.
        """
        ...


class EntryDecisionMaker(Protocol):
    """Decides how a digest affects a conversation's summary log."""

    async def decide(
        self,
        digest: ConversationDigest,
        existing_body: str | None,
    ) -> SummaryDecision:
        """Produce a decision and a drafted entry for a digest.

        Args:
            digest: Digest to summarize.
            existing_body: Entry log of the existing document, or None when
                the conversation has no summary yet.

        Returns:
            CreateDecision, UpdateDecision or AppendDecision.
        """
        ...
