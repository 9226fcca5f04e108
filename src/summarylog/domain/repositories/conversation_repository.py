"""Conversation repository protocol."""

from typing import Protocol

from summarylog.domain.entities.conversation import Conversation


class ConversationRepository(Protocol):
    """Conversation metadata lookup."""

    async def find_by_id(self, conversation_id: str) -> Conversation | None:
        """Find a conversation by ID.

        Args:
            conversation_id: Conversation ID.

        Returns:
            The conversation, or None if unknown.
        """
        ...

    async def save(self, conversation: Conversation) -> None:
        """Save a conversation (upsert).

        Args:
            conversation: Conversation to save.
        """
        ...
