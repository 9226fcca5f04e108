"""Read-side access to stored summaries."""

import logging
from dataclasses import dataclass

from summarylog.domain.entities import (
    SummaryDocument,
    SummaryLogEntry,
    summary_document_id,
)
from summarylog.domain.exceptions import MalformedDocumentError
from summarylog.domain.repositories import SummaryRepository
from summarylog.domain.services.entry_codec import parse_document, parse_entries

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 1000


@dataclass(frozen=True)
class SummaryStatistics:
    """Aggregate figures over all stored summaries.

    Attributes:
        total_summaries: Number of summary documents.
        total_entries: Sum of entry counts over all documents.
        average_entries_per_summary: total_entries / total_summaries
            (0.0 when there are no summaries).
    """

    total_summaries: int = 0
    total_entries: int = 0
    average_entries_per_summary: float = 0.0


class SummaryService:
    """Queries and maintenance for conversation summaries."""

    def __init__(self, summary_repository: SummaryRepository) -> None:
        """Initialize the service.

        Args:
            summary_repository: Store for summary documents.
        """
        self._summary_repository = summary_repository

    async def get_summary(self, conversation_id: str) -> SummaryDocument | None:
        """Get the summary document of a conversation, if any."""
        return await self._summary_repository.find_by_id(
            summary_document_id(conversation_id)
        )

    async def get_entries(
        self, conversation_id: str, limit: int | None = None
    ) -> list[SummaryLogEntry]:
        """Get the log entries of a conversation, newest first.

        Args:
            conversation_id: Conversation ID.
            limit: Maximum number of entries to return (all when None).

        Returns:
            Entries; empty when there is no summary or it cannot be read.
        """
        document = await self.get_summary(conversation_id)
        if document is None:
            return []
        try:
            body = parse_document(document.content).body
        except MalformedDocumentError as e:
            logger.warning("Stored summary %s is unreadable: %s", document.id, e)
            return []
        entries = parse_entries(body)
        return entries if limit is None else entries[: max(limit, 0)]

    async def export_summary(self, conversation_id: str) -> str | None:
        """Get the document text of a conversation's summary.

        Returns:
            The stored text exactly as saved, or None when there is none.
        """
        document = await self.get_summary(conversation_id)
        return document.content if document is not None else None

    async def delete_summary(self, conversation_id: str) -> bool:
        """Delete a conversation's summary.

        Returns:
            True if a summary was deleted.
        """
        deleted = await self._summary_repository.delete(
            summary_document_id(conversation_id)
        )
        if deleted:
            logger.info("Deleted summary for %s", conversation_id)
        return deleted

    async def list_summaries(
        self, limit: int = DEFAULT_LIST_LIMIT
    ) -> list[SummaryDocument]:
        """List summaries, most recently updated first."""
        return await self._summary_repository.find_all(limit=limit)

    async def get_statistics(self) -> SummaryStatistics:
        """Compute statistics over the listed summaries.

        Entry counts come from each document's metadata.
        """
        documents = await self.list_summaries()
        if not documents:
            return SummaryStatistics()

        total_entries = sum(document.metadata.entry_count for document in documents)
        return SummaryStatistics(
            total_summaries=len(documents),
            total_entries=total_entries,
            average_entries_per_summary=total_entries / len(documents),
        )
