"""Summary repository protocol."""

from typing import Protocol

from summarylog.domain.entities.summary import SummaryDocument


class SummaryRepository(Protocol):
    """Entity store for summary documents."""

    async def find_by_id(self, document_id: str) -> SummaryDocument | None:
        """Find a summary document by ID.

        Args:
            document_id: Document ID.

        Returns:
            The document, or None if it does not exist.
        """
        ...

    async def save(self, document: SummaryDocument) -> None:
        """Save a summary document (upsert).

        An existing document with the same ID is replaced.

        Args:
            document: Document to save.
        """
        ...

    async def delete(self, document_id: str) -> bool:
        """Delete a summary document.

        Args:
            document_id: Document ID.

        Returns:
            True if a document was deleted.
        """
        ...

    async def find_all(self, limit: int = 1000) -> list[SummaryDocument]:
        """List summary documents.

        Args:
            limit: Maximum number of documents to return.

        Returns:
            Documents ordered by updated timestamp, newest first.
        """
        ...
