"""ProcessDigestUseCase for folding conversation digests into summaries."""

import asyncio
import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

from summarylog.domain.entities import (
    ConversationDigest,
    SummaryDocument,
    SummaryLogEntry,
    SummaryMetadata,
    UpdateDecision,
    summary_document_id,
)
from summarylog.domain.exceptions import (
    ConversationNotFoundError,
    MalformedDocumentError,
)
from summarylog.domain.repositories import (
    ConversationRepository,
    SummaryRepository,
)
from summarylog.domain.services.entry_codec import (
    build_document,
    parse_document,
    parse_entries,
    serialize_entries,
)
from summarylog.domain.services.entry_merger import manage_entries
from summarylog.domain.services.protocols import EntryDecisionMaker

logger = logging.getLogger(__name__)


class ConversationLocks:
    """One asyncio.Lock per conversation ID.

    Waiters acquire a lock in the order they asked for it, so digests for a
    conversation are applied in arrival order. Locks are dropped once no
    task holds or waits for them.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, conversation_id: str) -> AsyncIterator[None]:
        """Hold the conversation's lock for the duration of the block."""
        lock = self._locks.setdefault(conversation_id, asyncio.Lock())
        self._waiters[conversation_id] = self._waiters.get(conversation_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[conversation_id] -= 1
            if self._waiters[conversation_id] == 0:
                del self._waiters[conversation_id]
                del self._locks[conversation_id]


class ProcessDigestUseCase:
    """Digest orchestration use case.

    Applies one digest to the conversation's summary document:
    1. Load the existing document (absent means a first summary)
    2. Ask the decision maker how the digest enters the log
    3. Merge the drafted entry into the existing entries
    4. Advance totalMessages (never decreases)
    5. Look up conversation metadata (missing conversation is fatal)
    6. Serialize and upsert the document

    The read-modify-write runs under a per-conversation lock; digests for
    different conversations may run concurrently.
    """

    def __init__(
        self,
        summary_repository: SummaryRepository,
        conversation_repository: ConversationRepository,
        decision_maker: EntryDecisionMaker,
    ) -> None:
        """Initialize ProcessDigestUseCase.

        Args:
            summary_repository: Store for summary documents.
            conversation_repository: Conversation metadata lookup.
            decision_maker: Drafts entries and decides create/update/append.
        """
        self._summary_repository = summary_repository
        self._conversation_repository = conversation_repository
        self._decision_maker = decision_maker
        self._locks = ConversationLocks()

    async def handle_digest(self, digest: ConversationDigest) -> SummaryDocument:
        """Apply a digest to the conversation's summary.

        Args:
            digest: Digest to apply.

        Returns:
            The saved document.

        Raises:
            ConversationNotFoundError: Conversation metadata is missing.
            Exception: Store errors propagate unchanged.
        """
        async with self._locks.hold(digest.conversation_id):
            return await self._handle_digest(digest)

    async def handle_digest_batch(
        self, digests: Iterable[ConversationDigest]
    ) -> list[SummaryDocument]:
        """Apply digests one at a time, in the given order.

        Processing stops at the first failure, which propagates.

        Args:
            digests: Digests to apply.

        Returns:
            Saved documents, one per digest.
        """
        documents = []
        for digest in digests:
            documents.append(await self.handle_digest(digest))
        return documents

    async def _handle_digest(self, digest: ConversationDigest) -> SummaryDocument:
        logger.info(
            "Processing digest for %s (messages %s)",
            digest.conversation_id,
            digest.window_label,
        )
        document_id = summary_document_id(digest.conversation_id)
        existing = await self._summary_repository.find_by_id(document_id)

        existing_body: str | None = None
        existing_entries: list[SummaryLogEntry] = []
        previous_total = 0
        if existing is not None:
            previous_total = existing.metadata.total_messages
            try:
                parsed = parse_document(existing.content)
            except MalformedDocumentError as e:
                logger.warning(
                    "Stored summary %s is unreadable, treating it as empty: %s",
                    document_id,
                    e,
                )
                existing_body = ""
            else:
                existing_body = parsed.body
                existing_entries = parse_entries(parsed.body)
                previous_total = max(previous_total, parsed.metadata.total_messages)

        decision = await self._decision_maker.decide(digest, existing_body)
        logger.debug(
            "Decision for %s: %s (%s)",
            digest.conversation_id,
            decision.action,
            decision.entry.title,
        )

        update_index = (
            decision.entry_index if isinstance(decision, UpdateDecision) else None
        )
        entries = manage_entries(
            existing_entries,
            decision.entry,
            should_update=decision.action == "update",
            update_index=update_index,
        )

        total_messages = max(previous_total, digest.window_end)

        conversation = await self._conversation_repository.find_by_id(
            digest.conversation_id
        )
        if conversation is None:
            raise ConversationNotFoundError(digest.conversation_id)

        metadata = SummaryMetadata(
            conversation_id=digest.conversation_id,
            channel_name=conversation.channel_name,
            channel_id=conversation.channel_id,
            interface_type=conversation.interface_type,
            entry_count=len(entries),
            total_messages=total_messages,
        )
        document = SummaryDocument(
            id=document_id,
            content=build_document(serialize_entries(entries), metadata),
            created=existing.created if existing is not None else digest.timestamp,
            updated=digest.timestamp,
            metadata=metadata,
        )
        await self._summary_repository.save(document)

        logger.info(
            "Saved summary %s: %s, %d entries, %d messages",
            document_id,
            decision.action,
            metadata.entry_count,
            total_messages,
        )
        return document
