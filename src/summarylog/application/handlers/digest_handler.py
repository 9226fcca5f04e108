"""Digest event handler."""

import logging

from pydantic import ValidationError

from summarylog.application.use_cases.process_digest import ProcessDigestUseCase
from summarylog.domain.entities import Event
from summarylog.domain.entities.event import EventType
from summarylog.infrastructure.events.dispatcher import event_handler
from summarylog.infrastructure.events.payloads import ConversationDigestPayload

logger = logging.getLogger(__name__)


class DigestEventHandler:
    """Handler for DIGEST events.

    Validates the payload and applies the digest to the conversation's
    summary. Failures are logged and not re-raised; the digest counts as
    unprocessed and redelivery is up to the publisher.
    """

    def __init__(self, process_digest_use_case: ProcessDigestUseCase) -> None:
        """Initialize the handler.

        Args:
            process_digest_use_case: Use case applying digests.
        """
        self._process_digest_use_case = process_digest_use_case

    @event_handler(EventType.DIGEST)
    async def handle(self, event: Event) -> None:
        """Handle DIGEST event.

        Args:
            event: The DIGEST event.
        """
        try:
            digest = ConversationDigestPayload.model_validate(event.payload).to_digest()
        except (ValidationError, ValueError) as e:
            logger.error("Invalid digest payload %s: %s", event.get_identity_key(), e)
            return

        logger.info(
            "Handling DIGEST event for %s (messages %s)",
            digest.conversation_id,
            digest.window_label,
        )

        try:
            await self._process_digest_use_case.handle_digest(digest)
        except Exception:
            logger.exception(
                "Error processing digest for %s (messages %s)",
                digest.conversation_id,
                digest.window_label,
            )
