"""FIFO queue of events with redelivery suppression."""

import asyncio
import logging

from summarylog.domain.entities.event import Event

logger = logging.getLogger(__name__)


class EventQueue:
    """Arrival-ordered queue that holds at most one pending event per key.

    An event's identity key is pending from enqueue() until mark_processing().
    While it is pending, another event with the same key is rejected and the
    first copy keeps its position. Once processing has started the key is
    free again, so a redelivery arriving mid-flight queues behind it.

    Every accepted event must eventually reach mark_done(); join() waits on
    that. Events dropped by clear() are consumed silently by dequeue().
    """

    def __init__(self) -> None:
        self._items: asyncio.Queue[Event] = asyncio.Queue()
        self._pending: dict[str, Event] = {}
        self._in_flight: set[str] = set()

    @property
    def pending_count(self) -> int:
        """Events accepted but not yet handed to a consumer."""
        return len(self._pending)

    @property
    def in_flight_count(self) -> int:
        return len(self._in_flight)

    def is_pending(self, event: Event) -> bool:
        return event.get_identity_key() in self._pending

    async def enqueue(self, event: Event) -> bool:
        """Accept an event unless a copy of it is already waiting.

        Returns:
            False when the event was dropped as a duplicate.
        """
        key = event.get_identity_key()
        waiting = self._pending.get(key)
        if waiting is not None:
            logger.debug(
                "Duplicate %s dropped (queued at %s, redelivered at %s)",
                key,
                waiting.created_at.isoformat(),
                event.created_at.isoformat(),
            )
            return False

        self._pending[key] = event
        self._items.put_nowait(event)
        logger.debug("Queued %s (%d pending)", key, len(self._pending))
        return True

    async def dequeue(self) -> Event:
        """Wait for and return the oldest live event."""
        while True:
            event = await self._items.get()
            if self._pending.get(event.get_identity_key()) is event:
                return event
            # dropped by clear()
            self._items.task_done()

    def mark_processing(self, event: Event) -> None:
        key = event.get_identity_key()
        if self._pending.get(key) is event:
            del self._pending[key]
        self._in_flight.add(key)
        logger.debug("Processing %s", key)

    def mark_done(self, event: Event) -> None:
        key = event.get_identity_key()
        if self._pending.get(key) is event:
            # finished without mark_processing()
            del self._pending[key]
        self._in_flight.discard(key)
        self._items.task_done()
        logger.debug("Done %s", key)

    async def join(self) -> None:
        """Wait until every accepted event is done or dropped."""
        await self._items.join()

    def clear(self) -> None:
        """Drop everything still waiting. In-flight events are unaffected."""
        dropped = len(self._pending)
        self._pending.clear()
        logger.info("EventQueue cleared, %d pending events dropped", dropped)
