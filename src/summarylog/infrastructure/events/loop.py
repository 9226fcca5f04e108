"""Sequential consumer of the event queue."""

import asyncio
import logging

from summarylog.domain.entities.event import Event
from summarylog.infrastructure.events.dispatcher import EventDispatcher
from summarylog.infrastructure.events.queue import EventQueue

logger = logging.getLogger(__name__)


class EventLoop:
    """Dispatches queued events one at a time, in queue order.

    Two digests are never applied at the same moment. stop() lets the event
    being dispatched finish; events still waiting in the queue are dropped.
    """

    def __init__(
        self,
        queue: EventQueue,
        dispatcher: EventDispatcher,
        poll_interval: float = 1.0,
    ) -> None:
        """Initialize the event loop.

        Args:
            queue: The event queue to read from.
            dispatcher: The dispatcher to send events to.
            poll_interval: Seconds between checks of the stop flag while idle.
        """
        self._queue = queue
        self._dispatcher = dispatcher
        self._poll_interval = poll_interval
        self._running = False
        self._idle = asyncio.Event()
        self._idle.set()
        self._processed = 0

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def processed_count(self) -> int:
        """Number of events dispatched since creation."""
        return self._processed

    async def start(self) -> None:
        """Consume events until stop() is called."""
        if self._running:
            logger.warning("EventLoop already running")
            return

        self._running = True
        self._idle.clear()
        logger.info("EventLoop started")
        try:
            while self._running:
                event = await self._next_event()
                if event is not None:
                    await self._process(event)
        finally:
            self._running = False
            self._idle.set()
            logger.info("EventLoop stopped after %d events", self._processed)

    async def drain(self) -> None:
        """Wait until every queued event has been dispatched, then stop."""
        await self._queue.join()
        await self.stop()

    async def stop(self) -> None:
        """Stop consuming and wait for the current event to finish."""
        logger.info("Stopping EventLoop")
        self._running = False
        self._queue.clear()
        await self._idle.wait()

    async def _next_event(self) -> Event | None:
        try:
            return await asyncio.wait_for(
                self._queue.dequeue(), timeout=self._poll_interval
            )
        except TimeoutError:
            return None

    async def _process(self, event: Event) -> None:
        identity_key = event.get_identity_key()
        logger.debug("Processing event: %s", identity_key)
        self._queue.mark_processing(event)
        try:
            await self._dispatcher.dispatch(event)
        except Exception:
            logger.exception("Error dispatching event %s", identity_key)
        finally:
            self._queue.mark_done(event)
            self._processed += 1
