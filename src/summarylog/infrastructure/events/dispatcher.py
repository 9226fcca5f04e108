"""Routing of events to their handlers."""

import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable

from summarylog.domain.entities.event import Event, EventType

logger = logging.getLogger(__name__)

EventHandler = Callable[[Event], Awaitable[None]]

_EVENT_TYPE_ATTR = "_event_type"


def _describe(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


def event_handler(event_type: EventType) -> Callable[[EventHandler], EventHandler]:
    """Tag a coroutine function with the event type it handles.

    The tag survives method binding, so a bound method of a decorated handler
    can be passed straight to EventDispatcher.register_handler().
    """

    def decorator(func: EventHandler) -> EventHandler:
        setattr(func, _EVENT_TYPE_ATTR, event_type)
        return func

    return decorator


class EventDispatcher:
    """Sends each event to every handler registered for its type.

    Handlers run one after another in registration order. A failing handler
    is logged with the event's identity key and the rest still run.
    """

    def __init__(self) -> None:
        self._routes: defaultdict[EventType, list[EventHandler]] = defaultdict(list)

    def register(self, event_type: EventType, handler: EventHandler) -> None:
        self._routes[event_type].append(handler)
        logger.debug(
            "Handler %s registered for %s", _describe(handler), event_type.value
        )

    def register_handler(self, handler: EventHandler) -> None:
        """Register a handler tagged by @event_handler.

        Raises:
            ValueError: The handler carries no event type tag.
        """
        event_type = getattr(handler, _EVENT_TYPE_ATTR, None)
        if not isinstance(event_type, EventType):
            raise ValueError(
                f"{_describe(handler)} is not tagged with an event type; "
                "decorate it with @event_handler"
            )
        self.register(event_type, handler)

    def has_handler(self, event_type: EventType) -> bool:
        return bool(self._routes.get(event_type))

    async def dispatch(self, event: Event) -> None:
        handlers = self._routes.get(event.type)
        if not handlers:
            logger.warning("No handler registered for %s events", event.type.value)
            return

        for handler in list(handlers):
            try:
                await handler(event)
            except Exception:
                logger.exception(
                    "%s failed on %s", _describe(handler), event.get_identity_key()
                )
