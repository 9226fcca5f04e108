"""Event system infrastructure."""

from summarylog.infrastructure.events.dispatcher import EventDispatcher, event_handler
from summarylog.infrastructure.events.loop import EventLoop
from summarylog.infrastructure.events.payloads import (
    ConversationDigestPayload,
    ConversationPayload,
    DigestMessagePayload,
)
from summarylog.infrastructure.events.queue import EventQueue

__all__ = [
    "ConversationDigestPayload",
    "ConversationPayload",
    "DigestMessagePayload",
    "EventDispatcher",
    "EventLoop",
    "EventQueue",
    "event_handler",
]
