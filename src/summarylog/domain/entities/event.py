"""Events consumed by the digest pipeline."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class EventType(Enum):
    DIGEST = "digest"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Event:
    """An inbound record, still in wire form.

    The payload is validated by the handler, not here, so a malformed record
    can still be queued and reported from inside the pipeline.

    Attributes:
        type: Event type.
        payload: Raw payload with camelCase keys.
        created_at: Time the event was read.
    """

    type: EventType
    payload: dict[str, Any]
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def conversation_id(self) -> str:
        return str(self.payload.get("conversationId") or "")

    def get_identity_key(self) -> str:
        """Key shared by redeliveries of the same event.

        Digests are keyed by conversation and window, so "digest:c1:1-20" and
        "digest:c1:21-40" are distinct while a second copy of 1-20 is not.
        """
        if self.type is EventType.DIGEST:
            start = self.payload.get("windowStart", "")
            end = self.payload.get("windowEnd", "")
            return f"digest:{self.conversation_id}:{start}-{end}"
        return f"{self.type.value}:unknown"
