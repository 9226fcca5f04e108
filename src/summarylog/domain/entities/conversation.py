"""Conversation entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Conversation:
    """Conversation metadata used to label summary documents.

    Attributes:
        id: Conversation ID.
        interface_type: Interface the conversation happens on.
        channel_id: Platform channel ID.
        channel_name: Human-readable channel name.
    """

    id: str
    interface_type: str
    channel_id: str
    channel_name: str
