"""Conversation digest entities."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DigestMessage:
    """A single message carried by a digest.

    Attributes:
        id: Message ID.
        conversation_id: Conversation the message belongs to.
        role: Author role (e.g. "user", "assistant").
        content: Message text.
        timestamp: ISO-8601 timestamp of the message.
        metadata: Optional platform-specific metadata.
    """

    id: str
    conversation_id: str
    role: str
    content: str
    timestamp: str
    metadata: dict[str, Any] | None = None


@dataclass(frozen=True)
class ConversationDigest:
    """Batch notification covering a window of new conversation messages.

    Window indices are 1-based and inclusive.

    Attributes:
        conversation_id: Conversation ID.
        message_count: Number of messages in the conversation so far.
        window_size: Configured window size.
        window_start: First message index covered by this digest.
        window_end: Last message index covered by this digest.
        messages: Messages inside the window, oldest first.
        timestamp: ISO-8601 digest creation time.
    """

    conversation_id: str
    message_count: int
    window_size: int
    window_start: int
    window_end: int
    messages: tuple[DigestMessage, ...] = field(default_factory=tuple)
    timestamp: str = ""

    def __post_init__(self) -> None:
        """バリデーション"""
        if self.window_start < 1:
            raise ValueError(
                f"window_start must be 1-based, got {self.window_start}"
            )
        if self.window_start > self.window_end:
            raise ValueError(
                f"Invalid digest window: {self.window_start}-{self.window_end}"
            )
        if not isinstance(self.messages, tuple):
            object.__setattr__(self, "messages", tuple(self.messages))

    @property
    def window_label(self) -> str:
        """Window rendered as "start-end"."""
        return f"{self.window_start}-{self.window_end}"
