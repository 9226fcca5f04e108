"""Wire payloads carried by events."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from summarylog.domain.entities import Conversation, ConversationDigest, DigestMessage


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConversationPayload(_WireModel):
    """Conversation metadata record (id, interfaceType, channelId, channelName)."""

    id: str = Field(min_length=1)
    interface_type: str = ""
    channel_id: str = ""
    channel_name: str = ""

    def to_conversation(self) -> Conversation:
        return Conversation(
            id=self.id,
            interface_type=self.interface_type,
            channel_id=self.channel_id,
            channel_name=self.channel_name,
        )


class DigestMessagePayload(_WireModel):
    """One message of a digest payload."""

    id: str
    conversation_id: str
    role: str
    content: str
    timestamp: str
    metadata: dict[str, Any] | None = None


class ConversationDigestPayload(_WireModel):
    """Digest event payload as published by the conversation service.

    Field names are camelCase on the wire (conversationId, windowStart...).
    """

    conversation_id: str = Field(min_length=1)
    message_count: int = Field(ge=0)
    window_size: int = Field(ge=1)
    window_start: int = Field(ge=1)
    window_end: int = Field(ge=1)
    messages: list[DigestMessagePayload] = Field(default_factory=list)
    timestamp: str

    def to_digest(self) -> ConversationDigest:
        """Convert to the domain digest.

        Raises:
            ValueError: The window is invalid (start after end).
        """
        return ConversationDigest(
            conversation_id=self.conversation_id,
            message_count=self.message_count,
            window_size=self.window_size,
            window_start=self.window_start,
            window_end=self.window_end,
            messages=tuple(
                DigestMessage(
                    id=message.id,
                    conversation_id=message.conversation_id,
                    role=message.role,
                    content=message.content,
                    timestamp=message.timestamp,
                    metadata=message.metadata,
                )
                for message in self.messages
            ),
            timestamp=self.timestamp,
        )
