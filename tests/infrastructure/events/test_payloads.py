"""Tests for event payload models."""

import pytest
from pydantic import ValidationError

from summarylog.domain.entities import Conversation
from summarylog.infrastructure.events import (
    ConversationDigestPayload,
    ConversationPayload,
)


def digest_payload(**overrides: object) -> dict:
    payload = {
        "conversationId": "conv-123",
        "messageCount": 20,
        "windowSize": 20,
        "windowStart": 1,
        "windowEnd": 20,
        "messages": [
            {
                "id": "msg-1",
                "conversationId": "conv-123",
                "role": "user",
                "content": "Hello",
                "timestamp": "2025-01-01T09:00:00.000Z",
                "metadata": {"source": "cli"},
            },
            {
                "id": "msg-2",
                "conversationId": "conv-123",
                "role": "assistant",
                "content": "Hi",
                "timestamp": "2025-01-01T09:00:01.000Z",
            },
        ],
        "timestamp": "2025-01-01T10:00:00.000Z",
    }
    payload.update(overrides)
    return payload


class TestConversationDigestPayload:
    """ConversationDigestPayload tests."""

    def test_to_digest(self) -> None:
        digest = ConversationDigestPayload.model_validate(digest_payload()).to_digest()

        assert digest.conversation_id == "conv-123"
        assert digest.message_count == 20
        assert digest.window_size == 20
        assert digest.window_start == 1
        assert digest.window_end == 20
        assert digest.timestamp == "2025-01-01T10:00:00.000Z"
        assert [message.role for message in digest.messages] == ["user", "assistant"]
        assert digest.messages[0].metadata == {"source": "cli"}
        assert digest.messages[1].metadata is None

    def test_messages_default_empty(self) -> None:
        payload = digest_payload()
        del payload["messages"]

        digest = ConversationDigestPayload.model_validate(payload).to_digest()

        assert digest.messages == ()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"conversationId": ""},
            {"windowStart": 0},
            {"windowSize": 0},
            {"windowEnd": "many"},
        ],
    )
    def test_invalid_payload(self, overrides: dict) -> None:
        with pytest.raises(ValidationError):
            ConversationDigestPayload.model_validate(digest_payload(**overrides))

    def test_missing_field(self) -> None:
        payload = digest_payload()
        del payload["timestamp"]

        with pytest.raises(ValidationError):
            ConversationDigestPayload.model_validate(payload)

    def test_inverted_window(self) -> None:
        payload = ConversationDigestPayload.model_validate(
            digest_payload(windowStart=21, windowEnd=20)
        )

        with pytest.raises(ValueError, match="Invalid digest window"):
            payload.to_digest()


class TestConversationPayload:
    """ConversationPayload tests."""

    def test_to_conversation(self) -> None:
        payload = ConversationPayload.model_validate(
            {
                "type": "conversation",
                "id": "conv-123",
                "interfaceType": "cli",
                "channelId": "cli-main",
                "channelName": "CLI Terminal",
            }
        )

        assert payload.to_conversation() == Conversation(
            id="conv-123",
            interface_type="cli",
            channel_id="cli-main",
            channel_name="CLI Terminal",
        )
