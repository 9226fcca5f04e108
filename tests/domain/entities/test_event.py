"""Tests for Event entity."""

from summarylog.domain.entities import Event, EventType


def digest_event(conversation_id: str, start: int, end: int) -> Event:
    return Event(
        type=EventType.DIGEST,
        payload={
            "conversationId": conversation_id,
            "windowStart": start,
            "windowEnd": end,
        },
    )


class TestEventIdentityKey:
    """get_identity_key tests."""

    def test_digest_key(self) -> None:
        """Digest keys combine conversation and window."""
        event = digest_event("conv-1", 1, 20)

        assert event.get_identity_key() == "digest:conv-1:1-20"

    def test_same_window_same_key(self) -> None:
        """A redelivered digest shares the key of the original."""
        assert (
            digest_event("conv-1", 1, 20).get_identity_key()
            == digest_event("conv-1", 1, 20).get_identity_key()
        )

    def test_different_windows_different_keys(self) -> None:
        """Successive windows of a conversation are distinct events."""
        assert (
            digest_event("conv-1", 1, 20).get_identity_key()
            != digest_event("conv-1", 21, 40).get_identity_key()
        )

    def test_created_at_is_utc(self) -> None:
        """created_at defaults to an aware UTC timestamp."""
        event = digest_event("conv-1", 1, 20)

        assert event.created_at.tzinfo is not None

    def test_missing_conversation_id(self) -> None:
        """A payload without conversationId still yields a key."""
        event = Event(type=EventType.DIGEST, payload={"windowStart": 1})

        assert event.conversation_id == ""
        assert event.get_identity_key() == "digest::1-"
