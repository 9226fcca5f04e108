"""Common fixtures."""

import pytest
from factories import CONVERSATION_ID, make_digest

from summarylog.domain.entities import Conversation, ConversationDigest


@pytest.fixture
def digest() -> ConversationDigest:
    """Digest for messages 1-20 carrying three messages."""
    return make_digest()


@pytest.fixture
def conversation() -> Conversation:
    """Conversation metadata for CONVERSATION_ID."""
    return Conversation(
        id=CONVERSATION_ID,
        interface_type="cli",
        channel_id="cli-main",
        channel_name="CLI Terminal",
    )
