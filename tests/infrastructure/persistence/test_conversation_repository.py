"""Tests for SQLiteConversationRepository."""

import pytest

from summarylog.domain.entities import Conversation
from summarylog.infrastructure.persistence import (
    DatabaseError,
    DatabaseManager,
    SQLiteConversationRepository,
)


@pytest.fixture
async def db_manager() -> DatabaseManager:
    """Create an in-memory database manager."""
    manager = DatabaseManager(":memory:")
    await manager.create_tables()
    return manager


@pytest.fixture
def repository(db_manager: DatabaseManager) -> SQLiteConversationRepository:
    return SQLiteConversationRepository(db_manager.get_session)


class TestSQLiteConversationRepository:
    """SQLiteConversationRepository tests."""

    async def test_save_and_find(
        self, repository: SQLiteConversationRepository, conversation: Conversation
    ) -> None:
        await repository.save(conversation)

        assert await repository.find_by_id(conversation.id) == conversation

    async def test_save_overwrites(
        self, repository: SQLiteConversationRepository, conversation: Conversation
    ) -> None:
        await repository.save(conversation)
        renamed = Conversation(
            id=conversation.id,
            interface_type="matrix",
            channel_id="!room:example.org",
            channel_name="Team Room",
        )

        await repository.save(renamed)

        assert await repository.find_by_id(conversation.id) == renamed

    async def test_not_found(self, repository: SQLiteConversationRepository) -> None:
        assert await repository.find_by_id("missing") is None

    async def test_database_error(self, conversation: Conversation) -> None:
        repository = SQLiteConversationRepository(
            DatabaseManager(":memory:").get_session
        )

        with pytest.raises(DatabaseError):
            await repository.save(conversation)
