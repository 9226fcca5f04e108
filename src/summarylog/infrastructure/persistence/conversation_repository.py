"""SQLite implementation of ConversationRepository."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from summarylog.domain.entities import Conversation
from summarylog.infrastructure.persistence.exceptions import DatabaseError
from summarylog.infrastructure.persistence.models import ConversationModel


class SQLiteConversationRepository:
    """SQLite 版 ConversationRepository 実装"""

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        """初期化

        Args:
            session_factory: 非同期セッション生成関数
        """
        self._session_factory = session_factory

    async def save(self, conversation: Conversation) -> None:
        """会話を保存（upsert）

        Args:
            conversation: 保存する会話

        Raises:
            DatabaseError: データベース操作に失敗
        """
        model = ConversationModel(
            id=conversation.id,
            interface_type=conversation.interface_type,
            channel_id=conversation.channel_id,
            channel_name=conversation.channel_name,
            updated_at=datetime.now(timezone.utc),
        )
        try:
            async with self._session_factory() as session:
                await session.merge(model)
                await session.commit()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to save conversation {conversation.id}: {e}"
            ) from e

    async def find_by_id(self, conversation_id: str) -> Conversation | None:
        """ID で会話を検索

        Args:
            conversation_id: 会話 ID

        Returns:
            見つかった会話、または None

        Raises:
            DatabaseError: データベース操作に失敗
        """
        try:
            async with self._session_factory() as session:
                model = await session.get(ConversationModel, conversation_id)
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to load conversation {conversation_id}: {e}"
            ) from e

        if model is None:
            return None
        return Conversation(
            id=model.id,
            interface_type=model.interface_type,
            channel_id=model.channel_id,
            channel_name=model.channel_name,
        )
