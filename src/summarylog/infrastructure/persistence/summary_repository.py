"""SQLite implementation of SummaryRepository."""

import json
import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import asdict

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from summarylog.domain.entities import ENTITY_TYPE, SummaryDocument, SummaryMetadata
from summarylog.domain.services.entry_codec import METADATA_KEYS
from summarylog.infrastructure.persistence.exceptions import DatabaseError
from summarylog.infrastructure.persistence.models import SummaryModel

logger = logging.getLogger(__name__)

# snake_case attribute -> camelCase JSON key
_JSON_KEYS = {attr: key for key, attr in METADATA_KEYS}


class SQLiteSummaryRepository:
    """SQLite 版 SummaryRepository 実装

    会話ごとに1件の要約ドキュメントを保存する。
    メタデータは camelCase キーの JSON として保存する。
    """

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        """初期化

        Args:
            session_factory: 非同期セッション生成関数
        """
        self._session_factory = session_factory

    async def save(self, document: SummaryDocument) -> None:
        """ドキュメントを保存（upsert）

        同じ ID のドキュメントが存在する場合は置き換える。

        Args:
            document: 保存するドキュメント

        Raises:
            DatabaseError: データベース操作に失敗
        """
        model = SummaryModel(
            id=document.id,
            entity_type=document.entity_type,
            content=document.content,
            created=document.created,
            updated=document.updated,
            metadata_json=self._dump_metadata(document.metadata),
        )
        try:
            async with self._session_factory() as session:
                await session.merge(model)
                await session.commit()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to save summary {document.id}: {e}") from e

    async def find_by_id(self, document_id: str) -> SummaryDocument | None:
        """ID でドキュメントを検索

        Args:
            document_id: ドキュメントの ID

        Returns:
            見つかったドキュメント、または None

        Raises:
            DatabaseError: データベース操作に失敗
        """
        try:
            async with self._session_factory() as session:
                stmt = select(SummaryModel).where(
                    SummaryModel.entity_type == ENTITY_TYPE,
                    SummaryModel.id == document_id,
                )
                result = await session.exec(stmt)
                model = result.first()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to load summary {document_id}: {e}") from e

        if model is None:
            return None
        return self._to_entity(model)

    async def delete(self, document_id: str) -> bool:
        """ドキュメントを削除

        Args:
            document_id: 削除するドキュメントの ID

        Returns:
            削除成功の場合 True、存在しない場合 False

        Raises:
            DatabaseError: データベース操作に失敗
        """
        try:
            async with self._session_factory() as session:
                stmt = delete(SummaryModel).where(
                    SummaryModel.entity_type == ENTITY_TYPE,  # type: ignore[arg-type]
                    SummaryModel.id == document_id,  # type: ignore[arg-type]
                )
                result = await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to delete summary {document_id}: {e}") from e
        return result.rowcount > 0  # type: ignore[union-attr]

    async def find_all(self, limit: int = 1000) -> list[SummaryDocument]:
        """全ドキュメントを取得

        更新日時降順でソート。

        Args:
            limit: 取得する最大件数

        Returns:
            ドキュメントのリスト

        Raises:
            DatabaseError: データベース操作に失敗
        """
        try:
            async with self._session_factory() as session:
                stmt = (
                    select(SummaryModel)
                    .where(SummaryModel.entity_type == ENTITY_TYPE)
                    .order_by(SummaryModel.updated.desc())  # type: ignore[attr-defined]
                    .limit(limit)
                )
                result = await session.exec(stmt)
                models = result.all()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to list summaries: {e}") from e
        return [self._to_entity(model) for model in models]

    @staticmethod
    def _dump_metadata(metadata: SummaryMetadata) -> str:
        data = {_JSON_KEYS[name]: value for name, value in asdict(metadata).items()}
        return json.dumps(data, ensure_ascii=False)

    @staticmethod
    def _load_metadata(value: str, document_id: str) -> SummaryMetadata:
        """metadata_json を読む（壊れている場合は警告してデフォルト値）"""
        try:
            data = json.loads(value) if value else {}
        except json.JSONDecodeError as e:
            logger.warning("Unreadable metadata for summary %s: %s", document_id, e)
            return SummaryMetadata()
        if not isinstance(data, dict):
            logger.warning("Metadata for summary %s is not an object", document_id)
            return SummaryMetadata()
        return SummaryMetadata(
            **{
                name: data[key]
                for key, name in METADATA_KEYS
                if key in data
            }
        )

    def _to_entity(self, model: SummaryModel) -> SummaryDocument:
        """SummaryModel を SummaryDocument エンティティに変換

        Args:
            model: SummaryModel インスタンス

        Returns:
            SummaryDocument エンティティ
        """
        return SummaryDocument(
            id=model.id,
            content=model.content,
            created=model.created,
            updated=model.updated,
            metadata=self._load_metadata(model.metadata_json, model.id),
        )
