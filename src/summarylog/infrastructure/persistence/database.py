"""SQLite engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

# Registers the tables on SQLModel.metadata
from summarylog.infrastructure.persistence import models as _models  # noqa: F401

MEMORY_DATABASE = ":memory:"

# Applied to every new file-database connection
_FILE_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA busy_timeout=5000",
)


def _apply_pragmas(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    try:
        for pragma in _FILE_PRAGMAS:
            cursor.execute(pragma)
    finally:
        cursor.close()


class DatabaseManager:
    """要約ストアのデータベース管理

    エンジンは最初の利用時に生成する。
    ":memory:" の場合は全セッションで1つの接続を共有する（接続ごとに別DBになるため）。
    ファイルDBでは WAL モードを有効にし、読み取りと書き込みを並行させる。
    """

    def __init__(self, database_path: str) -> None:
        """初期化

        Args:
            database_path: SQLite ファイルのパス、または ":memory:"
        """
        self._database_path = database_path
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_memory(self) -> bool:
        return self._database_path == MEMORY_DATABASE

    @property
    def url(self) -> str:
        """SQLAlchemy 接続URL"""
        return f"sqlite+aiosqlite:///{self._database_path}"

    def get_engine(self) -> AsyncEngine:
        """非同期エンジンを返す（未生成なら生成する）

        ファイルDBの親ディレクトリは必要に応じて作成する。
        """
        if self._engine is None:
            self._engine = self._create_engine()
            self._session_factory = async_sessionmaker(
                self._engine, class_=AsyncSession, expire_on_commit=False
            )
        return self._engine

    def _create_engine(self) -> AsyncEngine:
        if self.is_memory:
            return create_async_engine(
                self.url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )

        Path(self._database_path).parent.mkdir(parents=True, exist_ok=True)
        engine = create_async_engine(self.url)
        event.listen(engine.sync_engine, "connect", _apply_pragmas)
        return engine

    async def create_tables(self) -> None:
        """summaries / conversations テーブルを作成する（既存なら何もしない）"""
        async with self.get_engine().begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """リポジトリ用のセッションを開く

        Yields:
            AsyncSession インスタンス
        """
        self.get_engine()
        assert self._session_factory is not None
        async with self._session_factory() as session:
            yield session

    async def close(self) -> None:
        """エンジンを破棄する

        ":memory:" の場合は保存内容も失われる。次の get_engine() で新しいエンジンを生成する。
        """
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
