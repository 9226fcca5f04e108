"""SQLModel table definitions."""

from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


class SummaryModel(SQLModel, table=True):
    """要約ドキュメントテーブル"""

    __tablename__ = "summaries"

    id: str = Field(primary_key=True)
    entity_type: str = Field(default="summary", primary_key=True)
    content: str
    created: str  # ISO-8601
    updated: str = Field(index=True)  # ISO-8601
    metadata_json: str = "{}"  # JSON format: {"conversationId": ..., ...}


class ConversationModel(SQLModel, table=True):
    """会話テーブル"""

    __tablename__ = "conversations"

    id: str = Field(primary_key=True)
    interface_type: str = ""
    channel_id: str = ""
    channel_name: str = ""
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
