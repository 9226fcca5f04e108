"""Persistence infrastructure."""

from summarylog.infrastructure.persistence.conversation_repository import (
    SQLiteConversationRepository,
)
from summarylog.infrastructure.persistence.database import DatabaseManager
from summarylog.infrastructure.persistence.exceptions import (
    DatabaseError,
    PersistenceError,
)
from summarylog.infrastructure.persistence.models import (
    ConversationModel,
    SummaryModel,
)
from summarylog.infrastructure.persistence.summary_repository import (
    SQLiteSummaryRepository,
)

__all__ = [
    "ConversationModel",
    "DatabaseError",
    "DatabaseManager",
    "PersistenceError",
    "SQLiteConversationRepository",
    "SQLiteSummaryRepository",
    "SummaryModel",
]
