"""Domain repositories."""

from summarylog.domain.repositories.conversation_repository import (
    ConversationRepository,
)
from summarylog.domain.repositories.summary_repository import SummaryRepository

__all__ = [
    "ConversationRepository",
    "SummaryRepository",
]
