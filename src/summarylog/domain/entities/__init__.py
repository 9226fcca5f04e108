"""Domain entities."""

from summarylog.domain.entities.conversation import Conversation
from summarylog.domain.entities.decision import (
    AppendDecision,
    CreateDecision,
    SummaryDecision,
    UpdateDecision,
)
from summarylog.domain.entities.digest import ConversationDigest, DigestMessage
from summarylog.domain.entities.event import Event, EventType
from summarylog.domain.entities.summary import (
    ENTITY_TYPE,
    SummaryDocument,
    SummaryLogEntry,
    SummaryMetadata,
    format_timestamp,
    summary_document_id,
)

__all__ = [
    "AppendDecision",
    "Conversation",
    "ConversationDigest",
    "CreateDecision",
    "DigestMessage",
    "ENTITY_TYPE",
    "Event",
    "EventType",
    "SummaryDecision",
    "SummaryDocument",
    "SummaryLogEntry",
    "SummaryMetadata",
    "UpdateDecision",
    "format_timestamp",
    "summary_document_id",
]
