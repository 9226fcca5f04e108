"""Domain services."""

from summarylog.domain.services.entry_codec import (
    ParsedDocument,
    build_document,
    get_recent_entries,
    parse_document,
    parse_entries,
    serialize_entries,
)
from summarylog.domain.services.entry_merger import manage_entries, merge_entry
from summarylog.domain.services.protocols import (
    EntryDecisionMaker,
    StructuredGenerator,
)

__all__ = [
    "EntryDecisionMaker",
    "ParsedDocument",
    "StructuredGenerator",
    "build_document",
    "get_recent_entries",
    "manage_entries",
    "merge_entry",
    "parse_document",
    "parse_entries",
    "serialize_entries",
]
