"""Summary log entities."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone

ENTITY_TYPE = "summary"

# Fields rendered as labelled bullet sections, in serialization order.
LIST_FIELDS: tuple[str, ...] = (
    "key_points",
    "decisions",
    "action_items",
    "participants",
)


def format_timestamp(dt: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC string with a "Z" suffix.

    Args:
        dt: datetime to format. Naive values are treated as UTC.

    Returns:
        String like "2025-01-01T00:00:00.000Z".
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp, or return None if it is not one.

    Naive values are treated as UTC so every parsed value is comparable.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def timestamp_before(value: str, other: str) -> bool:
    """True when value is a strictly earlier instant than other.

    Precision and UTC offset do not matter. Text order is used only when
    either side cannot be parsed.
    """
    parsed, parsed_other = parse_timestamp(value), parse_timestamp(other)
    if parsed is None or parsed_other is None:
        return value < other
    return parsed < parsed_other


def latest_timestamp(first: str, second: str) -> str:
    """Return the later of two timestamps, or first when they are equal."""
    return second if timestamp_before(first, second) else first


def unique_in_order(values: Iterable[str]) -> tuple[str, ...]:
    """Drop duplicate values while keeping the first appearance of each."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return tuple(result)


def _normalize_list(values: Iterable[str] | None) -> tuple[str, ...] | None:
    if values is None:
        return None
    normalized = tuple(values)
    return normalized or None


@dataclass(frozen=True)
class SummaryLogEntry:
    """One chronological record in a conversation summary.

    Array fields are stored as tuples. An empty array is the same as an
    absent one and is normalized to None. participants never holds the same
    value twice. Whitespace in the title is collapsed to single spaces.

    Attributes:
        title: Short topic phrase.
        content: Prose summary, possibly with appended "UPDATE:" paragraphs.
        created: ISO-8601 creation timestamp.
        updated: ISO-8601 timestamp of the last merge (== created until then).
        window_start: First message index summarized by this entry.
        window_end: Last message index summarized by this entry.
        key_points: Notable points.
        decisions: Decisions reached.
        action_items: Follow-ups.
        participants: People involved.
    """

    title: str
    content: str
    created: str
    updated: str
    window_start: int | None = None
    window_end: int | None = None
    key_points: tuple[str, ...] | None = None
    decisions: tuple[str, ...] | None = None
    action_items: tuple[str, ...] | None = None
    participants: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        """バリデーション"""
        # Titles live on a single header line.
        object.__setattr__(self, "title", " ".join(self.title.split()))
        if timestamp_before(self.updated, self.created):
            raise ValueError(
                f"Entry updated ({self.updated}) is earlier than "
                f"created ({self.created})"
            )
        for name in LIST_FIELDS:
            object.__setattr__(self, name, _normalize_list(getattr(self, name)))
        if self.participants is not None:
            object.__setattr__(
                self, "participants", unique_in_order(self.participants)
            )

    @property
    def is_updated(self) -> bool:
        """True once the entry has absorbed at least one merge."""
        return self.updated != self.created


@dataclass(frozen=True)
class SummaryMetadata:
    """Metadata header of a summary document.

    Attributes:
        conversation_id: Conversation the summary belongs to.
        channel_name: Human-readable channel name.
        channel_id: Platform channel ID.
        interface_type: Interface the conversation happens on (cli, matrix...).
        entry_count: Number of entries in the document body.
        total_messages: Highest message index summarized so far.
    """

    conversation_id: str = ""
    channel_name: str = ""
    channel_id: str = ""
    interface_type: str = ""
    entry_count: int = 0
    total_messages: int = 0


@dataclass(frozen=True)
class SummaryDocument:
    """Persisted, one-per-conversation summary.

    Attributes:
        id: Document ID (see summary_document_id).
        content: Serialized document text (metadata header + entry log).
        created: Timestamp of the first digest ever processed.
        updated: Timestamp of the most recent digest processed.
        metadata: Document metadata.
    """

    id: str
    content: str
    created: str
    updated: str
    metadata: SummaryMetadata = field(default_factory=SummaryMetadata)

    @property
    def entity_type(self) -> str:
        return ENTITY_TYPE


def summary_document_id(conversation_id: str) -> str:
    """Return the document ID for a conversation.

    The store is keyed by entity type already, so the conversation ID is used
    as-is.
    """
    return conversation_id
