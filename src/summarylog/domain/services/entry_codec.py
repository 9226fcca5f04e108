"""Text format for summary logs.

A summary document is a YAML front matter header followed by the entry log:

    ---
    conversationId: conv-123
    channelName: CLI Terminal
    ...
    ---

    # Summary Log

    ### [2025-01-01T00:00:00Z - Updated 2025-01-01T12:00:00Z] Project setup

    Prose summary of the window.

    #### Window
    - Start: 1
    - End: 20

    #### Key Points
    - First point

    ---

Entries are written newest first. Content lines that could be mistaken for
markup (a leading "#" or "\\", or a bare "---") are prefixed with "\\".
List items escape backslashes and line breaks. The format is persisted, so
any change here must keep previously stored summaries readable.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import yaml

from summarylog.domain.entities.summary import (
    LIST_FIELDS,
    SummaryLogEntry,
    SummaryMetadata,
    timestamp_before,
)
from summarylog.domain.exceptions import MalformedDocumentError

logger = logging.getLogger(__name__)

ENTRY_HEADER_PREFIX = "### ["
ENTRY_SEPARATOR = "---"
UPDATED_MARKER = " - Updated "
LOG_HEADING = "# Summary Log"
SECTION_PREFIX = "#### "
ITEM_PREFIX = "- "
ESCAPE = "\\"

WINDOW_LABEL = "Window"
SECTION_LABELS: dict[str, str] = {
    "key_points": "Key Points",
    "decisions": "Decisions",
    "action_items": "Action Items",
    "participants": "Participants",
}
_FIELDS_BY_LABEL = {label: name for name, label in SECTION_LABELS.items()}
_KNOWN_LABELS = {WINDOW_LABEL, *_FIELDS_BY_LABEL}

# (front matter key, SummaryMetadata attribute)
METADATA_KEYS: tuple[tuple[str, str], ...] = (
    ("conversationId", "conversation_id"),
    ("channelName", "channel_name"),
    ("channelId", "channel_id"),
    ("interfaceType", "interface_type"),
    ("entryCount", "entry_count"),
    ("totalMessages", "total_messages"),
)
_INT_METADATA = {"entry_count", "total_messages"}

_ENTRY_SPLIT_PATTERN = re.compile(r"^(?=### \[)", re.MULTILINE)
_FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?\n", re.DOTALL | re.MULTILINE
)
_LEGACY_TITLE_PATTERN = re.compile(r"\A# Conversation Summary:[ \t]*(.*)$", re.MULTILINE)
_LEGACY_TOTAL_PATTERN = re.compile(r"^\*\*Total Messages:\*\*[ \t]*(\d+)", re.MULTILINE)
_LEGACY_LOG_HEADING_PATTERN = re.compile(r"^## Summary Log[ \t]*\r?$", re.MULTILINE)
_ITEM_UNESCAPE_PATTERN = re.compile(r"\\([\\nr])")
_ITEM_UNESCAPES = {"\\": "\\", "n": "\n", "r": "\r"}


@dataclass(frozen=True)
class ParsedDocument:
    """A document split into its entry log body and metadata header."""

    body: str
    metadata: SummaryMetadata = field(default_factory=SummaryMetadata)


def serialize_entries(entries: Sequence[SummaryLogEntry]) -> str:
    """Serialize entries into the entry log text.

    Entries are written in the given order; callers keep them newest first.

    Args:
        entries: Entries to serialize.

    Returns:
        Entry log text. Empty string for no entries.
    """
    return "".join(_serialize_entry(entry) for entry in entries)


def parse_entries(body: str) -> list[SummaryLogEntry]:
    """Parse entry log text.

    Text before the first entry header is ignored. Optional sections may be
    missing or appear in any order. Blocks that cannot be turned into an
    entry are skipped with a warning.

    Args:
        body: Entry log text.

    Returns:
        Entries in document order.
    """
    entries: list[SummaryLogEntry] = []
    for segment in _ENTRY_SPLIT_PATTERN.split(body):
        if not segment.startswith(ENTRY_HEADER_PREFIX):
            continue
        entry = _parse_entry(segment)
        if entry is not None:
            entries.append(entry)
    return entries


def get_recent_entries(body: str, limit: int) -> list[SummaryLogEntry]:
    """Return the most recent entries of an entry log.

    Args:
        body: Entry log text (newest first).
        limit: Maximum number of entries.

    Returns:
        Up to limit entries, most recent first.
    """
    return parse_entries(body)[: max(limit, 0)]


def build_document(body: str, metadata: SummaryMetadata) -> str:
    """Wrap an entry log with the metadata header.

    Args:
        body: Entry log text from serialize_entries.
        metadata: Document metadata.

    Returns:
        Full document text.
    """
    header = yaml.safe_dump(
        {key: getattr(metadata, attr) for key, attr in METADATA_KEYS},
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return f"---\n{header}---\n\n{LOG_HEADING}\n\n{body}"


def parse_document(text: str) -> ParsedDocument:
    """Split document text into entry log body and metadata.

    Documents without a metadata header get default metadata. The older
    "# Conversation Summary: <id>" layout is read on a best-effort basis.

    Args:
        text: Stored document text.

    Returns:
        ParsedDocument with body and metadata.

    Raises:
        MalformedDocumentError: The metadata header is not a YAML mapping.
    """
    match = _FRONT_MATTER_PATTERN.match(text)
    if match:
        metadata = _metadata_from_header(match.group(1))
        return ParsedDocument(
            body=_strip_log_heading(text[match.end() :]), metadata=metadata
        )

    legacy_title = _LEGACY_TITLE_PATTERN.match(text)
    if legacy_title:
        return _parse_legacy_document(text, legacy_title.group(1).strip())

    return ParsedDocument(body=_strip_log_heading(text))


def _serialize_entry(entry: SummaryLogEntry) -> str:
    lines = [_format_header(entry), ""]
    lines.extend(_escape_content_line(line) for line in entry.content.split("\n"))
    lines.append("")

    if entry.window_start is not None or entry.window_end is not None:
        lines.append(f"{SECTION_PREFIX}{WINDOW_LABEL}")
        if entry.window_start is not None:
            lines.append(f"{ITEM_PREFIX}Start: {entry.window_start}")
        if entry.window_end is not None:
            lines.append(f"{ITEM_PREFIX}End: {entry.window_end}")
        lines.append("")

    for name in LIST_FIELDS:
        values = getattr(entry, name)
        if not values:
            continue
        lines.append(f"{SECTION_PREFIX}{SECTION_LABELS[name]}")
        lines.extend(f"{ITEM_PREFIX}{_encode_item(value)}" for value in values)
        lines.append("")

    lines.append(ENTRY_SEPARATOR)
    lines.append("")
    return "\n".join(lines) + "\n"


def _format_header(entry: SummaryLogEntry) -> str:
    if entry.created == entry.updated:
        span = entry.created
    else:
        span = f"{entry.created}{UPDATED_MARKER}{entry.updated}"
    return f"{ENTRY_HEADER_PREFIX}{span}] {entry.title}"


def _parse_header(line: str) -> tuple[str, str, str] | None:
    text = line.rstrip("\r")[len(ENTRY_HEADER_PREFIX) :]
    close = text.find("]")
    if close == -1:
        return None
    span = text[:close]
    title = text[close + 1 :].strip()
    if UPDATED_MARKER in span:
        created, updated = span.split(UPDATED_MARKER, 1)
    else:
        created = updated = span
    return created.strip(), updated.strip(), title


def _parse_entry(segment: str) -> SummaryLogEntry | None:
    lines = segment.split("\n")
    header = _parse_header(lines[0])
    if header is None:
        logger.warning("Skipping entry with unreadable header: %r", lines[0])
        return None
    created, updated, title = header
    if timestamp_before(updated, created):
        logger.warning(
            "Entry %r updated (%s) precedes created (%s); using created",
            title,
            updated,
            created,
        )
        updated = created

    block = lines[1:]
    for index, line in enumerate(block):
        if line.strip() == ENTRY_SEPARATOR:
            block = block[:index]
            break

    position = 1 if block and block[0] == "" else 0
    content_lines: list[str] = []
    while position < len(block) and _section_label(block[position]) is None:
        content_lines.append(_unescape_content_line(block[position]))
        position += 1
    if content_lines and content_lines[-1] == "":
        content_lines.pop()

    sections = _parse_sections(block[position:])
    try:
        return SummaryLogEntry(
            title=title,
            content="\n".join(content_lines),
            created=created,
            updated=updated,
            **sections,
        )
    except ValueError as e:
        logger.warning("Skipping invalid entry %r: %s", title, e)
        return None


def _parse_sections(lines: list[str]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    current: str | None = None
    for line in lines:
        label = _section_label(line)
        if label is not None:
            current = label
            if label != WINDOW_LABEL:
                fields.setdefault(_FIELDS_BY_LABEL[label], [])
            continue
        if current is None or not line.startswith(ITEM_PREFIX):
            continue
        value = line[len(ITEM_PREFIX) :].rstrip("\r")
        if current == WINDOW_LABEL:
            _parse_window_item(value, fields)
        else:
            fields[_FIELDS_BY_LABEL[current]].append(_decode_item(value))
    return fields


def _parse_window_item(value: str, fields: dict[str, Any]) -> None:
    name, _, number = value.partition(":")
    target = {"Start": "window_start", "End": "window_end"}.get(name.strip())
    if target is None:
        return
    try:
        fields[target] = int(number.strip())
    except ValueError:
        logger.warning("Ignoring non-numeric window bound: %r", value)


def _section_label(line: str) -> str | None:
    stripped = line.strip()
    if not stripped.startswith(SECTION_PREFIX):
        return None
    label = stripped[len(SECTION_PREFIX) :].strip()
    return label if label in _KNOWN_LABELS else None


def _escape_content_line(line: str) -> str:
    if line.lstrip().startswith(("#", ESCAPE)) or line.strip() == ENTRY_SEPARATOR:
        return ESCAPE + line
    return line


def _unescape_content_line(line: str) -> str:
    return line[1:] if line.startswith(ESCAPE) else line


def _encode_item(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace("\r", "\\r")


def _decode_item(value: str) -> str:
    return _ITEM_UNESCAPE_PATTERN.sub(lambda m: _ITEM_UNESCAPES[m.group(1)], value)


def _strip_log_heading(text: str) -> str:
    if text.startswith("\n"):
        text = text[1:]
    if text.startswith(LOG_HEADING):
        text = text[len(LOG_HEADING) :]
        for _ in range(2):
            if text.startswith("\n"):
                text = text[1:]
    return text


def _metadata_from_header(header: str) -> SummaryMetadata:
    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as e:
        raise MalformedDocumentError(f"Invalid metadata header: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedDocumentError(
            f"Metadata header must be a mapping, got {type(data).__name__}"
        )

    values: dict[str, Any] = {}
    for key, attr in METADATA_KEYS:
        raw = data.get(key)
        if raw is None:
            continue
        values[attr] = _as_int(raw) if attr in _INT_METADATA else str(raw)
    return SummaryMetadata(**values)


def _parse_legacy_document(text: str, conversation_id: str) -> ParsedDocument:
    total = _LEGACY_TOTAL_PATTERN.search(text)
    heading = _LEGACY_LOG_HEADING_PATTERN.search(text)
    body = text[heading.end() :].lstrip("\r\n") if heading else ""
    entry_count = len(parse_entries(body))
    return ParsedDocument(
        body=body,
        metadata=SummaryMetadata(
            conversation_id=conversation_id,
            entry_count=entry_count,
            total_messages=int(total.group(1)) if total else 0,
        ),
    )


def _as_int(value: object) -> int:
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return 0
