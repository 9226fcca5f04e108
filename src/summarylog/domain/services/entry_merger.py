"""Merging drafted entries into a summary log."""

from collections.abc import Sequence
from dataclasses import replace

from summarylog.domain.entities.summary import (
    LIST_FIELDS,
    SummaryLogEntry,
    latest_timestamp,
    unique_in_order,
)

UPDATE_SEPARATOR = "\n\nUPDATE: "


def merge_entry(
    existing: SummaryLogEntry, new_entry: SummaryLogEntry
) -> SummaryLogEntry:
    """Fold a new entry into an existing one.

    Content is appended after an "UPDATE:" marker and updated moves to the
    new entry's created timestamp. Arrays are concatenated in order, except
    participants, which keeps each value once (existing values first).
    Title, created and window bounds of the existing entry are kept.

    Args:
        existing: Entry being updated.
        new_entry: Drafted entry for the latest window.

    Returns:
        The merged entry.
    """
    merged: dict[str, tuple[str, ...] | None] = {}
    for name in LIST_FIELDS:
        old_values = getattr(existing, name) or ()
        new_values = getattr(new_entry, name) or ()
        if name == "participants":
            merged[name] = unique_in_order((*old_values, *new_values))
        else:
            merged[name] = (*old_values, *new_values)

    return replace(
        existing,
        content=f"{existing.content}{UPDATE_SEPARATOR}{new_entry.content}",
        updated=latest_timestamp(new_entry.created, existing.created),
        **merged,
    )


def manage_entries(
    existing: Sequence[SummaryLogEntry],
    new_entry: SummaryLogEntry,
    should_update: bool,
    update_index: int | None = None,
) -> list[SummaryLogEntry]:
    """Apply a drafted entry to an entry list.

    When should_update is set and update_index points at an existing entry,
    that entry is merged in place. Anything else, including an out-of-range
    index, prepends new_entry as the most recent entry.

    Args:
        existing: Current entries, newest first.
        new_entry: Drafted entry.
        should_update: Whether the decision was to update an entry.
        update_index: Index of the entry to update.

    Returns:
        New entry list, newest first. The input is not modified.
    """
    if should_update and update_index is not None and 0 <= update_index < len(existing):
        entries = list(existing)
        entries[update_index] = merge_entry(entries[update_index], new_entry)
        return entries
    return [new_entry, *existing]
