"""Summary decision entities.

A decision tells the orchestrator how a digest affects the summary log:

- CreateDecision: no document exists yet; start one with the entry.
- UpdateDecision: fold the entry into the most recent entry.
- AppendDecision: a document exists; prepend the entry as a new topic.
"""

from dataclasses import dataclass
from typing import Literal

from summarylog.domain.entities.summary import SummaryLogEntry


@dataclass(frozen=True)
class CreateDecision:
    """Start a new document with the drafted entry."""

    entry: SummaryLogEntry

    @property
    def action(self) -> Literal["create"]:
        return "create"


@dataclass(frozen=True)
class UpdateDecision:
    """Merge the drafted entry into an existing entry.

    Attributes:
        entry: Drafted entry.
        entry_index: Index of the entry to update. Only 0 (the most recent
            entry) is ever produced.
    """

    entry: SummaryLogEntry
    entry_index: int = 0

    @property
    def action(self) -> Literal["update"]:
        return "update"


@dataclass(frozen=True)
class AppendDecision:
    """Prepend the drafted entry to an existing document."""

    entry: SummaryLogEntry

    @property
    def action(self) -> Literal["append"]:
        return "append"


SummaryDecision = CreateDecision | UpdateDecision | AppendDecision
