"""Application services."""

from summarylog.application.services.summary_service import (
    SummaryService,
    SummaryStatistics,
)

__all__ = [
    "SummaryService",
    "SummaryStatistics",
]
