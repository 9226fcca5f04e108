"""Use cases."""

from summarylog.application.use_cases.process_digest import (
    ConversationLocks,
    ProcessDigestUseCase,
)

__all__ = [
    "ConversationLocks",
    "ProcessDigestUseCase",
]
