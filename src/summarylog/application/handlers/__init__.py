"""Event handlers package."""

from summarylog.application.handlers.digest_handler import DigestEventHandler

__all__ = [
    "DigestEventHandler",
]
