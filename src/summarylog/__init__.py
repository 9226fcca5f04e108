"""Incremental conversation summary log built from digest events."""

__version__ = "0.1.0"
