"""Persistence-related exceptions."""


class PersistenceError(Exception):
    """Base exception for persistence-related errors."""


class DatabaseError(PersistenceError):
    """Database operation failed.

    Raised with the underlying SQLAlchemy error chained as __cause__.
    """
