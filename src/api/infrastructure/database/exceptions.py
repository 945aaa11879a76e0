"""Database-specific exceptions."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class SchemaCreationError(DatabaseError):
    """Raised when missing tables cannot be created at startup."""

    pass
