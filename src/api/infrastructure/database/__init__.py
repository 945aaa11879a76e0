"""Database infrastructure - shared connection primitives."""

from infrastructure.database.exceptions import (
    DatabaseError,
    SchemaCreationError,
)

__all__ = [
    "DatabaseError",
    "SchemaCreationError",
]
