"""Database infrastructure - shared connection primitives."""

from infrastructure.database.connection import Database
from infrastructure.database.models import Base, TimestampMixin

__all__ = [
    "Base",
    "Database",
    "TimestampMixin",
]
