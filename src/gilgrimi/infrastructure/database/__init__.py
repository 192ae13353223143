"""Database infrastructure package."""

from gilgrimi.infrastructure.database.connection import Base, DatabaseManager

__all__ = ["Base", "DatabaseManager"]
