"""
Database repositories for data access layer.

Provides clean abstraction over database operations following repository pattern.
"""
from app.database.repositories.base import BaseRepository
from app.database.repositories.footprint_entry import FootprintEntryRepository
from app.database.repositories.user_profile import UserProfileRepository

__all__ = [
    "BaseRepository",
    "FootprintEntryRepository",
    "UserProfileRepository",
]
