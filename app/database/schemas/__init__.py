"""
SQLAlchemy database models (schemas).
"""
from app.database.schemas.footprint_entry import FootprintEntryDBModel
from app.database.schemas.user_profile import UserProfileDBModel

__all__ = [
    "FootprintEntryDBModel",
    "UserProfileDBModel",
]
