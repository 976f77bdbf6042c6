"""
UserProfile SQLAlchemy model.
"""
import uuid

from sqlalchemy import JSON, Column, DateTime, Float, String, Uuid

from app.database import Base
from app.database.schemas.footprint_entry import utcnow


class UserProfileDBModel(Base):
    """Display settings and monthly goal of an authenticated user."""

    __tablename__ = "user_profiles"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        String(255),
        nullable=False,
        unique=True,
        comment="Identity provider user id",
    )
    full_name = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)
    carbon_goal = Column(
        Float, nullable=True, comment="Monthly CO2e goal in kilograms"
    )
    preferences = Column(JSON, nullable=True, default=dict)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self):
        return f"<UserProfileDBModel: {self.user_id}>"
