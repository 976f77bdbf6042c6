"""
FootprintEntry SQLAlchemy model.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Index, String, Uuid

from app.database import Base
from app.utils.constants import DEFAULT_REGION


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FootprintEntryDBModel(Base):
    """
    A persisted emission estimate.

    Rows are written once and only read back afterwards.
    """

    __tablename__ = "footprint_entries"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    user_id = Column(
        String(255),
        nullable=True,
        comment="Identity provider user id, null for anonymous calculations",
    )

    activity = Column(String(100), nullable=False, comment="Activity key")
    value = Column(Float, nullable=False, comment="Input quantity")
    unit = Column(String(20), nullable=False, comment="Unit of the input quantity")
    co2e = Column(Float, nullable=False, comment="Kilograms of CO2-equivalent")

    region = Column(
        String(10),
        nullable=False,
        default=DEFAULT_REGION,
        comment="Region tag of the estimate",
    )

    timestamp = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When the estimate was produced",
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_footprint_entries_user_timestamp", "user_id", "timestamp"),
        Index("ix_footprint_entries_timestamp", "timestamp"),
        {"comment": "Logged activities with their estimated CO2e"},
    )

    def __repr__(self):
        return f"<FootprintEntryDBModel: {self.activity} {self.value} {self.unit} = {self.co2e} kgCO2e>"
