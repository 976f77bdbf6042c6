"""
Pydantic models for footprint entries.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.constants import DEFAULT_REGION


class FootprintEntryBase(BaseModel):
    """Base footprint entry model."""

    activity: str = Field(..., min_length=1, max_length=100, examples=["car_petrol"])
    value: float = Field(..., gt=0, description="Input quantity", examples=[25.0])
    unit: str = Field(..., min_length=1, max_length=20, examples=["km"])
    co2e: float = Field(..., ge=0, description="Kilograms of CO2e", examples=[4.27])
    region: str = Field(DEFAULT_REGION, max_length=10, examples=["IN"])


class FootprintEntryCreate(FootprintEntryBase):
    """Model for logging a pre-computed entry."""

    timestamp: datetime | None = Field(
        None, description="Defaults to the time of logging"
    )

    @field_validator("value", "co2e", mode="before")
    @classmethod
    def reject_non_numbers(cls, v):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("co2e and value must be numbers")
        return v


class FootprintEntryPydModel(FootprintEntryBase):
    """Model for footprint entry response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str | None = None
    timestamp: datetime
    created_at: datetime


class FootprintEntryListResponse(BaseModel):
    """Envelope for GET /api/entries."""

    success: bool = True
    data: list[FootprintEntryPydModel]
    count: int
    user_id: str | None = None


class FootprintEntryCreatedResponse(BaseModel):
    """Envelope for POST /api/log."""

    success: bool = True
    data: FootprintEntryPydModel
