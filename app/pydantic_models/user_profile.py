"""
Pydantic models for user profiles and statistics.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserProfileUpdate(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    full_name: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=255)
    carbon_goal: float | None = Field(
        None, ge=0, description="Monthly CO2e goal in kilograms", examples=[150.0]
    )
    preferences: dict[str, Any] | None = None


class UserProfilePydModel(BaseModel):
    """Model for user profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    full_name: str | None = None
    location: str | None = None
    carbon_goal: float | None = None
    preferences: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime


class UserProfileResponse(BaseModel):
    success: bool = True
    data: UserProfilePydModel


class ActivityStats(BaseModel):
    """Totals of one activity for one user."""

    activity: str
    unit: str
    entry_count: int
    total_value: float
    total_co2e: float
    first_entry_at: datetime
    last_entry_at: datetime


class UserStats(BaseModel):
    user_id: str
    total_co2e: float = Field(..., description="Kilograms of CO2e across all entries")
    total_entries: int
    carbon_goal: float | None = None
    by_activity: list[ActivityStats]


class UserStatsResponse(BaseModel):
    success: bool = True
    data: UserStats
