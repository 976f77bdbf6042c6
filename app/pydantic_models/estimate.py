"""
Pydantic models for emission estimates.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class EmissionEstimate(BaseModel):
    """Result of a single successful estimation. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    activity: str = Field(..., description="Activity key", examples=["car_petrol"])
    value: float = Field(..., gt=0, description="Input quantity", examples=[25.0])
    unit: str = Field(..., description="Unit of the input quantity", examples=["km"])
    co2e: float = Field(
        ..., ge=0, description="Kilograms of CO2-equivalent", examples=[4.27]
    )
    timestamp: datetime = Field(..., description="When the estimate was produced")


class CalculateRequest(BaseModel):
    """
    Request body for POST /api/calculate.

    Fields are left loosely typed so the estimator can report malformed input
    with its own error codes rather than a generic validation failure.
    """

    activity: str | None = Field(None, examples=["car_petrol"])
    value: Any = Field(None, examples=[25])


class CalculateResponse(EmissionEstimate):
    """Estimate plus the outcome of persisting it."""

    model_config = ConfigDict(frozen=False)

    id: UUID | None = None
    saved: bool = False
    save_error: str | None = None
    user_id: str | None = None
