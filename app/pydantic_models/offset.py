"""
Pydantic models for carbon offset suggestions.
"""

from pydantic import BaseModel, Field


class OffsetProject(BaseModel):
    """A carbon offset project a user can support."""

    id: str
    title: str
    description: str
    location: str
    project_type: str
    status: str = "active"
    url: str
    credit_price: float | None = Field(None, description="USD per tonne CO2e")
    available_credits: int | None = None


class OffsetRecommendation(BaseModel):
    total_emissions_kg: float
    recommended_offset_tonnes: float = Field(
        ..., description="Emissions in tonnes rounded up to the nearest 0.5"
    )
    estimated_cost: float | None = Field(
        None, description="Recommended tonnes at the average credit price"
    )


class OffsetProjectsResponse(BaseModel):
    success: bool = True
    data: list[OffsetProject]
    count: int
    source: str
    recommendation: OffsetRecommendation | None = None
