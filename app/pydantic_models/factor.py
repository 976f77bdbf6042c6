"""
Pydantic models for emission factor search results.
"""

from pydantic import BaseModel, ConfigDict


class EmissionFactorSummary(BaseModel):
    model_config = ConfigDict(extra="ignore")

    activity_id: str
    name: str | None = None
    category: str | None = None
    unit_type: str | None = None
    region: str | None = None


class FactorSearchResponse(BaseModel):
    success: bool = True
    query: str
    factors: list[EmissionFactorSummary]
