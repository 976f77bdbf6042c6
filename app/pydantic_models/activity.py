"""
Pydantic models for the activity registry.
"""

from pydantic import BaseModel, ConfigDict, Field


class ActivityDefinitionPydModel(BaseModel):
    """Public view of a registered activity."""

    model_config = ConfigDict(from_attributes=True)

    key: str = Field(..., examples=["car_petrol"])
    category: str = Field(..., examples=["transport"])
    parameter_name: str = Field(..., examples=["distance"])
    unit: str = Field(..., examples=["km"])
    unit_type: str = Field(..., examples=["Distance"])
    primary_factor_id: str
    fallback_factor_ids: list[str] = Field(default_factory=list)
    region: str | None = None
    note: str = ""


class ActivityListResponse(BaseModel):
    success: bool = True
    data: list[ActivityDefinitionPydModel]
    count: int
    categories: dict[str, list[str]]
