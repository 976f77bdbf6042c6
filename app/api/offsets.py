"""
Carbon Offsets API router.
"""
from fastapi import APIRouter, Query

from app.pydantic_models.offset import OffsetProjectsResponse
from app.services.offsets import offset_catalog

router = APIRouter(
    prefix="/api/offsets",
    tags=["Offsets"],
)


@router.get("", response_model=OffsetProjectsResponse)
async def list_offset_projects(
    total_emissions_kg: float | None = Query(
        None, ge=0, description="Size an offset purchase for this many kg CO2e"
    ),
):
    """
    List offset projects, with a purchase recommendation when emissions are given.
    """
    projects = offset_catalog.list_projects()
    recommendation = None
    if total_emissions_kg is not None:
        recommendation = offset_catalog.recommend(total_emissions_kg, projects)

    return OffsetProjectsResponse(
        data=projects,
        count=len(projects),
        source=offset_catalog.CURATED_SOURCE,
        recommendation=recommendation,
    )
