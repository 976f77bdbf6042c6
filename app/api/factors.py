"""
Emission Factors API router.

Search the Climatiq factor catalogue when choosing factor ids for activities.
"""
import logging

from fastapi import APIRouter, Depends, Query

from app.core.dependencies import get_emission_estimator
from app.pydantic_models.factor import EmissionFactorSummary, FactorSearchResponse
from app.services.estimators.emission_estimator import EmissionEstimator
from app.services.estimators.exceptions import ServiceMisconfigured

router = APIRouter(
    prefix="/api/factors",
    tags=["Emission Factors"],
)

logger = logging.getLogger(__name__)


@router.get("/search", response_model=FactorSearchResponse)
async def search_emission_factors(
    query: str = Query(..., min_length=1),
    limit: int = Query(10, ge=1, le=100),
    estimator: EmissionEstimator = Depends(get_emission_estimator),
):
    """
    Search emission factors by free text, e.g. ``query=lpg``.
    """
    if estimator.client is None:
        raise ServiceMisconfigured("Climatiq API key not configured")

    results = await estimator.client.search_factors(query, limit=limit)
    return FactorSearchResponse(
        query=query,
        factors=[
            EmissionFactorSummary.model_validate(r) for r in results if r.get("activity_id")
        ],
    )
