"""
Emissions Calculations API router.

Estimate the CO2e of a logged activity and persist the result.
"""

import logging

from fastapi import APIRouter, Depends

from app.core.auth import AuthenticatedUser
from app.core.config import Config
from app.core.dependencies import (
    get_app_config,
    get_emission_estimator,
    get_optional_user,
)
from app.database.repositories import FootprintEntryRepository
from app.database.session_manager.db_session import Database
from app.database.session_manager.exceptions import DatabaseNotInitialized
from app.pydantic_models.estimate import (
    CalculateRequest,
    CalculateResponse,
    EmissionEstimate,
)
from app.services.estimators.emission_estimator import EmissionEstimator

router = APIRouter(
    prefix="/api",
    tags=["Calculations"],
)

logger = logging.getLogger(__name__)


@router.post("/calculate", response_model=CalculateResponse)
async def calculate_emissions(
    request: CalculateRequest,
    estimator: EmissionEstimator = Depends(get_emission_estimator),
    user: AuthenticatedUser | None = Depends(get_optional_user),
    config: Config = Depends(get_app_config),
):
    """
    Estimate emissions for one activity.

    This endpoint will:
    1. Estimate CO2e through the Climatiq API
    2. Store the estimate, linked to the caller when authenticated
    3. Return the estimate with the outcome of storing it

    A storage failure does not fail the request: the estimate is returned
    with ``saved=false`` and a ``save_error`` message.

    Example:
        ```
        POST /api/calculate
        {"activity": "car_petrol", "value": 25}
        ```
    """
    estimate = await estimator.calculate(request.activity, request.value)
    user_id = user.id if user else None

    result = CalculateResponse(**estimate.model_dump(), user_id=user_id)
    try:
        result.id = await save_estimate(estimate, user_id, config.default_region)
        result.saved = True
        logger.info(f"Emission entry saved to database: {result.id}")
    except DatabaseNotInitialized:
        logger.warning("Database not available, estimate not saved")
        result.save_error = "Database not available"
    except Exception as e:
        logger.exception(f"Failed to save emission entry to database: {e}")
        result.save_error = "Database save failed"

    return result


async def save_estimate(
    estimate: EmissionEstimate, user_id: str | None, region: str
):
    """Persist an estimate and return the new entry id."""
    async with Database() as session:
        entry = await FootprintEntryRepository(session).create(
            user_id=user_id,
            activity=estimate.activity,
            value=estimate.value,
            unit=estimate.unit,
            co2e=estimate.co2e,
            timestamp=estimate.timestamp,
            region=region,
        )
        return entry.id
