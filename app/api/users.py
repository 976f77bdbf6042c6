"""
User API router.

Profile and emission statistics of the authenticated user.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AuthenticatedUser
from app.core.dependencies import get_current_user, get_db_session
from app.database.repositories import FootprintEntryRepository, UserProfileRepository
from app.pydantic_models.user_profile import (
    ActivityStats,
    UserProfilePydModel,
    UserProfileResponse,
    UserProfileUpdate,
    UserStats,
    UserStatsResponse,
)

router = APIRouter(
    prefix="/api/user",
    tags=["User"],
)

logger = logging.getLogger(__name__)


@router.get("/profile", response_model=UserProfileResponse)
async def get_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Get the caller's profile, creating an empty one on first access.
    """
    profile = await UserProfileRepository(session).get_or_create(
        user.id, full_name=user.full_name, preferences={}
    )
    return UserProfileResponse(data=UserProfilePydModel.model_validate(profile))


@router.put("/profile", response_model=UserProfileResponse)
async def update_profile(
    update: UserProfileUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Update the caller's profile. Only fields present in the body change.
    """
    repo = UserProfileRepository(session)
    await repo.get_or_create(user.id, full_name=user.full_name, preferences={})
    profile = await repo.update_by_user_id(
        user.id, **update.model_dump(exclude_unset=True)
    )
    logger.info(f"Updated profile for user {user.id}")
    return UserProfileResponse(data=UserProfilePydModel.model_validate(profile))


@router.get("/stats", response_model=UserStatsResponse)
async def get_stats(
    user: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Per-activity totals of the caller's entries.
    """
    entries = FootprintEntryRepository(session)
    by_activity = [
        ActivityStats(**row) for row in await entries.get_stats_by_activity(user.id)
    ]
    profile = await UserProfileRepository(session).get_by_user_id(user.id)

    return UserStatsResponse(
        data=UserStats(
            user_id=user.id,
            total_co2e=sum(stat.total_co2e for stat in by_activity),
            total_entries=sum(stat.entry_count for stat in by_activity),
            carbon_goal=profile.carbon_goal if profile else None,
            by_activity=by_activity,
        )
    )
