"""
Footprint Entries API router.

Log pre-computed estimates and list stored entries.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AuthenticatedUser
from app.core.dependencies import get_current_user, get_db_session, get_optional_user
from app.database.repositories import FootprintEntryRepository
from app.pydantic_models.footprint_entry import (
    FootprintEntryCreate,
    FootprintEntryCreatedResponse,
    FootprintEntryListResponse,
    FootprintEntryPydModel,
)

router = APIRouter(
    prefix="/api",
    tags=["Entries"],
)

logger = logging.getLogger(__name__)


@router.post(
    "/log",
    response_model=FootprintEntryCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def log_entry(
    entry: FootprintEntryCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Store an already-estimated entry for the authenticated user.
    """
    repo = FootprintEntryRepository(session)
    saved = await repo.create(
        user_id=user.id,
        activity=entry.activity,
        value=entry.value,
        unit=entry.unit,
        co2e=entry.co2e,
        region=entry.region,
        timestamp=entry.timestamp or datetime.now(timezone.utc),
    )
    logger.info(f"Logged entry {saved.id} for user {user.id}")
    return FootprintEntryCreatedResponse(data=FootprintEntryPydModel.model_validate(saved))


@router.get("/entries", response_model=FootprintEntryListResponse)
async def list_entries(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    user: AuthenticatedUser | None = Depends(get_optional_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    List entries newest first.

    Authenticated callers only see their own entries.
    """
    user_id = user.id if user else None
    entries = await FootprintEntryRepository(session).list_entries(
        user_id=user_id, skip=skip, limit=limit
    )
    return FootprintEntryListResponse(
        data=[FootprintEntryPydModel.model_validate(e) for e in entries],
        count=len(entries),
        user_id=user_id,
    )
