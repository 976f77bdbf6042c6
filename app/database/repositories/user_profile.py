"""
Repository for UserProfile database operations.
"""
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.repositories.base import BaseRepository
from app.database.schemas import UserProfileDBModel


class UserProfileRepository(BaseRepository[UserProfileDBModel]):
    """Repository for user profile operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(UserProfileDBModel, session)

    async def get_by_user_id(self, user_id: str) -> Optional[UserProfileDBModel]:
        stmt = select(self.model).where(self.model.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_or_create(
        self, user_id: str, **defaults: Any
    ) -> UserProfileDBModel:
        """
        Fetch the user's profile, creating it with ``defaults`` on first access.
        """
        profile = await self.get_by_user_id(user_id)
        if profile is not None:
            return profile
        return await self.create(user_id=user_id, **defaults)

    async def update_by_user_id(
        self, user_id: str, **data: Any
    ) -> Optional[UserProfileDBModel]:
        """
        Apply a partial update to the user's profile.

        Returns:
            Updated profile, or None if the user has no profile yet
        """
        profile = await self.get_by_user_id(user_id)
        if profile is None:
            return None
        for field, value in data.items():
            setattr(profile, field, value)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile
