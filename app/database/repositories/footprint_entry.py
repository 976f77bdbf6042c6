"""
Repository for FootprintEntry database operations.
"""
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.repositories.base import BaseRepository
from app.database.schemas import FootprintEntryDBModel


class FootprintEntryRepository(BaseRepository[FootprintEntryDBModel]):
    """Repository for footprint entry operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(FootprintEntryDBModel, session)

    async def list_entries(
        self, user_id: Optional[str] = None, skip: int = 0, limit: int = 100
    ) -> List[FootprintEntryDBModel]:
        """
        List entries newest first.

        Args:
            user_id: Restrict to this user's entries when given
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of footprint entries ordered by timestamp descending
        """
        stmt = select(self.model)
        if user_id:
            stmt = stmt.where(self.model.user_id == user_id)
        stmt = (
            stmt.order_by(self.model.timestamp.desc(), self.model.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_stats_by_activity(self, user_id: str) -> list[dict]:
        """
        Aggregate a user's entries per activity.

        Returns:
            One dict per activity with entry_count, total_co2e,
            first_entry_at and last_entry_at, largest total first
        """
        total_co2e = func.sum(self.model.co2e).label("total_co2e")
        stmt = (
            select(
                self.model.activity,
                self.model.unit,
                func.count(self.model.id).label("entry_count"),
                total_co2e,
                func.sum(self.model.value).label("total_value"),
                func.min(self.model.timestamp).label("first_entry_at"),
                func.max(self.model.timestamp).label("last_entry_at"),
            )
            .where(self.model.user_id == user_id)
            .group_by(self.model.activity, self.model.unit)
            .order_by(total_co2e.desc())
        )
        result = await self.session.execute(stmt)
        return [dict(row._mapping) for row in result.all()]

    async def get_total_co2e(self, user_id: Optional[str] = None) -> float:
        """Total kilograms of CO2e, optionally for one user."""
        stmt = select(func.sum(self.model.co2e))
        if user_id:
            stmt = stmt.where(self.model.user_id == user_id)
        result = await self.session.execute(stmt)
        total = result.scalar()
        return float(total) if total else 0.0
