"""
Repository for GwpConfig database operations.
"""
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.database.repositories.base import BaseRepository
from fleet_emissions.database.schemas import GwpConfigDBModel


class GwpConfigRepository(BaseRepository[GwpConfigDBModel]):
    """Repository for GWP configuration operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(GwpConfigDBModel, session)

    async def get_configs(self, active_only: bool = False) -> List[GwpConfigDBModel]:
        """
        Get GWP configurations ordered by gas name.

        Args:
            active_only: Only return active rows

        Returns:
            List of GWP configurations
        """
        stmt = select(self.model).order_by(self.model.gas_name.asc(), self.model.source.asc())
        if active_only:
            stmt = stmt.where(self.model.is_active.is_(True))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_active(self) -> List[GwpConfigDBModel]:
        """Get the active GWP row of every configured gas."""
        return await self.get_configs(active_only=True)
