"""
Repository for MacroFuelType database operations.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.database.repositories.base import BaseRepository
from fleet_emissions.database.schemas import MacroFuelTypeDBModel


class MacroFuelTypeRepository(BaseRepository[MacroFuelTypeDBModel]):
    """Repository for macro fuel type operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(MacroFuelTypeDBModel, session)

    async def get_ordered(self, active_only: bool = False) -> List[MacroFuelTypeDBModel]:
        """
        Get macro fuel types in display order.

        Args:
            active_only: Exclude inactive categories

        Returns:
            List of macro fuel types ordered by sort_order, then name
        """
        stmt = select(self.model).order_by(self.model.sort_order, self.model.name)
        if active_only:
            stmt = stmt.where(self.model.is_active.is_(True))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> Optional[MacroFuelTypeDBModel]:
        """Get macro fuel type by its unique name."""
        stmt = select(self.model).where(self.model.name == name)
        result = await self.session.execute(stmt)
        return result.scalars().first()
