"""
Repository for FuelTypeMacroMapping database operations.
"""
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.database.repositories.base import BaseRepository
from fleet_emissions.database.schemas import FuelTypeMacroMappingDBModel


class FuelTypeMappingRepository(BaseRepository[FuelTypeMacroMappingDBModel]):
    """Repository for fuel type mapping operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(FuelTypeMacroMappingDBModel, session)

    async def get_by_vehicle_fuel_type(
        self, vehicle_fuel_type: str
    ) -> List[FuelTypeMacroMappingDBModel]:
        """
        Get the mappings of one vehicle fuel type, scope ascending.

        Args:
            vehicle_fuel_type: Raw vehicle fuel type string

        Returns:
            Zero, one (pure fuel) or two (hybrid) mappings with their macro fuel type loaded
        """
        stmt = (
            select(self.model)
            .where(self.model.vehicle_fuel_type == vehicle_fuel_type)
            .order_by(self.model.scope.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().unique().all())

    async def get_all_ordered(self) -> List[FuelTypeMacroMappingDBModel]:
        """
        Get every mapping ordered by vehicle fuel type, then scope ascending.

        Returns:
            List of mappings with their macro fuel type loaded
        """
        stmt = select(self.model).order_by(
            self.model.vehicle_fuel_type.asc(), self.model.scope.asc()
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().unique().all())
