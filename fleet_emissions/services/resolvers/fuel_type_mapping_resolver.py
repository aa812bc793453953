"""
Resolves vehicle fuel type strings to their macro fuel types.

A pure fuel maps to one macro fuel type, a hybrid composite to two (one per
scope). Results are always ordered by scope ascending.
"""

import logging
from collections import defaultdict

from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.database.repositories import FuelTypeMappingRepository
from fleet_emissions.pydantic_models.emission_context import MacroFuelTypeDescriptor
from fleet_emissions.services.exceptions import MappingNotFound

logger = logging.getLogger(__name__)


def _descriptor(mapping) -> MacroFuelTypeDescriptor:
    return MacroFuelTypeDescriptor.model_validate(mapping.macro_fuel_type)


class FuelTypeMappingResolver:
    """Fuel type to macro fuel type resolution."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = FuelTypeMappingRepository(session)

    async def get_macro_fuel_types(
        self, vehicle_fuel_type: str
    ) -> list[MacroFuelTypeDescriptor]:
        """
        Get the macro fuel types of a vehicle fuel type, scope ascending.

        Args:
            vehicle_fuel_type: Raw vehicle fuel type

        Returns:
            One or two descriptors; empty when the fuel type is not mapped
        """
        mappings = await self.repo.get_by_vehicle_fuel_type(vehicle_fuel_type)
        if not mappings:
            logger.info(f"No macro fuel type mapping for fuel type {vehicle_fuel_type!r}")
        return [_descriptor(mapping) for mapping in mappings]

    async def require_macro_fuel_types(
        self, vehicle_fuel_type: str
    ) -> list[MacroFuelTypeDescriptor]:
        """
        Same as get_macro_fuel_types, but a missing mapping is an error.

        Raises:
            MappingNotFound: If the fuel type has no mapping
        """
        descriptors = await self.get_macro_fuel_types(vehicle_fuel_type)
        if not descriptors:
            raise MappingNotFound(vehicle_fuel_type)
        return descriptors

    async def get_all(self) -> dict[str, list[MacroFuelTypeDescriptor]]:
        """
        Get the macro fuel types of every mapped fuel type in one query.

        Returns:
            vehicle fuel type -> descriptors, scope ascending
        """
        resolved: dict[str, list[MacroFuelTypeDescriptor]] = defaultdict(list)
        for mapping in await self.repo.get_all_ordered():
            resolved[mapping.vehicle_fuel_type].append(_descriptor(mapping))
        return dict(resolved)
