"""
Selectors for EmissionFactor queries - async version.

All reads of effective-dated emission factors go through this selector so
the single and bulk paths share one lookup implementation.
"""

import logging
from datetime import date
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.database.repositories import EmissionFactorRepository
from fleet_emissions.database.schemas import EmissionFactorDBModel
from fleet_emissions.services.exceptions import FactorNotFound
from fleet_emissions.services.resolvers.factor_lookup import (
    DEFAULT_LOOKUP_STRATEGIES,
    FactorIndex,
    FactorLookupStrategy,
)

logger = logging.getLogger(__name__)


class EmissionFactorSelector:
    """
    Query layer for EmissionFactor.

    Delegates storage access to EmissionFactorRepository and tier selection
    to the lookup strategies.
    """

    def __init__(
        self,
        session: AsyncSession,
        strategies: Sequence[FactorLookupStrategy] = DEFAULT_LOOKUP_STRATEGIES,
    ):
        """Initialize selector with database session."""
        self.session = session
        self.repo = EmissionFactorRepository(session)
        self.strategies = tuple(strategies)

    async def find_effective_factor(
        self,
        macro_fuel_type_id: UUID,
        fuel_type: Optional[str],
        reference_date: date,
    ) -> Optional[EmissionFactorDBModel]:
        """
        Get the factor in effect at the reference date, or None.

        Args:
            macro_fuel_type_id: Macro fuel type id
            fuel_type: Vehicle fuel type, used for the specific override tier
            reference_date: Date the factor must be effective at

        Returns:
            EmissionFactorDBModel or None
        """
        candidates = await self.repo.get_candidates(
            macro_fuel_type_id, fuel_type, reference_date
        )
        return FactorIndex.from_factors(candidates).lookup(
            macro_fuel_type_id, fuel_type, self.strategies
        )

    async def get_effective_factor(
        self,
        macro_fuel_type_id: UUID,
        fuel_type: Optional[str],
        reference_date: date,
        macro_fuel_type_name: Optional[str] = None,
    ) -> EmissionFactorDBModel:
        """
        Get the factor in effect at the reference date.

        Args:
            macro_fuel_type_id: Macro fuel type id
            fuel_type: Vehicle fuel type, used for the specific override tier
            reference_date: Date the factor must be effective at
            macro_fuel_type_name: Name used in the error message

        Returns:
            EmissionFactorDBModel

        Raises:
            FactorNotFound: If neither the override nor the default tier has a factor
        """
        factor = await self.find_effective_factor(
            macro_fuel_type_id, fuel_type, reference_date
        )
        if factor is None:
            logger.warning(
                f"No emission factor for {macro_fuel_type_name or macro_fuel_type_id} "
                f"/ {fuel_type!r} at {reference_date}"
            )
            raise FactorNotFound(
                macro_fuel_type_id, fuel_type, reference_date, macro_fuel_type_name
            )
        return factor

    async def get_factors_effective_at(self, reference_date: date) -> FactorIndex:
        """
        Index every factor in effect at the reference date, in one query.

        Args:
            reference_date: Date the factors must be effective at

        Returns:
            FactorIndex over all macro fuel types and overrides
        """
        factors = await self.repo.get_effective_before(reference_date)
        index = FactorIndex.from_factors(factors)
        logger.debug(
            f"Indexed {len(index)} effective factors from {len(factors)} rows at {reference_date}"
        )
        return index
