"""
Emission context resolution - single and bulk.

Combines fuel type mappings, effective-dated emission factors and the GWP
registry into EmissionContext objects ready for the calculator.

The single path raises FactorNotFound when a mapped macro fuel type has no
factor, so an interactive calculation surfaces the gap. The bulk path
substitutes an all-zero factor set instead, so a batch finishes for every
resolvable vehicle. An unmapped fuel type resolves to an empty list on both
paths.
"""

import logging
from datetime import date, datetime
from typing import Any, Optional, Sequence, Union

from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.core.config import get_emission_calculation_setting
from fleet_emissions.pydantic_models.emission_context import (
    EmissionContext,
    GasEmissionFactors,
    GwpValues,
    MacroFuelTypeDescriptor,
)
from fleet_emissions.services.resolvers.factor_lookup import (
    DEFAULT_LOOKUP_STRATEGIES,
    FactorLookupStrategy,
)
from fleet_emissions.services.resolvers.fuel_type_mapping_resolver import (
    FuelTypeMappingResolver,
)
from fleet_emissions.services.resolvers.gwp_registry import GwpRegistry
from fleet_emissions.services.selectors.emission_factor_selector import (
    EmissionFactorSelector,
)

logger = logging.getLogger(__name__)

ReferenceDate = Union[date, datetime]


def as_reference_date(value: ReferenceDate) -> date:
    """Truncate datetimes to their calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def build_emission_context(
    macro_fuel_type: MacroFuelTypeDescriptor,
    factor: Optional[Any],
    gwp_values: GwpValues,
) -> EmissionContext:
    """
    Assemble one EmissionContext.

    Args:
        macro_fuel_type: Descriptor of the macro fuel type
        factor: Factor row in effect, or None for an all-zero factor set
        gwp_values: GWP snapshot

    Returns:
        EmissionContext
    """
    gas_factors = (
        GasEmissionFactors.from_row(factor) if factor is not None else GasEmissionFactors.zero()
    )
    return EmissionContext(
        macro_fuel_type=macro_fuel_type,
        gas_factors=gas_factors,
        gwp_values=gwp_values,
    )


class EmissionContextResolver:
    """
    Resolves emission contexts for vehicle fuel types at a reference date.

    Side-effect free: it only reads the catalog. A GWP snapshot can be
    injected to pin the values used for a whole batch or a test.
    """

    def __init__(
        self,
        session: AsyncSession,
        strategies: Sequence[FactorLookupStrategy] = DEFAULT_LOOKUP_STRATEGIES,
        gwp_values: Optional[GwpValues] = None,
        log_missing_factors: Optional[bool] = None,
    ):
        """
        Initialize resolver with database session.

        Args:
            session: Async database session
            strategies: Factor lookup tiers, tried in order
            gwp_values: Fixed GWP snapshot; read from the registry when None
            log_missing_factors: Warn on bulk zero-factor substitution.
                                 If not provided, reads from config file.
        """
        self.session = session
        self.selector = EmissionFactorSelector(session, strategies)
        self.mapping_resolver = FuelTypeMappingResolver(session)
        self.gwp_registry = GwpRegistry(session)
        self._gwp_values = gwp_values
        self.log_missing_factors = (
            log_missing_factors
            if log_missing_factors is not None
            else bool(get_emission_calculation_setting("log_missing_factors", True))
        )

    async def get_gwp_values(self) -> GwpValues:
        if self._gwp_values is None:
            return await self.gwp_registry.get_active_values()
        return self._gwp_values

    async def resolve(
        self, vehicle_fuel_type: str, reference_date: ReferenceDate
    ) -> list[EmissionContext]:
        """
        Resolve the contexts of one vehicle fuel type.

        Args:
            vehicle_fuel_type: Raw vehicle fuel type (e.g. "diesel", "petrol-hybrid")
            reference_date: Date the factors must be effective at

        Returns:
            Contexts ordered by scope; empty if the fuel type is not mapped

        Raises:
            FactorNotFound: If a mapped macro fuel type has no factor in effect
        """
        reference_date = as_reference_date(reference_date)
        macro_fuel_types = await self.mapping_resolver.get_macro_fuel_types(vehicle_fuel_type)
        if not macro_fuel_types:
            return []

        gwp_values = await self.get_gwp_values()
        contexts = []
        for macro_fuel_type in macro_fuel_types:
            factor = await self.selector.get_effective_factor(
                macro_fuel_type.id,
                vehicle_fuel_type,
                reference_date,
                macro_fuel_type_name=macro_fuel_type.name,
            )
            contexts.append(build_emission_context(macro_fuel_type, factor, gwp_values))

        logger.debug(
            f"Resolved {len(contexts)} emission context(s) for {vehicle_fuel_type!r} at {reference_date}"
        )
        return contexts

    async def resolve_bulk(
        self, reference_date: ReferenceDate
    ) -> dict[str, list[EmissionContext]]:
        """
        Resolve the contexts of every mapped vehicle fuel type.

        Loads all mappings and all factors effective at the reference date
        once, then answers each fuel type from the in-memory index. Missing
        factors become all-zero factor sets.

        Args:
            reference_date: Date the factors must be effective at

        Returns:
            vehicle fuel type -> contexts ordered by scope
        """
        reference_date = as_reference_date(reference_date)
        mappings = await self.mapping_resolver.get_all()
        index = await self.selector.get_factors_effective_at(reference_date)
        gwp_values = await self.get_gwp_values()

        resolved: dict[str, list[EmissionContext]] = {}
        for vehicle_fuel_type, macro_fuel_types in mappings.items():
            contexts = []
            for macro_fuel_type in macro_fuel_types:
                factor = index.lookup(
                    macro_fuel_type.id, vehicle_fuel_type, self.selector.strategies
                )
                if factor is None and self.log_missing_factors:
                    logger.warning(
                        f"No emission factor for {macro_fuel_type.name} / {vehicle_fuel_type!r} "
                        f"at {reference_date}; using zero factors"
                    )
                contexts.append(build_emission_context(macro_fuel_type, factor, gwp_values))
            resolved[vehicle_fuel_type] = contexts

        logger.info(
            f"Bulk resolved emission contexts for {len(resolved)} fuel types at {reference_date}"
        )
        return resolved


async def resolve_emission_contexts(
    session: AsyncSession, vehicle_fuel_type: str, reference_date: ReferenceDate
) -> list[EmissionContext]:
    return await EmissionContextResolver(session).resolve(vehicle_fuel_type, reference_date)


async def resolve_emission_contexts_bulk(
    session: AsyncSession, reference_date: ReferenceDate
) -> dict[str, list[EmissionContext]]:
    return await EmissionContextResolver(session).resolve_bulk(reference_date)
