"""
Vehicle emission data loader.

Gathers everything the calculator needs for one vehicle and one period:
distance from odometer readings, consumption from fuel records, the fuel
class from the hybrid classifier and the emission contexts at the period's
reference date.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.core.config import get_emission_calculation_setting
from fleet_emissions.database.repositories import VehicleRepository
from fleet_emissions.database.schemas import VehicleDBModel
from fleet_emissions.pydantic_models.calculation import (
    ScopedEmissionInput,
    VehicleEmissionInputV2,
)
from fleet_emissions.pydantic_models.emission_context import EmissionContext
from fleet_emissions.pydantic_models.vehicle import VehicleEmissionData
from fleet_emissions.services.calculators.unit_converter import ZERO, to_decimal
from fleet_emissions.services.classifiers.hybrid_classifier import classify_vehicle
from fleet_emissions.services.exceptions import InsufficientData
from fleet_emissions.services.resolvers.emission_context_resolver import (
    EmissionContextResolver,
)
from fleet_emissions.utils.constants import FuelType, ReferenceDateStrategy, Scope

logger = logging.getLogger(__name__)


def get_reference_date(
    start: date,
    end: date,
    strategy: ReferenceDateStrategy = ReferenceDateStrategy.MEDIAN,
) -> date:
    """
    Date at which factors are resolved for a period.

    Args:
        start: First day of the period
        end: Last day of the period
        strategy: "median" (midpoint, rounded down) or "end"

    Returns:
        Reference date within the period

    Example:
        >>> get_reference_date(date(2024, 1, 1), date(2024, 12, 31))
        datetime.date(2024, 7, 1)
    """
    if ReferenceDateStrategy(strategy) == ReferenceDateStrategy.END:
        return end
    return start + timedelta(days=(end - start).days // 2)


def get_reference_date_strategy(settings: dict) -> ReferenceDateStrategy:
    """Reference date strategy of an [emission_calculation] table, median by default."""
    value = settings.get("reference_date_strategy", ReferenceDateStrategy.MEDIAN.value)
    try:
        return ReferenceDateStrategy(value)
    except ValueError:
        logger.warning(f"Unknown reference_date_strategy {value!r}. Using median")
        return ReferenceDateStrategy.MEDIAN


def get_reference_date_strategy_from_config() -> ReferenceDateStrategy:
    """Get the reference date strategy from the config file, median by default."""
    return get_reference_date_strategy(
        {
            "reference_date_strategy": get_emission_calculation_setting(
                "reference_date_strategy", ReferenceDateStrategy.MEDIAN.value
            )
        }
    )


def build_scopes(
    contexts: list[EmissionContext], fuel_litres: Decimal, fuel_kwh: Decimal
) -> list[ScopedEmissionInput]:
    """Pair each context with the quantity of its scope: litres for 1, kWh for 2."""
    return [
        ScopedEmissionInput(
            quantity=fuel_kwh if context.scope == Scope.SCOPE_2 else fuel_litres,
            gas_factors=context.gas_factors,
            gwp_values=context.gwp_values,
        )
        for context in contexts
    ]


class VehicleEmissionLoader:
    """Loads per-vehicle inputs for the multi-scope calculation."""

    def __init__(
        self,
        session: AsyncSession,
        resolver: Optional[EmissionContextResolver] = None,
        reference_date_strategy: Optional[ReferenceDateStrategy] = None,
    ):
        """
        Initialize loader with database session.

        Args:
            session: Async database session
            resolver: Context resolver for single lookups
            reference_date_strategy: Optional override; read from config when None
        """
        self.session = session
        self.vehicle_repo = VehicleRepository(session)
        self.resolver = resolver or EmissionContextResolver(session)
        self.reference_date_strategy = (
            reference_date_strategy
            if reference_date_strategy is not None
            else get_reference_date_strategy_from_config()
        )

    def reference_date(self, start: date, end: date) -> date:
        return get_reference_date(start, end, self.reference_date_strategy)

    async def load(
        self,
        vehicle: VehicleDBModel,
        start: date,
        end: date,
        contexts_by_fuel_type: Optional[Mapping[str, list[EmissionContext]]] = None,
    ) -> VehicleEmissionData:
        """
        Load the emission inputs of one vehicle for an inclusive period.

        Args:
            vehicle: Vehicle to load
            start: First day of the period
            end: Last day of the period
            contexts_by_fuel_type: Bulk-resolved contexts; when None contexts
                                   are resolved with a single lookup

        Returns:
            VehicleEmissionData

        Raises:
            InsufficientData: Fewer than two odometer readings, or no fuel type
            FactorNotFound: Single lookup found no factor for a mapped fuel type
        """
        engines = await self.vehicle_repo.get_engines(vehicle.id)
        fuel_records = await self.vehicle_repo.get_fuel_records(vehicle.id, start, end)
        readings = await self.vehicle_repo.get_odometer_readings(
            vehicle.id, start, end, fuel_records=fuel_records
        )

        if len(readings) < 2:
            raise InsufficientData(
                f"{len(readings)} odometer reading(s) between {start} and {end}; at least 2 required",
                vehicle_id=vehicle.id,
            )
        km_travelled = Decimal(readings[-1].odometer_km - readings[0].odometer_km)

        classification = classify_vehicle(vehicle, engines, fuel_records)
        fuel_type = classification.effective_fuel_type
        if fuel_type == FuelType.UNKNOWN:
            raise InsufficientData(
                "no engines or fuel records to determine the fuel type",
                vehicle_id=vehicle.id,
            )

        fuel_litres = sum((to_decimal(r.quantity_litres) for r in fuel_records), ZERO)
        fuel_kwh = sum((to_decimal(r.quantity_kwh) for r in fuel_records), ZERO)

        reference_date = self.reference_date(start, end)
        if contexts_by_fuel_type is None:
            contexts = await self.resolver.resolve(fuel_type, reference_date)
        else:
            contexts = list(contexts_by_fuel_type.get(fuel_type, []))

        if not contexts:
            logger.info(
                f"Vehicle {vehicle.id}: fuel type {fuel_type!r} is not mapped, real emissions are 0"
            )

        return VehicleEmissionData(
            vehicle_id=vehicle.id,
            fuel_type=fuel_type,
            reference_date=reference_date,
            fuel_litres=fuel_litres,
            fuel_kwh=fuel_kwh,
            input=VehicleEmissionInputV2(
                co2_g_km=classification.co2_g_km,
                km_travelled=km_travelled,
                scopes=build_scopes(contexts, fuel_litres, fuel_kwh),
            ),
        )
