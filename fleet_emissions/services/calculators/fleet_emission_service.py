"""
Fleet emission orchestrator service - async version.

Coordinates the loader, the calculator and the aggregator for one vehicle
(single lookups) or a whole fleet (bulk lookups).
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.database.repositories import VehicleRepository
from fleet_emissions.database.schemas import VehicleDBModel
from fleet_emissions.pydantic_models.vehicle import (
    ExcludedVehicle,
    FleetEmissionReport,
    FleetEmissionStatistics,
    VehicleEmissionData,
    VehicleEmissionReport,
)
from fleet_emissions.services.aggregators.emission_aggregator import EmissionAggregator
from fleet_emissions.services.exceptions import InsufficientData
from fleet_emissions.services.loaders.vehicle_emission_loader import VehicleEmissionLoader
from fleet_emissions.services.resolvers.emission_context_resolver import (
    EmissionContextResolver,
)

from .emission_calculator import calculate_vehicle_emissions_v2

logger = logging.getLogger(__name__)


def build_vehicle_report(
    data: VehicleEmissionData, start: date, end: date
) -> VehicleEmissionReport:
    """Run the multi-scope calculation on loaded data."""
    result = calculate_vehicle_emissions_v2(data.input)
    return VehicleEmissionReport(
        vehicle_id=data.vehicle_id,
        fuel_type=data.fuel_type,
        period_start=start,
        period_end=end,
        reference_date=data.reference_date,
        km_travelled=data.input.km_travelled,
        fuel_litres=data.fuel_litres,
        fuel_kwh=data.fuel_kwh,
        co2_g_km=data.input.co2_g_km,
        theoretical=result.theoretical,
        real=result.real,
        real_per_gas=result.real_per_gas,
        real_by_scope=result.real_by_scope,
        delta=result.delta,
    )


class FleetEmissionService:
    """
    Main orchestrator for vehicle emission calculations.

    Provides single-vehicle and batch processing.
    """

    def __init__(
        self,
        session: AsyncSession,
        resolver: Optional[EmissionContextResolver] = None,
        loader: Optional[VehicleEmissionLoader] = None,
    ):
        """
        Initialize service with database session.

        Args:
            session: Database session
            resolver: Optional context resolver override
            loader: Optional loader override
        """
        self.session = session
        self.vehicle_repo = VehicleRepository(session)
        self.resolver = resolver or EmissionContextResolver(session)
        self.loader = loader or VehicleEmissionLoader(session, resolver=self.resolver)

    async def calculate_vehicle(
        self, vehicle: VehicleDBModel, start: date, end: date
    ) -> VehicleEmissionReport:
        """
        Calculate emissions for a single vehicle using single lookups.

        Args:
            vehicle: Vehicle to calculate
            start: First day of the period
            end: Last day of the period

        Returns:
            VehicleEmissionReport

        Raises:
            InsufficientData: If the vehicle cannot be calculated for the period
            FactorNotFound: If a mapped fuel type has no factor in effect
        """
        logger.info(f"Calculating emissions for vehicle {vehicle.id} from {start} to {end}")
        data = await self.loader.load(vehicle, start, end)
        return build_vehicle_report(data, start, end)

    async def calculate_fleet(
        self, vehicle_ids: list[UUID], start: date, end: date
    ) -> FleetEmissionReport:
        """
        Calculate emissions for several vehicles with one bulk resolution.

        Vehicles that do not exist or lack data are excluded with a reason;
        the batch always completes for the others.

        Args:
            vehicle_ids: Vehicles to calculate (duplicates are ignored)
            start: First day of the period
            end: Last day of the period

        Returns:
            FleetEmissionReport with results, exclusions, summary and statistics
        """
        unique_ids = list(dict.fromkeys(vehicle_ids))
        reference_date = self.loader.reference_date(start, end)
        contexts_by_fuel_type = await self.resolver.resolve_bulk(reference_date)

        vehicles = {v.id: v for v in await self.vehicle_repo.get_by_ids(unique_ids)}

        results: list[VehicleEmissionReport] = []
        excluded: list[ExcludedVehicle] = []

        for vehicle_id in unique_ids:
            vehicle = vehicles.get(vehicle_id)
            if vehicle is None:
                excluded.append(ExcludedVehicle(vehicle_id=vehicle_id, reason="Vehicle not found"))
                continue
            try:
                data = await self.loader.load(
                    vehicle, start, end, contexts_by_fuel_type=contexts_by_fuel_type
                )
            except InsufficientData as e:
                logger.info(f"Excluding vehicle {vehicle_id}: {e.reason}")
                excluded.append(ExcludedVehicle(vehicle_id=vehicle_id, reason=e.reason))
                continue
            results.append(build_vehicle_report(data, start, end))

        logger.info(
            f"Fleet calculation complete: {len(results)} calculated, "
            f"{len(excluded)} excluded of {len(unique_ids)} requested"
        )

        return FleetEmissionReport(
            period_start=start,
            period_end=end,
            reference_date=reference_date,
            results=results,
            excluded=excluded,
            summary=EmissionAggregator.aggregate(results),
            statistics=FleetEmissionStatistics(
                total_requested=len(unique_ids),
                total_calculated=len(results),
                total_excluded=len(excluded),
            ),
        )
