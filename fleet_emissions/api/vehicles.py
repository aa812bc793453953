"""
Vehicles and fleet emissions API router.

Classification and period emissions for one vehicle (single lookups) and
for a batch of vehicles (bulk lookups).
"""
import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.core.dependencies import get_db_session, get_emission_settings
from fleet_emissions.database.repositories import VehicleRepository
from fleet_emissions.database.schemas import VehicleDBModel
from fleet_emissions.pydantic_models.vehicle import (
    FleetEmissionReport,
    FleetEmissionRequest,
    VehicleClassificationResponse,
    VehicleEmissionReport,
)
from fleet_emissions.services.calculators.fleet_emission_service import (
    FleetEmissionService,
)
from fleet_emissions.services.classifiers.hybrid_classifier import classify_vehicle
from fleet_emissions.services.loaders.vehicle_emission_loader import (
    VehicleEmissionLoader,
    get_reference_date_strategy,
)
from fleet_emissions.services.resolvers.emission_context_resolver import (
    EmissionContextResolver,
)
router = APIRouter(
    prefix="/api/v1",
    tags=["Vehicles"],
)

logger = logging.getLogger(__name__)


def get_fleet_emission_service(
    session: AsyncSession = Depends(get_db_session),
    settings: dict = Depends(get_emission_settings),
) -> FleetEmissionService:
    resolver = EmissionContextResolver(
        session, log_missing_factors=bool(settings.get("log_missing_factors", True))
    )
    loader = VehicleEmissionLoader(
        session,
        resolver=resolver,
        reference_date_strategy=get_reference_date_strategy(settings),
    )
    return FleetEmissionService(session, resolver=resolver, loader=loader)


async def _get_vehicle_or_404(session: AsyncSession, vehicle_id: UUID) -> VehicleDBModel:
    vehicle = await VehicleRepository(session).get_by_id(vehicle_id)
    if not vehicle:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Vehicle {vehicle_id} not found",
        )
    return vehicle


def _check_period(start: date, end: date):
    if start > end:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start must be before or equal to end",
        )


@router.get(
    "/vehicles/{vehicle_id}/classification",
    response_model=VehicleClassificationResponse,
)
async def get_vehicle_classification(
    vehicle_id: UUID,
    start: date | None = None,
    end: date | None = None,
    session: AsyncSession = Depends(get_db_session),
):
    """
    Effective fuel type and gCO2/km of a vehicle.

    When a period is given, its fuel records take part in the fallback
    classification of non-hybrid vehicles.

    Args:
        vehicle_id: Vehicle UUID
        start: First day of the period (optional, requires end)
        end: Last day of the period (optional, requires start)
    """
    repo = VehicleRepository(session)
    vehicle = await _get_vehicle_or_404(session, vehicle_id)
    engines = await repo.get_engines(vehicle.id)

    fuel_records = []
    if start is not None and end is not None:
        _check_period(start, end)
        fuel_records = await repo.get_fuel_records(vehicle.id, start, end)

    classification = classify_vehicle(vehicle, engines, fuel_records)
    return VehicleClassificationResponse(
        vehicle_id=vehicle.id,
        effective_fuel_type=classification.effective_fuel_type,
        co2_g_km=classification.co2_g_km,
        fuel_class=classification.fuel_class,
    )


@router.get("/vehicles/{vehicle_id}/emissions", response_model=VehicleEmissionReport)
async def get_vehicle_emissions(
    vehicle_id: UUID,
    start: date = Query(..., description="First day of the period"),
    end: date = Query(..., description="Last day of the period"),
    session: AsyncSession = Depends(get_db_session),
    service: FleetEmissionService = Depends(get_fleet_emission_service),
):
    """
    Theoretical vs real emissions of one vehicle for a period.

    Responds 422 when the vehicle lacks data for the period or when its fuel
    type has no emission factor in effect.

    Example:
        ```
        GET /api/v1/vehicles/{vehicle_id}/emissions?start=2024-01-01&end=2024-12-31
        ```
    """
    _check_period(start, end)
    vehicle = await _get_vehicle_or_404(session, vehicle_id)
    return await service.calculate_vehicle(vehicle, start, end)


@router.post("/fleet/emissions", response_model=FleetEmissionReport)
async def calculate_fleet_emissions(
    request: FleetEmissionRequest,
    service: FleetEmissionService = Depends(get_fleet_emission_service),
):
    """
    Emissions of several vehicles for one period, with fleet totals.

    Example:
        ```
        POST /api/v1/fleet/emissions
        {
            "vehicle_ids": ["uuid1", "uuid2"],
            "period_start": "2024-01-01",
            "period_end": "2024-12-31"
        }
        ```
    """
    logger.info(f"Calculating fleet emissions for {len(request.vehicle_ids)} vehicles")
    return await service.calculate_fleet(
        request.vehicle_ids, request.period_start, request.period_end
    )
