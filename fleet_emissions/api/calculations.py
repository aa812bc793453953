"""
Emissions Calculations API router.

Stateless calculations on caller-supplied inputs; nothing is read or stored.
"""

import logging

from fastapi import APIRouter

from fleet_emissions.pydantic_models.calculation import (
    ScopedEmissionRequest,
    ScopedEmissionResult,
    VehicleEmissionInput,
    VehicleEmissionInputV2,
    VehicleEmissionResult,
    VehicleEmissionResultV2,
)
from fleet_emissions.services.calculators.emission_calculator import (
    calculate_scoped_emissions,
    calculate_vehicle_emissions,
    calculate_vehicle_emissions_v2,
)

router = APIRouter(
    prefix="/api/v1/calculations",
    tags=["Calculations"],
)

logger = logging.getLogger(__name__)


@router.post("/vehicle", response_model=VehicleEmissionResult)
async def calculate_vehicle(request: VehicleEmissionInput):
    """
    Theoretical vs real emissions with a single kgCO2e/litre factor.

    Example:
        ```
        POST /api/v1/calculations/vehicle
        {
            "co2_g_km": 150,
            "km_travelled": 10000,
            "fuel_litres": 500,
            "emission_factor_kg_co2e_per_litre": 2.64
        }
        ```
    """
    return calculate_vehicle_emissions(
        request.co2_g_km,
        request.km_travelled,
        request.fuel_litres,
        request.emission_factor_kg_co2e_per_litre,
    )


@router.post("/scoped", response_model=ScopedEmissionResult)
async def calculate_scoped(request: ScopedEmissionRequest):
    """
    Real emissions across gases and scopes, with a per-gas breakdown.

    Example:
        ```
        POST /api/v1/calculations/scoped
        {
            "scopes": [
                {
                    "quantity": 100,
                    "gas_factors": {"co2": 2.3, "ch4": 0.001, "n2o": 0.0005},
                    "gwp_values": {"co2": 1, "ch4": 28, "n2o": 265}
                }
            ]
        }
        ```
    """
    logger.debug(f"Calculating scoped emissions over {len(request.scopes)} scope(s)")
    return calculate_scoped_emissions(request.scopes)


@router.post("/multi-scope", response_model=VehicleEmissionResultV2)
async def calculate_multi_scope(request: VehicleEmissionInputV2):
    """Theoretical vs real emissions with per-gas and per-scope breakdowns."""
    return calculate_vehicle_emissions_v2(request)
