"""
Emission catalog API router.

Read-only operations for macro fuel types, fuel type mappings, emission
factors and GWP values.
"""
import logging
import math
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.core.dependencies import get_db_session
from fleet_emissions.database.repositories import (
    EmissionFactorRepository,
    FuelTypeMappingRepository,
    GwpConfigRepository,
    MacroFuelTypeRepository,
)
from fleet_emissions.pydantic_models.emission_context import MacroFuelTypeDescriptor
from fleet_emissions.pydantic_models.emission_factor import (
    EmissionFactorPydModel,
    FuelTypeMappingPydModel,
    GwpConfigPydModel,
    MacroFuelTypePydModel,
    PaginatedEmissionFactors,
)
from fleet_emissions.services.resolvers.fuel_type_mapping_resolver import (
    FuelTypeMappingResolver,
)

router = APIRouter(
    prefix="/api/v1/catalog",
    tags=["Catalog"],
)

logger = logging.getLogger(__name__)


@router.get("/macro-fuel-types", response_model=list[MacroFuelTypePydModel])
async def list_macro_fuel_types(
    active_only: bool = True,
    session: AsyncSession = Depends(get_db_session),
):
    """
    List macro fuel types in display order.

    Args:
        active_only: Hide inactive categories (default True)
    """
    repo = MacroFuelTypeRepository(session)
    return await repo.get_ordered(active_only=active_only)


@router.get("/fuel-type-mappings", response_model=list[FuelTypeMappingPydModel])
async def list_fuel_type_mappings(session: AsyncSession = Depends(get_db_session)):
    """List every vehicle fuel type mapping, by fuel type then scope."""
    repo = FuelTypeMappingRepository(session)
    return await repo.get_all_ordered()


@router.get(
    "/fuel-type-mappings/{vehicle_fuel_type}",
    response_model=list[MacroFuelTypeDescriptor],
)
async def get_fuel_type_mapping(
    vehicle_fuel_type: str,
    session: AsyncSession = Depends(get_db_session),
):
    """
    Get the macro fuel types a vehicle fuel type maps to, scope ascending.

    Responds 404 when the fuel type is not mapped.
    """
    resolver = FuelTypeMappingResolver(session)
    return await resolver.require_macro_fuel_types(vehicle_fuel_type)


@router.get("/emission-factors", response_model=PaginatedEmissionFactors)
async def list_emission_factors(
    macro_fuel_type_id: UUID | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500),
    session: AsyncSession = Depends(get_db_session),
):
    """
    List emission factors with pagination and optional filtering.

    Ordered by macro fuel type name, then effective date descending.

    Args:
        macro_fuel_type_id: Filter by macro fuel type (optional)
        date_from: Lower bound on effective date (optional)
        date_to: Upper bound on effective date (optional)
        page: Page number, starting at 1
        page_size: Items per page
    """
    if date_from and date_to and date_from > date_to:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="date_from must be before or equal to date_to",
        )

    repo = EmissionFactorRepository(session)
    total_count = await repo.count_matching(macro_fuel_type_id, date_from, date_to)
    factors = await repo.search(
        macro_fuel_type_id,
        date_from,
        date_to,
        skip=(page - 1) * page_size,
        limit=page_size,
    )

    return PaginatedEmissionFactors(
        data=[EmissionFactorPydModel.model_validate(factor) for factor in factors],
        page=page,
        page_size=page_size,
        total_count=total_count,
        total_pages=math.ceil(total_count / page_size) if total_count else 0,
    )


@router.get("/emission-factors/{factor_id}", response_model=EmissionFactorPydModel)
async def get_emission_factor(
    factor_id: UUID,
    session: AsyncSession = Depends(get_db_session),
):
    """
    Get emission factor by ID.
    """
    repo = EmissionFactorRepository(session)
    factor = await repo.get_by_id(factor_id)

    if not factor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Emission factor {factor_id} not found",
        )

    return factor


@router.get("/gwp", response_model=list[GwpConfigPydModel])
async def list_gwp_configs(
    active_only: bool = False,
    session: AsyncSession = Depends(get_db_session),
):
    """
    List GWP configurations by gas.

    Args:
        active_only: Only return the active row of each gas
    """
    repo = GwpConfigRepository(session)
    return await repo.get_configs(active_only=active_only)
