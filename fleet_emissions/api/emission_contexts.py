"""
Emission contexts API router.

Resolves the factors and GWP values in effect for vehicle fuel types.
"""
import logging
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.core.dependencies import get_db_session, get_emission_settings
from fleet_emissions.pydantic_models.emission_context import (
    BulkEmissionContextsResponse,
    EmissionContextsResponse,
)
from fleet_emissions.services.resolvers.emission_context_resolver import (
    EmissionContextResolver,
)

router = APIRouter(
    prefix="/api/v1/emission-contexts",
    tags=["Emission Contexts"],
)

logger = logging.getLogger(__name__)


def get_resolver(
    session: AsyncSession = Depends(get_db_session),
    settings: dict = Depends(get_emission_settings),
) -> EmissionContextResolver:
    return EmissionContextResolver(
        session, log_missing_factors=bool(settings.get("log_missing_factors", True))
    )


@router.get("", response_model=BulkEmissionContextsResponse)
async def resolve_all_emission_contexts(
    reference_date: date | None = None,
    resolver: EmissionContextResolver = Depends(get_resolver),
):
    """
    Resolve the contexts of every mapped fuel type at once.

    Missing factors resolve to all-zero factor sets instead of failing.

    Args:
        reference_date: Date the factors must be effective at (default today)
    """
    reference_date = reference_date or date.today()
    contexts = await resolver.resolve_bulk(reference_date)
    return BulkEmissionContextsResponse(reference_date=reference_date, contexts=contexts)


@router.get("/{vehicle_fuel_type}", response_model=EmissionContextsResponse)
async def resolve_emission_contexts(
    vehicle_fuel_type: str,
    reference_date: date | None = None,
    resolver: EmissionContextResolver = Depends(get_resolver),
):
    """
    Resolve the contexts of one vehicle fuel type.

    An unmapped fuel type yields an empty list. A mapped fuel type without a
    factor in effect responds 422.

    Args:
        vehicle_fuel_type: Raw vehicle fuel type (e.g. "diesel", "petrol-hybrid")
        reference_date: Date the factors must be effective at (default today)

    Example:
        ```
        GET /api/v1/emission-contexts/petrol-hybrid?reference_date=2024-06-30
        ```
    """
    reference_date = reference_date or date.today()
    contexts = await resolver.resolve(vehicle_fuel_type, reference_date)
    return EmissionContextsResponse(
        vehicle_fuel_type=vehicle_fuel_type,
        reference_date=reference_date,
        contexts=contexts,
    )
