"""
API routers module.
"""
from fleet_emissions.api.calculations import router as calculations_router
from fleet_emissions.api.catalog import router as catalog_router
from fleet_emissions.api.emission_contexts import router as emission_contexts_router
from fleet_emissions.api.health import router as health_router
from fleet_emissions.api.vehicles import router as vehicles_router

__all__ = [
    "calculations_router",
    "catalog_router",
    "emission_contexts_router",
    "health_router",
    "vehicles_router",
]
