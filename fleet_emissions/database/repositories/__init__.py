"""
Database repositories for data access layer.

Provides clean abstraction over database operations following repository pattern.
"""
from fleet_emissions.database.repositories.base import BaseRepository
from fleet_emissions.database.repositories.emission_factor import EmissionFactorRepository
from fleet_emissions.database.repositories.fuel_type_mapping import FuelTypeMappingRepository
from fleet_emissions.database.repositories.gwp_config import GwpConfigRepository
from fleet_emissions.database.repositories.macro_fuel_type import MacroFuelTypeRepository
from fleet_emissions.database.repositories.vehicle import VehicleRepository

__all__ = [
    "BaseRepository",
    "EmissionFactorRepository",
    "FuelTypeMappingRepository",
    "GwpConfigRepository",
    "MacroFuelTypeRepository",
    "VehicleRepository",
]
