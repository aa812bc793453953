"""
SQLAlchemy database models (schemas).
"""
from fleet_emissions.database.schemas.emission_factor import EmissionFactorDBModel
from fleet_emissions.database.schemas.fuel_record import (
    FuelRecordDBModel,
    KmReadingDBModel,
)
from fleet_emissions.database.schemas.fuel_type_mapping import (
    FuelTypeMacroMappingDBModel,
)
from fleet_emissions.database.schemas.gwp_config import GwpConfigDBModel
from fleet_emissions.database.schemas.macro_fuel_type import MacroFuelTypeDBModel
from fleet_emissions.database.schemas.vehicle import EngineDBModel, VehicleDBModel

__all__ = [
    "EmissionFactorDBModel",
    "EngineDBModel",
    "FuelRecordDBModel",
    "FuelTypeMacroMappingDBModel",
    "GwpConfigDBModel",
    "KmReadingDBModel",
    "MacroFuelTypeDBModel",
    "VehicleDBModel",
]
