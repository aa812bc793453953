"""
Exceptions raised by the emission resolution and calculation services.
"""
from datetime import date
from typing import Optional
from uuid import UUID


class EmissionEngineError(Exception):
    """Base exception for emission engine failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class FactorNotFound(EmissionEngineError):
    """
    No emission factor is in effect for a macro fuel type at a reference date.

    Raised by single lookups only; bulk resolution substitutes a zero factor set.
    """

    def __init__(
        self,
        macro_fuel_type_id: UUID,
        fuel_type: Optional[str],
        reference_date: date,
        macro_fuel_type_name: Optional[str] = None,
    ):
        self.macro_fuel_type_id = macro_fuel_type_id
        self.fuel_type = fuel_type
        self.reference_date = reference_date
        self.macro_fuel_type_name = macro_fuel_type_name

        label = macro_fuel_type_name or str(macro_fuel_type_id)
        super().__init__(
            f"No emission factor for macro fuel type {label} "
            f"(fuel type {fuel_type!r}) effective on or before {reference_date.isoformat()}"
        )


class InsufficientData(EmissionEngineError):
    """
    A vehicle cannot be calculated for a period and should be excluded.

    Raised when fewer than two odometer readings exist in the period, or when
    neither engines nor fuel records identify the fuel type.
    """

    def __init__(self, reason: str, vehicle_id: Optional[UUID] = None):
        self.reason = reason
        self.vehicle_id = vehicle_id
        message = reason if vehicle_id is None else f"Vehicle {vehicle_id}: {reason}"
        super().__init__(message)


class MappingNotFound(EmissionEngineError):
    """No fuel type mapping exists for a vehicle fuel type."""

    def __init__(self, vehicle_fuel_type: str):
        self.vehicle_fuel_type = vehicle_fuel_type
        super().__init__(f"No macro fuel type mapping for fuel type {vehicle_fuel_type!r}")
