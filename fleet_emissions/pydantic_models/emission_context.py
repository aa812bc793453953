"""
Pydantic models for resolved emission contexts.

An EmissionContext bundles everything the calculator needs for one scope of a
vehicle fuel type: the macro fuel type descriptor, the seven per-gas factors
in effect at the reference date and the active GWP values. Contexts are
frozen; they live for one calculation call or one batch window.
"""
from datetime import date
from decimal import Decimal
from typing import Any, Mapping
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fleet_emissions.utils.constants import KYOTO_GASES


class GasValues(BaseModel):
    """One Decimal value per Kyoto gas."""

    model_config = ConfigDict(frozen=True)

    co2: Decimal = Decimal("0")
    ch4: Decimal = Decimal("0")
    n2o: Decimal = Decimal("0")
    hfc: Decimal = Decimal("0")
    pfc: Decimal = Decimal("0")
    sf6: Decimal = Decimal("0")
    nf3: Decimal = Decimal("0")

    @classmethod
    def zero(cls):
        return cls()

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]):
        """Build from a gas -> value mapping; missing or None gases are zero."""
        return cls(
            **{
                gas: values[gas]
                for gas in KYOTO_GASES
                if values.get(gas) is not None
            }
        )

    @classmethod
    def from_row(cls, row: Any):
        """Build from any object exposing one attribute per gas (e.g. an ORM row)."""
        return cls.from_mapping({gas: getattr(row, gas, None) for gas in KYOTO_GASES})

    def get(self, gas: str) -> Decimal:
        return getattr(self, gas)

    def items(self):
        return [(gas, self.get(gas)) for gas in KYOTO_GASES]


class GasEmissionFactors(GasValues):
    """kg of each gas emitted per unit of fuel."""


class GwpValues(GasValues):
    """Global-warming potential multiplier per gas (kgCO2e per kg of gas)."""


class PerGasResult(GasValues):
    """kgCO2e attributed to each gas."""


class MacroFuelTypeDescriptor(BaseModel):
    """The parts of a macro fuel type the calculator depends on."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: UUID
    name: str
    scope: int = Field(..., ge=1, le=2, description="1 = thermal, 2 = electric")
    unit: str


class EmissionContext(BaseModel):
    """Fully resolved emission inputs for one scope of a vehicle fuel type."""

    model_config = ConfigDict(frozen=True)

    macro_fuel_type: MacroFuelTypeDescriptor
    gas_factors: GasEmissionFactors
    gwp_values: GwpValues

    @property
    def scope(self) -> int:
        return self.macro_fuel_type.scope


class EmissionContextsResponse(BaseModel):
    """Response model for a single-fuel-type resolution."""

    vehicle_fuel_type: str
    reference_date: date
    contexts: list[EmissionContext]


class BulkEmissionContextsResponse(BaseModel):
    """Response model for a bulk resolution over every mapped fuel type."""

    reference_date: date
    contexts: dict[str, list[EmissionContext]]
