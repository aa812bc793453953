"""
Pydantic models for emission calculations.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from fleet_emissions.pydantic_models.emission_context import (
    GasEmissionFactors,
    GwpValues,
    PerGasResult,
)


class EmissionDelta(BaseModel):
    """Difference between real and theoretical emissions."""

    model_config = ConfigDict(frozen=True)

    absolute: Decimal = Field(
        ...,
        description="real - theoretical, kgCO2e (positive = real is worse)",
        examples=[Decimal("-180.00")],
    )
    percentage: Decimal = Field(
        ...,
        description="(real - theoretical) / theoretical * 100; 0 when theoretical is 0",
        examples=[Decimal("-12.00")],
    )


class VehicleEmissionInput(BaseModel):
    """Request model for the single-factor calculation."""

    co2_g_km: Decimal = Field(Decimal("0"), ge=0, description="Manufacturer gCO2/km", examples=[Decimal("150")])
    km_travelled: Decimal = Field(Decimal("0"), ge=0, description="km driven in the period", examples=[Decimal("10000")])
    fuel_litres: Decimal = Field(Decimal("0"), ge=0, description="Litres refuelled in the period", examples=[Decimal("500")])
    emission_factor_kg_co2e_per_litre: Decimal = Field(
        Decimal("0"), ge=0, description="kgCO2e per litre", examples=[Decimal("2.64")]
    )


class VehicleEmissionResult(BaseModel):
    """Theoretical vs real emissions of one vehicle for one period."""

    model_config = ConfigDict(frozen=True)

    theoretical: Decimal = Field(..., description="kgCO2e from co2 g/km and distance")
    real: Decimal = Field(..., description="kgCO2e from fuel consumed")
    delta: EmissionDelta


class ScopedEmissionInput(BaseModel):
    """Consumption of one scope with the factors and GWP values to apply."""

    model_config = ConfigDict(frozen=True)

    quantity: Decimal = Field(
        Decimal("0"), ge=0, description="Litres (scope 1) or kWh (scope 2)"
    )
    gas_factors: GasEmissionFactors = Field(default_factory=GasEmissionFactors)
    gwp_values: GwpValues = Field(default_factory=GwpValues)


class ScopedEmissionResult(BaseModel):
    """Real emissions for a set of scopes, total and per gas."""

    model_config = ConfigDict(frozen=True)

    total_co2e: Decimal = Field(..., description="kgCO2e across all gases and scopes")
    per_gas: PerGasResult


class ScopedEmissionRequest(BaseModel):
    """Request model for the multi-gas, multi-scope calculation."""

    scopes: list[ScopedEmissionInput] = Field(
        ..., description="One entry for pure fuels, two for hybrids"
    )


class VehicleEmissionInputV2(BaseModel):
    """Inputs of the multi-scope vehicle calculation."""

    model_config = ConfigDict(frozen=True)

    co2_g_km: Decimal = Decimal("0")
    km_travelled: Decimal = Decimal("0")
    scopes: list[ScopedEmissionInput] = Field(default_factory=list)


class VehicleEmissionResultV2(BaseModel):
    """Theoretical vs real emissions with per-gas and per-scope breakdowns."""

    model_config = ConfigDict(frozen=True)

    theoretical: Decimal
    real: Decimal
    real_per_gas: PerGasResult
    real_by_scope: list[Decimal] = Field(
        ..., description="kgCO2e per scope, in the order the scopes were given"
    )
    delta: EmissionDelta
