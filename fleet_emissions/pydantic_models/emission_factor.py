"""
Pydantic models for the emission catalog.

Covers macro fuel types, fuel type mappings, emission factors and GWP configs.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fleet_emissions.utils.constants import MeasurementUnit


class MacroFuelTypePydModel(BaseModel):
    """Model for macro fuel type response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str = Field(..., max_length=100)
    scope: int = Field(..., ge=1, le=2, description="1 = thermal, 2 = electric")
    unit: MeasurementUnit
    sort_order: int = 0
    is_active: bool = True


class FuelTypeMappingPydModel(BaseModel):
    """Model for fuel type mapping response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    vehicle_fuel_type: str = Field(..., max_length=100)
    macro_fuel_type_id: UUID
    scope: int = Field(..., ge=1, le=2)
    description: str = ""
    macro_fuel_type: MacroFuelTypePydModel


class EmissionFactorBase(BaseModel):
    """Base emission factor model."""

    macro_fuel_type_id: UUID = Field(..., description="Macro fuel type the factor belongs to")
    fuel_type: Optional[str] = Field(
        None, max_length=100, description="Vehicle fuel type override; null = category default"
    )
    co2: Decimal = Field(Decimal("0"), ge=0, description="kg CO2 per unit")
    ch4: Decimal = Field(Decimal("0"), ge=0, description="kg CH4 per unit")
    n2o: Decimal = Field(Decimal("0"), ge=0, description="kg N2O per unit")
    hfc: Decimal = Field(Decimal("0"), ge=0, description="kg HFC per unit")
    pfc: Decimal = Field(Decimal("0"), ge=0, description="kg PFC per unit")
    sf6: Decimal = Field(Decimal("0"), ge=0, description="kg SF6 per unit")
    nf3: Decimal = Field(Decimal("0"), ge=0, description="kg NF3 per unit")
    source: str = Field(..., min_length=1, max_length=100, description="Source of emission factor")
    effective_date: date = Field(..., description="Date from which the factor is in effect")


class EmissionFactorPydModel(EmissionFactorBase):
    """Model for emission factor response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime


class PaginatedEmissionFactors(BaseModel):
    """A page of emission factors."""

    data: list[EmissionFactorPydModel]
    page: int
    page_size: int
    total_count: int
    total_pages: int


class GwpConfigPydModel(BaseModel):
    """Model for GWP configuration response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    gas_name: str = Field(..., max_length=10)
    gwp_value: Decimal = Field(..., gt=0)
    source: str = Field(..., max_length=100)
    is_active: bool
