"""
Pydantic models for vehicles, classification and per-vehicle emission reports.
"""
from datetime import date as DateType
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fleet_emissions.pydantic_models.calculation import (
    EmissionDelta,
    VehicleEmissionInputV2,
)
from fleet_emissions.pydantic_models.emission_context import PerGasResult
from fleet_emissions.utils.constants import HYBRID_PAIRINGS


class EngineInfo(BaseModel):
    """Engine fields the classifier reads."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    fuel_type: Optional[str] = None
    co2_g_km: Optional[Decimal] = None


class FuelRecordInfo(BaseModel):
    """Fuel record fields the classifier reads."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    fuel_type: Optional[str] = None


class OdometerReading(BaseModel):
    """A dated odometer value, from a km reading or a fuel record."""

    model_config = ConfigDict(frozen=True)

    date: DateType
    odometer_km: int


class PureFuel(BaseModel):
    """A vehicle accounted under a single fuel type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pure"] = "pure"
    fuel_type: str

    @property
    def effective_fuel_type(self) -> str:
        return self.fuel_type


class HybridFuel(BaseModel):
    """A dual-engine hybrid: a thermal primary fuel plus electricity."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["hybrid"] = "hybrid"
    primary: str
    secondary: str

    @property
    def effective_fuel_type(self) -> str:
        return HYBRID_PAIRINGS.get(self.primary, f"{self.primary}-hybrid")


FuelClass = Annotated[Union[PureFuel, HybridFuel], Field(discriminator="kind")]


class VehicleClassification(BaseModel):
    """Effective fuel type and theoretical CO2/km of a vehicle."""

    model_config = ConfigDict(frozen=True)

    fuel_class: FuelClass
    co2_g_km: Decimal = Field(..., description="gCO2/km used for the theoretical figure")

    @property
    def effective_fuel_type(self) -> str:
        return self.fuel_class.effective_fuel_type


class VehicleClassificationResponse(BaseModel):
    """Response model for the classification endpoint."""

    vehicle_id: UUID
    effective_fuel_type: str
    co2_g_km: Decimal
    fuel_class: FuelClass


class VehicleEmissionData(BaseModel):
    """Everything needed to calculate one vehicle's emissions for a period."""

    model_config = ConfigDict(frozen=True)

    vehicle_id: UUID
    fuel_type: str
    reference_date: DateType
    fuel_litres: Decimal
    fuel_kwh: Decimal
    input: VehicleEmissionInputV2


class VehicleEmissionReport(BaseModel):
    """Calculated emissions of one vehicle for one period."""

    vehicle_id: UUID
    fuel_type: str
    period_start: DateType
    period_end: DateType
    reference_date: DateType
    km_travelled: Decimal
    fuel_litres: Decimal
    fuel_kwh: Decimal
    co2_g_km: Decimal
    theoretical: Decimal
    real: Decimal
    real_per_gas: PerGasResult
    real_by_scope: list[Decimal]
    delta: EmissionDelta


class ExcludedVehicle(BaseModel):
    """A vehicle left out of a period's results, with the reason."""

    vehicle_id: UUID
    reason: str


class FleetEmissionRequest(BaseModel):
    """Request model for a fleet batch calculation."""

    vehicle_ids: list[UUID] = Field(..., min_length=1)
    period_start: DateType
    period_end: DateType

    @model_validator(mode="after")
    def check_period(self):
        if self.period_end < self.period_start:
            raise ValueError("period_end must not be before period_start")
        return self


class FuelTypeEmissionSummary(BaseModel):
    """Totals for all calculated vehicles of one effective fuel type."""

    fuel_type: str
    vehicle_count: int
    km_travelled: Decimal
    theoretical: Decimal
    real: Decimal
    delta: EmissionDelta


class FleetEmissionSummary(BaseModel):
    """Fleet-wide totals."""

    vehicle_count: int
    km_travelled: Decimal
    theoretical: Decimal
    real: Decimal
    real_per_gas: PerGasResult
    delta: EmissionDelta
    by_fuel_type: list[FuelTypeEmissionSummary]


class FleetEmissionStatistics(BaseModel):
    total_requested: int
    total_calculated: int
    total_excluded: int


class FleetEmissionReport(BaseModel):
    """Result of a fleet batch calculation."""

    period_start: DateType
    period_end: DateType
    reference_date: DateType
    results: list[VehicleEmissionReport]
    excluded: list[ExcludedVehicle]
    summary: FleetEmissionSummary
    statistics: FleetEmissionStatistics
