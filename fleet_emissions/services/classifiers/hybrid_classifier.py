"""
Hybrid vehicle classification.

Decides, once per vehicle, which fuel type label drives every downstream
lookup and which gCO2/km figure feeds the theoretical calculation. The result
is a closed FuelClass variant (PureFuel or HybridFuel) so callers never need
to re-check hybrid flags or engine layouts.
"""

import logging
from collections import Counter
from decimal import Decimal
from typing import Any, Iterable, Optional, Sequence

from fleet_emissions.pydantic_models.vehicle import (
    EngineInfo,
    FuelClass,
    FuelRecordInfo,
    HybridFuel,
    PureFuel,
    VehicleClassification,
)
from fleet_emissions.services.calculators.unit_converter import ZERO, to_decimal
from fleet_emissions.utils.constants import HYBRID_PAIRINGS, FuelType

logger = logging.getLogger(__name__)


def _normalize(fuel_type: Optional[str]) -> str:
    # comparison key only; labels keep the caller's spelling
    return (fuel_type or "").strip().lower()


def _as_engines(engines: Iterable[Any]) -> list[EngineInfo]:
    return [
        engine if isinstance(engine, EngineInfo) else EngineInfo.model_validate(engine)
        for engine in engines
    ]


def _as_fuel_records(fuel_records: Iterable[Any]) -> list[FuelRecordInfo]:
    return [
        record if isinstance(record, FuelRecordInfo) else FuelRecordInfo.model_validate(record)
        for record in fuel_records
    ]


def _hybrid_pairing(engines: Sequence[EngineInfo]) -> Optional[HybridFuel]:
    fuel_types = {_normalize(engine.fuel_type) for engine in engines}
    if FuelType.ELECTRIC not in fuel_types:
        return None
    for thermal in HYBRID_PAIRINGS:
        if thermal in fuel_types:
            return HybridFuel(primary=thermal, secondary=FuelType.ELECTRIC)
    return None


def _most_common_fuel_type(fuel_records: Sequence[FuelRecordInfo]) -> Optional[str]:
    fuel_types = [record.fuel_type for record in fuel_records if _normalize(record.fuel_type)]
    if not fuel_types:
        return None
    # Counter keeps insertion order, so ties go to the type seen first
    return Counter(fuel_types).most_common(1)[0][0]


def classify_fuel(
    is_hybrid: bool,
    engines: Iterable[Any],
    fuel_records: Iterable[Any] = (),
) -> FuelClass:
    """
    Determine the fuel class of a vehicle.

    A vehicle flagged hybrid with at least two engines pairing an electric
    engine with a petrol or diesel one is a HybridFuel. Anything else is a
    PureFuel whose type is, in order of preference, the most frequent fuel
    type among its fuel records, the first engine's fuel type, or "unknown".

    Args:
        is_hybrid: Vehicle hybrid flag
        engines: Engine records (objects exposing fuel_type and co2_g_km)
        fuel_records: Fuel records of the period (objects exposing fuel_type)

    Returns:
        PureFuel or HybridFuel
    """
    engines = _as_engines(engines)

    if is_hybrid and len(engines) >= 2:
        hybrid = _hybrid_pairing(engines)
        if hybrid is not None:
            return hybrid
        logger.debug(
            f"Hybrid flag set but engines {[e.fuel_type for e in engines]} "
            f"do not form a known pairing"
        )

    fuel_type = _most_common_fuel_type(_as_fuel_records(fuel_records))
    if fuel_type is None:
        engine_types = [e.fuel_type for e in engines if _normalize(e.fuel_type)]
        fuel_type = engine_types[0] if engine_types else FuelType.UNKNOWN
    return PureFuel(fuel_type=fuel_type)


def get_effective_fuel_type(
    is_hybrid: bool,
    engines: Iterable[Any],
    fuel_records: Iterable[Any] = (),
) -> str:
    """Effective fuel type label used for mapping and factor lookups."""
    return classify_fuel(is_hybrid, engines, fuel_records).effective_fuel_type


def get_combined_co2_g_km(is_hybrid: bool, engines: Iterable[Any]) -> Decimal:
    """
    gCO2/km used for the theoretical calculation.

    Vehicles flagged hybrid use their first non-electric engine's figure,
    which already covers the whole drivetrain; the electric engine is never
    summed in. Everything else uses the first engine. Missing values count
    as zero.
    """
    engines = _as_engines(engines)
    if not engines:
        return ZERO

    if is_hybrid:
        for engine in engines:
            if _normalize(engine.fuel_type) != FuelType.ELECTRIC:
                return to_decimal(engine.co2_g_km)

    return to_decimal(engines[0].co2_g_km)


def classify_vehicle(
    vehicle: Any,
    engines: Iterable[Any],
    fuel_records: Iterable[Any] = (),
) -> VehicleClassification:
    """
    Classify a vehicle for emission calculations.

    Args:
        vehicle: Object exposing ``is_hybrid``
        engines: Engine records of the vehicle
        fuel_records: Fuel records of the period

    Returns:
        VehicleClassification with the fuel class and the gCO2/km to use
    """
    engines = _as_engines(engines)
    is_hybrid = bool(getattr(vehicle, "is_hybrid", False))
    return VehicleClassification(
        fuel_class=classify_fuel(is_hybrid, engines, fuel_records),
        co2_g_km=get_combined_co2_g_km(is_hybrid, engines),
    )
