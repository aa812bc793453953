"""
Emission arithmetic: theoretical, real (single and multi scope) and delta.

Every function here is pure. Inputs are normalized through UnitConverter, so
None, NaN and infinity count as zero and no function raises for bad numbers.
Externally visible results are rounded half-up to two decimals; intermediate
sums are kept at full precision.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Iterable

from fleet_emissions.pydantic_models.calculation import (
    EmissionDelta,
    ScopedEmissionInput,
    ScopedEmissionResult,
    VehicleEmissionInputV2,
    VehicleEmissionResult,
    VehicleEmissionResultV2,
)
from fleet_emissions.pydantic_models.emission_context import PerGasResult
from fleet_emissions.utils.constants import KYOTO_GASES

from .unit_converter import ZERO, UnitConverter, to_decimal

TWO_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")


def round2(value: Any) -> Decimal:
    """
    Round to two decimals, half-up.

    Example:
        >>> round2(Decimal("246.325"))
        Decimal('246.33')
    """
    value = to_decimal(value)
    with localcontext() as ctx:
        # quantize needs every integer digit plus two decimals
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def calculate_theoretical_emissions(co2_g_km: Any, km_travelled: Any) -> Decimal:
    """
    Theoretical emissions in kg from declared gCO2/km and distance.

    Args:
        co2_g_km: Manufacturer CO2 in grams per km
        km_travelled: Distance travelled in km

    Returns:
        kgCO2, rounded to 2 decimals

    Example:
        >>> calculate_theoretical_emissions(150, 10000)
        Decimal('1500.00')
    """
    co2_g_km = to_decimal(co2_g_km)
    km_travelled = to_decimal(km_travelled)
    if co2_g_km == 0 or km_travelled == 0:
        return round2(ZERO)
    return round2(UnitConverter.grams_to_kg(co2_g_km * km_travelled))


def calculate_real_emissions(quantity: Any, co2e_per_unit: Any) -> Decimal:
    """
    Real emissions in kgCO2e from one quantity and one aggregate factor.

    Args:
        quantity: Fuel consumed (litres, kWh, ...)
        co2e_per_unit: kgCO2e per unit of quantity

    Returns:
        kgCO2e, rounded to 2 decimals
    """
    quantity = to_decimal(quantity)
    co2e_per_unit = to_decimal(co2e_per_unit)
    if quantity == 0 or co2e_per_unit == 0:
        return round2(ZERO)
    return round2(quantity * co2e_per_unit)


def calculate_delta(theoretical: Any, real: Any) -> EmissionDelta:
    """
    Difference between real and theoretical emissions.

    The percentage is relative to theoretical and is 0 when theoretical is 0.

    Example:
        >>> calculate_delta(1500, 1320)
        EmissionDelta(absolute=Decimal('-180.00'), percentage=Decimal('-12.00'))
    """
    theoretical = to_decimal(theoretical)
    real = to_decimal(real)
    difference = real - theoretical

    if theoretical == 0:
        percentage = ZERO
    else:
        percentage = difference / theoretical * HUNDRED

    return EmissionDelta(absolute=round2(difference), percentage=round2(percentage))


def calculate_vehicle_emissions(
    co2_g_km: Any,
    km_travelled: Any,
    fuel_litres: Any,
    emission_factor_kg_co2e_per_litre: Any,
) -> VehicleEmissionResult:
    """
    Theoretical vs real emissions using a single kgCO2e/litre factor.

    Args:
        co2_g_km: Manufacturer CO2 in grams per km
        km_travelled: Distance travelled in km
        fuel_litres: Litres consumed in the period
        emission_factor_kg_co2e_per_litre: Aggregate factor for the fuel

    Returns:
        VehicleEmissionResult with theoretical, real and delta
    """
    theoretical = calculate_theoretical_emissions(co2_g_km, km_travelled)
    real = calculate_real_emissions(fuel_litres, emission_factor_kg_co2e_per_litre)
    return VehicleEmissionResult(
        theoretical=theoretical,
        real=real,
        delta=calculate_delta(theoretical, real),
    )


def calculate_gas_co2e(quantity: Any, gas_factor: Any, gwp: Any) -> Decimal:
    """kgCO2e contributed by one gas: quantity * factor * GWP, unrounded."""
    return to_decimal(quantity) * to_decimal(gas_factor) * to_decimal(gwp)


def _scope_per_gas(scope: ScopedEmissionInput) -> dict[str, Decimal]:
    return {
        gas: calculate_gas_co2e(
            scope.quantity, scope.gas_factors.get(gas), scope.gwp_values.get(gas)
        )
        for gas in KYOTO_GASES
    }


def _sum_per_gas(scopes: Iterable[ScopedEmissionInput]) -> dict[str, Decimal]:
    totals = {gas: ZERO for gas in KYOTO_GASES}
    for scope in scopes:
        for gas, co2e in _scope_per_gas(scope).items():
            totals[gas] += co2e
    return totals


def calculate_real_multi_scope(scopes: Iterable[ScopedEmissionInput]) -> Decimal:
    """
    Real emissions summed over gases and scopes, rounded once at the end.

    Args:
        scopes: Consumption per scope with its gas factors and GWP values

    Returns:
        kgCO2e, rounded to 2 decimals
    """
    return round2(sum(_sum_per_gas(scopes).values(), ZERO))


def calculate_scoped_emissions(
    scopes: Iterable[ScopedEmissionInput],
) -> ScopedEmissionResult:
    """
    Real emissions with a per-gas breakdown.

    The total is rounded from the unrounded sum, so it can differ by a cent
    from the sum of the rounded per-gas values.

    Example:
        >>> scope = ScopedEmissionInput(
        ...     quantity=Decimal("100"),
        ...     gas_factors=GasEmissionFactors(co2=Decimal("2.3")),
        ...     gwp_values=GwpValues(co2=Decimal("1")),
        ... )
        >>> calculate_scoped_emissions([scope]).total_co2e
        Decimal('230.00')
    """
    per_gas = _sum_per_gas(list(scopes))
    return ScopedEmissionResult(
        total_co2e=round2(sum(per_gas.values(), ZERO)),
        per_gas=PerGasResult(**{gas: round2(value) for gas, value in per_gas.items()}),
    )


def calculate_vehicle_emissions_v2(
    data: VehicleEmissionInputV2,
) -> VehicleEmissionResultV2:
    """
    Theoretical vs real emissions over every scope of a vehicle.

    Real emissions are the multi-scope total; ``real_by_scope`` keeps one
    rounded figure per input scope, in input order.

    Args:
        data: Declared CO2/km, distance and the per-scope consumption

    Returns:
        VehicleEmissionResultV2
    """
    theoretical = calculate_theoretical_emissions(data.co2_g_km, data.km_travelled)
    scoped = calculate_scoped_emissions(data.scopes)
    real_by_scope = [
        round2(sum(_scope_per_gas(scope).values(), ZERO)) for scope in data.scopes
    ]
    return VehicleEmissionResultV2(
        theoretical=theoretical,
        real=scoped.total_co2e,
        real_per_gas=scoped.per_gas,
        real_by_scope=real_by_scope,
        delta=calculate_delta(theoretical, scoped.total_co2e),
    )
