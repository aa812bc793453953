"""
Service tests for the emission calculator.
"""

from decimal import Decimal

import pytest

from fleet_emissions.pydantic_models.calculation import (
    ScopedEmissionInput,
    VehicleEmissionInputV2,
)
from fleet_emissions.pydantic_models.emission_context import GasEmissionFactors, GwpValues
from fleet_emissions.services.calculators.emission_calculator import (
    calculate_delta,
    calculate_real_emissions,
    calculate_real_multi_scope,
    calculate_scoped_emissions,
    calculate_theoretical_emissions,
    calculate_vehicle_emissions,
    calculate_vehicle_emissions_v2,
    round2,
)

AR5_GWP = GwpValues(co2=Decimal("1"), ch4=Decimal("28"), n2o=Decimal("265"))


def petrol_scope(quantity="100") -> ScopedEmissionInput:
    return ScopedEmissionInput(
        quantity=Decimal(quantity),
        gas_factors=GasEmissionFactors(
            co2=Decimal("2.3"), ch4=Decimal("0.001"), n2o=Decimal("0.0005")
        ),
        gwp_values=AR5_GWP,
    )


def electricity_scope(quantity="50") -> ScopedEmissionInput:
    return ScopedEmissionInput(
        quantity=Decimal(quantity),
        gas_factors=GasEmissionFactors(co2=Decimal("0.25")),
        gwp_values=AR5_GWP,
    )


def test_theoretical_emissions():
    """150 g/km over 10000 km is 1500 kg."""
    assert calculate_theoretical_emissions(150, 10000) == Decimal("1500.00")


def test_real_emissions_and_delta():
    """Single-factor real emissions and the delta against theoretical."""
    real = calculate_real_emissions(500, Decimal("2.64"))
    assert real == Decimal("1320.00")

    delta = calculate_delta(Decimal("1500"), real)
    assert delta.absolute == Decimal("-180.00")
    assert delta.percentage == Decimal("-12.00")


def test_electric_vehicle_is_all_zero():
    """Zero declared CO2 and zero litres give zero everywhere, never an error."""
    result = calculate_vehicle_emissions(0, 10000, 0, 0)

    assert result.theoretical == Decimal("0")
    assert result.real == Decimal("0")
    assert result.delta.absolute == Decimal("0")
    assert result.delta.percentage == Decimal("0")


def test_delta_percentage_is_zero_when_theoretical_is_zero():
    """A zero denominator yields 0 % while the absolute delta is kept."""
    delta = calculate_delta(0, Decimal("12.50"))

    assert delta.absolute == Decimal("12.50")
    assert delta.percentage == Decimal("0.00")


def test_multi_gas_total():
    """100 L at co2 2.3, ch4 0.001, n2o 0.0005 with AR5 GWP."""
    # 100 * (2.3 + 0.028 + 0.1325) = 246.05
    result = calculate_scoped_emissions([petrol_scope()])

    assert result.total_co2e == Decimal("246.05")
    assert result.per_gas.co2 == Decimal("230.00")
    assert result.per_gas.ch4 == Decimal("2.80")
    assert result.per_gas.n2o == Decimal("13.25")
    assert result.per_gas.hfc == Decimal("0")


def test_multi_scope_sums_every_scope():
    """Hybrid: litres in scope 1 and kWh in scope 2 add up."""
    scopes = [petrol_scope(), electricity_scope()]

    assert calculate_real_multi_scope(scopes) == Decimal("258.55")


def test_vehicle_emissions_v2_breakdown():
    """Per-scope figures follow input order; the total matches the scoped total."""
    data = VehicleEmissionInputV2(
        co2_g_km=Decimal("102"),
        km_travelled=Decimal("2000"),
        scopes=[petrol_scope(), electricity_scope()],
    )

    result = calculate_vehicle_emissions_v2(data)

    assert result.theoretical == Decimal("204.00")
    assert result.real == Decimal("258.55")
    assert result.real_by_scope == [Decimal("246.05"), Decimal("12.50")]
    assert result.real_per_gas.co2 == Decimal("242.50")
    assert result.delta.absolute == Decimal("54.55")
    assert result.delta.percentage == Decimal("26.74")


def test_vehicle_emissions_v2_without_scopes():
    """An unmapped fuel type contributes no scopes and zero real emissions."""
    data = VehicleEmissionInputV2(co2_g_km=Decimal("120"), km_travelled=Decimal("1000"))

    result = calculate_vehicle_emissions_v2(data)

    assert result.theoretical == Decimal("120.00")
    assert result.real == Decimal("0")
    assert result.real_by_scope == []
    assert result.delta.percentage == Decimal("-100.00")


def test_calculations_are_deterministic():
    """Same inputs, same outputs."""
    data = VehicleEmissionInputV2(
        co2_g_km=Decimal("118"),
        km_travelled=Decimal("1980"),
        scopes=[petrol_scope("143.85")],
    )

    assert calculate_vehicle_emissions_v2(data) == calculate_vehicle_emissions_v2(data)


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("0.005"), Decimal("0.01")),
        (Decimal("-0.005"), Decimal("-0.01")),
        (Decimal("2.675"), Decimal("2.68")),
        (Decimal("246.325"), Decimal("246.33")),
        (Decimal("1.004"), Decimal("1.00")),
    ],
)
def test_round2_half_up(value, expected):
    """Rounding is half-up on the decimal value, not banker's rounding."""
    assert round2(value) == expected


@pytest.mark.parametrize("bad_value", [None, float("nan"), float("inf"), "not a number"])
def test_bad_numbers_count_as_zero(bad_value):
    """Missing or non-finite inputs never raise."""
    assert calculate_theoretical_emissions(bad_value, 10000) == Decimal("0")
    assert calculate_real_emissions(500, bad_value) == Decimal("0")
    assert calculate_delta(bad_value, bad_value).percentage == Decimal("0")


def test_very_large_values_are_rounded_without_error():
    """Rounding keeps working past the default 28-digit decimal precision."""
    theoretical = calculate_theoretical_emissions(Decimal("1e15"), Decimal("1e15"))

    assert theoretical == Decimal("1e27")
    assert theoretical.as_tuple().exponent == -2
    assert round2(Decimal("123456789012345678901234567890.125")) == Decimal(
        "123456789012345678901234567890.13"
    )
    assert calculate_delta(Decimal("0"), theoretical).absolute == Decimal("1e27")
