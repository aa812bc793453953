"""
Service tests for number normalization.
"""

from decimal import Decimal

import pytest

from fleet_emissions.services.calculators.unit_converter import UnitConverter, to_decimal


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1,234.56", Decimal("1234.56")),
        (" 42 ", Decimal("42")),
        (2.5, Decimal("2.5")),
        (7, Decimal("7")),
        (Decimal("0.00086"), Decimal("0.00086")),
    ],
)
def test_normalize_number(value, expected):
    assert UnitConverter.normalize_number(value) == expected


@pytest.mark.parametrize(
    "value",
    [None, "", "abc", float("nan"), float("inf"), Decimal("NaN"), Decimal("-Infinity"), True],
)
def test_unrepresentable_values_become_zero(value):
    assert to_decimal(value) == Decimal("0")


def test_grams_to_kg():
    assert UnitConverter.grams_to_kg(1500) == Decimal("1.5")
    assert UnitConverter.grams_to_kg(None) == Decimal("0")
