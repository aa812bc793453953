"""
Unit conversion utilities for emissions calculations.

Stateless helpers that turn loosely typed quantities into Decimals the
calculator can work with. Nothing here raises for bad numeric input; values
that cannot be represented (None, NaN, infinity, garbage strings) become zero.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from fleet_emissions.utils.constants import GRAMS_PER_KG

ZERO = Decimal("0")


class UnitConverter:
    """
    Unit conversion service.

    Provides methods to normalize quantities and convert between the units
    used in emissions calculations.
    """

    @staticmethod
    def normalize_number(value: Any) -> Decimal:
        """
        Normalize a number value to a finite Decimal.

        Handles string inputs with thousands separators, floats, ints and
        existing Decimals.

        Args:
            value: Number value in various formats

        Returns:
            Normalized Decimal value, zero when the input is missing or not finite

        Example:
            >>> UnitConverter.normalize_number("1,234.56")
            Decimal('1234.56')
            >>> UnitConverter.normalize_number(float("nan"))
            Decimal('0')
        """

        if value is None or isinstance(value, bool):
            return ZERO

        if isinstance(value, str):
            # Remove commas from string numbers
            value = value.replace(",", "").strip()
            if not value:
                return ZERO

        try:
            number = value if isinstance(value, Decimal) else Decimal(str(value))
        except (InvalidOperation, ValueError):
            return ZERO

        if not number.is_finite():
            return ZERO
        return number

    @staticmethod
    def grams_to_kg(grams: Any) -> Decimal:
        """
        Convert grams to kilograms.

        Args:
            grams: Mass in grams

        Returns:
            Mass in kilograms as Decimal
        """

        return UnitConverter.normalize_number(grams) / GRAMS_PER_KG


def to_decimal(value: Any) -> Decimal:
    """Shorthand for ``UnitConverter.normalize_number``."""
    return UnitConverter.normalize_number(value)
