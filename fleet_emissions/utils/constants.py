"""
Application constants.
"""
from decimal import Decimal
from enum import Enum


class ConfigFile:
    """Configuration file paths."""
    PRODUCTION = "production.toml"
    DEVELOPMENT = "development.toml"
    TEST = "test.toml"


class Scope:
    """GHG Protocol Scope constants used for fleet fuels."""
    SCOPE_1 = 1  # Thermal (combusted fuel)
    SCOPE_2 = 2  # Electric (grid energy)


class ScopeEnum(int, Enum):
    """Emission scope enum for API parameters."""
    SCOPE_1 = 1
    SCOPE_2 = 2


class FuelType:
    """Vehicle fuel type strings recognised by the hybrid classifier."""
    PETROL = "petrol"
    DIESEL = "diesel"
    ELECTRIC = "electric"
    PETROL_HYBRID = "petrol-hybrid"
    DIESEL_HYBRID = "diesel-hybrid"
    UNKNOWN = "unknown"


# Thermal fuel -> composite hybrid label when paired with an electric engine
HYBRID_PAIRINGS = {
    FuelType.PETROL: FuelType.PETROL_HYBRID,
    FuelType.DIESEL: FuelType.DIESEL_HYBRID,
}


class MeasurementUnit(str, Enum):
    """Units a macro fuel type can be measured in."""
    LITRE = "L"
    KILOGRAM = "kg"
    KILOWATT_HOUR = "kWh"
    NORMAL_CUBIC_METRE = "Nm3"
    UNIT = "UA"


class ReferenceDateStrategy(str, Enum):
    """How the reference date of a reporting period is chosen."""
    MEDIAN = "median"
    END = "end"


# Kyoto Protocol gases, in canonical order
KYOTO_GASES = ("co2", "ch4", "n2o", "hfc", "pfc", "sf6", "nf3")

# Gas names as stored in gwp_configs.gas_name
KYOTO_GAS_DB_NAMES = {gas: gas.upper() for gas in KYOTO_GASES}

# IPCC AR5 100-year GWP values
DEFAULT_GWP_AR5 = {
    "co2": Decimal("1"),
    "ch4": Decimal("28"),
    "n2o": Decimal("265"),
    "hfc": Decimal("1300"),
    "pfc": Decimal("6630"),
    "sf6": Decimal("23500"),
    "nf3": Decimal("16100"),
}


class SortOrderEnum(str, Enum):
    """Sort order enum for API parameters."""
    ASC = "asc"
    DESC = "desc"


# Unit conversion constants
GRAMS_PER_KG = Decimal("1000")
