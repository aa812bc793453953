"""
Service tests for the in-memory factor index and lookup strategies.
"""

import uuid
from types import SimpleNamespace

from fleet_emissions.services.resolvers.factor_lookup import (
    DEFAULT_LOOKUP_STRATEGIES,
    MISSING,
    CategoryDefaultLookup,
    FactorIndex,
    SpecificOverrideLookup,
)

PETROL_ID = uuid.uuid4()
DIESEL_ID = uuid.uuid4()


def factor(macro_fuel_type_id, fuel_type=None, label=""):
    return SimpleNamespace(
        macro_fuel_type_id=macro_fuel_type_id, fuel_type=fuel_type, label=label
    )


def test_first_row_per_key_wins():
    """Rows arrive newest first, so older rows for the same key are ignored."""
    index = FactorIndex.from_factors(
        [
            factor(PETROL_ID, label="2025"),
            factor(PETROL_ID, label="2024"),
            factor(PETROL_ID, "petrol-hybrid", label="override"),
        ]
    )

    assert len(index) == 2
    assert (PETROL_ID, None) in index
    assert index.lookup(PETROL_ID, "petrol").label == "2025"


def test_specific_override_beats_default():
    index = FactorIndex.from_factors(
        [factor(PETROL_ID, label="default"), factor(PETROL_ID, "petrol-hybrid", label="override")]
    )

    assert index.lookup(PETROL_ID, "petrol-hybrid").label == "override"
    assert index.lookup(PETROL_ID, "petrol").label == "default"


def test_no_fuel_type_only_matches_default():
    index = FactorIndex.from_factors([factor(PETROL_ID, "petrol-hybrid")])

    assert index.lookup(PETROL_ID, None) is None


def test_lookup_is_scoped_to_macro_fuel_type():
    index = FactorIndex.from_factors([factor(PETROL_ID, label="petrol")])

    assert index.lookup(DIESEL_ID, "diesel") is None


def test_custom_strategy_list():
    """Dropping the default tier disables the category fallback."""
    index = FactorIndex.from_factors([factor(PETROL_ID)])

    assert index.lookup(PETROL_ID, "petrol", [SpecificOverrideLookup()]) is None
    assert index.lookup(PETROL_ID, "petrol", [CategoryDefaultLookup()]) is not None


def test_strategy_override_keys():
    specific, default = DEFAULT_LOOKUP_STRATEGIES

    assert specific.override_key("diesel") == "diesel"
    assert specific.override_key(None) is MISSING
    assert specific.override_key("") is MISSING
    assert default.override_key("diesel") is None
