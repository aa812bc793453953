"""
Service tests for single and bulk emission context resolution.
"""

import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from fleet_emissions.pydantic_models.emission_context import GasEmissionFactors, GwpValues
from fleet_emissions.services.calculators.emission_calculator import (
    calculate_real_multi_scope,
)
from fleet_emissions.services.exceptions import FactorNotFound
from fleet_emissions.services.loaders.vehicle_emission_loader import build_scopes
from fleet_emissions.services.resolvers.emission_context_resolver import (
    EmissionContextResolver,
    resolve_emission_contexts,
    resolve_emission_contexts_bulk,
)
from fleet_emissions.test.factory.catalog import create_catalog
from fleet_emissions.test.factory.emission_factor import EmissionFactorFactory


@pytest.mark.asyncio
async def test_resolve_pure_fuel(test_db_session):
    """A pure fuel resolves to one scope 1 context."""
    catalog = await create_catalog()
    resolver = EmissionContextResolver(test_db_session)

    contexts = await resolver.resolve("petrol", date(2024, 6, 30))

    assert len(contexts) == 1
    context = contexts[0]
    assert context.macro_fuel_type.id == catalog.petrol.id
    assert context.scope == 1
    assert context.gas_factors.co2 == Decimal("2.3")
    assert context.gas_factors.n2o == Decimal("0.0005")
    assert context.gwp_values.ch4 == Decimal("28")
    assert context.gwp_values.n2o == Decimal("265")


@pytest.mark.asyncio
async def test_resolve_hybrid_returns_both_scopes_in_order(test_db_session):
    catalog = await create_catalog()
    resolver = EmissionContextResolver(test_db_session)

    contexts = await resolver.resolve("petrol-hybrid", date(2024, 6, 30))

    assert [c.scope for c in contexts] == [1, 2]
    assert contexts[0].macro_fuel_type.id == catalog.petrol.id
    assert contexts[1].macro_fuel_type.id == catalog.electricity.id
    assert contexts[1].gas_factors.co2 == Decimal("0.25")


@pytest.mark.asyncio
async def test_resolve_accepts_datetime(test_db_session):
    await create_catalog()
    resolver = EmissionContextResolver(test_db_session)

    by_datetime = await resolver.resolve("diesel", datetime(2024, 6, 30, 18, 45))
    by_date = await resolver.resolve("diesel", date(2024, 6, 30))

    assert by_datetime == by_date


@pytest.mark.asyncio
async def test_unmapped_fuel_type_resolves_to_nothing(test_db_session):
    """No mapping means no contexts, and downstream real emissions of 0."""
    await create_catalog()
    resolver = EmissionContextResolver(test_db_session)

    contexts = await resolver.resolve("unmapped-fuel", date(2024, 6, 30))

    assert contexts == []
    scopes = build_scopes(contexts, Decimal("500"), Decimal("0"))
    assert calculate_real_multi_scope(scopes) == Decimal("0")


@pytest.mark.asyncio
async def test_specific_override_beats_category_default(test_db_session):
    catalog = await create_catalog()
    await EmissionFactorFactory(
        macro_fuel_type_id=catalog.petrol.id,
        fuel_type="petrol-hybrid",
        co2=Decimal("2.0"),
        effective_date=date(2024, 1, 1),
    )
    resolver = EmissionContextResolver(test_db_session)

    hybrid = await resolver.resolve("petrol-hybrid", date(2024, 6, 30))
    petrol = await resolver.resolve("petrol", date(2024, 6, 30))

    assert hybrid[0].gas_factors.co2 == Decimal("2.0")
    assert petrol[0].gas_factors.co2 == Decimal("2.3")


@pytest.mark.asyncio
async def test_newest_factor_in_effect_wins(test_db_session):
    """Factors take effect on their effective date and never before."""
    catalog = await create_catalog()
    await EmissionFactorFactory(
        macro_fuel_type_id=catalog.diesel.id,
        co2=Decimal("2.7"),
        effective_date=date(2024, 7, 1),
    )
    await EmissionFactorFactory(
        macro_fuel_type_id=catalog.diesel.id,
        co2=Decimal("2.8"),
        effective_date=date(2025, 1, 1),
    )
    resolver = EmissionContextResolver(test_db_session)

    expected = [
        (date(2024, 1, 1), Decimal("2.6")),
        (date(2024, 6, 30), Decimal("2.6")),
        (date(2024, 7, 1), Decimal("2.7")),
        (date(2024, 12, 31), Decimal("2.7")),
        (date(2026, 3, 1), Decimal("2.8")),
    ]
    for reference_date, co2 in expected:
        contexts = await resolver.resolve("diesel", reference_date)
        assert contexts[0].gas_factors.co2 == co2, reference_date


@pytest.mark.asyncio
async def test_same_effective_date_latest_created_wins(test_db_session):
    catalog = await create_catalog(with_factors=False)
    await EmissionFactorFactory(
        macro_fuel_type_id=catalog.diesel.id,
        co2=Decimal("2.60"),
        effective_date=date(2024, 1, 1),
        created_at=datetime(2024, 1, 2, 9, 0),
    )
    await EmissionFactorFactory(
        macro_fuel_type_id=catalog.diesel.id,
        co2=Decimal("2.65"),
        effective_date=date(2024, 1, 1),
        created_at=datetime(2024, 2, 1, 9, 0),
    )
    resolver = EmissionContextResolver(test_db_session)

    single = await resolver.resolve("diesel", date(2024, 6, 30))
    bulk = await resolver.resolve_bulk(date(2024, 6, 30))

    assert single[0].gas_factors.co2 == Decimal("2.65")
    assert bulk["diesel"] == single


@pytest.mark.asyncio
async def test_single_lookup_raises_when_no_factor_in_effect(test_db_session):
    await create_catalog()
    resolver = EmissionContextResolver(test_db_session)

    with pytest.raises(FactorNotFound) as exc_info:
        await resolver.resolve("petrol", date(2023, 12, 31))

    assert exc_info.value.macro_fuel_type_name == "Petrol"
    assert exc_info.value.reference_date == date(2023, 12, 31)


@pytest.mark.asyncio
async def test_bulk_matches_single_lookups(test_db_session):
    catalog = await create_catalog()
    await EmissionFactorFactory(
        macro_fuel_type_id=catalog.petrol.id,
        fuel_type="petrol-hybrid",
        co2=Decimal("2.0"),
        effective_date=date(2024, 3, 1),
    )
    resolver = EmissionContextResolver(test_db_session)
    reference_date = date(2024, 6, 30)

    bulk = await resolver.resolve_bulk(reference_date)

    assert sorted(bulk) == [
        "diesel",
        "diesel-hybrid",
        "electric",
        "petrol",
        "petrol-hybrid",
    ]
    for vehicle_fuel_type, contexts in bulk.items():
        assert contexts == await resolver.resolve(vehicle_fuel_type, reference_date)


@pytest.mark.asyncio
async def test_bulk_substitutes_zero_factors(test_db_session, caplog):
    """The bulk path never fails on a missing factor."""
    catalog = await create_catalog(with_factors=False)
    await EmissionFactorFactory(
        macro_fuel_type_id=catalog.petrol.id, effective_date=date(2024, 1, 1)
    )
    resolver = EmissionContextResolver(test_db_session, log_missing_factors=True)

    with caplog.at_level(logging.WARNING):
        bulk = await resolver.resolve_bulk(date(2024, 6, 30))

    hybrid = bulk["petrol-hybrid"]
    assert hybrid[0].gas_factors.co2 == Decimal("2.3")
    assert hybrid[1].gas_factors == GasEmissionFactors.zero()
    assert bulk["diesel"][0].gas_factors == GasEmissionFactors.zero()
    assert "using zero factors" in caplog.text


@pytest.mark.asyncio
async def test_bulk_zero_substitution_can_be_silent(test_db_session, caplog):
    await create_catalog(with_factors=False)
    resolver = EmissionContextResolver(test_db_session, log_missing_factors=False)

    with caplog.at_level(logging.WARNING):
        bulk = await resolver.resolve_bulk(date(2024, 6, 30))

    assert bulk["diesel"][0].gas_factors == GasEmissionFactors.zero()
    assert "using zero factors" not in caplog.text


@pytest.mark.asyncio
async def test_injected_gwp_snapshot_is_used(test_db_session):
    await create_catalog()
    snapshot = GwpValues(co2=Decimal("1"), ch4=Decimal("25"), n2o=Decimal("298"))
    resolver = EmissionContextResolver(test_db_session, gwp_values=snapshot)

    contexts = await resolver.resolve("petrol", date(2024, 6, 30))

    assert contexts[0].gwp_values == snapshot


@pytest.mark.asyncio
async def test_module_level_resolvers_match_resolver(test_db_session):
    await create_catalog()
    reference_date = date(2024, 6, 30)

    single = await resolve_emission_contexts(test_db_session, "diesel-hybrid", reference_date)
    bulk = await resolve_emission_contexts_bulk(test_db_session, reference_date)

    assert [c.scope for c in single] == [1, 2]
    assert bulk["diesel-hybrid"] == single
