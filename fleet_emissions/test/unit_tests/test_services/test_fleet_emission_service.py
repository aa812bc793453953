"""
Service tests for the fleet emission orchestrator.
"""

import uuid
from datetime import date
from decimal import Decimal

import pytest

from fleet_emissions.services.calculators.fleet_emission_service import (
    FleetEmissionService,
)
from fleet_emissions.services.exceptions import FactorNotFound
from fleet_emissions.services.loaders.vehicle_emission_loader import VehicleEmissionLoader
from fleet_emissions.services.resolvers.emission_context_resolver import (
    EmissionContextResolver,
)
from fleet_emissions.test.factory.catalog import create_catalog
from fleet_emissions.test.factory.macro_fuel_type import FuelTypeMappingFactory
from fleet_emissions.test.factory.vehicle import (
    EngineFactory,
    FuelRecordFactory,
    KmReadingFactory,
    VehicleFactory,
)
from fleet_emissions.utils.constants import ReferenceDateStrategy

PERIOD_START = date(2024, 1, 1)
PERIOD_END = date(2024, 6, 30)


def make_service(session) -> FleetEmissionService:
    resolver = EmissionContextResolver(session, log_missing_factors=True)
    loader = VehicleEmissionLoader(
        session, resolver=resolver, reference_date_strategy=ReferenceDateStrategy.MEDIAN
    )
    return FleetEmissionService(session, resolver=resolver, loader=loader)


async def create_vehicle(fuel_type, co2_g_km, readings, is_hybrid=False):
    """Vehicle with one engine and a fuel record per (date, odometer, litres) reading."""
    vehicle = await VehicleFactory(is_hybrid=is_hybrid)
    await EngineFactory(vehicle_id=vehicle.id, fuel_type=fuel_type, co2_g_km=co2_g_km)
    for reading_date, odometer_km, litres in readings:
        await FuelRecordFactory(
            vehicle_id=vehicle.id,
            date=reading_date,
            fuel_type=fuel_type,
            quantity_litres=Decimal(litres),
            odometer_km=odometer_km,
        )
    return vehicle


async def create_diesel_vehicle():
    return await create_vehicle(
        "diesel",
        Decimal("118"),
        [(date(2024, 1, 10), 10000, "40.00"), (date(2024, 5, 30), 11500, "45.00")],
    )


@pytest.mark.asyncio
async def test_calculate_vehicle(test_db_session):
    await create_catalog()
    vehicle = await create_diesel_vehicle()

    report = await make_service(test_db_session).calculate_vehicle(
        vehicle, PERIOD_START, PERIOD_END
    )

    assert report.vehicle_id == vehicle.id
    assert report.fuel_type == "diesel"
    assert report.km_travelled == Decimal("1500")
    assert report.theoretical == Decimal("177.00")
    assert report.real == Decimal("221.00")
    assert report.real_by_scope == [Decimal("221.00")]
    assert report.delta.absolute == Decimal("44.00")
    assert report.delta.percentage == Decimal("24.86")


@pytest.mark.asyncio
async def test_calculate_vehicle_raises_without_factor(test_db_session):
    """The single path surfaces a missing factor."""
    await create_catalog(with_factors=False)
    vehicle = await create_diesel_vehicle()

    with pytest.raises(FactorNotFound):
        await make_service(test_db_session).calculate_vehicle(
            vehicle, PERIOD_START, PERIOD_END
        )


@pytest.mark.asyncio
async def test_uppercase_fuel_type_matches_its_mapping(test_db_session):
    """Fuel type labels are looked up exactly as recorded."""
    catalog = await create_catalog()
    await FuelTypeMappingFactory(
        vehicle_fuel_type="DIESEL", macro_fuel_type_id=catalog.diesel.id, scope=1
    )
    vehicle = await create_vehicle(
        "DIESEL",
        Decimal("118"),
        [(date(2024, 1, 10), 10000, "40.00"), (date(2024, 5, 30), 11500, "45.00")],
    )

    report = await make_service(test_db_session).calculate_vehicle(
        vehicle, PERIOD_START, PERIOD_END
    )

    assert report.fuel_type == "DIESEL"
    assert report.real == Decimal("221.00")


@pytest.mark.asyncio
async def test_unmapped_fuel_type_has_zero_real_emissions(test_db_session):
    await create_catalog()
    vehicle = await VehicleFactory()
    await EngineFactory(vehicle_id=vehicle.id, fuel_type="hydrogen", co2_g_km=Decimal("0"))
    await KmReadingFactory(vehicle_id=vehicle.id, date=date(2024, 2, 1), odometer_km=500)
    await KmReadingFactory(vehicle_id=vehicle.id, date=date(2024, 6, 1), odometer_km=2500)

    report = await make_service(test_db_session).calculate_vehicle(
        vehicle, PERIOD_START, PERIOD_END
    )

    assert report.fuel_type == "hydrogen"
    assert report.km_travelled == Decimal("2000")
    assert report.real == Decimal("0")
    assert report.real_by_scope == []


@pytest.mark.asyncio
async def test_calculate_fleet(test_db_session):
    """Calculated, excluded and missing vehicles all land in one report."""
    await create_catalog()
    diesel = await create_diesel_vehicle()
    hybrid = await VehicleFactory(is_hybrid=True)
    await EngineFactory(
        vehicle_id=hybrid.id, position=1, fuel_type="petrol", co2_g_km=Decimal("102")
    )
    await EngineFactory(
        vehicle_id=hybrid.id, position=2, fuel_type="electric", co2_g_km=Decimal("0")
    )
    await FuelRecordFactory(
        vehicle_id=hybrid.id,
        date=date(2024, 1, 5),
        fuel_type="petrol",
        quantity_litres=Decimal("38.00"),
        odometer_km=30500,
    )
    await FuelRecordFactory(
        vehicle_id=hybrid.id,
        date=date(2024, 2, 20),
        fuel_type="electric",
        quantity_litres=Decimal("0"),
        quantity_kwh=Decimal("22.50"),
        odometer_km=31200,
    )
    await FuelRecordFactory(
        vehicle_id=hybrid.id,
        date=date(2024, 4, 11),
        fuel_type="petrol",
        quantity_litres=Decimal("40.00"),
        odometer_km=32050,
    )
    idle = await create_vehicle("petrol", Decimal("110"), [(date(2024, 3, 1), 500, "30")])
    missing_id = uuid.uuid4()

    report = await make_service(test_db_session).calculate_fleet(
        [diesel.id, hybrid.id, idle.id, missing_id, diesel.id], PERIOD_START, PERIOD_END
    )

    assert report.reference_date == date(2024, 3, 31)
    assert report.statistics.total_requested == 4
    assert report.statistics.total_calculated == 2
    assert report.statistics.total_excluded == 2

    results = {r.vehicle_id: r for r in report.results}
    assert results[diesel.id].real == Decimal("221.00")

    # 78 L * 2.4605 + 22.5 kWh * 0.25 = 191.919 + 5.625
    hybrid_report = results[hybrid.id]
    assert hybrid_report.fuel_type == "petrol-hybrid"
    assert hybrid_report.theoretical == Decimal("158.10")
    assert hybrid_report.real == Decimal("197.54")
    assert hybrid_report.real_by_scope == [Decimal("191.92"), Decimal("5.63")]

    excluded = {e.vehicle_id: e.reason for e in report.excluded}
    assert excluded[missing_id] == "Vehicle not found"
    assert "odometer reading" in excluded[idle.id]

    assert report.summary.vehicle_count == 2
    assert report.summary.theoretical == Decimal("335.10")
    assert report.summary.real == Decimal("418.54")
    assert [s.fuel_type for s in report.summary.by_fuel_type] == ["diesel", "petrol-hybrid"]


@pytest.mark.asyncio
async def test_fleet_substitutes_zero_factors(test_db_session):
    """The bulk path completes with zero real emissions when a factor is missing."""
    await create_catalog(with_factors=False)
    vehicle = await create_diesel_vehicle()

    report = await make_service(test_db_session).calculate_fleet(
        [vehicle.id], PERIOD_START, PERIOD_END
    )

    assert report.statistics.total_calculated == 1
    assert report.excluded == []
    assert report.results[0].real == Decimal("0")
    assert report.results[0].theoretical == Decimal("177.00")
