"""
API tests for vehicle classification and emissions.
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from fleet_emissions.core.dependencies import get_emission_settings
from fleet_emissions.test.factory.catalog import create_catalog
from fleet_emissions.test.factory.vehicle import EngineFactory, FuelRecordFactory, VehicleFactory


async def create_diesel_vehicle():
    vehicle = await VehicleFactory()
    await EngineFactory(vehicle_id=vehicle.id, fuel_type="diesel", co2_g_km=Decimal("118"))
    await FuelRecordFactory(
        vehicle_id=vehicle.id,
        date=date(2024, 1, 10),
        quantity_litres=Decimal("40.00"),
        odometer_km=10000,
    )
    await FuelRecordFactory(
        vehicle_id=vehicle.id,
        date=date(2024, 5, 30),
        quantity_litres=Decimal("45.00"),
        odometer_km=11500,
    )
    return vehicle


async def create_hybrid_vehicle():
    vehicle = await VehicleFactory(is_hybrid=True)
    await EngineFactory(
        vehicle_id=vehicle.id, position=1, fuel_type="petrol", co2_g_km=Decimal("120")
    )
    await EngineFactory(
        vehicle_id=vehicle.id, position=2, fuel_type="electric", co2_g_km=Decimal("0")
    )
    return vehicle


@pytest.mark.asyncio
async def test_get_vehicle_classification(test_async_client):
    vehicle = await create_hybrid_vehicle()

    response = await test_async_client.get(f"/api/v1/vehicles/{vehicle.id}/classification")
    assert response.status_code == 200

    data = response.json()
    assert data["effective_fuel_type"] == "petrol-hybrid"
    assert Decimal(data["co2_g_km"]) == Decimal("120")
    assert data["fuel_class"] == {"kind": "hybrid", "primary": "petrol", "secondary": "electric"}


@pytest.mark.asyncio
async def test_classification_uses_period_fuel_records(test_async_client):
    vehicle = await VehicleFactory()
    await EngineFactory(vehicle_id=vehicle.id, fuel_type="petrol")
    for day in (5, 12, 19):
        await FuelRecordFactory(
            vehicle_id=vehicle.id, date=date(2024, 2, day), fuel_type="lpg"
        )

    response = await test_async_client.get(
        f"/api/v1/vehicles/{vehicle.id}/classification?start=2024-01-01&end=2024-03-31"
    )
    assert response.json()["effective_fuel_type"] == "lpg"

    response = await test_async_client.get(f"/api/v1/vehicles/{vehicle.id}/classification")
    assert response.json()["effective_fuel_type"] == "petrol"


@pytest.mark.asyncio
async def test_get_vehicle_emissions(test_async_client):
    await create_catalog()
    vehicle = await create_diesel_vehicle()

    response = await test_async_client.get(
        f"/api/v1/vehicles/{vehicle.id}/emissions?start=2024-01-01&end=2024-06-30"
    )
    assert response.status_code == 200

    data = response.json()
    assert data["fuel_type"] == "diesel"
    assert data["reference_date"] == "2024-03-31"
    assert Decimal(data["theoretical"]) == Decimal("177.00")
    assert Decimal(data["real"]) == Decimal("221.00")
    assert Decimal(data["delta"]["percentage"]) == Decimal("24.86")


@pytest.mark.asyncio
async def test_get_vehicle_emissions_with_unknown_strategy_setting(test_app, test_async_client):
    """A bad reference_date_strategy setting falls back to the period median."""
    test_app.dependency_overrides[get_emission_settings] = lambda: {
        "reference_date_strategy": "weekly"
    }
    await create_catalog()
    vehicle = await create_diesel_vehicle()

    response = await test_async_client.get(
        f"/api/v1/vehicles/{vehicle.id}/emissions?start=2024-01-01&end=2024-06-30"
    )

    assert response.status_code == 200
    assert response.json()["reference_date"] == "2024-03-31"


@pytest.mark.asyncio
async def test_get_vehicle_emissions_not_found(test_async_client):
    response = await test_async_client.get(
        f"/api/v1/vehicles/{uuid4()}/emissions?start=2024-01-01&end=2024-06-30"
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_vehicle_emissions_invalid_period(test_async_client):
    vehicle = await create_diesel_vehicle()

    response = await test_async_client.get(
        f"/api/v1/vehicles/{vehicle.id}/emissions?start=2024-06-30&end=2024-01-01"
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_get_vehicle_emissions_insufficient_data(test_async_client):
    await create_catalog()
    vehicle = await create_hybrid_vehicle()

    response = await test_async_client.get(
        f"/api/v1/vehicles/{vehicle.id}/emissions?start=2024-01-01&end=2024-06-30"
    )
    assert response.status_code == 422
    assert response.json()["error"] == "InsufficientData"


@pytest.mark.asyncio
async def test_calculate_fleet_emissions(test_async_client):
    await create_catalog()
    diesel = await create_diesel_vehicle()
    hybrid = await create_hybrid_vehicle()
    missing_id = uuid4()

    response = await test_async_client.post(
        "/api/v1/fleet/emissions",
        json={
            "vehicle_ids": [str(diesel.id), str(hybrid.id), str(missing_id)],
            "period_start": "2024-01-01",
            "period_end": "2024-06-30",
        },
    )
    assert response.status_code == 200

    data = response.json()
    assert data["statistics"] == {
        "total_requested": 3,
        "total_calculated": 1,
        "total_excluded": 2,
    }
    assert data["results"][0]["vehicle_id"] == str(diesel.id)
    assert Decimal(data["summary"]["real"]) == Decimal("221.00")
    excluded = {item["vehicle_id"]: item["reason"] for item in data["excluded"]}
    assert excluded[str(missing_id)] == "Vehicle not found"
    assert str(hybrid.id) in excluded


@pytest.mark.asyncio
async def test_calculate_fleet_emissions_invalid_request(test_async_client):
    response = await test_async_client.post(
        "/api/v1/fleet/emissions",
        json={"vehicle_ids": [], "period_start": "2024-01-01", "period_end": "2024-06-30"},
    )
    assert response.status_code == 422

    response = await test_async_client.post(
        "/api/v1/fleet/emissions",
        json={
            "vehicle_ids": [str(uuid4())],
            "period_start": "2024-06-30",
            "period_end": "2024-01-01",
        },
    )
    assert response.status_code == 422
