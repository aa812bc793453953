"""
Factories for fleet data: vehicles, engines, fuel records and km readings.

Child factories need ``vehicle_id`` passed explicitly.
"""
import uuid
from datetime import date, datetime
from decimal import Decimal

import factory

from fleet_emissions.database.schemas import (
    EngineDBModel,
    FuelRecordDBModel,
    KmReadingDBModel,
    VehicleDBModel,
)
from fleet_emissions.test.factory.base_factory import AsyncSQLAlchemyFactory
from fleet_emissions.test.factory.create_async_session import async_session
from fleet_emissions.utils.constants import FuelType


class VehicleFactory(AsyncSQLAlchemyFactory):
    """Factory for creating Vehicle test instances."""

    class Meta:
        model = VehicleDBModel
        sqlalchemy_session = async_session
        sqlalchemy_session_persistence = "commit"

    id = factory.LazyFunction(uuid.uuid4)
    license_plate = factory.Sequence(lambda n: f"TS{n:03d}XX")
    make = "Fiat"
    model = "Panda"
    is_hybrid = False
    created_at = factory.LazyFunction(datetime.utcnow)
    updated_at = factory.LazyFunction(datetime.utcnow)


class EngineFactory(AsyncSQLAlchemyFactory):
    """Factory for creating Engine test instances."""

    class Meta:
        model = EngineDBModel
        sqlalchemy_session = async_session
        sqlalchemy_session_persistence = "commit"

    id = factory.LazyFunction(uuid.uuid4)
    position = 1
    fuel_type = FuelType.DIESEL
    co2_g_km = Decimal("120")
    displacement = 1600
    power_kw = Decimal("85")
    created_at = factory.LazyFunction(datetime.utcnow)
    updated_at = factory.LazyFunction(datetime.utcnow)


class FuelRecordFactory(AsyncSQLAlchemyFactory):
    """Factory for creating FuelRecord test instances."""

    class Meta:
        model = FuelRecordDBModel
        sqlalchemy_session = async_session
        sqlalchemy_session_persistence = "commit"

    id = factory.LazyFunction(uuid.uuid4)
    date = date(2024, 1, 15)
    fuel_type = FuelType.DIESEL
    quantity_litres = Decimal("50")
    quantity_kwh = None
    odometer_km = 10000
    created_at = factory.LazyFunction(datetime.utcnow)
    updated_at = factory.LazyFunction(datetime.utcnow)


class KmReadingFactory(AsyncSQLAlchemyFactory):
    """Factory for creating KmReading test instances."""

    class Meta:
        model = KmReadingDBModel
        sqlalchemy_session = async_session
        sqlalchemy_session_persistence = "commit"

    id = factory.LazyFunction(uuid.uuid4)
    date = date(2024, 1, 1)
    odometer_km = 10000
    source = "telematics"
    created_at = factory.LazyFunction(datetime.utcnow)
    updated_at = factory.LazyFunction(datetime.utcnow)
