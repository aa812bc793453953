"""
Repository for Vehicle, Engine, FuelRecord and KmReading read operations.

The emission engine consumes fleet data through this repository only.
"""
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.database.repositories.base import BaseRepository
from fleet_emissions.database.schemas import (
    EngineDBModel,
    FuelRecordDBModel,
    KmReadingDBModel,
    VehicleDBModel,
)
from fleet_emissions.pydantic_models.vehicle import OdometerReading


class VehicleRepository(BaseRepository[VehicleDBModel]):
    """Repository for fleet vehicle data."""

    def __init__(self, session: AsyncSession):
        super().__init__(VehicleDBModel, session)

    async def get_by_ids(self, vehicle_ids: List[UUID]) -> List[VehicleDBModel]:
        """Get several vehicles (with engines) in one query."""
        if not vehicle_ids:
            return []
        stmt = select(self.model).where(self.model.id.in_(vehicle_ids))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_engines(self, vehicle_id: UUID) -> List[EngineDBModel]:
        """
        Get the engines of a vehicle in catalog order.

        Args:
            vehicle_id: Vehicle UUID

        Returns:
            List of engines (empty if the vehicle has none)
        """
        stmt = (
            select(EngineDBModel)
            .where(EngineDBModel.vehicle_id == vehicle_id)
            .order_by(EngineDBModel.position.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_fuel_records(
        self, vehicle_id: UUID, start: date, end: date
    ) -> List[FuelRecordDBModel]:
        """
        Get fuel records of a vehicle within an inclusive period, oldest first.

        Args:
            vehicle_id: Vehicle UUID
            start: First day of the period
            end: Last day of the period

        Returns:
            List of fuel records
        """
        stmt = (
            select(FuelRecordDBModel)
            .where(
                FuelRecordDBModel.vehicle_id == vehicle_id,
                FuelRecordDBModel.date >= start,
                FuelRecordDBModel.date <= end,
            )
            .order_by(FuelRecordDBModel.date.asc(), FuelRecordDBModel.odometer_km.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_km_readings(
        self, vehicle_id: UUID, start: date, end: date
    ) -> List[KmReadingDBModel]:
        """Get dedicated odometer readings within an inclusive period, oldest first."""
        stmt = (
            select(KmReadingDBModel)
            .where(
                KmReadingDBModel.vehicle_id == vehicle_id,
                KmReadingDBModel.date >= start,
                KmReadingDBModel.date <= end,
            )
            .order_by(KmReadingDBModel.date.asc(), KmReadingDBModel.odometer_km.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_odometer_readings(
        self,
        vehicle_id: UUID,
        start: date,
        end: date,
        fuel_records: Optional[List[FuelRecordDBModel]] = None,
    ) -> List[OdometerReading]:
        """
        Merge km readings and fuel record odometers, ordered by date.

        Args:
            vehicle_id: Vehicle UUID
            start: First day of the period
            end: Last day of the period
            fuel_records: Already loaded fuel records for the same period

        Returns:
            Date-ordered odometer readings
        """
        if fuel_records is None:
            fuel_records = await self.get_fuel_records(vehicle_id, start, end)
        km_readings = await self.get_km_readings(vehicle_id, start, end)

        readings = [
            OdometerReading(date=record.date, odometer_km=record.odometer_km)
            for record in fuel_records
        ] + [
            OdometerReading(date=reading.date, odometer_km=reading.odometer_km)
            for reading in km_readings
        ]
        # Same-day readings: the lower odometer value is the earlier one
        return sorted(readings, key=lambda r: (r.date, r.odometer_km))
