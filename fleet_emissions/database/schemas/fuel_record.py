"""
FuelRecord and KmReading SQLAlchemy models.
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID

from fleet_emissions.database import Base


class FuelRecordDBModel(Base):
    """A refuelling or charging event."""

    __tablename__ = "fuel_records"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    vehicle_id = Column(
        UUID(as_uuid=True),
        ForeignKey("vehicles.id", ondelete="CASCADE"),
        nullable=False,
    )

    date = Column(Date, nullable=False)

    fuel_type = Column(String(100), nullable=False)

    quantity_litres = Column(
        Numeric(12, 2),
        nullable=False,
        default=0,
        comment="Litres refuelled (scope 1 quantity)",
    )

    quantity_kwh = Column(
        Numeric(12, 2),
        nullable=True,
        comment="kWh charged (scope 2 quantity)",
    )

    odometer_km = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_fuel_records_vehicle_date", "vehicle_id", "date"),
    )

    def __repr__(self):
        return f"<FuelRecordDBModel: {self.vehicle_id} {self.date} {self.fuel_type}>"


class KmReadingDBModel(Base):
    """A dedicated odometer reading."""

    __tablename__ = "km_readings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    vehicle_id = Column(
        UUID(as_uuid=True),
        ForeignKey("vehicles.id", ondelete="CASCADE"),
        nullable=False,
    )

    date = Column(Date, nullable=False)

    odometer_km = Column(Integer, nullable=False)

    source = Column(String(50), nullable=True, comment="Where the reading came from")

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_km_readings_vehicle_date", "vehicle_id", "date"),
    )

    def __repr__(self):
        return f"<KmReadingDBModel: {self.vehicle_id} {self.date} {self.odometer_km} km>"
