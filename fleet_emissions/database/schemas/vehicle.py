"""
Vehicle and Engine SQLAlchemy models.

These tables belong to the fleet registry; the emission engine only reads them.
"""
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from fleet_emissions.database import Base


class VehicleDBModel(Base):
    """Fleet vehicle with its technical specification."""

    __tablename__ = "vehicles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    license_plate = Column(String(20), nullable=False, unique=True, index=True)
    make = Column(String(100), nullable=True)
    model = Column(String(200), nullable=True)

    is_hybrid = Column(
        Boolean,
        nullable=False,
        default=False,
        comment="Dual-engine hybrid; technical data is split across engines",
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    engines = relationship(
        "EngineDBModel",
        back_populates="vehicle",
        lazy="selectin",
        order_by="EngineDBModel.position",
    )

    def __repr__(self):
        return f"<VehicleDBModel: {self.license_plate}>"


class EngineDBModel(Base):
    """One engine of a vehicle (hybrids have a thermal and an electric engine)."""

    __tablename__ = "engines"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    vehicle_id = Column(
        UUID(as_uuid=True),
        ForeignKey("vehicles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    position = Column(
        Integer,
        nullable=False,
        default=0,
        comment="Catalog order of the engine within the vehicle",
    )

    fuel_type = Column(String(100), nullable=False)

    co2_g_km = Column(
        Numeric(8, 2),
        nullable=True,
        comment="Manufacturer WLTP combined gCO2/km",
    )

    displacement = Column(Integer, nullable=True, comment="Displacement in cc")
    power_kw = Column(Numeric(8, 2), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    vehicle = relationship("VehicleDBModel", back_populates="engines")

    def __repr__(self):
        return f"<EngineDBModel: {self.fuel_type} {self.co2_g_km} g/km>"
