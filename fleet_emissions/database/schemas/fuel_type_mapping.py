"""
FuelTypeMacroMapping SQLAlchemy model.
"""
import uuid
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from fleet_emissions.database import Base


class FuelTypeMacroMappingDBModel(Base):
    """
    Links a vehicle fuel type string to a macro fuel type for one scope.

    Pure fuels have one row; hybrid composite fuel types ("petrol-hybrid")
    have two, one per scope.
    """

    __tablename__ = "fuel_type_macro_mappings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    vehicle_fuel_type = Column(
        String(100),
        nullable=False,
        index=True,
        comment="Raw vehicle fuel type (e.g., 'diesel', 'petrol-hybrid')",
    )

    macro_fuel_type_id = Column(
        UUID(as_uuid=True),
        ForeignKey("macro_fuel_types.id", ondelete="RESTRICT"),
        nullable=False,
    )

    scope = Column(
        Integer,
        nullable=False,
        comment="Emission scope of this mapping: 1 = thermal, 2 = electric",
    )

    description = Column(String(100), nullable=False, default="")

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    macro_fuel_type = relationship("MacroFuelTypeDBModel", lazy="joined")

    __table_args__ = (
        UniqueConstraint(
            "vehicle_fuel_type", "scope", name="uq_fuel_type_mapping_type_scope"
        ),
        CheckConstraint("scope IN (1, 2)", name="ck_fuel_type_mapping_scope"),
        {"comment": "Vehicle fuel type to macro fuel type mapping"},
    )

    def __repr__(self):
        return f"<FuelTypeMacroMappingDBModel: {self.vehicle_fuel_type} scope {self.scope}>"
