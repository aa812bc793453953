"""
MacroFuelType SQLAlchemy model.
"""
import uuid
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import UUID

from fleet_emissions.database import Base


class MacroFuelTypeDBModel(Base):
    """
    Emission accounting category (e.g. "Diesel", "Grid Electricity").

    Several vehicle fuel type strings map onto one macro fuel type. The scope
    of a category never changes once factors reference it: a new scope means
    a new category.
    """

    __tablename__ = "macro_fuel_types"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(
        String(100),
        nullable=False,
        unique=True,
        comment="Display name of the category (e.g., 'Diesel')",
    )

    scope = Column(
        Integer,
        nullable=False,
        comment="Emission scope: 1 = thermal, 2 = electric",
    )

    unit = Column(
        String(10),
        nullable=False,
        comment="Unit the fuel is measured in (L, kg, kWh, Nm3, UA)",
    )

    sort_order = Column(Integer, nullable=False, default=0)

    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("scope IN (1, 2)", name="ck_macro_fuel_types_scope"),
        {"comment": "Macro fuel categories used for emission accounting"},
    )

    def __repr__(self):
        return f"<MacroFuelTypeDBModel: {self.name} (scope {self.scope})>"
