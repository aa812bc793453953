"""
EmissionFactor SQLAlchemy model.

Factors are append-only and effective-dated: a row with a later
``effective_date`` supersedes earlier rows of the same
(macro_fuel_type_id, fuel_type) key without replacing them.
"""
import uuid
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    String,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from fleet_emissions.database import Base

GAS_FACTOR_PRECISION = Numeric(14, 8)


class EmissionFactorDBModel(Base):
    """
    Per-gas emission factors (kg of gas per unit of fuel) for one macro fuel type.

    ``fuel_type`` is NULL for the category default and holds a vehicle fuel
    type string for an override that applies only to that fuel type.
    """

    __tablename__ = "emission_factors"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    macro_fuel_type_id = Column(
        UUID(as_uuid=True),
        ForeignKey("macro_fuel_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    fuel_type = Column(
        String(100),
        nullable=True,
        comment="Vehicle fuel type override; NULL means category default",
    )

    co2 = Column(GAS_FACTOR_PRECISION, nullable=False, default=0)
    ch4 = Column(GAS_FACTOR_PRECISION, nullable=False, default=0)
    n2o = Column(GAS_FACTOR_PRECISION, nullable=False, default=0)
    hfc = Column(GAS_FACTOR_PRECISION, nullable=False, default=0)
    pfc = Column(GAS_FACTOR_PRECISION, nullable=False, default=0)
    sf6 = Column(GAS_FACTOR_PRECISION, nullable=False, default=0)
    nf3 = Column(GAS_FACTOR_PRECISION, nullable=False, default=0)

    source = Column(
        String(100),
        nullable=False,
        comment="Source of the emission factor (e.g., 'ISPRA 2024')",
    )

    effective_date = Column(
        Date,
        nullable=False,
        comment="Date from which this factor is in effect",
    )

    created_by = Column(String(100), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    macro_fuel_type = relationship("MacroFuelTypeDBModel", lazy="joined")

    __table_args__ = (
        CheckConstraint(
            "co2 >= 0 AND ch4 >= 0 AND n2o >= 0 AND hfc >= 0 "
            "AND pfc >= 0 AND sf6 >= 0 AND nf3 >= 0",
            name="ck_emission_factors_non_negative",
        ),
        Index(
            "ix_emission_factors_lookup",
            "macro_fuel_type_id",
            "fuel_type",
            "effective_date",
        ),
        {"comment": "Effective-dated per-gas emission factors"},
    )

    def __repr__(self):
        override = self.fuel_type or "default"
        return (
            f"<EmissionFactorDBModel: {self.macro_fuel_type_id} [{override}] "
            f"from {self.effective_date}>"
        )
