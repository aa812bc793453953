"""
GwpConfig SQLAlchemy model.
"""
import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Index,
    Numeric,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import UUID

from fleet_emissions.database import Base


class GwpConfigDBModel(Base):
    """
    Global-warming potential multiplier for one Kyoto gas.

    Only one row per gas may be active; gases without an active row count
    with a multiplier of zero.
    """

    __tablename__ = "gwp_configs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    gas_name = Column(
        String(10),
        nullable=False,
        comment="Gas name (CO2, CH4, N2O, HFC, PFC, SF6, NF3)",
    )

    gwp_value = Column(
        Numeric(12, 4),
        nullable=False,
        comment="kgCO2e per kg of gas",
    )

    source = Column(
        String(100),
        nullable=False,
        comment="Source of the GWP value (e.g., 'IPCC AR5')",
    )

    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("gas_name", "source", name="uq_gwp_configs_gas_source"),
        Index(
            "uq_gwp_configs_one_active_per_gas",
            "gas_name",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
        {"comment": "GWP multipliers per Kyoto gas"},
    )

    def __repr__(self):
        return f"<GwpConfigDBModel: {self.gas_name}={self.gwp_value} ({self.source})>"
