"""create_fleet_tables

Revision ID: 8c2e5a7f41d3
Revises: 3f6a1c2d9b10
Create Date: 2026-01-05 09:45:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "8c2e5a7f41d3"
down_revision = "3f6a1c2d9b10"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "vehicles",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("license_plate", sa.String(length=20), nullable=False),
        sa.Column("make", sa.String(length=100), nullable=True),
        sa.Column("model", sa.String(length=200), nullable=True),
        sa.Column(
            "is_hybrid",
            sa.Boolean(),
            nullable=False,
            comment="Dual-engine hybrid; technical data is split across engines",
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_vehicles_license_plate"), "vehicles", ["license_plate"], unique=True
    )

    op.create_table(
        "engines",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("vehicle_id", sa.UUID(), nullable=False),
        sa.Column(
            "position",
            sa.Integer(),
            nullable=False,
            comment="Catalog order of the engine within the vehicle",
        ),
        sa.Column("fuel_type", sa.String(length=100), nullable=False),
        sa.Column(
            "co2_g_km",
            sa.Numeric(precision=8, scale=2),
            nullable=True,
            comment="Manufacturer WLTP combined gCO2/km",
        ),
        sa.Column("displacement", sa.Integer(), nullable=True, comment="Displacement in cc"),
        sa.Column("power_kw", sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["vehicle_id"], ["vehicles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_engines_vehicle_id"), "engines", ["vehicle_id"], unique=False)

    op.create_table(
        "fuel_records",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("vehicle_id", sa.UUID(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("fuel_type", sa.String(length=100), nullable=False),
        sa.Column(
            "quantity_litres",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            comment="Litres refuelled (scope 1 quantity)",
        ),
        sa.Column(
            "quantity_kwh",
            sa.Numeric(precision=12, scale=2),
            nullable=True,
            comment="kWh charged (scope 2 quantity)",
        ),
        sa.Column("odometer_km", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["vehicle_id"], ["vehicles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_fuel_records_vehicle_date", "fuel_records", ["vehicle_id", "date"], unique=False
    )

    op.create_table(
        "km_readings",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("vehicle_id", sa.UUID(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("odometer_km", sa.Integer(), nullable=False),
        sa.Column(
            "source",
            sa.String(length=50),
            nullable=True,
            comment="Where the reading came from",
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["vehicle_id"], ["vehicles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_km_readings_vehicle_date", "km_readings", ["vehicle_id", "date"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_km_readings_vehicle_date", table_name="km_readings")
    op.drop_table("km_readings")
    op.drop_index("ix_fuel_records_vehicle_date", table_name="fuel_records")
    op.drop_table("fuel_records")
    op.drop_index(op.f("ix_engines_vehicle_id"), table_name="engines")
    op.drop_table("engines")
    op.drop_index(op.f("ix_vehicles_license_plate"), table_name="vehicles")
    op.drop_table("vehicles")
