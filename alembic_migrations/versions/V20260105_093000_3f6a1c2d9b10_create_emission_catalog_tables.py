"""create_emission_catalog_tables

Revision ID: 3f6a1c2d9b10
Revises:
Create Date: 2026-01-05 09:30:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f6a1c2d9b10"
down_revision = None
branch_labels = None
depends_on = None

GAS_COLUMNS = ("co2", "ch4", "n2o", "hfc", "pfc", "sf6", "nf3")


def upgrade() -> None:
    op.create_table(
        "macro_fuel_types",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column(
            "name",
            sa.String(length=100),
            nullable=False,
            comment="Display name of the category (e.g., 'Diesel')",
        ),
        sa.Column(
            "scope",
            sa.Integer(),
            nullable=False,
            comment="Emission scope: 1 = thermal, 2 = electric",
        ),
        sa.Column(
            "unit",
            sa.String(length=10),
            nullable=False,
            comment="Unit the fuel is measured in (L, kg, kWh, Nm3, UA)",
        ),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("scope IN (1, 2)", name="ck_macro_fuel_types_scope"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        comment="Macro fuel categories used for emission accounting",
    )

    op.create_table(
        "fuel_type_macro_mappings",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column(
            "vehicle_fuel_type",
            sa.String(length=100),
            nullable=False,
            comment="Raw vehicle fuel type (e.g., 'diesel', 'petrol-hybrid')",
        ),
        sa.Column("macro_fuel_type_id", sa.UUID(), nullable=False),
        sa.Column(
            "scope",
            sa.Integer(),
            nullable=False,
            comment="Emission scope of this mapping: 1 = thermal, 2 = electric",
        ),
        sa.Column("description", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("scope IN (1, 2)", name="ck_fuel_type_mapping_scope"),
        sa.ForeignKeyConstraint(
            ["macro_fuel_type_id"], ["macro_fuel_types.id"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "vehicle_fuel_type", "scope", name="uq_fuel_type_mapping_type_scope"
        ),
        comment="Vehicle fuel type to macro fuel type mapping",
    )
    op.create_index(
        op.f("ix_fuel_type_macro_mappings_vehicle_fuel_type"),
        "fuel_type_macro_mappings",
        ["vehicle_fuel_type"],
        unique=False,
    )

    op.create_table(
        "emission_factors",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("macro_fuel_type_id", sa.UUID(), nullable=False),
        sa.Column(
            "fuel_type",
            sa.String(length=100),
            nullable=True,
            comment="Vehicle fuel type override; NULL means category default",
        ),
        *[
            sa.Column(gas, sa.Numeric(precision=14, scale=8), nullable=False)
            for gas in GAS_COLUMNS
        ],
        sa.Column(
            "source",
            sa.String(length=100),
            nullable=False,
            comment="Source of the emission factor (e.g., 'ISPRA 2024')",
        ),
        sa.Column(
            "effective_date",
            sa.Date(),
            nullable=False,
            comment="Date from which this factor is in effect",
        ),
        sa.Column("created_by", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "co2 >= 0 AND ch4 >= 0 AND n2o >= 0 AND hfc >= 0 "
            "AND pfc >= 0 AND sf6 >= 0 AND nf3 >= 0",
            name="ck_emission_factors_non_negative",
        ),
        sa.ForeignKeyConstraint(
            ["macro_fuel_type_id"], ["macro_fuel_types.id"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id"),
        comment="Effective-dated per-gas emission factors",
    )
    op.create_index(
        op.f("ix_emission_factors_macro_fuel_type_id"),
        "emission_factors",
        ["macro_fuel_type_id"],
        unique=False,
    )
    op.create_index(
        "ix_emission_factors_lookup",
        "emission_factors",
        ["macro_fuel_type_id", "fuel_type", "effective_date"],
        unique=False,
    )

    op.create_table(
        "gwp_configs",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column(
            "gas_name",
            sa.String(length=10),
            nullable=False,
            comment="Gas name (CO2, CH4, N2O, HFC, PFC, SF6, NF3)",
        ),
        sa.Column(
            "gwp_value",
            sa.Numeric(precision=12, scale=4),
            nullable=False,
            comment="kgCO2e per kg of gas",
        ),
        sa.Column(
            "source",
            sa.String(length=100),
            nullable=False,
            comment="Source of the GWP value (e.g., 'IPCC AR5')",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("gas_name", "source", name="uq_gwp_configs_gas_source"),
        comment="GWP multipliers per Kyoto gas",
    )
    op.create_index(
        "uq_gwp_configs_one_active_per_gas",
        "gwp_configs",
        ["gas_name"],
        unique=True,
        postgresql_where=sa.text("is_active"),
        sqlite_where=sa.text("is_active = 1"),
    )


def downgrade() -> None:
    op.drop_index("uq_gwp_configs_one_active_per_gas", table_name="gwp_configs")
    op.drop_table("gwp_configs")
    op.drop_index("ix_emission_factors_lookup", table_name="emission_factors")
    op.drop_index(op.f("ix_emission_factors_macro_fuel_type_id"), table_name="emission_factors")
    op.drop_table("emission_factors")
    op.drop_index(
        op.f("ix_fuel_type_macro_mappings_vehicle_fuel_type"),
        table_name="fuel_type_macro_mappings",
    )
    op.drop_table("fuel_type_macro_mappings")
    op.drop_table("macro_fuel_types")
