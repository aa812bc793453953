"""
Database seeding service for loading the emission catalog from CSV files.

Usage:
    from fleet_emissions.services.seed_database import DatabaseSeeder

    async with DatabaseSeeder() as seeder:
        await seeder.seed_all(clear_existing=True)
"""

import csv
import logging
from datetime import datetime
from decimal import InvalidOperation
from pathlib import Path
from typing import Any

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.database.repositories import (
    EmissionFactorRepository,
    FuelTypeMappingRepository,
    GwpConfigRepository,
    MacroFuelTypeRepository,
    VehicleRepository,
)
from fleet_emissions.database.schemas import (
    EmissionFactorDBModel,
    EngineDBModel,
    FuelRecordDBModel,
    FuelTypeMacroMappingDBModel,
    GwpConfigDBModel,
)
from fleet_emissions.database.session_manager.db_session import Database
from fleet_emissions.services.calculators.unit_converter import UnitConverter
from fleet_emissions.utils.constants import KYOTO_GASES, MeasurementUnit

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "test" / "test_data"

# Row-level problems that skip the row instead of aborting the seed
ROW_ERRORS = (KeyError, ValueError, InvalidOperation)


def _parse_date(value: str):
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def _parse_bool(value: str) -> bool:
    return (value or "").strip().lower() in ("yes", "y", "true", "1")


class DatabaseSeeder:
    """Service for seeding the database with catalog and demo fleet data."""

    def __init__(
        self,
        session: AsyncSession | None = None,
        data_dir: str | Path = DEFAULT_DATA_DIR,
    ):
        """
        Initialize the database seeder.

        Args:
            session: Optional async database session. If not provided, will create one.
            data_dir: Directory containing CSV files (default: fleet_emissions/test/test_data)
        """
        self._session = session
        self._external_session = session is not None
        self.data_dir = Path(data_dir)
        self.errors: list[str] = []

        if not self.data_dir.exists():
            raise ValueError(f"Data directory not found: {self.data_dir}")

    async def __aenter__(self):
        """Context manager entry."""
        if not self._external_session:
            db = Database()
            self._session = await db.__aenter__()
            self._db_context = db
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        if not self._external_session and hasattr(self, "_db_context"):
            await self._db_context.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        if not self._session:
            raise RuntimeError("Session not initialized. Use as context manager.")
        return self._session

    def _read_rows(self, file_name: str) -> list[dict[str, str]]:
        csv_file = self.data_dir / file_name
        if not csv_file.exists():
            logger.warning(f"File not found: {csv_file}")
            return []
        logger.info(f"Loading {csv_file}")
        with open(csv_file, "r", encoding="utf-8") as f:
            return list(csv.DictReader(f))

    def _skip_row(self, kind: str, row: dict, error: Exception):
        message = f"Failed to create {kind} from row {row}: {error}"
        logger.warning(message)
        self.errors.append(message)

    async def seed_all(
        self,
        clear_existing: bool = False,
        skip_fleet: bool = False,
    ) -> dict[str, Any]:
        """
        Seed all data from CSV files.

        Args:
            clear_existing: If True, clear existing data before seeding
            skip_fleet: If True, only seed the emission catalog

        Returns:
            Dictionary with seeding statistics
        """
        logger.info("Starting database seeding")
        self.errors = []

        stats = {
            "macro_fuel_types": 0,
            "fuel_type_mappings": 0,
            "gwp_configs": 0,
            "emission_factors": 0,
            "vehicles": 0,
            "fuel_records": 0,
            "errors": self.errors,
        }

        try:
            if clear_existing:
                await self._clear_existing_data()

            # Catalog first: mappings and factors reference macro fuel types by name
            stats["macro_fuel_types"] = await self.seed_macro_fuel_types()
            stats["fuel_type_mappings"] = await self.seed_fuel_type_mappings()
            stats["gwp_configs"] = await self.seed_gwp_configs()
            stats["emission_factors"] = await self.seed_emission_factors()

            if not skip_fleet:
                stats["vehicles"] = await self.seed_vehicles()
                stats["fuel_records"] = await self.seed_fuel_records()

            await self.session.commit()

            logger.info(f"Database seeding completed: {stats}")
            return stats

        except Exception as e:
            logger.error(f"Error during database seeding: {e}", exc_info=True)
            await self.session.rollback()
            raise

    async def _clear_existing_data(self):
        """Clear all existing catalog and fleet data."""
        logger.info("Clearing existing data")

        # Children before parents
        for table in (
            "fuel_records",
            "km_readings",
            "engines",
            "vehicles",
            "emission_factors",
            "fuel_type_macro_mappings",
            "gwp_configs",
            "macro_fuel_types",
        ):
            await self.session.execute(text(f"DELETE FROM {table}"))

        await self.session.commit()
        logger.info("Existing data cleared")

    async def seed_macro_fuel_types(self) -> int:
        """
        Load macro fuel types from Macro_Fuel_Types.csv.

        Existing names are left untouched.

        Returns:
            Number of macro fuel types created
        """
        repo = MacroFuelTypeRepository(self.session)
        count = 0

        for row in self._read_rows("Macro_Fuel_Types.csv"):
            try:
                name = row["Name"].strip()
                if await repo.get_by_name(name):
                    continue
                scope = int(row["Scope"])
                if scope not in (1, 2):
                    raise ValueError(f"scope must be 1 or 2, got {scope}")
                await repo.create(
                    name=name,
                    scope=scope,
                    unit=MeasurementUnit(row["Unit"].strip()).value,
                    sort_order=int(row.get("Sort order") or 0),
                )
                count += 1
            except ROW_ERRORS as e:
                self._skip_row("macro fuel type", row, e)

        logger.info(f"Created {count} macro fuel types")
        return count

    async def seed_fuel_type_mappings(self) -> int:
        """
        Load fuel type mappings from Fuel_Type_Mappings.csv.

        Returns:
            Number of mappings created
        """
        macro_repo = MacroFuelTypeRepository(self.session)
        repo = FuelTypeMappingRepository(self.session)
        count = 0

        for row in self._read_rows("Fuel_Type_Mappings.csv"):
            try:
                vehicle_fuel_type = row["Vehicle fuel type"].strip()
                scope = int(row["Scope"])
                macro = await macro_repo.get_by_name(row["Macro fuel type"].strip())
                if macro is None:
                    raise ValueError(f"unknown macro fuel type {row['Macro fuel type']!r}")
                if macro.scope != scope:
                    raise ValueError(
                        f"mapping scope {scope} does not match {macro.name} scope {macro.scope}"
                    )

                existing = await self.session.execute(
                    select(FuelTypeMacroMappingDBModel).where(
                        FuelTypeMacroMappingDBModel.vehicle_fuel_type == vehicle_fuel_type,
                        FuelTypeMacroMappingDBModel.scope == scope,
                    )
                )
                if existing.scalars().first():
                    continue

                await repo.create(
                    vehicle_fuel_type=vehicle_fuel_type,
                    macro_fuel_type_id=macro.id,
                    scope=scope,
                    description=row.get("Description", "").strip(),
                )
                count += 1
            except ROW_ERRORS as e:
                self._skip_row("fuel type mapping", row, e)

        logger.info(f"Created {count} fuel type mappings")
        return count

    async def seed_gwp_configs(self) -> int:
        """
        Load GWP values from GWP_Values.csv as active rows.

        Returns:
            Number of GWP configurations created
        """
        repo = GwpConfigRepository(self.session)
        count = 0

        for row in self._read_rows("GWP_Values.csv"):
            try:
                gas_name = row["Gas"].strip().upper()
                if gas_name.lower() not in KYOTO_GASES:
                    raise ValueError(f"unknown gas {gas_name!r}")
                source = row["Source"].strip()

                existing = await self.session.execute(
                    select(GwpConfigDBModel).where(
                        GwpConfigDBModel.gas_name == gas_name,
                        GwpConfigDBModel.source == source,
                    )
                )
                if existing.scalars().first():
                    continue

                active = await self.session.execute(
                    select(GwpConfigDBModel).where(
                        GwpConfigDBModel.gas_name == gas_name,
                        GwpConfigDBModel.is_active.is_(True),
                    )
                )
                await repo.create(
                    gas_name=gas_name,
                    gwp_value=UnitConverter.normalize_number(row["GWP"]),
                    source=source,
                    is_active=active.scalars().first() is None,
                )
                count += 1
            except ROW_ERRORS as e:
                self._skip_row("GWP configuration", row, e)

        logger.info(f"Created {count} GWP configurations")
        return count

    async def seed_emission_factors(self) -> int:
        """
        Load emission factors from Emission_Factors.csv.

        Factors are append-only: a row already present for the same macro fuel
        type, override, effective date and source is skipped.

        Returns:
            Number of emission factors created
        """
        macro_repo = MacroFuelTypeRepository(self.session)
        repo = EmissionFactorRepository(self.session)
        count = 0

        for row in self._read_rows("Emission_Factors.csv"):
            try:
                macro = await macro_repo.get_by_name(row["Macro fuel type"].strip())
                if macro is None:
                    raise ValueError(f"unknown macro fuel type {row['Macro fuel type']!r}")
                fuel_type = (row.get("Fuel type") or "").strip() or None
                effective_date = _parse_date(row["Effective date"])
                source = row["Source"].strip()

                existing = await self.session.execute(
                    select(EmissionFactorDBModel.id).where(
                        EmissionFactorDBModel.macro_fuel_type_id == macro.id,
                        EmissionFactorDBModel.fuel_type.is_(None)
                        if fuel_type is None
                        else EmissionFactorDBModel.fuel_type == fuel_type,
                        EmissionFactorDBModel.effective_date == effective_date,
                        EmissionFactorDBModel.source == source,
                    )
                )
                if existing.scalars().first():
                    continue

                gases = {gas: UnitConverter.normalize_number(row.get(gas.upper())) for gas in KYOTO_GASES}
                if any(value < 0 for value in gases.values()):
                    raise ValueError("gas factors must be non-negative")

                await repo.create(
                    macro_fuel_type_id=macro.id,
                    fuel_type=fuel_type,
                    source=source,
                    effective_date=effective_date,
                    created_by="seed",
                    **gases,
                )
                count += 1
            except ROW_ERRORS as e:
                self._skip_row("emission factor", row, e)

        logger.info(f"Created {count} emission factors")
        return count

    async def seed_vehicles(self) -> int:
        """
        Load demo vehicles and their engines from Vehicles.csv.

        Returns:
            Number of vehicles created
        """
        repo = VehicleRepository(self.session)
        count = 0

        for row in self._read_rows("Vehicles.csv"):
            try:
                license_plate = row["License plate"].strip()
                if await repo.count({"license_plate": license_plate}):
                    continue

                vehicle = await repo.create(
                    license_plate=license_plate,
                    make=row.get("Make", "").strip() or None,
                    model=row.get("Model", "").strip() or None,
                    is_hybrid=_parse_bool(row.get("Hybrid", "")),
                )
                for position in (1, 2):
                    fuel_type = (row.get(f"Engine {position} fuel type") or "").strip()
                    if not fuel_type:
                        continue
                    co2 = (row.get(f"Engine {position} CO2 g/km") or "").strip()
                    self.session.add(
                        EngineDBModel(
                            vehicle_id=vehicle.id,
                            position=position,
                            fuel_type=fuel_type,
                            co2_g_km=UnitConverter.normalize_number(co2) if co2 else None,
                        )
                    )
                await self.session.flush()
                count += 1
            except ROW_ERRORS as e:
                self._skip_row("vehicle", row, e)

        logger.info(f"Created {count} vehicles")
        return count

    async def seed_fuel_records(self) -> int:
        """
        Load demo fuel records from Fuel_Records.csv.

        A record with the same vehicle, date and odometer value is skipped.

        Returns:
            Number of fuel records created
        """
        repo = VehicleRepository(self.session)
        vehicles = {v.license_plate: v for v in await repo.get_all(limit=10_000)}
        count = 0

        for row in self._read_rows("Fuel_Records.csv"):
            try:
                vehicle = vehicles.get(row["License plate"].strip())
                if vehicle is None:
                    raise ValueError(f"unknown vehicle {row['License plate']!r}")
                record_date = _parse_date(row["Date"])
                odometer_km = int(row["Odometer km"])
                existing = await self.session.execute(
                    select(FuelRecordDBModel.id).where(
                        FuelRecordDBModel.vehicle_id == vehicle.id,
                        FuelRecordDBModel.date == record_date,
                        FuelRecordDBModel.odometer_km == odometer_km,
                    )
                )
                if existing.scalars().first():
                    continue

                kwh = (row.get("kWh") or "").strip()
                self.session.add(
                    FuelRecordDBModel(
                        vehicle_id=vehicle.id,
                        date=record_date,
                        fuel_type=row["Fuel type"].strip(),
                        quantity_litres=UnitConverter.normalize_number(row.get("Litres")),
                        quantity_kwh=UnitConverter.normalize_number(kwh) if kwh else None,
                        odometer_km=odometer_km,
                    )
                )
                count += 1
            except ROW_ERRORS as e:
                self._skip_row("fuel record", row, e)

        await self.session.flush()
        logger.info(f"Created {count} fuel records")
        return count
