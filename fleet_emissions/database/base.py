"""
Database base configuration following kkb_fastapi pattern.

Handles async engine creation for PostgreSQL (asyncpg) and SQLite (aiosqlite).
"""
import asyncio
import contextlib
import functools
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as alembic_config
from sqlalchemy import text
from sqlalchemy.engine.url import URL
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool

from fleet_emissions.core.config import Config

DEFAULT_DRIVERNAME = "postgresql+asyncpg"

engine_kw = {
    "pool_pre_ping": True,
    # feature will normally emit SQL equivalent to "SELECT 1" each time a connection is checked out from the pool
    "pool_size": 2,  # number of connections to keep open at a time
    "max_overflow": 4,  # number of connections to allow to be opened above pool_size
    "connect_args": {
        "prepared_statement_cache_size": 0,  # disable prepared statement cache
        "statement_cache_size": 0,  # disable statement cache
    },
}


def get_db_url(config: Config) -> URL:
    """
    Construct database URL from config.

    The ``drivername`` key is optional and defaults to asyncpg.
    """
    config_db = dict(config.data["db"])
    drivername = config_db.pop("drivername", DEFAULT_DRIVERNAME)
    return URL.create(drivername=drivername, **config_db)


def get_engine_kw(async_db_url: URL) -> dict:
    """
    Engine keyword arguments suited to the URL's dialect.

    SQLite connections are not pooled and take no asyncpg connect args.
    """
    if async_db_url.get_backend_name() == "sqlite":
        return {}
    return engine_kw


def get_async_engine(async_db_url: URL) -> AsyncEngine:
    """
    Create async database engine with connection pooling.
    """
    if async_db_url.get_backend_name() == "sqlite":
        return create_async_engine(async_db_url)

    async_engine = create_async_engine(
        async_db_url,
        poolclass=AsyncAdaptedQueuePool,
        pool_recycle=3600,
        pool_pre_ping=True,
        pool_size=60,
        max_overflow=80,
        pool_timeout=30,
    )
    return async_engine


async def create_database(config: Config) -> bool:
    """
    Ensures the PostgreSQL database specified in the config exists.
    Connects to the 'postgres' maintenance database to issue CREATE DATABASE.

    Args:
        config: The application configuration.

    Returns:
        True if the database was newly created by this function.
        False if the database already existed or the backend is not PostgreSQL.

    Raises:
        ValueError: If the database name is missing in the configuration.
        DBAPIError: If the database could not be created.
    """
    db_params = dict(config.data["db"])
    drivername = db_params.pop("drivername", DEFAULT_DRIVERNAME)
    target_database_name = db_params.pop("database", None)

    if not target_database_name:
        logging.error("Database name not found in configuration for creation.")
        raise ValueError("Database name missing in configuration for creation.")

    if not drivername.startswith("postgresql"):
        logging.info(f"Skipping CREATE DATABASE for {drivername} backend")
        return False

    maintenance_url = URL.create(
        drivername=drivername, **{**db_params, "database": "postgres"}
    )
    maintenance_engine = None
    try:
        maintenance_engine = get_async_engine(maintenance_url)
        logging.info(
            f"Attempting to create database '{target_database_name}' on {db_params.get('host')}"
        )
        async with maintenance_engine.connect() as connection:
            # CREATE DATABASE cannot run inside a transaction block
            autocommit_connection = await connection.execution_options(
                isolation_level="AUTOCOMMIT"
            )
            await autocommit_connection.execute(
                text(f'CREATE DATABASE "{target_database_name}"')
            )
        logging.info(f"Database '{target_database_name}' created successfully.")
        return True
    except DBAPIError as e:
        # 42P04: duplicate_database
        with contextlib.suppress(AttributeError):
            if getattr(e.orig, "pgcode", None) == "42P04":
                logging.warning(
                    f"Database '{target_database_name}' already exists. No action taken."
                )
                return False

        logging.error(
            f"A DBAPIError occurred while trying to create database '{target_database_name}': {e}"
        )
        raise
    finally:
        if maintenance_engine:
            await maintenance_engine.dispose()


async def apply_db_migration(config: Config):
    """
    Create the database if needed and upgrade it to the latest Alembic revision.

    Alembic runs in a worker thread so the event loop is not blocked.
    """
    await create_database(config)

    alembic_cfg = alembic_config(str(Path.cwd() / "alembic.ini"))
    alembic_cfg.set_main_option(
        "script_location", str(Path.cwd() / "alembic_migrations")
    )

    # env.py drives the async engine itself; configparser needs '%' escaped
    async_url = get_db_url(config).render_as_string(hide_password=False)
    alembic_cfg.set_main_option("sqlalchemy.url", async_url.replace("%", "%%"))

    logging.info("Starting database migrations...")
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(
        None, functools.partial(command.upgrade, alembic_cfg, "head")
    )
    logging.info("Database migration completed successfully")
