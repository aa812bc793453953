"""
Pytest configuration and fixtures following kkb_fastapi pattern.
"""
import logging
import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

# Services that read settings at construction time pick up test.toml
os.environ.setdefault("ENVIRONMENT", "test")

from fleet_emissions.core.config import ConfigFile, get_config  # noqa: E402
from fleet_emissions.create_app import get_app  # noqa: E402
from fleet_emissions.database import Base  # noqa: E402
from fleet_emissions.database.base import get_db_url, get_engine_kw  # noqa: E402
from fleet_emissions.database.session_manager.db_session import Database  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@pytest.fixture(scope="session")
def test_config():
    """
    Get test configuration.

    Returns configuration with test database settings.
    """
    return get_config(ConfigFile.TEST)


@pytest_asyncio.fixture(scope="function")
async def test_async_engine(test_config):
    """
    Create async database engine for testing.
    """
    async_db_url = get_db_url(test_config)
    test_engine = create_async_engine(async_db_url, **get_engine_kw(async_db_url))

    yield test_engine

    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function", autouse=True)
async def db_cleanup(test_async_engine):
    """
    Clean database before and after each test.

    Drops all tables, recreates them, then drops again after test.
    Ensures clean state for each test.
    """
    async with test_async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_db_session(test_config, db_cleanup):
    """
    Initialize Database singleton for testing.

    Sets up database session manager with test configuration.
    """
    async_db_url = get_db_url(test_config)
    Database.init(async_db_url, engine_kw=get_engine_kw(async_db_url))

    yield

    await Database.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_app(test_config):
    """
    Create FastAPI application with test configuration.

    Returns configured FastAPI app instance for testing.
    """
    app = get_app(ConfigFile.TEST)
    app.state.config = test_config

    yield app


@pytest_asyncio.fixture(scope="function")
async def test_async_client(test_app):
    """
    Create async HTTP client for API testing.

    Uses httpx AsyncClient with ASGITransport for testing FastAPI endpoints.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(
        transport=transport, base_url="http://localhost:8000", follow_redirects=True
    ) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def test_db_session():
    """
    Provide database session for tests.

    Creates async session using Database context manager.
    """
    async with Database() as session:
        yield session
