"""
FastAPI dependencies following kkb_fastapi pattern.
"""
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_emissions.database.session_manager.db_session import Database


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session that is committed after the request, rolled back on error."""
    async with Database() as session:
        yield session


def get_emission_settings(request: Request) -> dict:
    """The ``[emission_calculation]`` section of the app's configuration."""
    return request.app.state.config.data.get("emission_calculation", {})
