"""
FastAPI application factory following kkb_fastapi pattern.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fleet_emissions.api import (
    calculations_router,
    catalog_router,
    emission_contexts_router,
    health_router,
    vehicles_router,
)
from fleet_emissions.core.config import get_config
from fleet_emissions.database.base import get_db_url, get_engine_kw
from fleet_emissions.database.session_manager.db_session import Database
from fleet_emissions.services.exceptions import (
    EmissionEngineError,
    FactorNotFound,
    InsufficientData,
    MappingNotFound,
)

logging.basicConfig(
    level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Domain errors -> HTTP status
ENGINE_ERROR_STATUS = {
    FactorNotFound: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InsufficientData: status.HTTP_422_UNPROCESSABLE_ENTITY,
    MappingNotFound: status.HTTP_404_NOT_FOUND,
}


def register_routers(app: FastAPI):
    """Register all API routers."""
    app.include_router(health_router)
    app.include_router(catalog_router)
    app.include_router(emission_contexts_router)
    app.include_router(calculations_router)
    app.include_router(vehicles_router)


def register_exception_handlers(app: FastAPI):
    """Register exception handlers."""

    @app.exception_handler(EmissionEngineError)
    async def emission_engine_exception_handler(request: Request, exc: EmissionEngineError):
        """Handle emission engine errors."""
        status_code = ENGINE_ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logging.warning(f"{type(exc).__name__} occurred: {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content={"detail": exc.message, "error": type(exc).__name__},
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions."""
        logging.error(f"HTTPException occurred: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code, content={"detail": str(exc.detail)}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors."""
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": jsonable_errors(exc),
                "message": "Validation error",
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logging.error(f"Exception occurred: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)}
        )


def jsonable_errors(exc: RequestValidationError) -> list:
    # error contexts can carry exception instances that JSONResponse cannot encode
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Handles database initialization and cleanup.
    """
    logging.info("Application startup")
    async_db_url = get_db_url(app.state.config)

    Database.init(async_db_url, engine_kw=get_engine_kw(async_db_url))
    logging.info("Initialized database")

    try:
        yield
    finally:
        await Database.dispose()
        logging.info("Application shutdown")


def get_app(config_file: str) -> FastAPI:
    """
    Application factory function.

    Args:
        config_file: Configuration file name (e.g., "production.toml")

    Returns:
        Configured FastAPI application instance
    """
    config = get_config(config_file)

    app = FastAPI(
        title=config.data.get("api", {}).get("title", "Fleet Emissions Engine API"),
        description=config.data.get("api", {}).get(
            "description", "Theoretical vs real greenhouse-gas emissions for fleet vehicles"
        ),
        version=config.data.get("api", {}).get("version", "1.0.0"),
        debug=config.data.get("api", {}).get("debug", False),
        lifespan=lifespan,
        # Generate better OpenAPI schema for enums
        generate_unique_id_function=lambda route: (
            f"{route.tags[0]}-{route.name}" if route.tags else route.name
        ),
    )

    app.state.config = config

    register_routers(app)
    register_exception_handlers(app)

    # Set up CORS middleware
    origins = [
        "http://localhost:3000",  # For local development
        "http://127.0.0.1:3000",
    ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app
