"""
Main FastAPI application entry point.
"""
import logging
import os

import uvicorn

from fleet_emissions.core.config import get_environment_config
from fleet_emissions.create_app import get_app

logging.basicConfig(level=logging.DEBUG)

app = get_app(get_environment_config().config_file)


if __name__ == "__main__":
    try:
        uvicorn.run(
            app,
            host="0.0.0.0",
            port=int(os.environ.get("PORT", 8000)),
            log_level="debug",
            loop="asyncio",
        )
    except Exception as e:
        logging.error(f"Error running FastAPI: {e}")
