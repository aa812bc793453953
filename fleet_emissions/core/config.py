"""
Application configuration following kkb_fastapi pattern.

Configuration lives in TOML files under ``fleet_emissions/config``.
"""
import logging
import os
from functools import lru_cache
from pathlib import Path

import toml

from fleet_emissions.utils.constants import ConfigFile

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


class Config:
    """Parsed configuration file."""

    def __init__(self, config_file: str):
        self.config_file = config_file
        self.path = CONFIG_DIR / config_file
        if not self.path.exists():
            raise FileNotFoundError(f"Config file not found: {self.path}")
        self.data = toml.load(self.path)

    def __repr__(self):
        return f"<Config: {self.config_file}>"


@lru_cache(maxsize=None)
def get_config(config_file: str = ConfigFile.DEVELOPMENT) -> Config:
    """
    Load (and cache) a configuration file.

    Args:
        config_file: Configuration file name (e.g., "development.toml")

    Returns:
        Config instance
    """
    logging.debug(f"Loading configuration from {config_file}")
    return Config(config_file)


def get_environment_config() -> Config:
    """Load the configuration selected by the ENVIRONMENT variable."""
    env = os.getenv("ENVIRONMENT", "development")
    return get_config(f"{env}.toml")


def get_emission_calculation_setting(key: str, default):
    """
    Read one ``[emission_calculation]`` setting for the current environment.

    Args:
        key: Setting name
        default: Value returned when the setting or the config file is missing

    Returns:
        The configured value, or ``default``
    """
    try:
        config = get_environment_config()
    except FileNotFoundError as e:
        logging.warning(f"Failed to read {key} from config: {e}. Using default {default!r}")
        return default
    return config.data.get("emission_calculation", {}).get(key, default)


__all__ = [
    "Config",
    "ConfigFile",
    "get_config",
    "get_emission_calculation_setting",
    "get_environment_config",
]
