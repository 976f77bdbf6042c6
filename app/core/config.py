"""
Configuration loading.

Each environment has its own TOML file under ``app/cfg``; secrets are read from
environment variables rather than stored in those files.
"""
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import toml

from app.utils.constants import (
    CLIMATIQ_API_KEY_ENV,
    CLIMATIQ_BASE_URL,
    CLIMATIQ_DATA_VERSION,
    CLIMATIQ_TIMEOUT_SECONDS,
    DEFAULT_REGION,
    SUPABASE_ANON_KEY_ENV,
    ConfigFile,
)

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent.parent / "cfg"

__all__ = ["Config", "ConfigFile", "get_config", "get_config_file_for_environment"]


class Config:
    """Parsed TOML configuration for one environment."""

    def __init__(self, config_file: str):
        self.config_file = config_file
        self.data: dict[str, Any] = toml.load(CONFIG_DIR / config_file)

    def __repr__(self):
        return f"<Config: {self.config_file}>"

    @property
    def climatiq(self) -> dict[str, Any]:
        return self.data.get("climatiq", {})

    @property
    def climatiq_base_url(self) -> str:
        return self.climatiq.get("base_url", CLIMATIQ_BASE_URL)

    @property
    def climatiq_data_version(self) -> str:
        return str(self.climatiq.get("data_version", CLIMATIQ_DATA_VERSION))

    @property
    def climatiq_timeout(self) -> float:
        return float(self.climatiq.get("timeout_seconds", CLIMATIQ_TIMEOUT_SECONDS))

    @property
    def climatiq_api_key(self) -> str | None:
        return os.environ.get(CLIMATIQ_API_KEY_ENV) or None

    @property
    def supabase_url(self) -> str | None:
        return self.data.get("auth", {}).get("supabase_url") or None

    @property
    def supabase_anon_key(self) -> str | None:
        return os.environ.get(SUPABASE_ANON_KEY_ENV) or None

    @property
    def default_region(self) -> str:
        return self.data.get("persistence", {}).get("default_region", DEFAULT_REGION)


@lru_cache
def get_config(config_file: str = ConfigFile.DEVELOPMENT) -> Config:
    """
    Load configuration from a TOML file in ``app/cfg``.

    Args:
        config_file: Configuration file name (e.g., "production.toml")

    Returns:
        Config instance
    """
    logger.info(f"Loading configuration from {config_file}")
    return Config(config_file)


def get_config_file_for_environment() -> str:
    """Map the ENVIRONMENT variable to a configuration file name."""
    env = os.getenv("ENVIRONMENT", "development")
    return f"{env}.toml"
