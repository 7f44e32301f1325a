"""Configuration settings for cloudtail."""

import os
from pydantic_settings import BaseSettings
from ..core.constants import (
    ENV_API_BASE_URL, ENV_ACCESS_TOKEN, ENV_LOCAL_CREDS, ENV_PROJECT_ID,
    ENV_POLL_INTERVAL_MS, ENV_VERBOSE,
    DEFAULT_API_BASE_URL, DEFAULT_POLL_INTERVAL_MS,
)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "false").lower() in ("true", "1", "yes")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    This uses Pydantic Settings for environment variable loading.
    """
    # API settings
    API_BASE_URL: str = os.environ.get(ENV_API_BASE_URL, DEFAULT_API_BASE_URL)
    ACCESS_TOKEN: str = os.environ.get(ENV_ACCESS_TOKEN, "")
    LOCAL_CREDS: bool = _env_flag(ENV_LOCAL_CREDS)

    # Project settings
    PROJECT_ID: str = os.environ.get(ENV_PROJECT_ID, "")
    POLL_INTERVAL_MS: int = int(
        os.environ.get(ENV_POLL_INTERVAL_MS, DEFAULT_POLL_INTERVAL_MS)
    )

    # General settings
    VERBOSE: bool = _env_flag(ENV_VERBOSE)


# Create a singleton settings instance
settings = Settings()
