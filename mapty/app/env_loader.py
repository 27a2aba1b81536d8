"""Load environment variables early for the FastAPI app.

For local dev, loads a .env.dev file. In prod, env vars are expected to be
set by whatever launches the process, so no .env file is loaded.
"""

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from mapty.db.connection import get_storage_path

from .constants import (
    DEFAULT_ALLOWED_ORIGINS,
    DEFAULT_ERROR_BANNER_SECONDS,
    DEFAULT_MAP_ZOOM_LEVEL,
    DEFAULT_STORAGE_KEY,
)

EnvironmentName = Literal["dev", "prod"]


class Settings(BaseModel):
    """Runtime configuration read from environment variables."""

    storage_path: Path
    storage_key: str = DEFAULT_STORAGE_KEY
    map_zoom_level: int = Field(default=DEFAULT_MAP_ZOOM_LEVEL, ge=0, le=20)
    error_banner_seconds: float = Field(default=DEFAULT_ERROR_BANNER_SECONDS, gt=0)
    allowed_origins: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS)
    )


# Load env vars before any app code runs.
env = os.getenv("ENV", "dev")
if env == "prod":
    print(f"Running in {env} environment (env vars from the process environment)")
elif env == "dev":
    print("Loading environment variables from .env.dev")
    load_dotenv(".env.dev", verbose=True)
else:
    raise ValueError(f"Invalid ENV value: {env}. Must be 'dev' or 'prod'.")


def get_current_environment() -> EnvironmentName:
    """Get the current environment (dev or prod)."""
    env = os.getenv("ENV", "dev")
    if env in ("dev", "prod"):
        return env  # type: ignore[return-value]
    raise ValueError(f"Invalid ENV value: {env}. Must be 'dev' or 'prod'.")


def get_settings() -> Settings:
    """Build settings from the environment, falling back to defaults.

    Raises:
        pydantic.ValidationError: If a variable is set to an invalid value.
    """
    values: dict[str, object] = {"storage_path": get_storage_path()}
    if "MAPTY_STORAGE_KEY" in os.environ:
        values["storage_key"] = os.environ["MAPTY_STORAGE_KEY"]
    if "MAPTY_MAP_ZOOM_LEVEL" in os.environ:
        values["map_zoom_level"] = os.environ["MAPTY_MAP_ZOOM_LEVEL"]
    if "MAPTY_ERROR_BANNER_SECONDS" in os.environ:
        values["error_banner_seconds"] = os.environ["MAPTY_ERROR_BANNER_SECONDS"]
    if "MAPTY_ALLOWED_ORIGINS" in os.environ:
        values["allowed_origins"] = [
            origin.strip()
            for origin in os.environ["MAPTY_ALLOWED_ORIGINS"].split(",")
            if origin.strip()
        ]
    return Settings.model_validate(values)
