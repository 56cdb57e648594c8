"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from ..github.client import DEFAULT_BASE_URL


class Settings(BaseSettings):
    """Application settings."""

    access_token: str | None = Field(
        default=None,
        description="GitHub access token with the gist scope",
    )

    api_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="GitHub REST API base URL",
    )

    max_workers: int = Field(
        default=8,
        ge=1,
        description="Documents processed in parallel during pull",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "CFGSYNC_",
    }
