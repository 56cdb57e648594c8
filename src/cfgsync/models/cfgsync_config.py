"""Configuration model for cfgsync.yml."""

from pathlib import PurePosixPath

from pydantic import BaseModel, Field, field_validator


class CfgsyncConfig(BaseModel):
    """Per-tree defaults read from ``cfgsync.yml`` in the config directory."""

    root_file: str | None = Field(
        default=None,
        description="Root cfg file, relative to the config directory (e.g. autoexec.cfg)",
    )
    gist_id: str | None = Field(default=None, description="Gist to push to and pull from")
    output_file: str = Field(default="compiled.cfg", min_length=1)
    max_workers: int | None = Field(default=None, ge=1)

    @field_validator("root_file")
    @classmethod
    def validate_root_file(cls, v: str | None) -> str | None:
        """Root file must be a relative path inside the tree."""
        if v is None:
            return v
        path = PurePosixPath(v)
        if path.is_absolute() or ".." in path.parts:
            raise ValueError("root_file must be relative to the config directory")
        return v

    @field_validator("output_file")
    @classmethod
    def validate_output_file(cls, v: str) -> str:
        """Output file is a bare filename."""
        if "/" in v or "\\" in v:
            raise ValueError("output_file must be a filename, not a path")
        return v

    @classmethod
    def default(cls) -> "CfgsyncConfig":
        """Configuration used when no cfgsync.yml exists."""
        return cls()
