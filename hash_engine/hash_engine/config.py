"""Hash engine configuration loaded from environment variables."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hash_engine.projections.render import OutputForm

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings loaded from environment variables with HASHDIFF_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="HASHDIFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Comparison output
    default_format: OutputForm = OutputForm.TARGETS
    include_removed: bool = False
    json_indent: int = Field(default=2, ge=0)

    # Snapshot capture
    default_targets_pattern: str = "//..."

    # Logging
    verbose: bool = False
    structured_logging: bool = False

    # Telemetry
    metrics_file: Path | None = None

    @field_validator("default_format", mode="before")
    @classmethod
    def normalise_format(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]
    logger.debug("Loaded settings (default format: %s)", settings.default_format.value)

    return settings
