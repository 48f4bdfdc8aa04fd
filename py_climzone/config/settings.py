"""Configuration management."""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from ``CLIMZONE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CLIMZONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="json", pattern="^(json|plain)$", description="Logging format (json or plain)"
    )

    # Projection timeline
    timeline_start_year: int = Field(default=2026, description="First year of the projection timeline")
    timeline_end_year: int = Field(default=2050, description="Last year of the projection timeline")

    # Caller-side zone cache
    zone_cache_size: int = Field(default=128, ge=1, description="Max zones held by a ZoneCache")

    @model_validator(mode="after")
    def check_timeline(self) -> "Settings":
        if self.timeline_end_year < self.timeline_start_year:
            raise ValueError("timeline_end_year must not precede timeline_start_year")
        return self


# Instantiate singleton settings object
settings = Settings()
