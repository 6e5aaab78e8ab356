"""Configuration management."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PY_POISSON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: Literal["json", "plain"] = Field(
        default="json", description="Logging format (plain or json)"
    )

    # Sampling
    candidates_per_point: int = Field(
        default=30,
        gt=0,
        description="Candidate points tried around every processed point",
    )
    neighbor_window: Literal["trimmed", "full"] = Field(
        default="trimmed",
        description="Grid cells inspected per distance check (21 or 25)",
    )
    default_seed: str = Field(
        default="default", description="Seed for the fallback PRNG"
    )


settings = Settings()
