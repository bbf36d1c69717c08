"""
Configuration settings for TableFill.

Uses Pydantic Settings to load environment variables for the target database,
logging, and the recipe knobs that shape the generated event sequence.
Defaults reproduce the canned 40-channel test run.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tablefill.domain.layouts import LAYOUTS

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    # Database
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("task_scheduler", alias="DB_NAME")
    db_schema: str = Field("public", alias="DB_SCHEMA")
    db_table: str = Field("ControlEvent", alias="DB_TABLE")
    db_connect_timeout: int = Field(10, ge=1, alias="DB_CONNECT_TIMEOUT")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Recipe
    recipe_id: int = Field(1, alias="RECIPE_ID")
    layout: str = Field("io40", alias="LAYOUT")
    channel_count: Optional[int] = Field(None, ge=1, alias="CHANNEL_COUNT")
    entered_by: int = Field(1, alias="ENTERED_BY")
    edited_by: int = Field(1, alias="EDITED_BY")

    # Timing (milliseconds)
    start_delay_ms: int = Field(1_000, ge=0, alias="START_DELAY_MS")
    hop_ms: int = Field(80, ge=0, alias="HOP_MS")
    phase_gap_ms: int = Field(100, ge=0, alias="PHASE_GAP_MS")
    random_count: int = Field(200, ge=0, alias="RANDOM_COUNT")
    random_hop_min_ms: int = Field(75, ge=0, alias="RANDOM_HOP_MIN_MS")
    random_hop_max_ms: int = Field(500, ge=0, alias="RANDOM_HOP_MAX_MS")
    seed: Optional[int] = Field(None, alias="SEED")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level '{value}'. Available: {', '.join(LOG_LEVELS)}"
            )
        return level

    @field_validator("layout")
    @classmethod
    def _check_layout(cls, value: str) -> str:
        if value not in LAYOUTS:
            raise ValueError(
                f"Unknown layout '{value}'. Available: {', '.join(sorted(LAYOUTS))}"
            )
        return value

    @model_validator(mode="after")
    def _check_random_hop_range(self) -> "Settings":
        if self.random_hop_min_ms > self.random_hop_max_ms:
            raise ValueError(
                f"random_hop_min_ms ({self.random_hop_min_ms}) must not exceed "
                f"random_hop_max_ms ({self.random_hop_max_ms})"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
