"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.shared import EnumEnvironment, EnumLogLevel


class GESettings(BaseSettings):
    """Service identity and web server settings."""

    title: str = Field(default="Risk Forecast Dashboard", description="Service title")
    description: str = Field(
        default="Synthetic risk metrics rolled forward one day at a time "
        "and forecast with singular spectrum analysis",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("GE_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("GE_BUILD_TIME", "BUILD_TIME"),
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    host: str = Field(default="0.0.0.0", description="Interface to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="GE_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class ForecastSettings(BaseSettings):
    """SSA forecast parameters applied on every roll-forward cycle."""

    window_size: int = Field(default=50, description="SSA embedding window (L)")
    series_length: int = Field(
        default=100, description="Trailing history length fed to the forecaster"
    )
    train_fraction: float = Field(
        default=0.8, description="Share of the trailing history used to fit"
    )
    horizon: int = Field(default=20, description="Number of forecast steps")
    confidence_level: float = Field(
        default=0.95, description="Two-sided confidence level of the bounds"
    )
    rank: Optional[int] = Field(
        default=None,
        description="Fixed number of eigentriples (None selects by energy)",
    )
    energy_threshold: float = Field(
        default=0.9, description="Cumulative energy kept when rank is not fixed"
    )

    model_config = SettingsConfigDict(
        env_prefix="FORECAST_", case_sensitive=False, extra="ignore"
    )


class SimulationSettings(BaseSettings):
    """Synthetic series generation and roll-forward scheduling."""

    factor_count: int = Field(default=2, description="Number of risk factors")
    history_length: int = Field(
        default=100, description="Historical points generated per series"
    )
    sample_count: int = Field(
        default=100, description="Sample count attached to every point"
    )
    seed: int = Field(default=12345, description="Seed of the random source")
    roll_forward_interval_seconds: float = Field(
        default=0.0,
        description="Seconds between scheduled cycles (0 disables the scheduler)",
    )

    model_config = SettingsConfigDict(
        env_prefix="SIMULATION_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    ge: GESettings = Field(default_factory=GESettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    forecast: ForecastSettings = Field(default_factory=ForecastSettings)
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on enviroment.
    """
    return AppSettings()


settings = get_settings()
