"""Configuration management using Pydantic Settings.

This module provides centralized, type-safe configuration for Weighted Graph.
Configuration is loaded from environment variables with sensible defaults.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from weighted_graph.core.exceptions import ConfigurationError


class AppSettings(BaseSettings):
    """Application-level settings."""

    model_config = SettingsConfigDict(env_prefix="APP_")

    name: str = "weighted-graph"
    env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class GraphSettings(BaseSettings):
    """Graph storage and construction settings."""

    model_config = SettingsConfigDict(env_prefix="GRAPH_")

    storage_path: Path = Path("./data/graphs")
    json_indent: int = Field(default=2, ge=0, le=8)
    compress: bool = False

    # Initial value of the non-derived ``weighted`` flag for new stores
    weighted: bool = True


class Settings(BaseSettings):
    """Main settings container aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    graph: GraphSettings = Field(default_factory=GraphSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: The application settings instance.

    Raises:
        ConfigurationError: If an environment variable holds an invalid value.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} error(s)",
            details={"errors": [err["msg"] for err in e.errors()]},
            cause=e,
        ) from e
