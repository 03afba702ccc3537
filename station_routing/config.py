"""Centralized configuration using Pydantic Settings.

This module is the single source of truth for where the station dataset
lives, how the network graph is interpreted and how logging is set up.

Configuration can be overridden via environment variables:
- SR_DATASET_DATA_DIR=/path/to/data
- SR_DATASET_FORMAT=csv
- SR_ROUTING_SYMMETRIC_ADJACENCY=false
- SR_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatasetConfig(BaseSettings):
    """Station dataset location and format.

    Environment variables prefixed with SR_DATASET_.
    """

    model_config = SettingsConfigDict(env_prefix="SR_DATASET_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    format: Literal["json", "csv"] = "json"
    stations_file: str = "stations.json"
    csv_stations_file: str = "stations.csv"
    csv_edges_file: str = "edges.csv"

    @property
    def json_path(self) -> Path:
        """Full path to the JSON station dataset."""
        return self.data_dir / self.stations_file

    @property
    def csv_stations_path(self) -> Path:
        """Full path to the stations CSV file."""
        return self.data_dir / self.csv_stations_file

    @property
    def csv_edges_path(self) -> Path:
        """Full path to the edges CSV file."""
        return self.data_dir / self.csv_edges_file


class RoutingConfig(BaseSettings):
    """Graph interpretation settings.

    Environment variables prefixed with SR_ROUTING_.
    """

    model_config = SettingsConfigDict(env_prefix="SR_ROUTING_")

    # When False, edges are taken as declared and distances may differ by
    # direction.
    symmetric_adjacency: bool = True


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with SR_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="SR_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.dataset.json_path)
        print(config.routing.symmetric_adjacency)

    Environment variables prefixed with SR_.
    """

    model_config = SettingsConfigDict(env_prefix="SR_")

    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @property
    def project_root(self) -> Path:
        """Return the project root directory."""
        return Path(__file__).resolve().parent.parent


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
