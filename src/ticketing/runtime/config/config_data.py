"""Pydantic models for parsing the config.yaml configuration file.

These models mirror the structure under the top-level ``config:`` key and
handle validation and type conversion of the YAML data.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )


class StorageConfig(BaseModel):
    """Where each entity kind keeps its JSON records."""

    data_dir: str = Field(
        default=".", description="Directory holding the record files"
    )
    train_file: str = Field(
        default="trains.json", description="Record file for trains"
    )
    vehicle_file: str = Field(
        default="vehicles.json", description="Record file for vehicles"
    )
    strict_reads: bool = Field(
        default=False,
        description="Raise on corrupt record files instead of reading them as empty",
    )

    def path_for(self, kind_name: str, default_file: str) -> Path:
        """Resolve the record file for an entity kind.

        Both kinds may be pointed at the same file; their collections then
        share one JSON array and decode each other's records with an empty id.
        """
        file_name = getattr(self, f"{kind_name}_file", None) or default_file
        return Path(self.data_dir) / file_name


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="WARNING", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log file format")
    file: str | None = Field(default=None, description="Log file path, None to disable")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of rotated log files to keep"
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    storage: StorageConfig = Field(
        default_factory=StorageConfig, description="Record storage configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
