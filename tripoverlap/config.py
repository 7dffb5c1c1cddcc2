"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.dates import to_date

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DefaultsConfig(BaseModel):
    """Default settings for search."""
    duration_days: int = 3
    top_limit: int = 5

    @field_validator("duration_days")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure the block length is positive."""
        if value <= 0:
            raise ValueError("duration_days must be greater than zero")
        return value

    @field_validator("top_limit")
    @classmethod
    def validate_top_limit(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("top_limit must be greater than zero")
        return value


class TripConfig(BaseModel):
    """The date range the group is planning within."""
    start_date: str
    end_date: str

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def validate_date(cls, value: Any) -> str:
        """Accept YAML dates or YYYY-MM-DD strings."""
        if isinstance(value, date):
            return to_date(value).isoformat()
        if not isinstance(value, str):
            raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
        return to_date(value).isoformat()

    @model_validator(mode="after")
    def validate_order(self) -> "TripConfig":
        """Ensure the trip starts before it ends."""
        if self.get_start_date() > self.get_end_date():
            raise ValueError("start_date must not be after end_date")
        return self

    def get_start_date(self) -> date:
        return to_date(self.start_date)

    def get_end_date(self) -> date:
        return to_date(self.end_date)


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    trip: Optional[TripConfig] = None
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value}")
        return level

    def get_log_level(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    def resolve_range(
        self,
        start: Optional[str] = None,
        end: Optional[str] = None
    ) -> Tuple[date, date]:
        """
        Combine explicit range options with the configured trip.

        Raises:
            ValueError: If either end of the range is unknown
        """
        start_date = to_date(start) if start else None
        end_date = to_date(end) if end else None

        if self.trip is not None:
            start_date = start_date or self.trip.get_start_date()
            end_date = end_date or self.trip.get_end_date()

        if start_date is None or end_date is None:
            raise ValueError(
                "No trip date range given. Pass --start and --end "
                "or configure 'trip' in config.yaml."
            )

        return start_date, end_date


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
