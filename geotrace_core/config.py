"""
Configuration schema for a geotrace session.

This module defines the configuration structure for a location session:
region limits for the map viewport, location source settings and the
logging level.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict
import logging
import yaml

from geotrace_core.analytics.region import RegionLimits


class AccuracyMode(str, Enum):
    """Desired accuracy requested from the location source."""
    BEST = "best"
    BEST_FOR_NAVIGATION = "best_for_navigation"  # noticeably more battery

    @classmethod
    def for_high_accuracy(cls, enabled: bool) -> "AccuracyMode":
        return cls.BEST_FOR_NAVIGATION if enabled else cls.BEST


@dataclass(frozen=True)
class SourceSettings:
    """Settings pushed to the location source before updates start."""

    distance_filter_m: float = 5.0
    background_updates: bool = True
    accuracy: AccuracyMode = AccuracyMode.BEST

    def __post_init__(self):
        """Validate source settings."""
        if self.distance_filter_m < 0:
            raise ValueError(
                f"distance_filter_m must be >= 0, got {self.distance_filter_m}"
            )


@dataclass(frozen=True)
class SessionConfig:
    """
    Main configuration for a location session.

    Loaded from YAML and validated at startup.
    Immutable after construction (frozen dataclass).
    """

    session_id: str = "default"
    region: RegionLimits = field(default_factory=RegionLimits)
    source: SourceSettings = field(default_factory=SourceSettings)
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate session configuration."""
        if not self.session_id:
            raise ValueError("session_id cannot be empty")

        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR"}
        if self.log_level.upper() not in valid_levels:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. "
                f"Must be one of {sorted(valid_levels)}"
            )

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level.upper())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        """
        Build configuration from a parsed mapping.

        Raises:
            ValueError: If a section has unknown keys or invalid values
        """
        data = data or {}
        try:
            region = RegionLimits(**(data.get("region") or {}))

            source_data = dict(data.get("source") or {})
            high_accuracy = source_data.pop("high_accuracy", False)
            if not isinstance(high_accuracy, bool):
                raise ValueError(
                    f"source.high_accuracy must be true or false, got {high_accuracy!r}"
                )
            source = SourceSettings(
                accuracy=AccuracyMode.for_high_accuracy(high_accuracy),
                **source_data,
            )
        except TypeError as e:
            raise ValueError(f"Invalid configuration section: {e}")

        return cls(
            session_id=str(data.get("session_id", "default")),
            region=region,
            source=source,
            log_level=str(data.get("log_level", "INFO")),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "SessionConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            session_id: "walk"

            region:
              span_factor: 2.0
              min_lat_span: 0.0002
              min_lon_span: 0.002
              max_span: 1.0

            source:
              distance_filter_m: 5.0
              background_updates: true
              high_accuracy: false

            log_level: "INFO"

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If YAML or values are invalid
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}")

        if data is not None and not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping in {yaml_path}")

        return cls.from_dict(data)
