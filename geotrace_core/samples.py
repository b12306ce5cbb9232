"""
Sample Schema Types
===================

Bounded Context: Location Data Structures

Design Principles:
- Immutability: frozen=True prevents accidental mutation
- Validation: Constructor validates coordinate ranges and finite readings
- Serialization: from_dict() for recorded tracks, to_dict() on Sample

Types:
- Coordinate: Latitude/longitude pair
- LocationFix: Raw reading delivered by a location source
- Sample: Fix numbered by the session (sequence_number >= 1)

Speed and horizontal accuracy use a negative value as the platform sentinel
for "unavailable"; that is a data classification, not a validation error.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Any


def _ensure_utc(value: datetime) -> datetime:
    """Naive timestamps are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _validate_coordinate(latitude: float, longitude: float) -> None:
    if not -90.0 <= latitude <= 90.0:
        raise ValueError(f"latitude must be in [-90, 90], got {latitude}")
    if not -180.0 <= longitude <= 180.0:
        raise ValueError(f"longitude must be in [-180, 180], got {longitude}")


def _validate_readings(speed: float, horizontal_accuracy: float) -> None:
    # NaN compares False against the negative sentinel and would count as valid
    if not math.isfinite(speed):
        raise ValueError(f"speed must be finite, got {speed}")
    if not math.isfinite(horizontal_accuracy):
        raise ValueError(
            f"horizontal_accuracy must be finite, got {horizontal_accuracy}"
        )


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass(frozen=True)
class Coordinate:
    """
    Immutable latitude/longitude pair in degrees.

    Example:
        >>> Coordinate(latitude=19.3, longitude=-99.2)
    """
    latitude: float
    longitude: float

    def __post_init__(self):
        """Validate invariants."""
        _validate_coordinate(self.latitude, self.longitude)


@dataclass(frozen=True)
class LocationFix:
    """
    Raw location reading as produced by a location source.

    Attributes:
        timestamp: When the platform obtained the fix (UTC)
        speed: Meters per second, negative when unavailable
        horizontal_accuracy: Radius in meters, negative when unavailable
        latitude: Degrees in [-90, 90]
        longitude: Degrees in [-180, 180]
    """
    timestamp: datetime
    speed: float
    horizontal_accuracy: float
    latitude: float
    longitude: float

    def __post_init__(self):
        """Validate invariants and normalize the timestamp."""
        _validate_coordinate(self.latitude, self.longitude)
        _validate_readings(self.speed, self.horizontal_accuracy)
        object.__setattr__(self, 'timestamp', _ensure_utc(self.timestamp))

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LocationFix':
        """Deserialize from dict.

        Args:
            data: Dictionary with keys: timestamp, speed, horizontal_accuracy,
                latitude, longitude

        Returns:
            LocationFix instance

        Raises:
            ValueError: If required keys missing or invalid values
        """
        try:
            return cls(
                timestamp=_parse_timestamp(data['timestamp']),
                speed=float(data['speed']),
                horizontal_accuracy=float(data['horizontal_accuracy']),
                latitude=float(data['latitude']),
                longitude=float(data['longitude']),
            )
        except KeyError as e:
            raise ValueError(f"Missing required LocationFix field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid LocationFix data: {e}")


@dataclass(frozen=True)
class Sample:
    """
    One numbered location observation.

    Immutable once produced. The session assigns sequence numbers in arrival
    order starting at 1.

    Attributes:
        sequence_number: Position in the session (>= 1)
        timestamp: When the platform obtained the fix (UTC)
        speed: Meters per second, negative when unavailable
        horizontal_accuracy: Radius in meters, negative when unavailable
        latitude: Degrees in [-90, 90]
        longitude: Degrees in [-180, 180]

    Example:
        >>> sample = Sample(
        ...     sequence_number=1,
        ...     timestamp=datetime.now(timezone.utc),
        ...     speed=3.0,
        ...     horizontal_accuracy=5.0,
        ...     latitude=10.0,
        ...     longitude=20.0,
        ... )
        >>> sample.has_speed
        True
    """
    sequence_number: int
    timestamp: datetime
    speed: float
    horizontal_accuracy: float
    latitude: float
    longitude: float

    def __post_init__(self):
        """Validate invariants and normalize the timestamp."""
        if self.sequence_number < 1:
            raise ValueError(
                f"sequence_number must be >= 1, got {self.sequence_number}"
            )
        _validate_coordinate(self.latitude, self.longitude)
        _validate_readings(self.speed, self.horizontal_accuracy)
        object.__setattr__(self, 'timestamp', _ensure_utc(self.timestamp))

    @classmethod
    def from_fix(cls, fix: LocationFix, sequence_number: int) -> 'Sample':
        """Number a raw fix."""
        return cls(
            sequence_number=sequence_number,
            timestamp=fix.timestamp,
            speed=fix.speed,
            horizontal_accuracy=fix.horizontal_accuracy,
            latitude=fix.latitude,
            longitude=fix.longitude,
        )

    @property
    def has_speed(self) -> bool:
        return self.speed >= 0

    @property
    def has_accuracy(self) -> bool:
        return self.horizontal_accuracy >= 0

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'sequence_number': self.sequence_number,
            'timestamp': self.timestamp.isoformat(),
            'speed': self.speed,
            'horizontal_accuracy': self.horizontal_accuracy,
            'latitude': self.latitude,
            'longitude': self.longitude,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Sample':
        """Deserialize from dict.

        Raises:
            ValueError: If required keys missing or invalid values
        """
        try:
            return cls(
                sequence_number=int(data['sequence_number']),
                timestamp=_parse_timestamp(data['timestamp']),
                speed=float(data['speed']),
                horizontal_accuracy=float(data['horizontal_accuracy']),
                latitude=float(data['latitude']),
                longitude=float(data['longitude']),
            )
        except KeyError as e:
            raise ValueError(f"Missing required Sample field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid Sample data: {e}")
