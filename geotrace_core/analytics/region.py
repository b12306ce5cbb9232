"""
Region Tracker Module
=====================

Stateful tracker for the map viewport shown with each sample.

Design:
- Encapsulates an all-time bounding box of seen coordinates
- update() returns the DisplayRegion for the incoming coordinate
- The region is derived from the box *before* it is expanded, so the zoom
  level lags one sample behind while the center is always the new point
- The box never shrinks
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from geotrace_core.samples import Coordinate


@dataclass(frozen=True)
class RegionLimits:
    """
    Visual range for derived regions.

    Attributes:
        span_factor: Box extent multiplier; 2.0 keeps the new point centered
            rather than in a corner
        min_lat_span: Smallest latitude span in degrees (about 1-2 blocks)
        min_lon_span: Smallest longitude span in degrees
        max_span: Spans at or above this are treated as "no history"
    """

    span_factor: float = 2.0
    min_lat_span: float = 0.0002
    min_lon_span: float = 0.002
    max_span: float = 1.0

    def __post_init__(self):
        """Validate limits."""
        if self.span_factor <= 0:
            raise ValueError(f"span_factor must be > 0, got {self.span_factor}")
        if self.min_lat_span <= 0 or self.min_lon_span <= 0:
            raise ValueError(
                f"minimum spans must be > 0, got "
                f"({self.min_lat_span}, {self.min_lon_span})"
            )
        if self.max_span <= max(self.min_lat_span, self.min_lon_span):
            raise ValueError(
                f"max_span must exceed both minimum spans, got {self.max_span}"
            )

    def clamp_lat(self, span: float) -> float:
        return _clamp_span(span, self.min_lat_span, self.max_span)

    def clamp_lon(self, span: float) -> float:
        return _clamp_span(span, self.min_lon_span, self.max_span)


def _clamp_span(span: float, minimum: float, maximum: float) -> float:
    # Oversized spans fall back to the minimum too (GPS jump or empty box)
    if span >= maximum or span < minimum:
        return minimum
    return span


@dataclass
class BoundingBox:
    """
    Smallest lat/lon rectangle containing every coordinate seen so far.

    Starts inverted (min > max) to signal that nothing has been seen yet.
    """

    min_lat: float = 90.0
    max_lat: float = -90.0
    min_lon: float = 180.0
    max_lon: float = -180.0

    @property
    def is_empty(self) -> bool:
        return self.min_lat > self.max_lat or self.min_lon > self.max_lon

    @property
    def lat_extent(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def lon_extent(self) -> float:
        return self.max_lon - self.min_lon

    def expand(self, coordinate: Coordinate) -> None:
        """Widen whichever extremes the coordinate exceeds."""
        if coordinate.latitude > self.max_lat:
            self.max_lat = coordinate.latitude
        if coordinate.latitude < self.min_lat:
            self.min_lat = coordinate.latitude
        if coordinate.longitude > self.max_lon:
            self.max_lon = coordinate.longitude
        if coordinate.longitude < self.min_lon:
            self.min_lon = coordinate.longitude


@dataclass(frozen=True)
class DisplayRegion:
    """
    Immutable map viewport: center point and zoom span in degrees.
    """

    center_lat: float
    center_lon: float
    lat_span: float
    lon_span: float

    def bounds(self) -> Tuple[float, float, float, float]:
        """
        Viewport edges.

        Returns:
            (min_lat, max_lat, min_lon, max_lon)
        """
        half_lat = self.lat_span / 2
        half_lon = self.lon_span / 2
        return (
            self.center_lat - half_lat,
            self.center_lat + half_lat,
            self.center_lon - half_lon,
            self.center_lon + half_lon,
        )


class RegionTracker:
    """
    Tracks the all-time bounding box and derives the display region.

    Design Philosophy:
    - Single Responsibility: only box history and region derivation
    - Stateful but encapsulated
    - No validation: coordinates are already range-checked by Coordinate

    Usage:
        tracker = RegionTracker()

        # Each sample
        region = tracker.update(sample.coordinate)
    """

    def __init__(self, limits: Optional[RegionLimits] = None):
        """
        Initialize tracker with an empty (inverted) box.

        Args:
            limits: Visual range for derived regions (default: RegionLimits())
        """
        self.limits = limits or RegionLimits()
        self._box = BoundingBox()
        self._region: Optional[DisplayRegion] = None

    def update(self, coordinate: Coordinate) -> DisplayRegion:
        """
        Derive the region for a new coordinate, then expand the box.

        Args:
            coordinate: Incoming sample coordinate

        Returns:
            DisplayRegion centered on the coordinate, spanning the box as it
            was before this coordinate
        """
        region = self.derive_region(coordinate)
        self._box.expand(coordinate)
        self._region = region
        return region

    def derive_region(self, coordinate: Coordinate) -> DisplayRegion:
        """Region for a coordinate against the current box (no mutation)."""
        lat_span = self.limits.clamp_lat(self._box.lat_extent * self.limits.span_factor)
        lon_span = self.limits.clamp_lon(self._box.lon_extent * self.limits.span_factor)
        return DisplayRegion(
            center_lat=coordinate.latitude,
            center_lon=coordinate.longitude,
            lat_span=lat_span,
            lon_span=lon_span,
        )

    def current_region(self) -> Optional[DisplayRegion]:
        """Region returned by the last update(), None before the first."""
        return self._region

    @property
    def bounding_box(self) -> BoundingBox:
        """Copy of the current bounding box."""
        return replace(self._box)

    def __repr__(self) -> str:
        if self._box.is_empty:
            return "RegionTracker(empty)"
        box = self._box
        return (
            f"RegionTracker(lat=[{box.min_lat}, {box.max_lat}], "
            f"lon=[{box.min_lon}, {box.max_lon}])"
        )
