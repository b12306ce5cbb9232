"""
Replay Location Source
======================

Bounded Context: Recorded track playback.

Plays a recorded JSON-lines track through a session as if the fixes were
arriving from the device.

File format:
    - One JSON value per line
    - An object is a single fix: timestamp, speed, horizontal_accuracy,
      latitude, longitude
    - An array of objects is one delivery batch
    - Blank lines and lines starting with '#' are ignored

Example:
    # morning walk
    {"timestamp": "2026-10-19T08:00:00+00:00", "speed": -1, "horizontal_accuracy": 65, "latitude": 19.3493, "longitude": -99.2535}
    [{"timestamp": "2026-10-19T08:00:05+00:00", "speed": 1.2, ...}, {...}]
"""

import json
import math
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

from geotrace_core.analytics.aggregator import Clock, utc_now
from geotrace_core.config import SourceSettings
from geotrace_core.logging import StructuredLogger, LogEvent, create_logger
from geotrace_core.samples import LocationFix
from geotrace_core.source import (
    AuthorizationHandler,
    AuthorizationStatus,
    LocationsHandler,
)


EARTH_RADIUS_M = 6371000.0


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two points in degrees."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def load_track(path: Path, batch_size: int = 1) -> List[List[LocationFix]]:
    """
    Parse a recorded track into delivery batches.

    Consecutive single-fix lines are grouped into batches of batch_size;
    array lines are kept as their own batch.

    Raises:
        FileNotFoundError: If the track file doesn't exist
        ValueError: If a line is not valid JSON or not a valid fix
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Track file not found: {path}")

    batches: List[List[LocationFix]] = []
    pending: List[LocationFix] = []

    with open(path, "rb") as f:
        for line_no, raw in enumerate(f, start=1):
            try:
                line = raw.decode("utf-8").strip()
            except UnicodeDecodeError as e:
                raise ValueError(f"{path}:{line_no}: {e}")
            if not line or line.startswith("#"):
                continue
            try:
                value = json.loads(line)
                if isinstance(value, list):
                    batch = [LocationFix.from_dict(item) for item in value]
                else:
                    batch = None
                    fix = LocationFix.from_dict(value)
            except (ValueError, TypeError, AttributeError) as e:
                raise ValueError(f"{path}:{line_no}: {e}")

            if batch is None:
                pending.append(fix)
                if len(pending) == batch_size:
                    batches.append(pending)
                    pending = []
            else:
                if pending:
                    batches.append(pending)
                    pending = []
                if batch:
                    batches.append(batch)

    if pending:
        batches.append(pending)
    return batches


class ReplaySource:
    """
    LocationSource that replays a recorded track.

    Honors the configured distance filter: a fix closer than
    distance_filter_m to the last delivered fix is dropped, as the platform
    would. With rebase_timestamps, timestamps are shifted so the first fix
    happened "now" when the replay starts.

    Usage:
        source = ReplaySource("data/tracks/dinamos.jsonl")
        session = SessionBuilder().with_source(source).build()
        session.start()
        source.run()
    """

    def __init__(
        self,
        path: Path,
        batch_size: int = 1,
        rebase_timestamps: bool = True,
        authorization: AuthorizationStatus = AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
        services_enabled: bool = True,
        clock: Optional[Clock] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.path = Path(path)
        self.rebase_timestamps = rebase_timestamps
        self.logger = logger or create_logger("replay")
        self._clock = clock or utc_now
        self._authorization = authorization
        self._services_enabled = services_enabled
        self._settings = SourceSettings()
        self._updating = False
        self._on_locations: Optional[LocationsHandler] = None
        self._on_authorization: Optional[AuthorizationHandler] = None
        self._last_delivered: Optional[LocationFix] = None

        try:
            self.batches = load_track(self.path, batch_size=batch_size)
        except ValueError as e:
            self.logger.error(
                event=LogEvent.REPLAY_PARSE_ERROR,
                message="Failed to parse recorded track",
                exc_info=e,
                metadata={'path': str(self.path)}
            )
            raise

        self.logger.info(
            event=LogEvent.REPLAY_LOADED,
            message=f"Loaded {self.fix_count} fixes in {len(self.batches)} batches",
            metadata={'path': str(self.path), 'batch_size': batch_size}
        )

    @property
    def fix_count(self) -> int:
        return sum(len(batch) for batch in self.batches)

    @property
    def settings(self) -> SourceSettings:
        return self._settings

    @property
    def is_updating(self) -> bool:
        return self._updating

    # ── LocationSource protocol ──────────────────────────────────────────

    def bind(
        self,
        on_locations: LocationsHandler,
        on_authorization: AuthorizationHandler,
    ) -> None:
        self._on_locations = on_locations
        self._on_authorization = on_authorization

    def services_enabled(self) -> bool:
        return self._services_enabled

    def authorization_status(self) -> AuthorizationStatus:
        return self._authorization

    def request_authorization(self) -> None:
        """Report the recorded authorization status to the bound handler."""
        if self._on_authorization is not None:
            self._on_authorization(self._authorization)

    def set_authorization(self, status: AuthorizationStatus) -> None:
        """Simulate the user changing permissions mid-session."""
        self._authorization = status
        if self._on_authorization is not None:
            self._on_authorization(status)

    def configure(self, settings: SourceSettings) -> None:
        self._settings = settings

    def start_updates(self) -> None:
        self._updating = True

    def stop_updates(self) -> None:
        self._updating = False

    # ── Playback ─────────────────────────────────────────────────────────

    def run(self) -> int:
        """
        Deliver every batch in file order while updates are started.

        Returns:
            Number of fixes delivered
        """
        if not self._updating or self._on_locations is None:
            return 0

        offset = timedelta(0)
        if self.rebase_timestamps and self.batches:
            offset = self._clock() - self.batches[0][0].timestamp

        delivered = 0
        for batch in self.batches:
            if not self._updating:
                break
            fixes = [
                fix for fix in (self._shift(f, offset) for f in batch)
                if self._passes_distance_filter(fix)
            ]
            if not fixes:
                continue
            self._on_locations(fixes)
            delivered += len(fixes)

        self.logger.info(
            event=LogEvent.REPLAY_FINISHED,
            message=f"Delivered {delivered} of {self.fix_count} fixes",
            metadata={
                'path': str(self.path),
                'distance_filter_m': self._settings.distance_filter_m,
            }
        )
        return delivered

    def _shift(self, fix: LocationFix, offset: timedelta) -> LocationFix:
        if not offset:
            return fix
        return LocationFix(
            timestamp=fix.timestamp + offset,
            speed=fix.speed,
            horizontal_accuracy=fix.horizontal_accuracy,
            latitude=fix.latitude,
            longitude=fix.longitude,
        )

    def _passes_distance_filter(self, fix: LocationFix) -> bool:
        last = self._last_delivered
        threshold = self._settings.distance_filter_m
        if last is not None and threshold > 0:
            distance = haversine_m(last.latitude, last.longitude, fix.latitude, fix.longitude)
            if distance < threshold:
                return False
        self._last_delivered = fix
        return True

    def __repr__(self) -> str:
        return f"ReplaySource(path={self.path}, fixes={self.fix_count})"
