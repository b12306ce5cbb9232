"""
Location Session Module
=======================

Bounded Context: Orchestration of one location session.

Design:
- Orchestrator: wires a LocationSource to the aggregator and region tracker
- Builder pattern: Fluent configuration
- Strict ordering: every fix in a batch completes record() and update()
  before the next one is considered
- Upstream failures become notices and log events, not exceptions

Dependencies:
- geotrace_core.analytics (aggregator, region tracker)
- geotrace_core.source (LocationSource protocol)
- geotrace_core.logging (structured logging)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional

from geotrace_core.analytics.aggregator import (
    Clock,
    DisplayStats,
    SampleAggregator,
)
from geotrace_core.analytics.region import DisplayRegion, RegionTracker
from geotrace_core.config import AccuracyMode, SessionConfig, SourceSettings
from geotrace_core.logging import LogEvent, StructuredLogger, create_logger
from geotrace_core.samples import LocationFix, Sample
from geotrace_core.source import AuthorizationStatus, LocationSource


CANNOT_LOCATE = "Can't obtain your location"
NOT_AUTHORIZED = "Not authorized for location updates"
STARTING_UPDATES = "Starting Location Updates"
HIGH_ACCURACY_ON = "Changed to high accuracy mode"


@dataclass(frozen=True)
class SessionUpdate:
    """Everything the list and map consumers need for one sample."""

    sample: Sample
    stats: DisplayStats
    region: DisplayRegion


class NoticeKind(str, Enum):
    ALERT = "alert"  # modal error
    TOAST = "toast"  # transient message


@dataclass(frozen=True)
class Notice:
    """User-facing message; display is up to the notice consumer."""

    kind: NoticeKind
    message: str
    title: Optional[str] = None


UpdateHandler = Callable[[SessionUpdate], None]
NoticeHandler = Callable[[Notice], None]


class LocationSession:
    """
    Drives the aggregator and region tracker from a location source.

    Owns exactly one SampleAggregator and one RegionTracker for its lifetime.
    Nothing is reset on stop(); queries keep reporting the last state.

    Usage:
        session = (
            SessionBuilder()
            .with_source(source)
            .on_update(render)
            .build()
        )
        session.start()
    """

    def __init__(
        self,
        source: LocationSource,
        config: SessionConfig,
        aggregator: SampleAggregator,
        tracker: RegionTracker,
        logger: StructuredLogger,
        on_update: Optional[UpdateHandler] = None,
        on_notice: Optional[NoticeHandler] = None,
    ):
        self.source = source
        self.config = config
        self.aggregator = aggregator
        self.tracker = tracker
        self.logger = logger
        self._on_update = on_update
        self._on_notice = on_notice

        self._accuracy = config.source.accuracy
        self._last_update: Optional[SessionUpdate] = None

        self.source.bind(
            on_locations=self.handle_locations,
            on_authorization=self.handle_authorization,
        )

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self) -> None:
        """Request authorization and start updates if services are enabled."""
        self.logger.info(
            event=LogEvent.SESSION_STARTED,
            message="Session started",
            metadata={'session_id': self.config.session_id}
        )
        self.source.request_authorization()

        if self.source.services_enabled():
            self.start_location_updates()
        else:
            self.logger.error(
                event=LogEvent.LOCATION_SERVICES_ERROR,
                message="Location services are disabled",
                metadata={'session_id': self.config.session_id}
            )
            self._notify(NoticeKind.ALERT, CANNOT_LOCATE, title="Error")

    def start_location_updates(self) -> None:
        """Configure the source and start it when authorized."""
        settings = self.source_settings
        self.source.configure(settings)

        status = self.source.authorization_status()
        if status.is_authorized:
            self.source.start_updates()
            self.logger.info(
                event=LogEvent.LOCATION_UPDATES_STARTED,
                message="Location updates started",
                metadata={
                    'distance_filter_m': settings.distance_filter_m,
                    'accuracy': settings.accuracy.value,
                    'background_updates': settings.background_updates,
                }
            )
        else:
            self.logger.error(
                event=LogEvent.AUTHORIZATION_ERROR,
                message="Not authorized for location updates",
                metadata={'status': status.value}
            )
            self._notify(NoticeKind.ALERT, NOT_AUTHORIZED, title="Error")

    def stop(self) -> None:
        """Stop receiving updates; statistics and region stay queryable."""
        self.source.stop_updates()
        self.logger.info(
            event=LogEvent.SESSION_STOPPED,
            message="Session stopped",
            metadata={
                'session_id': self.config.session_id,
                'sample_count': self.aggregator.sample_count,
            }
        )

    # ── Source callbacks ─────────────────────────────────────────────────

    def handle_authorization(self, status: AuthorizationStatus) -> None:
        """React to a permission change reported by the source."""
        if status.is_authorized:
            self.logger.info(
                event=LogEvent.AUTHORIZATION_CHANGED,
                message="Authorization status changed",
                metadata={'status': status.value}
            )
            self._notify(NoticeKind.TOAST, STARTING_UPDATES)
            self.start_location_updates()
        else:
            self.logger.warning(
                event=LogEvent.AUTHORIZATION_CHANGED,
                message="Location authorization not granted",
                metadata={'status': status.value}
            )
            self._notify(NoticeKind.ALERT, CANNOT_LOCATE, title="Error")

    def handle_locations(self, fixes: Iterable[LocationFix]) -> List[SessionUpdate]:
        """
        Process a batch of fixes in arrival order.

        Args:
            fixes: Fixes delivered by the source, oldest first

        Returns:
            One SessionUpdate per fix, in the same order
        """
        fixes = list(fixes)
        self.logger.debug(
            event=LogEvent.LOCATION_BATCH_RECEIVED,
            message=f"Received {len(fixes)} fixes",
            metadata={'batch_size': len(fixes)}
        )
        return [self._process_fix(fix) for fix in fixes]

    def _process_fix(self, fix: LocationFix) -> SessionUpdate:
        """
        Process one fix through the core.

        Stages:
        1. Number the fix
        2. Record statistics
        3. Derive region (then expand the box)
        4. Forward the update
        """
        sample = Sample.from_fix(fix, self.aggregator.sample_count + 1)

        self.aggregator.record(sample)
        stats = self.aggregator.current_stats()
        self.logger.debug(
            event=LogEvent.SAMPLE_RECORDED,
            message="Sample recorded",
            metadata={
                'sequence_number': sample.sequence_number,
                'speed': sample.speed,
                'horizontal_accuracy': sample.horizontal_accuracy,
            }
        )

        region = self.tracker.update(sample.coordinate)
        self.logger.debug(
            event=LogEvent.REGION_UPDATED,
            message="Region updated",
            metadata={
                'sequence_number': sample.sequence_number,
                'lat_span': region.lat_span,
                'lon_span': region.lon_span,
            }
        )

        update = SessionUpdate(sample=sample, stats=stats, region=region)
        self._last_update = update
        if self._on_update is not None:
            self._on_update(update)
        return update

    # ── Accuracy mode ────────────────────────────────────────────────────

    def set_high_accuracy(self, enabled: bool) -> None:
        """Switch between BEST and BEST_FOR_NAVIGATION on the source."""
        self._accuracy = AccuracyMode.for_high_accuracy(enabled)
        self.source.configure(self.source_settings)
        self.logger.info(
            event=LogEvent.ACCURACY_MODE_CHANGED,
            message="Desired accuracy changed",
            metadata={'accuracy': self._accuracy.value}
        )
        if enabled:
            self._notify(NoticeKind.TOAST, HIGH_ACCURACY_ON)

    @property
    def accuracy(self) -> AccuracyMode:
        return self._accuracy

    @property
    def source_settings(self) -> SourceSettings:
        base = self.config.source
        return SourceSettings(
            distance_filter_m=base.distance_filter_m,
            background_updates=base.background_updates,
            accuracy=self._accuracy,
        )

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def last_update(self) -> Optional[SessionUpdate]:
        return self._last_update

    @property
    def sample_count(self) -> int:
        return self.aggregator.sample_count

    def current_stats(self) -> DisplayStats:
        return self.aggregator.current_stats()

    def current_region(self) -> Optional[DisplayRegion]:
        return self.tracker.current_region()

    def _notify(self, kind: NoticeKind, message: str, title: Optional[str] = None) -> None:
        if self._on_notice is not None:
            self._on_notice(Notice(kind=kind, message=message, title=title))


class SessionBuilder:
    """
    Builder for LocationSession.

    Design:
    - Fluent API for construction
    - Fail-fast validation
    - Sensible defaults (SessionConfig(), UTC clock, "session" logger)

    Usage:
        session = (
            SessionBuilder()
            .with_source(ReplaySource("track.jsonl"))
            .with_config(SessionConfig.from_yaml("config/geotrace.yaml"))
            .on_update(print)
            .build()
        )
    """

    def __init__(self):
        self._source: Optional[LocationSource] = None
        self._config: Optional[SessionConfig] = None
        self._clock: Optional[Clock] = None
        self._logger: Optional[StructuredLogger] = None
        self._on_update: Optional[UpdateHandler] = None
        self._on_notice: Optional[NoticeHandler] = None

    def with_source(self, source: LocationSource) -> "SessionBuilder":
        """Set the location source."""
        self._source = source
        return self

    def with_config(self, config: SessionConfig) -> "SessionBuilder":
        """Set session configuration."""
        self._config = config
        return self

    def with_clock(self, clock: Clock) -> "SessionBuilder":
        """Set the clock used for delay computation."""
        self._clock = clock
        return self

    def with_logger(self, logger: StructuredLogger) -> "SessionBuilder":
        """Set structured logger."""
        self._logger = logger
        return self

    def on_update(self, handler: UpdateHandler) -> "SessionBuilder":
        """Set the per-sample update consumer."""
        self._on_update = handler
        return self

    def on_notice(self, handler: NoticeHandler) -> "SessionBuilder":
        """Set the alert/toast consumer."""
        self._on_notice = handler
        return self

    def build(self) -> LocationSession:
        """
        Build the session.

        Raises:
            ValueError: If no source was configured
        """
        if self._source is None:
            raise ValueError("Location source is required (use .with_source())")

        config = self._config if self._config is not None else SessionConfig()
        logger = self._logger
        if logger is None:
            logger = create_logger("session", level=config.logging_level)

        return LocationSession(
            source=self._source,
            config=config,
            aggregator=SampleAggregator(clock=self._clock),
            tracker=RegionTracker(limits=config.region),
            logger=logger,
            on_update=self._on_update,
            on_notice=self._on_notice,
        )
