"""
geotrace core
=============

Bounded Context: Running statistics and map viewport over a live stream of
location samples.

Architecture:

    geotrace_core/
    ├── samples.py         # LocationFix, Sample, Coordinate (immutable)
    │
    ├── analytics/         # Per-sample state (mutable, encapsulated)
    │   ├── aggregator.py  # SampleAggregator, DisplayStats
    │   └── region.py      # RegionTracker, BoundingBox, DisplayRegion
    │
    ├── rendering/         # Text output (stateless)
    │   └── formatter.py   # SampleFormatter
    │
    ├── source.py          # LocationSource protocol, AuthorizationStatus
    ├── replay.py          # ReplaySource (recorded JSON-lines tracks)
    ├── config.py          # SessionConfig (YAML)
    ├── logging/           # Structured JSON logging
    └── session.py         # Orchestration (LocationSession, SessionBuilder)

Usage:

    # 1. Core components on their own
    from geotrace_core import SampleAggregator, RegionTracker

    aggregator = SampleAggregator()
    tracker = RegionTracker()

    aggregator.record(sample)
    region = tracker.update(sample.coordinate)
    stats = aggregator.current_stats()

    # 2. Or a full session driven by a source
    from geotrace_core import SessionBuilder, ReplaySource

    source = ReplaySource("data/tracks/dinamos.jsonl")
    session = SessionBuilder().with_source(source).on_update(render).build()
    session.start()
    source.run()
"""

# Data
from geotrace_core.samples import Coordinate, LocationFix, Sample

# Analytics Layer (stateful)
from geotrace_core.analytics.aggregator import (
    SampleAggregator,
    AggregateStats,
    DisplayStats,
)
from geotrace_core.analytics.region import (
    RegionTracker,
    RegionLimits,
    BoundingBox,
    DisplayRegion,
)

# Rendering Layer (stateless)
from geotrace_core.rendering.formatter import SampleFormatter

# Configuration and sources
from geotrace_core.config import AccuracyMode, SourceSettings, SessionConfig
from geotrace_core.source import AuthorizationStatus, LocationSource
from geotrace_core.replay import ReplaySource, load_track

# Session (orchestration)
from geotrace_core.session import (
    LocationSession,
    SessionBuilder,
    SessionUpdate,
    Notice,
    NoticeKind,
)

__all__ = [
    # Data
    "Coordinate",
    "LocationFix",
    "Sample",
    # Analytics
    "SampleAggregator",
    "AggregateStats",
    "DisplayStats",
    "RegionTracker",
    "RegionLimits",
    "BoundingBox",
    "DisplayRegion",
    # Rendering
    "SampleFormatter",
    # Configuration and sources
    "AccuracyMode",
    "SourceSettings",
    "SessionConfig",
    "AuthorizationStatus",
    "LocationSource",
    "ReplaySource",
    "load_track",
    # Session
    "LocationSession",
    "SessionBuilder",
    "SessionUpdate",
    "Notice",
    "NoticeKind",
]

__version__ = "1.0.0"
