"""
Analytics Layer
===============

Bounded Context: Per-sample statistics and viewport tracking.

Responsibilities:
- Accumulate speed/accuracy/delay statistics (mutable state)
- Track the all-time bounding box of seen coordinates
- Generate immutable snapshots (DisplayStats, DisplayRegion)
"""

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

__all__ = [
    "SampleAggregator",
    "AggregateStats",
    "DisplayStats",
    "RegionTracker",
    "RegionLimits",
    "BoundingBox",
    "DisplayRegion",
]
