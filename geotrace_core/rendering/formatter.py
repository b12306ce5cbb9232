"""
Sample Formatter Module
=======================

Stateless text rendering of samples, statistics and regions.

Design:
- No state (formats what it is given)
- Same labels and precision as the original statistics screen
- None ("no data") renders as a placeholder, never as nan
"""

from datetime import tzinfo
from typing import List, Optional

from geotrace_core.analytics.aggregator import DisplayStats
from geotrace_core.analytics.region import DisplayRegion
from geotrace_core.samples import Sample


class SampleFormatter:
    """
    Formats list items and statistics labels.

    Usage:
        formatter = SampleFormatter()
        line = formatter.list_item(sample)   # " 1  08:00:00  3.0  5.0"
        labels = formatter.stats_lines(stats)
    """

    def __init__(self, tz: Optional[tzinfo] = None, placeholder: str = "--"):
        """
        Args:
            tz: Timezone for list-item timestamps (default: local time)
            placeholder: Text shown for values with no data yet
        """
        self.tz = tz
        self.placeholder = placeholder

    def list_item(self, sample: Sample) -> str:
        """Sequence number, HH:MM:SS, speed and accuracy of one sample."""
        clock_time = sample.timestamp.astimezone(self.tz).strftime("%H:%M:%S")
        return "%2d  %s  %.1f  %.1f" % (
            sample.sequence_number,
            clock_time,
            sample.speed,
            sample.horizontal_accuracy,
        )

    def stats_lines(self, stats: DisplayStats) -> List[str]:
        """Five statistics labels in screen order."""
        return [
            f"Avg. H. Accuracy: {self._fmt(stats.avg_horizontal_accuracy, 1)}",
            f"Avg. Speed: {self._fmt(stats.avg_speed, 1)}",
            f"% Has H. Accuracy: {self._fmt(stats.pct_has_accuracy, 0)}",
            f"% Has Speed: {self._fmt(stats.pct_has_speed, 0)}",
            f"Avg. Delay: {self._fmt(stats.avg_delay, 1)}",
        ]

    def region_line(self, region: DisplayRegion) -> str:
        return f"ΔLatitude: {region.lat_span}, ΔLongitude: {region.lon_span}"

    def _fmt(self, value: Optional[float], digits: int) -> str:
        if value is None:
            return self.placeholder
        return f"{value:.{digits}f}"
