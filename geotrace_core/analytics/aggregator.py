"""
Sample Aggregator Module
========================

Stateful accumulator for location sample statistics.

Design:
- Mutable state (counters and sums, never reset during a session)
- Immutable snapshots (DisplayStats)
- Invalid speed/accuracy is counted, never averaged
- "No data" is None, never NaN
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Optional

from geotrace_core.samples import Sample


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AggregateStats:
    """
    Running counts and sums since the session started.

    Invariants:
        valid_speed_count + invalid_speed_count == sample_count
        valid_accuracy_count + invalid_accuracy_count == sample_count

    speed_sum and accuracy_sum cover valid values only; delay_sum covers
    every sample.
    """

    sample_count: int = 0
    valid_speed_count: int = 0
    invalid_speed_count: int = 0
    valid_accuracy_count: int = 0
    invalid_accuracy_count: int = 0
    speed_sum: float = 0.0
    accuracy_sum: float = 0.0
    delay_sum: float = 0.0


@dataclass(frozen=True)
class DisplayStats:
    """
    Immutable statistics snapshot for display.

    Each value is None until its denominator is nonzero.
    """

    sample_count: int = 0
    avg_horizontal_accuracy: Optional[float] = None
    avg_speed: Optional[float] = None
    pct_has_accuracy: Optional[float] = None
    pct_has_speed: Optional[float] = None
    avg_delay: Optional[float] = None

    @property
    def has_data(self) -> bool:
        return self.sample_count > 0

    def __str__(self) -> str:
        """Human-readable representation."""
        if not self.has_data:
            return "DisplayStats(no data)"
        return (
            f"DisplayStats(n={self.sample_count}, "
            f"avg_speed={self.avg_speed}, "
            f"avg_accuracy={self.avg_horizontal_accuracy})"
        )


class SampleAggregator:
    """
    Cumulative statistics over a stream of samples.

    Design:
    - Mutable accumulators (private state)
    - Public immutable snapshots (current_stats())
    - Cumulative since start: no smoothing, no windowing
    - Single consumer context (caller must synchronize if multi-threaded)

    Usage:
        aggregator = SampleAggregator()

        # Each sample
        aggregator.record(sample)

        # Get snapshot
        stats = aggregator.current_stats()  # Immutable
    """

    def __init__(self, clock: Optional[Clock] = None):
        """
        Initialize empty aggregator.

        Args:
            clock: Returns "now" for delay computation (default: UTC now)
        """
        self._clock = clock or utc_now
        self._stats = AggregateStats()

    def record(self, sample: Sample) -> None:
        """
        Add one sample to the running statistics.

        Every sample is accepted. A negative speed or accuracy is counted as
        invalid and kept out of the averages. The processing delay
        (now - sample.timestamp, floored at zero) is added for every sample.

        Args:
            sample: Sample to record
        """
        stats = self._stats
        stats.sample_count += 1

        if sample.speed < 0:
            stats.invalid_speed_count += 1
        else:
            stats.valid_speed_count += 1
            stats.speed_sum += sample.speed

        if sample.horizontal_accuracy < 0:
            stats.invalid_accuracy_count += 1
        else:
            stats.valid_accuracy_count += 1
            stats.accuracy_sum += sample.horizontal_accuracy

        delay = (self._clock() - sample.timestamp).total_seconds()
        stats.delay_sum += max(0.0, delay)

    def current_stats(self) -> DisplayStats:
        """
        Get immutable statistics snapshot.

        Returns:
            Frozen DisplayStats as of the last record() call
        """
        stats = self._stats
        count = stats.sample_count

        avg_accuracy = None
        if stats.valid_accuracy_count:
            avg_accuracy = stats.accuracy_sum / stats.valid_accuracy_count

        avg_speed = None
        if stats.valid_speed_count:
            avg_speed = stats.speed_sum / stats.valid_speed_count

        pct_accuracy = pct_speed = avg_delay = None
        if count:
            pct_accuracy = 100.0 * stats.valid_accuracy_count / count
            pct_speed = 100.0 * stats.valid_speed_count / count
            avg_delay = stats.delay_sum / count

        return DisplayStats(
            sample_count=count,
            avg_horizontal_accuracy=avg_accuracy,
            avg_speed=avg_speed,
            pct_has_accuracy=pct_accuracy,
            pct_has_speed=pct_speed,
            avg_delay=avg_delay,
        )

    @property
    def sample_count(self) -> int:
        """Number of samples recorded so far (list-item numbering)."""
        return self._stats.sample_count

    @property
    def aggregate(self) -> AggregateStats:
        """Copy of the running counts and sums."""
        return replace(self._stats)

    def __len__(self) -> int:
        return self._stats.sample_count

    def __repr__(self) -> str:
        return f"SampleAggregator(samples={self._stats.sample_count})"
