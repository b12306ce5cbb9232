"""Tests for SampleAggregator statistics."""

import random

import pytest

from geotrace_core import SampleAggregator, DisplayStats


def test_empty_aggregator_reports_no_data(clock):
    """Before any sample every value is None, never NaN."""
    stats = SampleAggregator(clock=clock).current_stats()

    assert stats == DisplayStats()
    assert stats.avg_speed is None
    assert stats.avg_horizontal_accuracy is None
    assert stats.pct_has_speed is None
    assert stats.pct_has_accuracy is None
    assert stats.avg_delay is None
    assert not stats.has_data


def test_first_sample(clock, make_sample):
    """First sample with speed 3.0 and accuracy 5.0."""
    aggregator = SampleAggregator(clock=clock)
    aggregator.record(make_sample(speed=3.0, accuracy=5.0, lat=10, lon=20))

    stats = aggregator.current_stats()
    assert stats.avg_speed == 3.0
    assert stats.pct_has_speed == 100.0
    assert stats.avg_horizontal_accuracy == 5.0
    assert stats.pct_has_accuracy == 100.0
    assert stats.sample_count == 1


def test_invalid_then_valid_speed(clock, make_sample):
    """Invalid speed counts toward the percentage but not the average."""
    aggregator = SampleAggregator(clock=clock)
    aggregator.record(make_sample(speed=-1.0))
    aggregator.record(make_sample(speed=4.0))

    aggregate = aggregator.aggregate
    assert aggregate.valid_speed_count == 1
    assert aggregate.invalid_speed_count == 1

    stats = aggregator.current_stats()
    assert stats.avg_speed == 4.0
    assert stats.pct_has_speed == 50.0


def test_only_invalid_values_keep_averages_undefined(clock, make_sample):
    """Averages stay None while percentages report zero."""
    aggregator = SampleAggregator(clock=clock)
    aggregator.record(make_sample(speed=-1.0, accuracy=-1.0))

    stats = aggregator.current_stats()
    assert stats.avg_speed is None
    assert stats.avg_horizontal_accuracy is None
    assert stats.pct_has_speed == 0.0
    assert stats.pct_has_accuracy == 0.0
    assert stats.avg_delay == 0.0


def test_zero_speed_is_valid(clock, make_sample):
    """Only negative values are the unavailable sentinel."""
    aggregator = SampleAggregator(clock=clock)
    aggregator.record(make_sample(speed=0.0, accuracy=0.0))

    aggregate = aggregator.aggregate
    assert aggregate.valid_speed_count == 1
    assert aggregate.valid_accuracy_count == 1


def test_delay_accumulates_over_every_sample(clock, make_sample):
    """Delay is now minus sample timestamp, invalid samples included."""
    aggregator = SampleAggregator(clock=clock)
    timestamp = clock.now

    clock.advance(2.0)
    aggregator.record(make_sample(speed=-1.0, accuracy=-1.0, timestamp=timestamp))
    clock.advance(2.0)
    aggregator.record(make_sample(timestamp=timestamp))

    assert aggregator.aggregate.delay_sum == pytest.approx(6.0)
    assert aggregator.current_stats().avg_delay == pytest.approx(3.0)


def test_future_timestamp_delay_is_clamped(clock, make_sample):
    """A sample stamped after "now" contributes zero delay."""
    aggregator = SampleAggregator(clock=clock)
    clock.advance(-10.0)
    aggregator.record(make_sample())

    assert aggregator.aggregate.delay_sum == 0.0


def test_counts_always_partition_sample_count(clock, make_sample):
    """valid + invalid == sample_count after every record."""
    rng = random.Random(7)
    aggregator = SampleAggregator(clock=clock)

    for _ in range(200):
        aggregator.record(make_sample(
            speed=rng.uniform(-5, 30),
            accuracy=rng.uniform(-5, 100),
        ))
        aggregate = aggregator.aggregate
        assert aggregate.valid_speed_count + aggregate.invalid_speed_count == aggregate.sample_count
        assert aggregate.valid_accuracy_count + aggregate.invalid_accuracy_count == aggregate.sample_count


def test_average_speed_within_observed_bounds(clock, make_sample):
    """avg_speed stays between min and max of valid speeds seen so far."""
    rng = random.Random(11)
    aggregator = SampleAggregator(clock=clock)
    valid_speeds = []

    for _ in range(200):
        speed = rng.choice([-1.0, rng.uniform(0, 40)])
        aggregator.record(make_sample(speed=speed))
        if speed >= 0:
            valid_speeds.append(speed)

        stats = aggregator.current_stats()
        if valid_speeds:
            assert min(valid_speeds) - 1e-9 <= stats.avg_speed <= max(valid_speeds) + 1e-9
        else:
            assert stats.avg_speed is None

        assert 0.0 <= stats.pct_has_speed <= 100.0
        assert 0.0 <= stats.pct_has_accuracy <= 100.0


def test_current_stats_is_idempotent(clock, make_sample):
    """Querying twice without a record returns identical results."""
    aggregator = SampleAggregator(clock=clock)
    aggregator.record(make_sample(speed=2.0))
    clock.advance(30.0)

    assert aggregator.current_stats() == aggregator.current_stats()


def test_aggregate_is_a_copy(clock, make_sample):
    """Mutating the returned aggregate does not touch the aggregator."""
    aggregator = SampleAggregator(clock=clock)
    aggregator.record(make_sample())

    aggregate = aggregator.aggregate
    aggregate.sample_count = 99

    assert aggregator.sample_count == 1
    assert len(aggregator) == 1
