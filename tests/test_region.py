"""Tests for RegionTracker viewport derivation."""

import random

import pytest

from geotrace_core import BoundingBox, Coordinate, RegionLimits, RegionTracker


def test_first_update_uses_minimum_spans():
    """The empty (inverted) box yields the minimum spans."""
    tracker = RegionTracker()
    region = tracker.update(Coordinate(10.0, 20.0))

    assert (region.center_lat, region.center_lon) == (10.0, 20.0)
    assert region.lat_span == 0.0002
    assert region.lon_span == 0.002


def test_initial_box_is_inverted():
    box = RegionTracker().bounding_box

    assert box == BoundingBox(min_lat=90.0, max_lat=-90.0, min_lon=180.0, max_lon=-180.0)
    assert box.is_empty


def test_region_lags_one_sample_behind_box():
    """Second region is computed from the box before it includes the point."""
    tracker = RegionTracker()
    tracker.update(Coordinate(0.0, 0.0))

    before = tracker.bounding_box
    assert (before.min_lat, before.max_lat, before.min_lon, before.max_lon) == (0.0, 0.0, 0.0, 0.0)

    region = tracker.update(Coordinate(2.0, 2.0))
    assert (region.center_lat, region.center_lon) == (2.0, 2.0)
    assert region.lat_span == 0.0002
    assert region.lon_span == 0.002

    after = tracker.bounding_box
    assert (after.min_lat, after.max_lat, after.min_lon, after.max_lon) == (0.0, 2.0, 0.0, 2.0)


def test_span_is_twice_the_box_extent():
    """Within the visual range the span is extent * 2."""
    tracker = RegionTracker()
    tracker.update(Coordinate(19.2960, -99.2690))
    tracker.update(Coordinate(19.2970, -99.2670))

    region = tracker.update(Coordinate(19.2965, -99.2680))

    assert region.lat_span == pytest.approx(0.002)
    assert region.lon_span == pytest.approx(0.004)
    assert (region.center_lat, region.center_lon) == (19.2965, -99.2680)


def test_oversized_span_falls_back_to_minimum():
    """A box of one degree or more is treated as a GPS jump."""
    tracker = RegionTracker()
    tracker.update(Coordinate(0.0, 0.0))
    tracker.update(Coordinate(0.5, 0.5))

    region = tracker.update(Coordinate(0.1, 0.1))

    assert region.lat_span == 0.0002
    assert region.lon_span == 0.002


def test_latitude_and_longitude_minimums_differ():
    """A span between the two minimums is kept for latitude only."""
    tracker = RegionTracker()
    tracker.update(Coordinate(0.0, 0.0))
    tracker.update(Coordinate(0.0005, 0.0005))

    region = tracker.update(Coordinate(0.0, 0.0))

    assert region.lat_span == pytest.approx(0.001)
    assert region.lon_span == 0.002


def test_box_never_shrinks_and_spans_stay_in_range():
    """Monotonic box and clamped spans for random walks and jumps."""
    rng = random.Random(3)
    tracker = RegionTracker()
    lat, lon = 19.3, -99.2

    for _ in range(300):
        if rng.random() < 0.05:
            lat, lon = rng.uniform(-89, 89), rng.uniform(-179, 179)
        else:
            lat = max(-90.0, min(90.0, lat + rng.uniform(-0.001, 0.001)))
            lon = max(-180.0, min(180.0, lon + rng.uniform(-0.001, 0.001)))

        before = tracker.bounding_box
        region = tracker.update(Coordinate(lat, lon))
        after = tracker.bounding_box

        assert after.min_lat <= before.min_lat
        assert after.max_lat >= before.max_lat
        assert after.min_lon <= before.min_lon
        assert after.max_lon >= before.max_lon
        assert after.min_lat <= after.max_lat
        assert after.min_lon <= after.max_lon

        assert 0.0002 <= region.lat_span < 1.0
        assert 0.002 <= region.lon_span < 1.0
        assert (region.center_lat, region.center_lon) == (lat, lon)


def test_current_region_is_idempotent():
    tracker = RegionTracker()
    assert tracker.current_region() is None

    region = tracker.update(Coordinate(1.0, 1.0))

    assert tracker.current_region() == region
    assert tracker.current_region() == tracker.current_region()


def test_custom_limits():
    """Configured limits replace the default visual range."""
    limits = RegionLimits(span_factor=1.0, min_lat_span=0.01, min_lon_span=0.01, max_span=5.0)
    tracker = RegionTracker(limits=limits)
    tracker.update(Coordinate(0.0, 0.0))
    tracker.update(Coordinate(2.0, 3.0))

    region = tracker.update(Coordinate(1.0, 1.0))

    assert region.lat_span == 2.0
    assert region.lon_span == 3.0


@pytest.mark.parametrize("kwargs", [
    {"span_factor": 0},
    {"min_lat_span": 0},
    {"min_lon_span": -0.1},
    {"max_span": 0.001},
])
def test_invalid_limits_rejected(kwargs):
    with pytest.raises(ValueError):
        RegionLimits(**kwargs)


def test_region_bounds():
    tracker = RegionTracker()
    region = tracker.update(Coordinate(10.0, 20.0))

    min_lat, max_lat, min_lon, max_lon = region.bounds()
    assert min_lat == pytest.approx(9.9999)
    assert max_lat == pytest.approx(10.0001)
    assert min_lon == pytest.approx(19.999)
    assert max_lon == pytest.approx(20.001)
