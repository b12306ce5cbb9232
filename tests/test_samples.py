"""Tests for sample value objects."""

from datetime import datetime, timezone

import pytest

from geotrace_core import Coordinate, LocationFix, Sample

from conftest import T0


def test_sample_from_fix(make_fix):
    fix = make_fix(speed=3.0, accuracy=5.0, lat=10.0, lon=20.0)
    sample = Sample.from_fix(fix, 7)

    assert sample.sequence_number == 7
    assert sample.timestamp == fix.timestamp
    assert sample.coordinate == Coordinate(10.0, 20.0)
    assert sample.has_speed and sample.has_accuracy


def test_sentinels_are_not_errors(make_sample):
    sample = make_sample(speed=-1.0, accuracy=-1.0)

    assert not sample.has_speed
    assert not sample.has_accuracy


def test_sequence_number_must_be_positive():
    with pytest.raises(ValueError, match="sequence_number"):
        Sample(0, T0, 1.0, 5.0, 10.0, 20.0)


@pytest.mark.parametrize("lat,lon", [(90.5, 0.0), (-91.0, 0.0), (0.0, 180.1), (0.0, -181.0)])
def test_coordinate_range(lat, lon):
    with pytest.raises(ValueError):
        Coordinate(lat, lon)
    with pytest.raises(ValueError):
        LocationFix(T0, 1.0, 5.0, lat, lon)


def test_naive_timestamp_is_utc():
    fix = LocationFix(datetime(2026, 10, 19, 14, 0, 0), 1.0, 5.0, 10.0, 20.0)

    assert fix.timestamp == T0
    assert fix.timestamp.tzinfo == timezone.utc


def test_samples_are_immutable(make_sample):
    sample = make_sample()
    with pytest.raises(AttributeError):
        sample.speed = 2.0


def test_sample_dict_round_trip(make_sample):
    sample = make_sample(speed=-1.0, accuracy=12.5)

    assert Sample.from_dict(sample.to_dict()) == sample


def test_from_dict_missing_field():
    with pytest.raises(ValueError, match="Missing required LocationFix field"):
        LocationFix.from_dict({'timestamp': T0.isoformat(), 'speed': 1.0})


@pytest.mark.parametrize("speed,accuracy", [
    (float("nan"), 5.0),
    (1.0, float("nan")),
    (float("inf"), 5.0),
    (1.0, float("-inf")),
])
def test_non_finite_readings_rejected(speed, accuracy):
    with pytest.raises(ValueError, match="must be finite"):
        LocationFix(T0, speed, accuracy, 10.0, 20.0)
    with pytest.raises(ValueError, match="must be finite"):
        Sample(1, T0, speed, accuracy, 10.0, 20.0)
