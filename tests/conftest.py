"""Shared fixtures for geotrace tests."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from geotrace_core import LocationFix, Sample


T0 = datetime(2026, 10, 19, 14, 0, 0, tzinfo=timezone.utc)
DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def make_fix():
    def _make_fix(
        speed=1.0,
        accuracy=5.0,
        lat=10.0,
        lon=20.0,
        timestamp=T0,
    ) -> LocationFix:
        return LocationFix(
            timestamp=timestamp,
            speed=speed,
            horizontal_accuracy=accuracy,
            latitude=lat,
            longitude=lon,
        )
    return _make_fix


@pytest.fixture
def make_sample():
    counter = {'n': 0}

    def _make_sample(
        speed=1.0,
        accuracy=5.0,
        lat=10.0,
        lon=20.0,
        timestamp=T0,
    ) -> Sample:
        counter['n'] += 1
        return Sample(
            sequence_number=counter['n'],
            timestamp=timestamp,
            speed=speed,
            horizontal_accuracy=accuracy,
            latitude=lat,
            longitude=lon,
        )
    return _make_sample


@pytest.fixture
def dinamos_track():
    return DATA_DIR / "tracks" / "dinamos.jsonl"
