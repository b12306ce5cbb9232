"""Tests for SampleFormatter text output."""

from datetime import timezone

from geotrace_core import DisplayRegion, DisplayStats, SampleFormatter


def test_list_item(make_sample):
    formatter = SampleFormatter(tz=timezone.utc)
    sample = make_sample(speed=1.26, accuracy=65.0)

    assert formatter.list_item(sample) == " 1  14:00:00  1.3  65.0"


def test_list_item_shows_invalid_sentinels(make_sample):
    formatter = SampleFormatter(tz=timezone.utc)
    sample = make_sample(speed=-1.0, accuracy=-1.0)

    assert formatter.list_item(sample) == " 1  14:00:00  -1.0  -1.0"


def test_stats_lines():
    stats = DisplayStats(
        sample_count=4,
        avg_horizontal_accuracy=5.26,
        avg_speed=1.4,
        pct_has_accuracy=75.0,
        pct_has_speed=50.0,
        avg_delay=0.36,
    )

    assert SampleFormatter().stats_lines(stats) == [
        "Avg. H. Accuracy: 5.3",
        "Avg. Speed: 1.4",
        "% Has H. Accuracy: 75",
        "% Has Speed: 50",
        "Avg. Delay: 0.4",
    ]


def test_stats_lines_without_data():
    """Undefined values render as the placeholder."""
    lines = SampleFormatter(placeholder="n/a").stats_lines(DisplayStats())

    assert lines[0] == "Avg. H. Accuracy: n/a"
    assert all(line.endswith("n/a") for line in lines)
    assert not any("nan" in line for line in lines)


def test_region_line():
    region = DisplayRegion(center_lat=10.0, center_lon=20.0, lat_span=0.0002, lon_span=0.002)

    assert SampleFormatter().region_line(region) == "ΔLatitude: 0.0002, ΔLongitude: 0.002"
