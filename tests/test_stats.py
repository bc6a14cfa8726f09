"""Tests for track summary statistics."""
from datetime import datetime, timedelta, timezone

import pytest

T0 = datetime(2024, 5, 1, 7, 0, tzinfo=timezone.utc)


def _track(*points):
    """Build a track from (lat, lon) or (lat, lon, time) tuples."""
    from gpx_route_vector.models import Sample, Track
    samples = []
    for p in points:
        lat, lon = p[0], p[1]
        time = p[2] if len(p) > 2 else None
        samples.append(Sample(lat=lat, lon=lon, time=time))
    return Track(points=samples)


def test_distance_sums_consecutive_pairs():
    from gpx_route_vector.core.stats import summarize
    from gpx_route_vector.core.distance import haversine_m
    track = _track((0.0, 0.0), (0.0, 0.0005), (0.0, 0.001))
    stats = summarize(track)
    assert stats.total_distance_m == pytest.approx(haversine_m(0.0, 0.0, 0.0, 0.001))


def test_duration_and_pace_from_timestamps():
    from gpx_route_vector.core.stats import summarize
    track = _track(
        (0.0, 0.0, T0),
        (0.0, 0.0005, T0 + timedelta(seconds=60)),
        (0.0, 0.001, T0 + timedelta(seconds=120)),
    )
    stats = summarize(track)
    assert stats.duration_s == 120.0
    expected_pace = (120 / 60) / (stats.total_distance_m / 1000)
    assert stats.pace_min_per_km == pytest.approx(expected_pace)


def test_no_timestamps_gives_zero_duration_and_pace():
    from gpx_route_vector.core.stats import summarize
    track = _track((0.0, 0.0), (0.0, 0.0005), (0.0, 0.001))
    stats = summarize(track)
    assert stats.total_distance_m > 0
    assert stats.duration_s == 0
    assert stats.pace_min_per_km == 0


def test_single_timestamp_gives_zero_duration():
    from gpx_route_vector.core.stats import summarize
    stats = summarize(_track((0.0, 0.0, T0), (0.0, 0.0005)))
    assert stats.duration_s == 0


def test_duration_uses_first_and_last_timestamped_samples():
    from gpx_route_vector.core.stats import summarize
    track = _track(
        (0.0, 0.0),
        (0.0, 0.0002, T0),
        (0.0, 0.0004, T0 + timedelta(minutes=5)),
        (0.0, 0.0006),
    )
    assert summarize(track).duration_s == 300.0


def test_negative_duration_is_clamped():
    from gpx_route_vector.core.stats import summarize
    track = _track((0.0, 0.0, T0 + timedelta(minutes=5)), (0.0, 0.0005, T0))
    assert summarize(track).duration_s == 0.0


def test_zero_distance_gives_zero_pace():
    from gpx_route_vector.core.stats import summarize
    track = _track((1.0, 1.0, T0), (1.0, 1.0, T0 + timedelta(minutes=10)))
    stats = summarize(track)
    assert stats.total_distance_m == 0
    assert stats.duration_s == 600.0
    assert stats.pace_min_per_km == 0


def test_drift_jump_is_excluded_but_sample_kept():
    from gpx_route_vector.core.stats import summarize
    from gpx_route_vector.core.distance import haversine_m
    track = _track((0.0, 0.0), (0.0, 0.001), (0.0, 1.0))
    stats = summarize(track)
    assert len(track) == 3
    assert stats.total_distance_m == pytest.approx(haversine_m(0.0, 0.0, 0.0, 0.001))


def test_mixed_naive_and_aware_timestamps_degrade_to_zero():
    from gpx_route_vector.core.stats import summarize
    track = _track((0.0, 0.0, datetime(2024, 5, 1, 7, 0)), (0.0, 0.0005, T0))
    assert summarize(track).duration_s == 0.0


def test_single_point_track():
    from gpx_route_vector.core.stats import summarize
    stats = summarize(_track((10.0, 10.0, T0)))
    assert stats.total_distance_m == 0
    assert stats.duration_s == 0
    assert stats.pace_min_per_km == 0
