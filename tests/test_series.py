"""
Tests for observation parsing and time series ordering.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from engine.series import Observation, TimeSeries, parse_points, to_utc


def test_to_utc_handles_supported_inputs():
    expected = datetime(2026, 3, 1, tzinfo=timezone.utc)
    assert to_utc(expected) == expected
    assert to_utc(datetime(2026, 3, 1)) == expected
    assert to_utc(expected.timestamp()) == expected
    assert to_utc(int(expected.timestamp())) == expected
    assert to_utc("2026-03-01T00:00:00Z") == expected
    assert to_utc("2026-03-01T02:00:00+02:00") == expected


def test_to_utc_rejects_unknown_types():
    with pytest.raises(TypeError):
        to_utc(None)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        to_utc(True)  # type: ignore[arg-type]


@pytest.mark.parametrize("value", [float("nan"), float("inf"), "-inf"])
def test_observation_rejects_non_finite_values(value):
    with pytest.raises(ValueError):
        Observation.of(0, value)


def test_series_sorts_by_timestamp_and_keeps_tie_order():
    t0 = datetime(2026, 1, 1, tzinfo=timezone.utc)
    obs = [
        Observation.of(t0 + timedelta(days=2), 3),
        Observation.of(t0, 1),
        Observation.of(t0 + timedelta(days=1), 2),
        Observation.of(t0 + timedelta(days=1), 2.5),
    ]
    series = TimeSeries.from_observations("m", obs)
    assert series.values.tolist() == [1.0, 2.0, 2.5, 3.0]
    assert series.last.timestamp == t0 + timedelta(days=2)
    assert len(series) == 4
    assert series.tail(2).tolist() == [2.5, 3.0]
    assert series.tail(0).tolist() == []


def test_empty_series_has_no_last():
    series = TimeSeries.from_observations("m", [])
    assert len(series) == 0
    with pytest.raises(IndexError):
        _ = series.last


def test_parse_points_skips_malformed_entries():
    points = [
        {"timestamp": "2026-01-01T00:00:00Z", "value": 1},
        {"timestamp": 1767312000, "value": "2.5"},
        (1767398400, 3),
        {"timestamp": "2026-01-05T00:00:00Z"},
        {"timestamp": "not-a-date", "value": 4},
        {"timestamp": 1767398400, "value": "NaN"},
        [1767398400],
    ]
    parsed = parse_points(points)
    assert [o.value for o in parsed] == [1.0, 2.5, 3.0]
    assert all(o.timestamp.utcoffset() == timedelta(0) for o in parsed)


def test_direct_construction_sorts_observations():
    t0 = datetime(2026, 1, 1, tzinfo=timezone.utc)
    series = TimeSeries("m", (
        Observation.of(t0 + timedelta(days=2), 30),
        Observation.of(t0, 10),
        Observation.of(t0 + timedelta(days=1), 20),
    ))
    assert series.values.tolist() == [10.0, 20.0, 30.0]
    assert series.last.value == 30.0
