"""
Tests for the observation store and its key layout.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from engine.series import Observation
from store import keys
from store import observations as observation_store
from store.client import _fallback_zsets

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


def test_keys_are_stable_and_namespaced():
    assert keys.observations("revenue") == keys.observations("revenue")
    assert keys.observations("revenue").startswith("mc:observations:")
    assert keys.predictions("revenue").startswith("mc:predictions:")
    assert keys.observations("revenue") != keys.observations("signups")


@pytest.mark.asyncio
async def test_append_and_load_range_filters_by_time():
    obs = [Observation.of(T0 + timedelta(days=i), float(i)) for i in range(10)]
    accepted = await observation_store.append("revenue", reversed(obs))
    assert accepted == 10

    loaded = await observation_store.load_range("revenue", T0 + timedelta(days=2), T0 + timedelta(days=5))
    assert [o.value for o in loaded] == [2.0, 3.0, 4.0, 5.0]
    assert loaded[0].timestamp == T0 + timedelta(days=2)


@pytest.mark.asyncio
async def test_duplicate_samples_are_kept():
    obs = [Observation.of(T0, 5.0), Observation.of(T0, 5.0)]
    assert await observation_store.append("dups", obs) == 2
    loaded = await observation_store.load_range("dups", T0, T0)
    assert len(loaded) == 2


@pytest.mark.asyncio
async def test_append_respects_max_items(monkeypatch):
    from config import settings

    monkeypatch.setattr(settings, "observations_max_items", 3)
    obs = [Observation.of(T0 + timedelta(days=i), float(i)) for i in range(6)]
    await observation_store.append("capped", obs)
    loaded = await observation_store.load_range("capped", T0, T0 + timedelta(days=10))
    # newest samples survive trimming
    assert [o.value for o in loaded] == [3.0, 4.0, 5.0]


@pytest.mark.asyncio
async def test_malformed_members_are_skipped():
    key = keys.observations("broken")
    _fallback_zsets[key] = [(T0.timestamp(), "not json"), (T0.timestamp(), '{"timestamp": 0}')]
    assert await observation_store.load_range("broken", T0, T0) == []


@pytest.mark.asyncio
async def test_clear_removes_everything():
    await observation_store.append("gone", [Observation.of(T0, 1.0)])
    await observation_store.clear("gone")
    assert await observation_store.load_range("gone", T0 - timedelta(days=1), T0 + timedelta(days=1)) == []


@pytest.mark.asyncio
async def test_unknown_metric_loads_empty():
    assert await observation_store.load_range("nothing", T0, T0 + timedelta(days=1)) == []
