"""
Tests for the HTTP history source: payload parsing and error mapping.
"""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
import pytest

from config import settings
from datasources.exceptions import DataSourceUnavailable, InvalidQuery, QueryTimeout
from datasources.http_source import HttpDataSource

START = datetime(2026, 1, 1, tzinfo=timezone.utc)
END = datetime(2026, 2, 1, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def fast_retries(monkeypatch):
    monkeypatch.setattr(settings, "source_retry_attempts", 2)
    monkeypatch.setattr(settings, "source_retry_delay", 0.0)


def _source(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpDataSource("http://metrics.local/", client=client)


def test_history_url_quotes_metric_name():
    src = HttpDataSource("http://metrics.local/")
    assert src.history_url("sales/daily total") == "http://metrics.local/api/metrics/sales%2Fdaily%20total/history"


@pytest.mark.asyncio
async def test_fetch_parses_list_payload_and_sends_window():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[
            {"timestamp": "2026-01-02T00:00:00Z", "value": 5},
            {"timestamp": "2026-01-01T00:00:00Z", "value": 4},
            {"timestamp": "bad", "value": 1},
        ])

    src = _source(handler)
    rows = await src.fetch("revenue", START, END)
    await src.aclose()

    assert [o.value for o in rows] == [5.0, 4.0]
    assert seen["path"] == "/api/metrics/revenue/history"
    assert seen["params"] == {"start": START.isoformat(), "end": END.isoformat()}


@pytest.mark.asyncio
async def test_fetch_accepts_wrapped_payload():
    src = _source(lambda r: httpx.Response(200, json={"observations": [[1767225600, 3]]}))
    rows = await src.fetch("revenue", START, END)
    assert [o.value for o in rows] == [3.0]


@pytest.mark.asyncio
async def test_unknown_metric_returns_empty():
    src = _source(lambda r: httpx.Response(404, json={"error": "not found"}))
    assert await src.fetch("missing", START, END) == []


@pytest.mark.asyncio
async def test_server_errors_are_retried_then_raised():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503, text="down")

    src = _source(handler)
    with pytest.raises(DataSourceUnavailable):
        await src.fetch("revenue", START, END)
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_transient_failure_recovers_on_retry():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(502)
        return httpx.Response(200, json=[{"timestamp": 1767225600, "value": 1}])

    src = _source(handler)
    rows = await src.fetch("revenue", START, END)
    assert len(rows) == 1
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_client_errors_are_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(400, text="bad metric")

    src = _source(handler)
    with pytest.raises(InvalidQuery):
        await src.fetch("revenue", START, END)
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_timeout_maps_to_query_timeout():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(QueryTimeout):
        await _source(handler).fetch("revenue", START, END)


@pytest.mark.asyncio
async def test_connection_error_maps_to_unavailable():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(DataSourceUnavailable):
        await _source(handler).fetch("revenue", START, END)


@pytest.mark.asyncio
async def test_invalid_json_and_payload_shape_are_rejected():
    with pytest.raises(InvalidQuery):
        await _source(lambda r: httpx.Response(200, text="<html>")).fetch("revenue", START, END)
    with pytest.raises(InvalidQuery):
        await _source(lambda r: httpx.Response(200, json="nope")).fetch("revenue", START, END)
