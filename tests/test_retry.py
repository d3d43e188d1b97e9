import pytest

from config import settings
from datasources.exceptions import DataSourceUnavailable, InvalidQuery
from datasources.retry import retry


@pytest.mark.asyncio
async def test_retry_async_success_after_failure():
    calls = []

    @retry(attempts=3, delay=0.01, backoff=1, exceptions=(ValueError,))
    async def flaky(x):
        calls.append(x)
        if len(calls) < 2:
            raise ValueError("temporary")
        return x * 2

    result = await flaky(5)
    assert result == 10
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_retry_exhausted():
    calls = []

    @retry(attempts=2, delay=0.0, backoff=1, exceptions=(ValueError,))
    async def always_fail():
        calls.append(1)
        raise ValueError("nope")

    with pytest.raises(ValueError):
        await always_fail()
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_retry_ignores_non_transient_errors():
    calls = []

    @retry(attempts=5, delay=0.0)
    async def bad_query():
        calls.append(1)
        raise InvalidQuery("bad")

    with pytest.raises(InvalidQuery):
        await bad_query()
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_retry_reads_attempts_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "source_retry_attempts", 4)
    monkeypatch.setattr(settings, "source_retry_delay", 0.0)
    calls = []

    @retry()
    async def down():
        calls.append(1)
        raise DataSourceUnavailable("down")

    with pytest.raises(DataSourceUnavailable):
        await down()
    assert len(calls) == 4
