import os
import sys
import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture(autouse=True)
def clear_fallback(monkeypatch):
    """Wipe the in-memory redis fallback before and after each test and force
    every store helper onto it so tests never attempt a network connection.
    """
    import store.client as client
    import api.routes.common as common

    client.clear_fallback()
    monkeypatch.setattr(client, "_redis_client", None)
    monkeypatch.setattr(common, "_service", None)

    async def no_redis():
        return None

    monkeypatch.setattr(client, "get_redis", no_redis)
    # modules that imported the name at import-time
    monkeypatch.setattr("api.routes.health.get_redis", no_redis)

    yield

    client.clear_fallback()
