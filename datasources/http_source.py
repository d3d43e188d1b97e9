# datasources/http_source.py

from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from config import SOURCE_BACKEND_HTTP
from datasources.base import HistoricalDataSource
from datasources.exceptions import DataSourceUnavailable, InvalidQuery, QueryTimeout
from datasources.retry import retry
from engine.series import Observation, parse_points


class HttpDataSource(HistoricalDataSource):
    """Reads history from an external metrics API.

    ``GET {base_url}/api/metrics/{metric}/history?start=..&end=..`` returning
    either a JSON list of ``{"timestamp", "value"}`` points or an object with
    the list under ``observations``.
    """

    name = SOURCE_BACKEND_HTTP

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        headers: Optional[Dict[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = str(base_url).rstrip("/")
        self.timeout = timeout
        self.headers = headers or {}
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def history_url(self, metric_name: str) -> str:
        return f"{self.base_url}/api/metrics/{quote(metric_name, safe='')}/history"

    @retry()
    async def fetch(self, metric_name: str, start: datetime, end: datetime) -> List[Observation]:
        url = self.history_url(metric_name)
        params = {"start": start.isoformat(), "end": end.isoformat()}
        try:
            resp = await self._client.get(url, params=params, headers=self.headers)
            resp.raise_for_status()
            payload: Any = resp.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return []
            if e.response.status_code >= 500:
                raise DataSourceUnavailable(
                    f"Metrics API failed [{e.response.status_code}] for {metric_name!r}"
                ) from e
            raise InvalidQuery(f"Metrics API rejected query [{e.response.status_code}]: {e.response.text}") from e
        except httpx.TimeoutException as e:
            raise QueryTimeout(f"Metrics API timed out for {metric_name!r}") from e
        except httpx.RequestError as e:
            raise DataSourceUnavailable(f"Cannot reach metrics API at {url}") from e
        except ValueError as e:
            raise InvalidQuery(f"Metrics API returned invalid JSON for {metric_name!r}") from e

        if isinstance(payload, dict):
            payload = payload.get("observations", [])
        if not isinstance(payload, list):
            raise InvalidQuery(f"Unexpected history payload type: {type(payload).__name__}")
        return parse_points(payload)

    async def aclose(self) -> None:
        await self._client.aclose()
