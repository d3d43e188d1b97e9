"""
Forecast service: loads a metric's recent history from the configured source, runs the forecast engine off the event loop, persists the resulting predictions and fans batch requests out with per-item failure isolation.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from api.requests import ForecastRequest
from config import settings
from datasources.base import HistoricalDataSource
from datasources.exceptions import DataSourceError
from engine.forecast import ForecastError, ForecastRun, ModelRegistry, generate_forecast, get_registry
from engine.series import TimeSeries
from store import predictions as prediction_store

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class BatchItem:
    metric_name: str
    run: Optional[ForecastRun] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.run is not None


class ForecastService:
    def __init__(
        self,
        source: HistoricalDataSource,
        registry: Optional[ModelRegistry] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.source = source
        self.registry = registry or get_registry()
        self._clock = clock

    def history_window(self, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
        end = now or self._clock()
        return end - timedelta(days=int(settings.forecast_lookback_days)), end

    async def load_series(self, metric_name: str, start: datetime, end: datetime) -> TimeSeries:
        observations = await self.source.fetch(metric_name, start, end)
        log.debug("loaded %d observations for %s", len(observations), metric_name)
        return TimeSeries.from_observations(metric_name, observations)

    async def generate(self, req: ForecastRequest) -> ForecastRun:
        now = self._clock()
        start, end = self.history_window(now)
        series = await self.load_series(req.metric_name, start, end)
        run = await asyncio.to_thread(
            generate_forecast,
            series,
            req.model_type,
            req.horizon_periods,
            req.parameters,
            registry=self.registry,
            now=now,
        )
        run = replace(run, window_start=start, window_end=end)
        if settings.forecast_persist_runs:
            await prediction_store.save(run)
        log.info(
            "forecast metric=%s model=%s horizon=%d history=%d accuracy=%.3f",
            run.metric_name, run.model_type, run.horizon_periods, run.history_points, run.accuracy,
        )
        return run

    async def generate_batch(self, requests: Sequence[ForecastRequest]) -> List[BatchItem]:
        sem = asyncio.Semaphore(max(1, int(settings.forecast_batch_max_parallel)))

        async def _one(req: ForecastRequest) -> ForecastRun:
            async with sem:
                return await self.generate(req)

        raw = await asyncio.gather(*[_one(r) for r in requests], return_exceptions=True)

        items: List[BatchItem] = []
        for req, result in zip(requests, raw):
            if isinstance(result, (ForecastError, DataSourceError)):
                log.warning("batch forecast for %s failed: %s", req.metric_name, result)
                items.append(BatchItem(metric_name=req.metric_name, error=str(result)))
            elif isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                log.error("batch forecast for %s crashed: %r", req.metric_name, result)
                items.append(BatchItem(metric_name=req.metric_name, error=f"internal error: {result}"))
            else:
                items.append(BatchItem(metric_name=req.metric_name, run=result))
        return items

    async def list_predictions(self, metric_name: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        if limit is None:
            limit = settings.predictions_default_limit
        return await prediction_store.load(metric_name, limit)

    async def aclose(self) -> None:
        await self.source.aclose()
