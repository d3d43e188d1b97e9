"""
Prediction storage and retrieval logic.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from config import PREDICTIONS_TTL, settings
from engine.forecast.result import ForecastRun
from store import keys
from store.client import redis_delete, redis_lrange, redis_rpush

log = logging.getLogger(__name__)


def _records(run: ForecastRun) -> List[Dict[str, Any]]:
    created_at = run.generated_at.isoformat()
    return [
        {
            "metric_name": run.metric_name,
            "model_type": run.model_type,
            "prediction_date": p.date.isoformat(),
            "predicted_value": p.value,
            "confidence": p.confidence,
            "lower_bound": p.lower_bound,
            "upper_bound": p.upper_bound,
            "model_parameters": dict(run.parameters),
            "created_at": created_at,
        }
        for p in run.points
    ]


async def save(run: ForecastRun) -> int:
    records = _records(run)
    try:
        await redis_rpush(
            keys.predictions(run.metric_name),
            [json.dumps(r) for r in records],
            ttl=PREDICTIONS_TTL,
            max_len=settings.predictions_max_items,
        )
    except Exception as exc:
        log.debug("Predictions save failed %s: %s", run.metric_name, exc)
        return 0
    return len(records)


async def load(metric_name: str, limit: int = 100) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    try:
        raw = await redis_lrange(keys.predictions(metric_name))
    except Exception as exc:
        log.debug("Predictions load failed %s: %s", metric_name, exc)
        return rows
    for item in raw:
        try:
            row = json.loads(item)
        except (TypeError, ValueError):
            continue
        if isinstance(row, dict) and "prediction_date" in row:
            rows.append(row)
    # ISO-8601 UTC strings order chronologically
    rows.sort(key=lambda r: (r["prediction_date"], r.get("created_at", "")), reverse=True)
    return rows[: max(0, limit)]


async def clear(metric_name: str) -> None:
    try:
        await redis_delete(keys.predictions(metric_name))
    except Exception as exc:
        log.debug("Predictions clear failed %s: %s", metric_name, exc)
