"""
Multi-period forecast generation: resolves the requested model, validates the history against its minimum, then walks the horizon one day at a time attaching confidence-derived bounds to every predicted value.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any, List, Mapping, Optional

from config import DEFAULT_MODEL_TYPE, settings
from engine.forecast.errors import InvalidHorizonError, NonFiniteForecastError, UnknownModelTypeError
from engine.forecast.models import ForecastModel
from engine.forecast.registry import ModelRegistry, get_registry
from engine.forecast.result import ForecastRun, PredictionPoint
from engine.series import TimeSeries

log = logging.getLogger(__name__)


def _validate_horizon(horizon_periods: Any) -> int:
    maximum = int(settings.forecast_max_horizon)
    if isinstance(horizon_periods, bool) or not isinstance(horizon_periods, int):
        raise InvalidHorizonError(horizon_periods, maximum)
    if horizon_periods < 1 or horizon_periods > maximum:
        raise InvalidHorizonError(horizon_periods, maximum)
    return horizon_periods


def resolve_model(registry: ModelRegistry, model_type: Any) -> ForecastModel:
    try:
        return registry.resolve(model_type)
    except UnknownModelTypeError:
        if settings.forecast_strict_model_types:
            raise
        log.warning("Unknown model type %r, falling back to %s", model_type, DEFAULT_MODEL_TYPE)
        return registry.resolve(DEFAULT_MODEL_TYPE)


def generate_forecast(
    series: TimeSeries,
    model_type: Any,
    horizon_periods: int,
    params: Optional[Mapping[str, Any]] = None,
    *,
    registry: Optional[ModelRegistry] = None,
    now: Optional[datetime] = None,
) -> ForecastRun:
    horizon = _validate_horizon(horizon_periods)
    model = resolve_model(registry or get_registry(), model_type)
    typed_params = model.parse_params(params)
    model.require(series, typed_params)

    step = timedelta(seconds=settings.forecast_day_step_seconds)
    last_date = series.last.timestamp

    points: List[PredictionPoint] = []
    for h in range(1, horizon + 1):
        value = model.predict_next(series, h, typed_params)
        confidence = model.estimate_confidence(series, h, typed_params)
        margin = model.margin(series, value, confidence, typed_params)
        lower, upper = value - margin, value + margin
        if not all(math.isfinite(x) for x in (value, margin, lower, upper)):
            raise NonFiniteForecastError(series.metric_name, model.key, h)
        points.append(PredictionPoint(
            date=last_date + step * h,
            value=value,
            confidence=confidence,
            lower_bound=lower,
            upper_bound=upper,
        ))

    accuracy = model.accuracy(series, typed_params)
    return ForecastRun(
        metric_name=series.metric_name,
        model_type=model.key,
        horizon_periods=horizon,
        points=tuple(points),
        accuracy=accuracy,
        generated_at=now or datetime.now(timezone.utc),
        history_points=len(series),
        parameters=typed_params.as_dict(),
    )
