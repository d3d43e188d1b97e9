"""
Forecast model variants: ordinary least squares over the observation index, compounded average growth, flat moving average and short-window trend extrapolation, each paired with a confidence heuristic that never increases with the horizon.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Mapping, Optional

import numpy as np

from config import (
    MODEL_EXPONENTIAL,
    MODEL_LINEAR,
    MODEL_MOVING_AVERAGE,
    MODEL_TREND,
    settings,
)
from engine.forecast.errors import InsufficientDataError
from engine.forecast.params import ModelParams, MovingAverageParams, parse_moving_average, parse_none
from engine.series import TimeSeries


def clamp_confidence(value: float) -> float:
    return float(max(settings.forecast_confidence_floor, min(settings.forecast_confidence_ceiling, value)))


def _linear_fit(vals: np.ndarray) -> tuple[float, float]:
    n = len(vals)
    x = np.arange(n, dtype=float)
    sum_x = float(np.sum(x))
    sum_y = float(np.sum(vals))
    sum_xy = float(np.sum(x * vals))
    sum_x2 = float(np.sum(x * x))
    denom = n * sum_x2 - sum_x * sum_x
    if denom == 0:
        return 0.0, float(sum_y / n) if n else 0.0
    slope = (n * sum_xy - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def _r_squared(vals: np.ndarray, slope: float, intercept: float) -> Optional[float]:
    # None for a constant series, where the total sum of squares is zero
    if np.ptp(vals) == 0:
        return None
    x = np.arange(len(vals), dtype=float)
    predicted = slope * x + intercept
    ss_res = float(np.sum((vals - predicted) ** 2))
    ss_tot = float(np.sum((vals - np.mean(vals)) ** 2))
    if ss_tot == 0:
        return None
    return max(0.0, min(1.0, 1.0 - ss_res / ss_tot))


def _growth_rates(vals: np.ndarray) -> np.ndarray:
    prev = vals[:-1]
    nxt = vals[1:]
    mask = prev != 0
    return (nxt[mask] - prev[mask]) / prev[mask]


class ForecastModel(ABC):
    key: ClassVar[str]
    description: ClassVar[str]
    parameters_help: ClassVar[Dict[str, str]] = {}

    def parse_params(self, raw: Optional[Mapping[str, Any]] = None) -> ModelParams:
        return parse_none(self.key, raw)

    @abstractmethod
    def minimum_points(self, params: Optional[ModelParams] = None) -> int: ...

    @abstractmethod
    def _predict(self, series: TimeSeries, periods_ahead: int, params: ModelParams) -> float: ...

    @abstractmethod
    def _confidence(self, series: TimeSeries, periods_ahead: int, params: ModelParams) -> float: ...

    def _resolve(self, params: Optional[ModelParams]) -> ModelParams:
        return params if params is not None else self.parse_params(None)

    def require(self, series: TimeSeries, params: Optional[ModelParams] = None) -> None:
        required = self.minimum_points(self._resolve(params))
        if len(series) < required:
            raise InsufficientDataError(series.metric_name, required, len(series))

    def predict_next(self, series: TimeSeries, periods_ahead: int, params: Optional[ModelParams] = None) -> float:
        resolved = self._resolve(params)
        self.require(series, resolved)
        return float(self._predict(series, periods_ahead, resolved))

    def estimate_confidence(
        self, series: TimeSeries, periods_ahead: int, params: Optional[ModelParams] = None
    ) -> float:
        resolved = self._resolve(params)
        self.require(series, resolved)
        return clamp_confidence(self._confidence(series, periods_ahead, resolved))

    def margin(self, series: TimeSeries, value: float, confidence: float, params: Optional[ModelParams] = None) -> float:
        """Half-width of the uncertainty band, proportional to the predicted magnitude."""
        return abs(value) * (1.0 - confidence)

    def accuracy(self, series: TimeSeries, params: Optional[ModelParams] = None) -> float:
        return self.estimate_confidence(series, 1, params)


class LinearModel(ForecastModel):
    key = MODEL_LINEAR
    description = "Linear regression model"

    def minimum_points(self, params: Optional[ModelParams] = None) -> int:
        return 2

    def _predict(self, series: TimeSeries, periods_ahead: int, params: ModelParams) -> float:
        slope, intercept = _linear_fit(series.values)
        return slope * (len(series) - 1 + periods_ahead) + intercept

    def r_squared(self, series: TimeSeries) -> float:
        vals = series.values
        slope, intercept = _linear_fit(vals)
        r2 = _r_squared(vals, slope, intercept)
        return settings.forecast_linear_flat_confidence if r2 is None else r2

    def _confidence(self, series: TimeSeries, periods_ahead: int, params: ModelParams) -> float:
        return self.r_squared(series)

    def accuracy(self, series: TimeSeries, params: Optional[ModelParams] = None) -> float:
        self.require(series, self._resolve(params))
        return float(self.r_squared(series))


class ExponentialModel(ForecastModel):
    key = MODEL_EXPONENTIAL
    description = "Exponential growth model"

    def minimum_points(self, params: Optional[ModelParams] = None) -> int:
        return 2

    def average_growth_rate(self, series: TimeSeries) -> float:
        rates = _growth_rates(series.values)
        return float(np.mean(rates)) if rates.size else 0.0

    def _predict(self, series: TimeSeries, periods_ahead: int, params: ModelParams) -> float:
        last = series.last.value
        if last == 0:
            return 0.0
        # steep growth overflows to inf here; the engine rejects non-finite points
        with np.errstate(over="ignore", invalid="ignore"):
            factor = np.power(1.0 + self.average_growth_rate(series), float(periods_ahead))
            return float(last * factor)

    def _confidence(self, series: TimeSeries, periods_ahead: int, params: ModelParams) -> float:
        rates = _growth_rates(series.values)
        volatility = float(np.mean(np.abs(rates))) if rates.size else 0.0
        return settings.forecast_exponential_base_confidence - volatility


class MovingAverageModel(ForecastModel):
    key = MODEL_MOVING_AVERAGE
    description = "Moving average model"
    parameters_help = {"windowSize": "Number of periods for moving average"}

    def parse_params(self, raw: Optional[Mapping[str, Any]] = None) -> MovingAverageParams:
        return parse_moving_average(self.key, raw)

    def _window(self, params: Optional[ModelParams]) -> int:
        if isinstance(params, MovingAverageParams):
            return params.window_size
        return MovingAverageParams().window_size

    def minimum_points(self, params: Optional[ModelParams] = None) -> int:
        return self._window(params)

    def volatility(self, series: TimeSeries, params: Optional[ModelParams] = None) -> float:
        window = series.tail(self._window(params))
        if window.size < 2:
            return 0.0
        return float(np.std(window, ddof=1))

    def _predict(self, series: TimeSeries, periods_ahead: int, params: ModelParams) -> float:
        return float(np.mean(series.tail(self._window(params))))

    def _confidence(self, series: TimeSeries, periods_ahead: int, params: ModelParams) -> float:
        return settings.forecast_moving_average_base_confidence - periods_ahead * settings.forecast_moving_average_decay

    def margin(self, series: TimeSeries, value: float, confidence: float, params: Optional[ModelParams] = None) -> float:
        """Half-width sized by recent volatility rather than by the predicted value."""
        return self.volatility(series, params) * (1.0 - confidence)


class TrendModel(ForecastModel):
    key = MODEL_TREND
    description = "Simple trend model"

    def minimum_points(self, params: Optional[ModelParams] = None) -> int:
        return int(settings.forecast_trend_window)

    def trend(self, series: TimeSeries) -> float:
        window = series.tail(self.minimum_points())
        return float((window[-1] - window[0]) / (len(window) - 1))

    def _predict(self, series: TimeSeries, periods_ahead: int, params: ModelParams) -> float:
        return series.last.value + self.trend(series) * periods_ahead

    def _confidence(self, series: TimeSeries, periods_ahead: int, params: ModelParams) -> float:
        return settings.forecast_trend_base_confidence - periods_ahead * settings.forecast_trend_decay
