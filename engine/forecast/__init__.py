"""
Forecasting models and multi-period forecast generation, including linear regression, exponential growth, moving average and trend extrapolation with confidence scoring and uncertainty bounds.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.forecast.errors import (
    ForecastError,
    InsufficientDataError,
    InvalidHorizonError,
    InvalidParametersError,
    NonFiniteForecastError,
    UnknownModelTypeError,
)
from engine.forecast.generate import generate_forecast
from engine.forecast.registry import ModelInfo, ModelRegistry, get_registry
from engine.forecast.result import ForecastRun, PredictionPoint

__all__ = [
    "ForecastError",
    "InsufficientDataError",
    "InvalidHorizonError",
    "InvalidParametersError",
    "NonFiniteForecastError",
    "UnknownModelTypeError",
    "generate_forecast",
    "ModelInfo",
    "ModelRegistry",
    "get_registry",
    "ForecastRun",
    "PredictionPoint",
]
