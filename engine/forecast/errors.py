"""
Forecast error taxonomy.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations


class ForecastError(Exception):
    pass


class InsufficientDataError(ForecastError):
    def __init__(self, metric_name: str, required: int, available: int) -> None:
        self.metric_name = metric_name
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient data for metric {metric_name!r}: "
            f"need at least {required} observations, found {available}"
        )


class UnknownModelTypeError(ForecastError):
    def __init__(self, model_type: str) -> None:
        self.model_type = model_type
        super().__init__(f"Unknown model type: {model_type!r}")


class InvalidParametersError(ForecastError):
    def __init__(self, model_type: str, detail: str) -> None:
        self.model_type = model_type
        self.detail = detail
        super().__init__(f"Invalid parameters for model {model_type!r}: {detail}")


class InvalidHorizonError(ForecastError):
    def __init__(self, horizon: object, maximum: int) -> None:
        self.horizon = horizon
        self.maximum = maximum
        super().__init__(f"horizon_periods must be between 1 and {maximum}, got {horizon!r}")


class NonFiniteForecastError(ForecastError):
    def __init__(self, metric_name: str, model_type: str, periods_ahead: int) -> None:
        self.metric_name = metric_name
        self.model_type = model_type
        self.periods_ahead = periods_ahead
        super().__init__(
            f"Forecast for metric {metric_name!r} with model {model_type!r} "
            f"exceeds the representable range at period {periods_ahead}"
        )
