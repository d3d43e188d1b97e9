"""
Response models for API endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_serializer

from engine.forecast import ForecastRun, ModelInfo


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class PredictionPointOut(NpModel):

    date: datetime
    value: float
    confidence: float
    lower_bound: float
    upper_bound: float


class TimeRangeOut(NpModel):

    start: datetime
    end: datetime


class ForecastRunOut(NpModel):

    metric_name: str
    model_type: str
    horizon_periods: int
    accuracy: float
    generated_at: datetime
    history_points: int
    parameters: Dict[str, Any] = Field(default_factory=dict)
    predictions: List[PredictionPointOut]
    time_range: Optional[TimeRangeOut] = None

    @classmethod
    def from_run(cls, run: ForecastRun) -> ForecastRunOut:
        return cls(
            metric_name=run.metric_name,
            model_type=run.model_type,
            horizon_periods=run.horizon_periods,
            accuracy=run.accuracy,
            generated_at=run.generated_at,
            history_points=run.history_points,
            parameters=dict(run.parameters),
            time_range=(
                TimeRangeOut(start=run.window_start, end=run.window_end)
                if run.window_start is not None and run.window_end is not None
                else None
            ),
            predictions=[
                PredictionPointOut(
                    date=p.date,
                    value=p.value,
                    confidence=p.confidence,
                    lower_bound=p.lower_bound,
                    upper_bound=p.upper_bound,
                )
                for p in run.points
            ],
        )


class BatchItemOut(NpModel):

    metric_name: str
    forecast: Optional[ForecastRunOut] = None
    error: Optional[str] = None


class BatchResponse(NpModel):

    results: List[BatchItemOut]
    total_processed: int
    succeeded: int
    failed: int


class ModelInfoOut(NpModel):

    model_type: str
    description: str
    parameters: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_info(cls, info: ModelInfo) -> ModelInfoOut:
        return cls(model_type=info.model_type, description=info.description, parameters=dict(info.parameters))


class StoredPrediction(NpModel):

    metric_name: str
    model_type: str
    prediction_date: datetime
    predicted_value: float
    confidence: float
    lower_bound: Optional[float] = None
    upper_bound: Optional[float] = None
    model_parameters: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class ObservationsAccepted(NpModel):

    metric_name: str
    accepted: int
