"""
Prediction routes for generating single and batch forecasts, browsing the model catalogue and reading stored predictions.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, List

from fastapi import APIRouter, HTTPException, Query

from api.requests import ForecastRequest
from api.responses import (
    BatchItemOut,
    BatchResponse,
    ForecastRunOut,
    ModelInfoOut,
    StoredPrediction,
)
from api.routes.common import get_service
from api.routes.exception import handle_exceptions
from engine.forecast import UnknownModelTypeError, get_registry

router = APIRouter(tags=["Predictions"])


def _coerce_query_value(value: Any, cast: Any) -> Any:
    # Allow direct unit-test invocation without FastAPI Query parsing.
    raw = value.default if hasattr(value, "default") else value
    return cast(raw)


@router.post("/predictions/generate", summary="Forecast one metric over the requested horizon")
@handle_exceptions
async def generate_prediction(req: ForecastRequest) -> ForecastRunOut:
    run = await get_service().generate(req)
    return ForecastRunOut.from_run(run)


@router.post("/predictions/batch", summary="Forecast several metrics, reporting failures per item")
@handle_exceptions
async def generate_batch_predictions(requests: List[ForecastRequest]) -> BatchResponse:
    items = await get_service().generate_batch(requests)
    results = [
        BatchItemOut(
            metric_name=item.metric_name,
            forecast=ForecastRunOut.from_run(item.run) if item.run is not None else None,
            error=item.error,
        )
        for item in items
    ]
    succeeded = sum(1 for item in items if item.ok)
    return BatchResponse(
        results=results,
        total_processed=len(requests),
        succeeded=succeeded,
        failed=len(items) - succeeded,
    )


@router.get("/predictions/models", summary="List available forecast models")
@handle_exceptions
async def list_models() -> List[str]:
    return get_registry().available()


@router.get("/predictions/models/{model_type}/parameters", summary="Describe a forecast model and its parameters")
@handle_exceptions
async def model_parameters(model_type: str) -> ModelInfoOut:
    try:
        info = get_registry().describe(model_type)
    except UnknownModelTypeError as exc:
        raise HTTPException(status_code=404, detail="Model type not found") from exc
    return ModelInfoOut.from_info(info)


@router.get("/predictions/metric/{metric_name}", summary="Stored predictions for a metric, latest first")
@handle_exceptions
async def list_predictions(
    metric_name: str,
    limit: int = Query(default=100, ge=1, le=1000),
) -> List[StoredPrediction]:
    limit = _coerce_query_value(limit, int)
    rows = await get_service().list_predictions(metric_name, limit)
    return [StoredPrediction(**row) for row in rows]
