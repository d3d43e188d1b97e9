"""
Metric observation routes feeding the store-backed history source.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Dict

from fastapi import APIRouter, HTTPException

from api.requests import ObservationBatch
from api.responses import ObservationsAccepted
from api.routes.exception import handle_exceptions
from engine.series import Observation
from store import observations as observation_store

router = APIRouter(tags=["Metrics"])


@router.post("/metrics/{metric_name}/observations", summary="Record observations for a metric")
@handle_exceptions
async def record_observations(metric_name: str, req: ObservationBatch) -> ObservationsAccepted:
    if not metric_name.strip():
        raise HTTPException(status_code=400, detail="metric_name must be a non-empty string")
    try:
        parsed = [Observation.of(o.timestamp, o.value) for o in req.observations]
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    accepted = await observation_store.append(metric_name, parsed)
    return ObservationsAccepted(metric_name=metric_name, accepted=accepted)


@router.delete("/metrics/{metric_name}/observations", summary="Delete all observations for a metric")
@handle_exceptions
async def clear_observations(metric_name: str) -> Dict[str, str]:
    await observation_store.clear(metric_name)
    return {"status": "cleared", "metric_name": metric_name}
