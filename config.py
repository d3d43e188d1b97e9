"""
Constants and configuration for Metricast.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Optional

from pydantic_settings import BaseSettings


REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
OBSERVATIONS_TTL: int = int(os.getenv("OBSERVATIONS_TTL", "7776000"))
PREDICTIONS_TTL: int = int(os.getenv("PREDICTIONS_TTL", "2592000"))

SOURCE_BACKEND_STORE = "store"
SOURCE_BACKEND_HTTP = "http"

METRICAST_SOURCE_BACKEND = os.getenv("METRICAST_SOURCE_BACKEND", SOURCE_BACKEND_STORE).lower()
METRICAST_SOURCE_HTTP_URL = os.getenv("METRICAST_SOURCE_HTTP_URL", "http://metrics-api:8080").rstrip("/")
METRICAST_SOURCE_TIMEOUT = int(os.getenv("METRICAST_SOURCE_TIMEOUT", "30"))

# model keys exposed by the registry, in catalogue order
MODEL_LINEAR = "linear"
MODEL_EXPONENTIAL = "exponential"
MODEL_MOVING_AVERAGE = "moving_average"
MODEL_TREND = "trend"

DEFAULT_MODEL_TYPE = MODEL_LINEAR

HEALTH_PATH = "/health"


class Settings(BaseSettings):
    source_backend: str = METRICAST_SOURCE_BACKEND
    source_http_url: str = METRICAST_SOURCE_HTTP_URL
    source_timeout: int = METRICAST_SOURCE_TIMEOUT
    source_retry_attempts: int = 3
    source_retry_delay: float = 0.5
    source_retry_backoff: float = 2.0

    # forecast engine
    forecast_max_horizon: int = 365
    forecast_default_horizon: int = 30
    forecast_day_step_seconds: float = 86400.0
    # unknown model keys fall back to linear unless this is set
    forecast_strict_model_types: bool = False
    forecast_moving_average_window: int = 7

    # confidence clamp shared by every model
    forecast_confidence_floor: float = 0.1
    forecast_confidence_ceiling: float = 0.95
    # R² reported for a constant series, where total sum of squares is zero
    forecast_linear_flat_confidence: float = 0.5

    forecast_exponential_base_confidence: float = 0.85
    forecast_moving_average_base_confidence: float = 0.8
    forecast_moving_average_decay: float = 0.05
    forecast_trend_base_confidence: float = 0.88
    forecast_trend_decay: float = 0.02
    forecast_trend_window: int = 3

    # service
    forecast_lookback_days: int = 90
    forecast_batch_max_parallel: int = 4
    forecast_persist_runs: bool = True

    # stores
    observations_max_items: int = 50_000
    predictions_max_items: int = 5_000
    predictions_default_limit: int = 100
    store_redis_retry_cooldown_seconds: float = 10.0
    store_fallback_max_items: int = 10_000

    ssl_enabled: bool = False
    ssl_certfile: Optional[str] = None
    ssl_keyfile: Optional[str] = None

    model_config = {
        "env_prefix": "METRICAST_",
        "extra": "ignore",
    }


settings = Settings()
