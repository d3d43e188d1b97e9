"""
Shared utilities and dependencies for API route modules.

Provides a single place for building the history source and forecast service
used by the routers, so individual route files stay thin and tests can swap
the service out with ``monkeypatch``.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional

from config import settings
from datasources.factory import DataSourceFactory
from services.forecast_service import ForecastService


_service: Optional[ForecastService] = None


def get_service() -> ForecastService:
    global _service
    if _service is None:
        _service = ForecastService(source=DataSourceFactory.create(settings))
    return _service


async def close_service() -> None:
    global _service
    service, _service = _service, None
    if service is not None:
        await service.aclose()
