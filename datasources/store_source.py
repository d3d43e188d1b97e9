"""
History source backed by the observation store.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime
from typing import List

from config import SOURCE_BACKEND_STORE
from datasources.base import HistoricalDataSource
from engine.series import Observation
from store import observations as observation_store


class StoreDataSource(HistoricalDataSource):
    name = SOURCE_BACKEND_STORE

    async def fetch(self, metric_name: str, start: datetime, end: datetime) -> List[Observation]:
        return await observation_store.load_range(metric_name, start, end)
