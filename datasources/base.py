"""
Base contract for sources of historical metric observations.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from engine.series import Observation


class HistoricalDataSource(ABC):
    """Fetches raw observations for one metric.

    Results may be unsorted and may be empty; callers sort and validate.
    """

    name: str = ""

    @abstractmethod
    async def fetch(self, metric_name: str, start: datetime, end: datetime) -> List[Observation]: ...

    async def aclose(self) -> None:
        return None
