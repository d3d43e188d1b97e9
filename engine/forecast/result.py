"""
Forecast result records: one prediction point per future period plus the run that owns them.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class PredictionPoint:
    date: datetime
    value: float
    confidence: float
    lower_bound: float
    upper_bound: float

    @property
    def margin(self) -> float:
        return (self.upper_bound - self.lower_bound) / 2.0


@dataclass(frozen=True)
class ForecastRun:
    metric_name: str
    model_type: str
    horizon_periods: int
    points: Tuple[PredictionPoint, ...]
    accuracy: float
    generated_at: datetime
    history_points: int = 0
    parameters: Dict[str, Any] = field(default_factory=dict)
    # lookback window the history was fetched for, when a source was queried
    window_start: Optional[datetime] = None
    window_end: Optional[datetime] = None
