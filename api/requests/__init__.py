from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from config import DEFAULT_MODEL_TYPE, settings


class ForecastRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    metric_name: str = Field(
        min_length=1,
        validation_alias=AliasChoices("metric_name", "metricName"),
    )
    model_type: str = Field(
        default=DEFAULT_MODEL_TYPE,
        validation_alias=AliasChoices("model_type", "modelType"),
    )
    horizon_periods: int = Field(
        default=settings.forecast_default_horizon,
        ge=1,
        le=settings.forecast_max_horizon,
        validation_alias=AliasChoices("horizon_periods", "horizonPeriods", "forecastPeriods"),
    )
    parameters: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("metric_name")
    @classmethod
    def strip_metric_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("metric_name must be a non-empty string")
        return v


class ObservationIn(BaseModel):
    timestamp: Union[datetime, float]
    value: float = Field(allow_inf_nan=False)


class ObservationBatch(BaseModel):
    observations: List[ObservationIn] = Field(min_length=1)
