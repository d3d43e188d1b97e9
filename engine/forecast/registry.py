"""
Registry mapping model-type keys to forecast model instances.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from engine.enums import ModelType
from engine.forecast.errors import UnknownModelTypeError
from engine.forecast.models import (
    ExponentialModel,
    ForecastModel,
    LinearModel,
    MovingAverageModel,
    TrendModel,
)
from engine.forecast.params import ModelParams

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelInfo:
    model_type: str
    description: str
    parameters: Dict[str, str] = field(default_factory=dict)


def _normalise_key(key: Any) -> str:
    if isinstance(key, ModelType):
        return key.value
    return str(key or "").strip().lower()


class ModelRegistry:
    def __init__(self, models: Iterable[ForecastModel] = ()) -> None:
        self._models: Dict[str, ForecastModel] = {}
        for model in models:
            self.register(model)

    def register(self, model: ForecastModel) -> None:
        if not isinstance(model, ForecastModel):
            raise TypeError(f"{type(model).__name__} must inherit from ForecastModel")
        key = _normalise_key(model.key)
        if not key:
            raise ValueError("model key must be a non-empty string")
        if key in self._models:
            raise ValueError(f"Model {key!r} is already registered")
        self._models[key] = model
        log.debug("Registered forecast model: %s", key)

    def resolve(self, key: Any) -> ForecastModel:
        model = self._models.get(_normalise_key(key))
        if model is None:
            raise UnknownModelTypeError(str(key))
        return model

    def parse_params(self, key: Any, raw: Optional[Mapping[str, Any]]) -> ModelParams:
        return self.resolve(key).parse_params(raw)

    def available(self) -> List[str]:
        return list(self._models)

    def describe(self, key: Any) -> ModelInfo:
        model = self.resolve(key)
        return ModelInfo(
            model_type=model.key,
            description=model.description,
            parameters=dict(model.parameters_help),
        )

    def __contains__(self, key: object) -> bool:
        return _normalise_key(key) in self._models


def default_registry() -> ModelRegistry:
    return ModelRegistry([LinearModel(), ExponentialModel(), MovingAverageModel(), TrendModel()])


_registry = default_registry()


def get_registry() -> ModelRegistry:
    return _registry
