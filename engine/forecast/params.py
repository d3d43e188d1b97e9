"""
Typed model parameters and their coercion from the loosely typed mapping supplied by callers.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional

from config import settings
from engine.forecast.errors import InvalidParametersError

log = logging.getLogger(__name__)

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_RE.sub("_", key.strip()).lower()


def _default_window() -> int:
    return int(settings.forecast_moving_average_window)


@dataclass(frozen=True)
class ModelParams:
    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MovingAverageParams(ModelParams):
    window_size: int = field(default_factory=_default_window)


def normalise(model_type: str, raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return ``raw`` with snake_case keys; ``windowSize`` and ``window_size`` are the same knob."""
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise InvalidParametersError(model_type, f"expected a mapping, got {type(raw).__name__}")
    out: Dict[str, Any] = {}
    for key, value in raw.items():
        if not isinstance(key, str):
            continue
        out[_snake(key)] = value
    return out


def _coerce_positive_int(model_type: str, name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidParametersError(model_type, f"{name} must be a positive integer, got {value!r}")
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        raise InvalidParametersError(model_type, f"{name} must be a positive integer, got {value!r}") from None
    if not math.isfinite(numeric) or numeric != int(numeric) or numeric < 1:
        raise InvalidParametersError(model_type, f"{name} must be a positive integer, got {value!r}")
    return int(numeric)


def parse_none(model_type: str, raw: Optional[Mapping[str, Any]]) -> ModelParams:
    ignored = normalise(model_type, raw)
    if ignored:
        log.debug("model %s takes no parameters; ignoring %s", model_type, sorted(ignored))
    return ModelParams()


def parse_moving_average(model_type: str, raw: Optional[Mapping[str, Any]]) -> MovingAverageParams:
    values = normalise(model_type, raw)
    if values.get("window_size") is None:
        return MovingAverageParams()
    return MovingAverageParams(
        window_size=_coerce_positive_int(model_type, "windowSize", values["window_size"]),
    )
