"""
Time series model for metric observations, including construction from loosely typed payloads, timestamp normalisation to UTC and ascending ordering, so every forecast model consumes the same well-formed sequence.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Iterator, List, Mapping, Tuple, Union

import numpy as np

log = logging.getLogger(__name__)

TimestampLike = Union[datetime, int, float, str]


def to_utc(ts: TimestampLike) -> datetime:
    if isinstance(ts, datetime):
        return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts.astimezone(timezone.utc)
    if isinstance(ts, (int, float)) and not isinstance(ts, bool):
        return datetime.fromtimestamp(float(ts), tz=timezone.utc)
    if isinstance(ts, str):
        text = ts.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return to_utc(datetime.fromisoformat(text))
    raise TypeError(f"unsupported timestamp type: {type(ts).__name__}")


@dataclass(frozen=True)
class Observation:
    timestamp: datetime
    value: float

    @classmethod
    def of(cls, timestamp: TimestampLike, value: Any) -> Observation:
        numeric = float(value)
        if not math.isfinite(numeric):
            raise ValueError(f"observation value must be finite, got {value!r}")
        return cls(timestamp=to_utc(timestamp), value=numeric)


@dataclass(frozen=True)
class TimeSeries:
    metric_name: str
    observations: Tuple[Observation, ...]

    def __post_init__(self) -> None:
        # stable sort: equal timestamps keep the order they were supplied in
        ordered = tuple(sorted(self.observations, key=lambda o: o.timestamp))
        object.__setattr__(self, "observations", ordered)

    @classmethod
    def from_observations(cls, metric_name: str, observations: Iterable[Observation]) -> TimeSeries:
        return cls(metric_name=metric_name, observations=tuple(observations))

    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self.observations)

    @property
    def values(self) -> np.ndarray:
        return np.array([o.value for o in self.observations], dtype=float)

    @property
    def last(self) -> Observation:
        if not self.observations:
            raise IndexError(f"series {self.metric_name!r} is empty")
        return self.observations[-1]

    def tail(self, count: int) -> np.ndarray:
        return self.values[-count:] if count > 0 else np.array([], dtype=float)


def parse_points(points: Iterable[Any]) -> List[Observation]:
    """Build observations from ``{"timestamp", "value"}`` mappings or ``(ts, value)`` pairs.

    Malformed entries are skipped with a debug log rather than failing the
    whole payload.
    """
    parsed: List[Observation] = []
    for p in points:
        try:
            if isinstance(p, Observation):
                parsed.append(p)
            elif isinstance(p, Mapping):
                parsed.append(Observation.of(p["timestamp"], p["value"]))
            else:
                parsed.append(Observation.of(p[0], p[1]))
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            log.debug("parse_points skipped %r: %s", p, exc)
            continue
    return parsed
