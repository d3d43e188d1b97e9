"""
Observation storage: metric samples kept in a sorted set scored by epoch seconds so time-range reads stay cheap.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime
from typing import Iterable, List, Optional

from config import OBSERVATIONS_TTL, settings
from engine.series import Observation
from store import keys
from store.client import redis_delete, redis_zadd, redis_zrangebyscore

log = logging.getLogger(__name__)


def _to_json(obs: Observation) -> str:
    # the id keeps repeated (timestamp, value) samples distinct inside the set
    return json.dumps({
        "id": uuid.uuid4().hex,
        "timestamp": obs.timestamp.timestamp(),
        "value": obs.value,
    })


def _from_json(data: str) -> Optional[Observation]:
    try:
        d = json.loads(data)
        return Observation.of(d["timestamp"], d["value"])
    except (KeyError, TypeError, ValueError) as exc:
        log.debug("Skipping malformed observation %r: %s", data, exc)
        return None


async def append(metric_name: str, observations: Iterable[Observation]) -> int:
    members = {_to_json(o): o.timestamp.timestamp() for o in observations}
    await redis_zadd(
        keys.observations(metric_name),
        members,
        ttl=OBSERVATIONS_TTL,
        max_len=settings.observations_max_items,
    )
    return len(members)


async def load_range(metric_name: str, start: datetime, end: datetime) -> List[Observation]:
    raw = await redis_zrangebyscore(keys.observations(metric_name), start.timestamp(), end.timestamp())
    parsed = (_from_json(r) for r in raw)
    return [o for o in parsed if o is not None]


async def clear(metric_name: str) -> None:
    try:
        await redis_delete(keys.observations(metric_name))
    except Exception as exc:
        log.debug("Observations clear failed %s: %s", metric_name, exc)
