"""
Client code for Redis access, with in-memory fallback if Redis is unavailable.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import bisect
import logging
import time
from typing import Any, Optional

from config import settings

log = logging.getLogger(__name__)

_redis_client: Any = None
_fallback_lists: dict[str, list[str]] = {}
# sorted by (score, member), mirroring redis ZSET ordering
_fallback_zsets: dict[str, list[tuple[float, str]]] = {}
_using_fallback = False
_init_lock = asyncio.Lock()
_retry_after_monotonic: float = 0.0

_MAX_FALLBACK_SIZE = int(settings.store_fallback_max_items)
_REDIS_RETRY_COOLDOWN_SECONDS = float(settings.store_redis_retry_cooldown_seconds)
_REDIS_OP_TIMEOUT_SECONDS = 0.5


def clear_fallback() -> None:
    _fallback_lists.clear()
    _fallback_zsets.clear()


async def get_redis() -> Any:
    global _redis_client, _using_fallback, _retry_after_monotonic

    if _redis_client is not None:
        return _redis_client
    if time.monotonic() < _retry_after_monotonic:
        _using_fallback = True
        return None

    async with _init_lock:
        if _redis_client is not None:
            return _redis_client
        if time.monotonic() < _retry_after_monotonic:
            _using_fallback = True
            return None
        try:
            import redis.asyncio as aioredis
            from config import REDIS_URL

            client = aioredis.from_url(
                REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=0.5,
                socket_timeout=0.5,
            )
            await asyncio.wait_for(client.ping(), timeout=0.5)
            _redis_client = client
            _retry_after_monotonic = 0.0
            _using_fallback = False
            log.info("Redis connected: %s", REDIS_URL)
            return _redis_client
        except Exception as exc:
            _retry_after_monotonic = time.monotonic() + max(0.0, _REDIS_RETRY_COOLDOWN_SECONDS)
            if not _using_fallback:
                log.warning("Redis unavailable (%s), using in-memory fallback", exc)
                _using_fallback = True
            return None


def _fallback_zadd(key: str, members: dict[str, float], max_len: Optional[int]) -> None:
    zset = _fallback_zsets.setdefault(key, [])
    for member, score in members.items():
        if len(zset) >= _MAX_FALLBACK_SIZE:
            break
        bisect.insort(zset, (float(score), member))
    if max_len and len(zset) > max_len:
        del zset[:-max_len]


def _fallback_zrange(key: str, min_score: float, max_score: float) -> list[str]:
    zset = _fallback_zsets.get(key, [])
    return [member for score, member in zset if min_score <= score <= max_score]


async def redis_zadd(
    key: str,
    members: dict[str, float],
    ttl: Optional[int] = None,
    max_len: Optional[int] = None,
) -> None:
    if not members:
        return
    client = await get_redis()
    if client is None:
        _fallback_zadd(key, members, max_len)
        return
    try:
        pipe = client.pipeline()
        pipe.zadd(key, members)
        if max_len:
            # keep the highest-scored max_len members
            pipe.zremrangebyrank(key, 0, -max_len - 1)
        if ttl:
            pipe.expire(key, ttl)
        await asyncio.wait_for(pipe.execute(), timeout=_REDIS_OP_TIMEOUT_SECONDS)
    except Exception as exc:
        log.debug("Redis ZADD error %s: %s", key, exc)
        _fallback_zadd(key, members, max_len)


async def redis_zrangebyscore(key: str, min_score: float, max_score: float) -> list[str]:
    client = await get_redis()
    if client is None:
        return _fallback_zrange(key, min_score, max_score)
    try:
        return await asyncio.wait_for(
            client.zrangebyscore(key, min_score, max_score),
            timeout=_REDIS_OP_TIMEOUT_SECONDS,
        )
    except Exception as exc:
        log.debug("Redis ZRANGEBYSCORE error %s: %s", key, exc)
        return _fallback_zrange(key, min_score, max_score)


async def redis_rpush(key: str, values: list[str], ttl: Optional[int] = None, max_len: Optional[int] = None) -> None:
    if not values:
        return
    client = await get_redis()
    if client is None:
        lst = _fallback_lists.setdefault(key, [])
        lst.extend(values)
        if max_len and len(lst) > max_len:
            del lst[:-max_len]
        return
    try:
        pipe = client.pipeline()
        pipe.rpush(key, *values)
        if max_len:
            pipe.ltrim(key, -max_len, -1)
        if ttl:
            pipe.expire(key, ttl)
        await asyncio.wait_for(pipe.execute(), timeout=_REDIS_OP_TIMEOUT_SECONDS)
    except Exception as exc:
        log.debug("Redis RPUSH error %s: %s", key, exc)
        lst = _fallback_lists.setdefault(key, [])
        lst.extend(values)
        if max_len and len(lst) > max_len:
            del lst[:-max_len]


async def redis_lrange(key: str) -> list[str]:
    client = await get_redis()
    if client is None:
        return list(_fallback_lists.get(key, []))
    try:
        return await asyncio.wait_for(client.lrange(key, 0, -1), timeout=_REDIS_OP_TIMEOUT_SECONDS)
    except Exception as exc:
        log.debug("Redis LRANGE error %s: %s", key, exc)
        return list(_fallback_lists.get(key, []))


async def redis_delete(key: str) -> None:
    client = await get_redis()
    if client is None:
        _fallback_lists.pop(key, None)
        _fallback_zsets.pop(key, None)
        return
    try:
        await asyncio.wait_for(client.delete(key), timeout=_REDIS_OP_TIMEOUT_SECONDS)
    except Exception as exc:
        log.debug("Redis DEL error %s: %s", key, exc)
        _fallback_lists.pop(key, None)
        _fallback_zsets.pop(key, None)


def is_using_fallback() -> bool:
    return _using_fallback


async def close_redis() -> None:
    global _redis_client
    client, _redis_client = _redis_client, None
    if client is not None:
        await client.aclose()
