"""
Retry decorator for history source calls.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
from functools import wraps
from typing import Any, Awaitable, Callable, Optional, Tuple, Type, TypeVar, cast

from config import settings
from datasources.exceptions import DataSourceUnavailable, QueryTimeout

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

TRANSIENT_ERRORS: Tuple[Type[Exception], ...] = (DataSourceUnavailable, QueryTimeout)


def retry(
    *,
    attempts: Optional[int] = None,
    delay: Optional[float] = None,
    backoff: Optional[float] = None,
    exceptions: Tuple[Type[Exception], ...] = TRANSIENT_ERRORS,
) -> Callable[[F], F]:
    """Retry an async callable on ``exceptions`` with exponential backoff.

    Unset knobs are read from settings on every call so tests and runtime
    configuration can tune them without re-decorating.
    """

    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            max_attempts = max(1, int(attempts if attempts is not None else settings.source_retry_attempts))
            wait = float(delay if delay is not None else settings.source_retry_delay)
            factor = float(backoff if backoff is not None else settings.source_retry_backoff)
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except exceptions as exc:
                    attempt += 1
                    if attempt >= max_attempts:
                        raise
                    log.info("%s failed (attempt %d/%d): %s", func.__qualname__, attempt, max_attempts, exc)
                    await asyncio.sleep(wait)
                    wait *= factor

        return cast(F, wrapper)

    return decorator
