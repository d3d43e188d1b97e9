"""
Key layout for the observation and prediction stores.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import hashlib


def _slug(value: str) -> str:
    # Internal keys do not require reversibility; use strong stable hashing.
    return hashlib.sha256(value.encode()).hexdigest()[:32]


def observations(metric_name: str) -> str:
    return f"mc:observations:{_slug(metric_name)}"


def predictions(metric_name: str) -> str:
    return f"mc:predictions:{_slug(metric_name)}"
