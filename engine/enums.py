"""
Enumerations for forecast model types and source backends.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum

from config import (
    MODEL_EXPONENTIAL,
    MODEL_LINEAR,
    MODEL_MOVING_AVERAGE,
    MODEL_TREND,
    SOURCE_BACKEND_HTTP,
    SOURCE_BACKEND_STORE,
)


class ModelType(str, Enum):
    linear = MODEL_LINEAR
    exponential = MODEL_EXPONENTIAL
    moving_average = MODEL_MOVING_AVERAGE
    trend = MODEL_TREND


class SourceBackend(str, Enum):
    store = SOURCE_BACKEND_STORE
    http = SOURCE_BACKEND_HTTP
