"""
Factory for creating the history source based on configuration.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datasources.base import HistoricalDataSource
from datasources.exceptions import UnsupportedBackend
from datasources.http_source import HttpDataSource
from datasources.store_source import StoreDataSource
from engine.enums import SourceBackend


class DataSourceFactory:

    @staticmethod
    def create(config) -> HistoricalDataSource:
        raw = str(config.source_backend or "").strip().lower()
        try:
            backend = SourceBackend(raw)
        except ValueError:
            raise UnsupportedBackend(raw) from None
        if backend is SourceBackend.store:
            return StoreDataSource()
        return HttpDataSource(config.source_http_url, timeout=config.source_timeout)
