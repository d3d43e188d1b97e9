# datasources/exceptions.py

class DataSourceError(Exception):
    pass


class DataSourceUnavailable(DataSourceError):
    pass


class QueryTimeout(DataSourceError):
    pass


class InvalidQuery(DataSourceError):
    pass


class UnsupportedBackend(DataSourceError):
    def __init__(self, backend: str) -> None:
        self.backend = backend
        super().__init__(f"Unsupported history source backend: {backend!r}")
