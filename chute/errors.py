"""Error taxonomy for the Chute client."""


class ChuteError(Exception):
    """Base class for all client errors."""


class TransportError(ChuteError):
    """Network or HTTP failure while talking to the API."""

    def __init__(self, message: str, status_code: int | None = None, payload=None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class PageRangeError(ChuteError, IndexError):
    """Requested page lies outside the collection (e.g. before page 1)."""


class PreconditionError(ChuteError):
    """Heart/unheart attempted while the local receipt already says so."""


class ConfigError(ChuteError):
    """Invalid configuration value."""
