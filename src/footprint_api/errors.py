"""Exception taxonomy for footprint lookups.

Every error carries enough context (the offending input, tile or upstream
status) for the caller to decide whether to retry, fall back, or report it.
Nothing in this package retries on its own.
"""

from typing import Any


class FootprintError(Exception):
    """Base class for all footprint lookup errors."""

    def context(self) -> dict[str, Any]:
        """Extra fields to include in an error response."""
        return {}


class InvalidCoordinate(FootprintError):
    """A latitude, longitude or zoom that cannot be mapped to a tile."""

    def __init__(self, field: str, value: Any, reason: str = "out of range") -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}={value!r}: {reason}")

    def context(self) -> dict[str, Any]:
        return {"field": self.field, "value": repr(self.value)}


class DecodeError(FootprintError):
    """A vector tile payload that is malformed, truncated or corrupt."""

    def __init__(self, tile: str, reason: str) -> None:
        self.tile = tile
        self.reason = reason
        super().__init__(f"Failed to decode tile {tile}: {reason}")

    def context(self) -> dict[str, Any]:
        return {"tile": self.tile}


class UpstreamUnavailable(FootprintError):
    """The Mapbox API could not be reached or answered with a non-2xx status."""

    def __init__(self, url: str, status_code: int | None = None, reason: str = "") -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        message = f"Upstream request to {url} failed"
        if status_code is not None:
            message += f" with status {status_code}"
        if reason:
            message += f": {reason}"
        super().__init__(message)

    def context(self) -> dict[str, Any]:
        return {"upstream_status": self.status_code}


class LocationNotFound(FootprintError):
    """The geocoder returned no candidates for a free-text query."""

    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(f"Location not found: {query!r}")

    def context(self) -> dict[str, Any]:
        return {"query": self.query}
