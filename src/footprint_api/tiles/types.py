"""Value types for tile addressing and viewport fitting."""

import math
from dataclasses import dataclass

from footprint_api.errors import InvalidCoordinate


def require_finite(field: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidCoordinate(field, value, "not a number")
    if not math.isfinite(value):
        raise InvalidCoordinate(field, value, "not finite")
    return float(value)


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 position. Latitude first, as users type it."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        lat = require_finite("lat", self.latitude)
        lon = require_finite("lon", self.longitude)
        if not -90.0 <= lat <= 90.0:
            raise InvalidCoordinate("lat", self.latitude)
        if not -180.0 <= lon <= 180.0:
            raise InvalidCoordinate("lon", self.longitude)
        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", lon)

    def to_lnglat(self) -> tuple[float, float]:
        """Position in GeoJSON (lon, lat) order."""
        return (self.longitude, self.latitude)


@dataclass(frozen=True)
class TileAddress:
    """A Web-Mercator tile: zoom level, column (x) and row (y)."""

    zoom: int
    column: int
    row: int

    @property
    def size(self) -> int:
        """Number of tiles per axis at this zoom."""
        return 1 << self.zoom

    def __str__(self) -> str:
        return f"{self.zoom}/{self.column}/{self.row}"


def _clamp_lat(lat: float) -> float:
    return max(-90.0, min(lat, 90.0))


def _wrap_lon(lon: float) -> float:
    """Bring a longitude past the antimeridian back into [-180, 180]."""
    if -180.0 <= lon <= 180.0:
        return lon
    return (lon + 180.0) % 360.0 - 180.0


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounds: south-west (min) and north-east (max) corners.

    Decoded tiles carry a buffer past their edges, so a box built from
    features in the first or last tile column can extend beyond +/-180.
    The raw edges are kept; the GeoPoint views below are normalized.
    """

    west: float
    south: float
    east: float
    north: float

    @property
    def min(self) -> GeoPoint:
        return GeoPoint(_clamp_lat(self.south), max(-180.0, min(self.west, 180.0)))

    @property
    def max(self) -> GeoPoint:
        return GeoPoint(_clamp_lat(self.north), max(-180.0, min(self.east, 180.0)))

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(
            _clamp_lat((self.south + self.north) / 2),
            _wrap_lon((self.west + self.east) / 2),
        )

    def contains(self, lon: float, lat: float, tolerance: float = 0.0) -> bool:
        """Whether a (lon, lat) position lies inside the box."""
        return (
            self.west - tolerance <= lon <= self.east + tolerance
            and self.south - tolerance <= lat <= self.north + tolerance
        )

    def as_list(self) -> list[float]:
        """GeoJSON bbox order: [west, south, east, north]."""
        return [self.west, self.south, self.east, self.north]


@dataclass(frozen=True)
class Camera:
    """Suggested map camera for showing a set of features."""

    center: GeoPoint
    zoom: float
