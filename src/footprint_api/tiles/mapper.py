"""Web-Mercator tile math.

Forward: (lat, lon, zoom) to the tile that contains the point.
Inverse: tile-local vector tile coordinates back to (lon, lat).

The two directions use the same spherical Mercator formulas, so a decoded
tile's corners land exactly on the bounds the forward transform assigns to
that tile.
"""

import math

import mercantile

from footprint_api.errors import InvalidCoordinate
from footprint_api.tiles.types import BoundingBox, TileAddress, require_finite

# Web-Mercator is undefined at the poles; this is the latitude where the
# projected square ends.
MAX_LATITUDE = 85.0511287798066
MAX_ZOOM = 30


def _validate_zoom(zoom: int) -> int:
    if isinstance(zoom, bool) or not isinstance(zoom, int):
        raise InvalidCoordinate("zoom", zoom, "not an integer")
    if not 0 <= zoom <= MAX_ZOOM:
        raise InvalidCoordinate("zoom", zoom, f"must be between 0 and {MAX_ZOOM}")
    return zoom


def _clamp(value: int, upper: int) -> int:
    return max(0, min(value, upper))


def map_to_tile(lat: float, lon: float, zoom: int) -> TileAddress:
    """Return the address of the tile containing (lat, lon) at ``zoom``.

    Inputs outside the projectable range are clamped to the nearest edge of
    the tile grid instead of failing, so points at the poles or exactly on
    the antimeridian still resolve to a real tile.

    Raises:
        InvalidCoordinate: lat or lon is NaN, infinite or not a number, or
            zoom is not an integer in [0, 30].
    """
    lat = require_finite("lat", lat)
    lon = require_finite("lon", lon)
    zoom = _validate_zoom(zoom)

    n = 1 << zoom
    lat = max(-MAX_LATITUDE, min(lat, MAX_LATITUDE))
    lat_rad = math.radians(lat)

    column = math.floor((lon + 180.0) / 360.0 * n)
    row = math.floor(
        (1.0 - math.log(math.tan(lat_rad) + 1.0 / math.cos(lat_rad)) / math.pi) / 2.0 * n
    )

    return TileAddress(zoom=zoom, column=_clamp(column, n - 1), row=_clamp(row, n - 1))


def tile_to_lnglat(x: float, y: float, extent: int, address: TileAddress) -> tuple[float, float]:
    """Project a tile-local coordinate to (lon, lat).

    ``x`` and ``y`` are in the layer's integer grid, with y pointing down
    from the tile's north-west corner. Values outside [0, extent] are
    allowed; vector tiles carry a buffer around each tile.
    """
    size = extent * address.size
    x0 = extent * address.column
    y0 = extent * address.row

    lon = (x + x0) * 360.0 / size - 180.0
    y2 = 180.0 - (y + y0) * 360.0 / size
    lat = 360.0 / math.pi * math.atan(math.exp(y2 * math.pi / 180.0)) - 90.0
    return (lon, lat)


def tile_bounds(address: TileAddress) -> BoundingBox:
    """Geographic bounds of a tile."""
    west, south, east, north = mercantile.bounds(address.column, address.row, address.zoom)
    return BoundingBox(west=west, south=south, east=east, north=north)
