"""Bounding boxes and camera suggestions for decoded features."""

import math

import mercantile
from shapely.geometry import shape

from footprint_api.schemas.geojson import FeatureCollection
from footprint_api.tiles.mapper import MAX_LATITUDE
from footprint_api.tiles.types import BoundingBox, Camera

# Zoom cap so a single small footprint is not blown up past street level
MAX_CAMERA_ZOOM = 19.0

# Mapbox GL renders 512px tiles
TILE_SIZE_PX = 512

_WORLD_SIZE_M = 2 * math.pi * 6378137.0


def bounding_box_of(collection: FeatureCollection) -> BoundingBox | None:
    """Bounds of every position of every feature.

    Returns None when the collection has no features or no positions.
    """
    west = south = math.inf
    east = north = -math.inf

    for feature in collection.features:
        geom = shape(feature.geometry.model_dump())
        if geom.is_empty:
            continue
        minx, miny, maxx, maxy = geom.bounds
        west = min(west, minx)
        south = min(south, miny)
        east = max(east, maxx)
        north = max(north, maxy)

    if not math.isfinite(west):
        return None
    return BoundingBox(west=west, south=south, east=east, north=north)


def _mercator_xy(lon: float, lat: float) -> tuple[float, float]:
    lat = max(-MAX_LATITUDE, min(lat, MAX_LATITUDE))
    return mercantile.xy(lon, lat)


def suggested_camera(
    bbox: BoundingBox,
    width: int = 800,
    height: int = 600,
    padding: int = 10,
    max_zoom: float = MAX_CAMERA_ZOOM,
) -> Camera:
    """Camera that frames ``bbox`` in a ``width`` x ``height`` pixel viewport.

    The center is the midpoint of the box. The zoom is the largest one at
    which the box fits inside the viewport minus ``padding`` on each side,
    capped at ``max_zoom`` and never below 0. A zero-area box (a single
    point) gets ``max_zoom``.
    """
    min_x, min_y = _mercator_xy(bbox.west, bbox.south)
    max_x, max_y = _mercator_xy(bbox.east, bbox.north)
    span_x = abs(max_x - min_x) / _WORLD_SIZE_M
    span_y = abs(max_y - min_y) / _WORLD_SIZE_M

    avail_w = max(width - 2 * padding, 1)
    avail_h = max(height - 2 * padding, 1)

    zoom = max_zoom
    if span_x > 0:
        zoom = min(zoom, math.log2(avail_w / (span_x * TILE_SIZE_PX)))
    if span_y > 0:
        zoom = min(zoom, math.log2(avail_h / (span_y * TILE_SIZE_PX)))

    return Camera(center=bbox.center, zoom=max(zoom, 0.0))
