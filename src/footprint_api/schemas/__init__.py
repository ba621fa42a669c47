"""Pydantic schemas for API request/response models."""

from footprint_api.schemas.geojson import (
    Feature,
    FeatureCollection,
    Geometry,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Position,
    PropertyValue,
)
from footprint_api.schemas.lookup import (
    CameraState,
    ClientConfig,
    Location,
    SearchResult,
    TileInfo,
)

__all__ = [
    "CameraState",
    "ClientConfig",
    "Feature",
    "FeatureCollection",
    "Geometry",
    "LineString",
    "Location",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "Point",
    "Polygon",
    "Position",
    "PropertyValue",
    "SearchResult",
    "TileInfo",
]
