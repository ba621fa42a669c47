"""Mapbox Vector Tile decoding.

The protobuf framing, key/value dictionaries and geometry command streams
are parsed by ``mapbox_vector_tile`` with y pointing down, which leaves every
position in the layer's integer grid. This module then projects those
positions to (lon, lat) against the tile they were fetched for.

A malformed payload fails the whole tile. Degenerate geometry in an
otherwise well-formed tile (zero-area rings, one-point lines) is dropped
the way mapbox-gl drops it, and a feature left with nothing drawable is
skipped.
"""

import logging
from collections.abc import Sequence
from typing import Any

from mapbox_vector_tile.decoder import TileData
from pydantic import ValidationError
from shapely.geometry import Polygon as ShapelyPolygon

from footprint_api.errors import DecodeError
from footprint_api.schemas.geojson import Feature, FeatureCollection
from footprint_api.tiles.assembler import assemble_collection
from footprint_api.tiles.mapper import tile_to_lnglat
from footprint_api.tiles.types import TileAddress

logger = logging.getLogger(__name__)

DEFAULT_EXTENT = 4096

_DECODE_OPTIONS = {"y_coord_down": True}

# Geometry command ids; anything else in a command stream is corrupt
_MOVE_TO = 1
_LINE_TO = 2
_CLOSE_PATH = 7

# Nesting depth of the coordinates array for each geometry type
_COORDINATE_DEPTH = {
    "Point": 0,
    "MultiPoint": 1,
    "LineString": 1,
    "MultiLineString": 2,
    "Polygon": 2,
    "MultiPolygon": 3,
}


def decode_tile(
    payload: bytes,
    address: TileAddress,
    category: str = "building",
) -> FeatureCollection:
    """Decode one vector tile into the features of a single layer.

    Args:
        payload: Raw tile bytes as returned by the tile API.
        address: The tile the payload was fetched for; anchors the projection.
        category: Layer name to extract, e.g. "building".

    Returns:
        A FeatureCollection in decode order. It is empty when the tile has
        no such layer, which is a normal outcome for tiles without buildings.

    Raises:
        DecodeError: The payload is truncated or corrupt, or a feature of
            the requested layer has an unknown geometry command or type.
    """
    try:
        tile_data = TileData(pbf_data=bytes(payload), default_options=_DECODE_OPTIONS)
    except Exception as exc:
        raise DecodeError(str(address), f"{type(exc).__name__}: {exc}") from exc

    for pb_layer in tile_data.tile.layers:
        if pb_layer.name == category:
            for pb_feature in pb_layer.features:
                _check_commands(pb_feature.geometry, address)

    try:
        layers = tile_data.get_message()
    except Exception as exc:
        raise DecodeError(str(address), f"{type(exc).__name__}: {exc}") from exc

    layer = layers.get(category)
    if layer is None:
        logger.info("No %r layer in tile %s (layers=%s)", category, address, sorted(layers))
        return assemble_collection([])

    extent = layer.get("extent") or DEFAULT_EXTENT
    features = []
    for raw in layer.get("features", []):
        feature = _decode_feature(raw, extent, address, category)
        if feature is None:
            logger.debug("Skipped degenerate %r feature in tile %s", category, address)
            continue
        features.append(feature)
    logger.info("Decoded %d %r features from tile %s", len(features), category, address)
    return assemble_collection(features)


def _check_commands(geometry: Sequence[int], address: TileAddress) -> None:
    """Walk a geometry command stream, rejecting unknown commands and short parameter runs."""
    i = 0
    while i < len(geometry):
        command = geometry[i]
        cmd_id = command & 0x7
        count = command >> 3
        i += 1
        if cmd_id in (_MOVE_TO, _LINE_TO):
            i += 2 * count
        elif cmd_id != _CLOSE_PATH:
            raise DecodeError(str(address), f"unknown geometry command {cmd_id}")
    if i > len(geometry):
        raise DecodeError(str(address), "geometry command stream is truncated")


def _decode_feature(
    raw: dict[str, Any],
    extent: int,
    address: TileAddress,
    category: str,
) -> Feature | None:
    geometry = raw.get("geometry") or {}
    geom_type = geometry.get("type")
    depth = _COORDINATE_DEPTH.get(geom_type)
    if depth is None:
        raise DecodeError(str(address), f"unsupported geometry type {geom_type!r}")

    coordinates = geometry.get("coordinates")
    _check_nesting(coordinates, depth, address)
    geom_type, coordinates = _drop_degenerate(geom_type, coordinates)
    if geom_type is None:
        return None

    properties = {
        str(key): _property_value(key, value, address)
        for key, value in (raw.get("properties") or {}).items()
    }

    try:
        return Feature.model_validate(
            {
                "geometry": {
                    "type": geom_type,
                    "coordinates": _project(coordinates, _COORDINATE_DEPTH[geom_type], extent, address),
                },
                "properties": properties,
                "category": category,
            }
        )
    except ValidationError as exc:
        raise DecodeError(str(address), f"invalid feature: {exc}") from exc


def _check_nesting(coordinates: Any, depth: int, address: TileAddress) -> None:
    """Reject coordinate arrays that are not nested as their type requires."""
    if not isinstance(coordinates, (list, tuple)):
        raise DecodeError(str(address), f"malformed coordinates {coordinates!r}")
    if depth == 0:
        if len(coordinates) != 2:
            raise DecodeError(str(address), f"malformed position {coordinates!r}")
        return
    for part in coordinates:
        _check_nesting(part, depth - 1, address)


def _project(coordinates: Any, depth: int, extent: int, address: TileAddress) -> Any:
    """Recursively project tile-local positions to (lon, lat)."""
    if depth == 0:
        x, y = coordinates
        return tile_to_lnglat(x, y, extent, address)
    return [_project(part, depth - 1, extent, address) for part in coordinates]


def _is_valid_ring(ring: list) -> bool:
    # Area is taken in the integer tile grid, where collinear rings are exactly flat
    if len(ring) < 4 or tuple(ring[0]) != tuple(ring[-1]):
        return False
    return ShapelyPolygon(ring).area > 0


def _polygon_rings(rings: list) -> list:
    """Rings of one polygon without degenerate ones; empty if the exterior is degenerate."""
    if not rings or not _is_valid_ring(rings[0]):
        return []
    return [rings[0]] + [ring for ring in rings[1:] if _is_valid_ring(ring)]


def _drop_degenerate(geom_type: str, coordinates: Any) -> tuple[str | None, Any]:
    """Remove zero-area rings and too-short lines.

    Returns (None, None) when nothing drawable is left. A MultiPolygon or
    MultiLineString reduced to one part becomes a Polygon or LineString.
    """
    if geom_type == "Point":
        return geom_type, coordinates
    if geom_type == "MultiPoint":
        return (geom_type, coordinates) if coordinates else (None, None)
    if geom_type == "LineString":
        return (geom_type, coordinates) if len(coordinates) >= 2 else (None, None)
    if geom_type == "MultiLineString":
        lines = [line for line in coordinates if len(line) >= 2]
        if not lines:
            return None, None
        return ("LineString", lines[0]) if len(lines) == 1 else (geom_type, lines)
    if geom_type == "Polygon":
        rings = _polygon_rings(coordinates)
        return (geom_type, rings) if rings else (None, None)

    polygons = [rings for rings in map(_polygon_rings, coordinates) if rings]
    if not polygons:
        return None, None
    return ("Polygon", polygons[0]) if len(polygons) == 1 else (geom_type, polygons)


def _property_value(key: str, value: Any, address: TileAddress) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    raise DecodeError(
        str(address), f"property {key!r} has unsupported type {type(value).__name__}"
    )
