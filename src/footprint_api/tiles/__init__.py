"""Tile addressing, vector tile decoding and viewport fitting."""

from footprint_api.tiles.assembler import assemble_collection
from footprint_api.tiles.decoder import decode_tile
from footprint_api.tiles.mapper import map_to_tile, tile_bounds, tile_to_lnglat
from footprint_api.tiles.types import BoundingBox, Camera, GeoPoint, TileAddress
from footprint_api.tiles.viewport import bounding_box_of, suggested_camera

__all__ = [
    "BoundingBox",
    "Camera",
    "GeoPoint",
    "TileAddress",
    "assemble_collection",
    "bounding_box_of",
    "decode_tile",
    "map_to_tile",
    "suggested_camera",
    "tile_bounds",
    "tile_to_lnglat",
]
