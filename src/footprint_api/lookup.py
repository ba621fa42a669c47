"""Building lookup pipeline: input parsing, tile fetch, decode and framing."""

import logging
import re
from dataclasses import dataclass
from typing import Any

from footprint_api.clients.mapbox import MapboxClient
from footprint_api.errors import InvalidCoordinate, LocationNotFound
from footprint_api.schemas.geojson import FeatureCollection
from footprint_api.tiles import (
    BoundingBox,
    Camera,
    GeoPoint,
    TileAddress,
    assemble_collection,
    bounding_box_of,
    decode_tile,
    map_to_tile,
    suggested_camera,
)

logger = logging.getLogger(__name__)

# "lat, lon" as typed into the search box
_COORDINATE_PATTERN = re.compile(r"^(-?\d+\.?\d*),\s*(-?\d+\.?\d*)$")


@dataclass(frozen=True)
class AddressQuery:
    """Free-text location that needs geocoding."""

    text: str


@dataclass(frozen=True)
class BuildingLookup:
    """Result of a search: where, which tile, what was found, how to frame it."""

    location: GeoPoint
    tile: TileAddress
    buildings: FeatureCollection
    bounds: BoundingBox | None
    camera: Camera | None


def parse_location_input(text: str) -> GeoPoint | AddressQuery:
    """Interpret search input as coordinates when possible, else as an address.

    Input of the form "lat, lon" with both values in range is a point.
    Anything else, including out-of-range pairs, is treated as an address.
    """
    text = text.strip()
    match = _COORDINATE_PATTERN.match(text)
    if match:
        try:
            return GeoPoint(float(match.group(1)), float(match.group(2)))
        except InvalidCoordinate:
            pass
    return AddressQuery(text)


def first_candidate(geocode_response: dict[str, Any]) -> GeoPoint | None:
    """Location of the best geocoding match, or None if there is none."""
    features = geocode_response.get("features") or []
    if not features:
        return None
    lon, lat = features[0]["center"]
    return GeoPoint(lat, lon)


async def find_buildings(
    client: MapboxClient,
    point: GeoPoint,
    zoom: int,
    category: str = "building",
) -> tuple[TileAddress, FeatureCollection]:
    """Fetch and decode the tile containing ``point``.

    A tile that does not exist upstream yields an empty collection.
    """
    address = map_to_tile(point.latitude, point.longitude, zoom)
    payload = await client.fetch_tile(address)
    if payload is None:
        return address, assemble_collection([])
    return address, decode_tile(payload, address, category)


async def search(
    client: MapboxClient,
    text: str,
    zoom: int,
    category: str = "building",
    width: int = 800,
    height: int = 600,
) -> BuildingLookup:
    """Resolve ``text`` to a point and look up the buildings around it."""
    parsed = parse_location_input(text)
    if isinstance(parsed, AddressQuery):
        point = first_candidate(await client.geocode(parsed.text))
        if point is None:
            raise LocationNotFound(parsed.text)
    else:
        point = parsed

    address, buildings = await find_buildings(client, point, zoom, category)
    bounds = bounding_box_of(buildings)
    camera = suggested_camera(bounds, width=width, height=height) if bounds else None
    logger.info(
        "Search %r resolved to %s, tile %s, %d features",
        text,
        point.to_lnglat(),
        address,
        len(buildings.features),
    )
    return BuildingLookup(
        location=point,
        tile=address,
        buildings=buildings,
        bounds=bounds,
        camera=camera,
    )
