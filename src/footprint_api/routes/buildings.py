"""Building footprint endpoints."""

import logging

from fastapi import APIRouter, Depends, Query

from footprint_api.clients.mapbox import MapboxClient
from footprint_api.config import settings
from footprint_api.dependencies import get_mapbox_client
from footprint_api.lookup import find_buildings, search
from footprint_api.schemas import (
    CameraState,
    FeatureCollection,
    Location,
    SearchResult,
    TileInfo,
)
from footprint_api.tiles import GeoPoint, tile_bounds

logger = logging.getLogger(__name__)

router = APIRouter(tags=["buildings"])


@router.get("/find-buildings", response_model=FeatureCollection)
async def find_buildings_at(
    lat: float = Query(..., description="Latitude"),
    lon: float = Query(..., description="Longitude"),
    zoom: int | None = Query(default=None, description="Tile zoom (defaults to 19)"),
    mapbox: MapboxClient = Depends(get_mapbox_client),
) -> FeatureCollection:
    """
    Building footprints in the tile containing (lat, lon).

    Returns a GeoJSON FeatureCollection. A tile without buildings yields an
    empty collection rather than an error.
    """
    point = GeoPoint(lat, lon)
    zoom = settings.building_zoom if zoom is None else zoom
    address, buildings = await find_buildings(mapbox, point, zoom, settings.building_layer)
    logger.info(
        "find-buildings lat=%s lon=%s tile=%s features=%d",
        lat,
        lon,
        address,
        len(buildings.features),
    )
    return buildings


@router.get("/search", response_model=SearchResult)
async def search_location(
    q: str = Query(..., min_length=1, description='"lat, lon" or an address'),
    width: int = Query(default=800, ge=1, description="Viewport width in pixels"),
    height: int = Query(default=600, ge=1, description="Viewport height in pixels"),
    mapbox: MapboxClient = Depends(get_mapbox_client),
) -> SearchResult:
    """
    Resolve a location and return its buildings with a suggested camera.

    Coordinates are used directly; anything else is geocoded and the first
    candidate is used. Returns 404 when the geocoder finds nothing.
    """
    result = await search(
        mapbox,
        q,
        settings.building_zoom,
        settings.building_layer,
        width=width,
        height=height,
    )
    camera = None
    if result.camera is not None:
        camera = CameraState(center=result.camera.center.to_lnglat(), zoom=result.camera.zoom)

    return SearchResult(
        location=Location(lat=result.location.latitude, lon=result.location.longitude),
        tile=TileInfo(z=result.tile.zoom, x=result.tile.column, y=result.tile.row),
        tile_bounds=tile_bounds(result.tile).as_list(),
        buildings=result.buildings,
        bounds=result.bounds.as_list() if result.bounds else None,
        camera=camera,
    )
