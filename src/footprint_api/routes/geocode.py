"""Geocoding relay endpoint."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from footprint_api.clients.mapbox import MapboxClient
from footprint_api.dependencies import get_mapbox_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["geocode"])


@router.get("/geocode")
async def geocode(
    query: str = Query(..., min_length=1, description="Address or place name"),
    mapbox: MapboxClient = Depends(get_mapbox_client),
) -> dict[str, Any]:
    """
    Geocode an address or place name.

    Returns the Mapbox geocoding response unchanged; candidates are in
    ``features`` with ``center`` as [lon, lat].
    """
    data = await mapbox.geocode(query)
    logger.info("Geocode query=%r candidates=%d", query, len(data.get("features") or []))
    return data
