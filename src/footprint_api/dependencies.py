"""FastAPI dependencies for the footprint API."""

from collections.abc import AsyncGenerator

import httpx
from fastapi import Depends, HTTPException, status

from footprint_api.clients.mapbox import MapboxClient
from footprint_api.config import settings


def get_access_token() -> str:
    """The configured Mapbox token, or 503 if the server was started without one."""
    if not settings.mapbox_access_token:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Mapbox access token is not configured",
        )
    return settings.mapbox_access_token


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Dependency that yields an outbound HTTP client for one request."""
    async with httpx.AsyncClient(timeout=settings.upstream_timeout_seconds) as client:
        yield client


def get_mapbox_client(
    http: httpx.AsyncClient = Depends(get_http_client),
    access_token: str = Depends(get_access_token),
) -> MapboxClient:
    """Mapbox client bound to the request's HTTP client."""
    return MapboxClient(
        http,
        access_token,
        base_url=settings.mapbox_api_url,
        tileset_id=settings.tileset_id,
        tile_format=settings.tile_format,
    )
