"""Frontend bootstrap configuration endpoint."""

from fastapi import APIRouter, Depends

from footprint_api.config import settings
from footprint_api.dependencies import get_access_token
from footprint_api.schemas import ClientConfig

router = APIRouter(tags=["config"])


@router.get("/config", response_model=ClientConfig)
async def get_client_config(access_token: str = Depends(get_access_token)) -> ClientConfig:
    """
    Serve the Mapbox token and initial view to the frontend.

    Keeps the token out of the static assets; the page fetches it once at
    startup before constructing the map.
    """
    return ClientConfig(
        mapbox_token=access_token,
        style=settings.map_style,
        center=(settings.default_center_lon, settings.default_center_lat),
        zoom=settings.default_zoom,
    )
