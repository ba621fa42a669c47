"""API routes for the footprint service."""

from footprint_api.routes.buildings import router as buildings_router
from footprint_api.routes.client_config import router as client_config_router
from footprint_api.routes.geocode import router as geocode_router

__all__ = [
    "buildings_router",
    "client_config_router",
    "geocode_router",
]
