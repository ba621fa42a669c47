"""FastAPI application entry point."""

import logging
import sys
import traceback
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from footprint_api.config import settings
from footprint_api.errors import (
    DecodeError,
    FootprintError,
    InvalidCoordinate,
    LocationNotFound,
    UpstreamUnavailable,
)
from footprint_api.routes import buildings_router, client_config_router, geocode_router

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


def setup_logging() -> None:
    """Configure logging for the API process."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Refuse to start without a Mapbox token."""
    setup_logging()
    if not settings.mapbox_access_token:
        logger.error("Missing MAPBOX_ACCESS_TOKEN in environment or .env file")
        raise RuntimeError("MAPBOX_ACCESS_TOKEN is required")
    logger.info("Footprint API starting, tileset=%s zoom=%s", settings.tileset_id, settings.building_zoom)
    yield
    logger.info("Footprint API stopped")


app = FastAPI(
    title="Building Footprint API",
    description="Geocoding and building footprint lookup backed by Mapbox vector tiles",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Footprint collections for dense blocks are large JSON payloads
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.include_router(client_config_router)
app.include_router(geocode_router)
app.include_router(buildings_router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


def _error_response(status_code: int, exc: FootprintError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_type": type(exc).__name__, **exc.context()},
    )


@app.exception_handler(InvalidCoordinate)
async def invalid_coordinate_handler(request: Request, exc: InvalidCoordinate):
    """Handle lat/lon/zoom values that cannot be mapped to a tile.

    Returns 400 Bad Request.
    """
    logger.warning("Invalid coordinate on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(400, exc)


@app.exception_handler(LocationNotFound)
async def location_not_found_handler(request: Request, exc: LocationNotFound):
    """Handle searches the geocoder has no candidate for.

    Returns 404 Not Found.
    """
    logger.info("Location not found on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(404, exc)


@app.exception_handler(DecodeError)
async def decode_error_handler(request: Request, exc: DecodeError):
    """Handle vector tiles that cannot be decoded.

    Returns 502 Bad Gateway since the payload came from upstream. No partial
    result is returned.
    """
    logger.warning("Tile decode error on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(502, exc)


@app.exception_handler(UpstreamUnavailable)
async def upstream_unavailable_handler(request: Request, exc: UpstreamUnavailable):
    """Handle Mapbox being unreachable or answering with an error status.

    Returns 502 Bad Gateway; the client may retry with a new request.
    """
    logger.warning("Upstream unavailable on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(502, exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler that logs errors and returns proper JSON responses."""
    logger.error(
        "Unhandled exception on %s %s: %s\n%s",
        request.method,
        request.url.path,
        exc,
        traceback.format_exc(),
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_type": type(exc).__name__,
        },
    )


# Mounted last so the API routes above take precedence over "/"
app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")


def run() -> None:
    """Entry point for the API server."""
    uvicorn.run(
        "footprint_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
