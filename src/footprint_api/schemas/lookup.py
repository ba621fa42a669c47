"""Response schemas for the lookup endpoints."""

from pydantic import BaseModel, Field

from footprint_api.schemas.geojson import FeatureCollection, Position


class ClientConfig(BaseModel):
    """Settings the browser needs to build the map."""

    model_config = {"populate_by_name": True}

    mapbox_token: str = Field(..., alias="mapboxToken")
    style: str
    center: Position = Field(..., description="Initial map center as [lon, lat]")
    zoom: float


class Location(BaseModel):
    """A resolved search location."""

    lat: float
    lon: float


class TileInfo(BaseModel):
    """Address of the tile that was searched."""

    z: int
    x: int
    y: int


class CameraState(BaseModel):
    """Suggested camera for framing the result."""

    center: Position = Field(..., description="[lon, lat]")
    zoom: float


class SearchResult(BaseModel):
    """Everything the map needs to show a search result."""

    location: Location
    tile: TileInfo
    tile_bounds: list[float] = Field(..., description="[west, south, east, north]")
    buildings: FeatureCollection
    bounds: list[float] | None = Field(
        default=None,
        description="[west, south, east, north] of all buildings, null when none",
    )
    camera: CameraState | None = None
