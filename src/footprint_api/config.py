"""Application configuration."""

import json

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Required at startup, see main.lifespan
    mapbox_access_token: str | None = None
    mapbox_api_url: str = "https://api.mapbox.com"

    # Vector tile source
    tileset_id: str = "mapbox.mapbox-streets-v8"
    tile_format: str = "mvt"
    building_layer: str = "building"
    building_zoom: int = 19

    # Outbound request timeout, enforced by the HTTP client
    upstream_timeout_seconds: float = 10.0

    # Initial map view handed to the frontend (San Francisco)
    map_style: str = "mapbox://styles/mapbox/streets-v12"
    default_center_lon: float = -122.416166
    default_center_lat: float = 37.738875
    default_zoom: float = 19.0

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "info"

    # CORS configuration
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string (JSON or comma-separated) or list."""
        if isinstance(v, str):
            # Try JSON first
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
            # Fall back to comma-separated
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


settings = Settings()
