"""Async client for the Mapbox geocoding and vector tile APIs."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from footprint_api.errors import UpstreamUnavailable
from footprint_api.tiles.types import TileAddress

logger = logging.getLogger(__name__)


class MapboxClient:
    """Thin wrapper over an ``httpx.AsyncClient``.

    The access token is sent as a query parameter and never appears in log
    lines or error messages. Timeouts are whatever the wrapped client is
    configured with; nothing is retried.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        access_token: str,
        base_url: str = "https://api.mapbox.com",
        tileset_id: str = "mapbox.mapbox-streets-v8",
        tile_format: str = "mvt",
    ) -> None:
        self._http = http
        self._access_token = access_token
        self._base_url = base_url.rstrip("/")
        self.tileset_id = tileset_id
        self.tile_format = tile_format

    async def geocode(self, query: str) -> dict[str, Any]:
        """Forward-geocode free text. Returns the Mapbox response unchanged."""
        url = f"{self._base_url}/geocoding/v5/mapbox.places/{quote(query, safe='')}.json"
        logger.info("Geocoding request: query=%r", query)
        response = await self._get(url)
        if not response.is_success:
            self._raise_for_status(url, response)
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamUnavailable(url, response.status_code, "invalid JSON body") from exc

    async def fetch_tile(self, address: TileAddress) -> bytes | None:
        """Fetch one vector tile.

        Returns None when Mapbox has no tile at this address (404).
        """
        url = (
            f"{self._base_url}/v4/{self.tileset_id}/"
            f"{address.zoom}/{address.column}/{address.row}.{self.tile_format}"
        )
        logger.info("Fetching Mapbox tile: %s", url)
        response = await self._get(url)
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info("No tile at %s", address)
            return None
        if not response.is_success:
            self._raise_for_status(url, response)
        return response.content

    async def _get(self, url: str) -> httpx.Response:
        try:
            return await self._http.get(url, params={"access_token": self._access_token})
        except httpx.HTTPError as exc:
            logger.warning("Mapbox request failed: url=%s error=%s", url, exc)
            raise UpstreamUnavailable(url, reason=type(exc).__name__) from exc

    @staticmethod
    def _raise_for_status(url: str, response: httpx.Response) -> None:
        body = response.text[:200]
        logger.warning("Mapbox API error: status=%s url=%s body=%s", response.status_code, url, body)
        raise UpstreamUnavailable(url, response.status_code, body)
