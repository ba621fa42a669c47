"""Clients for upstream services."""

from footprint_api.clients.mapbox import MapboxClient

__all__ = ["MapboxClient"]
