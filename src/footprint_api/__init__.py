"""Building footprint lookup service backed by Mapbox vector tiles."""

__version__ = "0.1.0"
