"""Wrap decoded features into a GeoJSON FeatureCollection."""

from collections.abc import Iterable

from footprint_api.schemas.geojson import Feature, FeatureCollection


def assemble_collection(features: Iterable[Feature]) -> FeatureCollection:
    """Build a FeatureCollection, keeping the given order."""
    return FeatureCollection(features=list(features))
