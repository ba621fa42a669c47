"""GeoJSON (RFC 7946) schemas for decoded features.

Positions are (lon, lat) pairs. Property values are restricted to the
scalar types a vector tile can carry.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

Position = tuple[float, float]

# bool first so True/False are never coerced to 1/0
PropertyValue = bool | int | float | str | None


class Point(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: Position


class MultiPoint(BaseModel):
    type: Literal["MultiPoint"] = "MultiPoint"
    coordinates: list[Position]


class LineString(BaseModel):
    type: Literal["LineString"] = "LineString"
    coordinates: list[Position]


class MultiLineString(BaseModel):
    type: Literal["MultiLineString"] = "MultiLineString"
    coordinates: list[list[Position]]


class Polygon(BaseModel):
    type: Literal["Polygon"] = "Polygon"
    # Exterior ring first, then holes; each ring closed (first == last)
    coordinates: list[list[Position]]


class MultiPolygon(BaseModel):
    type: Literal["MultiPolygon"] = "MultiPolygon"
    coordinates: list[list[list[Position]]]


Geometry = Annotated[
    Point | MultiPoint | LineString | MultiLineString | Polygon | MultiPolygon,
    Field(discriminator="type"),
]


class Feature(BaseModel):
    """A single decoded feature."""

    type: Literal["Feature"] = "Feature"
    geometry: Geometry
    properties: dict[str, PropertyValue] = Field(default_factory=dict)
    # Source layer; kept out of the wire format
    category: str | None = Field(default=None, exclude=True)


class FeatureCollection(BaseModel):
    """Ordered features in decode order. Duplicates are not removed."""

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[Feature] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.features
