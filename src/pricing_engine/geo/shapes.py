"""Region shapes: circle, polygon with holes, and multi-polygon.

Coordinates are (lon, lat) tuples, GeoJSON order. Circles are tested with
Haversine distance; polygons are built once as prepared shapely geometries
and tested with ``covers``, so points on an edge count as inside.
"""

import math
from functools import cached_property
from typing import Annotated, Literal, Self

import shapely
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from shapely.geometry import MultiPolygon, Point, Polygon
from shapely.validation import explain_validity

from ..core.exceptions import InvalidShapeDefinitionError
from .distance import is_within_radius

Coordinate = tuple[float, float]
Ring = list[Coordinate]

# A closed ring needs three distinct vertices plus the closing vertex
MIN_RING_POSITIONS = 4


def close_ring(ring: Ring) -> Ring:
    """Return the ring with its first coordinate repeated at the end if missing."""
    if ring and tuple(ring[0]) != tuple(ring[-1]):
        return [*ring, ring[0]]
    return list(ring)


def _valid_coordinate(coord: Coordinate) -> bool:
    lon, lat = coord
    return (
        math.isfinite(lon)
        and math.isfinite(lat)
        and -180.0 <= lon <= 180.0
        and -90.0 <= lat <= 90.0
    )


def _usable_ring(ring: Ring) -> bool:
    return len(ring) >= MIN_RING_POSITIONS and all(_valid_coordinate(c) for c in ring)


def _prepared(geometry: Polygon | MultiPolygon) -> Polygon | MultiPolygon:
    shapely.prepare(geometry)
    return geometry


class CircleShape(BaseModel):
    """Circle given by (lon, lat) center and radius in meters."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["circle"] = "circle"
    center: Coordinate
    radius_meters: float

    @model_validator(mode="after")
    def check_usable(self) -> Self:
        if not self.is_usable():
            raise InvalidShapeDefinitionError(
                "Circle shape requires [longitude, latitude] center and a positive radius",
                details={"center": self.center, "radius_meters": self.radius_meters},
            )
        return self

    def is_usable(self) -> bool:
        return (
            _valid_coordinate(self.center)
            and math.isfinite(self.radius_meters)
            and self.radius_meters > 0
        )

    def contains(self, lon: float, lat: float) -> bool:
        center_lon, center_lat = self.center
        return is_within_radius(lat, lon, center_lat, center_lon, self.radius_meters)


class PolygonShape(BaseModel):
    """Polygon; rings[0] is the outer boundary, the remaining rings are holes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["polygon"] = "polygon"
    rings: list[Ring]

    @field_validator("rings")
    @classmethod
    def close_rings(cls, v: list[Ring]) -> list[Ring]:
        return [close_ring(ring) for ring in v]

    @model_validator(mode="after")
    def check_usable(self) -> Self:
        if not self.is_usable():
            raise InvalidShapeDefinitionError(
                "Polygon shape requires an outer ring and closed rings of at least "
                f"{MIN_RING_POSITIONS} positions",
                details={"ring_sizes": [len(r) for r in self.rings]},
            )
        return self

    def is_usable(self) -> bool:
        return bool(self.rings) and all(_usable_ring(ring) for ring in self.rings)

    @cached_property
    def geometry(self) -> Polygon:
        """Prepared shapely polygon, built on first use."""
        return _prepared(self.to_shapely())

    def contains(self, lon: float, lat: float) -> bool:
        return self.geometry.covers(Point(lon, lat))

    def to_shapely(self) -> Polygon:
        return Polygon(self.rings[0], self.rings[1:])


class MultiPolygonShape(BaseModel):
    """Several polygons; containment in any one of them counts."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["multipolygon"] = "multipolygon"
    polygons: list[list[Ring]]

    @field_validator("polygons")
    @classmethod
    def close_rings(cls, v: list[list[Ring]]) -> list[list[Ring]]:
        return [[close_ring(ring) for ring in rings] for rings in v]

    @model_validator(mode="after")
    def check_usable(self) -> Self:
        if not self.is_usable():
            raise InvalidShapeDefinitionError(
                "Multi-polygon shape requires at least one polygon with closed rings",
                details={"polygon_count": len(self.polygons)},
            )
        return self

    def is_usable(self) -> bool:
        return bool(self.polygons) and all(
            rings and all(_usable_ring(ring) for ring in rings) for rings in self.polygons
        )

    @cached_property
    def geometry(self) -> MultiPolygon:
        return _prepared(self.to_shapely())

    def contains(self, lon: float, lat: float) -> bool:
        return self.geometry.covers(Point(lon, lat))

    def to_shapely(self) -> MultiPolygon:
        return MultiPolygon([(rings[0], rings[1:]) for rings in self.polygons])


RegionShape = Annotated[
    CircleShape | PolygonShape | MultiPolygonShape,
    Field(discriminator="kind"),
]


def validate_region_shape(shape: CircleShape | PolygonShape | MultiPolygonShape) -> None:
    """Admin-time geometry check, stricter than construction.

    Rejects self-intersecting rings and holes that escape their shell.
    Calculation never calls this; it only skips unusable shapes.

    Raises:
        InvalidShapeDefinitionError: If the geometry is not valid
    """
    if not shape.is_usable():
        raise InvalidShapeDefinitionError(f"Unusable {shape.kind} shape")
    if isinstance(shape, CircleShape):
        return

    geometry = shape.to_shapely()
    if not geometry.is_valid:
        raise InvalidShapeDefinitionError(
            f"Invalid {shape.kind} geometry: {explain_validity(geometry)}",
            details={"kind": shape.kind},
        )
