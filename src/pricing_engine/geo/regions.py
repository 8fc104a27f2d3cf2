import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.exceptions import InvalidShapeDefinitionError
from .shapes import CircleShape, MultiPolygonShape, PolygonShape, RegionShape

logger = logging.getLogger(__name__)


class PriceRegion(BaseModel):
    """Named pricing zone keyed by id; fares and surcharges hang off it."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    tags: frozenset[str] = frozenset()
    shape: RegionShape
    is_active: bool = True
    description: str | None = None

    def contains(self, lon: float, lat: float) -> bool:
        return self.shape.contains(lon, lat)


class RegionLoader:
    """Loads price regions from a GeoJSON FeatureCollection.

    Supported geometries: Polygon, MultiPolygon, and Point features whose
    properties carry ``radius_meters`` (circles). Features that cannot be
    turned into a region are logged and skipped.
    """

    def __init__(self, geojson_path: Path | str):
        self.geojson_path = Path(geojson_path)
        self._regions: dict[str, PriceRegion] = {}
        self._load_regions()

    def _load_regions(self) -> None:
        with open(self.geojson_path) as f:
            geojson = json.load(f)

        if geojson.get("type") != "FeatureCollection":
            logger.warning(f"Expected FeatureCollection, got {geojson.get('type')}")
            return

        for feature in geojson.get("features", []):
            region = self.parse_feature(feature)
            if region:
                self._regions[region.id] = region

        logger.info(f"Loaded {len(self._regions)} price regions from {self.geojson_path}")

    @staticmethod
    def parse_feature(feature: dict[str, Any]) -> PriceRegion | None:
        properties = feature.get("properties") or {}
        geometry = feature.get("geometry") or {}

        region_id = properties.get("region_id") or feature.get("id")
        if not region_id:
            logger.warning("Skipping feature with missing region_id")
            return None

        try:
            shape = RegionLoader._parse_geometry(geometry, properties)
            if shape is None:
                logger.warning(
                    f"Skipping region {region_id}: unsupported geometry type {geometry.get('type')}"
                )
                return None

            return PriceRegion(
                id=str(region_id),
                name=properties.get("name", region_id),
                tags=frozenset(properties.get("tags", [])),
                shape=shape,
                is_active=properties.get("is_active", True),
                description=properties.get("description"),
            )
        except (InvalidShapeDefinitionError, ValidationError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping region {region_id}: {e}")
            return None

    @staticmethod
    def _parse_geometry(
        geometry: dict[str, Any], properties: dict[str, Any]
    ) -> CircleShape | PolygonShape | MultiPolygonShape | None:
        geometry_type = geometry.get("type")
        coordinates = geometry.get("coordinates")

        if geometry_type == "Point":
            return CircleShape(center=coordinates, radius_meters=properties["radius_meters"])
        if geometry_type == "Polygon":
            return PolygonShape(rings=coordinates)
        if geometry_type == "MultiPolygon":
            return MultiPolygonShape(polygons=coordinates)
        return None

    def get_region(self, region_id: str) -> PriceRegion | None:
        return self._regions.get(region_id)

    def get_all_regions(self) -> list[PriceRegion]:
        return list(self._regions.values())
