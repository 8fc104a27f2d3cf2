from .distance import TripEstimate, estimate_trip, haversine_distance_km, haversine_distance_m
from .regions import PriceRegion, RegionLoader
from .resolver import RegionResolver
from .shapes import (
    CircleShape,
    MultiPolygonShape,
    PolygonShape,
    RegionShape,
    validate_region_shape,
)

__all__ = [
    "CircleShape",
    "MultiPolygonShape",
    "PolygonShape",
    "PriceRegion",
    "RegionLoader",
    "RegionResolver",
    "RegionShape",
    "TripEstimate",
    "estimate_trip",
    "haversine_distance_km",
    "haversine_distance_m",
    "validate_region_shape",
]
