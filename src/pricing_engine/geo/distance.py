"""Centralized geographic distance calculations.

Haversine distances used by circle-region containment and by the
straight-line trip estimate that stands in for routing when the caller
does not supply distance and duration.
"""

from dataclasses import dataclass
from decimal import Decimal
from math import asin, atan2, cos, degrees, pi, radians, sin, sqrt

EARTH_RADIUS_M = 6_371_000  # Earth radius in meters

# Absorbs float error between the bounding box and the Haversine formula
_BOX_SLACK_DEGREES = 1e-9


def haversine_distance_m(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate the great-circle distance between two points in meters.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance between the two points in meters
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_M * c


def haversine_distance_km(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Great-circle distance in kilometers. See haversine_distance_m."""
    return haversine_distance_m(lat1, lon1, lat2, lon2) / 1000.0


def is_within_radius(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    radius_m: float,
) -> bool:
    """Check if two points are at most radius_m meters apart.

    A bounding box around the second point rejects far points before the
    Haversine call. The box is the exact extent of the spherical cap of
    radius_m: the latitude side is the angular radius, and the longitude
    side is asin(sin(r/R) / cos(lat)). When the cap reaches a pole every
    longitude is possible and only the latitude side is checked.
    """
    angular_radius = radius_m / EARTH_RADIUS_M
    if angular_radius < pi:
        if abs(lat2 - lat1) > degrees(angular_radius) + _BOX_SLACK_DEGREES:
            return False

        cos_lat = cos(radians(lat2))
        if angular_radius < pi / 2 and sin(angular_radius) < cos_lat:
            lon_span = degrees(asin(sin(angular_radius) / cos_lat))
            delta_lon = abs(lon2 - lon1) % 360
            delta_lon = min(delta_lon, 360 - delta_lon)
            if delta_lon > lon_span + _BOX_SLACK_DEGREES:
                return False

    return haversine_distance_m(lat1, lon1, lat2, lon2) <= radius_m


@dataclass(frozen=True)
class TripEstimate:
    distance_km: Decimal
    duration_minutes: Decimal


def estimate_trip(
    origin: tuple[float, float],
    destination: tuple[float, float],
    average_speed_kmh: float,
) -> TripEstimate:
    """Approximate a trip by its straight-line distance.

    Args:
        origin: (lon, lat) of the pickup point
        destination: (lon, lat) of the dropoff point
        average_speed_kmh: Assumed constant speed for the duration estimate

    Returns:
        Distance rounded to meters and duration rounded to tenths of a minute
    """
    if average_speed_kmh <= 0:
        raise ValueError("Average speed must be positive")

    origin_lon, origin_lat = origin
    dest_lon, dest_lat = destination
    km = haversine_distance_km(origin_lat, origin_lon, dest_lat, dest_lon)
    minutes = km / average_speed_kmh * 60

    return TripEstimate(
        distance_km=Decimal(str(round(km, 3))),
        duration_minutes=Decimal(str(round(minutes, 1))),
    )
