"""
Flyover Geo Utilities
Distance, bounding box and compass helpers used by the detection loop.
"""

from math import radians, sin, cos, sqrt, atan2, floor
from typing import Optional, Tuple

from ..config import Constants
from .constants import DIRECTIONS, UNKNOWN_DIRECTION

Coordinate = Tuple[float, float]


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance in kilometers

    Example:
        >>> round(haversine_distance(40.0, 29.0, 40.0, 29.05), 2)
        4.26
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return Constants.EARTH_RADIUS_KM * c


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great circle distance in kilometers between two (lat, lon) pairs."""
    return haversine_distance(a[0], a[1], b[0], b[1])


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(floor(value + 0.5))


def classify_direction(heading: Optional[float]) -> str:
    """
    Map a heading to one of the 8 compass directions.

    Args:
        heading: Heading in degrees, or None when unknown

    Returns:
        Compass label, or "unknown direction" for a missing heading

    Example:
        >>> classify_direction(10)
        'North'
        >>> classify_direction(350)
        'North'
        >>> classify_direction(None)
        'unknown direction'
    """
    if heading is None:
        return UNKNOWN_DIRECTION

    index = round_half_up((heading % 360) / Constants.DEGREES_PER_DIRECTION) % 8
    return DIRECTIONS[index]


def get_bounding_box(
    lat: float, lon: float, radius_km: float
) -> Tuple[float, float, float, float]:
    """
    Calculate bounding box coordinates for a given point and radius.

    Args:
        lat: Center latitude in degrees
        lon: Center longitude in degrees
        radius_km: Radius in kilometers

    Returns:
        Tuple of (lat_min, lon_min, lat_max, lon_max)
    """
    lat_delta = radius_km / Constants.KM_PER_DEGREE_LAT

    # Longitude delta grows with latitude
    lon_delta = radius_km / (Constants.KM_PER_DEGREE_LAT * cos(radians(lat)))

    return (
        lat - lat_delta,  # lat_min
        lon - lon_delta,  # lon_min
        lat + lat_delta,  # lat_max
        lon + lon_delta,  # lon_max
    )


def validate_coordinates(lat: float, lon: float) -> bool:
    """
    Validate latitude and longitude coordinates.

    Example:
        >>> validate_coordinates(40.0, 29.0)
        True
        >>> validate_coordinates(100, 200)
        False
    """
    return -90 <= lat <= 90 and -180 <= lon <= 180


def format_coordinates(lat: float, lon: float) -> str:
    """
    Render a position with hemisphere letters.

    Example:
        >>> format_coordinates(-33.9, 151.2)
        '33.9°S, 151.2°E'
    """
    lat_hemisphere = "N" if lat >= 0 else "S"
    lon_hemisphere = "E" if lon >= 0 else "W"
    return f"{abs(lat):g}°{lat_hemisphere}, {abs(lon):g}°{lon_hemisphere}"
