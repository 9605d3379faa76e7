"""
Great-circle distance helpers for search and cart route ordering.
"""

import math
from typing import Optional

from marketplace.config import settings
from marketplace.shops.schemas import GeoPoint

EARTH_RADIUS_KM = 6371


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance in kilometres, rounded to 2 decimals."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return round(EARTH_RADIUS_KM * c, 2)


def default_location() -> GeoPoint:
    return GeoPoint(lat=settings.default_lat, lng=settings.default_lng)


def resolve_origin(lat: Optional[float], lng: Optional[float]) -> GeoPoint:
    # Both coordinates or neither
    if lat is None or lng is None:
        return default_location()
    return GeoPoint(lat=lat, lng=lng)
