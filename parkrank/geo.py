from __future__ import annotations

import math
from typing import Any

from parkrank.errors import InvalidInput

EARTH_RADIUS_M = 6371000.0


def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in meters between two lat/lng points."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lng / 2) ** 2
    )
    # rounding can push a a hair above 1 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def parse_coordinate(v: Any, name: str) -> float:
    if v is None or isinstance(v, bool):
        raise InvalidInput(f"{name} is required")
    if isinstance(v, (int, float)):
        value = float(v)
    else:
        s = str(v).strip()
        if not s:
            raise InvalidInput(f"{name} is required")
        try:
            value = float(s)
        except ValueError:
            raise InvalidInput(f"{name} must be a number, got {s!r}") from None
    if not math.isfinite(value):
        raise InvalidInput(f"{name} must be finite, got {value}")
    return value


def validate_coordinates(lat: Any, lng: Any) -> tuple[float, float]:
    lat_v = parse_coordinate(lat, "latitude")
    lng_v = parse_coordinate(lng, "longitude")
    if not -90.0 <= lat_v <= 90.0:
        raise InvalidInput(f"latitude out of range [-90, 90]: {lat_v}")
    if not -180.0 <= lng_v <= 180.0:
        raise InvalidInput(f"longitude out of range [-180, 180]: {lng_v}")
    return lat_v, lng_v


def normalize_latlng(lat: float, lng: float) -> tuple[float, float]:
    """Fold a point pushed past a pole or the antimeridian back into range."""
    if lat > 90.0:
        lat = 180.0 - lat
        lng += 180.0
    elif lat < -90.0:
        lat = -180.0 - lat
        lng += 180.0
    if not -180.0 <= lng <= 180.0:
        lng = (lng + 180.0) % 360.0 - 180.0
    return lat, lng
