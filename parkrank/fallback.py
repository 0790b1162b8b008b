from __future__ import annotations

import random
from dataclasses import dataclass

from parkrank.attributes import synthesize
from parkrank.geo import haversine_m, normalize_latlng
from parkrank.models import Location, Prediction, QueryPoint
from parkrank.scoring import classify_tier

# Max random shift per axis, in degrees (~22 m of latitude).
OFFSET_JITTER_DEG = 0.0002


@dataclass(frozen=True)
class FallbackZone:
    id: int
    name: str
    d_lat: float
    d_lng: float
    score: int
    traffic_sample: float


# One zone per tier, roughly 150-250 m from the query point.
FALLBACK_ZONES: tuple[FallbackZone, ...] = (
    FallbackZone(101, "Smart Zone A", 0.0012, 0.0009, 85, 20.0),
    FallbackZone(102, "Smart Zone B", -0.0011, -0.0013, 63, 55.0),
    FallbackZone(103, "Smart Zone C", 0.0018, -0.0010, 38, 85.0),
)


def generate_fallback(query: QueryPoint, rng: random.Random) -> list[Prediction]:
    """Synthetic predictions around the query point for when no real spot is in range."""
    predictions: list[Prediction] = []
    for zone in FALLBACK_ZONES:
        lat = query.latitude + zone.d_lat + rng.uniform(-OFFSET_JITTER_DEG, OFFSET_JITTER_DEG)
        lng = query.longitude + zone.d_lng + rng.uniform(-OFFSET_JITTER_DEG, OFFSET_JITTER_DEG)
        lat, lng = normalize_latlng(lat, lng)
        d = haversine_m(query.latitude, query.longitude, lat, lng)
        attrs = synthesize(d, zone.score, zone.traffic_sample)
        predictions.append(
            Prediction(
                id=zone.id,
                name=zone.name,
                location=Location(lat=lat, lng=lng),
                tier=classify_tier(zone.score),
                score=zone.score,
                available_spaces=attrs.available_spaces,
                traffic_density=attrs.traffic_density,
                distance_m=d,
                distance_label=attrs.distance_label,
                walking_time_label=attrs.walking_time_label,
                source="fallback",
            )
        )
    return predictions
