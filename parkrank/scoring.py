from __future__ import annotations

import math

from parkrank.models import Tier

# Weighted sum; the baseline term stands in for everything not modeled.
DISTANCE_WEIGHT = 0.4
DEMAND_WEIGHT = 0.3
TRAFFIC_WEIGHT = 0.2
BASELINE_WEIGHT = 0.1
BASELINE_SCORE = 50.0

# One point of distance score lost per 10 m; zero past 1 km.
METERS_PER_DISTANCE_POINT = 10.0

SCORE_MIN = 0
SCORE_MAX = 100

HIGH_TIER_THRESHOLD = 80
MEDIUM_TIER_THRESHOLD = 55


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def finite_or_zero(v: float) -> float:
    # NaN would slip through clamp as the upper bound
    v = float(v)
    return v if math.isfinite(v) else 0.0


def round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def distance_score(distance_m: float) -> float:
    return max(0.0, 100.0 - distance_m / METERS_PER_DISTANCE_POINT)


def normalize_demand(demand_raw: float) -> float:
    """Map demand given as a 0..1 fraction or a 0..100 percentage onto 0..100."""
    demand = finite_or_zero(demand_raw)
    if demand <= 1:
        demand *= 100.0
    return clamp(demand, 0.0, 100.0)


def compute_score(distance_m: float, demand_raw: float, traffic_sample: float) -> int:
    """Composite availability score in [0, 100].

    Pure function of its inputs: the traffic sample is drawn by the caller.
    """
    raw = (
        DISTANCE_WEIGHT * distance_score(distance_m)
        + DEMAND_WEIGHT * normalize_demand(demand_raw)
        + TRAFFIC_WEIGHT * clamp(finite_or_zero(traffic_sample), 0.0, 100.0)
        + BASELINE_WEIGHT * BASELINE_SCORE
    )
    return int(clamp(round_half_up(raw), SCORE_MIN, SCORE_MAX))


def classify_tier(score: int) -> Tier:
    if score > HIGH_TIER_THRESHOLD:
        return "High"
    if score > MEDIUM_TIER_THRESHOLD:
        return "Medium"
    return "Low"
