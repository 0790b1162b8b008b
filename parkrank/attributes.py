from __future__ import annotations

from dataclasses import dataclass

from parkrank.models import TrafficDensity
from parkrank.scoring import finite_or_zero, round_half_up

MAX_MODELED_SPACES = 15
SCORE_POINTS_PER_SPACE = 7.0

HIGH_TRAFFIC_THRESHOLD = 70
MODERATE_TRAFFIC_THRESHOLD = 40

WALKING_SPEED_M_PER_MIN = 80.0


@dataclass(frozen=True)
class SynthesizedAttributes:
    available_spaces: int
    traffic_density: TrafficDensity
    distance_label: str
    walking_time_label: str


def estimate_available_spaces(score: int) -> int:
    # Legacy mapping: a higher score yields fewer modeled free spaces.
    return max(0, round_half_up(MAX_MODELED_SPACES - score / SCORE_POINTS_PER_SPACE))


def traffic_density_label(traffic_sample: float) -> TrafficDensity:
    traffic_sample = finite_or_zero(traffic_sample)
    if traffic_sample > HIGH_TRAFFIC_THRESHOLD:
        return "High"
    if traffic_sample > MODERATE_TRAFFIC_THRESHOLD:
        return "Moderate"
    return "Low"


def format_distance(distance_m: float) -> str:
    return f"{round_half_up(distance_m)}m"


def format_walking_time(distance_m: float) -> str:
    minutes = max(1, round_half_up(distance_m / WALKING_SPEED_M_PER_MIN))
    return f"{minutes} min"


def synthesize(distance_m: float, score: int, traffic_sample: float) -> SynthesizedAttributes:
    return SynthesizedAttributes(
        available_spaces=estimate_available_spaces(score),
        traffic_density=traffic_density_label(traffic_sample),
        distance_label=format_distance(distance_m),
        walking_time_label=format_walking_time(distance_m),
    )
