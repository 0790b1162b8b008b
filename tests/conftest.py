"""Shared fixtures for the parkrank test suite.

Candidates sit due north of a Mumbai destination so their distances are
exact multiples of one arc-meter of latitude (0.001 deg ~ 111.19 m).
"""

import pytest

from parkrank.models import Candidate, Location, Prediction
from parkrank.retrievers import InMemoryCandidateStore
from parkrank.services import RankingContext, build_query_point
from parkrank.traffic import FixedTrafficSource

ORIGIN_LAT = 19.076
ORIGIN_LNG = 72.8777


def make_prediction(id, score: int, traffic_density: str = "Moderate") -> Prediction:
    """Return a minimal, fully populated prediction for aggregation tests."""
    return Prediction(
        id=id,
        name=f"Spot {id}",
        location=Location(lat=ORIGIN_LAT, lng=ORIGIN_LNG),
        tier="Medium",
        score=score,
        available_spaces=5,
        traffic_density=traffic_density,
        distance_m=100.0,
        distance_label="100m",
        walking_time_label="1 min",
    )


@pytest.fixture
def candidates() -> list[Candidate]:
    """Two spots inside 500 m and one ~1.1 km away."""
    return [
        Candidate(id=1, name="Colaba Lot", latitude=ORIGIN_LAT + 0.001, longitude=ORIGIN_LNG, historical_demand=0.5),
        Candidate(id=2, name="Fort Garage", latitude=ORIGIN_LAT + 0.002, longitude=ORIGIN_LNG, historical_demand=90),
        Candidate(id=3, name="Far Street", latitude=ORIGIN_LAT + 0.01, longitude=ORIGIN_LNG, historical_demand=1.0),
    ]


@pytest.fixture
def store(candidates: list[Candidate]) -> InMemoryCandidateStore:
    return InMemoryCandidateStore(candidates)


@pytest.fixture
def context() -> RankingContext:
    """Seeded context with traffic pinned at 50 (Moderate)."""
    return RankingContext.create(seed=7, traffic=FixedTrafficSource(50))


@pytest.fixture
def query():
    return build_query_point(ORIGIN_LAT, ORIGIN_LNG, radius_m=500)
