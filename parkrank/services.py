from __future__ import annotations

import math
import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from parkrank.attributes import synthesize
from parkrank.errors import InvalidInput, RankingError, RetrievalFailure
from parkrank.fallback import generate_fallback
from parkrank.geo import haversine_m, validate_coordinates
from parkrank.history import SearchHistory
from parkrank.insights import aggregate
from parkrank.logger import get_logger
from parkrank.models import Candidate, Location, Prediction, QueryPoint, SearchRecord, SearchResponse
from parkrank.retrievers import CandidateRetriever
from parkrank.scoring import classify_tier, compute_score
from parkrank.traffic import RandomTrafficSource, TrafficSource

logger = get_logger(__name__)

DEFAULT_RADIUS_M = 500


@dataclass
class RankingContext:
    """Per-request randomness: the traffic signal and fallback jitter."""

    rng: random.Random
    traffic: TrafficSource

    @classmethod
    def create(cls, seed: int | None = None, traffic: TrafficSource | None = None) -> RankingContext:
        rng = random.Random(seed)
        return cls(rng=rng, traffic=traffic or RandomTrafficSource(rng))


def build_query_point(
    latitude: Any,
    longitude: Any,
    radius_m: Any = None,
    free_text_query: str | None = None,
    default_radius_m: float = DEFAULT_RADIUS_M,
) -> QueryPoint:
    lat, lng = validate_coordinates(latitude, longitude)

    if radius_m is None or (isinstance(radius_m, str) and not radius_m.strip()):
        radius = float(default_radius_m)
    else:
        try:
            radius = float(radius_m)
        except (TypeError, ValueError):
            raise InvalidInput(f"radius must be a number, got {radius_m!r}") from None
    if not math.isfinite(radius) or radius <= 0:
        raise InvalidInput(f"radius must be a positive number of meters, got {radius_m!r}")

    text = (free_text_query or "").strip() or None
    return QueryPoint(latitude=lat, longitude=lng, radius_m=radius, free_text_query=text)


def predict_candidate(candidate: Candidate, distance_m: float, context: RankingContext) -> Prediction:
    traffic = context.traffic.sample(candidate.latitude, candidate.longitude)
    score = compute_score(distance_m, candidate.historical_demand, traffic)
    attrs = synthesize(distance_m, score, traffic)
    return Prediction(
        id=candidate.id,
        name=candidate.name,
        location=Location(lat=candidate.latitude, lng=candidate.longitude),
        tier=classify_tier(score),
        score=score,
        available_spaces=attrs.available_spaces,
        traffic_density=attrs.traffic_density,
        distance_m=distance_m,
        distance_label=attrs.distance_label,
        walking_time_label=attrs.walking_time_label,
    )


def rank_candidates(
    query: QueryPoint,
    candidates: Sequence[Candidate],
    context: RankingContext,
) -> list[Prediction]:
    """Score the in-radius candidates and sort them best first.

    Falls back to synthetic zones when nothing is in range. Equal scores keep
    their retrieval order.
    """
    predictions: list[Prediction] = []
    for c in candidates:
        d = haversine_m(query.latitude, query.longitude, c.latitude, c.longitude)
        if not math.isfinite(d) or d > query.radius_m:
            continue
        predictions.append(predict_candidate(c, d, context))

    if not predictions:
        logger.warning(
            "No candidates within %sm of (%.5f, %.5f); using fallback zones",
            query.radius_m,
            query.latitude,
            query.longitude,
        )
        predictions = generate_fallback(query, context.rng)

    return sorted(predictions, key=lambda p: p.score, reverse=True)


def _notify_history(history: SearchHistory, query: QueryPoint) -> None:
    entry = SearchRecord(
        query=query.free_text_query or "",
        latitude=query.latitude,
        longitude=query.longitude,
        radius_m=query.radius_m,
    )
    try:
        history.record(entry)
    except Exception:
        # History is best-effort; the search itself still succeeds.
        logger.warning("Failed to record search %r", entry.query, exc_info=True)


def search_parking(
    query: QueryPoint,
    retriever: CandidateRetriever,
    context: RankingContext,
    history: SearchHistory | None = None,
) -> SearchResponse:
    logger.info(
        "Parking search at (%.5f, %.5f) radius=%sm",
        query.latitude,
        query.longitude,
        query.radius_m,
    )

    if query.free_text_query and history is not None:
        _notify_history(history, query)

    try:
        candidates = retriever.fetch_candidates(query.latitude, query.longitude)
    except RankingError:
        raise
    except Exception as e:
        logger.exception("Candidate retrieval failed")
        raise RetrievalFailure(f"could not fetch parking candidates: {e}") from e

    logger.info("Retrieved %d candidates", len(candidates))
    predictions = rank_candidates(query, candidates, context)
    return SearchResponse(predictions=predictions, insights=aggregate(predictions))
