"""Ranks nearby parking spots by predicted availability."""

from parkrank.errors import InvalidInput, RankingError, RetrievalFailure
from parkrank.models import Candidate, Insights, Prediction, QueryPoint, SearchResponse
from parkrank.services import RankingContext, build_query_point, rank_candidates, search_parking

__all__ = [
    "Candidate",
    "Insights",
    "InvalidInput",
    "Prediction",
    "QueryPoint",
    "RankingContext",
    "RankingError",
    "RetrievalFailure",
    "SearchResponse",
    "build_query_point",
    "rank_candidates",
    "search_parking",
]
