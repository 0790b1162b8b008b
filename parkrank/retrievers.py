"""Candidate stores the ranking pipeline reads from.

Stores return every candidate they consider relevant to a point; the pipeline
does its own radius filtering, so returning extra rows is fine.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import requests

from parkrank.config import Settings
from parkrank.data_loader import load_candidates_from_file, parse_candidates
from parkrank.logger import get_logger
from parkrank.models import Candidate

logger = get_logger(__name__)


class CandidateRetriever(Protocol):
    def fetch_candidates(self, latitude: float, longitude: float) -> Sequence[Candidate]:
        ...


class InMemoryCandidateStore:
    def __init__(self, candidates: Sequence[Candidate] = ()) -> None:
        self.candidates = list(candidates)

    def fetch_candidates(self, latitude: float, longitude: float) -> Sequence[Candidate]:
        return list(self.candidates)

    def describe(self) -> str:
        return f"memory ({len(self.candidates)} candidates)"


class FileCandidateStore:
    """Loads a CSV/JSON/GeoJSON file on first use and serves it from memory."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._candidates: list[Candidate] | None = None

    def fetch_candidates(self, latitude: float, longitude: float) -> Sequence[Candidate]:
        if self._candidates is None:
            result = load_candidates_from_file(self.path)
            logger.info("Loaded %d parking candidates from %s", len(result.candidates), result.source)
            self._candidates = result.candidates
        return list(self._candidates)

    def describe(self) -> str:
        return f"file {self.path}"


class HttpCandidateStore:
    """Fetches candidates near a point from a JSON endpoint (``?lat=&lng=``)."""

    def __init__(
        self,
        url: str,
        timeout_s: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    def fetch_candidates(self, latitude: float, longitude: float) -> Sequence[Candidate]:
        r = self.session.get(
            self.url,
            params={"lat": latitude, "lng": longitude},
            headers={"Accept": "application/json"},
            timeout=self.timeout_s,
        )
        r.raise_for_status()
        candidates = parse_candidates(r.json())
        logger.debug("Fetched %d candidates from %s", len(candidates), self.url)
        return candidates

    def describe(self) -> str:
        return f"http {self.url}"


def build_retriever(settings: Settings) -> CandidateRetriever:
    if settings.candidate_source_url:
        return HttpCandidateStore(settings.candidate_source_url, timeout_s=settings.http_timeout_s)
    return FileCandidateStore(settings.candidate_cache_path)
