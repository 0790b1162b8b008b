from __future__ import annotations

from datetime import datetime
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CandidateId = Union[int, str]
Tier = Literal["High", "Medium", "Low"]
TrafficDensity = Literal["Low", "Moderate", "High"]
Provenance = Literal["store", "fallback"]

LEGAL_STATUS_PUBLIC = "Legal (Public)"


class _WireModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QueryPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    radius_m: float = Field(..., gt=0)
    free_text_query: str | None = None


class Candidate(BaseModel):
    id: CandidateId
    name: str
    latitude: float
    longitude: float
    # 0..1 or 0..100; normalized when scored
    historical_demand: float = 0.0


class Location(BaseModel):
    lat: float
    lng: float


class Prediction(_WireModel):
    id: CandidateId
    name: str
    location: Location
    tier: Tier
    score: int = Field(..., ge=0, le=100)
    available_spaces: int = Field(..., ge=0)
    traffic_density: TrafficDensity
    legal_status: str = LEGAL_STATUS_PUBLIC
    distance_m: float = Field(..., ge=0, alias="distanceMeters")
    distance_label: str
    walking_time_label: str

    # Synthetic vs. real data; never serialized.
    source: Provenance = Field("store", exclude=True)

    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"


class Insights(_WireModel):
    best_candidate_id: CandidateId = 0
    average_score: int = 0
    summary_text: str


class SearchResponse(_WireModel):
    predictions: list[Prediction]
    insights: Insights


class SearchRecord(BaseModel):
    query: str
    latitude: float
    longitude: float
    radius_m: float
    timestamp: datetime = Field(default_factory=datetime.now)
