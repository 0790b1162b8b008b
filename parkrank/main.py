from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from parkrank.config import settings
from parkrank.errors import InvalidInput, RetrievalFailure
from parkrank.history import InMemorySearchHistory, SearchHistory
from parkrank.logger import configure_logging
from parkrank.models import SearchResponse
from parkrank.retrievers import CandidateRetriever, build_retriever
from parkrank.services import RankingContext, build_query_point, search_parking

configure_logging()

app = FastAPI(title="Parking Availability Ranker API", version="0.2.0")

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Built once; stores load their data lazily on first search.
retriever: CandidateRetriever = build_retriever(settings)
search_history = InMemorySearchHistory(maxlen=settings.history_size)


def get_retriever() -> CandidateRetriever:
    return retriever


def get_search_history() -> SearchHistory:
    return search_history


def get_ranking_context() -> RankingContext:
    return RankingContext.create(seed=settings.random_seed)


@app.get("/health")
def health(retriever: CandidateRetriever = Depends(get_retriever)):
    describe = getattr(retriever, "describe", None)
    return {
        "status": "ok",
        "source": describe() if describe else type(retriever).__name__,
    }


@app.get("/api/parking/search", response_model=SearchResponse)
def parking_search(
    lat: str = Query(..., description="Latitude of the destination"),
    lng: str = Query(..., description="Longitude of the destination"),
    radius: Optional[str] = Query(None, description="Search radius in meters"),
    query: Optional[str] = Query(None, description="Free-text destination, logged to history"),
    retriever: CandidateRetriever = Depends(get_retriever),
    history: SearchHistory = Depends(get_search_history),
    context: RankingContext = Depends(get_ranking_context),
) -> SearchResponse:
    """
    Rank parking spots near a destination by predicted availability.

    - **lat, lng**: Destination coordinates (required)
    - **radius**: Maximum distance in meters (default: 500)
    - **query**: Optional free-text search, recorded in search history
    """
    try:
        point = build_query_point(
            lat,
            lng,
            radius_m=radius,
            free_text_query=query,
            default_radius_m=settings.default_radius_m,
        )
        return search_parking(point, retriever, context, history=history)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=e.message)
    except RetrievalFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
