from __future__ import annotations

from typing import Callable, Optional

from flask import Flask, jsonify, request

from parkrank.config import settings
from parkrank.errors import InvalidInput, RetrievalFailure
from parkrank.history import LoggingSearchHistory, SearchHistory
from parkrank.logger import configure_logging, get_logger
from parkrank.retrievers import CandidateRetriever, build_retriever
from parkrank.services import RankingContext, build_query_point, search_parking

logger = get_logger(__name__)


def _default_context() -> RankingContext:
    return RankingContext.create(seed=settings.random_seed)


def create_app(
    retriever: Optional[CandidateRetriever] = None,
    history: Optional[SearchHistory] = None,
    context_factory: Callable[[], RankingContext] = _default_context,
) -> Flask:
    app = Flask(__name__)
    store = retriever if retriever is not None else build_retriever(settings)
    search_history = history if history is not None else LoggingSearchHistory()

    @app.after_request
    def add_cors_headers(resp):
        resp.headers["Access-Control-Allow-Origin"] = "*"
        resp.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
        resp.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return resp

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", "source": type(store).__name__})

    @app.route("/api/parking/search")
    def parking_search():
        try:
            point = build_query_point(
                request.args.get("lat"),
                request.args.get("lng"),
                radius_m=request.args.get("radius"),
                free_text_query=request.args.get("query"),
                default_radius_m=settings.default_radius_m,
            )
        except InvalidInput as e:
            return jsonify({"detail": e.message}), 400

        try:
            result = search_parking(point, store, context_factory(), history=search_history)
        except RetrievalFailure as e:
            return jsonify({"detail": str(e)}), 503

        return jsonify(result.model_dump(mode="json", by_alias=True))

    return app


if __name__ == "__main__":
    configure_logging()
    # Run on 0.0.0.0 so Android emulator (10.0.2.2) can reach it
    create_app().run(host="0.0.0.0", port=8000, debug=True)
