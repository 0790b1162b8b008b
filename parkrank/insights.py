from __future__ import annotations

from collections.abc import Sequence

from parkrank.models import Insights, Prediction
from parkrank.scoring import round_half_up

NO_BEST_CANDIDATE = 0
DEFAULT_TRAFFIC_DENSITY = "Moderate"

SUMMARY_TEMPLATE = "Found {count} parking spots near your destination. Traffic is {traffic}."


def aggregate(predictions: Sequence[Prediction]) -> Insights:
    """Summarize a ranked prediction list; ``predictions[0]`` is taken as the best."""
    if not predictions:
        return Insights(
            best_candidate_id=NO_BEST_CANDIDATE,
            average_score=0,
            summary_text=SUMMARY_TEMPLATE.format(count=0, traffic=DEFAULT_TRAFFIC_DENSITY),
        )

    best = predictions[0]
    mean = sum(p.score for p in predictions) / len(predictions)
    return Insights(
        best_candidate_id=best.id,
        average_score=round_half_up(mean),
        summary_text=SUMMARY_TEMPLATE.format(count=len(predictions), traffic=best.traffic_density),
    )
