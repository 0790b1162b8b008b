from __future__ import annotations


class RankingError(Exception):
    """Base error for a failed ranking request; ``stage`` names where it failed."""

    stage = "ranking"

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if stage is not None:
            self.stage = stage

    def __str__(self) -> str:
        return f"{self.stage}: {self.message}"


class InvalidInput(RankingError):
    """Query parameters the caller must fix (bad coordinates, bad radius)."""

    stage = "input"


class RetrievalFailure(RankingError):
    """The candidate store could not be read."""

    stage = "retrieval"
