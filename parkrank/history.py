from __future__ import annotations

from collections import deque
from typing import Protocol

from parkrank.logger import get_logger
from parkrank.models import SearchRecord

logger = get_logger(__name__)


class SearchHistory(Protocol):
    def record(self, entry: SearchRecord) -> None:
        ...


class InMemorySearchHistory:
    """Keeps the most recent searches, newest first."""

    def __init__(self, maxlen: int = 50) -> None:
        self._entries: deque[SearchRecord] = deque(maxlen=maxlen)

    def record(self, entry: SearchRecord) -> None:
        self._entries.appendleft(entry)

    def recent(self) -> list[SearchRecord]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class LoggingSearchHistory:
    def record(self, entry: SearchRecord) -> None:
        logger.info(
            "Search %r at (%.5f, %.5f) radius=%sm",
            entry.query,
            entry.latitude,
            entry.longitude,
            entry.radius_m,
        )
