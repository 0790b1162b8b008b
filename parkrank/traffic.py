"""Traffic signal sources used by the scoring step.

There is no live traffic feed yet, so requests default to
:class:`RandomTrafficSource`, a uniform simulation in [0, 100]. Anything with
a ``sample(latitude, longitude) -> float`` method can replace it without
touching the scoring formula.
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from typing import Protocol

TRAFFIC_MIN = 0.0
TRAFFIC_MAX = 100.0


class TrafficSource(Protocol):
    def sample(self, latitude: float, longitude: float) -> float:
        ...


class RandomTrafficSource:
    """Simulated traffic: a uniform draw from the request's own generator."""

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    def sample(self, latitude: float, longitude: float) -> float:
        return self.rng.uniform(TRAFFIC_MIN, TRAFFIC_MAX)


class FixedTrafficSource:
    def __init__(self, value: float) -> None:
        self.value = float(value)

    def sample(self, latitude: float, longitude: float) -> float:
        return self.value


class SequenceTrafficSource:
    """Replays the given values in order, one per sample."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values = [float(v) for v in values]
        self._pos = 0

    def sample(self, latitude: float, longitude: float) -> float:
        if self._pos >= len(self._values):
            raise IndexError(f"traffic sequence exhausted after {len(self._values)} samples")
        value = self._values[self._pos]
        self._pos += 1
        return value
