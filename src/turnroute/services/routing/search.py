"""Building blocks shared by the exact and greedy route searches.

Strategies work on index orders into the input point sequence rather than on
the points themselves, so duplicate points stay distinct stops and the
"used" bookkeeping is a plain boolean mask.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Iterator, MutableSequence, Optional, Sequence

from ...errors import SearchTimeoutError
from ...models.domain import Point
from ..geometry import common_dimension, distance, turn_valid
from .models import Route, SearchOutcome


class SearchBudget:
    """Wall-clock limit polled from inside search loops."""

    CHECK_INTERVAL = 2048

    def __init__(self, time_limit_seconds: float | None = None) -> None:
        self.time_limit_seconds = time_limit_seconds
        self._deadline = None if time_limit_seconds is None else time.monotonic() + time_limit_seconds
        self._ticks = 0

    def tick(self) -> None:
        if self._deadline is None:
            return
        self._ticks += 1
        if self._ticks % self.CHECK_INTERVAL == 0 and time.monotonic() > self._deadline:
            raise SearchTimeoutError(self.time_limit_seconds)


UNLIMITED = SearchBudget()


@dataclass(slots=True)
class Incumbent:
    """Best complete order found so far; replaced only on strict improvement."""

    order: Optional[list[int]] = None
    length: float = float("inf")

    def offer(self, order: Sequence[int], length: float) -> bool:
        if self.order is not None and not length < self.length:
            return False
        self.order = list(order)
        self.length = length
        return True

    def outcome(self, points: Sequence[Point], *, nodes: int, routes_evaluated: int) -> SearchOutcome:
        if self.order is None:
            return SearchOutcome(route=None, length=None, nodes=nodes, routes_evaluated=routes_evaluated)
        return SearchOutcome(
            route=to_route(points, self.order),
            length=self.length,
            nodes=nodes,
            routes_evaluated=routes_evaluated,
        )


def to_route(points: Sequence[Point], order: Sequence[int]) -> Route:
    return tuple(points[index] for index in order)


def trivial_outcome(points: Sequence[Point], distances: Sequence[Sequence[float]] | None = None) -> SearchOutcome:
    """Outcome for instances of at most two points: the input order, unchanged."""

    route = tuple(points)
    if len(route) == 2:
        length = distances[0][1] if distances is not None else distance(route[0], route[1])
    else:
        length = 0.0
    return SearchOutcome(route=route, length=length, nodes=0, routes_evaluated=1)


def prepare(points: Sequence[Point]) -> list[Point]:
    """Snapshot the instance and reject mixed dimensions before searching."""

    snapshot = list(points)
    common_dimension(snapshot)
    return snapshot


def order_valid(points: Sequence[Point], order: Sequence[int], tolerance: float = 0.0) -> bool:
    for k in range(len(order) - 2):
        if not turn_valid(points[order[k]], points[order[k + 1]], points[order[k + 2]], tolerance):
            return False
    return True


def order_length(distances: Sequence[Sequence[float]], order: Sequence[int]) -> float:
    total = 0.0
    for k in range(len(order) - 1):
        total += distances[order[k]][order[k + 1]]
    return total


def heap_permutations(items: MutableSequence, start: int = 0, stop: int | None = None) -> Iterator[None]:
    """Permute ``items[start:stop]`` in place with Heap's algorithm.

    Yields once after every transposition, so together with the arrangement
    the caller already holds every permutation of the slice is visited
    exactly once.
    """

    stop = len(items) if stop is None else stop
    size = stop - start
    control = [0] * max(size, 0)
    n = 1
    while n < size:
        if control[n] < n:
            other = 0 if n % 2 == 0 else control[n]
            items[start + other], items[start + n] = items[start + n], items[start + other]
            control[n] += 1
            n = 1
            yield
        else:
            control[n] = 0
            n += 1
