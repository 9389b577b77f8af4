"""Greedy nearest-neighbour route construction.

Each construction extends a fixed start with the closest unused point that
keeps the turn constraint, and gives up (returns None) as soon as no
candidate qualifies. The strategies differ in which starts they try.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...errors import InvalidParameterError
from ...models.domain import Point
from ..geometry import distance_matrix, turn_valid
from .models import Route, SearchOutcome
from .search import UNLIMITED, Incumbent, SearchBudget, order_length, prepare, trivial_outcome

logger = logging.getLogger(__name__)


def _nearest(distances: Sequence[Sequence[float]], used: Sequence[bool], origin: int) -> Optional[int]:
    best: Optional[int] = None
    best_distance = 0.0
    row = distances[origin]
    for candidate, taken in enumerate(used):
        if taken:
            continue
        if best is None or row[candidate] < best_distance:
            best = candidate
            best_distance = row[candidate]
    return best


def _nearest_valid(
    points: Sequence[Point],
    distances: Sequence[Sequence[float]],
    used: Sequence[bool],
    previous: int,
    current: int,
    tolerance: float,
) -> Optional[int]:
    best: Optional[int] = None
    best_distance = 0.0
    row = distances[current]
    p, q = points[previous], points[current]
    for candidate, taken in enumerate(used):
        if taken:
            continue
        if best is not None and not row[candidate] < best_distance:
            continue
        if turn_valid(p, q, points[candidate], tolerance):
            best = candidate
            best_distance = row[candidate]
    return best


def extend_greedily(
    points: Sequence[Point],
    distances: Sequence[Sequence[float]],
    start: Sequence[int],
    tolerance: float = 0.0,
    budget: SearchBudget = UNLIMITED,
) -> Optional[list[int]]:
    """Complete ``start`` (at least two indices) into a full order, or None on a dead end."""

    order = list(start)
    used = [False] * len(points)
    for index in order:
        used[index] = True
    while len(order) < len(points):
        budget.tick()
        nxt = _nearest_valid(points, distances, used, order[-2], order[-1], tolerance)
        if nxt is None:
            return None
        used[nxt] = True
        order.append(nxt)
    return order


class NearestNeighborSolver:
    """Single greedy pass from the first input point."""

    name = "nearest"
    exact = False

    def __init__(self, *, tolerance: float = 0.0) -> None:
        self.tolerance = tolerance

    def search(self, points: Sequence[Point], budget: SearchBudget | None = None) -> SearchOutcome:
        points = prepare(points)
        distances = distance_matrix(points)
        if len(points) <= 2:
            return trivial_outcome(points, distances)
        budget = budget or UNLIMITED

        order = _construct_from(points, distances, 0, self.tolerance, budget)
        if order is None:
            return SearchOutcome(route=None, length=None, nodes=1, routes_evaluated=0)
        incumbent = Incumbent()
        incumbent.offer(order, order_length(distances, order))
        return incumbent.outcome(points, nodes=1, routes_evaluated=1)

    def solve(self, points: Sequence[Point]) -> Route | None:
        return self.search(points).route


def _construct_from(
    points: Sequence[Point],
    distances: Sequence[Sequence[float]],
    first: int,
    tolerance: float,
    budget: SearchBudget,
) -> Optional[list[int]]:
    used = [False] * len(points)
    used[first] = True
    # the second stop is unconstrained: there is no turn yet
    second = _nearest(distances, used, first)
    return extend_greedily(points, distances, [first, second], tolerance, budget)


class MultiStartNearestNeighborSolver:
    """Greedy pass from every start point, keeping the shortest success."""

    name = "multi_start"
    exact = False

    def __init__(self, *, tolerance: float = 0.0) -> None:
        self.tolerance = tolerance

    def search(self, points: Sequence[Point], budget: SearchBudget | None = None) -> SearchOutcome:
        points = prepare(points)
        distances = distance_matrix(points)
        if len(points) <= 2:
            return trivial_outcome(points, distances)
        budget = budget or UNLIMITED

        incumbent = Incumbent()
        completed = 0
        for first in range(len(points)):
            order = _construct_from(points, distances, first, self.tolerance, budget)
            if order is None:
                continue
            completed += 1
            incumbent.offer(order, order_length(distances, order))

        logger.debug("multi_start: %d of %d starts completed", completed, len(points))
        return incumbent.outcome(points, nodes=len(points), routes_evaluated=completed)

    def solve(self, points: Sequence[Point]) -> Route | None:
        return self.search(points).route


class PairedNearestNeighborSolver:
    """Greedy pass from every ordered pair of distinct start points."""

    name = "paired"
    exact = False

    def __init__(self, *, tolerance: float = 0.0) -> None:
        self.tolerance = tolerance

    def search(self, points: Sequence[Point], budget: SearchBudget | None = None) -> SearchOutcome:
        points = prepare(points)
        distances = distance_matrix(points)
        size = len(points)
        if size <= 2:
            return trivial_outcome(points, distances)
        budget = budget or UNLIMITED

        incumbent = Incumbent()
        seeds = 0
        completed = 0
        for first in range(size):
            for second in range(size):
                if second == first:
                    continue
                seeds += 1
                order = extend_greedily(points, distances, (first, second), self.tolerance, budget)
                if order is None:
                    continue
                completed += 1
                incumbent.offer(order, order_length(distances, order))

        logger.debug("paired: %d of %d seed pairs completed", completed, seeds)
        return incumbent.outcome(points, nodes=seeds, routes_evaluated=completed)

    def solve(self, points: Sequence[Point]) -> Route | None:
        return self.search(points).route


class PrefixNearestNeighborSolver:
    """Greedy completion of every turn-valid ordered prefix of ``prefix_size`` points.

    Prefixes are built one point at a time and dropped as soon as their newest
    triple breaks the turn constraint, so invalid prefixes are never extended.
    """

    name = "prefix"
    exact = False

    def __init__(self, prefix_size: int = 3, *, tolerance: float = 0.0) -> None:
        if prefix_size < 2:
            raise InvalidParameterError(f"prefix_size must be >= 2; got {prefix_size}.")
        self.prefix_size = prefix_size
        self.tolerance = tolerance

    def search(self, points: Sequence[Point], budget: SearchBudget | None = None) -> SearchOutcome:
        points = prepare(points)
        size = len(points)
        if self.prefix_size > size:
            raise InvalidParameterError(
                f"prefix_size {self.prefix_size} exceeds the instance size {size}."
            )
        distances = distance_matrix(points)
        if size <= 2:
            return trivial_outcome(points, distances)
        budget = budget or UNLIMITED
        tolerance = self.tolerance
        prefix_size = self.prefix_size

        incumbent = Incumbent()
        used = [False] * size
        prefix: list[int] = []
        prefixes = 0
        completed = 0

        def enumerate_prefixes() -> None:
            nonlocal prefixes, completed
            budget.tick()
            if len(prefix) == prefix_size:
                prefixes += 1
                order = extend_greedily(points, distances, prefix, tolerance, budget)
                if order is not None:
                    completed += 1
                    incumbent.offer(order, order_length(distances, order))
                return
            for candidate in range(size):
                if used[candidate]:
                    continue
                if len(prefix) >= 2 and not turn_valid(
                    points[prefix[-2]], points[prefix[-1]], points[candidate], tolerance
                ):
                    continue
                used[candidate] = True
                prefix.append(candidate)
                enumerate_prefixes()
                prefix.pop()
                used[candidate] = False

        enumerate_prefixes()
        logger.debug(
            "prefix: %d valid prefixes of size %d, %d completed", prefixes, prefix_size, completed
        )
        return incumbent.outcome(points, nodes=prefixes, routes_evaluated=completed)

    def solve(self, points: Sequence[Point]) -> Route | None:
        return self.search(points).route
