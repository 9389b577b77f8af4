"""Exact route searches over the permutation space.

All four strategies return a shortest feasible route or None. They differ
only in how much of the permutation space they visit:

* ``HeapPermutationSolver`` enumerates all n! orders iteratively.
* ``FixedEndpointsSolver`` pins a start/end pair and skips reversed routes.
* ``BacktrackingSolver`` builds orders recursively and tests only leaves.
* ``PrunedBacktrackingSolver`` rejects bad turns while building and abandons
  partial routes that are already longer than the incumbent.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import Point
from ..geometry import distance_matrix, turn_valid
from .models import Route, SearchOutcome
from .search import (
    UNLIMITED,
    Incumbent,
    SearchBudget,
    heap_permutations,
    order_length,
    order_valid,
    prepare,
    trivial_outcome,
)

logger = logging.getLogger(__name__)


class HeapPermutationSolver:
    """Brute force over every permutation generated by Heap's algorithm."""

    name = "heap"
    exact = True

    def __init__(self, *, tolerance: float = 0.0) -> None:
        self.tolerance = tolerance

    def search(self, points: Sequence[Point], budget: SearchBudget | None = None) -> SearchOutcome:
        points = prepare(points)
        distances = distance_matrix(points)
        if len(points) <= 2:
            return trivial_outcome(points, distances)
        budget = budget or UNLIMITED

        order = list(range(len(points)))
        incumbent = Incumbent()
        evaluated = 0

        def check() -> None:
            nonlocal evaluated
            evaluated += 1
            budget.tick()
            if order_valid(points, order, self.tolerance):
                incumbent.offer(order, order_length(distances, order))

        check()
        for _ in heap_permutations(order):
            check()

        logger.debug("heap: evaluated %d permutations of %d points", evaluated, len(points))
        return incumbent.outcome(points, nodes=evaluated, routes_evaluated=evaluated)

    def solve(self, points: Sequence[Point]) -> Route | None:
        return self.search(points).route


class FixedEndpointsSolver:
    """Heap's enumeration of the interior positions for every start/end pair.

    A route and its reversal share length and feasibility, so only pairs with
    start index below end index are tried.
    """

    name = "fixed_endpoints"
    exact = True

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
        order: list[int] = []
        evaluated = 0
        pairs = 0

        def check() -> None:
            nonlocal evaluated
            evaluated += 1
            budget.tick()
            if order_valid(points, order, self.tolerance):
                incumbent.offer(order, order_length(distances, order))

        for first in range(size):
            for last in range(first + 1, size):
                pairs += 1
                order[:] = [first] + [k for k in range(size) if k != first and k != last] + [last]
                check()
                for _ in heap_permutations(order, 1, size - 1):
                    check()

        logger.debug("fixed_endpoints: %d endpoint pairs, %d orders evaluated", pairs, evaluated)
        return incumbent.outcome(points, nodes=pairs, routes_evaluated=evaluated)

    def solve(self, points: Sequence[Point]) -> Route | None:
        return self.search(points).route


class BacktrackingSolver:
    """Recursive choose/explore/un-choose enumeration without pruning."""

    name = "backtracking"
    exact = True

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
        used = [False] * size
        order: list[int] = []
        calls = 0
        evaluated = 0

        def explore() -> None:
            nonlocal calls, evaluated
            calls += 1
            budget.tick()
            if len(order) == size:
                evaluated += 1
                if order_valid(points, order, self.tolerance):
                    incumbent.offer(order, order_length(distances, order))
                return
            for candidate in range(size):
                if used[candidate]:
                    continue
                used[candidate] = True
                order.append(candidate)
                explore()
                order.pop()
                used[candidate] = False

        explore()
        return incumbent.outcome(points, nodes=calls, routes_evaluated=evaluated)

    def solve(self, points: Sequence[Point]) -> Route | None:
        return self.search(points).route


class PrunedBacktrackingSolver:
    """Branch-and-bound backtracking; the default exact strategy."""

    name = "pruned"
    exact = True

    def __init__(self, *, tolerance: float = 0.0) -> None:
        self.tolerance = tolerance

    def search(self, points: Sequence[Point], budget: SearchBudget | None = None) -> SearchOutcome:
        points = prepare(points)
        distances = distance_matrix(points)
        size = len(points)
        if size <= 2:
            return trivial_outcome(points, distances)
        budget = budget or UNLIMITED
        tolerance = self.tolerance

        incumbent = Incumbent()
        used = [False] * size
        order: list[int] = []
        calls = 0
        evaluated = 0

        def explore(partial_length: float) -> None:
            nonlocal calls, evaluated
            calls += 1
            budget.tick()
            if incumbent.order is not None and partial_length > incumbent.length:
                return
            depth = len(order)
            if depth == size:
                # every triple was checked on the way down
                evaluated += 1
                incumbent.offer(order, partial_length)
                return
            for candidate in range(size):
                if used[candidate]:
                    continue
                if depth >= 2 and not turn_valid(
                    points[order[-2]], points[order[-1]], points[candidate], tolerance
                ):
                    continue
                step = distances[order[-1]][candidate] if depth else 0.0
                used[candidate] = True
                order.append(candidate)
                explore(partial_length + step)
                order.pop()
                used[candidate] = False

        explore(0.0)
        logger.debug("pruned: %d recursive calls, %d complete routes", calls, evaluated)
        return incumbent.outcome(points, nodes=calls, routes_evaluated=evaluated)

    def solve(self, points: Sequence[Point]) -> Route | None:
        return self.search(points).route
