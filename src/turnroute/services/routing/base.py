"""Contract shared by every route search strategy."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ...models.domain import Point
from .models import Route, SearchOutcome
from .search import SearchBudget


@runtime_checkable
class RouteSolver(Protocol):
    """Find the shortest feasible ordering of a point set, or None when there is none."""

    name: str
    exact: bool

    def search(self, points: Sequence[Point], budget: SearchBudget | None = None) -> SearchOutcome:
        ...

    def solve(self, points: Sequence[Point]) -> Route | None:
        ...
