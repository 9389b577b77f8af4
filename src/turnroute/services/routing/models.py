"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ...models.domain import Point

Route = Tuple[Point, ...]


@dataclass(slots=True)
class SearchOutcome:
    route: Optional[Route]
    length: Optional[float]
    nodes: int = 0
    routes_evaluated: int = 0

    @property
    def feasible(self) -> bool:
        return self.route is not None
