"""Routing orchestration service."""

from __future__ import annotations

import logging
import time
from collections import Counter
from typing import Sequence

from ...config import Settings, settings
from ...errors import DimensionMismatchError, RouteValidationError
from ...models.domain import Point
from ...schemas.routing import RouteRequest, RouteResponse
from ..geometry import common_dimension, route_valid
from .dispatcher import get_solver, select_strategy
from .models import Route, SearchOutcome
from .search import SearchBudget

logger = logging.getLogger(__name__)


def _build_points(payload: RouteRequest) -> list[Point]:
    points = [Point(tuple(row)) for row in payload.points]
    if payload.dimension is not None:
        for point in points:
            if point.dimension != payload.dimension:
                raise DimensionMismatchError(payload.dimension, point.dimension)
    common_dimension(points)
    return points


def _verify(points: Sequence[Point], route: Route, tolerance: float) -> None:
    if Counter(route) != Counter(points):
        raise RouteValidationError("Solver returned a route that is not a permutation of the input points.")
    if not route_valid(route, tolerance):
        raise RouteValidationError("Solver returned a route that breaks the turning-angle constraint.")


def solve_route(payload: RouteRequest, config: Settings | None = None) -> RouteResponse:
    config = config or settings
    points = _build_points(payload)
    dimension = common_dimension(points)

    method = payload.strategy or select_strategy(len(points), config)
    tolerance = payload.tolerance if payload.tolerance is not None else config.turn_tolerance
    prefix_size = payload.prefix_size if payload.prefix_size is not None else config.prefix_size
    time_limit = payload.time_limit_seconds if payload.time_limit_seconds is not None else config.time_limit_seconds
    solver = get_solver(method, tolerance=tolerance, prefix_size=prefix_size)

    logger.info(f"Solving {len(points)} points (dimension {dimension}) with strategy '{solver.name}'")
    started = time.perf_counter()
    outcome: SearchOutcome = solver.search(points, SearchBudget(time_limit))
    elapsed_ms = (time.perf_counter() - started) * 1000.0

    metadata = {
        "nodes": outcome.nodes,
        "routes_evaluated": outcome.routes_evaluated,
        "tolerance": tolerance,
    }
    if solver.name == "prefix":
        metadata["prefix_size"] = prefix_size

    if outcome.route is None:
        logger.warning(f"No feasible route for {len(points)} points with '{solver.name}' ({elapsed_ms:.1f} ms)")
        return RouteResponse(
            status="infeasible",
            strategy=solver.name,
            exact=solver.exact,
            point_count=len(points),
            dimension=dimension,
            elapsed_ms=elapsed_ms,
            metadata=metadata,
        )

    _verify(points, outcome.route, tolerance)
    logger.info(f"Found route of length {outcome.length:.6f} with '{solver.name}' in {elapsed_ms:.1f} ms")
    return RouteResponse(
        status="ok",
        strategy=solver.name,
        exact=solver.exact,
        point_count=len(points),
        dimension=dimension,
        route=[list(point.coordinates) for point in outcome.route],
        length=outcome.length,
        elapsed_ms=elapsed_ms,
        metadata=metadata,
    )
