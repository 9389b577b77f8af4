"""Factory for route search strategies and the size-based selection policy."""

from __future__ import annotations

from typing import Any

from ...config import EXACT_STRATEGIES, GREEDY_STRATEGIES, Settings, settings
from .base import RouteSolver
from .exact import BacktrackingSolver, FixedEndpointsSolver, HeapPermutationSolver, PrunedBacktrackingSolver
from .greedy import (
    MultiStartNearestNeighborSolver,
    NearestNeighborSolver,
    PairedNearestNeighborSolver,
    PrefixNearestNeighborSolver,
)

STRATEGY_DESCRIPTIONS: dict[str, str] = {
    "heap": "all permutations via Heap's algorithm",
    "fixed_endpoints": "Heap's algorithm per start/end pair, reversals skipped",
    "backtracking": "recursive enumeration, leaves checked only",
    "pruned": "branch-and-bound backtracking with turn and length pruning",
    "nearest": "nearest neighbour from the first point",
    "multi_start": "nearest neighbour from every start point",
    "paired": "nearest neighbour from every ordered start pair",
    "prefix": "nearest neighbour from every turn-valid start prefix",
}


def get_solver(method: str, *, tolerance: float = 0.0, prefix_size: int | None = None) -> RouteSolver:
    match method:
        case "heap":
            return HeapPermutationSolver(tolerance=tolerance)
        case "fixed_endpoints":
            return FixedEndpointsSolver(tolerance=tolerance)
        case "backtracking":
            return BacktrackingSolver(tolerance=tolerance)
        case "pruned":
            return PrunedBacktrackingSolver(tolerance=tolerance)
        case "nearest":
            return NearestNeighborSolver(tolerance=tolerance)
        case "multi_start":
            return MultiStartNearestNeighborSolver(tolerance=tolerance)
        case "paired":
            return PairedNearestNeighborSolver(tolerance=tolerance)
        case "prefix":
            size = prefix_size if prefix_size is not None else settings.prefix_size
            return PrefixNearestNeighborSolver(size, tolerance=tolerance)
        case _:
            raise ValueError(f"Unknown routing strategy '{method}'.")


def select_strategy(size: int, config: Settings | None = None) -> str:
    """Exact search up to the configured size threshold, greedy beyond it."""

    config = config or settings
    if size <= config.exact_max_points:
        return config.exact_strategy
    return config.greedy_strategy


def select_solver(size: int, config: Settings | None = None, **kwargs: Any) -> RouteSolver:
    config = config or settings
    kwargs.setdefault("tolerance", config.turn_tolerance)
    kwargs.setdefault("prefix_size", config.prefix_size)
    return get_solver(select_strategy(size, config), **kwargs)


def strategy_kind(method: str) -> str:
    if method in EXACT_STRATEGIES:
        return "exact"
    if method in GREEDY_STRATEGIES:
        return "greedy"
    raise ValueError(f"Unknown routing strategy '{method}'.")
