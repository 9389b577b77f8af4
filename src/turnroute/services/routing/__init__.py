"""Route search strategies."""

from .dispatcher import get_solver, select_solver, select_strategy
from .exact import BacktrackingSolver, FixedEndpointsSolver, HeapPermutationSolver, PrunedBacktrackingSolver
from .greedy import (
    MultiStartNearestNeighborSolver,
    NearestNeighborSolver,
    PairedNearestNeighborSolver,
    PrefixNearestNeighborSolver,
)

__all__ = [
    "get_solver",
    "select_solver",
    "select_strategy",
    "HeapPermutationSolver",
    "FixedEndpointsSolver",
    "BacktrackingSolver",
    "PrunedBacktrackingSolver",
    "NearestNeighborSolver",
    "MultiStartNearestNeighborSolver",
    "PairedNearestNeighborSolver",
    "PrefixNearestNeighborSolver",
]
