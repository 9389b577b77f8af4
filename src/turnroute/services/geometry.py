"""Euclidean helper functions and the turning-angle predicate."""

from __future__ import annotations

import math
from typing import Sequence

from ..errors import DimensionMismatchError
from ..models.domain import Point, Vector


def _check_dimensions(a: Point, b: Point) -> None:
    if a.dimension != b.dimension:
        raise DimensionMismatchError(a.dimension, b.dimension)


def vector_between(a: Point, b: Point) -> Vector:
    """Displacement from ``a`` to ``b``."""

    _check_dimensions(a, b)
    return Vector(tuple(to - frm for frm, to in zip(a.coordinates, b.coordinates)))


def dot(v1: Vector, v2: Vector) -> float:
    return v1.dot(v2)


def length(vector: Vector) -> float:
    return vector.length()


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points of the same dimension."""

    _check_dimensions(a, b)
    total = 0.0
    for x, y in zip(a.coordinates, b.coordinates):
        delta = y - x
        total += delta * delta
    return math.sqrt(total)


def route_length(route: Sequence[Point]) -> float:
    """Sum of the leg lengths between consecutive points."""

    total = 0.0
    for i in range(len(route) - 1):
        total += distance(route[i], route[i + 1])
    return total


def turn_valid(p: Point, q: Point, r: Point, tolerance: float = 0.0) -> bool:
    """Return True if the route p -> q -> r turns through at least 90 degrees at q.

    Evaluates ``dot(q->p, q->r) <= tolerance`` in a single pass over the
    coordinates. With the default tolerance of 0.0 an exact right angle is
    accepted.
    """

    if p.dimension != q.dimension:
        raise DimensionMismatchError(q.dimension, p.dimension)
    if r.dimension != q.dimension:
        raise DimensionMismatchError(q.dimension, r.dimension)
    product = 0.0
    for pc, qc, rc in zip(p.coordinates, q.coordinates, r.coordinates):
        product += (pc - qc) * (rc - qc)
    return product <= tolerance


def route_valid(route: Sequence[Point], tolerance: float = 0.0) -> bool:
    """Return True if every consecutive triple of ``route`` satisfies the turn constraint."""

    if len(route) < 3:
        return True
    for i in range(len(route) - 2):
        if not turn_valid(route[i], route[i + 1], route[i + 2], tolerance):
            return False
    return True


def distance_matrix(points: Sequence[Point]) -> list[list[float]]:
    """Pairwise distances, indexed by position in ``points``."""

    size = len(points)
    matrix = [[0.0] * size for _ in range(size)]
    for i in range(size):
        for j in range(i + 1, size):
            matrix[i][j] = matrix[j][i] = distance(points[i], points[j])
    return matrix


def common_dimension(points: Sequence[Point]) -> int | None:
    """Dimension shared by all points, or None for an empty sequence.

    Raises DimensionMismatchError on the first point that disagrees with the
    first one.
    """

    if not points:
        return None
    expected = points[0].dimension
    for point in points[1:]:
        if point.dimension != expected:
            raise DimensionMismatchError(expected, point.dimension)
    return expected
