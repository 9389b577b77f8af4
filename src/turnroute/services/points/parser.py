"""Read point sets from whitespace-separated coordinate text."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import numpy as np

from ...errors import DimensionMismatchError, PointParseError
from ...models.domain import Point

logger = logging.getLogger(__name__)


def parse_points(lines: Iterable[str] | str, dimension: Optional[int] = None) -> list[Point]:
    """Parse one point per non-blank line.

    Coordinates are separated by whitespace; ``#`` starts a comment. When
    ``dimension`` is given every row must have exactly that many coordinates.
    """

    if isinstance(lines, str):
        lines = lines.splitlines()
    rows = [line for line in lines if line.strip() and not line.lstrip().startswith("#")]
    if not rows:
        return []

    try:
        matrix = np.loadtxt(rows, dtype=np.float64, ndmin=2)
    except ValueError as exc:
        raise PointParseError(f"Could not read point coordinates: {exc}") from exc
    if not np.isfinite(matrix).all():
        bad_row = int(np.flatnonzero(~np.isfinite(matrix).all(axis=1))[0])
        raise PointParseError(f"Point {bad_row + 1} has a non-finite coordinate: {rows[bad_row].strip()}")

    if dimension is not None and matrix.shape[1] != dimension:
        raise DimensionMismatchError(dimension, int(matrix.shape[1]))
    return [Point(tuple(float(value) for value in row)) for row in matrix]


def load_points(path: Path | str, dimension: Optional[int] = None) -> list[Point]:
    path = Path(path).expanduser()
    if not path.is_file():
        raise FileNotFoundError(f"Point file '{path}' does not exist.")
    with path.open("r", encoding="utf-8") as handle:
        points = parse_points(handle.read(), dimension)
    logger.info(f"Loaded {len(points)} points from {path}")
    return points
