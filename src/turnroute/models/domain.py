"""Domain models for points and displacement vectors."""

from __future__ import annotations

import math
from dataclasses import dataclass
from ..errors import DimensionMismatchError


@dataclass(frozen=True, slots=True)
class Point:
    """An immutable location in n-dimensional space."""

    coordinates: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", tuple(float(value) for value in self.coordinates))

    @classmethod
    def of(cls, *coordinates: float) -> Point:
        return cls(coordinates)

    @property
    def dimension(self) -> int:
        return len(self.coordinates)

    def __str__(self) -> str:
        return " ".join(repr(value) for value in self.coordinates)


@dataclass(frozen=True, slots=True)
class Vector:
    """An immutable displacement between two points."""

    components: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "components", tuple(float(value) for value in self.components))

    @property
    def dimension(self) -> int:
        return len(self.components)

    def dot(self, other: Vector) -> float:
        if other.dimension != self.dimension:
            raise DimensionMismatchError(self.dimension, other.dimension)
        product = 0.0
        for a, b in zip(self.components, other.components):
            product += a * b
        return product

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def cos(self, other: Vector) -> float:
        """Cosine of the angle between this vector and ``other``."""
        denominator = self.length() * other.length()
        if denominator == 0.0:
            raise ValueError("The angle to a zero-length vector is undefined.")
        return self.dot(other) / denominator

    def __str__(self) -> str:
        return ", ".join(repr(value) for value in self.components)
