"""Points in a bounded n-dimensional input domain."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Sequence

Bound = Sequence[Sequence[int]]


@dataclass(frozen=True)
class Point:
    """An immutable point with floating-point coordinates."""

    coordinates: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", tuple(float(c) for c in self.coordinates))

    @property
    def n(self) -> int:
        """Number of dimensions."""
        return len(self.coordinates)

    @classmethod
    def random(cls, bound: Bound, rng: random.Random | None = None) -> Point:
        """Draw a point uniformly from the box given by ``[low, high]`` pairs."""
        rng = rng if rng is not None else random.Random()
        return cls(tuple(low + (high - low) * rng.random() for low, high in bound))

    def distance(self, other: Point) -> float:
        """Euclidean distance to ``other``."""
        return math.dist(self.coordinates, other.coordinates)