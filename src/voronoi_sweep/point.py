from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np


def _total_key(value: float) -> Tuple[int, float]:
    # NaN sorts after every number (including inf) and equals only NaN
    if math.isnan(value):
        return 1, 0.0
    return 0, value


@dataclass(frozen=True, eq=False)
class Point:
    """
    Immutable 2D point.

    Equality, hashing and ordering use a total key (x first, then y) so points
    can be used as dict keys and sorted even when a coordinate is NaN.
    """
    x: float
    y: float

    @classmethod
    def random(cls, rng: np.random.Generator) -> "Point":
        """Uniform point in the unit square."""
        x, y = rng.random(2)
        return cls(float(x), float(y))

    def key(self) -> Tuple[Tuple[int, float], Tuple[int, float]]:
        return _total_key(self.x), _total_key(self.y)

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __lt__(self, other: "Point") -> bool:
        return self.key() < other.key()

    def __le__(self, other: "Point") -> bool:
        return self.key() <= other.key()

    def __gt__(self, other: "Point") -> bool:
        return self.key() > other.key()

    def __ge__(self, other: "Point") -> bool:
        return self.key() >= other.key()

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scale: float) -> "Point":
        return Point(self.x * scale, self.y * scale)

    __rmul__ = __mul__

    def __truediv__(self, scale: float) -> "Point":
        return Point(self.x / scale, self.y / scale)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def dot(self, other: "Point") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Point") -> float:
        return self.x * other.y - self.y * other.x

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return self.x, self.y


@dataclass(frozen=True, eq=False)
class Site(Point):
    """
    An input point tagged with its position in the input sequence.
    The index names the DCEL face the site generates.
    """
    index: int = -1

    def point(self) -> Point:
        return Point(self.x, self.y)

    def __repr__(self):
        return f"Site(index={self.index}, x={self.x!r}, y={self.y!r})"
