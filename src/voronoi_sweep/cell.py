from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple, Union

from shapely.geometry import Polygon

from .exceptions import BoundaryError
from .geometry import on_segment, orientation, signed_area
from .point import Point

PointLike = Union[Point, Sequence[float]]


def as_point(p: PointLike) -> Point:
    if isinstance(p, Point):
        return Point(float(p.x), float(p.y))
    x, y = p
    return Point(float(x), float(y))


class Cell:
    """
    Simple polygon bounding a Voronoi diagram.

    The vertices are kept in the order given; both windings are accepted.
    Containment and clipping do not assume convexity.
    """

    def __init__(self, boundary: Iterable[PointLike]):
        vertices = tuple(as_point(p) for p in boundary)
        if len(vertices) < 3:
            raise BoundaryError(f"A boundary needs at least 3 vertices, got {len(vertices)}")
        if not all(p.is_finite() for p in vertices):
            raise BoundaryError("Boundary vertices must have finite coordinates")

        poly = Polygon([p.as_tuple() for p in vertices])
        if poly.is_empty or not poly.is_valid:
            raise BoundaryError("Boundary must be a valid, non-empty simple polygon")

        self._vertices = vertices

    @classmethod
    def square(cls, boxsize: float) -> "Cell":
        """
        Axis-aligned square starting at the origin and extending `boxsize`
        units in the positive x and y directions.
        """
        s = float(boxsize)
        return cls([(0.0, 0.0), (s, 0.0), (s, s), (0.0, s)])

    @property
    def vertices(self) -> Tuple[Point, ...]:
        return self._vertices

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._vertices)

    def __repr__(self):
        return f"Cell({[p.as_tuple() for p in self._vertices]})"

    def edges(self) -> List[Tuple[Point, Point]]:
        V = self._vertices
        return [(V[i], V[(i + 1) % len(V)]) for i in range(len(V))]

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        xs = [p.x for p in self._vertices]
        ys = [p.y for p in self._vertices]
        return min(xs), min(ys), max(xs), max(ys)

    def on_boundary(self, point: PointLike) -> bool:
        p = as_point(point)
        return p.is_finite() and any(on_segment(p, a, b) for a, b in self.edges())

    def contains(self, point: PointLike) -> bool:
        """
        Point-in-polygon by ray casting towards +x.

        Points on an edge or vertex are inside. Each edge counts as holding
        its lower end and not its upper end, so a ray through a vertex is
        counted once. Non-finite points are never contained.
        """
        p = as_point(point)
        if not p.is_finite():
            return False

        inside = False
        for start, finish in self.edges():
            if on_segment(p, start, finish):
                return True
            if (start.y > p.y) != (finish.y > p.y):
                # crossing lies right of p when p is left of an upward edge
                # or right of a downward one
                upward = finish.y > start.y
                if (orientation(start, finish, p) > 0) == upward:
                    inside = not inside
        return inside

    def area(self) -> float:
        return abs(signed_area(self._vertices))

    def is_counter_clockwise(self) -> bool:
        return signed_area(self._vertices) > 0

    def as_polygon(self) -> Polygon:
        return Polygon([p.as_tuple() for p in self._vertices])
