import math
from typing import Optional, Sequence, Tuple

import numpy as np

from .point import Point

# Absolute tolerance for parameters on a segment and for event scheduling
EPSILON = 1e-9


def sign(value: float) -> int:
    return (value > 0) - (value < 0)


def orientation(a: Point, b: Point, c: Point) -> int:
    """
    Three-way orientation of the triangle a, b, c:
    1 counter-clockwise, -1 clockwise, 0 collinear (or not decidable).
    """
    return sign((b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x))


def on_segment(point: Point, start: Point, finish: Point) -> bool:
    """Exact test for point lying on the closed segment start-finish."""
    if orientation(start, finish, point) != 0:
        return False
    return (min(start.x, finish.x) <= point.x <= max(start.x, finish.x)
            and min(start.y, finish.y) <= point.y <= max(start.y, finish.y))


def circumcircle(a: Point, b: Point, c: Point) -> Optional[Tuple[Point, float]]:
    """
    Centre and radius of the circle through a, b, c.
    Returns None for collinear triples and for non-finite results.
    """
    A = b.x - a.x
    B = b.y - a.y
    C = c.x - a.x
    D = c.y - a.y
    E = A * (a.x + b.x) + B * (a.y + b.y)
    F = C * (a.x + c.x) + D * (a.y + c.y)
    G = 2.0 * (A * (c.y - b.y) - B * (c.x - b.x))
    if G == 0:
        return None

    center = Point((D * E - B * F) / G, (A * F - C * E) / G)
    radius = math.hypot(a.x - center.x, a.y - center.y)
    if not (center.is_finite() and math.isfinite(radius)):
        return None
    return center, radius


def parabola_y(site: Point, x: float, sweep_y: float) -> float:
    """Height at x of the parabola equidistant from site and the sweep line."""
    return ((x - site.x) ** 2 + site.y ** 2 - sweep_y ** 2) / (2.0 * (site.y - sweep_y))


def breakpoint_x(left: Point, right: Point, sweep_y: float) -> float:
    """
    x-position where the arc of `left` meets the arc of `right` (left arc on
    the left) for a sweep line at sweep_y below both sites.

    Sites at the same height meet on their perpendicular bisector; a site
    lying on the sweep line is a vertical ray at its own x.
    """
    if left.y == right.y:
        return 0.5 * (left.x + right.x)
    if left.y == sweep_y:
        return left.x
    if right.y == sweep_y:
        return right.x

    dl = 2.0 * (left.y - sweep_y)
    dr = 2.0 * (right.y - sweep_y)
    a = dr - dl
    b = -2.0 * (dr * left.x - dl * right.x)
    c = (dr * (left.x ** 2 + left.y ** 2 - sweep_y ** 2)
         - dl * (right.x ** 2 + right.y ** 2 - sweep_y ** 2))
    disc = max(b * b - 4.0 * a * c, 0.0)
    # the root where the left parabola stops being the lower envelope
    return (-b + math.sqrt(disc)) / (2.0 * a)


def bisector_direction(site: Point, other: Point) -> Point:
    """
    Direction along the bisector of site/other that keeps `site` on the left,
    i.e. the direction of a counter-clockwise half-edge of site's face.
    """
    return Point(site.y - other.y, other.x - site.x)


def line_segment_intersection(origin: Point, direction: Point,
                              start: Point, finish: Point) -> Optional[float]:
    """
    Parameter t at which origin + t * direction crosses the segment
    start-finish, or None when parallel or missing the segment.
    """
    edge = finish - start
    denom = direction.cross(edge)
    if denom == 0:
        return None
    offset = start - origin
    t = offset.cross(edge) / denom
    s = offset.cross(direction) / denom
    if -EPSILON <= s <= 1.0 + EPSILON:
        return t
    return None


def signed_area(points: Sequence[Point]) -> float:
    """Shoelace area, positive for counter-clockwise rings."""
    if len(points) < 3:
        return 0.0
    P = np.array([p.as_tuple() for p in points], dtype=np.float64)
    x, y = P[:, 0], P[:, 1]
    return 0.5 * float(x @ np.roll(y, -1) - np.roll(x, -1) @ y)
