from typing import Iterable, List, Sequence

import numpy as np

from .cell import Cell, PointLike
from .dcel import make_polygons
from .point import Point
from .voronoi import voronoi


def polygon_centroid(points: Sequence[Point]) -> Point:
    """Mean of the polygon's vertices (not the area centroid)."""
    if len(points) == 0:
        raise ValueError("Cannot take the centroid of an empty polygon")
    P = np.array([p.as_tuple() for p in points], dtype=np.float64)
    cx, cy = P.mean(axis=0)
    return Point(float(cx), float(cy))


def lloyd_relaxation(points: Iterable[PointLike], boundary: Cell, *, weld_decimals: int = 9) -> List[Point]:
    """
    One Lloyd iteration: every point moves to the centroid of its Voronoi cell.

    Duplicate points collapse into one, so the result has one point per face.
    """
    diagram = voronoi(points, boundary, weld_decimals=weld_decimals)
    return [polygon_centroid(poly) for poly in make_polygons(diagram)]
