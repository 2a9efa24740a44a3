from typing import List, Optional

import numpy as np

from .cell import Cell
from .point import Point


def sample_points_in_cell(
    cell: Cell,
    *,
    target_area: Optional[float] = None,
    n_points: Optional[int] = None,
    rng: np.random.Generator,
) -> List[Point]:
    """
    Rejection-sample points uniformly inside the cell, using its bounding box
    as proposal. Deterministic given the rng seed.
    """
    if n_points is None:
        if target_area is None:
            raise ValueError("Either target_area or n_points required")
        n_points = max(1, int(cell.area() / target_area))
    if n_points < 0:
        raise ValueError("n_points must be >= 0")

    minx, miny, maxx, maxy = cell.bounds

    points = []
    while len(points) < n_points:
        p = Point(
            float(rng.uniform(minx, maxx)),
            float(rng.uniform(miny, maxy)),
        )
        if cell.contains(p):
            points.append(p)

    return points


def random_points(count: int, boxsize: float, rng: np.random.Generator) -> List[Point]:
    """`count` uniform points in the square [0, boxsize]^2."""
    return [Point.random(rng) * boxsize for _ in range(count)]
