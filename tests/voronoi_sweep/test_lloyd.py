from itertools import combinations

import numpy as np
import pytest

from src.voronoi_sweep.cell import Cell
from src.voronoi_sweep.lloyd import lloyd_relaxation, polygon_centroid
from src.voronoi_sweep.point import Point
from src.voronoi_sweep.sampling import sample_points_in_cell

UNIT = Cell.square(1.0)


def _min_distance(points):
    return min((a - b).norm() for a, b in combinations(points, 2))


def test_polygon_centroid_is_vertex_mean():
    square = [Point(0.0, 0.0), Point(2.0, 0.0), Point(2.0, 2.0), Point(0.0, 2.0)]
    assert polygon_centroid(square) == Point(1.0, 1.0)

    with pytest.raises(ValueError):
        polygon_centroid([])


def test_corner_points_move_to_quadrant_centres():
    corners = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]
    relaxed = lloyd_relaxation(corners, UNIT)

    expected = [(0.25, 0.25), (0.75, 0.25), (0.75, 0.75), (0.25, 0.75)]
    assert np.allclose([p.as_tuple() for p in relaxed], expected)

    # quadrant centres are a fixed point
    again = lloyd_relaxation(relaxed, UNIT)
    assert np.allclose([p.as_tuple() for p in again], expected)


def test_relaxation_spreads_points_out():
    rng = np.random.default_rng(11)
    points = sample_points_in_cell(UNIT, n_points=20, rng=rng)
    start = _min_distance(points)

    for _ in range(10):
        points = lloyd_relaxation(points, UNIT)

    assert len(points) == 20
    assert _min_distance(points) > start
    assert all(UNIT.contains(p) for p in points)


def test_duplicates_collapse():
    relaxed = lloyd_relaxation([(0.5, 0.5), (0.5, 0.5)], UNIT)
    assert relaxed == [Point(0.5, 0.5)]
