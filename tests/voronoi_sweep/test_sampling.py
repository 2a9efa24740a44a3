import numpy as np
import pytest
from shapely.geometry import Point as ShPoint

from src.voronoi_sweep.cell import Cell
from src.voronoi_sweep.sampling import random_points, sample_points_in_cell


def test_sampling_points_inside_cell():
    rng = np.random.default_rng(123)
    cell = Cell.square(10.0)
    pts = sample_points_in_cell(cell, n_points=100, rng=rng)

    poly = cell.as_polygon()
    assert len(pts) == 100
    for p in pts:
        assert poly.covers(ShPoint(p.x, p.y))


def test_sampling_non_convex_cell():
    rng = np.random.default_rng(4)
    cell = Cell([(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)])
    pts = sample_points_in_cell(cell, n_points=200, rng=rng)

    assert not any(p.x > 1.0 and p.y > 1.0 for p in pts)


def test_sampling_count_from_target_area():
    rng = np.random.default_rng(0)
    cell = Cell.square(10.0)  # area=100
    pts = sample_points_in_cell(cell, target_area=25.0, rng=rng)
    # int(100/25)=4
    assert len(pts) == 4


def test_sampling_needs_a_count():
    rng = np.random.default_rng(0)
    with pytest.raises(ValueError):
        sample_points_in_cell(Cell.square(1.0), rng=rng)
    with pytest.raises(ValueError):
        sample_points_in_cell(Cell.square(1.0), n_points=-1, rng=rng)


def test_sampling_is_deterministic_with_seed():
    cell = Cell.square(10.0)

    a = sample_points_in_cell(cell, n_points=20, rng=np.random.default_rng(999))
    b = sample_points_in_cell(cell, n_points=20, rng=np.random.default_rng(999))

    assert a == b


def test_random_points_in_box():
    pts = random_points(50, 800.0, np.random.default_rng(0))
    arr = np.array([p.as_tuple() for p in pts])

    assert arr.shape == (50, 2)
    assert arr.min() >= 0.0
    assert arr.max() < 800.0
