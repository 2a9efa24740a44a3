import math

import numpy as np

from src.voronoi_sweep.point import Point, Site


def test_arithmetic_and_scaling():
    a = Point(1.0, 2.0)
    b = Point(0.5, -1.0)

    assert a + b == Point(1.5, 1.0)
    assert a - b == Point(0.5, 3.0)
    assert a * 2.0 == Point(2.0, 4.0)
    assert 2.0 * a == Point(2.0, 4.0)
    assert a / 2.0 == Point(0.5, 1.0)
    assert a.dot(b) == 0.5 - 2.0
    assert a.cross(b) == 1.0 * -1.0 - 2.0 * 0.5
    assert np.isclose(Point(3.0, 4.0).norm(), 5.0)


def test_ordering_is_total_with_nan():
    nan = Point(math.nan, 0.0)
    pts = [Point(1.0, 0.0), nan, Point(-math.inf, 3.0), Point(1.0, -1.0)]

    ordered = sorted(pts)

    assert ordered[0] == Point(-math.inf, 3.0)
    assert ordered[1] == Point(1.0, -1.0)
    assert ordered[2] == Point(1.0, 0.0)
    assert ordered[3] == nan
    assert Point(math.nan, 0.0) == nan
    assert len({nan, Point(math.nan, 0.0)}) == 1
    assert not nan.is_finite()


def test_site_keeps_index_and_compares_by_coordinates():
    s = Site(0.25, 0.75, index=3)

    assert s.index == 3
    assert s == Point(0.25, 0.75)
    assert s.point() == Point(0.25, 0.75)
    assert type(s.point()) is Point
    assert s + Point(1.0, 1.0) == Point(1.25, 1.75)


def test_random_point_in_unit_square_is_deterministic():
    a = [Point.random(np.random.default_rng(5)) for _ in range(3)]
    b = [Point.random(np.random.default_rng(5)) for _ in range(3)]

    assert a == b
    for p in a:
        assert 0.0 <= p.x < 1.0
        assert 0.0 <= p.y < 1.0
