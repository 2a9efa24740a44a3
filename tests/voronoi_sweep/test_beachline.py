import pytest

from src.voronoi_sweep.beachline import Beachline
from src.voronoi_sweep.dcel import DCELBuilder
from src.voronoi_sweep.point import Point, Site


def _beachline(*coords):
    sites = [Site(x, y, index=i) for i, (x, y) in enumerate(coords)]
    return Beachline(DCELBuilder(sites)), sites


def test_locate_on_empty_beachline():
    beach, _ = _beachline((0.5, 0.5))
    assert beach.is_empty()
    with pytest.raises(LookupError):
        beach.locate(0.5, 0.0)


def test_first_site_becomes_single_arc():
    beach, sites = _beachline((0.5, 0.5))
    new, left, right = beach.insert_site(sites[0])

    assert beach.head is new
    assert left is None and right is None
    assert beach.sites() == [0]
    assert beach.builder.pair_count() == 0


def test_insert_splits_the_arc_above():
    beach, sites = _beachline((0.5, 1.0), (0.4, 0.5))
    beach.insert_site(sites[0])
    new, left, right = beach.insert_site(sites[1])

    assert beach.sites() == [0, 1, 0]
    assert len(beach) == 3
    assert left.site is sites[0] and right.site is sites[0]
    # both breakpoints trace the same bisector from opposite sides
    assert left.right_pair == new.right_pair.reversed()
    assert beach.builder.pair_count() == 1

    bps = beach.breakpoints(0.5)
    assert bps[0] == bps[1] == 0.4
    # at sweep 0.2 the new arc spans roughly [-0.16, 0.84]
    assert beach.locate(-0.5, 0.2) is left
    assert beach.locate(0.3, 0.2) is new
    assert beach.locate(1.0, 0.2) is right


def test_level_sites_are_appended_side_by_side():
    beach, sites = _beachline((0.2, 1.0), (0.8, 1.0))
    beach.insert_site(sites[0])
    new, left, right = beach.insert_site(sites[1])

    assert beach.sites() == [0, 1]
    assert left.next is new
    assert right is None
    assert beach.breakpoints(1.0) == [0.5]
    assert beach.builder.pair_count() == 1


def test_remove_arc_joins_neighbours():
    beach, sites = _beachline((0.5, 1.0), (0.2, 0.5), (0.8, 0.4))
    for s in sites:
        beach.insert_site(s)
    assert beach.sites() == [0, 1, 0, 2, 0]

    vanishing = beach.head.next.next
    builder = beach.builder
    vertex = builder.add_vertex(Point(0.5, 0.3))
    left, right = beach.remove_arc(vanishing, vertex)

    assert beach.sites() == [0, 1, 2, 0]
    assert left.site is sites[1] and right.site is sites[2]
    assert vanishing.prev is None and vanishing.next is None
    # two breakpoints end at the vertex and one starts there
    assert builder.origin.count(vertex) == 3
    assert builder.origin[left.right_pair.right] == vertex
    assert builder.origin[left.right_pair.left] is None
    assert sorted(builder.incident[vertex]) == [1, 2, 5]


def test_remove_arc_at_the_end_is_rejected():
    beach, sites = _beachline((0.5, 1.0), (0.4, 0.5))
    for s in sites:
        beach.insert_site(s)
    with pytest.raises(ValueError):
        beach.remove_arc(beach.head, beach.builder.add_vertex(Point(0.0, 0.0)))
