import pytest

from tz_locator.geometry.polygon import Polygon
from tz_locator.geometry.primitives import Point, Rect

OUTER = [(0, 0), (10, 0), (10, 10), (0, 10)]
HOLE = [(4, 4), (6, 4), (6, 6), (4, 6)]


def test_polygon_new_computes_exterior_bounds():
    polygon = Polygon.new([(2, 3), (8, -1), (5, 9)])
    assert polygon.rect == Rect(Point(2, -1), Point(8, 9))
    assert polygon.holes == ()
    assert all(isinstance(p, Point) for p in polygon.exterior)


def test_polygon_new_rejects_empty_exterior():
    with pytest.raises(ValueError):
        Polygon.new([])


def test_polygon_is_immutable():
    polygon = Polygon.new(OUTER)
    with pytest.raises(AttributeError):
        polygon.holes = ()  # type: ignore[misc]


def test_polygon_hole_excludes_points():
    polygon = Polygon.new(OUTER, [HOLE])
    assert polygon.contains_point(Point(2, 2))
    assert not polygon.contains_point(Point(5, 5))
    assert not polygon.contains_point(Point(11, 5))


def test_polygon_boundary_policy_applies_to_holes_too():
    polygon = Polygon.new(OUTER, [HOLE])
    on_hole_edge = Point(4, 5)
    # boundary counts as inside the hole, so the point is carved out
    assert not polygon.contains_point(on_hole_edge, allow_on_edge=True)
    # boundary is not inside the hole, and the point is inside the exterior
    assert polygon.contains_point(on_hole_edge, allow_on_edge=False)

    on_exterior_edge = Point(0, 5)
    assert polygon.contains_point(on_exterior_edge, allow_on_edge=True)
    assert not polygon.contains_point(on_exterior_edge, allow_on_edge=False)


def test_contains_point_normal_skips_bbox_reject():
    polygon = Polygon.new(OUTER)
    p = Point(3, 3)
    assert polygon.contains_point_normal(p) == polygon.contains_point(p)
    assert not polygon.contains_point_normal(Point(20, 20))


def test_polygon_with_unordered_hole_data_is_accepted():
    # holes are not validated against the exterior
    polygon = Polygon.new(OUTER, [[(20, 20), (30, 20), (30, 30)]])
    assert polygon.contains_point(Point(5, 5))
