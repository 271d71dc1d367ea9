import pytest

from tz_locator.errors import DataLoadError, NoTimezoneFound
from tz_locator.finders.polygon import SHIFT_OFFSETS, PolygonFinder, build_timezone_polygons
from tz_locator.geometry.primitives import Point, Rect


def test_build_precomputes_bounding_boxes(polygon_payload):
    polygons = build_timezone_polygons(polygon_payload)
    island = polygons.timezones[-1]
    assert island.name == "Test/Island"
    assert [p.rect for p in island.polygons] == [
        Rect(Point(30, 0), Point(40, 10)),
        Rect(Point(50, 0), Point(60, 10)),
    ]


def test_finder_metadata(polygon_finder):
    assert polygon_finder.data_version() == "test-2025a"
    assert polygon_finder.reduced is True
    assert polygon_finder.timezone_names() == ["Test/Outer", "Test/Inner", "Test/East", "Test/Far", "Test/Island"]


def test_finder_from_bytes(payload_bytes):
    finder = PolygonFinder.from_payload(payload_bytes[1])
    assert finder.get_timezone(2.0, 2.0) == "Test/Outer"


def test_interior_points(polygon_finder):
    assert polygon_finder.get_timezones(2.0, 2.0) == ["Test/Outer"]
    assert polygon_finder.get_timezones(5.0, 5.0) == ["Test/Inner"]
    assert polygon_finder.get_timezones(15.0, 5.0) == ["Test/East"]


def test_disjoint_polygons_of_one_timezone(polygon_finder):
    assert polygon_finder.get_timezone(35.0, 5.0) == "Test/Island"
    assert polygon_finder.get_timezone(55.0, 5.0) == "Test/Island"


def test_shared_border_returns_both_zones_sorted(polygon_finder):
    assert polygon_finder.get_timezones(10.0, 5.0) == ["Test/East", "Test/Outer"]
    assert polygon_finder.get_timezone(10.0, 5.0) == "Test/East"


def test_boundary_policy(polygon_payload):
    on_hole_edge = (4.0, 5.0)
    inclusive = PolygonFinder.from_payload(polygon_payload, allow_on_edge=True)
    exclusive = PolygonFinder.from_payload(polygon_payload, allow_on_edge=False)
    assert inclusive.get_timezones(*on_hole_edge) == ["Test/Inner"]
    assert exclusive.get_timezones(*on_hole_edge) == ["Test/Outer"]


def test_shifted_retry_recovers_points_in_simplification_gaps(polygon_finder):
    assert polygon_finder.get_timezones(20.007, 5.0) == ["Test/East", "Test/Far"]
    assert polygon_finder.get_timezone(20.007, 5.0) == "Test/East"


def test_shifted_retry_reaches_two_hundredths_of_a_degree(polygon_finder):
    assert polygon_finder.get_timezones(-0.015, 5.0) == ["Test/Outer"]
    with pytest.raises(NoTimezoneFound):
        polygon_finder.get_timezones(-0.05, 5.0)


def test_shift_offsets_cover_25_combinations():
    assert len(SHIFT_OFFSETS) ** 2 == 25
    assert SHIFT_OFFSETS[0] == 0.0
    assert sorted(SHIFT_OFFSETS) == [-0.02, -0.01, 0.0, 0.01, 0.02]


def test_no_match_raises(polygon_finder):
    with pytest.raises(NoTimezoneFound):
        polygon_finder.get_timezone(100.0, 50.0)


def test_no_domain_validation(polygon_finder):
    # out-of-range input is not rejected, it simply matches nothing
    with pytest.raises(NoTimezoneFound):
        polygon_finder.get_timezone(181.0, 0.0)
    with pytest.raises(NoTimezoneFound):
        polygon_finder.get_timezone(0.0, 91.0)


@pytest.mark.parametrize(
    "payload",
    [b"", "var/data/combined-with-oceans.reduce.bin", {"version": "v", "timezones": []}],
)
def test_from_payload_rejects_unusable_input(payload):
    with pytest.raises(DataLoadError):
        PolygonFinder.from_payload(payload)
