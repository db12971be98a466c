from __future__ import annotations

import pytest

from geotiles.coord import GeoCoord
from geotiles.errors import InvalidGeoRect
from geotiles.rect import Edge, GeoRect


def coord(lon: float, lat: float) -> GeoCoord:
    return GeoCoord.from_degrees(lon, lat)


def rect(tl: tuple[float, float], br: tuple[float, float]) -> GeoRect:
    return GeoRect.new(coord(*tl), coord(*br))


def test_construction():
    GeoRect.new(coord(-10.0, 20.0), coord(10.0, -20.0))
    GeoRect.new(coord(10.0, 20.0), coord(-10.0, -20.0))
    # Zero-height rects are allowed.
    GeoRect.new(coord(-10.0, 5.0), coord(10.0, 5.0))

    with pytest.raises(InvalidGeoRect):
        GeoRect.new(coord(-10.0, -20.0), coord(10.0, 20.0))


def test_invalid_rect_is_a_value_error():
    with pytest.raises(ValueError, match="invalid rectangle given"):
        GeoRect(top_left=coord(0.0, 0.0), bottom_right=coord(0.0, 1.0))


def test_center():
    assert rect((-10.0, 20.0), (10.0, -20.0)).center() == coord(0.0, 0.0)
    assert rect((10.0, 20.0), (20.0, -20.0)).center() == coord(15.0, 0.0)
    assert rect((10.0, 20.0), (-10.0, -20.0)).center() == coord(180.0, 0.0)
    assert rect((-10.0, 20.0), (-20.0, -20.0)).center() == coord(165.0, 0.0)


def test_center_of_wide_crossing_rect_wraps_into_range():
    c = rect((170.0, 10.0), (160.0, -10.0)).center()
    assert c.lon == -15.0
    assert c.lat == 0.0


def test_crosses_dateline():
    assert not rect((-10.0, 20.0), (10.0, -20.0)).crosses_dateline()
    assert rect((10.0, 20.0), (-10.0, -20.0)).crosses_dateline()


def test_contains_lon_uses_union_when_crossing():
    crossing = rect((170.0, 10.0), (-170.0, -10.0))
    assert crossing.contains_lon(175.0)
    assert crossing.contains_lon(-175.0)
    assert crossing.contains_lon(180.0)
    assert crossing.contains_lon(-180.0)
    assert not crossing.contains_lon(0.0)


def test_contains_coord():
    normal = rect((-10.0, 20.0), (10.0, -20.0))
    assert normal.contains_coord(coord(0.0, 0.0))
    assert normal.contains_coord(coord(10.0, 20.0))
    assert not normal.contains_coord(coord(-20.0, 0.0))
    assert not normal.contains_coord(coord(0.0, 30.0))

    crossing = rect((10.0, 20.0), (-10.0, -20.0))
    assert crossing.contains_coord(coord(20.0, 0.0))
    assert crossing.contains_coord(coord(180.0, 0.0))
    assert not crossing.contains_coord(coord(0.0, 0.0))


def test_contains_rect():
    normal_1 = rect((-10.0, 20.0), (10.0, -20.0))
    assert normal_1.contains_rect(normal_1)

    normal_2 = rect((-5.0, 20.0), (5.0, -20.0))
    assert normal_1.contains_rect(normal_2)

    normal_3 = rect((10.0, 25.0), (20.0, -15.0))
    assert not normal_1.contains_rect(normal_3)

    crossing_1 = rect((10.0, 20.0), (-10.0, -20.0))
    assert not normal_1.contains_rect(crossing_1)

    crossing_2 = rect((20.0, 20.0), (-20.0, -20.0))
    assert crossing_1.contains_rect(crossing_2)

    normal_4 = rect((-10.0, 15.0), (10.0, -15.0))
    assert crossing_1.contains_rect(normal_4)

    full_width = rect((-180.0, 40.0), (180.0, -40.0))
    assert full_width.contains_rect(crossing_1)


def test_intersects():
    normal_1 = rect((-10.0, 20.0), (10.0, -20.0))
    assert normal_1.intersects(normal_1)

    normal_2 = rect((-5.0, 20.0), (5.0, -20.0))
    assert normal_1.intersects(normal_2)

    normal_3 = rect((10.0, 25.0), (20.0, -15.0))
    assert normal_1.intersects(normal_3)

    crossing_1 = rect((10.0, 20.0), (-10.0, -20.0))
    assert normal_1.intersects(crossing_1)
    assert crossing_1.intersects(crossing_1)

    crossing_2 = rect((5.0, 20.0), (-20.0, -20.0))
    assert crossing_1.intersects(crossing_2)

    normal_4 = rect((-15.0, 15.0), (5.0, -15.0))
    assert crossing_1.intersects(normal_4)

    normal_5 = rect((-175.0, 40.0), (-170.0, -40.0))
    assert not normal_5.intersects(crossing_1)


def test_intersects_requires_overlapping_latitude_bands():
    a = rect((-10.0, 20.0), (10.0, 10.0))
    b = rect((-10.0, 0.0), (10.0, -10.0))
    assert not a.intersects(b)
    assert not b.intersects(a)


def test_rects_sharing_a_pole_intersect():
    north_1 = rect((-10.0, 90.0), (10.0, -20.0))
    north_2 = rect((20.0, 90.0), (30.0, -20.0))
    assert north_1.intersects(north_2)

    south_1 = rect((-10.0, 20.0), (10.0, -90.0))
    south_2 = rect((20.0, 20.0), (30.0, -90.0))
    assert south_1.intersects(south_2)


def test_intersects_only_checks_the_other_rects_corners():
    narrow = rect((-5.0, 10.0), (5.0, -10.0))
    wide = rect((-20.0, 10.0), (20.0, -10.0))
    assert wide.intersects(narrow)
    # The narrow rect sees neither of the wide rect's corner longitudes.
    assert not narrow.intersects(wide)


def test_edge_flags_combine():
    top_left = Edge.TOP | Edge.LEFT
    assert Edge.TOP in top_left
    assert Edge.LEFT in top_left
    assert Edge.RIGHT not in top_left
    assert top_left.value == 0b1001
