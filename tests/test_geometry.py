from __future__ import annotations

import math

import pytest

from arena.geometry import Point, Rect, intersection, distance, sqr_distance
from arena.util import mod360, signed_delta, clamp


ANGLES = [-1080.0, -720.0, -361.5, -360.0, -180.0, -0.5, -1e-14, 0.0, 0.25,
          179.9, 180.0, 359.99, 360.0, 540.0, 721.0, 1e6 + 0.5]


def test_mod360_range() -> None:
    for d in ANGLES:
        r = mod360(d)
        assert 0.0 <= r < 360.0, d


def test_mod360_values() -> None:
    assert mod360(-30) == 330
    assert mod360(720) == 0
    assert mod360(-720) == 0
    assert mod360(370) == 10


def test_signed_delta_range() -> None:
    for a in ANGLES:
        for b in ANGLES:
            d = signed_delta(a, b)
            assert -180.0 < d <= 180.0, (a, b)
        assert signed_delta(a, a) == 0


def test_signed_delta_half_turn_is_positive() -> None:
    assert signed_delta(0, 180) == 180
    assert signed_delta(180, 0) == 180
    assert signed_delta(10, 350) == 20
    assert signed_delta(350, 10) == -20


def test_clamp() -> None:
    assert clamp(1, 0.2, 100) == 1
    assert clamp(1, 250, 100) == 100
    assert clamp(1, 42.5, 100) == 42.5


def test_intersection_crossing() -> None:
    p = intersection(Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0))
    assert p == pytest.approx((1.0, 1.0))
    p = intersection(Point(0, 0), Point(4, 0), Point(1, -1), Point(1, 3))
    assert p == pytest.approx((1.0, 0.0))
    p = intersection(Point(2, 1), Point(2, 9), Point(0, 5), Point(10, 5))
    assert p == pytest.approx((2.0, 5.0))


def test_intersection_touching_endpoints() -> None:
    p = intersection(Point(0, 0), Point(1, 0), Point(1, 0), Point(1, 1))
    assert p == pytest.approx((1.0, 0.0))


def test_intersection_out_of_range() -> None:
    # Lines cross at (1.5, 1.5), beyond the end of the first segment
    assert intersection(Point(0, 0), Point(1, 1), Point(0, 3), Point(3, 0)) is None


def test_parallel_segments_never_intersect() -> None:
    assert intersection(Point(0, 0), Point(1, 0), Point(0, 1), Point(1, 1)) is None
    # Collinear overlap is reported as no intersection
    assert intersection(Point(0, 0), Point(2, 0), Point(1, 0), Point(3, 0)) is None


def test_distance() -> None:
    assert sqr_distance((0, 0), (3, 4)) == 25
    assert distance((1, 1), (4, 5)) == 5


def test_point_polar() -> None:
    p = Point(10, 10).polar(90, 2)
    assert p.x == pytest.approx(10.0)
    assert p.y == pytest.approx(12.0)
    assert Point(1, 1).angle == pytest.approx(45.0)
    assert Point(0, -1).angle == pytest.approx(270.0)


def test_rect_segments() -> None:
    segments = list(Rect(25, 15, 8, 35).segments)
    assert segments == [
        ((25, 15), (33, 15)),
        ((25, 15), (25, 50)),
        ((25, 50), (33, 50)),
        ((33, 15), (33, 50)),
    ]


def test_rect_rejects_negative_size() -> None:
    with pytest.raises(ValueError):
        Rect(0, 0, -1, 5)
