"""
test_arc_converter.py
---------------------
Unit tests for SVG elliptical arc to cubic Bezier conversion.
"""

import math

import numpy as np
import pytest

from roughstroke.arc_converter import BezierSegment, arc_to_cubic_segments, vector_angle


def _angles(segments, center, start):
    pts = [start] + [s.to for s in segments]
    return [math.atan2(p[1] - center[1], p[0] - center[0]) for p in pts]


def _wrapped_delta(a, b):
    return abs((b - a + math.pi) % (2 * math.pi) - math.pi)


@pytest.mark.parametrize("u, v, expected", [
    ((1, 0), (0, 1), math.pi / 2),
    ((0, 1), (1, 0), 3 * math.pi / 2),
    ((1, 0), (-1, 0), math.pi),
    ((1, 1), (1, 1), 0.0),
])
def test_vector_angle(u, v, expected):
    assert vector_angle(*u, *v) == pytest.approx(expected)


def test_half_circle_two_segments():
    segs = list(arc_to_cubic_segments((0, 0), (2, 0), (1, 1), 0, False, True))
    assert len(segs) == 2
    assert all(isinstance(s, BezierSegment) for s in segs)
    assert segs[-1].to == (2.0, 0.0)
    assert segs[0].to == pytest.approx((1.0, -1.0))
    # T = 8/3 sin^2(pi/8) / sin(pi/4) for a 90 degree sub-arc of a unit circle
    t = 8 / 3 * math.sin(math.pi / 8) ** 2 / math.sin(math.pi / 4)
    assert segs[0].cp1 == pytest.approx((0.0, -t))


def test_negative_sweep_goes_other_way():
    segs = list(arc_to_cubic_segments((0, 0), (2, 0), (1, 1), 0, False, False))
    assert len(segs) == 2
    assert segs[0].to == pytest.approx((1.0, 1.0))


def test_large_arc_three_quarters():
    center = (1.0, 1.0)
    start = (1.0, 0.0)
    segs = list(arc_to_cubic_segments(start, (0, 1), (1, 1), 0, True, True))
    assert len(segs) == 3
    assert segs[-1].to == (0.0, 1.0)
    for s in segs:
        assert math.dist(s.to, center) == pytest.approx(1.0)
    angles = _angles(segs, center, start)
    assert all(_wrapped_delta(a, b) <= math.pi / 2 + 1e-9 for a, b in zip(angles, angles[1:]))


def test_small_radii_are_scaled_up():
    segs = list(arc_to_cubic_segments((0, 0), (10, 0), (1, 1), 0, False, True))
    assert len(segs) == 2
    for s in segs:
        assert math.dist(s.to, (5.0, 0.0)) == pytest.approx(5.0)


def test_rotated_ellipse_endpoints():
    segs = list(arc_to_cubic_segments((0, 0), (30, 10), (20, 10), 30, True, False))
    assert len(segs) >= 2
    assert segs[-1].to == (30.0, 10.0)
    for a, b in zip(segs, segs[1:]):
        assert np.isfinite(a.cp1 + a.cp2 + a.to).all()


@pytest.mark.parametrize("radii", [(0, 5), (5, 0), (0, 0)])
def test_zero_radius_yields_nothing(radii):
    assert list(arc_to_cubic_segments((0, 0), (10, 0), radii, 0, False, True)) == []


def test_coincident_endpoints_yield_nothing():
    assert list(arc_to_cubic_segments((3, 4), (3, 4), (5, 5), 0, True, True)) == []


def test_negative_radii_use_absolute_values():
    a = list(arc_to_cubic_segments((0, 0), (2, 0), (-1, -1), 0, False, True))
    b = list(arc_to_cubic_segments((0, 0), (2, 0), (1, 1), 0, False, True))
    assert a == b


def test_generator_is_lazy_and_single_use():
    gen = arc_to_cubic_segments((0, 0), (2, 0), (1, 1), 0, False, True)
    first = next(gen)
    assert isinstance(first, BezierSegment)
    rest = list(gen)
    assert len(rest) == 1
    assert list(gen) == []
