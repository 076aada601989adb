"""
test_path_parser.py
-------------------
Unit tests for SVG path data parsing and polyline flattening.
"""

import logging
import math

import pytest

from roughstroke.path_parser import ParsedPath, Segment, flatten_cubic, parse_path


# ---------------------------------------------------------------------
# Tokenizing and grouping
# ---------------------------------------------------------------------
def test_basic_commands():
    assert parse_path("M10 20 L30,40") == [
        Segment("M", (10.0, 20.0)),
        Segment("L", (30.0, 40.0)),
    ]


@pytest.mark.parametrize("d, keys", [
    ("M0 0 10 10 20 20", ["M", "L", "L"]),
    ("m0 0 10 10", ["m", "l"]),
    ("L1 2 3 4", ["L", "L"]),
    ("C1 2 3 4 5 6 7 8 9 10 11 12", ["C", "C"]),
    ("M0 0 H5 V5 h1 v1 Z", ["M", "H", "V", "h", "v", "Z"]),
])
def test_implicit_repetition(d, keys):
    assert [s.key for s in parse_path(d)] == keys


def test_compact_number_syntax():
    segs = parse_path("M-1.5.5L1e1-3")
    assert segs == [Segment("M", (-1.5, 0.5)), Segment("L", (10.0, -3.0))]


def test_arc_flags_may_run_together():
    (_, arc) = parse_path("M0 0a5 5 0 1010 10")
    assert arc == Segment("a", (5.0, 5.0, 0.0, 1.0, 0.0, 10.0, 10.0))


def test_close_has_no_operands():
    segs = parse_path("M0 0 L1 1 z")
    assert segs[-1] == Segment("z", ())
    assert segs[-1].command == "Z"
    assert segs[-1].relative


def test_incomplete_trailing_group_dropped(caplog):
    caplog.set_level(logging.WARNING, logger="roughstroke.path_parser")
    segs = parse_path("M0 0 L10")
    assert [s.key for s in segs] == ["M"]
    assert "incomplete" in caplog.text


def test_unknown_command_kept_as_segment(caplog):
    caplog.set_level(logging.DEBUG, logger="roughstroke.path_parser")
    segs = parse_path("M0 0 X 5 L1 1")
    assert [s.key for s in segs] == ["M", "X", "L"]
    assert segs[1].data == (5.0,)
    assert "'X'" in caplog.text


def test_stray_exponent_letter_is_a_command():
    segs = parse_path("M0 0 L10 10 E 5 5 l1e1 2E-1")
    assert [s.key for s in segs] == ["M", "L", "E", "l"]
    assert segs[2].data == (5.0, 5.0)
    assert segs[3].data == (10.0, 0.2)


@pytest.mark.parametrize("d", ["M10 - 5", "M10 -\t5", "M10,- 5"])
def test_detached_minus_joins_number(d):
    assert parse_path(d) == [Segment("M", (10.0, -5.0))]


def test_empty_path():
    assert parse_path("") == []
    assert parse_path("   ") == []


def test_non_string_raises():
    with pytest.raises(TypeError):
        parse_path(None)


# ---------------------------------------------------------------------
# ParsedPath
# ---------------------------------------------------------------------
def test_closed_flag():
    assert ParsedPath("M0 0 L1 0 L1 1 Z").closed
    assert not ParsedPath("M0 0 L1 0 L1 1").closed
    assert not ParsedPath("").closed


def test_linear_points_relative():
    lp = ParsedPath("m10 10 l5 0 v5 h-5 z").linear_points
    assert lp == [[(10.0, 10.0), (15.0, 10.0), (15.0, 15.0), (10.0, 15.0)]]


def test_linear_points_subpaths():
    lp = ParsedPath("M0 0 L1 1 M5 5 L6 6 M9 9").linear_points
    assert lp == [[(0.0, 0.0), (1.0, 1.0)], [(5.0, 5.0), (6.0, 6.0)]]


def test_linear_points_flatten_cubic():
    (pts,) = ParsedPath("M0 0 C0 10 10 10 10 0").linear_points
    assert pts[0] == (0.0, 0.0)
    assert pts[-1] == (10.0, 0.0)
    assert len(pts) > 3
    assert all(0 <= x <= 10 and 0 <= y <= 7.5 + 1e-9 for x, y in pts)


def test_linear_points_flatten_arc():
    (pts,) = ParsedPath("M0 0 A1 1 0 0 1 2 0").linear_points
    assert pts[-1] == (2.0, 0.0)
    for p in pts:
        assert math.dist(p, (1.0, 0.0)) == pytest.approx(1.0, abs=1e-3)


def test_linear_points_skip_unknown():
    lp = ParsedPath("M0 0 X 5 L3 4").linear_points
    assert lp == [[(0.0, 0.0), (3.0, 4.0)]]


def test_flatten_straight_cubic_is_single_point():
    out = flatten_cubic((0, 0), (1, 0), (2, 0), (3, 0))
    assert out == [(3, 0)]


def test_flatten_respects_flatness():
    coarse = flatten_cubic((0, 0), (0, 100), (100, 100), (100, 0), flatness=5)
    fine = flatten_cubic((0, 0), (0, 100), (100, 100), (100, 0), flatness=0.1)
    assert len(fine) > len(coarse)
    assert fine[-1] == (100, 0)
