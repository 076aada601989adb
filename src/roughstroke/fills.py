"""
fills.py
--------

Fill algorithms.

- `solid_fill_polygon` jitters each vertex by `max_randomness_offset` and
  emits one `fillPath` outline.
- `pattern_fill_polygon` hands the unjittered vertices to a `PatternFiller`.
- `pattern_fill_arc` samples an arc into a closed wedge polygon (end point and
  center appended) and pattern-fills that.

`HELPER` is the package's `RenderHelper`, passed to filler factories.
"""

from __future__ import annotations

__all__ = [
    "SketchHelper", "HELPER",
    "rand_offset_with_range", "double_line_ops",
    "solid_fill_polygon", "pattern_fill_polygon", "pattern_fill_arc",
]

import math
from typing import List, Sequence

from .core import Op, OpCode, OpSet, OpSetType, Point
from .fillers import PatternFiller, RenderHelper
from .jitter import offset, offset_symmetric
from .options import RenderOptions
from .shapes import checked_step, ellipse, normalize_arc_angles
from .strokes import double_line


def rand_offset_with_range(min_val: float, max_val: float, o: RenderOptions) -> float:
    return offset(min_val, max_val, o)


def double_line_ops(x1: float, y1: float, x2: float, y2: float, o: RenderOptions) -> List[Op]:
    return double_line(x1, y1, x2, y2, o)


class SketchHelper(RenderHelper):
    """`RenderHelper` backed by this package's stroke and shape functions."""

    def rand_offset_with_range(self, min_val: float, max_val: float, o: RenderOptions) -> float:
        return rand_offset_with_range(min_val, max_val, o)

    def ellipse(self, x: float, y: float, width: float, height: float, o: RenderOptions) -> OpSet:
        return ellipse(x, y, width, height, o)

    def double_line_ops(self, x1: float, y1: float, x2: float, y2: float, o: RenderOptions) -> List[Op]:
        return double_line_ops(x1, y1, x2, y2, o)


HELPER = SketchHelper()


def solid_fill_polygon(points: Sequence[Point], o: RenderOptions) -> OpSet:
    """Jittered outline of `points` as a `fillPath`; fewer than 3 points give no ops."""
    ops: List[Op] = []
    points = list(points or [])
    if len(points) > 2:
        jitter = o.max_randomness_offset or 0
        x0, y0 = points[0]
        ops.append(Op.make(OpCode.MOVE, [
            x0 + offset_symmetric(jitter, o), y0 + offset_symmetric(jitter, o),
        ]))
        for x, y in points[1:]:
            ops.append(Op.make(OpCode.LINE_TO, [
                x + offset_symmetric(jitter, o), y + offset_symmetric(jitter, o),
            ]))
    return OpSet(OpSetType.FILL_PATH, ops)


def pattern_fill_polygon(points: Sequence[Point], o: RenderOptions, filler: PatternFiller) -> OpSet:
    return filler.fill_polygon(list(points), o)


def pattern_fill_arc(
        x      : float,
        y      : float,
        width  : float,
        height : float,
        start  : float,
        stop   : float,
        o      : RenderOptions,
        filler : PatternFiller,
    ) -> OpSet:
    """Pattern-fill the wedge between an arc and its center.

    Raises:
        ValueError: if the normalized span is zero.
    """
    cx, cy = x, y
    rx = abs(width / 2)
    ry = abs(height / 2)
    rx += offset_symmetric(rx * 0.01, o)
    ry += offset_symmetric(ry * 0.01, o)

    strt, stp = normalize_arc_angles(start, stop)
    increment = checked_step((stp - strt) / o.curve_step_count, stp - strt)

    points: List[Point] = []
    angle = strt
    while angle <= stp:
        points.append((cx + rx * math.cos(angle), cy + ry * math.sin(angle)))
        angle += increment
    points.append((cx + rx * math.cos(stp), cy + ry * math.sin(stp)))
    points.append((cx, cy))
    return pattern_fill_polygon(points, o, filler)
