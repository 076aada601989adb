"""
strokes.py
----------

Stroke primitives: the sketchy line and the Catmull-Rom spline.

A sketchy line is never one stroke. `double_line` emits two independently
jittered cubic strokes over the same segment: a primary stroke with full-size
endpoint jitter and an overlay stroke with half-size jitter. Each stroke bends
through two interior control points placed at the randomized "diverge point"
(20-40% along the line) and twice that distance, shifted by a bowing term
perpendicular to the line.

`spline` turns an ordered point sequence into one multi-segment cubic using
Catmull-Rom derived control points:

    C1 = P[i]   + s * (P[i+1] - P[i-1]) / 6
    C2 = P[i+1] + s * (P[i]   - P[i+2]) / 6,      s = 1 - curve_tightness

Core API:

    double_line(x1, y1, x2, y2, o) -> list[Op]
    sketch_stroke(x1, y1, x2, y2, o, move=True, overlay=False) -> Op
    spline(points, close_point, o) -> list[Op]
    curve_with_offset(points, offset, o) -> list[Op]
"""

from __future__ import annotations

__all__ = [
    "MAX_RAND_OFFSET",
    "roughness_gain", "double_line", "sketch_stroke",
    "spline", "curve_with_offset",
]

import math
from typing import List, Optional, Sequence

from .core import Op, OpCode, Point, distance_sq
from .jitter import draw, offset_symmetric
from .options import RenderOptions

MAX_RAND_OFFSET = 2

# Roughness attenuation for long lines
GAIN_FULL_UNTIL = 200
GAIN_FIXED_FROM = 500
GAIN_LONG_LINE = 0.4


def roughness_gain(length: float) -> float:
    """Roughness multiplier: 1 up to 200 units, linear decay to 0.4 at 500, then 0.4."""
    if length > GAIN_FIXED_FROM:
        return GAIN_LONG_LINE
    if length > GAIN_FULL_UNTIL:
        return -0.0016668 * length + 1.233334
    return 1.0


# ---------------------------------------------------------------------------
# Sketchy lines
# ---------------------------------------------------------------------------
def double_line(x1: float, y1: float, x2: float, y2: float, o: RenderOptions) -> List[Op]:
    """Two overlapping jittered strokes from (x1, y1) to (x2, y2)."""
    return [
        sketch_stroke(x1, y1, x2, y2, o, move=True, overlay=False),
        sketch_stroke(x1, y1, x2, y2, o, move=True, overlay=True),
    ]


def sketch_stroke(
        x1      : float,
        y1      : float,
        x2      : float,
        y2      : float,
        o       : RenderOptions,
        move    : bool = True,
        overlay : bool = False,
    ) -> Op:
    """Build a single jittered cubic stroke approximating a straight segment.

    Args:
        x1, y1: Segment start.
        x2, y2: Segment end.
        o: Render options (roughness, bowing, randomizer).
        move: Include the (jittered) start point as the curve anchor.
        overlay: Use half-size jitter (the second pass of a double line).

    Returns:
        Op: A `curve` op with anchor, two control points and end point.
    """
    length_sq = distance_sq((x1, y1), (x2, y2))
    length = math.sqrt(length_sq)
    gain = roughness_gain(length)

    # Tiny segments: keep jitter within 10% of the length
    max_offset = MAX_RAND_OFFSET
    if max_offset * max_offset * 100 > length_sq:
        max_offset = length / 10
    half_offset = max_offset / 2

    diverge_point = 0.2 + draw(o) * 0.2
    mid_disp_x = o.bowing * MAX_RAND_OFFSET * (y2 - y1) / 200
    mid_disp_y = o.bowing * MAX_RAND_OFFSET * (x1 - x2) / 200
    mid_disp_x = offset_symmetric(mid_disp_x, o, gain)
    mid_disp_y = offset_symmetric(mid_disp_y, o, gain)

    jitter_size = half_offset if overlay else max_offset

    def jitter() -> float:
        return offset_symmetric(jitter_size, o, gain)

    data: List[float] = []
    if move:
        data.extend([x1 + jitter(), y1 + jitter()])

    data.extend([
        mid_disp_x + x1 + (x2 - x1) * diverge_point + jitter(),
        mid_disp_y + y1 + (y2 - y1) * diverge_point + jitter(),
        mid_disp_x + x1 + 2 * (x2 - x1) * diverge_point + jitter(),
        mid_disp_y + y1 + 2 * (y2 - y1) * diverge_point + jitter(),
        x2 + jitter(),
        y2 + jitter(),
    ])
    return Op.make(OpCode.CURVE, data)


# ---------------------------------------------------------------------------
# Catmull-Rom spline
# ---------------------------------------------------------------------------
def spline(
        points      : Sequence[Point],
        close_point : Optional[Point],
        o           : RenderOptions,
    ) -> List[Op]:
    """Fit one chained cubic through `points`.

    The first and last entries act as phantom end points: the curve is anchored
    at points[1] and ends at points[-2]. Inputs of 3 points give a single
    degenerate cubic, 2 points fall back to `double_line`, fewer give nothing.
    """
    n = len(points)
    ops: List[Op] = []

    if n > 3:
        s = 1 - o.curve_tightness
        data: List[float] = [points[1][0], points[1][1]]
        for i in range(1, n - 2):
            prev_pt, pt, next_pt, after_pt = points[i - 1], points[i], points[i + 1], points[i + 2]
            data.extend([
                pt[0] + (s * next_pt[0] - s * prev_pt[0]) / 6,
                pt[1] + (s * next_pt[1] - s * prev_pt[1]) / 6,
                next_pt[0] + (s * pt[0] - s * after_pt[0]) / 6,
                next_pt[1] + (s * pt[1] - s * after_pt[1]) / 6,
                next_pt[0],
                next_pt[1],
            ])
        ops.append(Op.make(OpCode.CURVE, data))
        if close_point is not None and len(close_point) == 2:
            ops.append(Op.make(OpCode.LINE, [
                data[-2], data[-1],
                close_point[0] + offset_symmetric(MAX_RAND_OFFSET, o),
                close_point[1] + offset_symmetric(MAX_RAND_OFFSET, o),
            ]))
    elif n == 3:
        ops.append(Op.make(OpCode.CURVE, [
            points[1][0], points[1][1],
            points[1][0], points[1][1],
            points[2][0], points[2][1],
            points[2][0], points[2][1],
        ]))
    elif n == 2:
        ops.extend(double_line(points[0][0], points[0][1], points[1][0], points[1][1], o))
    return ops


def curve_with_offset(points: Sequence[Point], offset: float, o: RenderOptions) -> List[Op]:
    """Jitter every point by `offset` and fit a spline through the result.

    The first and last points are emitted twice (independently jittered) so they
    serve as the spline's phantom end points.
    """
    if not points:
        return []

    def jittered(p: Point) -> Point:
        return (p[0] + offset_symmetric(offset, o), p[1] + offset_symmetric(offset, o))

    ps: List[Point] = [jittered(points[0]), jittered(points[0])]
    last = len(points) - 1
    for i in range(1, len(points)):
        ps.append(jittered(points[i]))
        if i == last:
            ps.append(jittered(points[i]))
    return spline(ps, None, o)
