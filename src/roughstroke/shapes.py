"""
shapes.py
---------

Shape assemblers. Each function builds the point sequence of a primitive and
hands it to the stroke primitives (`double_line`) or the spline fitter
(`spline`, `curve_with_offset`) from strokes.py.

Core API:

    line(x1, y1, x2, y2, o) -> OpSet
    linear_path(points, close, o) -> OpSet
    polygon(points, o) -> OpSet
    rectangle(x, y, width, height, o) -> OpSet
    curve(points, o) -> OpSet

        Straight-edged shapes are chains of double lines. A shape-level curve
        is drawn twice, at offsets 1x and 1.5x (each grown with roughness).

    generate_ellipse_params(width, height, o) -> EllipseParams
    ellipse_with_params(x, y, o, params) -> EllipseResult
    ellipse(x, y, width, height, o) -> OpSet

        The sample count grows with the square root of the ellipse size, so
        big ellipses get more points without small ones being over-sampled.
        Radii are jittered in proportion to (1 - curve_fitting). The outline is
        walked twice; the first pass overshoots the start angle to leave a
        visibly imperfect closure.

    arc(x, y, width, height, start, stop, closed, rough_closure, o) -> OpSet

        Arcs get a single jitter pass. A closed arc is joined back to its
        center either with two double lines (rough) or two plain lineTo ops.
"""

from __future__ import annotations

__all__ = [
    "TAU", "MAX_ANGULAR_STEPS", "checked_step",
    "line", "linear_path", "polygon", "rectangle", "curve",
    "generate_ellipse_params", "ellipse_with_params", "ellipse",
    "compute_ellipse_points", "normalize_arc_angles", "arc", "arc_points",
]

import math
from typing import List, Sequence, Tuple

from .core import EllipseParams, EllipseResult, Op, OpCode, OpSet, OpSetType, Point
from .jitter import offset, offset_symmetric
from .options import RenderOptions
from .strokes import curve_with_offset, double_line, spline

TAU = 2 * math.pi
MAX_ANGULAR_STEPS = 1_000_000


def checked_step(step: float, span: float) -> float:
    """Return `step` if iterating `span` with it terminates in a sane number of steps."""
    if not (math.isfinite(step) and step > 0):
        raise ValueError(f"Angular step must be positive and finite; got {step!r} for span {span!r}.")
    if span / step > MAX_ANGULAR_STEPS:
        raise ValueError(
            f"Angular step {step!r} over span {span!r} exceeds {MAX_ANGULAR_STEPS} samples."
        )
    return step


# ---------------------------------------------------------------------------
# Straight-edged shapes
# ---------------------------------------------------------------------------
def line(x1: float, y1: float, x2: float, y2: float, o: RenderOptions) -> OpSet:
    return OpSet(OpSetType.PATH, double_line(x1, y1, x2, y2, o))


def linear_path(points: Sequence[Point], close: bool, o: RenderOptions) -> OpSet:
    """Chain of double lines through `points`, optionally closed back to the start."""
    points = list(points or [])
    n = len(points)
    ops: List[Op] = []
    if n > 2:
        for p, q in zip(points, points[1:]):
            ops.extend(double_line(p[0], p[1], q[0], q[1], o))
        if close:
            ops.extend(double_line(points[-1][0], points[-1][1], points[0][0], points[0][1], o))
    elif n == 2:
        return line(points[0][0], points[0][1], points[1][0], points[1][1], o)
    return OpSet(OpSetType.PATH, ops)


def polygon(points: Sequence[Point], o: RenderOptions) -> OpSet:
    return linear_path(points, True, o)


def rectangle(x: float, y: float, width: float, height: float, o: RenderOptions) -> OpSet:
    points = [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]
    return polygon(points, o)


def curve(points: Sequence[Point], o: RenderOptions) -> OpSet:
    """Sketchy curve through `points`: two spline passes at different jitter sizes."""
    ops = curve_with_offset(points, 1 * (1 + o.roughness * 0.2), o)
    ops += curve_with_offset(points, 1.5 * (1 + o.roughness * 0.22), o)
    return OpSet(OpSetType.PATH, ops)


# ---------------------------------------------------------------------------
# Ellipse
# ---------------------------------------------------------------------------
def generate_ellipse_params(width: float, height: float, o: RenderOptions) -> EllipseParams:
    """Derive jittered radii and the angular step for an ellipse of the given size."""
    psq = math.sqrt(TAU * math.sqrt(((width / 2) ** 2 + (height / 2) ** 2) / 2))
    step_count = max(o.curve_step_count, (o.curve_step_count / math.sqrt(200)) * psq)
    increment = TAU / step_count

    rx = abs(width / 2)
    ry = abs(height / 2)
    curve_fit_randomness = 1 - o.curve_fitting
    rx += offset_symmetric(rx * curve_fit_randomness, o)
    ry += offset_symmetric(ry * curve_fit_randomness, o)
    return EllipseParams(rx=rx, ry=ry, increment=increment)


def compute_ellipse_points(
        increment : float,
        cx        : float,
        cy        : float,
        rx        : float,
        ry        : float,
        offset    : float,
        overlap   : float,
        o         : RenderOptions,
    ) -> Tuple[List[Point], List[Point]]:
    """Sample an ellipse once around, with joint points before and after the loop.

    Args:
        increment: Angular step in radians.
        cx, cy: Center.
        rx, ry: Radii.
        offset: Jitter magnitude applied to every sampled coordinate.
        overlap: Extra angle the closing joint points reach past the start.
        o: Render options.

    Returns:
        (all_points, core_points): the spline input including the lead-in and
        trailing joint points, and the plain samples on the outline.
    """
    checked_step(increment, TAU)

    def sample(angle: float, scale: float = 1.0) -> Point:
        return (
            offset_symmetric(offset, o) + cx + scale * rx * math.cos(angle),
            offset_symmetric(offset, o) + cy + scale * ry * math.sin(angle),
        )

    core_points: List[Point] = []
    all_points: List[Point] = []
    rad_offset = offset_symmetric(0.5, o) - (math.pi / 2)

    all_points.append(sample(rad_offset - increment, 0.9))
    angle = rad_offset
    while angle < TAU + rad_offset - 0.01:
        p = sample(angle)
        core_points.append(p)
        all_points.append(p)
        angle += increment

    all_points.append(sample(rad_offset + TAU + overlap * 0.5))
    all_points.append(sample(rad_offset + overlap, 0.98))
    all_points.append(sample(rad_offset + overlap * 0.5, 0.9))
    return all_points, core_points


def ellipse_with_params(x: float, y: float, o: RenderOptions, params: EllipseParams) -> EllipseResult:
    overlap = params.increment * offset(0.1, offset(0.4, 1, o), o)
    ap1, cp1 = compute_ellipse_points(params.increment, x, y, params.rx, params.ry, 1, overlap, o)
    ap2, _ = compute_ellipse_points(params.increment, x, y, params.rx, params.ry, 1.5, 0, o)
    return EllipseResult(
        op=OpSet(OpSetType.PATH, spline(ap1, None, o) + spline(ap2, None, o)),
        estimated_points=cp1,
    )


def ellipse(x: float, y: float, width: float, height: float, o: RenderOptions) -> OpSet:
    params = generate_ellipse_params(width, height, o)
    return ellipse_with_params(x, y, o, params).op


# ---------------------------------------------------------------------------
# Arc
# ---------------------------------------------------------------------------
def normalize_arc_angles(start: float, stop: float) -> Tuple[float, float]:
    """Shift angles so that 0 <= start <= stop and stop - start <= 2*pi.

    Both angles move together while start is negative; a stop before start is
    then advanced by whole turns. Spans larger than a full turn collapse to
    exactly (0, 2*pi).
    """
    if start < 0:
        turns = math.ceil(-start / TAU)
        start += turns * TAU
        stop += turns * TAU
        if start < 0:
            start += TAU
            stop += TAU
    if stop < start:
        stop += math.ceil((start - stop) / TAU) * TAU
    if (stop - start) > TAU:
        start, stop = 0.0, TAU
    return start, stop


def arc_points(
        increment : float,
        cx        : float,
        cy        : float,
        rx        : float,
        ry        : float,
        start     : float,
        stop      : float,
        offset    : float,
        o         : RenderOptions,
    ) -> List[Op]:
    """Sample an arc (with a lead-in joint point) and fit one spline through it."""
    rad_offset = start + offset_symmetric(0.1, o)
    # the walk starts at rad_offset, which may precede start
    checked_step(increment, stop - min(start, rad_offset))

    points: List[Point] = [(
        offset_symmetric(offset, o) + cx + 0.9 * rx * math.cos(rad_offset - increment),
        offset_symmetric(offset, o) + cy + 0.9 * ry * math.sin(rad_offset - increment),
    )]
    angle = rad_offset
    while angle <= stop:
        points.append((
            offset_symmetric(offset, o) + cx + rx * math.cos(angle),
            offset_symmetric(offset, o) + cy + ry * math.sin(angle),
        ))
        angle += increment

    end = (cx + rx * math.cos(stop), cy + ry * math.sin(stop))
    points.extend([end, end])
    return spline(points, None, o)


def arc(
        x             : float,
        y             : float,
        width         : float,
        height        : float,
        start         : float,
        stop          : float,
        closed        : bool,
        rough_closure : bool,
        o             : RenderOptions,
    ) -> OpSet:
    """Sketchy elliptical arc from `start` to `stop` (radians) around (x, y).

    Raises:
        ValueError: if the normalized span is zero (no angular step exists).
    """
    cx, cy = x, y
    rx = abs(width / 2)
    ry = abs(height / 2)
    rx += offset_symmetric(rx * 0.01, o)
    ry += offset_symmetric(ry * 0.01, o)

    strt, stp = normalize_arc_angles(start, stop)
    ellipse_inc = TAU / o.curve_step_count
    arc_inc = min(ellipse_inc / 2, (stp - strt) / 2)
    ops = arc_points(arc_inc, cx, cy, rx, ry, strt, stp, 1, o)

    if closed:
        start_pt = (cx + rx * math.cos(strt), cy + ry * math.sin(strt))
        stop_pt = (cx + rx * math.cos(stp), cy + ry * math.sin(stp))
        if rough_closure:
            ops += double_line(cx, cy, start_pt[0], start_pt[1], o)
            ops += double_line(cx, cy, stop_pt[0], stop_pt[1], o)
        else:
            ops.append(Op.make(OpCode.LINE_TO, [cx, cy]))
            ops.append(Op.make(OpCode.LINE_TO, start_pt))
    return OpSet(OpSetType.PATH, ops)
