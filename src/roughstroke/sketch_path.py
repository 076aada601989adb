"""
sketch_path.py
--------------

Sketchy rendering of SVG path data.

`svg_path` parses a path string and walks its segments once, keeping the pen
state in a `PathCursor`. Each command letter maps to a handler through
`HANDLERS`; a handler receives the cursor, the segment and the previous
segment, emits ops, and advances the cursor.

    M/m      jittered move (by MAX_RAND_OFFSET), emitted as a `move`
    L/l H/h V/v
             double line from the pen to the target
    Z/z      double line back to the subpath start, which is then cleared
    C/c S/s  two jittered cubic passes (offsets 2 and 2.5); the reflected
             second control point is kept for a following S/s
    Q/q T/t  two jittered `qcurveTo` passes, each after its own jittered `move`
    A/a      converted to cubics by `arc_to_cubic_segments`, each drawn like C;
             a zero radius degrades to a double line, a zero-length arc to
             nothing

Relative operands are added to the current (already jittered) pen position.
Unknown commands emit nothing and leave the pen where it was.

With `o.simplification > 0` the path is first flattened to polylines, refit by
`fit_path` with that error threshold, and the fitted path is drawn instead.
"""

from __future__ import annotations

__all__ = ["PathCursor", "HANDLERS", "bezier_to", "process_segment", "svg_path"]

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .arc_converter import arc_to_cubic_segments
from .core import Op, OpCode, OpSet, OpSetType, Point
from .jitter import offset_symmetric
from .options import RenderOptions
from .path_fitter import fit_path
from .path_parser import ParsedPath, Segment
from .strokes import MAX_RAND_OFFSET, double_line

logger = logging.getLogger(__name__)


@dataclass
class PathCursor:
    """Pen state for one path interpretation.

    Attributes:
        x, y: Current pen position.
        first: Start of the current subpath, set by the first positioning
            after a close (or at the start of the path).
        bezier_reflection: Mirror of the last cubic's second control point.
        quad_reflection: Mirror of the last quadratic's control point.
    """
    x: float = 0.0
    y: float = 0.0
    first: Optional[Point] = None
    bezier_reflection: Optional[Point] = None
    quad_reflection: Optional[Point] = None

    def set_position(self, x: float, y: float) -> None:
        self.x, self.y = x, y
        if self.first is None:
            self.first = (x, y)


def _target(cursor: PathCursor, seg: Segment, i: int = 0):
    x, y = seg.data[i], seg.data[i + 1]
    if seg.relative:
        x += cursor.x
        y += cursor.y
    return x, y


def bezier_to(
        x1     : float,
        y1     : float,
        x2     : float,
        y2     : float,
        x      : float,
        y      : float,
        cursor : PathCursor,
        o      : RenderOptions,
    ) -> List[Op]:
    """Two jittered passes of the cubic from the pen through (x1, y1), (x2, y2) to (x, y).

    The first pass starts exactly at the pen, the second at the pen jittered by
    the first pass's magnitude. The pen ends at the second pass's end point.
    """
    ros = [MAX_RAND_OFFSET, MAX_RAND_OFFSET + 0.5]
    ops: List[Op] = []
    end = (x, y)
    for i, ro in enumerate(ros):
        if i == 0:
            start = (cursor.x, cursor.y)
        else:
            start = (cursor.x + offset_symmetric(ros[0], o), cursor.y + offset_symmetric(ros[0], o))
        end = (x + offset_symmetric(ro, o), y + offset_symmetric(ro, o))
        ops.append(Op.make(OpCode.CURVE, [
            start[0], start[1],
            x1 + offset_symmetric(ro, o), y1 + offset_symmetric(ro, o),
            x2 + offset_symmetric(ro, o), y2 + offset_symmetric(ro, o),
            end[0], end[1],
        ]))
    cursor.set_position(*end)
    return ops


def _quad_to(x1: float, y1: float, x: float, y: float, cursor: PathCursor, o: RenderOptions) -> List[Op]:
    ops: List[Op] = []
    end = (x, y)
    for ro in (1 * (1 + o.roughness * 0.2), 1.5 * (1 + o.roughness * 0.22)):
        ops.append(Op.make(OpCode.MOVE, [
            cursor.x + offset_symmetric(ro, o), cursor.y + offset_symmetric(ro, o),
        ]))
        end = (x + offset_symmetric(ro, o), y + offset_symmetric(ro, o))
        ops.append(Op.make(OpCode.QCURVE_TO, [
            x1 + offset_symmetric(ro, o), y1 + offset_symmetric(ro, o), end[0], end[1],
        ]))
    cursor.set_position(*end)
    return ops


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------
def _move(cursor: PathCursor, seg: Segment, prev: Optional[Segment], o: RenderOptions) -> List[Op]:
    x, y = _target(cursor, seg)
    x += offset_symmetric(MAX_RAND_OFFSET, o)
    y += offset_symmetric(MAX_RAND_OFFSET, o)
    cursor.set_position(x, y)
    return [Op.make(OpCode.MOVE, [x, y])]


def _line(cursor: PathCursor, seg: Segment, prev: Optional[Segment], o: RenderOptions) -> List[Op]:
    x, y = _target(cursor, seg)
    ops = double_line(cursor.x, cursor.y, x, y, o)
    cursor.set_position(x, y)
    return ops


def _horizontal(cursor: PathCursor, seg: Segment, prev: Optional[Segment], o: RenderOptions) -> List[Op]:
    x = seg.data[0] + (cursor.x if seg.relative else 0)
    ops = double_line(cursor.x, cursor.y, x, cursor.y, o)
    cursor.set_position(x, cursor.y)
    return ops


def _vertical(cursor: PathCursor, seg: Segment, prev: Optional[Segment], o: RenderOptions) -> List[Op]:
    y = seg.data[0] + (cursor.y if seg.relative else 0)
    ops = double_line(cursor.x, cursor.y, cursor.x, y, o)
    cursor.set_position(cursor.x, y)
    return ops


def _close(cursor: PathCursor, seg: Segment, prev: Optional[Segment], o: RenderOptions) -> List[Op]:
    if cursor.first is None:
        return []
    fx, fy = cursor.first
    ops = double_line(cursor.x, cursor.y, fx, fy, o)
    cursor.set_position(fx, fy)
    cursor.first = None
    return ops


def _cubic(cursor: PathCursor, seg: Segment, prev: Optional[Segment], o: RenderOptions) -> List[Op]:
    x1, y1 = _target(cursor, seg, 0)
    x2, y2 = _target(cursor, seg, 2)
    x, y = _target(cursor, seg, 4)
    ops = bezier_to(x1, y1, x2, y2, x, y, cursor, o)
    cursor.bezier_reflection = (x + (x - x2), y + (y - y2))
    return ops


def _smooth_cubic(cursor: PathCursor, seg: Segment, prev: Optional[Segment], o: RenderOptions) -> List[Op]:
    x2, y2 = _target(cursor, seg, 0)
    x, y = _target(cursor, seg, 2)
    x1, y1 = x2, y2
    if prev is not None and prev.command in ("C", "S") and cursor.bezier_reflection is not None:
        x1, y1 = cursor.bezier_reflection
    ops = bezier_to(x1, y1, x2, y2, x, y, cursor, o)
    cursor.bezier_reflection = (x + (x - x2), y + (y - y2))
    return ops


def _quadratic(cursor: PathCursor, seg: Segment, prev: Optional[Segment], o: RenderOptions) -> List[Op]:
    x1, y1 = _target(cursor, seg, 0)
    x, y = _target(cursor, seg, 2)
    ops = _quad_to(x1, y1, x, y, cursor, o)
    cursor.quad_reflection = (x + (x - x1), y + (y - y1))
    return ops


def _smooth_quadratic(cursor: PathCursor, seg: Segment, prev: Optional[Segment], o: RenderOptions) -> List[Op]:
    x, y = _target(cursor, seg, 0)
    x1, y1 = x, y
    if prev is not None and prev.command in ("Q", "T") and cursor.quad_reflection is not None:
        x1, y1 = cursor.quad_reflection
    ops = _quad_to(x1, y1, x, y, cursor, o)
    cursor.quad_reflection = (x + (x - x1), y + (y - y1))
    return ops


def _arc(cursor: PathCursor, seg: Segment, prev: Optional[Segment], o: RenderOptions) -> List[Op]:
    rx, ry = abs(seg.data[0]), abs(seg.data[1])
    angle = seg.data[2]
    large_arc, sweep = bool(seg.data[3]), bool(seg.data[4])
    x, y = _target(cursor, seg, 5)
    if x == cursor.x and y == cursor.y:
        return []
    if rx == 0 or ry == 0:
        ops = double_line(cursor.x, cursor.y, x, y, o)
        cursor.set_position(x, y)
        return ops

    ops: List[Op] = []
    for bez in arc_to_cubic_segments((cursor.x, cursor.y), (x, y), (rx, ry), angle, large_arc, sweep):
        ops.extend(bezier_to(bez.cp1[0], bez.cp1[1], bez.cp2[0], bez.cp2[1], bez.to[0], bez.to[1], cursor, o))
    return ops


Handler = Callable[[PathCursor, Segment, Optional[Segment], RenderOptions], List[Op]]

HANDLERS: Dict[str, Handler] = {
    "M": _move,
    "L": _line,
    "H": _horizontal,
    "V": _vertical,
    "Z": _close,
    "C": _cubic,
    "S": _smooth_cubic,
    "Q": _quadratic,
    "T": _smooth_quadratic,
    "A": _arc,
}


def process_segment(
        cursor : PathCursor,
        seg    : Segment,
        prev   : Optional[Segment],
        o      : RenderOptions,
    ) -> List[Op]:
    """Emit the ops for one segment and advance `cursor`; unknown commands emit nothing."""
    handler = HANDLERS.get(seg.command)
    if handler is None:
        logger.debug(f"Skipping unsupported path command {seg.key!r}")
        return []
    return handler(cursor, seg, prev, o)


def svg_path(d: str, o: RenderOptions) -> OpSet:
    """Sketchy strokes for SVG path data `d`.

    Raises:
        TypeError: if `d` is not a string.
    """
    path = ParsedPath(d)
    if o.simplification:
        fitted = fit_path(path.linear_points, path.closed, o.simplification)
        logger.debug(f"Simplified path ({len(path.segments)} segments) to {fitted!r}")
        path = ParsedPath(fitted)

    cursor = PathCursor()
    ops: List[Op] = []
    prev: Optional[Segment] = None
    for seg in path.segments:
        ops.extend(process_segment(cursor, seg, prev, o))
        prev = seg
    return OpSet(OpSetType.PATH, ops)
