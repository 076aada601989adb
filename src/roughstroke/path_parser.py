"""
path_parser.py
--------------

SVG path data (`d` attribute) parsing.

`parse_path` turns a path string into a flat list of `Segment`s, one per
command instance: implicit repetition ("L 1 2 3 4") is split into separate
segments, and extra coordinate pairs after a move become line segments
("M 0 0 10 10" -> M, L; "m" -> m, l). Arc flags are read as single digits so
minified input such as "a5 5 0 1010 10" parses correctly.

Malformed input degrades instead of failing:

- a trailing operand group that is too short is dropped (WARNING),
- numbers before the first command are dropped (WARNING),
- unknown command letters are kept as segments (DEBUG) and left for the
  interpreter to skip.

`ParsedPath` adds the derived views used by simplification: whether the path
ends closed, and one absolute polyline per subpath with curves and arcs
flattened.
"""

from __future__ import annotations

__all__ = [
    "FLOAT_RE", "ARITY", "Segment", "parse_path",
    "flatten_cubic", "ParsedPath",
]

import re
import math
import logging
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

from .arc_converter import arc_to_cubic_segments
from .core import Point

logger = logging.getLogger(__name__)

FLOAT_RE = re.compile(r"[-+]?(?:(?:\d*\.\d+)|(?:\d+\.?))(?:[Ee][+-]?\d+)?")
FLAG_RE = re.compile(r"[01]")
# "- 5" is read as "-5"
DETACHED_MINUS_RE = re.compile(r"-\s+")
WHITESPACE = set(" \t\r\n,")

# Operand count per command instance
ARITY = {"M": 2, "L": 2, "H": 1, "V": 1, "Z": 0, "C": 6, "S": 4, "Q": 4, "T": 2, "A": 7}

FLATNESS = 0.25
MAX_FLATTEN_DEPTH = 16


class Segment(NamedTuple):
    """One path command: letter (lowercase = relative) and its operands."""
    key: str
    data: Tuple[float, ...]

    @property
    def command(self) -> str:
        return self.key.upper()

    @property
    def relative(self) -> bool:
        return self.key.islower()


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
def _emit(cmd: Optional[str], args: List[float], segments: List[Segment]) -> None:
    if cmd is None:
        if args:
            logger.warning(f"Dropping {len(args)} operand(s) before the first command")
        return

    upper = cmd.upper()
    if upper not in ARITY:
        logger.debug(f"Unknown path command {cmd!r} kept for skipping")
        segments.append(Segment(cmd, tuple(args)))
        return

    arity = ARITY[upper]
    if arity == 0:
        if args:
            logger.warning(f"Ignoring operands {args} after {cmd!r}")
        segments.append(Segment(cmd, ()))
        return

    groups, leftover = divmod(len(args), arity)
    if leftover or not groups:
        logger.warning(
            f"Command {cmd!r} has {len(args)} operand(s); "
            f"dropping incomplete trailing group of {leftover or len(args)}"
        )

    key = cmd
    for i in range(groups):
        segments.append(Segment(key, tuple(args[i * arity:(i + 1) * arity])))
        if upper == "M":
            key = "L" if cmd == "M" else "l"


def parse_path(d: str) -> List[Segment]:
    """Parse SVG path data into segments.

    Args:
        d: Path data string, e.g. "M10 10 L 20,20 z".

    Returns:
        List of `Segment`, in input order.

    Raises:
        TypeError: if `d` is not a string.
    """
    if not isinstance(d, str):
        raise TypeError(f"Path data must be a string, not {type(d).__name__}")
    d = DETACHED_MINUS_RE.sub("-", d)

    segments: List[Segment] = []
    cmd: Optional[str] = None
    args: List[float] = []
    offset, n = 0, len(d)

    while offset < n:
        char = d[offset]
        if char in WHITESPACE:
            offset += 1
        elif char.isalpha():
            _emit(cmd, args, segments)
            cmd, args = char, []
            offset += 1
        else:
            is_flag = cmd in ("A", "a") and len(args) % 7 in (3, 4)
            match = (FLAG_RE if is_flag else FLOAT_RE).match(d, offset)
            if match is None:
                logger.warning(f"Skipping unexpected character {char!r} at offset {offset}")
                offset += 1
                continue
            args.append(float(match.group(0)))
            offset = match.end()
    _emit(cmd, args, segments)
    return segments


# ---------------------------------------------------------------------------
# Flattening
# ---------------------------------------------------------------------------
def _dist_to_chord(p: Point, a: Point, b: Point) -> float:
    abx, aby = b[0] - a[0], b[1] - a[1]
    denom = math.hypot(abx, aby)
    if denom < 1e-12:
        return math.hypot(p[0] - a[0], p[1] - a[1])
    t = max(0.0, min(1.0, ((p[0] - a[0]) * abx + (p[1] - a[1]) * aby) / (denom * denom)))
    return math.hypot(p[0] - (a[0] + t * abx), p[1] - (a[1] + t * aby))


def _mid(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def flatten_cubic(
        p0       : Point,
        c1       : Point,
        c2       : Point,
        p3       : Point,
        flatness : float = FLATNESS,
        out      : Optional[List[Point]] = None,
        depth    : int = 0,
    ) -> List[Point]:
    """Points approximating a cubic, excluding `p0` and ending with `p3`.

    Subdivides at t=0.5 (de Casteljau) until both control points lie within
    `flatness` of the chord.
    """
    if out is None:
        out = []
    if depth >= MAX_FLATTEN_DEPTH or max(
        _dist_to_chord(c1, p0, p3), _dist_to_chord(c2, p0, p3)
    ) <= flatness:
        out.append(p3)
        return out
    p01, p12, p23 = _mid(p0, c1), _mid(c1, c2), _mid(c2, p3)
    p012, p123 = _mid(p01, p12), _mid(p12, p23)
    p0123 = _mid(p012, p123)
    flatten_cubic(p0, p01, p012, p0123, flatness, out, depth + 1)
    flatten_cubic(p0123, p123, p23, p3, flatness, out, depth + 1)
    return out


def _quad_as_cubic(p0: Point, q: Point, p2: Point) -> Tuple[Point, Point]:
    return (
        (p0[0] + 2 / 3 * (q[0] - p0[0]), p0[1] + 2 / 3 * (q[1] - p0[1])),
        (p2[0] + 2 / 3 * (q[0] - p2[0]), p2[1] + 2 / 3 * (q[1] - p2[1])),
    )


def _reflect(point: Point, about: Point) -> Point:
    return (2 * about[0] - point[0], 2 * about[1] - point[1])


@dataclass
class ParsedPath:
    """Parsed path data with derived polyline views.

    Attributes:
        d: The source path string.
        segments: Parsed segments.
        flatness: Tolerance used when flattening curves into `linear_points`.
    """
    d: str
    flatness: float = FLATNESS
    segments: List[Segment] = field(init=False)

    def __post_init__(self):
        self.segments = parse_path(self.d)

    @property
    def closed(self) -> bool:
        return bool(self.segments) and self.segments[-1].command == "Z"

    @property
    def linear_points(self) -> List[List[Point]]:
        """One absolute polyline per subpath; sets with a single point are dropped."""
        sets: List[List[Point]] = []
        current: List[Point] = []
        pos: Point = (0.0, 0.0)
        start: Optional[Point] = None
        cubic_ref: Optional[Point] = None
        quad_ref: Optional[Point] = None

        def finish():
            nonlocal current
            if len(current) > 1:
                sets.append(current)
            current = []

        for seg in self.segments:
            cmd, d = seg.command, seg.data
            dx, dy = pos if seg.relative else (0.0, 0.0)
            if cmd not in ARITY:
                continue
            if cmd != "M" and not current:
                current = [pos]
            next_cubic_ref: Optional[Point] = None
            next_quad_ref: Optional[Point] = None

            if cmd == "M":
                finish()
                pos = (d[0] + dx, d[1] + dy)
                start = pos
                current = [pos]
            elif cmd == "L":
                pos = (d[0] + dx, d[1] + dy)
                current.append(pos)
            elif cmd == "H":
                pos = (d[0] + dx, pos[1])
                current.append(pos)
            elif cmd == "V":
                pos = (pos[0], d[0] + dy)
                current.append(pos)
            elif cmd == "Z":
                finish()
                if start is not None:
                    pos = start
            elif cmd in ("C", "S"):
                if cmd == "C":
                    c1 = (d[0] + dx, d[1] + dy)
                    rest = d[2:]
                else:
                    c1 = cubic_ref if cubic_ref is not None else (d[0] + dx, d[1] + dy)
                    rest = d
                c2 = (rest[0] + dx, rest[1] + dy)
                end = (rest[2] + dx, rest[3] + dy)
                flatten_cubic(pos, c1, c2, end, self.flatness, current)
                next_cubic_ref = _reflect(c2, end)
                pos = end
            elif cmd in ("Q", "T"):
                if cmd == "Q":
                    q = (d[0] + dx, d[1] + dy)
                    end = (d[2] + dx, d[3] + dy)
                else:
                    end = (d[0] + dx, d[1] + dy)
                    q = quad_ref if quad_ref is not None else end
                c1, c2 = _quad_as_cubic(pos, q, end)
                flatten_cubic(pos, c1, c2, end, self.flatness, current)
                next_quad_ref = _reflect(q, end)
                pos = end
            elif cmd == "A":
                end = (d[5] + dx, d[6] + dy)
                if end != pos:
                    if d[0] == 0 or d[1] == 0:
                        current.append(end)
                    else:
                        p = pos
                        for seg_ in arc_to_cubic_segments(pos, end, (d[0], d[1]), d[2], bool(d[3]), bool(d[4])):
                            flatten_cubic(p, seg_.cp1, seg_.cp2, seg_.to, self.flatness, current)
                            p = seg_.to
                pos = end

            cubic_ref, quad_ref = next_cubic_ref, next_quad_ref
        finish()
        return sets
