"""
core.py
-------

Value types shared by the sketching pipeline.

An `Op` (alias `Vector`) is one drawing instruction: an opcode plus a flat tuple
of coordinates. A `curve` op holds one anchor point followed by any number of
(control1, control2, end) triples, so a whole Catmull-Rom chain fits in one op.
An `OpSet` (alias `VectorOp`) is an ordered bundle of ops tagged as a stroked
`path` or a `fillPath`; it is what a rendering backend consumes.
"""

from __future__ import annotations

__all__ = [
    "numeric", "Point", "OpCode", "OpSetType",
    "Op", "Vector", "OpSet", "VectorOp",
    "EllipseParams", "EllipseResult",
    "distance_sq",
]

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple, TypeAlias, Union

numeric: TypeAlias = Union[int, float]
Point: TypeAlias = Tuple[float, float]


class OpCode(str, Enum):
    MOVE = "move"
    LINE_TO = "lineTo"
    LINE = "line"
    CURVE = "curve"
    QCURVE_TO = "qcurveTo"


class OpSetType(str, Enum):
    PATH = "path"
    FILL_PATH = "fillPath"


@dataclass(frozen=True)
class Op:
    """A single drawing instruction."""
    op: OpCode
    data: Tuple[float, ...]

    @classmethod
    def make(cls, op: OpCode, data: Sequence[numeric]) -> Op:
        return cls(OpCode(op), tuple(float(v) for v in data))

    @property
    def points(self) -> List[Point]:
        """The flat coordinate tuple regrouped as (x, y) pairs."""
        return [(self.data[i], self.data[i + 1]) for i in range(0, len(self.data) - 1, 2)]

    def to_dict(self) -> Dict[str, Any]:
        return {"op": self.op.value, "data": list(self.data)}


Vector: TypeAlias = Op


@dataclass
class OpSet:
    """Ordered collection of ops forming one logical stroke pass or fill."""
    type: OpSetType = OpSetType.PATH
    ops: List[Op] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.ops)

    def __iter__(self):
        yield from self.ops

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "ops": [op.to_dict() for op in self.ops]}


VectorOp: TypeAlias = OpSet


@dataclass(frozen=True)
class EllipseParams:
    """Jittered radii and the angular step used to walk an ellipse."""
    rx: float
    ry: float
    increment: float


@dataclass
class EllipseResult:
    op: OpSet
    estimated_points: List[Point]


def distance_sq(p1: Point, p2: Point) -> float:
    return (p1[0] - p2[0]) ** 2 + (p1[1] - p2[1]) ** 2
