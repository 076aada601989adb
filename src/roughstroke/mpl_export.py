"""
mpl_export.py
-------------

Conversion of op sets into Matplotlib paths, for previews and tests.

    move      -> MOVETO
    lineTo    -> LINETO
    line      -> MOVETO, LINETO
    curve     -> MOVETO anchor, then CURVE4 x3 per (c1, c2, end) triple
    qcurveTo  -> CURVE3 x2

Core API:

    opset_to_mpl_path(opset: OpSet) -> matplotlib.path.Path
    opset_patch(opset: OpSet, **style) -> matplotlib.patches.PathPatch
"""

from __future__ import annotations

__all__ = ["opset_to_mpl_path", "opset_patch"]

from typing import Any, List

import numpy as np
from matplotlib.path import Path as mplPath
from matplotlib.patches import PathPatch

from .core import OpCode, OpSet, OpSetType, Point


def opset_to_mpl_path(opset: OpSet) -> mplPath:
    """Translate an `OpSet` into a single Matplotlib ``Path``.

    Args:
        opset: Ops to convert.

    Returns:
        matplotlib.path.Path with one vertex per code. An empty op set gives an
        empty path.

    Raises:
        TypeError: if `opset` is not an `OpSet`.
    """
    if not isinstance(opset, OpSet):
        raise TypeError(f"Expected an OpSet, got {type(opset).__name__}.")

    verts: List[Point] = []
    codes: List[int] = []
    for op in opset:
        pts = op.points
        if op.op is OpCode.MOVE:
            verts.append(pts[0])
            codes.append(mplPath.MOVETO)
        elif op.op is OpCode.LINE_TO:
            verts.append(pts[0])
            codes.append(mplPath.LINETO)
        elif op.op is OpCode.LINE:
            verts.extend(pts[:2])
            codes.extend([mplPath.MOVETO, mplPath.LINETO])
        elif op.op is OpCode.CURVE:
            verts.append(pts[0])
            codes.append(mplPath.MOVETO)
            for p in pts[1:]:
                verts.append(p)
                codes.append(mplPath.CURVE4)
        elif op.op is OpCode.QCURVE_TO:
            verts.extend(pts[:2])
            codes.extend([mplPath.CURVE3, mplPath.CURVE3])

    if not verts:
        return mplPath(np.empty((0, 2)))
    return mplPath(np.asarray(verts, dtype=float), np.asarray(codes, dtype=mplPath.code_type))


def opset_patch(opset: OpSet, **style: Any) -> PathPatch:
    """Wrap an op set in a ``PathPatch``; stroked paths default to no fill."""
    if opset.type is OpSetType.PATH:
        style.setdefault("fill", False)
    return PathPatch(opset_to_mpl_path(opset), **style)
