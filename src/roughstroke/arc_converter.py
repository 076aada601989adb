"""
arc_converter.py
----------------

SVG elliptical arc (`A` command) to cubic Bezier conversion.

The endpoint form (from, to, radii, x-axis rotation, large-arc and sweep flags)
is converted to the center form following the SVG implementation notes:

    x' = R(-phi) @ (from - to) / 2
    c' = +/- sqrt((rx^2 ry^2 - rx^2 y'^2 - ry^2 x'^2) / (rx^2 y'^2 + ry^2 x'^2))
         * (rx y' / ry, -ry x' / rx)
    c  = R(phi) @ c' + (from + to) / 2

Radii too small to span the endpoints are scaled up uniformly. The angular
sweep is split into ceil(|dtheta| / (pi/2)) equal sub-arcs, each approximated by
one cubic with tangent length

    T = 8/3 * sin^2(delta/4) / sin(delta/2)

`arc_to_cubic_segments` is a generator: segments are produced one at a time and
the iterator cannot be restarted.
"""

from __future__ import annotations

__all__ = ["BezierSegment", "arc_to_cubic_segments", "vector_angle"]

import math
from typing import Iterator, NamedTuple, Tuple

import numpy as np

from .core import Point

MAX_SEGMENT_ANGLE = math.pi / 2


class BezierSegment(NamedTuple):
    cp1: Point
    cp2: Point
    to: Point


def vector_angle(ux: float, uy: float, vx: float, vy: float) -> float:
    """Counter-clockwise angle in [0, 2*pi) from vector u to vector v."""
    ta = math.atan2(uy, ux)
    tb = math.atan2(vy, vx)
    if tb >= ta:
        return tb - ta
    return 2 * math.pi - (ta - tb)


def _rotation(phi: float) -> np.ndarray:
    return np.array([[math.cos(phi), -math.sin(phi)], [math.sin(phi), math.cos(phi)]])


def arc_to_cubic_segments(
        from_pt   : Point,
        to_pt     : Point,
        radii     : Tuple[float, float],
        angle     : float,
        large_arc : bool,
        sweep     : bool,
    ) -> Iterator[BezierSegment]:
    """Yield the cubic segments approximating one SVG elliptical arc.

    Args:
        from_pt: Current pen position.
        to_pt: Arc end point.
        radii: (rx, ry); signs are ignored.
        angle: Rotation of the ellipse x-axis, in degrees.
        large_arc: SVG large-arc flag.
        sweep: SVG sweep flag (True is the positive-angle direction).

    Yields:
        BezierSegment(cp1, cp2, to). The last segment ends exactly at `to_pt`.
        Coincident endpoints or a zero radius yield nothing.
    """
    x1, y1 = float(from_pt[0]), float(from_pt[1])
    x2, y2 = float(to_pt[0]), float(to_pt[1])
    rx, ry = abs(radii[0]), abs(radii[1])
    if (x1 == x2 and y1 == y2) or rx == 0 or ry == 0:
        return

    phi = math.radians(angle)
    rot = _rotation(phi)
    src = np.array([x1, y1])
    dst = np.array([x2, y2])

    xd, yd = rot.T @ ((src - dst) / 2)

    numerator = rx * rx * ry * ry - rx * rx * yd * yd - ry * ry * xd * xd
    if numerator < 0:
        s = math.sqrt(1 - numerator / (rx * rx * ry * ry))
        rx *= s
        ry *= s
        root = 0.0
    else:
        root = math.sqrt(numerator / (rx * rx * yd * yd + ry * ry * xd * xd))
        if bool(large_arc) == bool(sweep):
            root = -root

    cxd = root * rx * yd / ry
    cyd = -root * ry * xd / rx
    center = rot @ np.array([cxd, cyd]) + (src + dst) / 2

    theta1 = vector_angle(1, 0, (xd - cxd) / rx, (yd - cyd) / ry)
    dtheta = vector_angle((xd - cxd) / rx, (yd - cyd) / ry, (-xd - cxd) / rx, (-yd - cyd) / ry)
    if not sweep and dtheta > 0:
        dtheta -= 2 * math.pi
    elif sweep and dtheta < 0:
        dtheta += 2 * math.pi

    num_segs = math.ceil(abs(dtheta) / MAX_SEGMENT_ANGLE)
    if num_segs == 0:
        return
    delta = dtheta / num_segs
    t = 8 / 3 * math.sin(delta / 4) ** 2 / math.sin(delta / 2)

    def point_at(a: float) -> np.ndarray:
        return rot @ np.array([rx * math.cos(a), ry * math.sin(a)]) + center

    def tangent_at(a: float) -> np.ndarray:
        return rot @ np.array([-rx * math.sin(a), ry * math.cos(a)])

    start = src
    for i in range(num_segs):
        a1 = theta1 + i * delta
        a2 = a1 + delta
        end = dst if i == num_segs - 1 else point_at(a2)
        cp1 = start + t * tangent_at(a1)
        cp2 = end - t * tangent_at(a2)
        yield BezierSegment(
            cp1=(float(cp1[0]), float(cp1[1])),
            cp2=(float(cp2[0]), float(cp2[1])),
            to=(float(end[0]), float(end[1])),
        )
        start = end
