"""
path_fitter.py
--------------

Least-squares cubic Bezier fitting of polylines (Schneider, Graphics Gems I).

Used to simplify SVG paths before sketching: each polyline is refit with as
few cubics as keep every input point within `error` of the curve.

    1. parameterize points by chord length,
    2. solve for the two tangent magnitudes (least squares, fixed end tangents),
    3. if the max error is too large, improve the parameters with Newton steps,
    4. still too large: split at the worst point with a shared center tangent
       and recurse on both halves.

Core API:

    fit_cubic(points, error) -> list[np.ndarray]        # each (4, 2)
    PathFitter(sets, closed).fit(error) -> str          # "M x,y C ... [Z]"
    fit_path(sets, closed, error_threshold) -> str
"""

from __future__ import annotations

__all__ = ["fit_cubic", "PathFitter", "fit_path"]

import logging
from typing import List, Sequence

import numpy as np

from .core import Point

logger = logging.getLogger(__name__)

EPS = 1e-12
MAX_NEWTON_ITER = 4


# ---------------------------------------------------------------------------
# Bezier evaluation
# ---------------------------------------------------------------------------
def _bezier(bez: np.ndarray, t: np.ndarray) -> np.ndarray:
    t = t[:, None]
    u = 1.0 - t
    return u**3 * bez[0] + 3 * u**2 * t * bez[1] + 3 * u * t**2 * bez[2] + t**3 * bez[3]


def _bezier_d1(bez: np.ndarray, t: np.ndarray) -> np.ndarray:
    t = t[:, None]
    u = 1.0 - t
    return 3 * (u**2 * (bez[1] - bez[0]) + 2 * u * t * (bez[2] - bez[1]) + t**2 * (bez[3] - bez[2]))


def _bezier_d2(bez: np.ndarray, t: np.ndarray) -> np.ndarray:
    t = t[:, None]
    return 6 * ((1 - t) * (bez[2] - 2 * bez[1] + bez[0]) + t * (bez[3] - 2 * bez[2] + bez[1]))


def _unit(v: np.ndarray) -> np.ndarray:
    n = np.linalg.norm(v)
    return v / n if n > EPS else v


# ---------------------------------------------------------------------------
# Schneider fitting
# ---------------------------------------------------------------------------
def _chord_length_parameterize(pts: np.ndarray) -> np.ndarray:
    d = np.concatenate([[0.0], np.cumsum(np.linalg.norm(np.diff(pts, axis=0), axis=1))])
    if d[-1] < EPS:
        return np.zeros(len(pts))
    return d / d[-1]


def _generate_bezier(pts: np.ndarray, u: np.ndarray, t_hat1: np.ndarray, t_hat2: np.ndarray) -> np.ndarray:
    p0, p3 = pts[0], pts[-1]
    b0 = (1 - u) ** 3
    b1 = 3 * (1 - u) ** 2 * u
    b2 = 3 * (1 - u) * u**2
    b3 = u**3
    a1 = b1[:, None] * t_hat1
    a2 = b2[:, None] * t_hat2
    tmp = pts - (b0[:, None] * p0 + b3[:, None] * p3)

    c00 = np.sum(a1 * a1)
    c01 = np.sum(a1 * a2)
    c11 = np.sum(a2 * a2)
    x0 = np.sum(a1 * tmp)
    x1 = np.sum(a2 * tmp)
    det = c00 * c11 - c01 * c01

    seg_len = float(np.linalg.norm(p3 - p0))
    if seg_len < EPS:
        # closed loop: use the polyline length instead
        seg_len = float(np.sum(np.linalg.norm(np.diff(pts, axis=0), axis=1))) / 2
    alpha_l = alpha_r = 0.0
    if abs(det) > EPS:
        alpha_l = (x0 * c11 - x1 * c01) / det
        alpha_r = (c00 * x1 - c01 * x0) / det
    # Degenerate or backwards tangents: fall back to the Wu/Barsky heuristic
    if alpha_l < EPS * seg_len or alpha_r < EPS * seg_len or not np.isfinite([alpha_l, alpha_r]).all():
        alpha_l = alpha_r = seg_len / 3.0
    return np.array([p0, p0 + alpha_l * t_hat1, p3 + alpha_r * t_hat2, p3])


def _reparameterize(bez: np.ndarray, pts: np.ndarray, u: np.ndarray) -> np.ndarray:
    diff = _bezier(bez, u) - pts
    d1 = _bezier_d1(bez, u)
    d2 = _bezier_d2(bez, u)
    num = np.sum(diff * d1, axis=1)
    den = np.sum(d1 * d1, axis=1) + np.sum(diff * d2, axis=1)
    safe = np.abs(den) > EPS
    step = np.zeros_like(u)
    step[safe] = num[safe] / den[safe]
    return np.clip(u - step, 0.0, 1.0)


def _max_error(bez: np.ndarray, pts: np.ndarray, u: np.ndarray):
    dist = np.sum((_bezier(bez, u) - pts) ** 2, axis=1)
    split = int(np.argmax(dist))
    return float(dist[split]), split


def _fit_recursive(pts: np.ndarray, t_hat1: np.ndarray, t_hat2: np.ndarray, error: float) -> List[np.ndarray]:
    if len(pts) == 2:
        dist = float(np.linalg.norm(pts[1] - pts[0])) / 3.0
        return [np.array([pts[0], pts[0] + t_hat1 * dist, pts[1] + t_hat2 * dist, pts[1]])]

    u = _chord_length_parameterize(pts)
    bez = _generate_bezier(pts, u, t_hat1, t_hat2)
    max_err, split = _max_error(bez, pts, u)
    if max_err < error:
        return [bez]

    if max_err < error * 4.0:
        for _ in range(MAX_NEWTON_ITER):
            u = _reparameterize(bez, pts, u)
            bez = _generate_bezier(pts, u, t_hat1, t_hat2)
            max_err, split = _max_error(bez, pts, u)
            if max_err < error:
                return [bez]

    split = max(1, min(len(pts) - 2, split))
    t_center = _unit(pts[split - 1] - pts[split + 1])
    if np.linalg.norm(t_center) < EPS:
        t_center = _unit(pts[split - 1] - pts[split])
    left = _fit_recursive(pts[:split + 1], t_hat1, t_center, error)
    right = _fit_recursive(pts[split:], -t_center, t_hat2, error)
    return left + right


def _dedupe(points: Sequence[Point]) -> np.ndarray:
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    if len(pts) < 2:
        return pts
    keep = np.concatenate([[True], np.any(np.abs(np.diff(pts, axis=0)) > 1e-9, axis=1)])
    return pts[keep]


def fit_cubic(points: Sequence[Point], error: float) -> List[np.ndarray]:
    """Fit cubics through `points` within `error` (distance units).

    Returns:
        List of (4, 2) arrays [p0, c1, c2, p3]; empty if fewer than two
        distinct points are given.
    """
    pts = _dedupe(points)
    if len(pts) < 2:
        return []
    t_hat1 = _unit(pts[1] - pts[0])
    t_hat2 = _unit(pts[-2] - pts[-1])
    return _fit_recursive(pts, t_hat1, t_hat2, float(error) ** 2)


# ---------------------------------------------------------------------------
# Path string output
# ---------------------------------------------------------------------------
def _fmt(v: float) -> str:
    return f"{v:.10g}"


class PathFitter:
    """Refit polylines and emit SVG path data.

    Args:
        sets: One polyline per subpath.
        closed: Append `Z` after each subpath.
    """

    def __init__(self, sets: Sequence[Sequence[Point]], closed: bool):
        self.sets = [list(s) for s in sets]
        self.closed = closed

    def fit(self, error: float) -> str:
        commands: List[str] = []
        for points in self.sets:
            curves = fit_cubic(points, error)
            if not curves:
                continue
            p0 = curves[0][0]
            parts = [f"M{_fmt(p0[0])},{_fmt(p0[1])}"]
            for bez in curves:
                parts.append(
                    "C" + " ".join(f"{_fmt(p[0])},{_fmt(p[1])}" for p in bez[1:])
                )
            if self.closed:
                parts.append("Z")
            commands.append(" ".join(parts))
            logger.debug(f"Refit {len(points)} points into {len(curves)} cubic(s)")
        return " ".join(commands)


def fit_path(sets: Sequence[Sequence[Point]], closed: bool, error_threshold: float) -> str:
    return PathFitter(sets, closed).fit(error_threshold)
