"""
jitter.py
---------

Perturbation model: every random offset in the package is produced here.

    offset(min, max, o, gain) = o.roughness * gain * (draw() * (max - min) + min)

A draw is always taken, even when roughness is 0, so switching roughness off
changes the geometry but never the position in the random stream.
"""

from __future__ import annotations

__all__ = ["draw", "offset", "offset_symmetric"]

import logging

from .rng import RNG
from .options import RenderOptions

logger = logging.getLogger(__name__)


def draw(o: RenderOptions) -> float:
    """Next float in [0, 1) from the options' randomizer, attaching one if needed."""
    if o.randomizer is None:
        o.randomizer = RNG(o.seed)
        logger.debug(f"Attached {o.randomizer!r} to options (seed={o.seed})")
    return o.randomizer.random()


def offset(min_val: float, max_val: float, o: RenderOptions, gain: float = 1.0) -> float:
    return o.roughness * gain * (draw(o) * (max_val - min_val) + min_val)


def offset_symmetric(x: float, o: RenderOptions, gain: float = 1.0) -> float:
    """Random offset in [-x, x) scaled by roughness and gain."""
    return offset(-x, x, o, gain)
