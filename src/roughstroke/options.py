"""
options.py - Render options threaded through every sketching call.

The options object is owned by the caller. The only field the package ever
writes is `randomizer`, attached lazily on the first random draw, so that a
whole multi-shape session shares one seeded stream.
"""

from __future__ import annotations

__all__ = ["RenderOptions"]

import math
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .rng import RNG


@dataclass
class RenderOptions:
    """Sketch style and randomness configuration.

    Attributes:
        roughness: Magnitude of all positional jitter (0 disables jitter).
        bowing: Magnitude of perpendicular midline displacement of lines.
        curve_tightness: Catmull-Rom tension; 0 is loose, 1 is a polyline.
        curve_step_count: Baseline number of samples around an ellipse.
        curve_fitting: How closely ellipse radii follow the requested size (0..1).
        max_randomness_offset: Vertex jitter used by solid fills.
        simplification: Error threshold for refitting SVG paths; 0 disables it.
        seed: Integer seed; 0 requests an entropy seed.
        fill_style: Name of the pattern filler a caller's mapping selects.
        randomizer: Random source attached on first use.
    """
    roughness: float = 1.0
    bowing: float = 1.0
    curve_tightness: float = 0.0
    curve_step_count: float = 9
    curve_fitting: float = 0.95
    max_randomness_offset: float = 2.0
    simplification: float = 0.0
    seed: int = 0
    fill_style: str = "hachure"
    randomizer: Optional[RNG] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        for name in ("roughness", "max_randomness_offset", "simplification"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or value < 0:
                raise ValueError(f"{name} must be a non-negative number; got {value!r}")
        if not isinstance(self.curve_step_count, (int, float)) or not (
            math.isfinite(self.curve_step_count) and self.curve_step_count > 0
        ):
            raise ValueError(
                f"curve_step_count must be a positive number; got {self.curve_step_count!r}"
            )
        if not 0.0 <= self.curve_fitting <= 1.0:
            raise ValueError(f"curve_fitting must lie in [0, 1]; got {self.curve_fitting!r}")
        if not isinstance(self.seed, int):
            raise TypeError(f"seed must be an integer, not {type(self.seed).__name__}")

    def copy(self, **changes: Any) -> RenderOptions:
        """Return an independent clone without an attached randomizer."""
        changes.setdefault("randomizer", None)
        return dataclasses.replace(self, **changes)

    def with_seed(self, seed: int) -> RenderOptions:
        return self.copy(seed=seed)

    def as_dict(self) -> Dict[str, Any]:
        """Plain dict of the style fields (the randomizer is left out)."""
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)
            if f.name != "randomizer"
        }
