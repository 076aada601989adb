"""
rng.py
------

Seeded random sources feeding the perturbation model.

- `RNG` wraps either `random.Random` (default) or `numpy.random.Generator`.
- A seed of 0 or None selects an entropy seed (PID ^ time ^ random bits).
  The value actually used is kept in `RNG.seed_value`, so a non-deterministic
  run can still be replayed by passing that value back in.
- `SequenceRNG` replays a fixed list of draws, for tests and debugging.

All randomness in the package is drawn through an instance owned by a
`RenderOptions` object; nothing here is module-global.
"""

from __future__ import annotations

__all__ = ["RNGBackend", "RNG", "SequenceRNG", "entropy_seed"]

import os
import time
import random
import logging
import threading
from numbers import Real
from typing import Optional, Sequence, TypeAlias, Union

import numpy as np

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------
# Type alias (forward-compatible)
# ---------------------------------------------------------------------
RNGBackend: TypeAlias = Union[random.Random, np.random.Generator]


def entropy_seed() -> int:
    """Return a fresh non-zero seed derived from PID, wall clock and OS entropy."""
    seed_val = os.getpid() ^ (time.time_ns() & 0xFFFFFFFF) ^ random.getrandbits(32)
    return seed_val or 1


# ---------------------------------------------------------------------
# RNG class
# ---------------------------------------------------------------------
class RNG:
    """Encapsulated seeded random generator.

    Attributes:
        seed_value: The integer the backend was seeded with.
        _rng:  Backend RNG (random.Random or numpy.random.Generator).
        _lock: threading.Lock guarding the backend state.

    Notes:
        - Uses the Python stdlib RNG by default.
        - Seeds 0 and None are an explicit request for an entropy seed;
          any other integer gives a reproducible stream.
        - The lock keeps the backend state consistent, but draw order from
          several threads is still arbitrary, so sharing one instance across
          threads gives up determinism.
    """

    def __init__(self, seed: Optional[int] = None, use_numpy: bool = False):
        self._lock = threading.Lock()
        self._use_numpy = use_numpy
        self._init_backend(seed)

    def _init_backend(self, seed: Optional[int]) -> None:
        if seed:
            self.seed_value = int(seed)
        else:
            self.seed_value = entropy_seed()
            logger.debug(f"Zero/unset seed; using entropy seed {self.seed_value}")

        if self._use_numpy:
            self._rng: RNGBackend = np.random.default_rng(self.seed_value)
        else:
            self._rng: RNGBackend = random.Random(self.seed_value)

    # -----------------------------------------------------------------
    # Core seeding
    # -----------------------------------------------------------------
    def seed(self, seed: Optional[int] = None) -> None:
        """Reinitialize the RNG in place (preserves object identity)."""
        with self._lock:
            self._init_backend(seed)

    # -----------------------------------------------------------------
    # Draws
    # -----------------------------------------------------------------
    def random(self) -> float:
        """Return the next float in [0, 1)."""
        with self._lock:
            out = self._rng.random()
            if self._use_numpy and isinstance(out, Real):
                return float(out)
            return out

    def uniform(self, a: float, b: float) -> float:
        with self._lock:
            return float(self._rng.uniform(a, b))

    # -----------------------------------------------------------------
    # Utility & Introspection
    # -----------------------------------------------------------------
    def getstate(self):
        with self._lock:
            if self._use_numpy:
                return self._rng.bit_generator.state
            return self._rng.getstate()

    def setstate(self, state) -> None:
        with self._lock:
            if self._use_numpy:
                self._rng.bit_generator.state = state
            else:
                self._rng.setstate(state)

    def __repr__(self) -> str:
        backend = "numpy" if self._use_numpy else "stdlib"
        return f"<RNG backend={backend} seed={self.seed_value} id={id(self)}>"


class SequenceRNG(RNG):
    """Deterministic stand-in that cycles through a fixed list of draws.

    Example:
        >>> r = SequenceRNG([0.5])
        >>> r.random(), r.random()
        (0.5, 0.5)
    """

    def __init__(self, values: Sequence[float]):
        values = [float(v) for v in values]
        if not values:
            raise ValueError("SequenceRNG needs at least one value.")
        if any(not 0.0 <= v < 1.0 for v in values):
            raise ValueError(f"SequenceRNG values must lie in [0, 1); got {values}")
        self._lock = threading.Lock()
        self._use_numpy = False
        self._values = values
        self._index = 0
        self.seed_value = 0

    def seed(self, seed: Optional[int] = None) -> None:
        with self._lock:
            self._index = 0

    def random(self) -> float:
        with self._lock:
            out = self._values[self._index % len(self._values)]
            self._index += 1
            return out

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.random()

    def getstate(self):
        with self._lock:
            return self._index

    def setstate(self, state) -> None:
        with self._lock:
            self._index = int(state)

    def __repr__(self) -> str:
        return f"<SequenceRNG n={len(self._values)} index={self._index}>"
