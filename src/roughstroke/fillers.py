"""
fillers.py
----------

Interfaces between the fill algorithms and pluggable pattern strategies.

Concrete patterns (hachure, cross-hatch, dots, ...) live outside this package.
A caller owns a mapping from fill-style name to a factory taking a
`RenderHelper`, and `select_filler` picks one by `RenderOptions.fill_style`.
A filler builds its strokes by calling back into the helper, so its output
shares the options' random stream with everything else.
"""

from __future__ import annotations

__all__ = ["PatternFiller", "RenderHelper", "FillerFactory", "select_filler"]

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Mapping, Optional, Sequence

from .core import Op, OpSet, Point
from .options import RenderOptions

logger = logging.getLogger(__name__)


class RenderHelper(ABC):
    """Sketching operations a pattern filler may call back into."""

    @abstractmethod
    def rand_offset_with_range(self, min_val: float, max_val: float, o: RenderOptions) -> float:
        """Roughness-scaled random value in [min_val, max_val)."""

    @abstractmethod
    def ellipse(self, x: float, y: float, width: float, height: float, o: RenderOptions) -> OpSet:
        """Sketchy ellipse centered at (x, y)."""

    @abstractmethod
    def double_line_ops(self, x1: float, y1: float, x2: float, y2: float, o: RenderOptions) -> List[Op]:
        """The two jittered strokes of a sketchy line."""


class PatternFiller(ABC):
    """Strategy turning a polygon outline into pattern strokes."""

    def __init__(self, helper: RenderHelper):
        self.helper = helper

    @abstractmethod
    def fill_polygon(self, points: Sequence[Point], o: RenderOptions) -> OpSet:
        ...


FillerFactory = Callable[[RenderHelper], PatternFiller]


def select_filler(
        fillers  : Mapping[str, FillerFactory],
        o        : RenderOptions,
        helper   : RenderHelper,
        default  : Optional[str] = None,
    ) -> PatternFiller:
    """Build the filler registered under `o.fill_style`.

    Args:
        fillers: Caller-owned {fill_style: factory(helper)} mapping.
        o: Render options; only `fill_style` is read.
        helper: Capability object handed to the factory.
        default: Style to fall back to when `o.fill_style` is not registered.

    Raises:
        ValueError: if neither `o.fill_style` nor `default` is registered.
    """
    name = o.fill_style
    if name not in fillers:
        if default is None or default not in fillers:
            raise ValueError(
                f"Unknown fill style {name!r}; registered: {sorted(fillers)}"
            )
        logger.debug(f"Fill style {name!r} not registered, using {default!r}")
        name = default
    return fillers[name](helper)
