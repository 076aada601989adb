"""
-------
conftest.py
-------
Shared pytest fixtures for roughstroke tests.
"""

import logging

import pytest
import matplotlib
matplotlib.use("Agg")  # headless backend for CI
import matplotlib.pyplot as plt

from roughstroke.core import OpSet, OpSetType
from roughstroke.fillers import PatternFiller
from roughstroke.options import RenderOptions


# -----------------------------------------------------------------------------
# Options fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def smooth_opts() -> RenderOptions:
  """Roughness 0: every jitter term vanishes."""
  return RenderOptions(roughness=0, bowing=0, seed=1)


@pytest.fixture
def rough_opts() -> RenderOptions:
  """Default style with a fixed seed."""
  return RenderOptions(seed=42)


@pytest.fixture
def make_opts():
  """Factory for fresh options (no randomizer attached yet)."""
  def _make(**kwargs) -> RenderOptions:
    kwargs.setdefault("seed", 42)
    return RenderOptions(**kwargs)
  return _make


# -----------------------------------------------------------------------------
# Filler fixtures
# -----------------------------------------------------------------------------
class RecordingFiller(PatternFiller):
  """Filler that remembers its input and returns an empty fill."""

  def __init__(self, helper):
    super().__init__(helper)
    self.calls = []

  def fill_polygon(self, points, o):
    self.calls.append(list(points))
    return OpSet(OpSetType.FILL_PATH, [])


class EdgeHatchFiller(PatternFiller):
  """Filler drawing one sketchy line per polygon edge through the helper."""

  def fill_polygon(self, points, o):
    ops = []
    for p, q in zip(points, points[1:] + points[:1]):
      ops.extend(self.helper.double_line_ops(p[0], p[1], q[0], q[1], o))
    return OpSet(OpSetType.PATH, ops)


@pytest.fixture
def recording_filler():
  from roughstroke.fills import HELPER
  return RecordingFiller(HELPER)


@pytest.fixture
def filler_registry():
  return {"record": RecordingFiller, "edges": EdgeHatchFiller}


# -----------------------------------------------------------------------------
# Matplotlib / logging fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(scope="function")
def fig_ax():
  """
  Create and yield an isolated Matplotlib Figure/Axes pair.

  The figure is automatically closed after the test to avoid memory leaks.
  """
  fig, ax = plt.subplots(figsize=(4, 3))
  yield fig, ax
  plt.close(fig)


@pytest.fixture
def reset_package_logger():
  """Drop handlers installed by configure_logging on the package logger."""
  yield
  logger = logging.getLogger("roughstroke")
  for h in list(logger.handlers):
    logger.removeHandler(h)
    h.close()
  logger.setLevel(logging.NOTSET)
