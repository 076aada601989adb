from .rng import RNGBackend, RNG, SequenceRNG, entropy_seed
from .logging_utils import configure_logging
from .options import RenderOptions
from .core import Op, Vector, OpSet, VectorOp, OpCode, OpSetType, EllipseParams, EllipseResult
from .strokes import double_line, spline, curve_with_offset
from .shapes import (
    line, linear_path, polygon, rectangle, curve,
    generate_ellipse_params, ellipse_with_params, ellipse, arc,
)
from .fillers import PatternFiller, RenderHelper, select_filler
from .fills import (
    HELPER, rand_offset_with_range, double_line_ops,
    solid_fill_polygon, pattern_fill_polygon, pattern_fill_arc,
)
from .arc_converter import BezierSegment, arc_to_cubic_segments
from .path_parser import Segment, ParsedPath, parse_path
from .path_fitter import PathFitter, fit_path
from .sketch_path import PathCursor, svg_path
from .mpl_export import opset_to_mpl_path, opset_patch


__all__ = [
    "arc_converter",
    "core",
    "fillers",
    "fills",
    "jitter",
    "logging_utils",
    "mpl_export",
    "options",
    "path_fitter",
    "path_parser",
    "rng",
    "shapes",
    "sketch_path",
    "strokes",
]
