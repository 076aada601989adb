"""
__main__.py - Sketch an SVG path from the command line.

    python -m roughstroke "M10 10 L 90 10 L 50 80 Z" --seed 7 --png out.png

Prints the op set as JSON (with the seed actually used) and optionally saves
a Matplotlib preview.
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from .logging_utils import configure_logging
from .options import RenderOptions
from .sketch_path import svg_path


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="roughstroke", description="Hand-drawn strokes for SVG path data.")
    parser.add_argument("path", help="SVG path data, e.g. 'M0 0 L100 0'")
    parser.add_argument("--seed", type=int, default=0, help="random seed (0 picks one)")
    parser.add_argument("--roughness", type=float, default=1.0)
    parser.add_argument("--bowing", type=float, default=1.0)
    parser.add_argument("--simplification", type=float, default=0.0,
                        help="refit error threshold; 0 disables simplification")
    parser.add_argument("--png", type=Path, default=None, help="save a preview image")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--log-dir", type=Path, default=None)
    return parser.parse_args(argv)


def _save_preview(opset, png: Path) -> None:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from .mpl_export import opset_patch

    fig, ax = plt.subplots(figsize=(6, 6))
    try:
        ax.add_patch(opset_patch(opset, edgecolor="black", linewidth=1.0))
        ax.autoscale_view()
        ax.set_aspect("equal")
        ax.invert_yaxis()
        ax.axis("off")
        fig.savefig(png, dpi=150, bbox_inches="tight")
    finally:
        plt.close(fig)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    configure_logging(level=getattr(logging, args.log_level), log_dir=args.log_dir, run_prefix="cli")
    logger = logging.getLogger("roughstroke.cli")

    try:
        o = RenderOptions(
            roughness=args.roughness,
            bowing=args.bowing,
            simplification=args.simplification,
            seed=args.seed,
        )
    except (TypeError, ValueError) as exc:
        logger.error(f"Invalid options: {exc}")
        return 2

    logger.info(f"RenderOptions: {o.as_dict()}")
    opset = svg_path(args.path, o)
    seed_value = o.randomizer.seed_value if o.randomizer is not None else o.seed
    json.dump({"seed": seed_value, **opset.to_dict()}, sys.stdout, indent=2)
    sys.stdout.write("\n")

    if args.png is not None:
        _save_preview(opset, args.png)
        logger.info(f"Preview written to: {args.png}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
