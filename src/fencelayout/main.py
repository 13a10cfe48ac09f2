"""
Application Entry
=================
Command line front end: load a spec (or a sheet of specs), lay it out and
write SVG, PNG or PDF.

Why is this file needed?
------------------------
It acts as the composition root. It:
1. Configures logging.
2. Loads and validates the input through the model layer.
3. Hands the finished drawing to the renderer matching the output suffix.
4. Turns every expected failure into a logged message and exit code 1.

Usage:
    $ fencelayout gate.json -o gate.svg
    $ fencelayout sheet.json -o sheet.png --dpi 150 --scale 0.2
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from fencelayout.config import DEFAULT_CONSTANTS
from fencelayout.logging_config import setup_logging
from fencelayout.model.gaps import validate_spec
from fencelayout.model.io import APP_VERSION, SpecFormatError, load_sheet
from fencelayout.model.layout import compose_sheet, render_layout
from fencelayout.render.mpl import SUPPORTED_FORMATS, save_figure
from fencelayout.render.svg import save_svg

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fencelayout",
        description="Render a technical side view of fence and gate modules.",
    )
    parser.add_argument("spec", type=Path, help="JSON spec of one module or a sheet with 'modules'")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output file (.svg, .png or .pdf)")
    parser.add_argument("--dpi", type=int, default=None, help="Raster resolution for PNG/PDF (default 300)")
    parser.add_argument("--scale", type=float, default=None, help="Override the drawing scale of every module")
    parser.add_argument("--log-level", default="INFO", choices=LOG_LEVELS, help="Logging verbosity")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser


def run(args: argparse.Namespace) -> int:
    suffix = args.output.suffix.lower()
    if suffix != ".svg" and suffix not in SUPPORTED_FORMATS:
        logger.error(f"Unsupported output format '{suffix}'")
        return 1
    if args.scale is not None and not args.scale > 0:
        logger.error(f"Scale must be positive, got {args.scale}")
        return 1

    try:
        specs = load_sheet(args.spec)
    except FileNotFoundError:
        logger.error(f"Spec file not found: {args.spec}")
        return 1
    except SpecFormatError as e:
        logger.error(f"Invalid spec file '{args.spec}': {e}")
        return 1

    if args.scale is not None:
        specs = [replace(spec, scale=args.scale) for spec in specs]

    for spec in specs:
        for issue in validate_spec(spec):
            logger.warning(f"{spec.title or 'module'}: {issue}")

    drawings = [render_layout(spec, DEFAULT_CONSTANTS) for spec in specs]
    if len(drawings) == 1:
        drawing = drawings[0]
    else:
        gutter = DEFAULT_CONSTANTS.module_gutter * specs[0].scale
        drawing = compose_sheet(drawings, gutter)

    try:
        if suffix == ".svg":
            save_svg(drawing, args.output)
        else:
            save_figure(drawing, args.output, dpi=args.dpi)
    except OSError:
        logger.exception(f"Could not write '{args.output}'")
        return 1

    logger.info(f"Done: {len(specs)} module(s) written to {args.output}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    # 2. Lay out and render
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
