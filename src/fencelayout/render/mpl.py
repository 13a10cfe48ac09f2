"""
Matplotlib Renderer
===================
Paints a `Drawing` onto a matplotlib figure for raster (PNG) and PDF output.

Why is this file needed?
------------------------
1. Print output: Workshops want a PNG at 300 DPI or a PDF page, which an SVG
   string does not give without extra tooling.
2. Fidelity: The figure is sized so that one drawing unit is one pixel at
   96 px/in, which keeps font sizes and stroke widths consistent with the SVG.

The figure is created without pyplot so rendering works headless and does not
touch global pyplot state.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from matplotlib import patheffects
from matplotlib.figure import Figure
from matplotlib.patches import FancyArrowPatch, Polygon as PolygonPatch, Rectangle

from fencelayout.config import DEFAULT_RENDER_SETTINGS, PALETTE, RenderSettings
from fencelayout.model.geometry_primitives import (
    Band,
    Line,
    Polygon,
    Primitive,
    Rect,
    Style,
    Text,
)
from fencelayout.model.layout import Drawing

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = (".png", ".pdf")

_HALIGN = {"start": "left", "middle": "center", "end": "right"}
_VALIGN = {"auto": "baseline", "middle": "center", "hanging": "top"}


def _pt(px: float, settings: RenderSettings) -> float:
    """Drawing units (px) to typographic points."""
    return px * 72.0 / settings.px_per_inch


def _patch_kwargs(style: Style, settings: RenderSettings) -> dict:
    kwargs = {
        "facecolor": style.fill or "none",
        "edgecolor": style.stroke or "none",
        "linewidth": _pt(style.stroke_width, settings) if style.stroke else 0.0,
        "alpha": style.opacity,
    }
    if style.dash:
        kwargs["linestyle"] = (0, tuple(style.dash))
    return kwargs


def _draw(ax, p: Primitive, settings: RenderSettings) -> None:
    match p:
        case Rect():
            ax.add_patch(Rectangle((p.x, p.y), p.width, p.height, **_patch_kwargs(p.style, settings)))
        case Band():
            ax.add_patch(PolygonPatch(p.polygon(), closed=True, **_patch_kwargs(p.style, settings)))
        case Polygon():
            ax.add_patch(PolygonPatch(p.to_array(), closed=True, **_patch_kwargs(p.style, settings)))
        case Line():
            left = "<|" if p.arrow_start else ""
            right = "|>" if p.arrow_end else ""
            ax.add_patch(
                FancyArrowPatch(
                    posA=p.start,
                    posB=p.end,
                    arrowstyle=f"{left}-{right}",
                    mutation_scale=_pt(settings.arrow_size_px, settings) * 1.5,
                    shrinkA=0.0,
                    shrinkB=0.0,
                    color=p.style.stroke or PALETTE.stroke,
                    linewidth=_pt(p.style.stroke_width, settings),
                )
            )
        case Text():
            x, y = p.position
            effects = []
            if p.style.stroke:
                effects = [
                    patheffects.withStroke(
                        linewidth=_pt(p.style.stroke_width, settings),
                        foreground=p.style.stroke,
                    )
                ]
            ax.text(
                x,
                y,
                p.text,
                fontsize=_pt(p.font_size, settings),
                fontweight="bold" if p.bold else "normal",
                family=settings.font_family,
                color=p.style.fill or PALETTE.text,
                ha=_HALIGN[str(p.anchor)],
                va=_VALIGN[str(p.baseline)],
                # screen rotation is clockwise, matplotlib counter-clockwise
                rotation=-p.rotation,
                rotation_mode="anchor",
                path_effects=effects,
            )
        case _:
            raise TypeError(f"Unsupported primitive: {type(p).__name__}")


def render_figure(
    drawing: Drawing,
    margin: Optional[float] = None,
    settings: RenderSettings = DEFAULT_RENDER_SETTINGS,
) -> Figure:
    """
    Figure with one borderless axes in drawing units, Y pointing down.
    """
    pad = settings.margin_px if margin is None else margin
    box = drawing.bounds().expanded(pad)
    width_in = max(box.width, 1.0) / settings.px_per_inch
    height_in = max(box.height, 1.0) / settings.px_per_inch

    fig = Figure(figsize=(width_in, height_in), dpi=settings.px_per_inch)
    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    ax.set_axis_off()
    ax.set_xlim(box.min_x, box.max_x)
    ax.set_ylim(box.max_y, box.min_y)
    ax.set_aspect("equal", adjustable="box")

    for p in drawing.primitives:
        _draw(ax, p, settings)

    return fig


def save_figure(
    drawing: Drawing,
    filepath: Union[str, Path],
    dpi: Optional[int] = None,
    margin: Optional[float] = None,
    settings: RenderSettings = DEFAULT_RENDER_SETTINGS,
) -> Path:
    """
    Write the drawing as PNG or PDF, chosen by the file suffix.

    Raises:
        ValueError: Unsupported file suffix.
    """
    path = Path(filepath)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported output format '{suffix}', expected one of {SUPPORTED_FORMATS}")

    resolution = dpi or settings.png_dpi
    logger.info(f"Writing {suffix[1:].upper()} to: {path} ({resolution} dpi)")
    fig = render_figure(drawing, margin=margin, settings=settings)
    metadata = dict(settings.extra_metadata)
    if drawing.spec is not None and drawing.spec.title:
        metadata["Title"] = drawing.spec.title
    fig.savefig(path, dpi=resolution, format=suffix[1:], metadata=metadata or None)
    return path
