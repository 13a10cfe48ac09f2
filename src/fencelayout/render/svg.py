"""
SVG Renderer
============
Serializes a `Drawing` to a standalone SVG 1.1 document.

Strokes use `vector-effect: non-scaling-stroke` so that line widths stay
constant when the document is zoomed. Texts carry a white halo
(`paint-order: stroke`) to stay legible over colored fills.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

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

ARROW_MARKER_ID = "arrowhead"


def escape(text: str) -> str:
    """Escape XML special characters (attribute safe)."""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _num(value: float) -> str:
    text = f"{value:.2f}"
    return "0.00" if text == "-0.00" else text


def _points(points: Iterable[tuple[float, float]]) -> str:
    return " ".join(f"{_num(x)},{_num(y)}" for x, y in points)


def _shape_attrs(style: Style) -> str:
    attrs = [
        f'fill="{style.fill or "none"}"',
        f'stroke="{style.stroke or "none"}"',
    ]
    if style.stroke:
        attrs.append(f'stroke-width="{style.stroke_width:g}"')
        attrs.append('vector-effect="non-scaling-stroke"')
    if style.dash:
        attrs.append(f'stroke-dasharray="{" ".join(f"{d:g}" for d in style.dash)}"')
    if style.opacity < 1.0:
        attrs.append(f'opacity="{style.opacity:g}"')
    return " ".join(attrs)


def _rect(p: Rect) -> str:
    geometry = (f'x="{_num(p.x)}" y="{_num(p.y)}" '
                f'width="{_num(p.width)}" height="{_num(p.height)}"')
    attrs = f'{geometry} {_shape_attrs(p.style)} data-role="{p.role}"'
    if p.label:
        return f'<rect {attrs}><title>{escape(p.label)}</title></rect>'
    return f'<rect {attrs}/>'


def _polygon(points, style: Style, role: str) -> str:
    return f'<polygon points="{_points(points)}" {_shape_attrs(style)} data-role="{role}"/>'


def _line(p: Line) -> str:
    (x1, y1), (x2, y2) = p.start, p.end
    attrs = [
        f'x1="{_num(x1)}" y1="{_num(y1)}" x2="{_num(x2)}" y2="{_num(y2)}"',
        f'stroke="{p.style.stroke or PALETTE.stroke}"',
        f'stroke-width="{p.style.stroke_width:g}"',
        'vector-effect="non-scaling-stroke"',
    ]
    if p.arrow_start:
        attrs.append(f'marker-start="url(#{ARROW_MARKER_ID})"')
    if p.arrow_end:
        attrs.append(f'marker-end="url(#{ARROW_MARKER_ID})"')
    return f'<line {" ".join(attrs)} data-role="{p.role}"/>'


def _text(p: Text) -> str:
    x, y = p.position
    attrs = [
        f'x="{_num(x)}" y="{_num(y)}"',
        f'font-size="{p.font_size:g}"',
        f'text-anchor="{p.anchor}"',
        f'fill="{p.style.fill or PALETTE.text}"',
    ]
    if p.baseline != "auto":
        attrs.append(f'dominant-baseline="{p.baseline}"')
    if p.bold:
        attrs.append('font-weight="600"')
    if p.rotation:
        attrs.append(f'transform="rotate({p.rotation:g} {_num(x)} {_num(y)})"')
    if p.style.stroke:
        attrs.append(
            f'style="paint-order: stroke; stroke: {p.style.stroke}; '
            f'stroke-width: {p.style.stroke_width:g}px"'
        )
    return f'<text {" ".join(attrs)} data-role="{p.role}">{escape(p.text)}</text>'


def primitive_to_svg(p: Primitive) -> str:
    match p:
        case Rect():
            return _rect(p)
        case Band():
            return _polygon(p.polygon().tolist(), p.style, p.role)
        case Polygon():
            return _polygon(p.points, p.style, p.role)
        case Line():
            return _line(p)
        case Text():
            return _text(p)
        case _:
            raise TypeError(f"Unsupported primitive: {type(p).__name__}")


def render_svg(
    drawing: Drawing,
    margin: Optional[float] = None,
    settings: RenderSettings = DEFAULT_RENDER_SETTINGS,
) -> str:
    """
    The drawing as an SVG document string.

    Args:
        drawing: Primitives in drawing units.
        margin: Free space around the drawing bounds (settings margin if None).
        settings: Font family and arrow size.
    """
    pad = settings.margin_px if margin is None else margin
    box = drawing.bounds().expanded(pad)
    size = settings.arrow_size_px

    out = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        (f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
         f'width="{_num(box.width)}" height="{_num(box.height)}" '
         f'viewBox="{_num(box.min_x)} {_num(box.min_y)} {_num(box.width)} {_num(box.height)}">'),
        '<defs>',
        (f'<marker id="{ARROW_MARKER_ID}" markerWidth="{size:g}" markerHeight="{size:g}" '
         f'refX="{size:g}" refY="{size / 2:g}" orient="auto-start-reverse" markerUnits="userSpaceOnUse">'
         f'<path d="M0,0 L{size:g},{size / 2:g} L0,{size:g} z" fill="{PALETTE.stroke}"/></marker>'),
        '</defs>',
        (f'<style>text {{ font-family: {settings.font_family}; '
         f'font-variant-numeric: tabular-nums; }}</style>'),
    ]
    if drawing.spec is not None and drawing.spec.title:
        out.append(f'<title>{escape(drawing.spec.title)}</title>')

    out.append('<g>')
    out.extend(primitive_to_svg(p) for p in drawing.primitives)
    out.append('</g>')
    out.append('</svg>')

    logger.debug(f"SVG rendered: {len(drawing.primitives)} primitives, {box.width:.0f}x{box.height:.0f}")
    return "\n".join(out) + "\n"


def save_svg(drawing: Drawing, filepath: Union[str, Path], margin: Optional[float] = None) -> None:
    logger.info(f"Writing SVG to: {filepath}")
    Path(filepath).write_text(render_svg(drawing, margin), encoding="utf-8")
