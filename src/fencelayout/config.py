"""
Configuration & Layout Constants
================================
This module serves as the central registry for the drawing constants and the
default styling of the fence diagram.

Why is this file needed?
------------------------
1. Abstraction: It keeps offsets such as the label column position or the
   dimension-line distance out of the geometry code, so the engine does not
   carry rendering-surface assumptions.
2. Injection: Every layout function receives a `LayoutConstants` instance,
   which makes alternative sheet styles (denser labels, bigger fonts) a matter
   of passing a different object.

Exports:
    LayoutConstants: Frozen dataclass with all offsets and font sizes.
    DEFAULT_CONSTANTS: The constants used when the caller passes none.
    Palette / STYLES: Colors and styles per primitive role.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from fencelayout.model.geometry_primitives import Role, Style


@dataclass(frozen=True)
class LayoutConstants:
    """
    Offsets are in model units (scaled with the drawing) unless the name ends
    with `_px`, in which case they are drawing units applied after scaling.
    """
    label_column_offset: float = 10.0   # gap between module edge and labels
    label_column_width: float = 148.0   # width reserved for the label column
    dim_line_offset: float = 28.0       # distance of overall dimension lines
    dim_caption_gap: float = 6.0        # caption distance from the width line
    dim_height_caption_gap: float = 8.0 # caption distance from the height line
    tail_label_gap: float = 10.0        # labels beyond the outer end of the tail
    module_gutter: float = 200.0        # space between modules on one sheet

    title_offset_px: float = 8.0
    bottom_gap_label_shift_px: float = 8.0
    tail_label_offset_px: float = 6.0
    band_overdraw_px: float = 1.75

    label_font_size: float = 12.0
    title_font_size: float = 14.0
    tail_font_size: float = 11.0

    min_tail_base_length: float = 30.0
    secondary_diagonal_ratio: float = 0.8


DEFAULT_CONSTANTS = LayoutConstants()


@dataclass(frozen=True)
class Palette:
    stroke: str = "#333"
    frame: str = "#94a3b8"
    panel: str = "#ddd"
    gap_fill: str = "#f1f5f9"
    gap_stroke: str = "#64748b"
    profile: str = "#cbd5e1"
    omega: str = "#64748b"
    halo: str = "#fff"
    text: str = "#000"


PALETTE = Palette()
GAP_DASH: tuple[float, ...] = (4.0, 3.0)

STYLES: dict[Role, Style] = {
    Role.FRAME: Style(fill=PALETTE.frame, stroke=PALETTE.stroke),
    Role.PANEL: Style(fill=PALETTE.panel, stroke=PALETTE.stroke),
    Role.GAP: Style(fill=PALETTE.gap_fill, stroke=PALETTE.gap_stroke, dash=GAP_DASH),
    Role.BAR: Style(fill=PALETTE.frame, stroke=PALETTE.stroke),
    Role.BRACKET: Style(fill=PALETTE.frame, stroke=PALETTE.stroke),
    Role.PROFILE: Style(fill=PALETTE.profile, stroke=PALETTE.stroke),
    Role.OMEGA: Style(fill=PALETTE.omega, stroke=PALETTE.stroke),
    Role.TAIL_BASE: Style(fill=PALETTE.frame, stroke=PALETTE.stroke),
    Role.TAIL_LOWER: Style(fill=PALETTE.frame, stroke=PALETTE.stroke),
    Role.TAIL_SUPPORT: Style(fill=PALETTE.frame, stroke=PALETTE.stroke),
    Role.TAIL_DIAGONAL: Style(fill=PALETTE.frame, stroke=None),
    Role.OUTLINE: Style(fill=None, stroke=PALETTE.stroke),
    Role.DIMENSION: Style(fill=None, stroke=PALETTE.stroke),
    Role.LABEL: Style(fill=PALETTE.text, stroke=PALETTE.halo, stroke_width=3.0),
    Role.TAIL_LABEL: Style(fill=PALETTE.text, stroke=PALETTE.halo, stroke_width=3.0),
    Role.TITLE: Style(fill=PALETTE.text, stroke=PALETTE.halo, stroke_width=3.0),
}


def style_for(role: Role) -> Style:
    """Default style of a primitive role (plain black stroke if unknown)."""
    return STYLES.get(role, Style(fill=None, stroke=PALETTE.stroke))


@dataclass(frozen=True)
class RenderSettings:
    """Settings shared by the output renderers."""
    margin_px: float = 24.0
    font_family: str = "sans-serif"
    arrow_size_px: float = 8.0
    png_dpi: int = 300
    px_per_inch: float = 96.0
    extra_metadata: dict[str, str] = field(default_factory=dict)


DEFAULT_RENDER_SETTINGS = RenderSettings()
