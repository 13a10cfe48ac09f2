"""
Frame & Stack Layout Engine
===========================
Computes the absolute positions of the frame strips, the gaps and the panel
stack of one module.

Why is this file needed?
------------------------
1. Core: This is the cursor walk that turns the `gaps` and `panels` lists
   into rectangles, top to bottom.
2. Tolerance: The engine never raises. Missing gap entries count as 0,
   negative inner sizes are clamped to 0 and reinforcement bars are clamped
   into the inner span.

Coordinates are model units, origin at the outer top-left corner.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging

from fencelayout.config import LayoutConstants, style_for
from fencelayout.model.annotations import column_label
from fencelayout.model.geometry_primitives import Primitive, Rect, Role, Text
from fencelayout.model.geometry_utils import clamp
from fencelayout.model.numbers import format_length
from fencelayout.model.spec import LayoutSpec

logger = logging.getLogger(__name__)


@dataclass
class FrameStackLayout:
    """
    Result of the stack walk.

    `frame_edges` holds the top, bottom, left and right strips (empty without
    a frame), `inner` the panels, gaps and bars in draw order.
    """
    frame_edges: list[Rect] = field(default_factory=list)
    inner: list[Primitive] = field(default_factory=list)
    labels: list[Text] = field(default_factory=list)
    content_bottom_y: float = 0.0


def frame_rects(spec: LayoutSpec) -> list[Rect]:
    """The four frame strips: top, bottom, left, right."""
    if not spec.with_frame:
        return []
    t = spec.frame_t
    w, h = spec.outer_w, spec.outer_h
    style = style_for(Role.FRAME)
    return [
        Rect(0.0, 0.0, w, t, role=Role.FRAME, style=style),
        Rect(0.0, h - t, w, t, role=Role.FRAME, style=style),
        Rect(0.0, 0.0, t, h, role=Role.FRAME, style=style),
        Rect(w - t, 0.0, t, h, role=Role.FRAME, style=style),
    ]


def clamp_bar_x(spec: LayoutSpec, x: float) -> float:
    """Left edge of a reinforcement bar, kept inside the inner span."""
    t = spec.frame_t
    return clamp(x, t, spec.outer_w - 2 * t)


def _gap_rect(spec: LayoutSpec, y: float, height: float) -> Rect:
    return Rect(
        x=spec.frame_t,
        y=y,
        width=spec.inner_width,
        height=height,
        label=format_length(height, spec.unit),
        role=Role.GAP,
        style=style_for(Role.GAP),
    )


def layout_frame_and_stack(spec: LayoutSpec, constants: LayoutConstants) -> FrameStackLayout:
    """
    Walk the stack top to bottom and emit frame, gaps, panels and bars.

    Args:
        spec: The module description.
        constants: Label column and nudge constants.

    Returns:
        FrameStackLayout with `content_bottom_y` at the cursor after the last
        element (bottom gap included when there is a frame).
    """
    result = FrameStackLayout(frame_edges=frame_rects(spec))
    frame_t = spec.frame_t
    inner_w = spec.inner_width
    gaps = spec.gaps
    unit = spec.unit

    def add_gap(y: float, height: float, label_dy: float = 0.0) -> None:
        if height <= 0:
            return
        rect = _gap_rect(spec, y, height)
        result.inner.append(rect)
        result.labels.append(column_label(spec, constants, y + height / 2, rect.label, dy=label_dy))

    cursor = frame_t
    gap_index = 0

    # Top gap
    if spec.with_frame:
        top_gap = gaps[0] if gaps else 0.0
        add_gap(cursor, top_gap)
        cursor += top_gap
        gap_index = 1

    # Panels and the gaps between them
    for i, height in enumerate(spec.panels):
        label = format_length(height, unit)
        result.inner.append(
            Rect(
                x=frame_t,
                y=cursor,
                width=inner_w,
                height=height,
                label=label,
                role=Role.PANEL,
                style=style_for(Role.PANEL),
            )
        )
        result.labels.append(column_label(spec, constants, cursor + height / 2, label))
        cursor += height

        if i < len(spec.panels) - 1:
            gap = gaps[gap_index] if gap_index < len(gaps) else 0.0
            gap_index += 1
            add_gap(cursor, gap)
            cursor += gap

    # Bottom gap; its label moves up when attachment labels sit right below
    if spec.with_frame:
        bottom_gap = gaps[-1] if gaps else 0.0
        shift = -constants.bottom_gap_label_shift_px if spec.has_attachments else 0.0
        add_gap(cursor, bottom_gap, label_dy=shift)
        cursor += bottom_gap

    if spec.with_frame and len(gaps) < spec.expected_gap_count:
        logger.debug(f"Gap list shorter than expected ({len(gaps)} < {spec.expected_gap_count}), missing gaps drawn as 0")

    # Vertical reinforcement bars
    if spec.with_frame and spec.vertical_bars:
        for x in spec.vertical_bars:
            result.inner.append(
                Rect(
                    x=clamp_bar_x(spec, x),
                    y=frame_t,
                    width=frame_t,
                    height=spec.inner_height,
                    role=Role.BAR,
                    style=style_for(Role.BAR),
                )
            )

    result.content_bottom_y = cursor
    return result
