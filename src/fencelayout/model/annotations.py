"""
Annotation Layout
=================
Positions the texts and dimension lines around the module geometry.

Why is this file needed?
------------------------
1. Every label of the panel stack and of the attachments lives in one
   right-hand column; `column_label` is the single place defining it.
2. The overall dimension lines and the title depend only on the LayoutSpec
   and the injected `LayoutConstants`, never on rendering-surface magic
   numbers.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from fencelayout.config import LayoutConstants, style_for
from fencelayout.model.geometry_primitives import (
    Anchor,
    Baseline,
    Line,
    Primitive,
    Rect,
    Role,
    Text,
)
from fencelayout.model.numbers import format_length
from fencelayout.model.spec import LayoutSpec


@dataclass
class AnnotationLayout:
    outline: Rect
    dimensions: list[Primitive] = field(default_factory=list)
    title: list[Text] = field(default_factory=list)


def label_column_x(spec: LayoutSpec, constants: LayoutConstants) -> float:
    return spec.outer_w + constants.label_column_offset


def column_label(
    spec: LayoutSpec,
    constants: LayoutConstants,
    center_y: float,
    text: str,
    dy: float = 0.0,
) -> Text:
    """Label in the right-hand column, vertically centered on `center_y`."""
    return Text(
        x=label_column_x(spec, constants),
        y=center_y,
        text=text,
        font_size=constants.label_font_size,
        anchor=Anchor.START,
        baseline=Baseline.MIDDLE,
        dy=dy,
        role=Role.LABEL,
        style=style_for(Role.LABEL),
    )


def module_outline(spec: LayoutSpec, constants: LayoutConstants) -> Rect:
    """Unfilled box around the module and its label column."""
    return Rect(
        x=0.0,
        y=0.0,
        width=spec.outer_w + constants.label_column_width,
        height=spec.total_height,
        role=Role.OUTLINE,
        style=style_for(Role.OUTLINE),
    )


def width_dimension(spec: LayoutSpec, constants: LayoutConstants) -> list[Primitive]:
    y = spec.total_height + constants.dim_line_offset
    line = Line(
        start=(0.0, y),
        end=(spec.outer_w, y),
        arrow_start=True,
        arrow_end=True,
        role=Role.DIMENSION,
        style=style_for(Role.DIMENSION),
    )
    caption = Text(
        x=spec.outer_w / 2,
        y=y - constants.dim_caption_gap,
        text=format_length(spec.outer_w, spec.unit),
        font_size=constants.label_font_size,
        anchor=Anchor.MIDDLE,
        role=Role.LABEL,
        style=style_for(Role.LABEL),
    )
    return [line, caption]


def height_dimension(spec: LayoutSpec, constants: LayoutConstants) -> list[Primitive]:
    x = spec.outer_w + constants.label_column_width + constants.dim_line_offset
    total = spec.total_height
    line = Line(
        start=(x, 0.0),
        end=(x, total),
        arrow_start=True,
        arrow_end=True,
        role=Role.DIMENSION,
        style=style_for(Role.DIMENSION),
    )
    caption = Text(
        x=x + constants.dim_height_caption_gap,
        y=total / 2,
        text=format_length(total, spec.unit),
        font_size=constants.label_font_size,
        anchor=Anchor.MIDDLE,
        rotation=90.0,
        role=Role.LABEL,
        style=style_for(Role.LABEL),
    )
    return [line, caption]


def title_label(spec: LayoutSpec, constants: LayoutConstants) -> list[Text]:
    if not spec.title:
        return []
    return [
        Text(
            x=0.0,
            y=0.0,
            text=spec.title,
            font_size=constants.title_font_size,
            bold=True,
            dy=-constants.title_offset_px,
            role=Role.TITLE,
            style=style_for(Role.TITLE),
        )
    ]


def layout_annotations(spec: LayoutSpec, constants: LayoutConstants) -> AnnotationLayout:
    return AnnotationLayout(
        outline=module_outline(spec, constants),
        dimensions=width_dimension(spec, constants) + height_dimension(spec, constants),
        title=title_label(spec, constants),
    )
