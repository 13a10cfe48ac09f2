"""
Sub-Frame Attachment Layout.

Stacks the optional attachments below the module in their fixed order:
brackets (A), profile (B), omega. Each one starts where the previous one
ends and is present only when its height is positive.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from fencelayout.config import LayoutConstants, style_for
from fencelayout.model.annotations import column_label
from fencelayout.model.geometry_primitives import Primitive, Rect, Role, Text
from fencelayout.model.geometry_utils import clamp
from fencelayout.model.numbers import format_length
from fencelayout.model.spec import LayoutSpec


@dataclass
class AttachmentLayout:
    primitives: list[Primitive] = field(default_factory=list)
    labels: list[Text] = field(default_factory=list)
    extra_height: float = 0.0


def clamp_bracket_x(spec: LayoutSpec, x: float) -> float:
    """Left edge of a bracket, kept under the module footprint."""
    return clamp(x, 0.0, spec.outer_w - spec.frame_thickness)


def layout_attachments(spec: LayoutSpec, constants: LayoutConstants) -> AttachmentLayout:
    result = AttachmentLayout()
    unit = spec.unit
    y = spec.outer_h

    # A: brackets
    supports = spec.bottom_supports
    if supports is not None and supports.height > 0:
        h = supports.height
        for x in supports.xs:
            result.primitives.append(
                Rect(
                    x=clamp_bracket_x(spec, x),
                    y=y,
                    width=spec.frame_thickness,
                    height=h,
                    role=Role.BRACKET,
                    style=style_for(Role.BRACKET),
                )
            )
        result.labels.append(column_label(spec, constants, y + h / 2, f"A: {format_length(h, unit)}"))
        y += h

    # B: profile
    profile = spec.bottom_profile
    if profile is not None and profile.height > 0:
        h = profile.height
        label = f"B: {format_length(h, unit)}"
        result.primitives.append(
            Rect(
                x=0.0,
                y=y,
                width=spec.outer_w,
                height=h,
                label=label,
                role=Role.PROFILE,
                style=style_for(Role.PROFILE),
            )
        )
        result.labels.append(column_label(spec, constants, y + h / 2, label))
        y += h

    # Omega, may overhang the module on both sides
    omega = spec.bottom_omega
    if omega is not None and omega.height > 0:
        h = omega.height
        label = f"Ω: {format_length(h, unit)}"
        result.primitives.append(
            Rect(
                x=-omega.extend_left,
                y=y,
                width=spec.outer_w + omega.extend_left + omega.extend_right,
                height=h,
                label=label,
                role=Role.OMEGA,
                style=style_for(Role.OMEGA),
            )
        )
        result.labels.append(column_label(spec, constants, y + h / 2, label))
        y += h

    result.extra_height = y - spec.outer_h
    return result
