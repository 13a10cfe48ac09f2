"""
Tail Geometry Generator
=======================
Schematic (not dimensionally exact) sliding-gate tail attached to one side of
the omega beam.

Why is this file needed?
------------------------
1. Two forms: The AUTO form derives every proportion from the module width;
   the MANUAL form exposes base length, bottom extension and the secondary
   diagonal directly and cuts the horizontal members parallel to the primary
   diagonal.
2. Interchangeable output: Both forms emit the same roles (TAIL_BASE,
   TAIL_LOWER, TAIL_DIAGONAL, TAIL_SUPPORT, TAIL_LABEL) so renderers and
   tests treat them alike. Both mirror about the module centerline by side.

Classes:
    TailGenerator: Abstract base of one tail form.
    AutoTailGenerator / ManualTailGenerator: The two forms.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging

import numpy as np

from fencelayout.config import LayoutConstants, style_for
from fencelayout.model.geometry_primitives import (
    Anchor,
    Band,
    Baseline,
    Point2,
    Polygon,
    Primitive,
    Rect,
    Role,
    Text,
)
from fencelayout.model.geometry_utils import clamp01, unit_normal, x_at_y
from fencelayout.model.spec import LayoutSpec, TailMode, TailSpec

logger = logging.getLogger(__name__)


@dataclass
class TailLayout:
    primitives: list[Primitive] = field(default_factory=list)
    labels: list[Text] = field(default_factory=list)


def _tail_label(
    constants: LayoutConstants,
    x: float,
    y: float,
    text: str,
    anchor: Anchor,
    baseline: Baseline = Baseline.AUTO,
    dy: float = 0.0,
) -> Text:
    return Text(
        x=x,
        y=y,
        text=text,
        font_size=constants.tail_font_size,
        anchor=anchor,
        baseline=baseline,
        dy=dy,
        role=Role.TAIL_LABEL,
        style=style_for(Role.TAIL_LABEL),
    )


def _span_rect(x_a: float, x_b: float, y: float, height: float, role: Role) -> Rect:
    """Rectangle between two X positions given in any order."""
    return Rect(
        x=min(x_a, x_b),
        y=y,
        width=abs(x_b - x_a),
        height=height,
        role=role,
        style=style_for(role),
    )


class TailGenerator(ABC):
    """One way of drawing the tail."""

    mode: TailMode

    def generate(self, spec: LayoutSpec, constants: LayoutConstants) -> TailLayout:
        """Tail primitives, or an empty layout when the tail is inactive."""
        if not spec.tail_active:
            return TailLayout()
        return self._build(spec, spec.tail, constants)

    @abstractmethod
    def _build(self, spec: LayoutSpec, tail: TailSpec, constants: LayoutConstants) -> TailLayout:
        pass


class AutoTailGenerator(TailGenerator):
    """
    Proportions follow the module width.

    The base runs outward from the omega end; the primary diagonal climbs from
    its outer end to the frame axis at `diag_frac` of the inner height; the
    lower extension, its support and the secondary diagonal appear only when
    the omega overhangs on the tail side.
    """

    mode = TailMode.AUTO

    def _build(self, spec: LayoutSpec, tail: TailSpec, constants: LayoutConstants) -> TailLayout:
        result = TailLayout()
        params = tail.auto
        direction = tail.side.direction
        right = direction > 0
        omega = spec.bottom_omega
        t = spec.frame_thickness

        y_omega_top = spec.outer_h + spec.brackets_height + spec.profile_height
        h_omega = spec.omega_height
        extend = omega.extend_on(tail.side)

        start_x = spec.outer_w + omega.extend_right if right else -omega.extend_left
        base_len = max(constants.min_tail_base_length, spec.outer_w * params.base_frac)
        end_x = start_x + direction * base_len

        target: Point2 = (
            spec.outer_w - t / 2 if right else t / 2,
            spec.frame_t + spec.inner_height * (1 - params.diag_frac),
        )

        result.primitives.append(_span_rect(start_x, end_x, y_omega_top, h_omega, Role.TAIL_BASE))
        result.primitives.append(
            Band(
                start=(end_x, y_omega_top),
                end=target,
                thickness=t,
                role=Role.TAIL_DIAGONAL,
                style=style_for(Role.TAIL_DIAGONAL),
            )
        )

        lower_len = extend * params.lower_frac
        support_h = spec.brackets_height if spec.brackets_height > 0 else t
        if lower_len > 0:
            edge_x = spec.outer_w if right else 0.0
            lower_end = edge_x + direction * lower_len
            result.primitives.append(_span_rect(edge_x, lower_end, spec.outer_h - t, t, Role.TAIL_LOWER))
            result.primitives.append(
                Rect(
                    x=lower_end - t / 2,
                    y=spec.outer_h,
                    width=t,
                    height=support_h,
                    role=Role.TAIL_SUPPORT,
                    style=style_for(Role.TAIL_SUPPORT),
                )
            )
            result.primitives.append(
                Band(
                    start=(lower_end, spec.outer_h - t / 2),
                    end=target,
                    thickness=t * constants.secondary_diagonal_ratio,
                    role=Role.TAIL_DIAGONAL,
                    style=style_for(Role.TAIL_DIAGONAL),
                )
            )

        # Labels share one column beyond the outer end of the base
        label_x = end_x + direction * constants.tail_label_gap
        anchor = Anchor.START if right else Anchor.END
        positions = (
            (tail.labels.base, y_omega_top + h_omega / 2),
            (tail.labels.bottom, spec.outer_h - t / 2),
            (tail.labels.support, spec.outer_h + support_h / 2),
            (tail.labels.diagonal, target[1]),
        )
        for text, y in positions:
            if text:
                result.labels.append(_tail_label(constants, label_x, y, text, anchor, Baseline.MIDDLE))

        return result


class ManualTailGenerator(TailGenerator):
    """
    Fully parameterized tail.

    The base length follows the module height. The omega and bottom-frame
    extensions are quads whose outer edge is parallel to the primary
    diagonal; the bottom one additionally stops at `bottom_ext_frac` of the
    base. Diagonal bands are over-drawn at both ends by a few drawing units
    so that their joints show no seams at any scale.
    """

    mode = TailMode.MANUAL

    def _build(self, spec: LayoutSpec, tail: TailSpec, constants: LayoutConstants) -> TailLayout:
        result = TailLayout()
        params = tail.manual
        direction = tail.side.direction
        right = direction > 0
        t = spec.frame_thickness
        overdraw = constants.band_overdraw_px / max(spec.scale, 1e-6)

        y_omega_top = spec.outer_h + spec.brackets_height + spec.profile_height
        h_omega = spec.omega_height
        y_bottom_top = spec.outer_h - t

        base_len = spec.outer_h * clamp01(params.base_frac)
        base_start = spec.outer_w if right else 0.0
        base_end = base_start + direction * base_len

        axis_x = spec.outer_w - t / 2 if right else t / 2
        top_axis_y = t / 2
        omega_axis_y = y_omega_top + h_omega / 2

        diag_start: Point2 = (base_end, omega_axis_y)
        diag_end: Point2 = (axis_x, top_axis_y)
        shift = unit_normal(diag_start, diag_end) * overdraw * direction

        def cut_quad(y_top: float, y_bot: float, limit: float) -> tuple[Point2, ...]:
            corners = []
            for y in (y_top, y_bot):
                x = x_at_y(diag_start, diag_end, y) + shift[0]
                y_cut = y + shift[1]
                if direction * (x - base_start) > limit:
                    x, y_cut = base_start + direction * limit, y
                corners.append((float(x), float(y_cut)))
            cut_top, cut_bot = corners
            if right:
                return ((base_start, y_top), cut_top, cut_bot, (base_start, y_bot))
            return ((base_start, y_top), (base_start, y_bot), cut_bot, cut_top)

        result.primitives.append(
            Polygon(
                points=cut_quad(y_omega_top, y_omega_top + h_omega, np.inf),
                role=Role.TAIL_BASE,
                style=style_for(Role.TAIL_BASE),
            )
        )
        ext_len = base_len * clamp01(params.bottom_ext_frac)
        result.primitives.append(
            Polygon(
                points=cut_quad(y_bottom_top, y_bottom_top + t, ext_len),
                role=Role.TAIL_LOWER,
                style=style_for(Role.TAIL_LOWER),
            )
        )

        result.primitives.append(
            Band(
                start=diag_start,
                end=diag_end,
                thickness=t,
                overdraw=overdraw,
                role=Role.TAIL_DIAGONAL,
                style=style_for(Role.TAIL_DIAGONAL),
            )
        )
        result.primitives.append(
            Band(
                start=(base_start + direction * base_len * clamp01(params.skew_start_frac), omega_axis_y),
                end=(axis_x, spec.outer_h * clamp01(params.skew_target_frac)),
                thickness=t,
                overdraw=overdraw,
                role=Role.TAIL_DIAGONAL,
                style=style_for(Role.TAIL_DIAGONAL),
            )
        )

        labels = tail.labels
        base_mid_x = (base_start + base_end) / 2
        lift = -constants.tail_label_offset_px
        if labels.base:
            result.labels.append(_tail_label(constants, base_mid_x, y_omega_top, labels.base, Anchor.MIDDLE, dy=lift))
        if labels.bottom:
            result.labels.append(_tail_label(constants, base_mid_x, y_bottom_top, labels.bottom, Anchor.MIDDLE, dy=lift))
        if labels.support:
            result.labels.append(_tail_label(constants, axis_x, spec.outer_h * 0.15, labels.support, Anchor.MIDDLE))
        if labels.diagonal:
            result.labels.append(
                _tail_label(
                    constants,
                    (axis_x + base_end) / 2,
                    (top_axis_y + omega_axis_y) / 2,
                    labels.diagonal,
                    Anchor.MIDDLE,
                    dy=lift,
                )
            )

        return result


TAIL_GENERATORS: dict[TailMode, TailGenerator] = {
    TailMode.AUTO: AutoTailGenerator(),
    TailMode.MANUAL: ManualTailGenerator(),
}


def get_tail_generator(mode: TailMode | str) -> TailGenerator:
    """Generator registered for `mode` (raises ValueError on unknown modes)."""
    return TAIL_GENERATORS[TailMode(mode)]


def layout_tail(spec: LayoutSpec, constants: LayoutConstants) -> TailLayout:
    if not spec.tail_active:
        if spec.tail is not None and spec.tail.enabled:
            logger.debug("Tail enabled but no omega beam present, tail skipped")
        return TailLayout()
    generator = get_tail_generator(spec.tail.mode)
    logger.debug(f"Generating {generator.mode} tail on the {spec.tail.side} side")
    return generator.generate(spec, constants)
