"""
Layout Orchestration
====================
Runs every layout stage for one module and returns the finished `Drawing`.

Why is this file needed?
------------------------
1. Draw order: Interior content and attachments first, then the outline and
   the frame (which caps the panel edges), then dimension lines, labels and
   the title on top.
2. Scale: Stages work in model units; the single `scaled(spec.scale)` pass
   here is what makes every coordinate exactly `model value * scale`.
3. Sheets: Several drawings (span, gate, wicket) can be placed side by side.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from collections import Counter
from typing import Optional, Sequence

from fencelayout.config import DEFAULT_CONSTANTS, LayoutConstants
from fencelayout.model.annotations import layout_annotations
from fencelayout.model.attachments import layout_attachments
from fencelayout.model.frame import layout_frame_and_stack
from fencelayout.model.geometry_primitives import Primitive, Role, union_bounds
from fencelayout.model.geometry_utils import Bounds
from fencelayout.model.spec import LayoutSpec
from fencelayout.model.tail import layout_tail

logger = logging.getLogger(__name__)


@dataclass
class Drawing:
    """Ordered primitives in drawing units, ready to be painted."""
    primitives: list[Primitive] = field(default_factory=list)
    spec: Optional[LayoutSpec] = None

    def bounds(self) -> Bounds:
        return union_bounds(self.primitives)

    def by_role(self, role: Role) -> list[Primitive]:
        return [p for p in self.primitives if p.role == role]

    def translated(self, dx: float, dy: float) -> Drawing:
        return Drawing([p.translated(dx, dy) for p in self.primitives], self.spec)


def layout_model(spec: LayoutSpec, constants: LayoutConstants = DEFAULT_CONSTANTS) -> list[Primitive]:
    """All primitives of one module in model units, in draw order."""
    stack = layout_frame_and_stack(spec, constants)
    attachments = layout_attachments(spec, constants)
    tail = layout_tail(spec, constants)
    notes = layout_annotations(spec, constants)

    return [
        *stack.inner,
        *attachments.primitives,
        *tail.primitives,
        notes.outline,
        *stack.frame_edges,
        *notes.dimensions,
        *stack.labels,
        *attachments.labels,
        *tail.labels,
        *notes.title,
    ]


def render_layout(spec: LayoutSpec, constants: LayoutConstants = DEFAULT_CONSTANTS) -> Drawing:
    """
    Compute the complete drawing of one module.

    Args:
        spec: Module description in model units.
        constants: Offsets and font sizes of the annotations.

    Returns:
        Drawing whose primitives are scaled by `spec.scale`.
    """
    primitives = [p.scaled(spec.scale) for p in layout_model(spec, constants)]

    if logger.isEnabledFor(logging.DEBUG):
        counts = Counter(str(p.role) for p in primitives)
        summary = ", ".join(f"{role}={n}" for role, n in sorted(counts.items()))
        logger.debug(f"Layout '{spec.title or 'module'}' at scale {spec.scale}: {summary}")

    return Drawing(primitives=primitives, spec=spec)


def compose_sheet(drawings: Sequence[Drawing], gutter: float) -> Drawing:
    """
    Place drawings left to right, top aligned, `gutter` drawing units apart.

    The first drawing keeps its position; the sheet has no source spec.
    """
    placed: list[Primitive] = []
    cursor: Optional[float] = None
    for drawing in drawings:
        if not drawing.primitives:
            continue
        box = drawing.bounds()
        shift = 0.0 if cursor is None else cursor - box.min_x
        placed.extend(drawing.translated(shift, 0.0).primitives)
        cursor = box.max_x + shift + gutter
    logger.debug(f"Composed sheet of {len(drawings)} drawings ({len(placed)} primitives)")
    return Drawing(primitives=placed, spec=None)
