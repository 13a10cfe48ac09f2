"""
Gap Planner & Spec Validation
=============================
Computes the gap lists the layout engine consumes and checks finished specs.

Why is this file needed?
------------------------
1. Planning: The engine draws whatever gaps it is given. Producing a list
   that fills the inner height exactly (equal gaps, partially fixed gaps,
   gate and wicket stacks derived from the span) happens here, in whole
   model units, with the rounding residue pushed onto the last gap.
2. Validation: The engine is permissive by contract. `validate_spec` reports
   what it silently tolerates (short gap lists, unbalanced stacks) so callers
   can log or reject.

Exports:
    PanelGroup, expand_panel_groups, gate_panels, gate_mid_gaps
    plan_equal_gaps, plan_custom_gaps, plan_gate_layout
    validate_spec
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Optional, Sequence

from fencelayout.model.numbers import fmt2, total
from fencelayout.model.spec import LayoutSpec, expected_gap_count

logger = logging.getLogger(__name__)

CONSERVATION_TOLERANCE = 1e-6


class GapPlanningError(ValueError):
    """Raised when the requested gaps cannot fit the available height."""


# ----- Helpers -----

def round_whole(value: float) -> float:
    """Round to a whole model unit, halves upward (toward +inf)."""
    return float(math.floor(value + 0.5))


def internal_height(outer_h: float, frame_thickness: float, with_frame: bool) -> float:
    """Height available to panels and gaps."""
    if not with_frame:
        return outer_h
    return max(0.0, outer_h - 2 * frame_thickness)


def distribute_auto_gaps(
    leftover: float,
    count: int,
    weights: Optional[Sequence[float]] = None,
) -> list[float]:
    """
    Split `leftover` over `count` automatic gaps.

    Without weights (or with a non-positive weight sum) the split is even,
    otherwise proportional to the weights.
    """
    if count <= 0:
        return []
    if not weights:
        return [leftover / count] * count
    weight_sum = total(weights)
    if weight_sum <= 0:
        return [leftover / count] * count
    return [w / weight_sum * leftover for w in weights]


def _correct_last(gaps: list[float], target: float) -> list[float]:
    residue = target - total(gaps)
    if gaps and abs(residue) >= 0.5:
        gaps[-1] = round_whole(gaps[-1] + residue)
    return gaps


def _check_panels_fit(panels: Sequence[float], available: float) -> None:
    if total(panels) > available + CONSERVATION_TOLERANCE:
        raise GapPlanningError(
            f"Panel heights ({fmt2(total(panels))}) exceed the available height ({fmt2(available)})"
        )


# ----- Panel groups -----

@dataclass(frozen=True)
class PanelGroup:
    """`qty` panels of height `height`; `in_gate` panels are reused by gates."""
    qty: int
    height: float
    in_gate: bool = True


def expand_panel_groups(groups: Sequence[PanelGroup]) -> list[float]:
    return [g.height for g in groups for _ in range(g.qty)]


def gate_panels(groups: Sequence[PanelGroup]) -> list[float]:
    return [g.height for g in groups if g.in_gate for _ in range(g.qty)]


def gate_mid_gaps(groups: Sequence[PanelGroup], span_mid_gaps: Sequence[float]) -> list[float]:
    """Span mid gaps whose panels on both sides are carried over to the gate."""
    mask = [g.in_gate for g in groups for _ in range(g.qty)]
    mids = []
    for i in range(max(0, len(mask) - 1)):
        if mask[i] and mask[i + 1]:
            mids.append(span_mid_gaps[i] if i < len(span_mid_gaps) else 0.0)
    return mids


def mid_gaps(gaps: Sequence[float], panel_count: int, with_frame: bool) -> list[float]:
    """The gaps between panels (top and bottom gaps stripped)."""
    count = max(0, panel_count - 1)
    start = 1 if with_frame else 0
    return list(gaps[start:start + count])


# ----- Planners -----

def plan_equal_gaps(panels: Sequence[float], inner_height: float, with_frame: bool) -> list[float]:
    """
    Equal gaps filling `inner_height`.

    Every gap is rounded to a whole unit; a residue of at least half a unit is
    absorbed by the last gap.
    """
    count = expected_gap_count(len(panels), with_frame)
    if count == 0:
        return []
    _check_panels_fit(panels, inner_height)

    free = inner_height - total(panels)
    rounded = round_whole(free / count)
    gaps = [rounded] * count
    return _correct_last(gaps, free)


def plan_custom_gaps(
    panels: Sequence[float],
    inner_height: float,
    with_frame: bool,
    fixed: Sequence[Optional[float]],
    weighted: bool = False,
) -> list[float]:
    """
    Gaps with some values fixed by the user.

    Args:
        panels: Panel heights, top to bottom.
        inner_height: Height available to panels and gaps.
        with_frame: Whether top and bottom gaps exist.
        fixed: One entry per gap; `None` marks an automatic gap. Missing
            trailing entries are automatic.
        weighted: Split the leftover in proportion to the average height of
            the panels adjacent to each automatic gap.

    Raises:
        GapPlanningError: Panels or fixed gaps do not fit.
    """
    count = expected_gap_count(len(panels), with_frame)
    if count == 0:
        return []
    _check_panels_fit(panels, inner_height)

    slots = [fixed[i] if i < len(fixed) else None for i in range(count)]
    fixed_sum = total(v for v in slots if v is not None)
    autos = sum(1 for v in slots if v is None)
    leftover = inner_height - total(panels) - fixed_sum
    if leftover < -0.0001:
        raise GapPlanningError(
            f"Fixed gaps ({fmt2(fixed_sum)}) exceed the free height ({fmt2(inner_height - total(panels))})"
        )

    weights = None
    if weighted:
        n = len(panels)
        neighbours = [(panels[i - 1] + panels[i]) / 2 for i in range(1, n)]
        if with_frame:
            neighbours = [panels[0], *neighbours, panels[-1]]
        weights = [w for w, v in zip(neighbours, slots) if v is None]

    auto_values = iter(distribute_auto_gaps(leftover, autos, weights))
    gaps = [round_whole(next(auto_values) if v is None else v) for v in slots]
    return _correct_last(gaps, inner_height - total(panels))


@dataclass
class GateLayout:
    """Panels and gaps of a gate or wicket; `error` is set when it does not fit."""
    panels: list[float] = field(default_factory=list)
    gaps: list[float] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def plan_gate_layout(
    height: float,
    frame_thickness: float,
    base_panels: Sequence[float],
    base_mid_gaps: Sequence[float],
    top_gap: float,
    extra_panels: Sequence[float] = (),
    gap_after_base: float = 0.0,
    gap_between_extras: float = 0.0,
) -> GateLayout:
    """
    Stack of a framed gate or wicket derived from the span.

    The span's panels and mid gaps are reused, extra panels are appended
    below them and the remaining height becomes the bottom gap.
    """
    if not base_panels:
        return GateLayout()

    internal = max(0.0, height - 2 * frame_thickness)
    panels = [*base_panels, *extra_panels]

    gaps = [round_whole(top_gap)]
    gaps.extend(round_whole(g) for g in base_mid_gaps)
    if extra_panels:
        gaps.append(round_whole(max(0.0, gap_after_base)))
        gaps.extend(round_whole(max(0.0, gap_between_extras)) for _ in extra_panels[1:])

    leftover = internal - total(panels) - total(gaps)
    if leftover < -0.001:
        message = f"Height {fmt2(height)} is too small for the requested gate layout"
        logger.warning(message)
        return GateLayout(panels=panels, gaps=gaps, error=message)

    gaps.append(round_whole(leftover))
    return GateLayout(panels=panels, gaps=_correct_last(gaps, internal - total(panels)))


# ----- Validation -----

def validate_spec(spec: LayoutSpec) -> list[str]:
    """
    Issues the engine tolerates silently.

    Returns:
        Human readable messages, empty for a consistent spec.
    """
    issues: list[str] = []

    values = [spec.outer_w, spec.outer_h, spec.frame_thickness, *spec.gaps, *spec.panels]
    if any(not math.isfinite(v) for v in values):
        issues.append("Spec contains values that are not finite numbers")
        return issues

    if spec.with_frame and 2 * spec.frame_thickness > min(spec.outer_w, spec.outer_h):
        issues.append(f"Frame thickness {fmt2(spec.frame_thickness)} leaves no inner span")
    if any(g < 0 for g in spec.gaps):
        issues.append("Negative gap heights")
    if any(p < 0 for p in spec.panels):
        issues.append("Negative panel heights")

    expected = spec.expected_gap_count
    if len(spec.gaps) != expected:
        issues.append(f"Expected {expected} gaps for {spec.panel_count} panels, got {len(spec.gaps)}")

    target = spec.inner_height if spec.with_frame else spec.outer_h
    used = total(spec.panels) + total(spec.gaps)
    if abs(used - target) > CONSERVATION_TOLERANCE:
        issues.append(f"Panels and gaps sum to {fmt2(used)}, expected {fmt2(target)}")

    return issues
