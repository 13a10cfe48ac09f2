"""
Layout Specification (Data Model)
=================================
This module defines the immutable input of one render pass: the module
dimensions, the panel stack, the optional attachments below the module and
the optional sliding-gate tail.

Why is this file needed?
------------------------
1. Single unit: All linear values are stored in one model unit (mm unless
   `unit` says otherwise); conversions happen before a spec is built.
2. Derived values: Inner span, attachment heights and the total drawing
   height are computed here once, so every layout stage agrees on them.
3. Persistence: Every dataclass knows how to serialize itself to plain dicts
   (JSON sheets, see `fencelayout.model.io`).

Classes:
    BottomSupports / BottomProfile / BottomOmega: The three attachments.
    TailSpec: Sliding-gate tail settings (auto or manual form).
    LayoutSpec: The main container.
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict, replace
from enum import StrEnum
import logging
from typing import Any, Dict, Optional

from fencelayout.utils import Unit

logger = logging.getLogger(__name__)


# ----- Enums -----

class TailSide(StrEnum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def direction(self) -> int:
        """+1 when the tail grows to the right, -1 to the left."""
        return 1 if self is TailSide.RIGHT else -1


class TailMode(StrEnum):
    AUTO = "auto"
    MANUAL = "manual"


def expected_gap_count(panel_count: int, with_frame: bool) -> int:
    """Gaps a stack of `panel_count` panels needs (0 for an empty stack)."""
    if panel_count <= 0:
        return 0
    return panel_count + 1 if with_frame else max(0, panel_count - 1)


# ----- Attachments -----

@dataclass(frozen=True)
class BottomSupports:
    """Brackets (A): short vertical posts directly beneath the module."""
    height: float = 0.0
    xs: tuple[float, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"height": self.height, "xs": list(self.xs)}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> BottomSupports:
        values = dict(data)
        values["height"] = float(values.get("height", 0.0))
        values["xs"] = tuple(float(x) for x in values.get("xs", ()))
        return BottomSupports(**values)

@dataclass(frozen=True)
class BottomProfile:
    """Profile (B): full-width beam beneath the brackets."""
    height: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> BottomProfile:
        return BottomProfile(**data)

@dataclass(frozen=True)
class BottomOmega:
    """Omega: the lowest beam, may project past the module on both sides."""
    height: float = 0.0
    extend_left: float = 0.0
    extend_right: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> BottomOmega:
        return BottomOmega(**data)

    def extend_on(self, side: TailSide) -> float:
        return self.extend_right if side is TailSide.RIGHT else self.extend_left


# ----- Tail -----

@dataclass(frozen=True)
class TailLabels:
    """Optional captions of the tail parts; empty strings are not drawn."""
    base: str = ""
    bottom: str = ""
    support: str = ""
    diagonal: str = ""

@dataclass(frozen=True)
class AutoTailParams:
    base_frac: float = 0.35   # base length relative to outer width
    diag_frac: float = 0.75   # diagonal target relative to inner height
    lower_frac: float = 0.5   # lower extension relative to omega overhang

@dataclass(frozen=True)
class ManualTailParams:
    base_frac: float = 0.8          # base length relative to outer height
    bottom_ext_frac: float = 0.5    # bottom-frame extension relative to base
    skew_start_frac: float = 0.6    # secondary diagonal start along the base
    skew_target_frac: float = 0.5   # secondary diagonal end relative to outer height

@dataclass(frozen=True)
class TailSpec:
    enabled: bool = False
    side: TailSide = TailSide.RIGHT
    mode: TailMode = TailMode.AUTO
    labels: TailLabels = field(default_factory=TailLabels)
    auto: AutoTailParams = field(default_factory=AutoTailParams)
    manual: ManualTailParams = field(default_factory=ManualTailParams)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["side"] = self.side.value
        data["mode"] = self.mode.value
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> TailSpec:
        # Unknown keys reach the constructor and raise TypeError
        values = dict(data)
        values.update(
            enabled=bool(data.get("enabled", False)),
            side=TailSide(data.get("side", TailSide.RIGHT)),
            mode=TailMode(data.get("mode", TailMode.AUTO)),
            labels=TailLabels(**data.get("labels", {})),
            auto=AutoTailParams(**data.get("auto", {})),
            manual=ManualTailParams(**data.get("manual", {})),
        )
        return TailSpec(**values)


# ----- Main container -----

@dataclass(frozen=True)
class LayoutSpec:
    """
    Everything needed to draw one module.

    Sequences are tuples so a spec can be shared between renders.
    `gaps` is `[top, mid..., bottom]` with a frame and `[mid...]` without.
    """
    outer_w: float
    outer_h: float
    with_frame: bool = True
    frame_thickness: float = 0.0
    gaps: tuple[float, ...] = ()
    panels: tuple[float, ...] = ()
    vertical_bars: tuple[float, ...] = ()
    bottom_supports: Optional[BottomSupports] = None
    bottom_profile: Optional[BottomProfile] = None
    bottom_omega: Optional[BottomOmega] = None
    tail: Optional[TailSpec] = None
    scale: float = 1.0
    title: str = ""
    unit: Unit = Unit.MM

    def __post_init__(self) -> None:
        if not self.scale > 0:
            raise ValueError(f"scale must be strictly positive, got {self.scale}")

    # --- Derived dimensions ---

    @property
    def frame_t(self) -> float:
        """Effective frame thickness (0 without a frame)."""
        return self.frame_thickness if self.with_frame else 0.0

    @property
    def inner_width(self) -> float:
        return max(0.0, self.outer_w - 2 * self.frame_t)

    @property
    def inner_height(self) -> float:
        return max(0.0, self.outer_h - 2 * self.frame_t)

    @property
    def brackets_height(self) -> float:
        return self.bottom_supports.height if self.bottom_supports else 0.0

    @property
    def profile_height(self) -> float:
        return self.bottom_profile.height if self.bottom_profile else 0.0

    @property
    def omega_height(self) -> float:
        return self.bottom_omega.height if self.bottom_omega else 0.0

    @property
    def has_attachments(self) -> bool:
        return self.brackets_height > 0 or self.profile_height > 0 or self.omega_height > 0

    @property
    def total_height(self) -> float:
        """Module plus every attachment below it."""
        return self.outer_h + self.brackets_height + self.profile_height + self.omega_height

    @property
    def panel_count(self) -> int:
        return len(self.panels)

    @property
    def expected_gap_count(self) -> int:
        return expected_gap_count(self.panel_count, self.with_frame)

    @property
    def tail_active(self) -> bool:
        return self.tail is not None and self.tail.enabled and self.omega_height > 0

    def with_scale(self, scale: float) -> LayoutSpec:
        return replace(self, scale=scale)

    # --- Serialization ---

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outer_w": self.outer_w,
            "outer_h": self.outer_h,
            "with_frame": self.with_frame,
            "frame_thickness": self.frame_thickness,
            "gaps": list(self.gaps),
            "panels": list(self.panels),
            "vertical_bars": list(self.vertical_bars),
            "bottom_supports": self.bottom_supports.to_dict() if self.bottom_supports else None,
            "bottom_profile": self.bottom_profile.to_dict() if self.bottom_profile else None,
            "bottom_omega": self.bottom_omega.to_dict() if self.bottom_omega else None,
            "tail": self.tail.to_dict() if self.tail else None,
            "scale": self.scale,
            "title": self.title,
            "unit": self.unit.value,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> LayoutSpec:
        supports = data.get("bottom_supports")
        profile = data.get("bottom_profile")
        omega = data.get("bottom_omega")
        tail = data.get("tail")
        return LayoutSpec(
            outer_w=float(data["outer_w"]),
            outer_h=float(data["outer_h"]),
            with_frame=bool(data.get("with_frame", True)),
            frame_thickness=float(data.get("frame_thickness", 0.0)),
            gaps=tuple(float(g) for g in data.get("gaps", ())),
            panels=tuple(float(p) for p in data.get("panels", ())),
            vertical_bars=tuple(float(x) for x in data.get("vertical_bars", ())),
            bottom_supports=BottomSupports.from_dict(supports) if supports else None,
            bottom_profile=BottomProfile.from_dict(profile) if profile else None,
            bottom_omega=BottomOmega.from_dict(omega) if omega else None,
            tail=TailSpec.from_dict(tail) if tail else None,
            scale=float(data.get("scale", 1.0)),
            title=str(data.get("title", "")),
            unit=Unit(data.get("unit", Unit.MM)),
        )
