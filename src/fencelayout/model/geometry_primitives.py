"""
Geometric Primitives for the layout drawing.

Every primitive is an immutable value carrying a semantic `Role` and a visual
`Style`. Coordinates are in model units with the origin at the top-left corner
of the module and Y growing downward.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Optional, Union, TYPE_CHECKING
import numpy as np

from fencelayout.model.geometry_utils import (
    Bounds,
    band_corners,
    bounds_of_points,
    text_box,
)

if TYPE_CHECKING:
    import numpy.typing as npt

Point2 = tuple[float, float]


# ----- Enums -----

class Role(StrEnum):
    FRAME = "frame"
    PANEL = "panel"
    GAP = "gap"
    BAR = "bar"
    BRACKET = "bracket"
    PROFILE = "profile"
    OMEGA = "omega"
    TAIL_BASE = "tail_base"
    TAIL_LOWER = "tail_lower"
    TAIL_DIAGONAL = "tail_diagonal"
    TAIL_SUPPORT = "tail_support"
    TAIL_LABEL = "tail_label"
    OUTLINE = "outline"
    DIMENSION = "dimension"
    LABEL = "label"
    TITLE = "title"


class Anchor(StrEnum):
    START = "start"
    MIDDLE = "middle"
    END = "end"


class Baseline(StrEnum):
    AUTO = "auto"
    MIDDLE = "middle"
    HANGING = "hanging"


@dataclass(frozen=True)
class Style:
    """Visual attributes; `None` means 'not painted'."""
    fill: Optional[str] = None
    stroke: Optional[str] = "#333"
    stroke_width: float = 1.0
    dash: Optional[tuple[float, ...]] = None
    opacity: float = 1.0


def _scale_point(p: Point2, factor: float) -> Point2:
    return (p[0] * factor, p[1] * factor)

def _shift_point(p: Point2, dx: float, dy: float) -> Point2:
    return (p[0] + dx, p[1] + dy)


# ----- Primitives -----

@dataclass(frozen=True)
class Rect:
    """Axis aligned rectangle, (x, y) is the top-left corner."""
    x: float
    y: float
    width: float
    height: float
    label: Optional[str] = None
    role: Role = Role.OUTLINE
    style: Style = field(default_factory=Style)

    def scaled(self, factor: float) -> Rect:
        return replace(
            self,
            x=self.x * factor,
            y=self.y * factor,
            width=self.width * factor,
            height=self.height * factor,
        )

    def translated(self, dx: float, dy: float) -> Rect:
        return replace(self, x=self.x + dx, y=self.y + dy)

    def bounds(self) -> Bounds:
        return Bounds(self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class Band:
    """
    A straight strip of constant thickness centered on the segment start->end.

    `overdraw` extends the strip beyond both ends along its axis.
    """
    start: Point2
    end: Point2
    thickness: float
    overdraw: float = 0.0
    role: Role = Role.TAIL_DIAGONAL
    style: Style = field(default_factory=Style)

    def polygon(self) -> npt.NDArray[np.float64]:
        """The four corners as an (4, 2) array."""
        return band_corners(self.start, self.end, self.thickness, self.overdraw)

    def scaled(self, factor: float) -> Band:
        return replace(
            self,
            start=_scale_point(self.start, factor),
            end=_scale_point(self.end, factor),
            thickness=self.thickness * factor,
            overdraw=self.overdraw * factor,
        )

    def translated(self, dx: float, dy: float) -> Band:
        return replace(
            self,
            start=_shift_point(self.start, dx, dy),
            end=_shift_point(self.end, dx, dy),
        )

    def bounds(self) -> Bounds:
        return bounds_of_points(self.polygon())


@dataclass(frozen=True)
class Polygon:
    """Closed filled polygon."""
    points: tuple[Point2, ...]
    role: Role = Role.TAIL_LOWER
    style: Style = field(default_factory=Style)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.asarray(self.points, dtype=np.float64).reshape(-1, 2)

    def scaled(self, factor: float) -> Polygon:
        return replace(self, points=tuple(_scale_point(p, factor) for p in self.points))

    def translated(self, dx: float, dy: float) -> Polygon:
        return replace(self, points=tuple(_shift_point(p, dx, dy) for p in self.points))

    def bounds(self) -> Bounds:
        return bounds_of_points(self.to_array())


@dataclass(frozen=True)
class Line:
    """A straight segment, optionally with arrowheads (dimension lines)."""
    start: Point2
    end: Point2
    arrow_start: bool = False
    arrow_end: bool = False
    role: Role = Role.DIMENSION
    style: Style = field(default_factory=Style)

    def scaled(self, factor: float) -> Line:
        return replace(
            self,
            start=_scale_point(self.start, factor),
            end=_scale_point(self.end, factor),
        )

    def translated(self, dx: float, dy: float) -> Line:
        return replace(
            self,
            start=_shift_point(self.start, dx, dy),
            end=_shift_point(self.end, dx, dy),
        )

    def bounds(self) -> Bounds:
        return bounds_of_points(np.array([self.start, self.end], dtype=np.float64))


@dataclass(frozen=True)
class Text:
    """
    A text label anchored at (x, y).

    `font_size`, `dx` and `dy` are drawing units: scaling the drawing moves
    the anchor but neither resizes the text nor changes the nudge.
    """
    x: float
    y: float
    text: str
    font_size: float = 12.0
    anchor: Anchor = Anchor.START
    baseline: Baseline = Baseline.AUTO
    rotation: float = 0.0  # degrees, clockwise in screen space
    bold: bool = False
    dx: float = 0.0
    dy: float = 0.0
    role: Role = Role.LABEL
    style: Style = field(default_factory=Style)

    @property
    def position(self) -> Point2:
        """Final anchor position including the nudge."""
        return (self.x + self.dx, self.y + self.dy)

    def scaled(self, factor: float) -> Text:
        return replace(self, x=self.x * factor, y=self.y * factor)

    def translated(self, dx: float, dy: float) -> Text:
        return replace(self, x=self.x + dx, y=self.y + dy)

    def bounds(self) -> Bounds:
        """Estimated extent; glyph metrics are unknown without a renderer."""
        return bounds_of_points(
            text_box(
                self.position,
                len(self.text),
                self.font_size,
                str(self.anchor),
                str(self.baseline),
                self.rotation,
            )
        )


# Union type for list handling
Primitive = Union[Rect, Band, Polygon, Line, Text]


def union_bounds(primitives: list[Primitive]) -> Bounds:
    """Bounding box of a primitive list (empty box at the origin if empty)."""
    if not primitives:
        return Bounds(0.0, 0.0, 0.0, 0.0)
    result = primitives[0].bounds()
    for primitive in primitives[1:]:
        result = result.union(primitive.bounds())
    return result
