from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from math import radians
import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt

# Average glyph advance relative to the font size (sans-serif)
GLYPH_WIDTH_RATIO = 0.6


@dataclass(frozen=True)
class Bounds:
    """Axis aligned bounding box (min_x, min_y) - (max_x, max_y)."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def union(self, other: Bounds) -> Bounds:
        return Bounds(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def expanded(self, margin: float) -> Bounds:
        return Bounds(
            self.min_x - margin,
            self.min_y - margin,
            self.max_x + margin,
            self.max_y + margin,
        )


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp `value` into [lower, upper]; `lower` wins if the range is empty."""
    return max(lower, min(upper, value))

def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def bounds_of_points(points: npt.NDArray[np.float64]) -> Bounds:
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    lo = pts.min(axis=0)
    hi = pts.max(axis=0)
    return Bounds(float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))


def band_corners(
    start: tuple[float, float],
    end: tuple[float, float],
    thickness: float,
    overdraw: float = 0.0,
) -> npt.NDArray[np.float64]:
    """
    Corners of a strip of `thickness` centered on the segment start->end.

    Args:
        start: (x, y) of the first end of the axis.
        end: (x, y) of the second end of the axis.
        thickness: Full width of the strip, measured perpendicular to the axis.
        overdraw: Extension of the strip beyond both ends, along the axis.

    Returns:
        A (4, 2) array ordered start-left, end-left, end-right, start-right.
        A degenerate axis yields four coincident points.
    """
    p1 = np.asarray(start, dtype=np.float64)
    p2 = np.asarray(end, dtype=np.float64)
    axis = p2 - p1
    length = float(np.hypot(axis[0], axis[1]))
    if length < 1e-12:
        return np.tile(p1, (4, 1))

    u = axis / length
    n = np.array([-u[1], u[0]])
    half = n * (thickness / 2.0)
    a = p1 - u * overdraw
    b = p2 + u * overdraw
    return np.array([a + half, b + half, b - half, a - half])


def unit_normal(
    start: tuple[float, float],
    end: tuple[float, float],
) -> npt.NDArray[np.float64]:
    """Left normal (-uy, ux) of the segment direction (zero for a point)."""
    axis = np.asarray(end, dtype=np.float64) - np.asarray(start, dtype=np.float64)
    length = float(np.hypot(axis[0], axis[1]))
    if length < 1e-12:
        return np.zeros(2)
    return np.array([-axis[1], axis[0]]) / length


def x_at_y(
    start: tuple[float, float],
    end: tuple[float, float],
    y: float,
    eps: float = 1e-9,
) -> float:
    """
    X coordinate where the infinite line through start->end crosses height `y`.

    For a horizontal line the X of `start` is returned.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if abs(dy) < eps:
        return float(start[0])
    return float(start[0] + (y - start[1]) * dx / dy)


def text_box(
    position: tuple[float, float],
    n_chars: int,
    font_size: float,
    anchor: str,
    baseline: str,
    rotation_deg: float,
) -> npt.NDArray[np.float64]:
    """
    Approximate corner points of a rendered text line.

    The box is built in the text's own frame (x along the reading direction)
    and rotated about the anchor point.
    """
    width = n_chars * font_size * GLYPH_WIDTH_RATIO
    height = font_size

    match anchor:
        case "middle":
            x0 = -width / 2
        case "end":
            x0 = -width
        case _:
            x0 = 0.0

    match baseline:
        case "middle":
            y0 = -height / 2
        case "hanging":
            y0 = 0.0
        case _:
            y0 = -height

    corners = np.array([
        [x0, y0],
        [x0 + width, y0],
        [x0 + width, y0 + height],
        [x0, y0 + height],
    ])
    theta = radians(rotation_deg)
    rot = np.array([[np.cos(theta), -np.sin(theta)], [np.sin(theta), np.cos(theta)]])
    return corners @ rot.T + np.asarray(position, dtype=np.float64)
