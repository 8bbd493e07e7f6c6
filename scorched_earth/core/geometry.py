"""Small geometric helpers shared by the simulation modules."""

from __future__ import annotations

import math
from typing import Iterator, Tuple

Point = Tuple[float, float]
Rect = Tuple[float, float, float, float]  # left, top, width, height


def iround(value: float) -> int:
    """Round half away from zero and return an ``int``."""

    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def rotate(x: float, y: float, degrees: float) -> Point:
    """Rotate ``(x, y)`` clockwise on screen (y axis points down)."""

    rad = math.radians(degrees)
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)
    return x * cos_a - y * sin_a, x * sin_a + y * cos_a


def in_ellipse(px: float, py: float, cx: float, cy: float, rx: float, ry: float) -> bool:
    if rx <= 0 or ry <= 0:
        return False
    nx = (px - cx) / rx
    ny = (py - cy) / ry
    return nx * nx + ny * ny <= 1.0


def bresenham_circle(cx: int, cy: int, radius: int) -> Iterator[Tuple[int, int]]:
    """Yield the outline of a circle, four points (one per quadrant) per step.

    Within each group the first and third points mirror each other through
    the center, as do the second and fourth.
    """

    x = -radius
    y = 0
    error = 2 - 2 * radius
    while x < 0:
        yield cx - x, cy + y
        yield cx - y, cy - x
        yield cx + x, cy - y
        yield cx + y, cy + x
        r = error
        if r <= y:
            y += 1
            error += y * 2 + 1
        if r > x or error > y:
            x += 1
            error += x * 2 + 1


# ----------------------------------------------------------------------
# Circle / rectangle intersection area


def _half_chord(h: float, r: float) -> float:
    return math.sqrt(r * r - h * h) if h < r else 0.0


def _segment_integral(x: float, h: float, r: float) -> float:
    # Antiderivative of sqrt(r^2 - x^2) - h.
    ratio = clamp(x / r, -1.0, 1.0)
    return 0.5 * (math.sqrt(max(0.0, 1.0 - ratio * ratio)) * x * r + r * r * math.asin(ratio) - 2.0 * h * x)


def _area_above(x0: float, x1: float, h: float, r: float) -> float:
    """Area of the circle part with ``y >= h >= 0`` and ``x0 <= x <= x1``."""

    s = _half_chord(h, r)
    return _segment_integral(clamp(x1, -s, s), h, r) - _segment_integral(clamp(x0, -s, s), h, r)


def _area_band(x0: float, x1: float, y0: float, y1: float, r: float) -> float:
    if y0 < 0:
        if y1 < 0:
            return _area_band(x0, x1, -y1, -y0, r)
        return _area_band(x0, x1, 0.0, -y0, r) + _area_band(x0, x1, 0.0, y1, r)
    return _area_above(x0, x1, y0, r) - _area_above(x0, x1, y1, r)


def circle_rect_area(cx: float, cy: float, radius: float, rect: Rect) -> float:
    """Exact area shared by a circle and an axis-aligned rectangle."""

    left, top, width, height = rect
    if radius <= 0 or width <= 0 or height <= 0:
        return 0.0
    x0 = left - cx
    x1 = left + width - cx
    y0 = top - cy
    y1 = top + height - cy
    return max(0.0, _area_band(x0, x1, y0, y1, radius))
