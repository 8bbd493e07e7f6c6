"""Growing and fading blasts that carve the terrain and hurt tanks."""

from __future__ import annotations

import math

from scorched_earth.core.geometry import Point, Rect, bresenham_circle, circle_rect_area, iround
from scorched_earth.core.landscape import Landscape

SPEED = 150.0  # radius growth in pixels per second


class Explosion:
    """Circular blast centred on ``pos``."""

    def __init__(self, pos: Point, max_radius: float, now: float = 0.0) -> None:
        self.created = now
        self.pos = pos
        self.max_radius = max_radius
        self.cur_radius = 0.0
        self.cur_opacity = 1.0
        self.landscape_updated = False

    @property
    def alive(self) -> bool:
        return self.cur_opacity > 0.0

    def update(self, landscape: Landscape, now: float) -> bool:
        """Advance the animation; ``True`` once the explosion has faded out."""

        radius = max(0.0, now - self.created) * SPEED
        if radius <= self.max_radius:
            self.cur_opacity = 1.0
        else:
            self.cur_opacity = max(0.0, (2.0 * self.max_radius - radius) / self.max_radius)
        self.cur_radius = min(radius, self.max_radius)

        if not self.landscape_updated and radius >= self.max_radius:
            self.carve(landscape)
        return not self.alive

    def carve(self, landscape: Landscape) -> None:
        """Clear the disc using horizontal chords between mirrored outline points."""

        cx = int(math.floor(self.pos[0]))
        cy = int(math.floor(self.pos[1]))
        outline = bresenham_circle(cx, cy, int(self.max_radius) - 1)
        for group in zip(outline, outline, outline, outline):
            (x1, y1), _, (x2, y2), _ = group
            # Both outline points belong to the chord.
            left = max(0, min(x1, x2))
            right = max(x1, x2)
            if right < left:
                continue
            for y in (y1, y2):
                landscape.clear_span(left, y, right - left + 1)
        landscape.changed = True
        self.landscape_updated = True

    def overlap_percent(self, rect: Rect) -> int:
        """Share of ``rect`` covered by the full blast, in whole percent."""

        area = rect[2] * rect[3]
        if area <= 0:
            return 0
        covered = circle_rect_area(self.pos[0], self.pos[1], self.max_radius, rect)
        return max(0, min(100, iround(100.0 * covered / area)))
