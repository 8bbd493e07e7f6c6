"""Projectile flight on top of the trajectory sampler."""

from __future__ import annotations

import math
from typing import Callable, Optional, Tuple

from scorched_earth.core.ballistics import Ballistics, Cell
from scorched_earth.core.geometry import Point

TIME_SCALE = 3.0

HitTest = Callable[[int, int], bool]


class Missile:
    """A shell fired at ``angle`` degrees (0 is straight up, positive leans right)."""

    def __init__(
        self,
        pos: Point,
        angle: float,
        power: float,
        acceleration: Point,
        now: float = 0.0,
    ) -> None:
        rad = math.radians(angle)
        velocity = (math.sin(rad) * power, -math.cos(rad) * power)
        self.ballistics = Ballistics(pos, velocity, acceleration, start_time=now, time_scale=TIME_SCALE)

    def cur_pos(self) -> Point:
        return self.ballistics.cur_pos()

    def cur_velocity(self) -> Point:
        return self.ballistics.velocity_at(self.ballistics.last_time)

    def speed(self) -> float:
        return math.hypot(*self.cur_velocity())

    def advance(
        self, now: float, bounds: Tuple[int, int], hit_test: HitTest
    ) -> Optional[Cell]:
        """Fly up to ``now``; return the impact cell or ``None`` while in flight.

        Reaching the row just below the field counts as an impact, so the
        field's bottom edge acts as solid ground.
        """

        max_x, max_y = bounds
        for x, y in self.ballistics.positions_iter(now, (max_x, max_y + 1)):
            if y >= max_y or hit_test(x, y):
                return x, y
        pos = self.cur_pos()
        if pos[1] >= max_y:
            # Left the field sideways and has since dropped below it.
            return int(math.floor(pos[0])), max_y
        return None
