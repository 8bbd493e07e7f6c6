"""Trajectory sampling shared by missiles and falling tanks."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from scorched_earth.core.geometry import Point

Cell = Tuple[int, int]


def _cell(pos: Point) -> Cell:
    return int(math.floor(pos[0])), int(math.floor(pos[1]))


@dataclass
class Ballistics:
    """Kinematic state of a body under constant acceleration.

    Time passed to the public methods is wall/simulated seconds; it is
    converted to trajectory time with ``(now - start_time) * time_scale``.
    The position formula is ``p0 + (v0 + a*t) * t``.
    """

    start_pos: Point
    start_velocity: Point
    acceleration: Point
    start_time: float = 0.0
    time_scale: float = 1.0
    last_time: float = field(default=0.0, init=False)
    last_cell: Cell = field(init=False)

    def __post_init__(self) -> None:
        self.last_cell = _cell(self.start_pos)

    # ------------------------------------------------------------------
    # Kinematics
    def elapsed(self, now: float) -> float:
        return max(0.0, (now - self.start_time) * self.time_scale)

    def velocity_at(self, t: float) -> Point:
        return (
            self.start_velocity[0] + self.acceleration[0] * t,
            self.start_velocity[1] + self.acceleration[1] * t,
        )

    def position_at(self, t: float) -> Point:
        vx, vy = self.velocity_at(t)
        return self.start_pos[0] + vx * t, self.start_pos[1] + vy * t

    def _rate_at(self, t: float) -> Point:
        # Derivative of position_at.
        return (
            self.start_velocity[0] + 2.0 * self.acceleration[0] * t,
            self.start_velocity[1] + 2.0 * self.acceleration[1] * t,
        )

    def cur_pos(self) -> Point:
        return self.position_at(self.last_time)

    def pos_and_velocity(self, now: float) -> Tuple[Point, Point]:
        t = self.elapsed(now)
        return self.position_at(t), self.velocity_at(t)

    # ------------------------------------------------------------------
    # Sampling
    def time_step(self, begin: float, end: float) -> float:
        """Step that moves the body at most half a cell along either axis."""

        period = end - begin
        max_component = 0.0
        for t in (begin, end):
            for vx, vy in (self.velocity_at(t), self._rate_at(t)):
                max_component = max(max_component, abs(vx), abs(vy))
        if max_component <= 0.0:
            return period
        return min(period, 1.0 / (2.0 * max_component))

    def positions_iter(
        self, now: float, bounds: Optional[Tuple[int, int]] = None
    ) -> Iterator[Cell]:
        """Yield every new cell crossed between the cursor and ``now``.

        The generator is single use and moves the cursor as it goes. When it
        finishes, whether exhausted or stopped by ``bounds``, the cursor time
        sits exactly at ``now`` so the next call resumes without gaps.
        """

        end = self.elapsed(now)
        begin = self.last_time
        if end <= begin:
            return
        step = self.time_step(begin, end)
        t = begin
        try:
            while t < end:
                t = min(end, t + step)
                cell = _cell(self.position_at(t))
                if cell == self.last_cell:
                    continue
                if bounds is not None:
                    max_x, max_y = bounds
                    if not (0 <= cell[0] < max_x and 0 <= cell[1] < max_y):
                        return
                self.last_cell = cell
                self.last_time = t
                yield cell
        finally:
            self.last_time = max(self.last_time, end)
