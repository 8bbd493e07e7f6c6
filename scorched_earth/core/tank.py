"""Tank bodies: aiming, falling onto the terrain and firing."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Union

from scorched_earth.core.ballistics import Ballistics
from scorched_earth.core.geometry import Point, Rect, clamp, in_ellipse, iround, rotate
from scorched_earth.core.landscape import G, Landscape
from scorched_earth.core.missile import Missile
from scorched_earth.core.player import Player

TANK_SIZE = 42
FALL_TIME_SCALE = 3.0
ALLOWED_GAP_RATIO = 0.3
POWER_SCALE = 1.5
MIN_ANGLE = -90.0
MAX_ANGLE = 90.0
MIN_POWER = 0.0
MAX_POWER = 100.0
MAX_HEALTH = 100


@dataclass(frozen=True)
class Placed:
    """The tank stands on solid ground after falling ``distance`` rows."""

    distance: int

    @property
    def is_placed(self) -> bool:
        return True


@dataclass(frozen=True)
class Dropped:
    """The tank is still falling."""

    @property
    def is_placed(self) -> bool:
        return False


FallStatus = Union[Placed, Dropped]


@dataclass
class Tank:
    """A square tank body with a rotating gun mounted on the turret."""

    player: Player
    x: float
    y: float
    size: int = TANK_SIZE
    angle: float = 0.0
    power: float = 50.0
    health: int = MAX_HEALTH
    dead: bool = False
    fall: Optional[Ballistics] = field(default=None, init=False, repr=False)
    fallen: int = field(default=0, init=False)
    _drop_start: float = field(default=0.0, init=False, repr=False)

    # ------------------------------------------------------------------
    # Geometry
    @property
    def player_number(self) -> int:
        return self.player.number

    @property
    def rect(self) -> Rect:
        return self.x, self.y, float(self.size), float(self.size)

    @property
    def center(self) -> Point:
        half = self.size / 2.0
        return self.x + half, self.y + half

    @property
    def left(self) -> int:
        return int(math.floor(self.x))

    @property
    def bottom_row(self) -> int:
        return int(math.floor(self.y)) + self.size - 1

    @property
    def gun_pivot(self) -> Point:
        return self.x + self.size * 0.5, self.y + self.size * 0.4

    @property
    def gun_length(self) -> float:
        return self.size * 0.5

    @property
    def gun_tip(self) -> Point:
        px, py = self.gun_pivot
        dx, dy = rotate(0.0, -self.gun_length, self.angle)
        return px + dx, py + dy

    def overlap_test(self, point: Point) -> bool:
        """Whether ``point`` hits the hull, the turret or the gun barrel."""

        px, py = point
        size = self.size
        lx = px - self.x
        ly = py - self.y
        if in_ellipse(lx, ly, size * 0.5, size * 0.72, size * 0.5, size * 0.28):
            return True
        if in_ellipse(lx, ly, size * 0.5, size * 0.45, size * 0.26, size * 0.16):
            return True
        # Gun barrel, in coordinates where it points straight up from the pivot.
        gx, gy = rotate(lx - size * 0.5, ly - size * 0.4, -self.angle)
        length = self.gun_length
        return in_ellipse(gx, gy, 0.0, -length * 0.5, size * 0.06, length * 0.5)

    # ------------------------------------------------------------------
    # Aiming and health
    def set_angle(self, angle: float) -> None:
        self.angle = clamp(angle, MIN_ANGLE, MAX_ANGLE)

    def set_power(self, power: float) -> None:
        self.power = clamp(power, MIN_POWER, MAX_POWER)

    def take_damage(self, amount: int) -> None:
        self.health = max(0, self.health - max(0, amount))

    @property
    def alive(self) -> bool:
        return not self.dead

    # ------------------------------------------------------------------
    # Falling
    @property
    def is_falling(self) -> bool:
        return self.fall is not None

    def drop(self, from_top: Optional[float] = None, now: float = 0.0) -> None:
        """Start a fresh fall from where the tank is, or from ``from_top``."""

        if from_top is not None:
            self.y = from_top
        self._drop_start = self.y
        self.fallen = 0
        self.fall = Ballistics(
            (self.x, float(self.bottom_row)),
            (0.0, 0.0),
            (0.0, G),
            start_time=now,
            time_scale=FALL_TIME_SCALE,
        )

    def step(self, landscape: Landscape, now: float) -> FallStatus:
        if self.fall is None:
            return Placed(self.fallen)

        width = self.size
        allowed_gap = iround(ALLOWED_GAP_RATIO * width)
        landed = False
        for _, row in self.fall.positions_iter(now):
            if row >= landscape.height:
                landed = True
                break
            cells = self._row_under(landscape, row)
            filled = cells.tobytes().count(1) if cells is not None else 0
            empty = width - filled
            if empty <= allowed_gap:
                landed = True
                break
            if filled:
                # Thin ledges are crushed as the tank passes through them.
                cells[:] = bytes(len(cells))
                landscape.changed = True
            self.y += 1
            self.fallen = iround(self.y - self._drop_start)

        if landed:
            self.fall = None
            return Placed(self.fallen)
        return Dropped()

    def _row_under(self, landscape: Landscape, row: int) -> Optional[memoryview]:
        left = self.left
        length = self.size
        if left < 0:
            length += left
            left = 0
        return landscape.span(left, row, length)

    # ------------------------------------------------------------------
    def fire(self, acceleration: Point, now: float = 0.0) -> Missile:
        return Missile(self.gun_tip, self.angle, self.power * POWER_SCALE, acceleration, now)
