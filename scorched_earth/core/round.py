"""Turn sequencing for one round of the artillery duel."""

from __future__ import annotations

import enum
import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from scorched_earth.core.explosion import Explosion
from scorched_earth.core.geometry import iround
from scorched_earth.core.landscape import G, Landscape
from scorched_earth.core.missile import Missile
from scorched_earth.core.player import Player
from scorched_earth.core.tank import MAX_HEALTH, TANK_SIZE, Placed, Tank

logger = logging.getLogger(__name__)

MAX_PLAYERS_COUNT = 8
KILL_BOUNTY = 100
DAMAGE_PER_PIXEL = 0.5
EXPLOSION_RADIUS = 50.0
TANK_EXPLOSION_RADIUS = 50.0
TANK_MARGIN = 100.0
DROP_TOP = 50.0
MAX_WIND = 10.0


class RoundState(enum.Enum):
    TANKS_THROWING = "tanks_throwing"
    AIMING = "aiming"
    FLYING_OF_MISSILE = "flying_of_missile"
    EXPLODING = "exploding"
    SUBSIDENCE = "subsidence"
    FINISH = "finish"


@dataclass
class RoundSettings:
    """Tunables for a round; the defaults match a 1024x768 playfield."""

    seed: Optional[int] = None
    tank_size: int = TANK_SIZE
    drop_top: float = DROP_TOP
    explosion_radius: float = EXPLOSION_RADIUS
    tank_explosion_radius: float = TANK_EXPLOSION_RADIUS
    damage_per_pixel: float = DAMAGE_PER_PIXEL
    kill_bounty: int = KILL_BOUNTY


class Round:
    """Own the terrain and tanks and drive them one phase at a time.

    ``update`` is called once per frame with the current time in seconds; the
    state it returns tells the caller what to draw.
    """

    def __init__(
        self,
        width: int,
        height: int,
        tank_count: int,
        settings: Optional[RoundSettings] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or RoundSettings()
        if tank_count < 2 or tank_count > MAX_PLAYERS_COUNT:
            raise ValueError(f"'tank_count' must be between 2 and {MAX_PLAYERS_COUNT}")
        self.clock = clock
        self.rng = random.Random(self.settings.seed)
        self.landscape = Landscape(width, height, seed=self.rng.randrange(2**32))
        self.landscape.dx = self.rng.randrange(max(1, width // 2))
        self.landscape.generate()

        self.width = width
        self.height = height
        self.wind_power = 0.0
        self.players: List[Player] = [Player(number) for number in range(1, tank_count + 1)]
        self.tanks = self._spawn_tanks()
        self.current_tank = 0
        self.state = RoundState.TANKS_THROWING
        self.iteration = 0
        self.missile: Optional[Missile] = None
        self.explosions: List[Explosion] = []
        self._shot_fired = False

        now = self.clock()
        for tank in self.tanks:
            tank.drop(now=now)
        self.change_wind()

    def _spawn_tanks(self) -> List[Tank]:
        size = self.settings.tank_size
        count = len(self.players)
        margin = min(TANK_MARGIN, self.width / 4.0)
        spacing = (self.width - 2.0 * margin) / (count - 1)
        if spacing < size:
            raise ValueError(f"terrain of width {self.width} is too narrow for {count} tanks")

        # Turn order follows the shuffled player numbers, not screen order.
        players = list(self.players)
        self.rng.shuffle(players)
        tanks = []
        for i, player in enumerate(players):
            center_x = margin + spacing * i
            tanks.append(Tank(player, center_x - size / 2.0, self.settings.drop_top, size=size))
        return tanks

    # ------------------------------------------------------------------
    # Read accessors
    @property
    def live_tanks(self) -> List[Tank]:
        return [tank for tank in self.tanks if tank.alive]

    @property
    def tank(self) -> Optional[Tank]:
        if 0 <= self.current_tank < len(self.tanks):
            return self.tanks[self.current_tank]
        return None

    def player_number(self) -> int:
        tank = self.tank
        return tank.player_number if tank else 1

    def gun_angle(self) -> float:
        tank = self.tank
        return tank.angle if tank else 90.0

    def gun_power(self) -> float:
        tank = self.tank
        return tank.power if tank else 0.0

    def health(self) -> int:
        tank = self.tank
        return tank.health if tank else 0

    def money(self) -> int:
        tank = self.tank
        return tank.player.money if tank else 0

    def missile_speed(self) -> float:
        return self.missile.speed() if self.missile else 0.0

    @property
    def winner(self) -> Optional[Tank]:
        if self.state is not RoundState.FINISH:
            return None
        return self._sole_survivor()

    def _sole_survivor(self) -> Optional[Tank]:
        alive = self.live_tanks
        return alive[0] if len(alive) == 1 else None

    # ------------------------------------------------------------------
    # Input
    def adjust_angle(self, delta: float) -> None:
        if self.state is RoundState.AIMING and self.tank:
            self.tank.set_angle(self.tank.angle + delta)

    def adjust_power(self, delta: float) -> None:
        if self.state is RoundState.AIMING and self.tank:
            self.tank.set_power(self.tank.power + delta)

    def fire(self, now: Optional[float] = None) -> bool:
        if self.state is not RoundState.AIMING or self.tank is None:
            return False
        now = self.clock() if now is None else now
        self.missile = self.tank.fire((self.wind_power, G), now)
        self._shot_fired = True
        self._set_state(RoundState.FLYING_OF_MISSILE)
        return True

    def change_wind(self) -> None:
        self.wind_power = iround(self.rng.uniform(-MAX_WIND, MAX_WIND) * 10.0) / 10.0

    def regenerate_landscape(self, seed: Optional[int] = None, now: Optional[float] = None) -> None:
        """Start placement over on freshly generated terrain."""

        now = self.clock() if now is None else now
        self.landscape.set_seed(self.rng.randrange(2**32) if seed is None else seed)
        self.landscape.generate()
        for tank in self.tanks:
            tank.health = MAX_HEALTH
            tank.dead = False
            tank.drop(self.settings.drop_top, now)
        self.missile = None
        self.explosions = []
        self.iteration = 0
        self._shot_fired = False
        self.change_wind()
        self._set_state(RoundState.TANKS_THROWING)

    # ------------------------------------------------------------------
    # Simulation
    def update(self, now: Optional[float] = None) -> RoundState:
        now = self.clock() if now is None else now
        if self.state is RoundState.TANKS_THROWING:
            self._update_tanks(now)
        elif self.state is RoundState.FLYING_OF_MISSILE:
            self._update_missile(now)
        elif self.state is RoundState.EXPLODING:
            self._update_explosions(now)
        elif self.state is RoundState.SUBSIDENCE:
            self._update_landscape(now)
        return self.state

    def _set_state(self, state: RoundState) -> None:
        logger.debug("Round state %s -> %s", self.state.name, state.name)
        self.state = state

    def _update_tanks(self, now: float) -> None:
        live = self.live_tanks
        all_placed = True
        distances = []
        for tank in live:
            status = tank.step(self.landscape, now)
            all_placed &= status.is_placed
            distances.append(status.distance if isinstance(status, Placed) else 0)
        if not all_placed:
            return

        if self.iteration > 0:
            for tank, distance in zip(live, distances):
                tank.take_damage(iround(distance * self.settings.damage_per_pixel))
        self.iteration += 1

        destroyed = [tank for tank in live if tank.health == 0]
        if destroyed:
            self._destroy(destroyed, now)
            return
        if len(live) <= 1:
            self._finish()
            return
        if self._shot_fired:
            self._next_turn()
        self._set_state(RoundState.AIMING)

    def _destroy(self, destroyed: Sequence[Tank], now: float) -> None:
        shooter = self.tank
        for tank in destroyed:
            tank.dead = True
            tank.fall = None
            logger.info("%s destroyed", tank.player.name)
            if shooter is not None and tank is not shooter:
                shooter.player.reward_kill(self.settings.kill_bounty)
        self.explosions = [
            Explosion(tank.center, self.settings.tank_explosion_radius, now) for tank in destroyed
        ]
        self._set_state(RoundState.EXPLODING)

    def _finish(self) -> None:
        winner = self._sole_survivor()
        if winner is not None:
            logger.info("%s wins the round", winner.player.name)
        else:
            logger.info("Round finished without survivors")
        self._set_state(RoundState.FINISH)

    def _next_turn(self) -> None:
        count = len(self.tanks)
        for offset in range(1, count + 1):
            index = (self.current_tank + offset) % count
            if self.tanks[index].alive:
                self.current_tank = index
                break
        self._shot_fired = False
        self.change_wind()

    def hit_test(self, x: int, y: int) -> bool:
        """Whether a missile entering cell ``(x, y)`` hits something."""

        if self.landscape.query(x, y):
            return True
        point = (x + 0.5, y + 0.5)
        shooter = self.tank
        return any(
            tank.overlap_test(point) for tank in self.live_tanks if tank is not shooter
        )

    def _update_missile(self, now: float) -> None:
        if self.missile is None:
            return
        hit = self.missile.advance(now, self.landscape.size, self.hit_test)
        if hit is None:
            return
        logger.debug("Missile hit at %s", hit)
        self.missile = None
        self.explosions = [Explosion((float(hit[0]), float(hit[1])), self.settings.explosion_radius, now)]
        self._set_state(RoundState.EXPLODING)

    def _update_explosions(self, now: float) -> None:
        finished = True
        for explosion in self.explosions:
            finished &= explosion.update(self.landscape, now)
        if not finished:
            return
        for tank in self.live_tanks:
            damage = sum(explosion.overlap_percent(tank.rect) for explosion in self.explosions)
            tank.take_damage(damage)
        self.explosions = []
        self.landscape.begin_subsidence(now)
        self._set_state(RoundState.SUBSIDENCE)

    def _update_landscape(self, now: float) -> None:
        if not self.landscape.step(now):
            return
        for tank in self.live_tanks:
            tank.drop(now=now)
        self._set_state(RoundState.TANKS_THROWING)
