"""Core simulation for Scorched Earth, independent of rendering."""

from scorched_earth.core.ballistics import Ballistics
from scorched_earth.core.explosion import Explosion
from scorched_earth.core.landscape import Landscape
from scorched_earth.core.missile import Missile
from scorched_earth.core.player import Player
from scorched_earth.core.round import MAX_PLAYERS_COUNT, Round, RoundSettings, RoundState
from scorched_earth.core.tank import Dropped, Placed, Tank

__all__ = [
    "Ballistics",
    "Dropped",
    "Explosion",
    "Landscape",
    "MAX_PLAYERS_COUNT",
    "Missile",
    "Placed",
    "Player",
    "Round",
    "RoundSettings",
    "RoundState",
    "Tank",
]
