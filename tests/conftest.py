from typing import Callable

import pytest

from scorched_earth.core.landscape import Landscape
from scorched_earth.core.round import Round, RoundSettings, RoundState


class FakeClock:
    """Manually advanced stand-in for ``time.monotonic``."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def flat_landscape() -> Landscape:
    """100x100 terrain with a perfectly flat horizon at row 50."""

    landscape = Landscape(100, 100, seed=0)
    landscape.amplitude = 0.0
    landscape.dx = 0
    landscape.generate()
    return landscape


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def flat_round(clock: FakeClock) -> Round:
    """Two small tanks on a flat 400x300 field, dropped from the top edge."""

    game_round = Round(400, 300, 2, RoundSettings(seed=7, tank_size=20, drop_top=0.0), clock=clock)
    game_round.landscape.amplitude = 0.0
    game_round.landscape.generate()
    game_round.wind_power = 0.0
    return game_round


def run_until(
    game_round: Round,
    clock: FakeClock,
    predicate: Callable[[RoundState], bool],
    step: float = 0.05,
    limit: int = 2000,
) -> RoundState:
    """Tick the round until ``predicate(state)`` holds."""

    state = game_round.state
    for _ in range(limit):
        state = game_round.update(clock.advance(step))
        if predicate(state):
            return state
    raise AssertionError(f"round stuck in {state}")
