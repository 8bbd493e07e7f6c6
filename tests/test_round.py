import pytest

from scorched_earth.core.explosion import Explosion
from scorched_earth.core.round import KILL_BOUNTY, Round, RoundSettings, RoundState

from conftest import FakeClock, run_until


@pytest.mark.parametrize(
    "width, height, tanks",
    [(0, 300, 2), (400, 0, 2), (400, 300, 1), (400, 300, 9), (60, 300, 2)],
)
def test_invalid_rounds_are_rejected(width, height, tanks):
    with pytest.raises(ValueError):
        Round(width, height, tanks)


def test_tanks_are_spread_across_the_field(flat_round: Round):
    centers = sorted(tank.center[0] for tank in flat_round.tanks)
    assert centers == pytest.approx([100.0, 300.0])
    assert sorted(tank.player_number for tank in flat_round.tanks) == [1, 2]


def test_first_placement_is_free(flat_round: Round, clock: FakeClock):
    assert flat_round.state is RoundState.TANKS_THROWING

    run_until(flat_round, clock, lambda state: state is RoundState.AIMING)

    assert flat_round.iteration == 1
    assert flat_round.current_tank == 0
    for tank in flat_round.tanks:
        assert tank.health == 100
        assert tank.bottom_row == 149


def test_aim_only_while_aiming(flat_round: Round, clock: FakeClock):
    flat_round.adjust_angle(10)
    flat_round.adjust_power(10)
    assert flat_round.gun_angle() == 0
    assert flat_round.gun_power() == 50
    assert flat_round.fire() is False

    run_until(flat_round, clock, lambda state: state is RoundState.AIMING)
    flat_round.adjust_angle(200)
    flat_round.adjust_power(-75)

    assert flat_round.gun_angle() == 90
    assert flat_round.gun_power() == 0


def test_hit_test_ignores_the_shooter(flat_round: Round):
    shooter = flat_round.tank
    other = next(tank for tank in flat_round.tanks if tank is not shooter)
    sx, sy = shooter.center
    ox, oy = other.center

    assert not flat_round.hit_test(int(sx), int(sy))
    assert flat_round.hit_test(int(ox), int(oy))
    assert flat_round.hit_test(0, 200)


def test_explosion_damage_is_proportional(flat_round: Round, clock: FakeClock, monkeypatch):
    run_until(flat_round, clock, lambda state: state is RoundState.AIMING)
    first, second = flat_round.tanks

    def fake_overlap(explosion, rect):
        return 40 if rect == first.rect else 0

    monkeypatch.setattr(Explosion, "overlap_percent", fake_overlap)
    flat_round.explosions = [Explosion((200.0, 20.0), 10.0, clock.now)]
    flat_round.state = RoundState.EXPLODING

    run_until(flat_round, clock, lambda state: state is RoundState.SUBSIDENCE)

    assert first.health == 60
    assert second.health == 100
    assert flat_round.explosions == []


def test_simultaneous_explosions_add_up(flat_round: Round, clock: FakeClock):
    run_until(flat_round, clock, lambda state: state is RoundState.AIMING)
    target = flat_round.tanks[1]
    center = target.center
    flat_round.explosions = [
        Explosion((center[0] - 55.0, center[1]), 50.0, clock.now),
        Explosion((center[0] + 55.0, center[1]), 50.0, clock.now),
    ]
    single = flat_round.explosions[0].overlap_percent(target.rect)
    flat_round.state = RoundState.EXPLODING

    run_until(flat_round, clock, lambda state: state is RoundState.SUBSIDENCE)

    assert 0 < single < 50
    assert target.health == 100 - 2 * single


def test_redrop_after_subsidence_hurts(flat_round: Round, clock: FakeClock):
    run_until(flat_round, clock, lambda state: state is RoundState.AIMING)
    tank = flat_round.tanks[1]
    for y in range(150, 170):
        flat_round.landscape.clear_span(tank.left, y, tank.size)
    flat_round.landscape.begin_subsidence(clock.now)
    flat_round.state = RoundState.SUBSIDENCE

    run_until(flat_round, clock, lambda state: state is RoundState.AIMING)

    assert tank.bottom_row == 169
    assert tank.health == 90
    assert flat_round.tanks[0].health == 100
    assert flat_round.current_tank == 0


def test_shot_at_own_feet_ends_round(flat_round: Round, clock: FakeClock):
    run_until(flat_round, clock, lambda state: state is RoundState.AIMING)
    shooter = flat_round.tank
    survivor = next(tank for tank in flat_round.tanks if tank is not shooter)
    flat_round.wind_power = 0.0
    flat_round.adjust_power(-100)

    assert flat_round.fire(clock.now) is True
    assert flat_round.state is RoundState.FLYING_OF_MISSILE
    assert flat_round.missile is not None
    assert flat_round.missile_speed() == 0.0
    assert flat_round.update(clock.advance(0.05)) is RoundState.FLYING_OF_MISSILE
    assert flat_round.missile_speed() > 0.0

    run_until(flat_round, clock, lambda state: state is RoundState.EXPLODING)
    assert flat_round.missile is None
    assert len(flat_round.explosions) == 1
    assert flat_round.explosions[0].pos[1] == pytest.approx(150.0)

    run_until(flat_round, clock, lambda state: state is RoundState.FINISH)

    assert shooter.dead
    assert shooter.health == 0
    assert survivor.health == 100
    assert flat_round.winner is survivor
    # Destroying your own tank earns nothing.
    assert shooter.player.money == 0
    assert flat_round.update(clock.advance(1.0)) is RoundState.FINISH


def test_kill_pays_bounty_and_passes_turn(clock: FakeClock):
    game_round = Round(600, 300, 3, RoundSettings(seed=3, tank_size=20, drop_top=0.0), clock=clock)
    game_round.landscape.amplitude = 0.0
    game_round.landscape.generate()
    run_until(game_round, clock, lambda state: state is RoundState.AIMING)
    shooter = game_round.tank
    victim = game_round.tanks[(game_round.current_tank + 1) % 3]

    victim.health = 0
    game_round._shot_fired = True
    for tank in game_round.live_tanks:
        tank.drop(now=clock.now)
    game_round.state = RoundState.TANKS_THROWING

    run_until(game_round, clock, lambda state: state is RoundState.EXPLODING)
    assert victim.dead
    assert shooter.player.money == KILL_BOUNTY
    assert shooter.player.kills == 1

    run_until(game_round, clock, lambda state: state is RoundState.AIMING)
    assert game_round.tank is not victim
    assert game_round.tank is not shooter
    assert game_round.money() == 0


def test_regenerate_landscape_restarts_placement(flat_round: Round, clock: FakeClock):
    run_until(flat_round, clock, lambda state: state is RoundState.AIMING)
    flat_round.tanks[0].health = 30

    flat_round.regenerate_landscape(seed=11, now=clock.now)

    assert flat_round.state is RoundState.TANKS_THROWING
    assert flat_round.iteration == 0
    assert flat_round.landscape.seed == 11
    assert all(tank.health == 100 for tank in flat_round.tanks)
    run_until(flat_round, clock, lambda state: state is RoundState.AIMING)
    assert all(tank.health == 100 for tank in flat_round.tanks)


def test_wind_is_rounded_to_tenths(flat_round: Round):
    for _ in range(20):
        flat_round.change_wind()
        assert -10.0 <= flat_round.wind_power <= 10.0
        assert round(flat_round.wind_power * 10) == pytest.approx(flat_round.wind_power * 10)
