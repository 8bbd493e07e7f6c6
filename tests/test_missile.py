from scorched_earth.core.landscape import G, Landscape
from scorched_earth.core.missile import Missile


def fly(missile: Missile, landscape: Landscape, hit_test, limit: int = 400):
    now = 0.0
    for _ in range(limit):
        now += 0.05
        hit = missile.advance(now, landscape.size, hit_test)
        if hit is not None:
            return hit
    raise AssertionError("missile never landed")


def test_straight_down_hits_horizon(flat_landscape: Landscape):
    missile = Missile((50.5, 0.0), 0.0, 0.0, (0.0, G))

    assert fly(missile, flat_landscape, flat_landscape.query) == (50, 50)


def test_straight_down_reaches_bottom_through_removed_column(flat_landscape: Landscape):
    for y in range(50, 100):
        flat_landscape.clear_span(45, y, 10)
    missile = Missile((50.5, 0.0), 0.0, 0.0, (0.0, G))

    assert fly(missile, flat_landscape, flat_landscape.query) == (50, 100)


def test_custom_hit_test_stops_flight_over_gap(flat_landscape: Landscape):
    for y in range(50, 100):
        flat_landscape.clear_span(45, y, 10)

    def hit_test(x: int, y: int) -> bool:
        return flat_landscape.query(x, y) or y == 30

    missile = Missile((50.5, 0.0), 0.0, 0.0, (0.0, G))

    assert fly(missile, flat_landscape, hit_test) == (50, 30)


def test_still_flying_above_the_field(flat_landscape: Landscape):
    missile = Missile((50.5, 40.0), 0.0, 100.0, (0.0, G))

    assert missile.advance(0.2, flat_landscape.size, flat_landscape.query) is None
    assert missile.cur_pos()[1] < 0
    assert missile.speed() > 0


def test_missile_leaving_sideways_lands_below_field(flat_landscape: Landscape):
    missile = Missile((90.0, 10.0), 90.0, 60.0, (0.0, G))

    x, y = fly(missile, flat_landscape, flat_landscape.query)

    assert y == flat_landscape.height or flat_landscape.query(x, y)
