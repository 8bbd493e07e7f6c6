"""Drawing helpers for the pygame client."""

from __future__ import annotations

from typing import Sequence, Tuple

import pygame

from scorched_earth.core.explosion import Explosion
from scorched_earth.core.round import Round, RoundState
from scorched_earth.core.tank import Tank
from scorched_earth.pygame.keybindings import KeyBindings

LANDSCAPE_COLOR = (0, 189, 207, 255)
TANK_COLOR = pygame.Color(245, 71, 32)
ACTIVE_TANK_COLOR = pygame.Color(255, 214, 90)
EXPLOSION_COLOR = (242, 68, 15)
BACKGROUND_COLOR = pygame.Color(26, 51, 77)
TEXT_COLOR = pygame.Color(255, 255, 255)


def landscape_to_rgba(
    cells: Sequence[int], size: Tuple[int, int], color: Tuple[int, int, int, int] = LANDSCAPE_COLOR
) -> bytes:
    """Expand one-byte occupancy cells into RGBA pixels.

    Filled cells take ``color``, empty cells are fully transparent.
    """

    width, height = size
    if len(cells) != width * height:
        raise ValueError(
            f"expected {width * height} cells for a {width}x{height} landscape, got {len(cells)}"
        )
    filled = bytes(color)
    empty = bytes(4)
    return b"".join(filled if cell else empty for cell in cells)


def landscape_surface(game_round: Round) -> pygame.Surface:
    landscape = game_round.landscape
    pixels = landscape_to_rgba(landscape.occupancy(), landscape.size)
    return pygame.image.frombuffer(pixels, landscape.size, "RGBA").copy()


def draw_tank(surface: pygame.Surface, tank: Tank, active: bool) -> None:
    color = ACTIVE_TANK_COLOR if active else TANK_COLOR
    x, y, w, h = tank.rect
    hull = pygame.Rect(int(x), int(y + h * 0.44), int(w), int(h * 0.56))
    turret = pygame.Rect(int(x + w * 0.24), int(y + h * 0.29), int(w * 0.52), int(h * 0.32))
    pygame.draw.ellipse(surface, color, hull)
    pygame.draw.ellipse(surface, color, turret)
    pygame.draw.line(surface, color, tank.gun_pivot, tank.gun_tip, max(2, int(w * 0.1)))


def draw_tanks(surface: pygame.Surface, game_round: Round) -> None:
    current = game_round.tank
    for tank in game_round.live_tanks:
        draw_tank(surface, tank, tank is current)


def draw_missile(surface: pygame.Surface, game_round: Round) -> None:
    if game_round.state is not RoundState.FLYING_OF_MISSILE or game_round.missile is None:
        return
    x, y = game_round.missile.cur_pos()
    pygame.draw.circle(surface, TEXT_COLOR, (int(x), int(y)), 2)


def draw_explosion(surface: pygame.Surface, explosion: Explosion) -> None:
    radius = int(explosion.cur_radius)
    if radius <= 0:
        return
    alpha = max(0, min(255, int(explosion.cur_opacity * 255)))
    blast = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
    pygame.draw.circle(blast, (*EXPLOSION_COLOR, alpha), (radius, radius), radius)
    surface.blit(blast, (int(explosion.pos[0]) - radius, int(explosion.pos[1]) - radius))


def draw_explosions(surface: pygame.Surface, game_round: Round) -> None:
    for explosion in game_round.explosions:
        draw_explosion(surface, explosion)


def draw_status(surface: pygame.Surface, font: pygame.font.Font, game_round: Round) -> None:
    if game_round.state is RoundState.FINISH:
        winner = game_round.winner
        text = f"{winner.player.name} wins!" if winner else "Everybody is destroyed"
        surface.blit(font.render(text, True, TEXT_COLOR), (10, 10))
        return
    fields = [
        f"Angle: {game_round.gun_angle():.0f}",
        f"Power: {game_round.gun_power():.0f}",
        f"Wind: {game_round.wind_power * 10.0:.0f}",
        f"Player: {game_round.player_number()}",
        f"Health: {game_round.health()}",
        f"Money: {game_round.money()}",
    ]
    if game_round.state is RoundState.FLYING_OF_MISSILE:
        fields.append(f"Speed: {game_round.missile_speed():.0f}")
    x = 10
    for field in fields:
        rendered = font.render(field, True, TEXT_COLOR)
        surface.blit(rendered, (x, 10))
        x += rendered.get_width() + 20


def draw_help(surface: pygame.Surface, font: pygame.font.Font, bindings: KeyBindings) -> None:
    rendered = font.render(bindings.help_line(), True, TEXT_COLOR)
    surface.blit(rendered, (10, surface.get_height() - rendered.get_height() - 10))


__all__ = [
    "draw_explosions",
    "draw_help",
    "draw_missile",
    "draw_status",
    "draw_tanks",
    "landscape_surface",
    "landscape_to_rgba",
]
