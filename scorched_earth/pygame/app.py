"""Pygame window that hosts a round of the duel."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

try:
    import pygame
except ImportError as exc:  # pragma: no cover - depends on runtime environment
    raise RuntimeError(
        "The pygame package is required to run the graphical version of Scorched Earth."
    ) from exc

from scorched_earth.core.round import Round, RoundSettings
from scorched_earth.pygame.config import load_user_settings, save_user_settings
from scorched_earth.pygame.input import InputHandler
from scorched_earth.pygame.keybindings import KeyBindings
from scorched_earth.pygame.renderer import (
    BACKGROUND_COLOR,
    TEXT_COLOR,
    draw_explosions,
    draw_help,
    draw_missile,
    draw_status,
    draw_tanks,
    landscape_surface,
)

logger = logging.getLogger(__name__)

BORDER = 1


class ScorchedApp:
    """Graphical client built on top of the core round logic."""

    def __init__(
        self,
        players: Optional[int] = None,
        window_size: Optional[Tuple[int, int]] = None,
        seed: Optional[int] = None,
    ) -> None:
        pygame.init()
        pygame.font.init()

        self._user_settings = load_user_settings()
        if players is None:
            players = int(self._user_settings.get("players", 2))
        if window_size is None:
            width, height = self._user_settings.get("window_size", (1024, 768))
            window_size = (int(width), int(height))

        self.screen = pygame.display.set_mode(window_size)
        pygame.display.set_caption("Scorched Earth - Python edition")
        self.font = pygame.font.Font(None, 24)
        self.clock = pygame.time.Clock()
        self.running = True
        self.time_elapsed = 0.0

        # The round reads the same frame-accumulated time the client does.
        self.round = Round(
            window_size[0] - 2 * BORDER,
            window_size[1] - 2 * BORDER,
            players,
            RoundSettings(seed=seed),
            clock=lambda: self.time_elapsed,
        )
        self.input = InputHandler(self, KeyBindings())
        self._landscape_image: Optional[pygame.Surface] = None
        self._save_user_settings(players, window_size)
        logger.debug("Started round with %d players on %sx%s", players, *window_size)

    def _save_user_settings(self, players: int, window_size: Tuple[int, int]) -> None:
        data = dict(self._user_settings)
        data["players"] = players
        data["window_size"] = list(window_size)
        save_user_settings(data)
        self._user_settings = data

    # ------------------------------------------------------------------
    def run(self) -> None:
        """Main pygame loop."""

        while self.running:
            dt = self.clock.tick(60) / 1000.0
            self._handle_events()
            self._update(dt)
            self._draw()
        pygame.quit()

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            else:
                self.input.process_event(event)

    def _update(self, dt: float) -> None:
        self.time_elapsed += dt
        self.round.update(self.time_elapsed)
        if self._landscape_image is None or self.round.landscape.consume_changed():
            self._landscape_image = landscape_surface(self.round)

    def _draw(self) -> None:
        self.screen.fill(BACKGROUND_COLOR)
        playfield = self.screen.subsurface(
            pygame.Rect(BORDER, BORDER, self.round.width, self.round.height)
        )
        if self._landscape_image is not None:
            playfield.blit(self._landscape_image, (0, 0))
        draw_tanks(playfield, self.round)
        draw_missile(playfield, self.round)
        draw_explosions(playfield, self.round)
        pygame.draw.rect(self.screen, TEXT_COLOR, self.screen.get_rect(), BORDER)
        draw_status(self.screen, self.font, self.round)
        draw_help(self.screen, self.font, self.input.bindings)
        pygame.display.flip()


def run_pygame(**kwargs: object) -> None:
    """Convenience helper for launching the pygame client."""

    app = ScorchedApp(**kwargs)
    app.run()
