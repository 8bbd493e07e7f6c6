"""Input handling for the pygame client."""

from __future__ import annotations

import pygame

from scorched_earth.pygame.keybindings import KeyBindings


class InputHandler:
    """Translate pygame events into round commands."""

    def __init__(self, app, bindings: KeyBindings) -> None:
        self.app = app
        self.bindings = bindings

    def process_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        app = self.app
        bindings = self.bindings
        key = event.key
        mods = getattr(event, "mod", 0)
        step = 5.0 if mods & pygame.KMOD_SHIFT else 1.0

        if key == bindings.quit:
            app.running = False
        elif key == bindings.regenerate:
            app.round.regenerate_landscape(now=app.time_elapsed)
        elif key == bindings.angle_left:
            app.round.adjust_angle(-step)
        elif key == bindings.angle_right:
            app.round.adjust_angle(step)
        elif key == bindings.power_increase:
            app.round.adjust_power(step)
        elif key == bindings.power_decrease:
            app.round.adjust_power(-step)
        elif key == bindings.fire:
            app.round.fire(now=app.time_elapsed)
