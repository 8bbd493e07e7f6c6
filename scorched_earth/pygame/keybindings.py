"""Default keyboard layout for the pygame client."""

from __future__ import annotations

from dataclasses import dataclass

import pygame


@dataclass
class KeyBindings:
    angle_left: int = pygame.K_LEFT
    angle_right: int = pygame.K_RIGHT
    power_increase: int = pygame.K_UP
    power_decrease: int = pygame.K_DOWN
    fire: int = pygame.K_SPACE
    regenerate: int = pygame.K_DELETE
    quit: int = pygame.K_ESCAPE

    def format_key(self, key: int) -> str:
        return pygame.key.name(key).upper()

    def help_line(self) -> str:
        return (
            f"{self.format_key(self.angle_left)}/{self.format_key(self.angle_right)} aim  "
            f"{self.format_key(self.power_decrease)}/{self.format_key(self.power_increase)} power  "
            f"{self.format_key(self.fire)} fire"
        )


__all__ = ["KeyBindings"]
