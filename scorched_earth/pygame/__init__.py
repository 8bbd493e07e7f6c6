"""Pygame front-end for Scorched Earth."""

from scorched_earth.pygame.app import ScorchedApp, run_pygame

__all__ = ["ScorchedApp", "run_pygame"]
