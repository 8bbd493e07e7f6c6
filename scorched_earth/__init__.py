"""Top-level package for the Scorched Earth artillery duel."""

__version__ = "1.0.0"

from scorched_earth.core import (
    Ballistics,
    Explosion,
    Landscape,
    Missile,
    Round,
    RoundSettings,
    RoundState,
    Tank,
)

__all__ = [
    "Ballistics",
    "Explosion",
    "Landscape",
    "Missile",
    "Round",
    "RoundSettings",
    "RoundState",
    "Tank",
]

__all__.append("__version__")

try:
    from scorched_earth.pygame import ScorchedApp, run_pygame  # type: ignore[misc]
except (ImportError, RuntimeError):
    ScorchedApp = None

    def run_pygame(*_args, **_kwargs):  # type: ignore[override]
        raise RuntimeError(
            "The pygame front-end requires the optional pygame dependency. "
            "Install pygame to enable graphical gameplay."
        )

__all__.extend(["ScorchedApp", "run_pygame"])
