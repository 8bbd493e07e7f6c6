"""Seeded one-dimensional gradient noise and fractal Brownian motion."""

from __future__ import annotations

import math
import random
from typing import List

_TABLE_SIZE = 256


class GradientNoise:
    """Classic Perlin-style gradient noise along a line, in ``[-1, 1]``."""

    def __init__(self, seed: int = 0) -> None:
        rng = random.Random(seed)
        self._perm: List[int] = list(range(_TABLE_SIZE))
        rng.shuffle(self._perm)
        self._gradients = [rng.uniform(-1.0, 1.0) for _ in range(_TABLE_SIZE)]

    def _gradient(self, i: int) -> float:
        return self._gradients[self._perm[i % _TABLE_SIZE]]

    def get(self, x: float) -> float:
        i0 = int(math.floor(x))
        t = x - i0
        n0 = self._gradient(i0) * t
        n1 = self._gradient(i0 + 1) * (t - 1.0)
        fade = t * t * t * (t * (t * 6.0 - 15.0) + 10.0)
        return 2.0 * (n0 + fade * (n1 - n0))


class Fbm:
    """Sum of octaves of :class:`GradientNoise`, normalised to ``[-1, 1]``."""

    def __init__(
        self,
        seed: int = 0,
        octaves: int = 4,
        frequency: float = 1.0,
        lacunarity: float = 2.0,
        persistence: float = 0.5,
    ) -> None:
        self.octaves = max(1, octaves)
        self.frequency = frequency
        self.lacunarity = lacunarity
        self.persistence = persistence
        self.seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    @seed.setter
    def seed(self, value: int) -> None:
        self._seed = value
        self._sources = [GradientNoise(value + octave) for octave in range(self.octaves)]

    def set_octaves(self, octaves: int) -> None:
        self.octaves = max(1, octaves)
        self.seed = self._seed

    def get(self, x: float) -> float:
        total = 0.0
        weight = 0.0
        amplitude = 1.0
        point = x * self.frequency
        for source in self._sources:
            total += source.get(point) * amplitude
            weight += amplitude
            amplitude *= self.persistence
            point *= self.lacunarity
        return total / weight
