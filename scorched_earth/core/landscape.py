"""Destructible terrain stored as a one-byte-per-cell occupancy grid."""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from scorched_earth.core.geometry import iround
from scorched_earth.core.noise import Fbm

G = 9.80665
MAX_DIMENSION = 2**31 - 1
OCTAVES = 4
# Speeds up terrain collapse relative to free fall in pixels.
TIME_SCALE = 10.0


class Landscape:
    """Terrain of ``width`` x ``height`` cells, row-major (``y * width + x``)."""

    def __init__(self, width: int, height: int, seed: int = 0) -> None:
        if min(width, height) <= 0 or max(width, height) > MAX_DIMENSION:
            raise ValueError(
                f"'width' and 'height' must be greater than 0 and less or equal than {MAX_DIMENSION}"
            )
        self.width = width
        self.height = height
        self.buffer = bytearray(width * height)
        self._noise = Fbm(seed=seed, octaves=OCTAVES, frequency=2.0 / width)
        self.amplitude = height / 2.0
        self.dx = 0
        self.changed = False

        self._subsidence_running = False
        self._subsidence_start = 0.0
        self._subsidence_passes = 0
        self._subsidence_left = 0
        self._subsidence_right = width

    # ------------------------------------------------------------------
    # Noise configuration
    @property
    def seed(self) -> int:
        return self._noise.seed

    def set_seed(self, seed: int) -> None:
        self._noise.seed = seed

    @property
    def octaves(self) -> int:
        return self._noise.octaves

    def set_octaves(self, octaves: int) -> None:
        self._noise.set_octaves(octaves)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    # ------------------------------------------------------------------
    # Generation
    def generate(self) -> None:
        """Rebuild every column from the noise field, discarding any craters."""

        width = self.width
        y_center = self.height / 2.0
        for x in range(width):
            value = self._noise.get(float(x + self.dx)) * self.amplitude
            surface = max(0, min(self.height, iround(y_center + value)))
            for y in range(self.height):
                self.buffer[y * width + x] = 1 if y >= surface else 0
        self.changed = True

    # ------------------------------------------------------------------
    # Queries
    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def query(self, x: int, y: int) -> bool:
        if not self.is_inside(x, y):
            return False
        return self.buffer[y * self.width + x] > 0

    def surface_y(self, x: int) -> Optional[int]:
        """Row of the topmost filled cell in column ``x``."""

        if not 0 <= x < self.width:
            return None
        for y in range(self.height):
            if self.buffer[y * self.width + x]:
                return y
        return None

    def iter_filled_points(self) -> Iterator[Tuple[int, int]]:
        width = self.width
        for index, value in enumerate(self.buffer):
            if value:
                yield index % width, index // width

    def filled_count(self) -> int:
        return self.buffer.count(1)

    def occupancy(self) -> memoryview:
        """Read-only view of the cells for renderers."""

        return memoryview(self.buffer).toreadonly()

    # ------------------------------------------------------------------
    # Carving
    def span(self, x: int, y: int, length: int) -> Optional[memoryview]:
        """Writable view of ``length`` cells of row ``y`` starting at ``x``.

        The view stops at the right edge. ``None`` when the start lies
        outside the terrain or ``length`` is zero.
        """

        if not self.is_inside(x, y) or length <= 0:
            return None
        index = y * self.width + x
        length = min(length, self.width - x)
        return memoryview(self.buffer)[index:index + length]

    def clear_span(self, x: int, y: int, length: int) -> Optional[memoryview]:
        cells = self.span(x, y, length)
        if cells is None:
            return None
        cells[:] = bytes(len(cells))
        self.changed = True
        return cells

    # ------------------------------------------------------------------
    # Subsidence
    @property
    def is_subsidence(self) -> bool:
        return self._subsidence_running

    def begin_subsidence(self, now: float) -> None:
        if self._subsidence_running:
            return
        self._subsidence_running = True
        self._subsidence_start = now
        self._subsidence_passes = 0
        self._subsidence_left = 0
        self._subsidence_right = self.width

    def step(self, now: float) -> bool:
        """Let unsupported cells fall; ``True`` once everything has settled.

        The number of single-row passes grows with the square of the time
        since subsidence began, so collapse accelerates independently of the
        frame rate.
        """

        if not self._subsidence_running:
            return False
        t = max(0.0, now - self._subsidence_start)
        rows = iround(G * t * t * TIME_SCALE)
        while self._subsidence_passes < rows:
            self._subsidence_passes += 1
            if not self._subsidence_pass():
                self._subsidence_running = False
                return True
        return False

    def _subsidence_pass(self) -> bool:
        width = self.width
        buffer = self.buffer
        left = self._subsidence_left
        right = self._subsidence_right
        moved_left = right
        moved_right = left - 1
        for y in range(self.height - 1, 0, -1):
            bottom = y * width
            top = bottom - width
            for x in range(left, right):
                if buffer[bottom + x] == 0 and buffer[top + x]:
                    buffer[bottom + x] = 1
                    buffer[top + x] = 0
                    if x < moved_left:
                        moved_left = x
                    if x > moved_right:
                        moved_right = x
        if moved_right < moved_left:
            return False
        # Columns are independent; one that did not move is settled for good.
        self._subsidence_left = moved_left
        self._subsidence_right = moved_right + 1
        self.changed = True
        return True

    def consume_changed(self) -> bool:
        """Return the ``changed`` flag and reset it."""

        changed = self.changed
        self.changed = False
        return changed
