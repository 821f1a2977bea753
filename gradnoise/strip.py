from __future__ import annotations

import logging
import time

import numpy as np

from .noise_2d import Noise2D, Perlin2D
from .settings import StripSettings

logger = logging.getLogger(__name__)


def noise_columns(
    sampler: Noise2D,
    *,
    start_column: int,
    columns: int,
    view_width: int,
    view_height: int,
    frequency: float,
) -> np.ndarray:
    """Sample a block of `columns` pixel columns starting at `start_column`.

    Pixel (x, y) maps to noise coordinates
    ((start_column + x) / view_width * frequency, y / view_height * frequency),
    so consecutive blocks tile seamlessly as `start_column` advances.
    """

    columns = int(columns)
    view_width = int(view_width)
    view_height = int(view_height)
    if columns <= 0 or view_width <= 0 or view_height <= 0:
        raise ValueError("columns, view_width and view_height must be > 0")
    frequency = float(frequency)

    xs = (float(start_column) + np.arange(columns, dtype=np.float64)) / view_width
    ys = np.arange(view_height, dtype=np.float64) / view_height
    xg, yg = np.meshgrid(xs * frequency, ys * frequency)
    return np.asarray(sampler.noise(xg, yg), dtype=np.float64)


def to_intensity(values: np.ndarray) -> np.ndarray:
    """Map nominal [0, 1] noise onto 8-bit intensities.

    Values outside [0, 1] saturate; NaN becomes 0.
    """

    values = np.asarray(values, dtype=np.float64)
    scaled = np.floor(np.nan_to_num(values, nan=0.0) * 255.0)
    return np.clip(scaled, 0.0, 255.0).astype(np.uint8)


class NoiseStrip:
    """Horizontally scrolling 8-bit noise image.

    Each `advance` samples new columns to the right of everything generated
    so far and shifts the existing pixels left to make room.
    """

    def __init__(
        self,
        settings: StripSettings | None = None,
        *,
        rng: np.random.Generator | None = None,
    ):
        self.settings = settings if settings is not None else StripSettings()
        self.rng = rng
        self.sampler = Perlin2D(self.settings.vector_count, rng=self.rng)
        self.last_gen_ms = 0.0
        self._reset()

    @property
    def width(self) -> int:
        return self.settings.width

    @property
    def height(self) -> int:
        return self.settings.height

    def _reset(self) -> None:
        self.scroll = 0
        self.buffer = np.zeros((self.height, self.width), dtype=np.uint8)
        self.advance(self.width)

    def _generate(self, columns: int) -> np.ndarray:
        return noise_columns(
            self.sampler,
            start_column=self.scroll,
            columns=columns,
            view_width=self.width,
            view_height=self.height,
            frequency=self.settings.frequency,
        )

    def advance(self, columns: int = 1) -> float:
        """Scroll by `columns` pixels and return the sampling time in ms."""
        columns = int(columns)
        if columns < 1 or columns > self.width:
            raise ValueError(f"columns must be in [1, {self.width}], got {columns}")

        t0 = time.perf_counter()
        z = self._generate(columns)
        t1 = time.perf_counter()
        self.last_gen_ms = (t1 - t0) * 1000.0

        if columns < self.width:
            self.buffer[:, :-columns] = self.buffer[:, columns:].copy()
        self.buffer[:, self.width - columns :] = to_intensity(z)
        self.scroll += columns

        logger.debug(
            "generated %dx%d columns at scroll=%d in %.2f ms",
            columns,
            self.height,
            self.scroll - columns,
            self.last_gen_ms,
        )
        return self.last_gen_ms

    def reconfigure(self, settings: StripSettings) -> None:
        old = self.settings
        if settings.vector_count != old.vector_count:
            # Build before swapping so a failed build leaves the strip unchanged.
            sampler = Perlin2D(settings.vector_count, rng=self.rng)
            self.sampler = sampler
            logger.info(
                "rebuilt sampler with %s gradient vectors",
                settings.vector_count or "canonical",
            )
        self.settings = settings
        if (settings.width, settings.height) != (old.width, old.height):
            logger.info("resized strip to %dx%d", settings.width, settings.height)
            self._reset()

    def debug_info(self) -> dict:
        return {
            "img_w": self.width,
            "img_h": self.height,
            "frequency": self.settings.frequency,
            "vector_count": self.sampler.vector_count,
            "gen_ms": self.last_gen_ms,
            "scroll": self.scroll,
        }
