from __future__ import annotations

import time

import numpy as np

from gradnoise.noise_1d import Perlin1D
from gradnoise.noise_2d import Perlin2D
from gradnoise.settings import settings_from_env
from gradnoise.strip import NoiseStrip, noise_columns


def _timeit(label: str, fn) -> float:
    t0 = time.perf_counter()
    fn()
    t1 = time.perf_counter()
    ms = (t1 - t0) * 1000.0
    print(f"{label}: {ms:.2f} ms")
    return ms


def main() -> None:
    """Quick CPU benchmark.

    Intended targets (laptop-class CPU), at the default 400x300 view:
    - One scroll column (1 x height): well under one 60 Hz frame (~16ms)
    - Full frame: < ~50ms
    """

    settings = settings_from_env()
    rng = np.random.default_rng(0)
    p2 = Perlin2D(settings.vector_count, rng=rng)
    p1 = Perlin1D(settings.vector_count, rng=rng)

    def column() -> None:
        noise_columns(
            p2,
            start_column=0,
            columns=1,
            view_width=settings.width,
            view_height=settings.height,
            frequency=settings.frequency,
        )

    def frame() -> None:
        noise_columns(
            p2,
            start_column=0,
            columns=settings.width,
            view_width=settings.width,
            view_height=settings.height,
            frequency=settings.frequency,
        )

    _timeit(f"Column: noise_columns 1x{settings.height}", column)
    _timeit(f"Frame: noise_columns {settings.width}x{settings.height}", frame)
    _timeit(
        "1D: 100k samples",
        lambda: p1.noise(np.linspace(0.0, 1000.0, 100_000, dtype=np.float64)),
    )

    strip = NoiseStrip(settings, rng=rng)

    def scroll() -> None:
        for _ in range(60):
            strip.advance(1)

    _timeit("Strip: 60 single-column advances", scroll)
    print(f"Strip state: {strip.debug_info()}")


if __name__ == "__main__":
    main()
