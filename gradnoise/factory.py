from __future__ import annotations

import operator

import numpy as np

from .noise_1d import Perlin1D
from .noise_2d import Perlin2D


def construct(
    vector_count: int | None = None,
    *,
    dims: int = 2,
    rng: np.random.Generator | None = None,
) -> Perlin1D | Perlin2D:
    """Build a sampler for `dims` dimensions.

    Omitting `vector_count` gives the fixed four-vector diagonal gradient set;
    otherwise `vector_count` random gradients are drawn from `rng`.
    """

    dims = operator.index(dims)
    if dims == 1:
        return Perlin1D(vector_count, rng=rng)
    if dims == 2:
        return Perlin2D(vector_count, rng=rng)
    raise ValueError(f"dims must be 1 or 2, got {dims}")
