from __future__ import annotations

import logging
import operator
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)

_CANONICAL = np.array(
    [
        [1.0, 1.0],
        [-1.0, 1.0],
        [1.0, -1.0],
        [-1.0, -1.0],
    ],
    dtype=np.float64,
)
_CANONICAL.setflags(write=False)

MIN_VECTORS = 2


def _frozen(vectors: np.ndarray) -> np.ndarray:
    out = np.array(vectors, dtype=np.float64, copy=True)
    if out.ndim != 2 or out.shape[1] != 2:
        raise ValueError(f"gradient vectors must have shape (N, 2), got {out.shape}")
    if out.shape[0] < MIN_VECTORS:
        raise ValueError(
            f"a gradient set needs at least {MIN_VECTORS} vectors, got {out.shape[0]}"
        )
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class GradientSet:
    """Ordered pool of 2D gradient vectors picked by lattice hash.

    Selection uses ``h % (N - 1)``, so the last vector of the pool is never
    picked. At least two vectors are required; a single vector would make the
    divisor zero.
    """

    vectors: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "vectors", _frozen(self.vectors))

    @classmethod
    def canonical(cls) -> GradientSet:
        return cls(_CANONICAL)

    @classmethod
    def random(
        cls, count: int, *, rng: np.random.Generator | None = None
    ) -> GradientSet:
        """Build `count` vectors with x, y drawn uniformly from [-1, 1).

        Vectors are not normalized.
        """

        count = operator.index(count)
        if count < MIN_VECTORS:
            raise ValueError(f"vector_count must be >= {MIN_VECTORS}, got {count}")
        if rng is None:
            rng = np.random.default_rng()
        vectors = rng.uniform(-1.0, 1.0, size=(count, 2))
        logger.debug("built random gradient set with %d vectors", count)
        return cls(vectors)

    def __len__(self) -> int:
        return int(self.vectors.shape[0])

    @property
    def x(self) -> np.ndarray:
        return self.vectors[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self.vectors[:, 1]

    @property
    def magnitudes(self) -> np.ndarray:
        return np.hypot(self.x, self.y)

    @property
    def directions(self) -> np.ndarray:
        """Angle of each vector in radians, in [0, 2*pi)."""
        return np.mod(np.arctan2(self.y, self.x), 2.0 * np.pi)

    def index(self, h: np.ndarray) -> np.ndarray:
        return np.asarray(h, dtype=np.int64) % (len(self) - 1)

    def select(self, h: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        g = self.vectors[self.index(h)]
        return g[..., 0], g[..., 1]


def make_gradients(
    vector_count: int | None = None,
    *,
    rng: np.random.Generator | None = None,
    gradients: GradientSet | None = None,
) -> GradientSet:
    """Resolve a sampler's gradient pool.

    An explicit `gradients` set wins; otherwise `vector_count=None` gives the
    canonical set and a count gives a random set drawn from `rng`.
    """

    if gradients is not None:
        if vector_count is not None:
            raise ValueError("pass either vector_count or gradients, not both")
        return gradients
    if vector_count is None:
        return GradientSet.canonical()
    return GradientSet.random(vector_count, rng=rng)
