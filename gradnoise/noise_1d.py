from __future__ import annotations

import numpy as np

from .core import (
    PERMUTATION,
    fade,
    lattice_floor,
    lerp,
    next_cell,
    to_unit_range,
)
from .gradients import GradientSet, make_gradients


class Perlin1D:
    """1D gradient noise over the shared permutation table.

    Gradients are 2D vectors from the same pool the 2D sampler uses; only
    their x component contributes.
    """

    def __init__(
        self,
        vector_count: int | None = None,
        *,
        rng: np.random.Generator | None = None,
        gradients: GradientSet | None = None,
    ):
        self.perm = PERMUTATION
        self.gradients = make_gradients(vector_count, rng=rng, gradients=gradients)

    @property
    def vector_count(self) -> int:
        return len(self.gradients)

    def noise(self, x: np.ndarray) -> np.ndarray:
        xi0, xf = lattice_floor(x)
        xi1 = next_cell(xi0)

        p = self.perm
        h0 = p[p[xi0]]
        h1 = p[p[xi1]]

        g0, _ = self.gradients.select(h0)
        g1, _ = self.gradients.select(h1)

        d0 = g0 * xf
        d1 = g1 * (xf - 1.0)
        return to_unit_range(lerp(d0, d1, fade(xf)))

    def sample(self, x: float) -> float:
        return float(self.noise(x))

    def debug_point(self, x: float) -> dict:
        # Scalar breakdown of every stage, for inspection.
        xi0_a, xf_a = lattice_floor(float(x))
        xi0 = int(xi0_a)
        xi1 = int(next_cell(xi0_a))
        xrel = float(xf_a)

        p = self.perm
        h0 = int(p[p[xi0]])
        h1 = int(p[p[xi1]])

        i0 = int(self.gradients.index(h0))
        i1 = int(self.gradients.index(h1))
        g0 = float(self.gradients.vectors[i0, 0])
        g1 = float(self.gradients.vectors[i1, 0])

        d0 = g0 * xrel
        d1 = g1 * (xrel - 1.0)
        u = float(fade(np.float64(xrel)))
        raw = float(lerp(np.float64(d0), np.float64(d1), np.float64(u)))

        return {
            "input": {"x": float(x)},
            "cell": {"xi0": xi0, "xi1": xi1},
            "hash": {"h0": h0, "h1": h1},
            "relative": {"xf": xrel},
            "gradients": {"i0": i0, "i1": i1, "g0": g0, "g1": g1},
            "dots": {"d0": d0, "d1": d1},
            "fade": {"u": u},
            "raw": raw,
            "noise": float(to_unit_range(np.float64(raw))),
        }
