from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Protocol

import numpy as np

from .core import (
    LATTICE_PERIOD,
    PERMUTATION,
    fade,
    lattice_floor,
    lerp,
    next_cell,
    to_unit_range,
)
from .gradients import GradientSet, make_gradients


class Noise2D(Protocol):
    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:  # pragma: no cover
        ...


@dataclass(frozen=True)
class Corner2D:
    index: int
    gx: float
    gy: float
    dx: float
    dy: float
    dot: float


class Perlin2D:
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

    def _hash(self, xi: np.ndarray, yi: np.ndarray) -> np.ndarray:
        p = self.perm
        return p[(p[xi] + yi) % LATTICE_PERIOD]

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        xi0, xf = lattice_floor(x)
        yi0, yf = lattice_floor(y)
        xi1 = next_cell(xi0)
        yi1 = next_cell(yi0)

        u = fade(xf)
        v = fade(yf)

        aa = self._hash(xi0, yi0)
        ba = self._hash(xi1, yi0)
        ab = self._hash(xi0, yi1)
        bb = self._hash(xi1, yi1)

        gxaa, gyaa = self.gradients.select(aa)
        gxba, gyba = self.gradients.select(ba)
        gxab, gyab = self.gradients.select(ab)
        gxbb, gybb = self.gradients.select(bb)

        x0 = xf
        y0 = yf
        x1 = xf - 1.0
        y1 = yf - 1.0

        d00 = gxaa * x0 + gyaa * y0
        d10 = gxba * x1 + gyba * y0
        d01 = gxab * x0 + gyab * y1
        d11 = gxbb * x1 + gybb * y1

        x_lerp0 = lerp(d00, d10, u)
        x_lerp1 = lerp(d01, d11, u)
        return to_unit_range(lerp(x_lerp0, x_lerp1, v))

    def sample(self, x: float, y: float) -> float:
        return float(self.noise(x, y))

    def debug_point(self, x: float, y: float) -> dict:
        # Scalar breakdown for teaching/inspection.
        xi0_a, xf_a = lattice_floor(float(x))
        yi0_a, yf_a = lattice_floor(float(y))
        xi0, yi0 = int(xi0_a), int(yi0_a)
        xi1, yi1 = int(next_cell(xi0_a)), int(next_cell(yi0_a))

        xrel = float(xf_a)
        yrel = float(yf_a)

        u = float(fade(np.float64(xrel)))
        v = float(fade(np.float64(yrel)))

        aa = int(self._hash(xi0, yi0))
        ba = int(self._hash(xi1, yi0))
        ab = int(self._hash(xi0, yi1))
        bb = int(self._hash(xi1, yi1))

        def corner(h: int, dx: float, dy: float) -> Corner2D:
            idx = int(self.gradients.index(h))
            gx = float(self.gradients.vectors[idx, 0])
            gy = float(self.gradients.vectors[idx, 1])
            return Corner2D(
                index=idx, gx=gx, gy=gy, dx=dx, dy=dy, dot=(gx * dx + gy * dy)
            )

        c00 = corner(aa, xrel, yrel)
        c10 = corner(ba, xrel - 1.0, yrel)
        c01 = corner(ab, xrel, yrel - 1.0)
        c11 = corner(bb, xrel - 1.0, yrel - 1.0)

        x_lerp0 = float(lerp(np.float64(c00.dot), np.float64(c10.dot), np.float64(u)))
        x_lerp1 = float(lerp(np.float64(c01.dot), np.float64(c11.dot), np.float64(u)))
        raw = float(lerp(np.float64(x_lerp0), np.float64(x_lerp1), np.float64(v)))

        return {
            "input": {"x": float(x), "y": float(y)},
            "cell": {"xi0": xi0, "yi0": yi0, "xi1": xi1, "yi1": yi1},
            "relative": {"xf": xrel, "yf": yrel},
            "fade": {"u": u, "v": v},
            "hash": {"aa": aa, "ab": ab, "ba": ba, "bb": bb},
            "corners": {
                "c00": asdict(c00),
                "c10": asdict(c10),
                "c01": asdict(c01),
                "c11": asdict(c11),
            },
            "interpolation": {
                "x_lerp0": x_lerp0,
                "x_lerp1": x_lerp1,
            },
            "raw": raw,
            "noise": float(to_unit_range(np.float64(raw))),
        }
