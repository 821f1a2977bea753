from __future__ import annotations

import math

import numpy as np

# Ken Perlin's reference permutation of 0..255.
PERMUTATION = np.array(
    [
        151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
        140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
        247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
        57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
        74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
        60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
        65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
        200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
        52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
        207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
        119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
        129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
        218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
        81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
        184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
        222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
    ],
    dtype=np.int32,
)
PERMUTATION.setflags(write=False)

# Lattice coordinates wrap at 255 even though the table holds 256 entries.
LATTICE_PERIOD = 255

# Theoretical range of the raw (pre-remap) noise value.
RAW_BOUND = math.sqrt(2.0 / 4.0)


def lookup(i: np.ndarray) -> np.ndarray:
    return PERMUTATION[i]


def fade(t: np.ndarray) -> np.ndarray:
    """Quintic fade curve 6t^5 - 15t^4 + 10t^3 used by Improved Perlin Noise (2002)."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def remap(
    n: np.ndarray, start1: float, stop1: float, start2: float, stop2: float
) -> np.ndarray:
    """Linearly map `n` from [start1, stop1] onto [start2, stop2].

    The result is not clamped; values outside the source range land outside
    the target range.
    """

    return (n - start1) / (stop1 - start1) * (stop2 - start2) + start2


def to_unit_range(value: np.ndarray) -> np.ndarray:
    return remap(value, -RAW_BOUND, RAW_BOUND, 0.0, 1.0)


def lattice_floor(x: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Split `x` into its lattice cell index (mod 255) and fractional part.

    Non-finite inputs yield an arbitrary (but valid) cell and a NaN fraction,
    so they propagate to the output without raising.
    """

    x = np.asarray(x, dtype=np.float64)
    base = np.floor(x)
    with np.errstate(invalid="ignore"):
        # Reduce in float first so huge coordinates do not overflow int64.
        cell = np.mod(base, LATTICE_PERIOD).astype(np.int64) % LATTICE_PERIOD
        frac = x - base
    return cell, frac


def next_cell(cell: np.ndarray) -> np.ndarray:
    return (cell + 1) % LATTICE_PERIOD
