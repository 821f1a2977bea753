import numpy as np
import pytest

from gradnoise.core import (
    LATTICE_PERIOD,
    PERMUTATION,
    RAW_BOUND,
    fade,
    lattice_floor,
    lerp,
    lookup,
    next_cell,
    remap,
    to_unit_range,
)


def test_permutation_is_a_permutation_of_0_255():
    assert PERMUTATION.shape == (256,)
    assert np.array_equal(np.sort(PERMUTATION), np.arange(256))
    assert lookup(0) == 151
    assert lookup(255) == 180


def test_permutation_is_read_only():
    assert not PERMUTATION.flags.writeable
    with pytest.raises(ValueError):
        PERMUTATION[0] = 0


def test_fade_identities_are_exact():
    t = np.array([0.0, 0.5, 1.0], dtype=np.float64)
    out = fade(t)
    assert out[0] == 0.0
    assert out[1] == 0.5
    assert out[2] == 1.0


def test_fade_matches_quintic_polynomial():
    t = np.linspace(0.0, 1.0, 101)
    expected = 6 * t**5 - 15 * t**4 + 10 * t**3
    assert np.allclose(fade(t), expected)


def test_lerp_basic():
    a = np.array([0.0, 10.0])
    b = np.array([10.0, 20.0])
    t = np.array([0.0, 0.5])
    out = lerp(a, b, t)
    assert np.allclose(out, np.array([0.0, 15.0]))


def test_remap_is_linear_and_unclamped():
    assert remap(5.0, 0.0, 10.0, 0.0, 1.0) == 0.5
    assert remap(20.0, 0.0, 10.0, 0.0, 1.0) == 2.0
    assert remap(-10.0, 0.0, 10.0, 100.0, 200.0) == 0.0


def test_to_unit_range_maps_zero_to_half_exactly():
    assert to_unit_range(0.0) == 0.5
    assert np.isclose(to_unit_range(-RAW_BOUND), 0.0)
    assert np.isclose(to_unit_range(RAW_BOUND), 1.0)
    assert np.isclose(RAW_BOUND, np.sqrt(2.0) / 2.0)


def test_lattice_wraps_at_255_not_256():
    assert LATTICE_PERIOD == 255
    cell, frac = lattice_floor(np.array([254.0, 255.0, 256.0, 255.5]))
    assert np.array_equal(cell, np.array([254, 0, 1, 0]))
    assert np.allclose(frac, np.array([0.0, 0.0, 0.0, 0.5]))
    assert next_cell(254) == 0


def test_lattice_floor_negative_coordinates():
    cell, frac = lattice_floor(np.array([-1.0, -0.25, -255.0]))
    assert np.array_equal(cell, np.array([254, 254, 0]))
    assert np.allclose(frac, np.array([0.0, 0.75, 0.0]))


def test_lattice_floor_non_finite_gives_nan_fraction():
    cell, frac = lattice_floor(np.array([np.nan, np.inf, -np.inf]))
    assert np.isnan(frac).all()
    assert ((cell >= 0) & (cell < LATTICE_PERIOD)).all()


def test_lattice_floor_huge_coordinates_reduce_exactly():
    xs = [1e20, -1e20, 2.0**63, 3.7e300]
    cell, frac = lattice_floor(np.array(xs))
    expected = [int(x % 255.0) for x in xs]
    assert cell.tolist() == expected
    assert cell.tolist()[0] == 55
    assert np.array_equal(frac, np.zeros(len(xs)))
