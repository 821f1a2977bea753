import logging

import numpy as np
import pytest

from gradnoise.noise_2d import Perlin2D
from gradnoise.settings import StripSettings
from gradnoise.strip import NoiseStrip, noise_columns, to_intensity

SMALL = StripSettings(width=16, height=8, frequency=4, vector_count=16)


def test_noise_columns_shape_and_coordinates():
    p = Perlin2D()
    z = noise_columns(p, start_column=3, columns=5, view_width=10, view_height=4, frequency=2.0)
    assert z.shape == (4, 5)
    assert z[2, 1] == p.sample((3 + 1) / 10 * 2.0, 2 / 4 * 2.0)


def test_noise_columns_blocks_tile_seamlessly():
    p = Perlin2D(32, rng=np.random.default_rng(0))
    kw = dict(view_width=20, view_height=6, frequency=5)
    whole = noise_columns(p, start_column=7, columns=12, **kw)
    left = noise_columns(p, start_column=7, columns=5, **kw)
    right = noise_columns(p, start_column=12, columns=7, **kw)
    assert np.array_equal(whole, np.hstack([left, right]))


def test_noise_columns_rejects_empty_block():
    with pytest.raises(ValueError):
        noise_columns(Perlin2D(), start_column=0, columns=0, view_width=4, view_height=4, frequency=1)


def test_to_intensity_floors_saturates_and_zeroes_nan():
    out = to_intensity(np.array([-0.5, 0.0, 0.5, 0.999, 1.0, 1.5, np.nan]))
    assert out.dtype == np.uint8
    assert out.tolist() == [0, 0, 127, 254, 255, 255, 0]


def test_strip_initial_fill():
    strip = NoiseStrip(SMALL, rng=np.random.default_rng(0))
    assert strip.buffer.shape == (8, 16)
    assert strip.buffer.dtype == np.uint8
    assert strip.scroll == 16
    expected = to_intensity(
        noise_columns(
            strip.sampler, start_column=0, columns=16, view_width=16, view_height=8, frequency=4
        )
    )
    assert np.array_equal(strip.buffer, expected)


def test_strip_advance_shifts_and_appends():
    strip = NoiseStrip(SMALL, rng=np.random.default_rng(0))
    before = strip.buffer.copy()
    ms = strip.advance(1)
    assert ms >= 0.0
    assert strip.scroll == 17
    assert np.array_equal(strip.buffer[:, :-1], before[:, 1:])
    expected = to_intensity(
        noise_columns(
            strip.sampler, start_column=16, columns=1, view_width=16, view_height=8, frequency=4
        )
    )
    assert np.array_equal(strip.buffer[:, -1:], expected)


def test_strip_advance_matches_one_big_block():
    a = NoiseStrip(SMALL, rng=np.random.default_rng(1))
    b = NoiseStrip(SMALL, rng=np.random.default_rng(1))
    for _ in range(3):
        a.advance(1)
    b.advance(3)
    assert np.array_equal(a.buffer, b.buffer)
    assert a.scroll == b.scroll == 19


def test_strip_advance_bounds():
    strip = NoiseStrip(SMALL, rng=np.random.default_rng(0))
    strip.advance(16)
    with pytest.raises(ValueError):
        strip.advance(0)
    with pytest.raises(ValueError):
        strip.advance(17)


def test_reconfigure_vector_count_rebuilds_sampler():
    strip = NoiseStrip(SMALL, rng=np.random.default_rng(0))
    old = strip.sampler
    old_vectors = old.gradients.vectors.copy()
    strip.reconfigure(SMALL.with_vector_count_step(-1))
    assert strip.sampler is not old
    assert strip.sampler.vector_count == 15
    assert old.vector_count == 16
    assert np.array_equal(old.gradients.vectors, old_vectors)


def test_reconfigure_frequency_keeps_sampler_and_buffer():
    strip = NoiseStrip(SMALL, rng=np.random.default_rng(0))
    old = strip.sampler
    before = strip.buffer.copy()
    strip.reconfigure(SMALL.with_frequency_step(3))
    assert strip.sampler is old
    assert np.array_equal(strip.buffer, before)
    assert strip.debug_info()["frequency"] == 7


def test_reconfigure_resize_refills(caplog):
    strip = NoiseStrip(SMALL, rng=np.random.default_rng(0))
    strip.advance(5)
    with caplog.at_level(logging.INFO, logger="gradnoise.strip"):
        strip.reconfigure(StripSettings(width=10, height=4, frequency=4, vector_count=16))
    assert strip.buffer.shape == (4, 10)
    assert strip.scroll == 10
    assert "resized strip to 10x4" in caplog.text


def test_debug_info():
    strip = NoiseStrip(StripSettings(width=12, height=6, frequency=3, vector_count=None))
    info = strip.debug_info()
    assert info["img_w"] == 12
    assert info["img_h"] == 6
    assert info["frequency"] == 3
    assert info["vector_count"] == 4
    assert info["scroll"] == 12
    assert info["gen_ms"] >= 0.0


def test_failed_rebuild_leaves_strip_unchanged(monkeypatch):
    strip = NoiseStrip(SMALL, rng=np.random.default_rng(0))
    old_sampler = strip.sampler

    def broken(*args, **kwargs):
        raise RuntimeError("build failed")

    monkeypatch.setattr("gradnoise.strip.Perlin2D", broken)
    with pytest.raises(RuntimeError):
        strip.reconfigure(SMALL.with_vector_count_step(4))
    assert strip.settings == SMALL
    assert strip.sampler is old_sampler
    assert strip.debug_info()["vector_count"] == 16
