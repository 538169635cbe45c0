"""Tests for the gradient noise functions."""

import numpy as np
import pytest

from terrainforge.errors import ConfigError
from terrainforge.noise import (
    FRACTAL_OCTAVES,
    fractal_2d,
    gradient_2d,
    hash_2d,
    normalized_fractal_2d,
    perlin_2d,
)


def test_hash_range():
    ix, iy = np.meshgrid(np.arange(-50, 50), np.arange(-50, 50))
    h = hash_2d(ix, iy, seed=3)
    assert h.shape == ix.shape
    assert h.min() >= 0.0
    assert h.max() < 1.0


def test_hash_accepts_fractional_and_negative_inputs():
    assert 0.0 <= hash_2d(-3.25, 7.5, seed=-0.01) < 1.0


def test_hash_deterministic():
    assert hash_2d(12, -7, 42) == hash_2d(12, -7, 42)


def test_gradient_unit_length():
    ix, iy = np.meshgrid(np.arange(-20, 20), np.arange(-20, 20))
    gx, gy = gradient_2d(ix, iy, seed=9)
    np.testing.assert_allclose(np.hypot(gx, gy), 1.0, atol=1e-12)


def test_scalar_inputs_return_floats():
    assert isinstance(perlin_2d(0.3, 0.7), float)
    assert isinstance(fractal_2d(0.3, 0.7, seed=1, octaves=3), float)
    gx, gy = gradient_2d(1, 2, 0)
    assert isinstance(gx, float) and isinstance(gy, float)


@pytest.mark.parametrize("seed", [0, 1, 0.01, -5, 123456])
def test_perlin_deterministic(seed):
    x = np.linspace(-3.0, 3.0, 37)
    y = np.linspace(10.0, 4.0, 37)
    np.testing.assert_array_equal(perlin_2d(x, y, seed), perlin_2d(x, y, seed))
    assert perlin_2d(1.37, -2.9, seed) == perlin_2d(1.37, -2.9, seed)


def test_perlin_zero_on_lattice_points():
    for x, y in [(0, 0), (3, 4), (-2, 7), (10, -10)]:
        assert perlin_2d(float(x), float(y), seed=5) == 0


def test_perlin_continuous_across_lattice_lines():
    """No seam where the sample crosses an integer coordinate."""
    eps = 1e-6
    for seed in (0, 7, 31):
        for y in (0.25, 1.5, 2.75):
            below = perlin_2d(2.0 - eps, y, seed)
            above = perlin_2d(2.0 + eps, y, seed)
            step = abs(perlin_2d(2.1, y, seed) - perlin_2d(2.0, y, seed))
            assert abs(above - below) < 1e-4
            assert abs(above - below) < max(step, 1e-3)
        below = perlin_2d(0.6, 3.0 - eps, seed)
        above = perlin_2d(0.6, 3.0 + eps, seed)
        assert abs(above - below) < 1e-4


def test_perlin_range():
    rng = np.random.RandomState(0)
    x = rng.uniform(-100, 100, 20000)
    y = rng.uniform(-100, 100, 20000)
    values = perlin_2d(x, y, seed=4)
    assert values.min() >= -1.0
    assert values.max() <= 1.0


def test_perlin_preserves_shape():
    x, y = np.meshgrid(np.linspace(0, 4, 9), np.linspace(0, 2, 5))
    assert perlin_2d(x, y).shape == (5, 9)


def test_single_octave_matches_perlin():
    x = np.linspace(0.1, 5.3, 50)
    y = np.linspace(-2.0, 1.3, 50)
    np.testing.assert_array_equal(fractal_2d(x, y, 3, octaves=1),
                                  perlin_2d(x, y, 3))


@pytest.mark.parametrize("octaves", [1, 2, FRACTAL_OCTAVES, 8])
def test_normalized_fractal_range(octaves):
    rng = np.random.RandomState(octaves)
    x = rng.uniform(-50, 50, 10000)
    y = rng.uniform(-50, 50, 10000)
    values = normalized_fractal_2d(x, y, seed=2, octaves=octaves)
    assert values.min() >= 0.0
    assert values.max() <= 1.0


def test_fractal_deterministic():
    x, y = np.meshgrid(np.linspace(0, 8, 32), np.linspace(0, 8, 32))
    np.testing.assert_array_equal(fractal_2d(x, y, 11), fractal_2d(x, y, 11))


def test_different_seeds_differ():
    x, y = np.meshgrid(np.linspace(0.1, 8, 32), np.linspace(0.1, 8, 32))
    assert not np.allclose(fractal_2d(x, y, 1), fractal_2d(x, y, 2))


def test_more_octaves_more_detail():
    x = np.linspace(0.05, 6.05, 600)
    y = np.full_like(x, 0.37)
    low = fractal_2d(x, y, 8, octaves=1)
    high = fractal_2d(x, y, 8, octaves=6)
    # Finer layers add more sample-to-sample variation relative to range
    rough_low = np.abs(np.diff(np.diff(low))).mean() / np.ptp(low)
    rough_high = np.abs(np.diff(np.diff(high))).mean() / np.ptp(high)
    assert rough_high > rough_low


@pytest.mark.parametrize("octaves", [0, -1])
def test_invalid_octaves(octaves):
    with pytest.raises(ConfigError):
        fractal_2d(0.5, 0.5, 0, octaves=octaves)
