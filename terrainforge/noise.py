"""Seeded gradient noise for terrain fields.

Every function accepts scalars or numpy arrays of matching shape and is
pure: the same inputs always give bit-identical outputs.
"""

import numpy as np

from .errors import ConfigError

# Octave count used when fractal detail is switched on
FRACTAL_OCTAVES = 4


def _fade(t):
    """Perlin fade function: 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a, b, t):
    return a + t * (b - a)


def _fract(x):
    return x - np.floor(x)


def _unwrap(result):
    """Return a plain float for 0-d results, the array otherwise."""
    if np.ndim(result) == 0:
        return float(result)
    return result


def hash_2d(ix, iy, seed=0):
    """Hash lattice coordinates and a seed into [0, 1).

    Coordinates are used as given; flooring to the lattice is the
    caller's job.
    """
    ix = np.asarray(ix, dtype=np.float64)
    iy = np.asarray(iy, dtype=np.float64)
    dot = ix * 127.1 + iy * 311.7 + seed * 9999.0
    return _unwrap(_fract(np.sin(dot) * 43758.5453123))


def gradient_2d(ix, iy, seed=0):
    """Unit gradient vector at a lattice point.

    Returns:
        Tuple (gx, gy) of floats or arrays.
    """
    angle = np.asarray(hash_2d(ix, iy, seed)) * 2.0 * np.pi
    return _unwrap(np.cos(angle)), _unwrap(np.sin(angle))


def _dot_grid_gradient(ix, iy, x, y, seed):
    gx, gy = gradient_2d(ix, iy, seed)
    return (x - ix) * gx + (y - iy) * gy


def perlin_2d(x, y, seed=0):
    """Single octave of 2D gradient noise.

    Args:
        x: Noise-space x coordinate(s).
        y: Noise-space y coordinate(s).
        seed: Seed selecting the noise stream.

    Returns:
        Noise value(s), approximately in [-1, 1].
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    # Cell corners
    x0 = np.floor(x)
    y0 = np.floor(y)
    x1 = x0 + 1
    y1 = y0 + 1

    u = _fade(x - x0)
    v = _fade(y - y0)

    n00 = _dot_grid_gradient(x0, y0, x, y, seed)
    n10 = _dot_grid_gradient(x1, y0, x, y, seed)
    n01 = _dot_grid_gradient(x0, y1, x, y, seed)
    n11 = _dot_grid_gradient(x1, y1, x, y, seed)

    return _unwrap(_lerp(_lerp(n00, n10, u), _lerp(n01, n11, u), v))


def fractal_2d(x, y, seed=0, octaves=FRACTAL_OCTAVES):
    """Fractal (multi-octave) gradient noise.

    Each octave doubles the frequency and halves the amplitude. The sum
    is divided by the total amplitude so the output stays within the
    single-octave range regardless of the octave count.

    Args:
        x: Noise-space x coordinate(s).
        y: Noise-space y coordinate(s).
        seed: Seed selecting the noise stream.
        octaves: Number of layers to sum (>= 1).

    Returns:
        Noise value(s), approximately in [-1, 1].
    """
    if octaves < 1:
        raise ConfigError(f"octaves must be >= 1, got {octaves}")

    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    total = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
    amplitude = 1.0
    frequency = 1.0
    total_amplitude = 0.0

    for _ in range(octaves):
        total += amplitude * np.asarray(
            perlin_2d(x * frequency, y * frequency, seed))
        total_amplitude += amplitude
        amplitude *= 0.5
        frequency *= 2.0

    return _unwrap(total / total_amplitude)


def normalized_fractal_2d(x, y, seed=0, octaves=FRACTAL_OCTAVES):
    """Fractal noise remapped from [-1, 1] to [0, 1]."""
    value = (np.asarray(fractal_2d(x, y, seed, octaves)) + 1.0) / 2.0
    return _unwrap(value)
