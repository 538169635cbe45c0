"""Tests for the frame renderer."""

import dataclasses

import numpy as np
import pytest

from terrainforge.colors import ColorStops
from terrainforge.config import RenderConfig
from terrainforge.errors import ConfigError
from terrainforge.mask import MaskConfig, MaskShape
from terrainforge.renderer import render, render_pixels, render_values


def _small_config(**kwargs):
    base = dict(width=24, height=18, scale=7.0, seed=3)
    base.update(kwargs)
    return RenderConfig(**base)


def test_grayscale_end_to_end_4x4():
    config = RenderConfig(width=4, height=4, scale=1, seed=0,
                          mask=MaskConfig(enabled=False),
                          grayscale=True, octaves=False)
    first = render_pixels(config)
    second = render_pixels(RenderConfig(width=4, height=4, scale=1, seed=0,
                                        mask=MaskConfig(enabled=False),
                                        grayscale=True, octaves=False))
    assert first.shape == (4, 4, 4)
    assert first.dtype == np.uint8
    assert np.all(first[..., 3] == 255)
    np.testing.assert_array_equal(first[..., 0], first[..., 1])
    np.testing.assert_array_equal(first[..., 1], first[..., 2])
    np.testing.assert_array_equal(first, second)


def test_integer_lattice_samples_are_mid_grey():
    # Every pixel lands on a lattice point, where gradient noise is zero
    config = RenderConfig(width=4, height=4, scale=1, seed=0,
                          mask=MaskConfig(enabled=False),
                          grayscale=True, shading=False)
    rgba = render_pixels(config)
    assert np.all(rgba[..., :3] == 127)


def test_render_idempotent():
    config = _small_config()
    a = render_pixels(config)
    b = render_pixels(config)
    np.testing.assert_array_equal(a, b)
    assert a is not b


def test_render_does_not_mutate_config():
    config = _small_config(time=0.25)
    before = (config.width, config.height, config.scale, config.seed,
              config.time, config.mask, config.stops)
    render_pixels(config)
    after = (config.width, config.height, config.scale, config.seed,
             config.time, config.mask, config.stops)
    assert before == after


def test_render_returns_rgba_image():
    image = render(_small_config())
    assert image.mode == "RGBA"
    assert image.size == (24, 18)


def test_default_render():
    image = render(RenderConfig(width=32, height=32))
    assert image.size == (32, 32)


def test_values_shape_and_range():
    values = render_values(_small_config())
    assert values.shape == (18, 24)
    assert values.min() >= 0.0
    assert values.max() <= 1.0


def test_values_match_grayscale_pixels():
    config = _small_config(grayscale=True, shading=False)
    values = render_values(config)
    rgba = render_pixels(config)
    expected = np.clip(values * 255.0, 0, 255).astype(np.uint8)
    np.testing.assert_array_equal(rgba[..., 0], expected)


def test_circle_mask_zeroes_corners():
    config = _small_config(mask=MaskConfig(shape=MaskShape.CIRCLE))
    values = render_values(config)
    assert values[0, 0] == 0.0
    assert values[0, -1] == 0.0
    assert values[-1, 0] == 0.0


def test_masked_pixels_take_lowest_stop_colour():
    stops = ColorStops([(0.0, "#0000ff"), (1.0, "#ffffff")])
    config = _small_config(stops=stops, shading=False,
                           mask=MaskConfig(shape=MaskShape.SQUARE))
    rgba = render_pixels(config)
    assert tuple(rgba[0, 0]) == (0, 0, 255, 255)


def test_time_offset_shifts_field():
    a = render_values(_small_config(time=0.0))
    b = render_values(_small_config(time=0.5))
    assert not np.array_equal(a, b)


def test_time_offset_moves_rows():
    # Advancing time by one row's worth of noise space shifts the field up
    config = _small_config(mask=MaskConfig(enabled=False), scale=4.0)
    a = render_values(config)
    b = render_values(dataclasses.replace(config, time=1.0 / 4.0))
    np.testing.assert_allclose(b[:-1], a[1:], atol=1e-12)


def test_different_seeds_differ():
    a = render_pixels(_small_config(seed=1))
    b = render_pixels(_small_config(seed=2))
    assert not np.array_equal(a, b)


def test_shading_changes_output():
    a = render_pixels(_small_config(shading=False))
    b = render_pixels(_small_config(shading=True))
    assert not np.array_equal(a, b)


@pytest.mark.parametrize("workers", [2, 3, 64])
def test_threaded_matches_serial(workers):
    config = _small_config()
    np.testing.assert_array_equal(render_pixels(config),
                                  render_pixels(config, workers=workers))


@pytest.mark.parametrize("changes", [
    {"scale": 0},
    {"scale": -3.0},
    {"scale": float("inf")},
    {"width": 0},
    {"height": -1},
    {"width": 2.5},
    {"seed": float("nan")},
    {"time": float("inf")},
    {"seed": "3"},
    {"scale": "2"},
    {"time": None},
    {"seed": True},
])
def test_invalid_config_rejected(changes):
    config = dataclasses.replace(_small_config(), **changes)
    with pytest.raises(ConfigError):
        render_pixels(config)
    with pytest.raises(ConfigError):
        render_values(config)


def test_mutated_mask_contrast_rejected():
    config = _small_config()
    config.mask.contrast = 0.5
    with pytest.raises(ConfigError):
        render_pixels(config)


def test_invalid_workers_rejected():
    with pytest.raises(ConfigError):
        render_pixels(_small_config(), workers=0)


def test_stops_given_as_pairs_are_wrapped():
    config = _small_config(stops=[(0.5, "#000000"), (1.0, "#ffffff")])
    assert isinstance(config.stops, ColorStops)
