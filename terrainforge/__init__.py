"""TerrainForge - Generate procedural terrain images from seeded noise."""

import dataclasses

from .colors import ColorStop, ColorStops
from .config import RenderConfig
from .errors import ConfigError, TerrainForgeError
from .mask import MaskConfig, MaskShape
from .presets import apply_preset, default_config, randomize
from .renderer import render, render_pixels, render_values

__version__ = "0.1.0"
__all__ = [
    "generate",
    "render",
    "render_pixels",
    "render_values",
    "RenderConfig",
    "MaskConfig",
    "MaskShape",
    "ColorStop",
    "ColorStops",
    "ConfigError",
    "TerrainForgeError",
    "apply_preset",
    "default_config",
    "randomize",
]


def generate(preset="Island", width=400, height=400, time=0.0, **kwargs):
    """Generate a terrain image from a named preset.

    Args:
        preset: Name of the preset supplying scale, seed, mask and
            colour stops.
        width: Output image width in pixels.
        height: Output image height in pixels.
        time: Noise time offset (advance it to animate).
        **kwargs: Additional RenderConfig fields overriding the preset
            (grayscale, shading, seed, scale, etc.).

    Returns:
        PIL Image in RGBA mode.
    """
    config = apply_preset(RenderConfig(width=width, height=height, time=time),
                          preset)
    if kwargs:
        config = dataclasses.replace(config, **kwargs)
    return render(config)
