"""Main terrain rendering pipeline.

Evaluates fractal noise over the pixel grid, shapes it with the
landmass mask, maps it to colour and applies relief shading.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from PIL import Image

from .colors import grayscale_colors, map_colors
from .config import RenderConfig
from .errors import ConfigError
from .mask import mask_value
from .noise import FRACTAL_OCTAVES, normalized_fractal_2d
from .shading import SHADE_OFFSET, apply_shading

logger = logging.getLogger(__name__)


def render_pixels(config, workers=None):
    """Render a frame into a new RGBA pixel buffer.

    Args:
        config: RenderConfig to render.
        workers: Evaluate bands of rows on this many threads. None or 1
            renders serially; the output is identical either way.

    Returns:
        uint8 array of shape (height, width, 4), row-major RGBA with
        alpha fixed at 255.
    """
    config.validate()
    if workers is not None and workers < 1:
        raise ConfigError(f"workers must be >= 1, got {workers}")

    start = time.perf_counter()
    rgba = np.empty((config.height, config.width, 4), dtype=np.uint8)

    bands = _row_bands(config.height, workers or 1)
    if len(bands) == 1:
        rgba[:] = _render_band(config, 0, config.height)
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [(y0, y1, pool.submit(_render_band, config, y0, y1))
                       for y0, y1 in bands]
            for y0, y1, future in futures:
                rgba[y0:y1] = future.result()

    logger.debug("Rendered %dx%d frame (seed=%s, time=%.4f) in %.1f ms",
                 config.width, config.height, config.seed, config.time,
                 (time.perf_counter() - start) * 1000)
    return rgba


def render(config=None, workers=None):
    """Render a frame as a Pillow image.

    Args:
        config: RenderConfig instance (defaults used if None).
        workers: Optional thread count, see render_pixels.

    Returns:
        PIL Image in RGBA mode.
    """
    if config is None:
        config = RenderConfig()
    return Image.fromarray(render_pixels(config, workers=workers), 'RGBA')


def render_values(config):
    """Masked, normalised noise values for every pixel.

    Computed exactly as the pixel path up to the masking step, without
    colour or shading.

    Returns:
        float64 array of shape (height, width) with values in [0, 1].
    """
    config.validate()
    px, py, nx, ny = _sample_grid(config, 0, config.height)
    raw = normalized_fractal_2d(nx, ny, config.seed, _octave_count(config))
    return mask_value(px, py, config.width, config.height, raw, config.mask)


# ---------------------------------------------------------------------------
# Internal pipeline stages
# ---------------------------------------------------------------------------

def _octave_count(config):
    return FRACTAL_OCTAVES if config.octaves else 1


def _row_bands(height, workers):
    """Split [0, height) into at most ``workers`` contiguous row bands."""
    n = max(1, min(workers, height))
    edges = np.linspace(0, height, n + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]


def _sample_grid(config, y0, y1):
    """Pixel and noise-space coordinate grids for rows [y0, y1)."""
    ys = np.arange(y0, y1, dtype=np.float64)
    xs = np.arange(config.width, dtype=np.float64)
    py, px = np.meshgrid(ys, xs, indexing='ij')
    nx = px / config.scale
    ny = py / config.scale + config.time
    return px, py, nx, ny


def _render_band(config, y0, y1):
    """Render rows [y0, y1) to an RGBA uint8 array."""
    octaves = _octave_count(config)
    px, py, nx, ny = _sample_grid(config, y0, y1)

    # 1. Fractal noise, remapped to [0, 1]
    raw = normalized_fractal_2d(nx, ny, config.seed, octaves)

    # 2. Landmass mask
    value = mask_value(px, py, config.width, config.height, raw, config.mask)

    # 3. Base colour
    if config.grayscale:
        rgb = grayscale_colors(value)
    else:
        rgb = map_colors(value, config.stops, config.smoothing)

    # 4. Relief shading against the unmasked field
    if config.shading:
        offset = normalized_fractal_2d(nx + SHADE_OFFSET, ny + SHADE_OFFSET,
                                       config.seed, octaves)
        rgb = apply_shading(rgb, value, offset)

    return _composite(rgb)


def _composite(rgb):
    """Assemble the final RGBA pixels."""
    h, w = rgb.shape[:2]
    rgba = np.empty((h, w, 4), dtype=np.uint8)
    rgba[:, :, :3] = np.clip(rgb, 0, 255).astype(np.uint8)
    rgba[:, :, 3] = 255
    return rgba
