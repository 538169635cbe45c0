"""Pseudo-3D relief shading from the local noise gradient."""

import numpy as np

# Noise-space offset of the comparison sample
SHADE_OFFSET = 0.01

# Brightness change per unit of value difference
SHADE_STRENGTH = 100.0


def apply_shading(rgb, value, offset_value, strength=SHADE_STRENGTH):
    """Brighten or darken colours by a finite-difference slope estimate.

    Args:
        rgb: float array (..., 3) of channels in [0, 255].
        value: Masked normalised value at each pixel.
        offset_value: Unmasked normalised value sampled SHADE_OFFSET
            further along both axes.
        strength: Channel change per unit of ``value - offset_value``.

    Returns:
        New float array of shaded channels, clamped to [0, 255].
    """
    shade = (np.asarray(value) - np.asarray(offset_value)) * strength
    return np.clip(rgb + shade[..., np.newaxis], 0.0, 255.0)
