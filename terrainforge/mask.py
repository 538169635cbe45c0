"""Landmass masks: distance-based falloff from the image centre."""

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .errors import ConfigError


class MaskShape(str, Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    HEXAGON = "hexagon"


# Per-shape multiplier on the mask contrast. Square and hexagon masks
# are tuned softer than the circle; presets are matched to these values.
CONTRAST_FACTORS = {
    MaskShape.CIRCLE: 1.0,
    MaskShape.SQUARE: 0.75,
    MaskShape.HEXAGON: 0.75,
}

# cos(30deg), slope of the hexagon's slanted edges
HEX_SLOPE = 0.866


@dataclass
class MaskConfig:
    """Mask settings for a render."""

    enabled: bool = True
    shape: MaskShape = MaskShape.CIRCLE
    contrast: float = 4.0

    def __post_init__(self):
        self.validate()

    def validate(self):
        try:
            self.shape = MaskShape(self.shape)
        except ValueError:
            raise ConfigError(f"unknown mask shape: {self.shape!r}") from None
        # Below 1.0 the boost would flatten the land instead
        if not math.isfinite(self.contrast) or self.contrast < 1.0:
            raise ConfigError(
                f"mask contrast must be a finite value >= 1.0, "
                f"got {self.contrast}")


def _distance_gradient(px, py, width, height, shape):
    """Falloff gradient: 1 at the centre, <= 0 on and past the boundary."""
    cx = width / 2.0
    cy = height / 2.0
    dx = np.abs(px - cx)
    dy = np.abs(py - cy)

    if shape is MaskShape.CIRCLE:
        # Normalised by the half-diagonal, then centred and inverted
        dist = np.sqrt(dx * dx + dy * dy) / math.sqrt(cx * cx + cy * cy)
        return -(dist - 0.5) * 2.0

    qx = dx / cx
    qy = dy / cy
    if shape is MaskShape.SQUARE:
        dist = np.maximum(qx, qy)
    else:
        dist = np.maximum(qx, qy * HEX_SLOPE + qx * 0.5)
    return np.maximum(0.0, 1.0 - dist)


def _shape_values(values, grad, mask):
    boost = mask.contrast * CONTRAST_FACTORS[mask.shape]
    masked = values * grad
    masked = np.where(masked > 0, masked * boost, masked)
    masked = np.clip(masked, 0.0, 1.0)
    return np.where(grad > 0, masked, 0.0)


def mask_value(px, py, width, height, value, mask):
    """Apply the mask to normalised noise value(s).

    Works on a single pixel or on coordinate/value arrays of matching
    shape (e.g. a whole frame or a band of rows).

    Args:
        px: Pixel x coordinate(s).
        py: Pixel y coordinate(s).
        width: Image width in pixels.
        height: Image height in pixels.
        value: Normalised noise value(s) in [0, 1].
        mask: MaskConfig to apply.

    Returns:
        Masked value(s) in [0, 1], or ``value`` unchanged if the mask
        is off.
    """
    if not mask.enabled:
        return value
    if width <= 0 or height <= 0:
        raise ConfigError(
            f"mask needs a positive image size, got {width}x{height}")
    px = np.asarray(px, dtype=np.float64)
    py = np.asarray(py, dtype=np.float64)
    grad = _distance_gradient(px, py, width, height, mask.shape)
    result = _shape_values(np.asarray(value, dtype=np.float64), grad, mask)
    if result.ndim == 0:
        return float(result)
    return result
