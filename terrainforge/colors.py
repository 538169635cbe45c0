"""Threshold-based colour mapping for normalised terrain values."""

import math
from dataclasses import dataclass

import numpy as np
from PIL import ImageColor

from .errors import ConfigError

# Colour used when a value lies above every threshold
FALLBACK_COLOR = (255, 255, 255)


def parse_color(color):
    """Convert a colour string or (r, g, b) sequence to an int RGB tuple."""
    if isinstance(color, str):
        try:
            rgb = ImageColor.getrgb(color)
        except ValueError:
            raise ConfigError(f"unrecognised colour: {color!r}") from None
        return tuple(rgb[:3])

    rgb = tuple(int(c) for c in color)
    if len(rgb) != 3 or any(c < 0 or c > 255 for c in rgb):
        raise ConfigError(f"colour must be three channels in 0-255, got {color!r}")
    return rgb


@dataclass(frozen=True)
class ColorStop:
    """A breakpoint: values up to ``threshold`` map towards ``color``."""

    threshold: float
    color: tuple

    def __post_init__(self):
        if not math.isfinite(self.threshold) or not 0.0 <= self.threshold <= 1.0:
            raise ConfigError(
                f"threshold must lie in [0, 1], got {self.threshold}")
        object.__setattr__(self, 'color', parse_color(self.color))

    def hex(self):
        return '#%02x%02x%02x' % self.color


class ColorStops:
    """Ordered lookup table of colour stops.

    Thresholds must be non-decreasing and there must be at least one
    stop. Stops may be given as ColorStop instances or as
    ``(threshold, color)`` pairs.
    """

    def __init__(self, stops):
        stops = tuple(s if isinstance(s, ColorStop) else ColorStop(*s)
                      for s in stops)
        if not stops:
            raise ConfigError("at least one colour stop is required")
        for prev, stop in zip(stops, stops[1:]):
            if stop.threshold < prev.threshold:
                raise ConfigError(
                    f"colour stop thresholds must be ascending: "
                    f"{stop.threshold} follows {prev.threshold}")

        self._stops = stops
        self.thresholds = np.array([s.threshold for s in stops],
                                   dtype=np.float64)
        self.colors = np.array([s.color for s in stops], dtype=np.float64)

    def __len__(self):
        return len(self._stops)

    def __iter__(self):
        return iter(self._stops)

    def __getitem__(self, index):
        return self._stops[index]

    def __eq__(self, other):
        if not isinstance(other, ColorStops):
            return NotImplemented
        return self._stops == other._stops

    def __repr__(self):
        inner = ', '.join(f'({s.threshold}, {s.hex()!r})' for s in self._stops)
        return f'ColorStops([{inner}])'


def map_colors(values, stops, smoothing=False):
    """Map normalised values to RGB through the colour stops.

    Each value takes the colour of the first stop whose threshold is
    >= the value. With smoothing, channels are interpolated from the
    previous stop's colour. Values above every threshold get white.

    Args:
        values: Array of values in [0, 1], any shape.
        stops: ColorStops lookup table.
        smoothing: Interpolate between adjacent stops.

    Returns:
        float64 array of shape values.shape + (3,), channels in [0, 255].
    """
    values = np.asarray(values, dtype=np.float64)
    n = len(stops)

    idx = np.searchsorted(stops.thresholds, values, side='left')
    matched = np.minimum(idx, n - 1)
    rgb = stops.colors[matched]

    if smoothing and n > 1:
        prev = np.maximum(matched - 1, 0)
        lo = stops.thresholds[prev]
        span = stops.thresholds[matched] - lo
        # Equal thresholds give ratio 0
        ratio = np.divide(values - lo, span,
                          out=np.zeros_like(values), where=span > 0)
        blend = (idx > 0) & (idx < n)
        ratio = np.where(blend, ratio, 0.0)[..., np.newaxis]
        start = stops.colors[prev]
        rgb = np.where(blend[..., np.newaxis],
                       start + ratio * (rgb - start), rgb)

    miss = (idx >= n)[..., np.newaxis]
    return np.where(miss, np.array(FALLBACK_COLOR, dtype=np.float64), rgb)


def grayscale_colors(values):
    """Map normalised values straight to grey levels."""
    grey = np.asarray(values, dtype=np.float64) * 255.0
    return np.repeat(grey[..., np.newaxis], 3, axis=-1)


def color_for(value, stops, smoothing=False):
    """Colour for a single value, as an int (r, g, b) tuple.

    Channels are truncated the same way the frame buffer write
    truncates them.
    """
    rgb = map_colors(np.array([value], dtype=np.float64), stops, smoothing)[0]
    return tuple(int(c) for c in np.clip(rgb, 0, 255))
