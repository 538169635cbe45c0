"""Render configuration."""

import math
from dataclasses import dataclass, field
from numbers import Integral, Real

from .colors import ColorStops
from .errors import ConfigError
from .mask import MaskConfig

# Island palette: water, beach, sand, grass, forest, rock, snow
DEFAULT_STOPS = (
    (0.0, '#4169E1'),
    (0.02, '#EED6AF'),
    (0.04, '#D2B48C'),
    (0.15, '#228B22'),
    (0.30, '#006400'),
    (0.45, '#8B8989'),
    (1.0, '#FFFAFA'),
)


@dataclass
class RenderConfig:
    """Everything a single frame render reads.

    Owned by the caller. The renderer only reads it; to change a
    setting between frames, mutate it or build a new one with
    ``dataclasses.replace``.
    """

    # Canvas
    width: int = 400
    height: int = 400

    # Noise
    scale: float = 50.0
    seed: float = 0
    time: float = 0.0
    octaves: bool = True

    # Colouring
    grayscale: bool = False
    smoothing: bool = True
    shading: bool = True

    mask: MaskConfig = field(default_factory=MaskConfig)
    stops: ColorStops = field(
        default_factory=lambda: ColorStops(DEFAULT_STOPS))

    def __post_init__(self):
        if not isinstance(self.stops, ColorStops):
            self.stops = ColorStops(self.stops)

    def validate(self):
        """Raise ConfigError if the config cannot be rendered."""
        for name in ('width', 'height'):
            value = getattr(self, name)
            if (isinstance(value, bool) or not isinstance(value, Integral)
                    or value <= 0):
                raise ConfigError(
                    f"{name} must be a positive integer, got {value!r}")
        for name in ('scale', 'seed', 'time'):
            value = getattr(self, name)
            if (isinstance(value, bool) or not isinstance(value, Real)
                    or not math.isfinite(value)):
                raise ConfigError(
                    f"{name} must be a finite number, got {value!r}")
        if self.scale <= 0:
            raise ConfigError(f"scale must be > 0, got {self.scale}")
        if not isinstance(self.mask, MaskConfig):
            raise ConfigError(f"mask must be a MaskConfig, got {self.mask!r}")
        self.mask.validate()
        if not isinstance(self.stops, ColorStops) or len(self.stops) == 0:
            raise ConfigError("at least one colour stop is required")
