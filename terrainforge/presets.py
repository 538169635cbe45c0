"""Named terrain presets and random parameter generation."""

import dataclasses
import logging

import numpy as np

from .colors import ColorStops
from .config import DEFAULT_STOPS, RenderConfig
from .errors import ConfigError
from .mask import MaskConfig, MaskShape

logger = logging.getLogger(__name__)


PRESETS = {
    'Island': {
        'scale': 50,
        'seed': 0,
        'mask': True,
        'mask_shape': 'circle',
        'stops': DEFAULT_STOPS,
    },
    'Archipelago': {
        'scale': 120,
        'seed': 8,
        'mask': True,
        'mask_shape': 'circle',
        'stops': (
            (0.0, '#4169E1'),    # deep water
            (0.01, '#EED6AF'),   # beach
            (0.03, '#D2B48C'),   # sand
            (0.12, '#228B22'),   # grass
            (0.25, '#006400'),   # forest
            (0.35, '#8B8989'),   # rock
            (1.0, '#FFFAFA'),    # snow
        ),
    },
    'Desert': {
        'scale': 80,
        'seed': 3,
        'mask': False,
        'stops': (
            (0.3, '#000000'),
            (0.5, '#e0c080'),
            (0.7, '#d9b26f'),
            (0.85, '#aa9966'),
            (1.0, '#888888'),
        ),
    },
    'Rainforest': {
        'scale': 45,
        'seed': 10,
        'mask': False,
        'stops': (
            (0.25, '#000000'),
            (0.35, '#ffe39f'),
            (0.45, '#65b84f'),
            (0.6, '#3e9f3e'),
            (0.75, '#2c662c'),
            (1.0, '#1f4d1f'),
        ),
    },
    'Mountains': {
        'scale': 40,
        'seed': 1,
        'mask': False,
        'stops': (
            (0.4, '#333333'),
            (0.5, '#777777'),
            (0.7, '#aaaaaa'),
            (0.85, '#dddddd'),
            (1.0, '#ffffff'),
        ),
    },
    'Hex Archipelago': {
        'scale': 30,
        'seed': 21,
        'mask': True,
        'mask_shape': 'hexagon',
        'mask_contrast': 1.8,
        'stops': (
            (0.6, '#4169E1'),
            (0.62, '#EED6AF'),
            (0.65, '#D2B48C'),
            (0.72, '#228B22'),
            (1.0, '#006400'),
        ),
    },
    'Hex Rainforest': {
        'scale': 50,
        'seed': 31,
        'mask': True,
        'mask_shape': 'hexagon',
        'mask_contrast': 2.0,
        'stops': (
            (0.2, '#f0da9e'),
            (0.3, '#65b84f'),
            (0.44, '#3e9f3e'),
            (1.0, '#0f4d0f'),
        ),
    },
}


def preset_names():
    return list(PRESETS)


def apply_preset(config, name):
    """Return a copy of ``config`` with the named preset applied.

    Presets set scale, seed, mask and colour stops; everything else
    (canvas size, time offset, toggles) is kept from ``config``.
    """
    try:
        preset = PRESETS[name]
    except KeyError:
        raise ConfigError(
            f"unknown preset {name!r}; choose from {', '.join(PRESETS)}"
        ) from None

    mask = MaskConfig(
        enabled=preset.get('mask', True),
        shape=preset.get('mask_shape', MaskShape.CIRCLE),
        contrast=preset.get('mask_contrast', 4.0),
    )
    logger.info("Applying preset %s", name)
    return dataclasses.replace(
        config,
        scale=preset['scale'],
        seed=preset['seed'],
        mask=mask,
        stops=ColorStops(preset['stops']),
    )


def default_config(**overrides):
    """Island preset on the default 400x400 canvas."""
    return dataclasses.replace(apply_preset(RenderConfig(), 'Island'),
                               **overrides)


def _random_stops(rng):
    """4-6 evenly spaced stops with random, reasonably saturated colours."""
    count = rng.randint(4, 7)
    stops = []
    for i in range(count):
        hue = rng.randint(0, 360)
        saturation = rng.randint(40, 100)
        lightness = rng.randint(25, 75)
        color = f'hsl({hue}, {saturation}%, {lightness}%)'
        stops.append(((i + 1) / count, color))
    return ColorStops(stops)


def randomize(config, rng=None):
    """Randomise scale, seed, toggles, mask and palette.

    Args:
        config: Config supplying the fields that are kept (canvas size,
            time offset).
        rng: numpy RandomState for reproducibility.

    Returns:
        Tuple (new_config, speed) where speed is a suggested animation
        speed in [0, 0.02).
    """
    if rng is None:
        rng = np.random.RandomState()

    scale = int(rng.randint(20, 170))
    seed = int(rng.randint(0, 100))
    speed = float(rng.random_sample() * 0.02)
    smoothing = bool(rng.random_sample() < 0.6)

    mask = MaskConfig(
        enabled=bool(rng.random_sample() < 0.7),
        shape=list(MaskShape)[rng.randint(0, len(MaskShape))],
        contrast=float(rng.random_sample() * 2 + 1.5),
    )

    new_config = dataclasses.replace(
        config,
        scale=scale,
        seed=seed,
        grayscale=False,
        octaves=True,
        smoothing=smoothing,
        shading=True,
        mask=mask,
        stops=_random_stops(rng),
    )
    logger.info("Randomized terrain: scale=%d seed=%d mask=%s/%s",
                scale, seed, mask.enabled, mask.shape.value)
    return new_config, speed
