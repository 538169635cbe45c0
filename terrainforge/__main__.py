"""CLI entry point for TerrainForge."""

import argparse
import dataclasses
import logging
from pathlib import Path

import numpy as np

from .animation import Animator
from .config import RenderConfig
from .errors import ConfigError
from .mask import MaskShape
from .presets import PRESETS, apply_preset, randomize
from .renderer import render, render_values


def _build_parser():
    parser = argparse.ArgumentParser(
        description="Generate procedural terrain images from seeded noise"
    )
    parser.add_argument(
        "--preset", "-p", default="Island", choices=list(PRESETS),
        help="Preset supplying scale, seed, mask and colours (default: Island)"
    )
    parser.add_argument(
        "--width", "-W", type=int, default=400,
        help="Output image width in pixels (default: 400)"
    )
    parser.add_argument(
        "--height", "-H", type=int, default=400,
        help="Output image height in pixels (default: 400)"
    )
    parser.add_argument(
        "--scale", type=float, default=None,
        help="Noise zoom; larger values give bigger features"
    )
    parser.add_argument(
        "--seed", "-s", type=float, default=None,
        help="Noise seed for reproducible generation"
    )
    parser.add_argument(
        "--time", "-t", type=float, default=0.0,
        help="Noise time offset (default: 0)"
    )
    parser.add_argument(
        "--mask-shape", choices=[s.value for s in MaskShape], default=None,
        help="Landmass mask shape"
    )
    parser.add_argument(
        "--mask-contrast", type=float, default=None,
        help="Mask contrast boost, >= 1.0"
    )
    parser.add_argument("--no-mask", action="store_true",
                        help="Disable the landmass mask")
    parser.add_argument("--grayscale", action="store_true",
                        help="Render raw values in grey instead of colour")
    parser.add_argument("--no-octaves", action="store_true",
                        help="Single octave noise (blockier, faster)")
    parser.add_argument("--no-smoothing", action="store_true",
                        help="Hard colour bands instead of gradients")
    parser.add_argument("--no-shading", action="store_true",
                        help="Disable relief shading")
    parser.add_argument(
        "--randomize", type=int, default=None, metavar="SEED",
        help="Randomize parameters and palette using this RNG seed"
    )
    parser.add_argument(
        "--frames", type=int, default=1,
        help="Number of animation frames; more than 1 writes a GIF"
    )
    parser.add_argument(
        "--speed", type=float, default=None,
        help="Time offset advance per frame (default: 0.01)"
    )
    parser.add_argument(
        "--workers", type=int, default=None,
        help="Render bands of rows on this many threads"
    )
    parser.add_argument(
        "--map", default=None,
        help="Also write the raw value grid as comma-separated text"
    )
    parser.add_argument(
        "--output", "-o", default="terrain.png",
        help="Output file path (default: terrain.png)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def build_config(args):
    """Turn parsed arguments into a RenderConfig and animation speed."""
    config = apply_preset(
        RenderConfig(width=args.width, height=args.height, time=args.time),
        args.preset,
    )
    speed = args.speed

    if args.randomize is not None:
        config, suggested = randomize(
            config, np.random.RandomState(args.randomize))
        if speed is None:
            speed = suggested
    if speed is None:
        speed = 0.01

    changes = {}
    if args.scale is not None:
        changes["scale"] = args.scale
    if args.seed is not None:
        changes["seed"] = args.seed
    if args.grayscale:
        changes["grayscale"] = True
    if args.no_octaves:
        changes["octaves"] = False
    if args.no_smoothing:
        changes["smoothing"] = False
    if args.no_shading:
        changes["shading"] = False

    mask_changes = {}
    if args.no_mask:
        mask_changes["enabled"] = False
    if args.mask_shape is not None:
        mask_changes["shape"] = args.mask_shape
    if args.mask_contrast is not None:
        mask_changes["contrast"] = args.mask_contrast
    if mask_changes:
        changes["mask"] = dataclasses.replace(config.mask, **mask_changes)

    config = dataclasses.replace(config, **changes)
    config.validate()
    return config, speed


def write_map(values, path):
    """Write a value grid as comma-separated rows, three decimals each."""
    np.savetxt(path, values, fmt="%.3f", delimiter=",")


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config, speed = build_config(args)
        if args.frames < 1:
            raise ConfigError(f"frames must be >= 1, got {args.frames}")

        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)

        if args.frames == 1:
            image = render(config, workers=args.workers)
            image.save(str(output))
        else:
            animator = Animator(config, speed=speed, workers=args.workers)
            images = [im.convert("RGB") for im in animator.frames(args.frames)]
            images[0].save(str(output), save_all=True,
                           append_images=images[1:], duration=40, loop=0)

        if args.map:
            map_path = Path(args.map)
            map_path.parent.mkdir(parents=True, exist_ok=True)
            write_map(render_values(config), map_path)
            print(f"Saved value map ({config.width}x{config.height}) "
                  f"to {map_path}")
    except ConfigError as exc:
        parser.error(str(exc))

    print(f"Saved terrain ({config.width}x{config.height}, "
          f"{args.frames} frame(s)) to {output}")


if __name__ == "__main__":
    main()
