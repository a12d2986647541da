#!/usr/bin/env python3
"""
SphereCast - A Python Ray Tracing Renderer

Main entry point: renders the cover scene and writes the image.
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from spherecast.renderer import Renderer, RenderSettings, RenderError, to_ldr
from spherecast.output import write_ppm, save_image
from spherecast.scenes import random_spheres_scene, cover_camera

logger = logging.getLogger('spherecast')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='SphereCast - A Python Ray Tracing Renderer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --width 400 --samples 8 > cover.ppm
  python main.py --width 1200 --samples 100 --seed 7 --output cover.png
  python main.py --processes --threads 8 --output cover.ppm
        '''
    )

    parser.add_argument('--width', type=int, default=1920, help='Image width (default: 1920)')
    parser.add_argument('--aspect-ratio', type=float, default=3.0 / 2.0,
                        help='Width / height (default: 1.5)')
    parser.add_argument('--samples', type=int, default=32, help='Samples per pixel (default: 32)')
    parser.add_argument('--depth', type=int, default=50, help='Max ray depth (default: 50)')
    parser.add_argument('--threads', type=int, default=0, help='Number of workers (0=auto)')
    parser.add_argument('--processes', action='store_true',
                        help='Render rows in worker processes instead of threads')
    parser.add_argument('--seed', type=int, default=None,
                        help='Master seed for scene and sampling (default: random)')
    parser.add_argument('--output', type=str, default=None,
                        help='Output filename (default: PPM on stdout)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='[%(relativeCreated)8.0fms] - %(message)s',
        stream=sys.stderr
    )

    try:
        settings = RenderSettings(
            width=args.width,
            aspect_ratio=args.aspect_ratio,
            samples_per_pixel=args.samples,
            max_depth=args.depth,
            num_threads=args.threads,
            seed=args.seed,
            executor='process' if args.processes else 'thread'
        )
    except ValueError as exc:
        logger.error("Invalid settings: %s", exc)
        return 2

    logger.info("Setting up world")
    world = random_spheres_scene(np.random.default_rng(settings.seed))
    logger.info("Objects in scene: %d", len(world))

    logger.info("Setting up camera")
    camera = cover_camera(settings.width / settings.height)

    logger.info("Start rendering image")
    renderer = Renderer(settings)
    try:
        image = renderer.render(world, camera)
    except RenderError as exc:
        logger.error("Render aborted: %s", exc)
        return 1
    logger.info("Done rendering image")

    if args.output is None:
        logger.info("Writing PPM data to stdout")
        write_ppm(sys.stdout, to_ldr(image))
        sys.stdout.flush()
    else:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Saving to %s", output_path)
        save_image(image, output_path)

    logger.info("Done writing image")
    return 0


if __name__ == '__main__':
    sys.exit(main())
