#!/usr/bin/env python3
"""Render the reference sphere scene.

This script renders the floor-and-three-spheres reference scene with diffuse
shading and hard shadows, then writes a PPM or PNG image.

Usage:
    python -m examples.render_reference_scene [options]

Options:
    --width WIDTH           Image width in pixels (default: 200)
    --height HEIGHT         Image height in pixels (default: 200)
    --fov FOV               Vertical field of view in degrees (default: 30)
    --output OUTPUT         Output file path, .ppm or .png (default: Picture.ppm)
    --shadow-bias BIAS      Shadow ray offset along the normal (default: 1e-4)
    --arch {cpu,gpu}        Taichi backend (default: cpu)
    --quiet                 Suppress progress output

Example:
    python -m examples.render_reference_scene --width 400 --height 300 --output spheres.png
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the reference sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=200,
        help="Image width in pixels (default: 200)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=200,
        help="Image height in pixels (default: 200)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=30.0,
        help="Vertical field of view in degrees (default: 30)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="Picture.ppm",
        help="Output file path, .ppm or .png (default: Picture.ppm)",
    )
    parser.add_argument(
        "--shadow-bias",
        type=float,
        default=1e-4,
        help="Shadow ray offset along the normal (default: 1e-4)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_reference_scene(
    width: int = 200,
    height: int = 200,
    fov: float = 30.0,
    output_path: str = "Picture.ppm",
    shadow_bias: float = 1e-4,
    quiet: bool = False,
) -> Path:
    """Render the reference scene and save it to a file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Vertical field of view in degrees.
        output_path: Output file path (.ppm or .png).
        shadow_bias: Shadow ray offset along the normal.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from spheretrace.core.renderer import render
    from spheretrace.preview.export import save_image
    from spheretrace.scene.reference import REFERENCE_BACKGROUND, create_reference_scene

    if not quiet:
        print(f"Creating reference scene ({width}x{height}, fov {fov:g})...")

    scene, camera = create_reference_scene(width, height, fov)

    start_time = time.time()
    image = render(scene, camera, background=REFERENCE_BACKGROUND, shadow_bias=shadow_bias)
    output_file = save_image(image, output_path)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ti.init(arch=ti.gpu if args.arch == "gpu" else ti.cpu)

    try:
        render_reference_scene(
            width=args.width,
            height=args.height,
            fov=args.fov,
            output_path=args.output,
            shadow_bias=args.shadow_bias,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
