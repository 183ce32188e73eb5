"""
Pixelate command line.

Reduces an image to a small, limited-palette grid and optionally prints the
assembly legend.

Usage:
    python pixelate.py <input_image> <output_image> [--width N] [--colors K]
                       [--instructions] [--verbose]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from PX_Libs.errors import PixelateError
from PX_Libs.ImageEditingLib.image_io import load_image_file, save_png
from PX_Libs.ImageEditingLib.instructions import Instructions
from PX_Libs.ImageEditingLib.preprocess import preprocess, settings_for


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixelate",
        description="Turn an image into a limited-palette pixel grid for bead/brick murals.",
    )
    parser.add_argument("input", type=Path, help="Source image")
    parser.add_argument("output", type=Path, help="Where to write the PNG grid")
    parser.add_argument("--width", type=int, default=None, help="Grid width in cells")
    parser.add_argument("--colors", type=int, default=None, help="Maximum number of colors")
    parser.add_argument("--instructions", action="store_true", help="Print the color legend")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def print_instructions(instructions: Instructions) -> None:
    print(
        f"Grid: {instructions.width}x{instructions.height} cells "
        f"({instructions.total_width_mm:.1f} x {instructions.total_height_mm:.1f} mm)"
    )
    for entry in instructions.legend():
        print(f"  {entry.index}  {entry.color}  x{entry.count}")
    lower, upper = instructions.time_estimate()
    print(f"Pieces: {instructions.total_count}, estimated time {lower}-{upper} minutes")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.input.is_file():
        print(f"Error: {args.input} is not a valid file", file=sys.stderr)
        return 1

    try:
        source = load_image_file(args.input)
        settings = settings_for(source, target_width=args.width, target_colors=args.colors)
        print(
            f"Downscaling {args.input} to {settings.target_width}x{settings.target_height} "
            f"with at most {settings.target_colors} colors..."
        )
        result = preprocess(source, settings)
        saved = save_png(result, args.output.parent, args.output.name)
    except (PixelateError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Saved to {saved}")
    if args.instructions:
        print_instructions(Instructions(result.pixels()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
