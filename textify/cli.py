"""
Command-line front end.

Decodes an image file with Pillow and prints (or saves) its text art.

Usage:
    textify photo.jpg
    textify photo.jpg --width 120 --palette blocks
    textify photo.jpg --chars "#+. " --invert -o art.txt
    textify --list-palettes
"""

import argparse
import logging
import sys
from typing import List, Optional

from PIL import Image, UnidentifiedImageError

from .errors import TextArtGenerationError
from .generator import TextArtGenerator
from .options import DEFAULT_ASPECT_CORRECTION, DEFAULT_MAX_DIMENSION, DEFAULT_WIDTH, ProcessingOptions
from .palettes import CharacterPalette, get_palette, list_palettes
from .sampler import ImageSampler


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textify",
        description="Convert an image to text art",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  textify photo.jpg
    Print 80-column text art with the standard palette

  textify photo.jpg -w 120 -p blocks
    Wider output using shade blocks

  textify logo.png -c "#+. " --invert -o logo.txt
    Custom glyphs for a dark terminal, saved to a file
"""
    )

    parser.add_argument(
        "image",
        nargs="?",
        help="Path to the image file"
    )

    parser.add_argument(
        "-w", "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Output width in characters (default: {DEFAULT_WIDTH})"
    )

    parser.add_argument(
        "-a", "--aspect",
        type=float,
        default=DEFAULT_ASPECT_CORRECTION,
        help=f"Height correction for glyph cells (default: {DEFAULT_ASPECT_CORRECTION})"
    )

    palette_group = parser.add_mutually_exclusive_group()
    palette_group.add_argument(
        "-p", "--palette",
        choices=list_palettes(),
        default="standard",
        help="Preset palette (default: standard)"
    )
    palette_group.add_argument(
        "-c", "--chars",
        help="Custom palette, darkest glyph first"
    )

    parser.add_argument(
        "--invert",
        action="store_true",
        help="Map light areas to dense glyphs (for dark backgrounds)"
    )

    parser.add_argument(
        "--contrast",
        type=float,
        default=1.0,
        help="Contrast factor 0.0-2.0 (default: 1.0)"
    )

    parser.add_argument(
        "--max-dimension",
        type=int,
        default=DEFAULT_MAX_DIMENSION,
        help=f"Largest allowed output width or height (default: {DEFAULT_MAX_DIMENSION})"
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Threads used for quantization (default: 1)"
    )

    parser.add_argument(
        "-o", "--output",
        help="Save to this file instead of printing"
    )

    parser.add_argument(
        "--list-palettes",
        action="store_true",
        help="List preset palettes and exit"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )

    if args.list_palettes:
        for name in list_palettes():
            print(f"{name:10} {get_palette(name).as_string()!r}")
        return 0

    if not args.image:
        parser.error("an image path is required")

    try:
        options = ProcessingOptions(
            target_width=args.width,
            aspect_correction=args.aspect,
            invert=args.invert,
            contrast=args.contrast,
            workers=args.workers,
        )
        sampler = ImageSampler(max_dimension=args.max_dimension)
    except ValueError as e:
        parser.error(str(e))

    palette = CharacterPalette.custom(args.chars) if args.chars is not None else get_palette(args.palette)

    try:
        with Image.open(args.image) as image:
            image.load()
            art = TextArtGenerator(sampler).generate(image, palette, options)
    except (OSError, UnidentifiedImageError) as e:
        print(f"Error: could not read image '{args.image}': {e}", file=sys.stderr)
        return 1
    except TextArtGenerationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        try:
            art.save(args.output)
        except OSError as e:
            print(f"Error: could not write '{args.output}': {e}", file=sys.stderr)
            return 1
        logger.info("Saved %dx%d text art to %s", art.width, art.height, args.output)
    else:
        print(art.as_string())
    return 0


if __name__ == "__main__":
    sys.exit(main())
