import argparse
import logging
import sys

from tileascii.charsets import PRESETS
from tileascii.errors import AsciiArtError
from tileascii.glyphs import GLYPH_SIZE, GlyphBrightness, GlyphRasterizer
from tileascii.image import RasterImage
from tileascii.matcher import CharMatcher, RoundingPolicy
from tileascii.padding import pad
from tileascii.renderer import Renderer
from tileascii.terminal import fit_resolution, get_terminal_size


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render an image as ASCII art")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-r",
        "--resolution",
        type=int,
        default=None,
        help="Characters per row (default: largest power of two that fits the terminal)",
    )
    parser.add_argument(
        "-c", "--chars", default=None, help="Characters to draw with (default: the digits preset)"
    )
    parser.add_argument(
        "-p", "--preset", default="digits", choices=sorted(PRESETS), help="Named character set (default: digits)"
    )
    parser.add_argument(
        "--round",
        default=RoundingPolicy.ABS.value,
        choices=[p.value for p in RoundingPolicy],
        help="How to pick between the two nearest characters (default: abs)",
    )
    parser.add_argument("-f", "--font", default=None, help="TrueType font used to measure glyphs")
    parser.add_argument(
        "--glyph-size", type=int, default=GLYPH_SIZE, help=f"Glyph bitmap side in pixels (default: {GLYPH_SIZE})"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s: %(message)s")

    if args.resolution is not None and args.resolution < 1:
        parser.error("resolution must be positive")

    try:
        image = pad(RasterImage.open(args.image))
        glyphs = GlyphBrightness(GlyphRasterizer(args.font, args.glyph_size))
        chars = args.chars if args.chars is not None else PRESETS[args.preset]
        matcher = CharMatcher(chars, glyphs=glyphs, rounding=args.round)
        resolution = args.resolution
        if resolution is None:
            resolution = fit_resolution(get_terminal_size()[0], image.width)
        print(Renderer().render_text(image, resolution, matcher))
    except (AsciiArtError, OSError) as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)
