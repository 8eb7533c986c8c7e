"""
Command line
------------
$ python -m mandalagen --out /tmp/wallpaper.png --kind mandala \
    --preset iphone-se --palette "#ff5a5f,#4cc9f0,#f49d37" --seed 7

Prints the output path on success. Validation failures exit with status 2.
"""

import argparse
import logging
from typing import Optional, Sequence

from .canvas import CanvasSize
from .config import CANVAS_PRESETS, DEFAULT_SIZE, preset_size
from .engine import generate
from .errors import PatternError
from .kinds import PatternKind
from .logging_config import setup_logging
from .palette import Palette, PaletteSource, resolve_palette

logger = logging.getLogger(__name__)


def parse_size(s: str) -> CanvasSize:
    try:
        return CanvasSize.parse(s)
    except PatternError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def parse_palette(s: str) -> Palette:
    try:
        return Palette.from_hex([c.strip() for c in s.split(",") if c.strip()])
    except PatternError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="mandalagen", description="Render mandala-style wallpaper PNGs")
    ap.add_argument("--out", required=True, help="Output PNG path")
    ap.add_argument("--kind", default=PatternKind.MANDALA.value,
                    help="Pattern kind: " + ", ".join(k.value for k in PatternKind))
    size = ap.add_mutually_exclusive_group()
    size.add_argument("--size", type=parse_size, default=None, help="WIDTHxHEIGHT (e.g., 1242x2688)")
    size.add_argument("--preset", choices=sorted(CANVAS_PRESETS), default=None, help="Named device size")
    colors = ap.add_mutually_exclusive_group()
    colors.add_argument("--palette", type=parse_palette, default=None,
                        help="Comma-separated hex colors (e.g., '#ff5a5f,#4cc9f0')")
    colors.add_argument("--palette-source", choices=[s.value for s in PaletteSource
                                                     if s in (PaletteSource.VIBRANT, PaletteSource.PASTEL)],
                        default=PaletteSource.VIBRANT.value, help="Built-in palette")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--log-file", default=None, help="Also write log output to this file")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    if args.size is not None:
        size = args.size
    elif args.preset is not None:
        size = preset_size(args.preset)
    else:
        size = DEFAULT_SIZE

    if args.palette is not None:
        palette = resolve_palette(PaletteSource.CUSTOM_MANUAL, custom_palette=args.palette)
    else:
        palette = resolve_palette(PaletteSource(args.palette_source))

    try:
        image = generate(args.kind, size, palette, seed=args.seed)
    except PatternError as e:
        logger.error("%s", e)
        ap.exit(2, f"mandalagen: error: {e}\n")
    out = image.save(args.out)
    print(out)
    return 0
