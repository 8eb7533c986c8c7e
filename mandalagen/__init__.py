"""
mandalagen
==========

Deterministic, seedable generator for mandala-style wallpaper artwork.

Given a pattern kind, a canvas size and an ordered palette, ``generate``
renders a raster image with Pillow. Eight pattern kinds are available:
mandala (tiled, nested motifs with a soft-light tint), geometric, floral,
abstract, waves, dots, lines and mixed.
"""

from .canvas import Canvas, CanvasSize, RasterImage
from .color import BLACK, WHITE, Color
from .config import CANVAS_PRESETS, DEFAULT_CONFIG, DEFAULT_SIZE, EngineConfig
from .engine import Artwork, create_artwork, generate, regenerate_artwork, rng_from_seed
from .errors import (
    EmptyPaletteError,
    InvalidArgumentError,
    InvalidSizeError,
    PatternError,
    UnknownPatternKindError,
)
from .kinds import PatternKind
from .palette import DEFAULT_SELECTION, PASTEL, VIBRANT, Palette, PaletteSource, resolve_palette

__version__ = "0.1.0"

__all__ = [
    "Artwork",
    "BLACK",
    "CANVAS_PRESETS",
    "Canvas",
    "CanvasSize",
    "Color",
    "DEFAULT_CONFIG",
    "DEFAULT_SELECTION",
    "DEFAULT_SIZE",
    "EmptyPaletteError",
    "EngineConfig",
    "InvalidArgumentError",
    "InvalidSizeError",
    "PASTEL",
    "Palette",
    "PaletteSource",
    "PatternError",
    "PatternKind",
    "RasterImage",
    "UnknownPatternKindError",
    "VIBRANT",
    "WHITE",
    "create_artwork",
    "generate",
    "regenerate_artwork",
    "resolve_palette",
    "rng_from_seed",
]
