"""
composers.py
============

Layout strategies, one per ``PatternKind``. A composer decides where shapes
go, how many there are and which palette entries they use, then hands the
actual drawing to the motif library or to the primitive shape helpers below.

All composers share the signature ``(rng, canvas, size, palette, config)``
and draw every random number from ``rng``. Colors that are assigned by grid
position or band index never consume randomness.
"""

import logging
import math
import random
from typing import Callable, Dict, List

from .canvas import Canvas, CanvasSize, ColorStop
from .color import Color
from .config import EngineConfig
from .geometry import Path, Transform
from .kinds import PatternKind
from .motifs import MOTIF_KINDS, draw_motif
from .palette import Palette

logger = logging.getLogger(__name__)

# Mandala tiling
MOTIF_AREA = 9000
MIN_RADIUS, MAX_RADIUS = 0.06, 0.16
MIN_SUBPALETTE, MAX_SUBPALETTE = 3, 6
MIN_INNER, MAX_INNER = 2, 4
MIN_INNER_SCALE, MAX_INNER_SCALE = 0.3, 0.7
OVERLAY_COLORS = 3

GEOMETRIC_GRID = 8
FLORAL_GRID = 6
FLOWER_PETALS = 8
FLOWER_SCALE = 0.4
FLOWER_CENTER = 0.3
ABSTRACT_LINES = 50
ABSTRACT_LENGTH = 0.3
WAVE_BANDS = 5
WAVE_STEP = 10
WAVE_AMPLITUDE = 0.3
WAVE_FREQUENCY = 0.02
DOT_COUNT = 200
DOT_MAX = 0.05
DOT_MIN_SCALE = 0.2
LINE_COUNT = 30

MIXED_CHOICES = (
    PatternKind.GEOMETRIC,
    PatternKind.FLORAL,
    PatternKind.WAVES,
    PatternKind.DOTS,
    PatternKind.LINES,
)


# ---------------------------- Helpers ---------------------------------------

def motif_count(size: CanvasSize) -> int:
    """Mandala motifs for a canvas: one per 9000 square pixels."""
    return (size.width * size.height) // MOTIF_AREA


def cell_color(palette: Palette, row: int, col: int) -> Color:
    return palette.cycle(row + col)


def even_stops(colors: List[Color]) -> List[ColorStop]:
    """Spread colors evenly over [0, 1] (3 colors -> 0, 0.5, 1)."""
    if len(colors) == 1:
        return [(0.0, colors[0])]
    n = len(colors) - 1
    return [(i / n, c) for i, c in enumerate(colors)]


def random_angle(rng: random.Random) -> float:
    """Uniform in [0, 2*pi)."""
    return rng.random() * 2 * math.pi


def mixed_layers(rng: random.Random) -> List[PatternKind]:
    count = rng.randint(2, 3)
    return rng.sample(MIXED_CHOICES, count)


# ---------------------------- Primitive shapes ------------------------------

def rectangle(x: float, y: float, w: float, h: float) -> Path:
    return Path.rectangle(x, y, w, h)


def triangle(x: float, y: float, w: float, h: float) -> Path:
    return Path.polygon([(x + w/2, y), (x + w, y + h), (x, y + h)])


def circle(x: float, y: float, w: float, h: float) -> Path:
    return Path.ellipse(x, y, w, h)


def diamond(x: float, y: float, w: float, h: float) -> Path:
    return Path.polygon([(x + w/2, y), (x + w, y + h/2), (x + w/2, y + h), (x, y + h/2)])


CELL_SHAPES: List[Callable[[float, float, float, float], Path]] = [rectangle, triangle, circle, diamond]


def draw_flower(canvas: Canvas, cx: float, cy: float, radius: float, color: Color) -> None:
    petal = 2 * math.pi / FLOWER_PETALS
    for i in range(FLOWER_PETALS):
        angle = i * petal
        canvas.fill_path(Path.wedge((cx, cy), radius, angle - petal/2, angle + petal/2), color)
    canvas.fill_path(Path.circle((cx, cy), radius * FLOWER_CENTER), color)


# ---------------------------- Composers -------------------------------------

def compose_mandala(rng: random.Random, canvas: Canvas, size: CanvasSize,
                    palette: Palette, config: EngineConfig) -> None:
    """Tiled, nested motifs finished with a soft-light palette tint."""
    W, H = size.width, size.height
    count = motif_count(size)
    min_r, max_r = size.min_dim * MIN_RADIUS, size.min_dim * MAX_RADIUS
    logger.debug("mandala: %d motifs on %s", count, size)

    for _ in range(count):
        cx, cy = rng.uniform(0, W), rng.uniform(0, H)
        radius = rng.uniform(min_r, max_r)
        kind = rng.choice(MOTIF_KINDS)
        colors = palette.sample(rng, rng.randint(MIN_SUBPALETTE, MAX_SUBPALETTE))
        frame = Transform.at(cx, cy, random_angle(rng))
        draw_motif(kind, canvas, frame, radius, colors, rng)

        # Inner motifs sit in the outer frame with a rotation of their own.
        for _ in range(rng.randint(MIN_INNER, MAX_INNER)):
            inner_kind = rng.choice(MOTIF_KINDS)
            inner_radius = radius * rng.uniform(MIN_INNER_SCALE, MAX_INNER_SCALE)
            inner_frame = frame.compose(Transform(rotation=random_angle(rng)))
            inner_colors = palette.sample(rng, rng.randint(2, max(2, len(colors))))
            draw_motif(inner_kind, canvas, inner_frame, inner_radius, inner_colors, rng)

    tint = palette.sample(rng, OVERLAY_COLORS)
    canvas.composite_overlay(even_stops(tint), (0.0, 0.0), (float(W), float(H)),
                             blend_mode=config.overlay_blend_mode, opacity=config.overlay_opacity)


def compose_geometric(rng: random.Random, canvas: Canvas, size: CanvasSize,
                      palette: Palette, config: EngineConfig) -> None:
    cell_w = size.width / GEOMETRIC_GRID
    cell_h = size.height / GEOMETRIC_GRID
    for row in range(GEOMETRIC_GRID):
        for col in range(GEOMETRIC_GRID):
            shape = rng.choice(CELL_SHAPES)
            path = shape(col * cell_w, row * cell_h, cell_w, cell_h)
            canvas.fill_path(path, cell_color(palette, row, col))


def compose_floral(rng: random.Random, canvas: Canvas, size: CanvasSize,
                   palette: Palette, config: EngineConfig) -> None:
    cell_w = size.width / FLORAL_GRID
    cell_h = size.height / FLORAL_GRID
    radius = min(cell_w, cell_h) * FLOWER_SCALE
    for row in range(FLORAL_GRID):
        for col in range(FLORAL_GRID):
            cx = col * cell_w + cell_w / 2
            cy = row * cell_h + cell_h / 2
            draw_flower(canvas, cx, cy, radius, cell_color(palette, row, col))


def compose_abstract(rng: random.Random, canvas: Canvas, size: CanvasSize,
                     palette: Palette, config: EngineConfig) -> None:
    length = size.min_dim * ABSTRACT_LENGTH
    for _ in range(ABSTRACT_LINES):
        x, y = rng.uniform(0, size.width), rng.uniform(0, size.height)
        angle = random_angle(rng)
        color = rng.choice(palette.colors)
        end = (x + math.cos(angle) * length, y + math.sin(angle) * length)
        canvas.stroke_path(Path.segment((x, y), end), color, 2)


def compose_waves(rng: random.Random, canvas: Canvas, size: CanvasSize,
                  palette: Palette, config: EngineConfig) -> None:
    band = size.height / WAVE_BANDS
    for i in range(WAVE_BANDS):
        y = i * band
        pts = [(float(x), y + math.sin(x * WAVE_FREQUENCY) * band * WAVE_AMPLITUDE)
               for x in range(0, size.width + 1, WAVE_STEP)]
        canvas.stroke_path(Path.polyline(pts), palette.cycle(i), 3)


def compose_dots(rng: random.Random, canvas: Canvas, size: CanvasSize,
                 palette: Palette, config: EngineConfig) -> None:
    max_dot = size.min_dim * DOT_MAX
    for _ in range(DOT_COUNT):
        x, y = rng.uniform(0, size.width), rng.uniform(0, size.height)
        diameter = rng.uniform(max_dot * DOT_MIN_SCALE, max_dot)
        color = rng.choice(palette.colors)
        canvas.fill_path(Path.circle((x, y), diameter / 2), color)


def compose_lines(rng: random.Random, canvas: Canvas, size: CanvasSize,
                  palette: Palette, config: EngineConfig) -> None:
    spacing = size.width / LINE_COUNT
    for i in range(LINE_COUNT):
        x = i * spacing
        canvas.stroke_path(Path.segment((x, 0.0), (x, float(size.height))), palette.cycle(i), 2)


def compose_mixed(rng: random.Random, canvas: Canvas, size: CanvasSize,
                  palette: Palette, config: EngineConfig) -> None:
    """Overdraw two or three of the simpler composers on one canvas."""
    layers = mixed_layers(rng)
    logger.debug("mixed: layering %s", ", ".join(k.value for k in layers))
    for kind in layers:
        COMPOSERS[kind](rng, canvas, size, palette, config)


Composer = Callable[[random.Random, Canvas, CanvasSize, Palette, EngineConfig], None]

COMPOSERS: Dict[PatternKind, Composer] = {
    PatternKind.MANDALA: compose_mandala,
    PatternKind.GEOMETRIC: compose_geometric,
    PatternKind.FLORAL: compose_floral,
    PatternKind.ABSTRACT: compose_abstract,
    PatternKind.WAVES: compose_waves,
    PatternKind.DOTS: compose_dots,
    PatternKind.LINES: compose_lines,
    PatternKind.MIXED: compose_mixed,
}
