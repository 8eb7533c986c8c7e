"""
motifs.py
=========

Single decorative units: the layered "mandala" rosette, the pointed star and
the regular polygon.

Every drawer receives the canvas, a ``Transform`` that places the motif's
local frame (origin at the motif center, local angle 0 along the motif's own
rotation), a radius and a sub-palette. Shapes are built in local coordinates
and mapped through the transform, so nested motifs only need a composed
transform, never shared canvas state.
"""

import math
import random
from enum import Enum
from typing import Callable, Dict, List, Sequence

from .canvas import Canvas
from .color import WHITE, Color
from .geometry import Path, Point, Transform

# Mandala motif
MIN_LAYERS, MAX_LAYERS = 3, 5
LAYER_SHRINK = 0.18
BASE_PETALS = 8
PETALS_PER_LAYER = 4
PETAL_HALF_ANGLE = math.pi / 6
PETAL_EDGE_ALPHA = 0.7
CENTER_DISC = 0.18

# Star motif
MIN_STAR_POINTS, MAX_STAR_POINTS = 6, 10
STAR_INNER_RATIO = 0.5

# Polygon motif
MIN_SIDES, MAX_SIDES = 5, 8


class MotifKind(Enum):
    MANDALA = "mandala"
    STAR = "star"
    POLYGON = "polygon"


MOTIF_KINDS: List[MotifKind] = list(MotifKind)


def star_points(points: int, radius: float) -> List[Point]:
    """Outer and inner vertices of a star, alternating, starting at angle 0."""
    pts = []
    for i in range(points):
        angle = i * 2 * math.pi / points
        pts.append((math.cos(angle) * radius, math.sin(angle) * radius))
        mid = angle + math.pi / points
        inner = radius * STAR_INNER_RATIO
        pts.append((math.cos(mid) * inner, math.sin(mid) * inner))
    return pts


def polygon_points(sides: int, radius: float) -> List[Point]:
    return [(math.cos(i * 2 * math.pi / sides) * radius, math.sin(i * 2 * math.pi / sides) * radius)
            for i in range(sides)]


def _pick(rng: random.Random, colors: Sequence[Color]) -> Color:
    return rng.choice(colors) if colors else WHITE


def draw_petal(canvas: Canvas, transform: Transform, radius: float, angle: float, color: Color) -> None:
    """Wedge of +/-30 degrees around ``angle``, shaded toward its tip."""
    local = Path.wedge((0.0, 0.0), radius, angle - PETAL_HALF_ANGLE, angle + PETAL_HALF_ANGLE)
    path = local.transformed(transform)
    canvas.fill_path(path, color)
    tip = transform.apply_point((math.cos(angle) * radius, math.sin(angle) * radius))
    canvas.fill_path_with_linear_gradient(
        path,
        [(0.0, color), (1.0, color.with_alpha(color.alpha * PETAL_EDGE_ALPHA))],
        transform.apply_point((0.0, 0.0)),
        tip,
    )


def draw_mandala_motif(canvas: Canvas, transform: Transform, radius: float,
                       colors: Sequence[Color], rng: random.Random) -> None:
    layers = rng.randint(MIN_LAYERS, MAX_LAYERS)
    for layer in range(layers):
        layer_radius = radius * (1.0 - layer * LAYER_SHRINK)
        segments = BASE_PETALS + layer * PETALS_PER_LAYER
        color = colors[layer % len(colors)] if colors else WHITE
        for i in range(segments):
            draw_petal(canvas, transform, layer_radius, i * 2 * math.pi / segments, color)
    center = colors[-1] if colors else WHITE
    canvas.fill_path(Path.circle((0.0, 0.0), radius * CENTER_DISC).transformed(transform), center)


def draw_star_motif(canvas: Canvas, transform: Transform, radius: float,
                    colors: Sequence[Color], rng: random.Random) -> None:
    points = rng.randint(MIN_STAR_POINTS, MAX_STAR_POINTS)
    color = _pick(rng, colors)
    canvas.fill_path(Path.polygon(star_points(points, radius)).transformed(transform), color)


def draw_polygon_motif(canvas: Canvas, transform: Transform, radius: float,
                       colors: Sequence[Color], rng: random.Random) -> None:
    sides = rng.randint(MIN_SIDES, MAX_SIDES)
    color = _pick(rng, colors)
    canvas.fill_path(Path.polygon(polygon_points(sides, radius)).transformed(transform), color)


MotifDrawer = Callable[[Canvas, Transform, float, Sequence[Color], random.Random], None]

MOTIF_DRAWERS: Dict[MotifKind, MotifDrawer] = {
    MotifKind.MANDALA: draw_mandala_motif,
    MotifKind.STAR: draw_star_motif,
    MotifKind.POLYGON: draw_polygon_motif,
}


def draw_motif(kind: MotifKind, canvas: Canvas, transform: Transform, radius: float,
               colors: Sequence[Color], rng: random.Random) -> None:
    MOTIF_DRAWERS[kind](canvas, transform, radius, colors, rng)
