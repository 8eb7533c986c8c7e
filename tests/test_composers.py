import math
import random

import pytest

from mandalagen import composers
from mandalagen.canvas import CanvasSize
from mandalagen.color import Color
from mandalagen.composers import (
    COMPOSERS,
    MIXED_CHOICES,
    compose_floral,
    compose_geometric,
    compose_lines,
    compose_mandala,
    compose_waves,
    even_stops,
    mixed_layers,
    motif_count,
)
from mandalagen.config import DEFAULT_CONFIG
from mandalagen.kinds import PatternKind
from mandalagen.palette import Palette

from conftest import BLUE, GREEN, RED, RecordingCanvas


def run(composer, size, palette, seed):
    canvas = RecordingCanvas(size)
    composer(random.Random(seed), canvas, size, palette, DEFAULT_CONFIG)
    return canvas


def test_every_kind_has_a_composer():
    assert set(COMPOSERS) == set(PatternKind)


@pytest.mark.parametrize("w,h,expected", [(900, 900, 90), (300, 30, 1), (100, 89, 0), (1242, 2688, 370)])
def test_motif_count(w, h, expected):
    assert motif_count(CanvasSize(w, h)) == expected


def test_mandala_places_outer_and_inner_motifs(palette):
    size = CanvasSize(300, 300)
    canvas = run(compose_mandala, size, palette, 4)
    overlay, = canvas.of("overlay")
    _, stops, start, end, mode, opacity = overlay
    assert [p for p, _ in stops] == [0.0, 0.5, 1.0]
    assert start == (0.0, 0.0) and end == (300.0, 300.0)
    assert mode == "soft-light"
    assert opacity == pytest.approx(0.18)
    # 10 outer motifs with 2-4 inner ones each, every motif fills at least once
    assert len(canvas.of("fill")) >= 30


def record_motifs(monkeypatch, size, palette, seed):
    """Run the mandala composer and group motif draws by outer motif."""
    drawn = []
    monkeypatch.setattr(composers, "draw_motif",
                        lambda kind, canvas, transform, radius, colors, rng:
                        drawn.append((transform, radius, colors)))
    run(compose_mandala, size, palette, seed)
    groups = []
    for transform, radius, colors in drawn:
        outer = groups[-1][0][0] if groups else None
        if outer is None or (transform.tx, transform.ty) != (outer.tx, outer.ty):
            groups.append([])
        groups[-1].append((transform, radius, colors))
    return groups


@pytest.mark.parametrize("palette_size,seed", [(4, 4), (10, 7)])
def test_mandala_motif_rules(monkeypatch, palette_size, seed):
    colors = [Color.from_rgba8((20 * i, 255 - 20 * i, 7 * i)) for i in range(palette_size)]
    pal = Palette(colors)
    size = CanvasSize(300, 300)
    groups = record_motifs(monkeypatch, size, pal, seed)

    assert len(groups) == motif_count(size) == 10
    for (outer, radius, outer_colors), *inner in groups:
        assert 0 <= outer.tx <= 300 and 0 <= outer.ty <= 300
        assert 0.06 * 300 <= radius <= 0.16 * 300
        assert 3 <= len(outer_colors) <= min(6, palette_size)
        assert len(set(outer_colors)) == len(outer_colors)
        assert set(outer_colors) <= set(colors)
        assert 2 <= len(inner) <= 4
        for frame, inner_radius, inner_colors in inner:
            assert (frame.tx, frame.ty) == (outer.tx, outer.ty)
            spin = frame.rotation - outer.rotation
            assert -1e-9 <= spin < 2 * math.pi + 1e-9
            assert 0.3 * radius <= inner_radius <= 0.7 * radius
            assert 2 <= len(inner_colors) <= len(outer_colors)
            assert set(inner_colors) <= set(colors)


def test_mandala_overlay_is_last(palette):
    canvas = run(compose_mandala, CanvasSize(200, 100), palette, 1)
    assert canvas.calls[-1][0] == "overlay"


def test_mandala_with_single_color_palette():
    canvas = run(compose_mandala, CanvasSize(200, 100), Palette([RED]), 2)
    _, stops, *_ = canvas.of("overlay")[0]
    assert stops == [(0.0, RED)]


def test_even_stops():
    assert even_stops([RED, GREEN]) == [(0.0, RED), (1.0, GREEN)]


@pytest.mark.parametrize("seed", range(5))
def test_geometric_colors_follow_the_grid(palette, seed):
    canvas = run(compose_geometric, CanvasSize(80, 80), palette, seed)
    fills = canvas.of("fill")
    assert len(fills) == 64
    expected = [palette[(r + c) % len(palette)] for r in range(8) for c in range(8)]
    assert [f[2] for f in fills] == expected


def test_geometric_shape_choice_is_random(palette):
    a = [len(f[1].points) for f in run(compose_geometric, CanvasSize(80, 80), palette, 1).of("fill")]
    b = [len(f[1].points) for f in run(compose_geometric, CanvasSize(80, 80), palette, 2).of("fill")]
    assert a != b


def test_floral_flowers(palette):
    size = CanvasSize(120, 60)
    fills = run(compose_floral, size, palette, 0).of("fill")
    # 8 petals plus a center disc per cell
    assert len(fills) == 36 * 9
    for cell in range(36):
        r, c = divmod(cell, 6)
        for f in fills[cell * 9:(cell + 1) * 9]:
            assert f[2] == palette[(r + c) % len(palette)]
    first_petal = fills[0][1]
    assert first_petal.points[0] == (10.0, 5.0)
    reach = max(abs(x - 10) for x, _ in first_petal.points)
    assert 4.0 * math.cos(math.pi / 8) - 1e-9 <= reach <= 4.0 + 1e-9


def test_wave_bands():
    size = CanvasSize(100, 50)
    palette = Palette([RED, BLUE])
    strokes = run(compose_waves, size, palette, 0).of("stroke")
    assert len(strokes) == 5
    for i, (_, path, color, width) in enumerate(strokes):
        assert color == palette[i % 2]
        assert width == 3
        assert [x for x, _ in path.points] == [float(x) for x in range(0, 101, 10)]
        assert path.points[0][1] == pytest.approx(i * 10)


def test_line_positions_and_colors():
    size = CanvasSize(300, 40)
    palette = Palette([RED, GREEN, BLUE])
    strokes = run(compose_lines, size, palette, 0).of("stroke")
    assert len(strokes) == 30
    for i, (_, path, color, width) in enumerate(strokes):
        assert path.points == [(i * 10.0, 0.0), (i * 10.0, 40.0)]
        assert color == palette[i % 3]
        assert width == 2


def test_abstract_and_dots_counts(palette):
    size = CanvasSize(100, 60)
    strokes = run(COMPOSERS[PatternKind.ABSTRACT], size, palette, 0).of("stroke")
    assert len(strokes) == 50
    for _, path, color, width in strokes:
        (x0, y0), (x1, y1) = path.points
        assert ((x1 - x0) ** 2 + (y1 - y0) ** 2) ** 0.5 == pytest.approx(18)
        assert width == 2
    dots = run(COMPOSERS[PatternKind.DOTS], size, palette, 0).of("fill")
    assert len(dots) == 200
    for _, path, color in dots:
        x0, y0, x1, y1 = path.bounds()
        assert 0.5 <= x1 - x0 <= 3.0 + 1e-9
        assert color in palette.colors


@pytest.mark.parametrize("seed", range(50))
def test_mixed_layers_selection(seed):
    layers = mixed_layers(random.Random(seed))
    assert len(layers) in (2, 3)
    assert len(set(layers)) == len(layers)
    assert set(layers) <= set(MIXED_CHOICES)
    assert PatternKind.MANDALA not in layers and PatternKind.ABSTRACT not in layers


def test_mixed_runs_the_selected_composers(monkeypatch, palette):
    called = []
    for kind in MIXED_CHOICES:
        monkeypatch.setitem(composers.COMPOSERS, kind,
                            lambda rng, canvas, size, pal, cfg, kind=kind: called.append(kind))
    run(composers.compose_mixed, CanvasSize(50, 50), palette, 11)
    assert called == mixed_layers(random.Random(11))
