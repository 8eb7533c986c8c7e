"""
engine.py
=========

Public entry points.

``generate`` validates its inputs, prepares a canvas, runs the composer for
the requested ``PatternKind`` and returns the finished ``RasterImage``.
``create_artwork`` and ``regenerate_artwork`` wrap it for callers that keep a
gallery of results: they shuffle the palette first, encode the image as PNG
and return an ``Artwork`` record with the metadata that belongs with it.

Quick start
-----------
>>> from mandalagen import generate, CanvasSize, PatternKind, VIBRANT
>>> image = generate(PatternKind.MANDALA, CanvasSize(750, 1334), VIBRANT, seed=7)
>>> png = image.to_png()
"""

import logging
import random
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, Tuple, Union

from .canvas import Canvas, CanvasSize, RasterImage
from .composers import COMPOSERS
from .color import Color
from .config import DEFAULT_CONFIG, EngineConfig
from .errors import EmptyPaletteError, InvalidSizeError
from .kinds import PatternKind
from .palette import Palette

logger = logging.getLogger(__name__)

SizeLike = Union[CanvasSize, Tuple[int, int]]
PaletteLike = Union[Palette, Iterable[Union[Color, str]]]


def rng_from_seed(seed: Optional[int]) -> random.Random:
    """Return a Random instance from seed (or system)."""
    r = random.Random()
    if seed is not None:
        r.seed(int(seed))
    else:
        r.seed()
    return r


def as_size(size: SizeLike) -> CanvasSize:
    if isinstance(size, CanvasSize):
        return size
    try:
        width, height = size
        return CanvasSize(width, height)
    except (TypeError, ValueError) as e:
        raise InvalidSizeError(f"Expected a CanvasSize or (width, height), got {size!r}") from e


def as_palette(palette: PaletteLike) -> Palette:
    if isinstance(palette, Palette):
        return palette
    return Palette(palette)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate(
    kind: Union[PatternKind, str],
    size: SizeLike,
    palette: PaletteLike,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> RasterImage:
    """Render one pattern.

    Args:
        kind: a PatternKind or its name (any letter case).
        size: target canvas size, or a (width, height) pair; the output has
            exactly this size.
        palette: non-empty Palette, or any sequence of Colors or hex strings.
        rng: random source; takes precedence over ``seed``.
        seed: seed for a fresh random source when ``rng`` is not given.
        config: rendering options, DEFAULT_CONFIG when omitted.

    Raises:
        UnknownPatternKindError, InvalidSizeError, EmptyPaletteError, all
        before any canvas is allocated.
    """
    kind = PatternKind.parse(kind)
    size = as_size(size)
    size.validate()
    palette = as_palette(palette)
    if not palette:
        raise EmptyPaletteError("Cannot generate a pattern from an empty palette")
    config = config or DEFAULT_CONFIG
    rng = rng if rng is not None else rng_from_seed(seed)

    canvas = Canvas.create(size)
    canvas.fill_background(config.background)
    COMPOSERS[kind](rng, canvas, size, palette, config)
    logger.info("Generated %s pattern at %s from %d colors", kind.value, size, len(palette))
    return canvas.export()


@dataclass(frozen=True)
class Artwork:
    """A generated image with the inputs needed to show or redo it."""
    image_data: bytes
    palette: Palette
    kind: PatternKind
    size: CanvasSize
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=_utcnow)

    def image(self) -> RasterImage:
        return RasterImage.from_png(self.image_data)


def create_artwork(
    kind: Union[PatternKind, str],
    size: SizeLike,
    palette: PaletteLike,
    rng: Optional[random.Random] = None,
    config: Optional[EngineConfig] = None,
    clock: Callable[[], datetime] = _utcnow,
) -> Artwork:
    """Shuffle ``palette``, render it and wrap the PNG in an Artwork."""
    kind = PatternKind.parse(kind)
    size = as_size(size)
    rng = rng if rng is not None else rng_from_seed(None)
    shuffled = as_palette(palette).shuffled(rng)
    image = generate(kind, size, shuffled, rng=rng, config=config)
    return Artwork(image.to_png(), shuffled, kind, size, created_at=clock())


def regenerate_artwork(
    artwork: Artwork,
    rng: Optional[random.Random] = None,
    config: Optional[EngineConfig] = None,
) -> Artwork:
    """New image for an existing artwork; id and creation time are kept."""
    rng = rng if rng is not None else rng_from_seed(None)
    shuffled = artwork.palette.shuffled(rng)
    image = generate(artwork.kind, artwork.size, shuffled, rng=rng, config=config)
    return replace(artwork, image_data=image.to_png(), palette=shuffled)
