"""
palette.py
==========

Ordered color palettes plus the built-in palette tables.

A ``Palette`` never mutates; ``shuffled`` and ``sample`` return new values
drawn with the caller's ``random.Random`` so that a fixed seed always yields
the same colors in the same order.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .color import Color
from .errors import InvalidArgumentError

ColorLike = Union[Color, str]


def _as_color(c: ColorLike) -> Color:
    if isinstance(c, Color):
        return c
    if isinstance(c, str):
        return Color.from_hex(c)
    raise InvalidArgumentError(f"Not a color: {c!r}")


@dataclass(frozen=True, init=False)
class Palette:
    colors: Tuple[Color, ...] = ()

    def __init__(self, colors: Iterable[ColorLike] = ()):
        object.__setattr__(self, "colors", tuple(_as_color(c) for c in colors))

    @classmethod
    def from_hex(cls, hex_colors: Sequence[str]) -> "Palette":
        return cls(Color.from_hex(h) for h in hex_colors)

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[Color]:
        return iter(self.colors)

    def __getitem__(self, i: int) -> Color:
        return self.colors[i]

    def __bool__(self) -> bool:
        return bool(self.colors)

    def cycle(self, i: int) -> Color:
        """Color at ``i`` wrapping around the palette length."""
        return self.colors[i % len(self.colors)]

    def shuffled(self, rng: random.Random) -> "Palette":
        colors = list(self.colors)
        rng.shuffle(colors)
        return Palette(colors)

    def sample(self, rng: random.Random, count: int) -> List[Color]:
        """Up to ``count`` distinct entries, taken from a fresh shuffle."""
        if count < 1:
            raise InvalidArgumentError(f"Sample count must be >= 1, got {count}")
        return list(self.shuffled(rng).colors[:count])

    def or_default(self, default: "Palette") -> "Palette":
        return self if self.colors else default

    def to_hex(self) -> List[str]:
        return [c.to_hex() for c in self.colors]


# ---------------------------- Built-in palettes -----------------------------

VIBRANT = Palette([
    Color.from_hex("#ff3b30"),  # red
    Color.from_hex("#ff9500"),  # orange
    Color.from_hex("#ffcc00"),  # yellow
    Color.from_hex("#34c759"),  # green
    Color.from_hex("#007aff"),  # blue
    Color.from_hex("#af52de"),  # purple
    Color.from_hex("#ff2d55"),  # pink
    Color.from_hex("#32ade6"),  # cyan
    Color(0.9, 0.3, 0.4),
    Color(0.2, 0.7, 0.9),
    Color(0.8, 0.6, 0.2),
    Color(0.3, 0.9, 0.5),
])

PASTEL = Palette([
    Color(0.98, 0.82, 0.89),
    Color(0.8, 0.9, 0.95),
    Color(0.95, 0.95, 0.8),
    Color(0.9, 0.8, 0.95),
    Color(0.8, 0.95, 0.85),
    Color(0.95, 0.9, 0.8),
    Color(0.85, 0.8, 0.95),
    Color(0.8, 0.85, 0.95),
])

# pink, blue, green
DEFAULT_SELECTION = Palette([
    Color(0.95, 0.8, 0.9),
    Color(0.8, 0.9, 0.95),
    Color(0.9, 0.95, 0.8),
])


class PaletteSource(Enum):
    VIBRANT = "vibrant"
    PASTEL = "pastel"
    CUSTOM_IMAGE = "custom-image"
    CUSTOM_MANUAL = "custom-manual"


def resolve_palette(
    source: PaletteSource,
    image_palette: Optional[Palette] = None,
    custom_palette: Optional[Palette] = None,
) -> Palette:
    """Pick the palette for a generation pass, falling back when a custom one is empty."""
    if source is PaletteSource.VIBRANT:
        return VIBRANT
    if source is PaletteSource.PASTEL:
        return PASTEL
    if source is PaletteSource.CUSTOM_IMAGE:
        return (image_palette or Palette()).or_default(VIBRANT)
    if source is PaletteSource.CUSTOM_MANUAL:
        return (custom_palette or Palette()).or_default(DEFAULT_SELECTION)
    raise InvalidArgumentError(f"Unknown palette source: {source!r}")
