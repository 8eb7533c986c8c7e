"""
color.py
========

The ``Color`` value type used everywhere in the engine: four float channels
(red, green, blue, alpha) in [0, 1]. Colors are immutable and compare by
exact value, so they can be used as dict keys and in sets.
"""

from dataclasses import dataclass
from typing import Tuple

from .errors import InvalidArgumentError


def hex_to_rgba(hex_color: str) -> Tuple[int, int, int, int]:
    """Convert '#RRGGBB', '#RRGGBBAA' or shorthand '#RGB' to 8-bit (r,g,b,a)."""
    h = hex_color.strip().lstrip("#")
    if len(h) == 3:
        h = "".join(c*2 for c in h)
    if len(h) == 6:
        h += "ff"
    if len(h) != 8:
        raise InvalidArgumentError(f"Invalid hex color: {hex_color!r}")
    try:
        r = int(h[0:2], 16)
        g = int(h[2:4], 16)
        b = int(h[4:6], 16)
        a = int(h[6:8], 16)
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid hex color: {hex_color!r}") from e
    return (r, g, b, a)


def _to_byte(v: float) -> int:
    return int(round(v * 255))


@dataclass(frozen=True)
class Color:
    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            v = getattr(self, name)
            if not 0.0 <= v <= 1.0:
                raise InvalidArgumentError(f"Color channel {name}={v!r} is outside [0, 1]")

    @classmethod
    def from_hex(cls, hex_color: str) -> "Color":
        r, g, b, a = hex_to_rgba(hex_color)
        return cls.from_rgba8((r, g, b, a))

    @classmethod
    def from_rgba8(cls, rgba: Tuple[int, ...]) -> "Color":
        """Build from an (r, g, b) or (r, g, b, a) tuple of 0..255 ints."""
        if len(rgba) == 3:
            rgba = tuple(rgba) + (255,)
        if len(rgba) != 4:
            raise InvalidArgumentError(f"Expected 3 or 4 channels, got {len(rgba)}")
        r, g, b, a = rgba
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    def to_rgba8(self) -> Tuple[int, int, int, int]:
        return (_to_byte(self.red), _to_byte(self.green), _to_byte(self.blue), _to_byte(self.alpha))

    def to_rgb8(self) -> Tuple[int, int, int]:
        return self.to_rgba8()[:3]

    def to_hex(self) -> str:
        r, g, b, a = self.to_rgba8()
        if a == 255:
            return f"#{r:02x}{g:02x}{b:02x}"
        return f"#{r:02x}{g:02x}{b:02x}{a:02x}"

    def with_alpha(self, alpha: float) -> "Color":
        return Color(self.red, self.green, self.blue, alpha)

    def to_dict(self) -> dict:
        return {"red": self.red, "green": self.green, "blue": self.blue, "opacity": self.alpha}

    @classmethod
    def from_dict(cls, d: dict) -> "Color":
        return cls(float(d["red"]), float(d["green"]), float(d["blue"]), float(d.get("opacity", 1.0)))


WHITE = Color(1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0)
