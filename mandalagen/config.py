"""
Engine configuration
====================

Tunable rendering constants and the canvas-size presets offered to callers.

Exports:
    EngineConfig: dataclass of rendering knobs shared by all composers.
    DEFAULT_CONFIG: the configuration used when none is supplied.
    CANVAS_PRESETS: preset name -> CanvasSize.
    DEFAULT_SIZE: the preset used when no size is given.
"""
from dataclasses import dataclass
from typing import Dict

from .canvas import CanvasSize, blend_function
from .color import WHITE, Color
from .errors import InvalidArgumentError


@dataclass(frozen=True)
class EngineConfig:
    background: Color = WHITE       # neutral system background
    overlay_opacity: float = 0.18   # mandala tint strength
    overlay_blend_mode: str = "soft-light"

    def __post_init__(self) -> None:
        if not 0.0 <= self.overlay_opacity <= 1.0:
            raise InvalidArgumentError(f"overlay_opacity {self.overlay_opacity!r} is outside [0, 1]")
        blend_function(self.overlay_blend_mode)


DEFAULT_CONFIG = EngineConfig()

CANVAS_PRESETS: Dict[str, CanvasSize] = {
    "iphone-xs-max": CanvasSize(1242, 2688),
    "iphone-12-pro": CanvasSize(1170, 2532),
    "iphone-se": CanvasSize(750, 1334),
}

DEFAULT_SIZE: CanvasSize = CANVAS_PRESETS["iphone-xs-max"]


def preset_size(name: str) -> CanvasSize:
    try:
        return CANVAS_PRESETS[name.strip().lower()]
    except KeyError:
        raise InvalidArgumentError(f"Unknown size preset: {name!r}. Choose from {sorted(CANVAS_PRESETS)}") from None
