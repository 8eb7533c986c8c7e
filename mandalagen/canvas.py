"""
canvas.py
=========

A small rasterizer on top of Pillow.

``Canvas`` wraps a full-size RGBA ``Image`` and offers the handful of
operations the composers need: solid and gradient path fills, stroked paths
and a full-canvas gradient overlay combined through a blend mode. Every
primitive renders into a mask that only covers the path's bounding box and is
alpha-composited back, so the cost of a shape is proportional to its size
rather than to the canvas area. Gradients and blend modes are evaluated with
NumPy on those crops.

Rendering is fully deterministic: the same calls on the same canvas produce
the same bytes.
"""

import io
import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from .color import Color
from .errors import InvalidArgumentError, InvalidSizeError
from .geometry import Path, Point

logger = logging.getLogger(__name__)

ColorStop = Tuple[float, Color]


# ---------------------------- Sizes & images ---------------------------------

@dataclass(frozen=True)
class CanvasSize:
    width: int
    height: int

    def __post_init__(self) -> None:
        # Fractional pixel sizes are truncated.
        object.__setattr__(self, "width", int(self.width))
        object.__setattr__(self, "height", int(self.height))

    @property
    def min_dim(self) -> int:
        return min(self.width, self.height)

    @property
    def area(self) -> int:
        return self.width * self.height

    def as_tuple(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def validate(self) -> "CanvasSize":
        if self.width <= 0 or self.height <= 0:
            raise InvalidSizeError(f"Canvas size must be positive, got {self.width}x{self.height}")
        return self

    @classmethod
    def parse(cls, s: str) -> "CanvasSize":
        """Parse 'WIDTHxHEIGHT' (e.g. '1242x2688')."""
        if "x" not in s.lower():
            raise InvalidArgumentError(f"Size must look like 1242x2688, got {s!r}")
        a, b = s.lower().split("x", 1)
        try:
            return cls(int(a), int(b))
        except ValueError as e:
            raise InvalidArgumentError(f"Size must look like 1242x2688, got {s!r}") from e

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class RasterImage:
    """The finished artwork: an RGBA pixel buffer and its size."""
    size: CanvasSize
    image: Image.Image

    def tobytes(self) -> bytes:
        return self.image.tobytes()

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        return self.image.getpixel((x, y))

    def to_array(self) -> np.ndarray:
        return np.asarray(self.image)

    def to_png(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, format="PNG", optimize=True)
        return buffer.getvalue()

    def save(self, path: str) -> str:
        self.image.save(path, format="PNG", optimize=True)
        return path

    @classmethod
    def from_png(cls, data: bytes) -> "RasterImage":
        img = Image.open(io.BytesIO(data))
        img.load()
        img = img.convert("RGBA")
        return cls(CanvasSize(*img.size), img)


# ---------------------------- Gradients & blending ---------------------------

def validate_stops(stops: Sequence[ColorStop]) -> None:
    if not stops:
        raise InvalidArgumentError("A gradient needs at least one color stop")
    last = -1.0
    for pos, _ in stops:
        if not 0.0 <= pos <= 1.0:
            raise InvalidArgumentError(f"Stop position {pos!r} is outside [0, 1]")
        if pos <= last:
            raise InvalidArgumentError("Stop positions must be strictly increasing")
        last = pos


def interpolate_stops(stops: Sequence[ColorStop], t: np.ndarray) -> np.ndarray:
    """Map gradient parameters ``t`` to float RGBA in [0, 1], shape t.shape + (4,)."""
    positions = [p for p, _ in stops]
    channels = [(c.red, c.green, c.blue, c.alpha) for _, c in stops]
    out = np.empty(t.shape + (4,), dtype=np.float32)
    for k in range(4):
        out[..., k] = np.interp(t, positions, [ch[k] for ch in channels])
    return out


def _blend_normal(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    return cs


def _blend_multiply(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    return cb * cs


def _blend_screen(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    return cb + cs - cb * cs


def _blend_hard_light(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    return np.where(cs <= 0.5, _blend_multiply(cb, 2 * cs), _blend_screen(cb, 2 * cs - 1))


def _blend_overlay(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    return _blend_hard_light(cs, cb)


def _blend_soft_light(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    """W3C compositing soft-light: darkens or lightens depending on the source."""
    d = np.where(cb <= 0.25, ((16 * cb - 12) * cb + 4) * cb, np.sqrt(cb))
    dark = cb - (1 - 2 * cs) * cb * (1 - cb)
    light = cb + (2 * cs - 1) * (d - cb)
    return np.where(cs <= 0.5, dark, light)


BLEND_MODES: Dict[str, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    "normal": _blend_normal,
    "multiply": _blend_multiply,
    "screen": _blend_screen,
    "overlay": _blend_overlay,
    "soft-light": _blend_soft_light,
}


def blend_function(name: str) -> Callable[[np.ndarray, np.ndarray], np.ndarray]:
    key = name.strip().lower().replace("_", "-")
    try:
        return BLEND_MODES[key]
    except KeyError:
        raise InvalidArgumentError(f"Unknown blend mode: {name!r}. Choose from {list(BLEND_MODES)}") from None


def composite_blend(base: np.ndarray, source: np.ndarray,
                    blend: Callable[[np.ndarray, np.ndarray], np.ndarray]) -> np.ndarray:
    """Source-over compositing with a separable blend function, float RGBA in [0, 1]."""
    cb, ab = base[..., :3], base[..., 3:4]
    cs, as_ = source[..., :3], source[..., 3:4]
    mixed = (1 - ab) * cs + ab * np.clip(blend(cb, cs), 0.0, 1.0)
    ao = as_ + ab * (1 - as_)
    premul = as_ * mixed + (1 - as_) * ab * cb
    co = np.divide(premul, ao, out=np.zeros_like(premul), where=ao > 0)
    return np.concatenate([co, ao], axis=-1)


# ---------------------------- Canvas -----------------------------------------

class Canvas:
    """Mutable RGBA drawing surface."""

    def __init__(self, image: Image.Image):
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        self._image = image

    @classmethod
    def create(cls, size: CanvasSize) -> "Canvas":
        size.validate()
        logger.debug("Allocating %s canvas", size)
        return cls(Image.new("RGBA", size.as_tuple(), (0, 0, 0, 0)))

    @property
    def size(self) -> CanvasSize:
        return CanvasSize(*self._image.size)

    def fill_background(self, color: Color) -> None:
        self._image.paste(color.to_rgba8(), (0, 0) + self._image.size)

    # -- masks ----------------------------------------------------------------

    def _crop_box(self, bounds: Tuple[float, float, float, float],
                  pad: float = 0.0) -> Optional[Tuple[int, int, int, int]]:
        W, H = self._image.size
        x0 = max(0, int(math.floor(bounds[0] - pad)))
        y0 = max(0, int(math.floor(bounds[1] - pad)))
        x1 = min(W, int(math.ceil(bounds[2] + pad)) + 1)
        y1 = min(H, int(math.ceil(bounds[3] + pad)) + 1)
        if x1 <= x0 or y1 <= y0:
            return None
        return (x0, y0, x1, y1)

    def _fill_mask(self, path: Path) -> Optional[Tuple[Image.Image, int, int]]:
        if len(path.points) < 3:
            return None
        box = self._crop_box(path.bounds())
        if box is None:
            return None
        x0, y0, x1, y1 = box
        mask = Image.new("L", (x1 - x0, y1 - y0), 0)
        ImageDraw.Draw(mask).polygon([(x - x0, y - y0) for (x, y) in path.points], fill=255)
        return mask, x0, y0

    def _stroke_mask(self, path: Path, width: float) -> Optional[Tuple[Image.Image, int, int]]:
        if len(path.points) < 2:
            return None
        box = self._crop_box(path.bounds(), pad=width / 2 + 1)
        if box is None:
            return None
        x0, y0, x1, y1 = box
        pts = [(x - x0, y - y0) for (x, y) in path.points]
        if path.closed:
            pts.append(pts[0])
        mask = Image.new("L", (x1 - x0, y1 - y0), 0)
        ImageDraw.Draw(mask).line(pts, fill=255, width=max(1, int(round(width))), joint="curve")
        return mask, x0, y0

    def _composite_solid(self, mask: Image.Image, x0: int, y0: int, color: Color) -> None:
        r, g, b, a = color.to_rgba8()
        if a < 255:
            mask = mask.point(lambda v: (v * a + 127) // 255)
        layer = Image.new("RGBA", mask.size, (r, g, b, 0))
        layer.putalpha(mask)
        self._image.alpha_composite(layer, dest=(x0, y0))

    def _composite_array(self, mask: Image.Image, x0: int, y0: int, rgba: np.ndarray) -> None:
        coverage = np.asarray(mask, dtype=np.float32) / 255.0
        rgba = rgba.copy()
        rgba[..., 3] *= coverage
        layer = Image.fromarray(np.clip(rgba * 255.0 + 0.5, 0, 255).astype(np.uint8))
        self._image.alpha_composite(layer, dest=(x0, y0))

    @staticmethod
    def _pixel_grid(x0: int, y0: int, w: int, h: int) -> Tuple[np.ndarray, np.ndarray]:
        xs = np.arange(x0, x0 + w, dtype=np.float32) + 0.5
        ys = np.arange(y0, y0 + h, dtype=np.float32) + 0.5
        return np.meshgrid(xs, ys)

    # -- drawing --------------------------------------------------------------

    def fill_path(self, path: Path, color: Color) -> None:
        m = self._fill_mask(path)
        if m is not None:
            self._composite_solid(*m, color)

    def stroke_path(self, path: Path, color: Color, width: float) -> None:
        m = self._stroke_mask(path, width)
        if m is not None:
            self._composite_solid(*m, color)

    def fill_path_with_linear_gradient(self, path: Path, stops: Sequence[ColorStop],
                                       start: Point, end: Point) -> None:
        validate_stops(stops)
        m = self._fill_mask(path)
        if m is None:
            return
        mask, x0, y0 = m
        gx, gy = self._pixel_grid(x0, y0, *mask.size)
        self._composite_array(mask, x0, y0, interpolate_stops(stops, _linear_t(gx, gy, start, end)))

    def fill_path_with_radial_gradient(self, path: Path, stops: Sequence[ColorStop],
                                       center: Point, start_radius: float, end_radius: float) -> None:
        validate_stops(stops)
        m = self._fill_mask(path)
        if m is None:
            return
        mask, x0, y0 = m
        gx, gy = self._pixel_grid(x0, y0, *mask.size)
        dist = np.hypot(gx - center[0], gy - center[1])
        span = end_radius - start_radius
        if span == 0:
            t = np.where(dist < start_radius, 0.0, 1.0).astype(np.float32)
        else:
            t = np.clip((dist - start_radius) / span, 0.0, 1.0)
        self._composite_array(mask, x0, y0, interpolate_stops(stops, t))

    def composite_overlay(self, stops: Sequence[ColorStop], start: Point, end: Point,
                          blend_mode: str = "soft-light", opacity: float = 1.0) -> None:
        """Blend a full-canvas linear gradient into the surface."""
        validate_stops(stops)
        if not 0.0 <= opacity <= 1.0:
            raise InvalidArgumentError(f"Opacity {opacity!r} is outside [0, 1]")
        blend = blend_function(blend_mode)
        W, H = self._image.size
        gx, gy = self._pixel_grid(0, 0, W, H)
        source = interpolate_stops(stops, _linear_t(gx, gy, start, end))
        source[..., 3] *= opacity
        base = np.asarray(self._image, dtype=np.float32) / 255.0
        out = composite_blend(base, source, blend)
        self._image = Image.fromarray(np.clip(out * 255.0 + 0.5, 0, 255).astype(np.uint8))

    def export(self) -> RasterImage:
        return RasterImage(self.size, self._image.copy())


def _linear_t(gx: np.ndarray, gy: np.ndarray, start: Point, end: Point) -> np.ndarray:
    dx, dy = end[0] - start[0], end[1] - start[1]
    denom = dx * dx + dy * dy
    if denom == 0:
        return np.zeros_like(gx)
    t = ((gx - start[0]) * dx + (gy - start[1]) * dy) / denom
    return np.clip(t, 0.0, 1.0)
