"""
geometry.py
===========

Points, rigid transforms and paths.

Paths are plain point lists with a closed flag. Arcs are flattened into line
segments when they are added, so the rasterizer only ever sees polygons and
polylines. Motif code builds paths in its own local frame and hands them to
``Path.transformed`` together with a ``Transform`` describing where that
frame sits on the canvas.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

Point = Tuple[float, float]

# Maximum distance (px) between a flattened arc and the true circle.
DEFAULT_TOLERANCE = 0.25


def rotate_points(points: Sequence[Point], angle_rad: float) -> List[Point]:
    ca, sa = math.cos(angle_rad), math.sin(angle_rad)
    return [(x*ca - y*sa, x*sa + y*ca) for (x, y) in points]


def translate_points(points: Sequence[Point], dx: float, dy: float) -> List[Point]:
    return [(x+dx, y+dy) for (x, y) in points]


def arc_steps(radius: float, sweep: float, tolerance: float = DEFAULT_TOLERANCE) -> int:
    """Number of chords needed to keep an arc within ``tolerance`` pixels."""
    sweep = abs(sweep)
    if radius <= tolerance:
        return max(1, int(math.ceil(sweep / (math.pi / 2))))
    max_step = 2 * math.acos(1 - tolerance / radius)
    return max(1, int(math.ceil(sweep / max_step)))


@dataclass(frozen=True)
class Transform:
    """Rotation about the local origin followed by a translation.

    A local point ``p`` maps to ``R(rotation) @ p + (tx, ty)``.
    """
    tx: float = 0.0
    ty: float = 0.0
    rotation: float = 0.0

    @classmethod
    def at(cls, x: float, y: float, rotation: float = 0.0) -> "Transform":
        return cls(x, y, rotation)

    def then_rotate(self, angle: float) -> "Transform":
        """Rotate the local frame by ``angle``; the origin stays put."""
        return Transform(self.tx, self.ty, self.rotation + angle)

    def then_translate(self, dx: float, dy: float) -> "Transform":
        """Move the local origin by (dx, dy) measured in local coordinates."""
        (ox, oy), = rotate_points([(dx, dy)], self.rotation)
        return Transform(self.tx + ox, self.ty + oy, self.rotation)

    def compose(self, inner: "Transform") -> "Transform":
        """Transform equivalent to applying ``inner`` first, then ``self``."""
        return self.then_translate(inner.tx, inner.ty).then_rotate(inner.rotation)

    def apply(self, points: Sequence[Point]) -> List[Point]:
        return translate_points(rotate_points(points, self.rotation), self.tx, self.ty)

    def apply_point(self, p: Point) -> Point:
        return self.apply([p])[0]


IDENTITY = Transform()


class Path:
    """An ordered polyline, optionally closed."""

    def __init__(self, points: Optional[Sequence[Point]] = None, closed: bool = False,
                 tolerance: float = DEFAULT_TOLERANCE):
        self.points: List[Point] = [(float(x), float(y)) for (x, y) in (points or [])]
        self.closed = closed
        self.tolerance = tolerance

    def __repr__(self) -> str:
        return f"Path({len(self.points)} points, closed={self.closed})"

    def __len__(self) -> int:
        return len(self.points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.points == other.points and self.closed == other.closed

    # -- building -------------------------------------------------------------

    def move_to(self, p: Point) -> "Path":
        if self.points:
            raise ValueError("move_to is only valid on an empty path")
        self.points.append((float(p[0]), float(p[1])))
        return self

    def line_to(self, p: Point) -> "Path":
        self.points.append((float(p[0]), float(p[1])))
        return self

    def arc_to(self, center: Point, radius: float, start: float, end: float,
               clockwise: bool = True) -> "Path":
        """Append an arc from ``start`` to ``end`` (radians).

        ``clockwise`` follows screen coordinates (y grows downward), so a
        clockwise arc has increasing angles. A line is drawn from the current
        point to the arc start, as a 2D drawing API would.
        """
        cx, cy = center
        if clockwise:
            while end < start:
                end += 2 * math.pi
        else:
            while end > start:
                end -= 2 * math.pi
        sweep = end - start
        n = arc_steps(radius, sweep, self.tolerance)
        for k in range(n + 1):
            a = start + sweep * k / n
            self.points.append((cx + math.cos(a) * radius, cy + math.sin(a) * radius))
        return self

    def close(self) -> "Path":
        self.closed = True
        return self

    # -- shapes ---------------------------------------------------------------

    @classmethod
    def polygon(cls, points: Sequence[Point]) -> "Path":
        return cls(points, closed=True)

    @classmethod
    def polyline(cls, points: Sequence[Point]) -> "Path":
        return cls(points, closed=False)

    @classmethod
    def segment(cls, start: Point, end: Point) -> "Path":
        return cls([start, end], closed=False)

    @classmethod
    def rectangle(cls, x: float, y: float, w: float, h: float) -> "Path":
        return cls.polygon([(x, y), (x + w, y), (x + w, y + h), (x, y + h)])

    @classmethod
    def wedge(cls, center: Point, radius: float, start: float, end: float,
              tolerance: float = DEFAULT_TOLERANCE) -> "Path":
        """Pie slice: center, arc from ``start`` to ``end``, back to center."""
        p = cls(tolerance=tolerance).move_to(center)
        return p.arc_to(center, radius, start, end).close()

    @classmethod
    def circle(cls, center: Point, radius: float,
               tolerance: float = DEFAULT_TOLERANCE) -> "Path":
        cx, cy = center
        n = max(8, arc_steps(radius, 2 * math.pi, tolerance))
        pts = [(cx + math.cos(2*math.pi*k/n) * radius, cy + math.sin(2*math.pi*k/n) * radius)
               for k in range(n)]
        return cls(pts, closed=True, tolerance=tolerance)

    @classmethod
    def ellipse(cls, x: float, y: float, w: float, h: float,
                tolerance: float = DEFAULT_TOLERANCE) -> "Path":
        """Ellipse inscribed in the rectangle (x, y, w, h)."""
        rx, ry = w / 2, h / 2
        n = max(8, arc_steps(max(rx, ry), 2 * math.pi, tolerance))
        pts = [(x + rx + math.cos(2*math.pi*k/n) * rx, y + ry + math.sin(2*math.pi*k/n) * ry)
               for k in range(n)]
        return cls(pts, closed=True, tolerance=tolerance)

    # -- queries --------------------------------------------------------------

    def transformed(self, transform: Transform) -> "Path":
        return Path(transform.apply(self.points), closed=self.closed, tolerance=self.tolerance)

    def bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y); raises on an empty path."""
        if not self.points:
            raise ValueError("Empty path has no bounds")
        xs, ys = zip(*self.points)
        return (min(xs), min(ys), max(xs), max(ys))
