from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Point:
    x: float
    y: float

    def offset_by(self, dx: float, dy: float) -> Point:
        return Point(self.x + dx, self.y + dy)


@dataclass(slots=True, frozen=True)
class Size:
    width: float
    height: float

    @classmethod
    def zero(cls) -> Size:
        return cls(0.0, 0.0)


@dataclass(slots=True, frozen=True)
class Rect:
    """Axis-aligned rectangle on a y-down canvas; ``origin`` is the top-left corner."""

    origin: Point
    size: Size

    @classmethod
    def from_bounds(cls, x: float, y: float, width: float, height: float) -> Rect:
        return cls(Point(x, y), Size(width, height))

    @property
    def min_x(self) -> float:
        return self.origin.x

    @property
    def mid_x(self) -> float:
        return self.origin.x + self.size.width / 2.0

    @property
    def max_x(self) -> float:
        return self.origin.x + self.size.width

    @property
    def min_y(self) -> float:
        return self.origin.y

    @property
    def mid_y(self) -> float:
        return self.origin.y + self.size.height / 2.0

    @property
    def max_y(self) -> float:
        return self.origin.y + self.size.height

    @property
    def center(self) -> Point:
        return Point(self.mid_x, self.mid_y)

    @property
    def top_center(self) -> Point:
        return Point(self.mid_x, self.min_y)

    def offset_by(self, dx: float, dy: float) -> Rect:
        return Rect(self.origin.offset_by(dx, dy), self.size)


@dataclass(slots=True, frozen=True)
class Segment:
    """A straight connector line from ``start`` to ``end``."""

    start: Point
    end: Point

    def offset_by(self, dx: float, dy: float) -> Segment:
        return Segment(self.start.offset_by(dx, dy), self.end.offset_by(dx, dy))
