"""Integer points and axis-aligned boxes used by schematic objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass
class Point:
    """A mutable integer point."""

    x: int = 0
    y: int = 0

    def translate(self, dx: Union[int, "Point"], dy: Optional[int] = None) -> "Point":
        """Move the point in place and return it.

        Accepts either two offsets or another point used as an offset.
        """
        if isinstance(dx, Point):
            if dy is not None:
                raise TypeError("translate() takes a Point or two integers")
            dx, dy = dx.x, dx.y
        elif dy is None:
            raise TypeError("translate() needs both dx and dy")
        self.x += dx
        self.y += dy
        return self

    def __str__(self) -> str:
        return f"<Point {self.x} {self.y}>"


class Box:
    """An axis-aligned rectangle with integer corners.

    ``Box()`` is the empty box. ``Box(x1, y1, x2, y2)`` orders the corners
    so that ``x1 <= x2`` and ``y1 <= y2``.
    """

    __slots__ = ("x1", "y1", "x2", "y2")

    def __init__(self, *coords: int) -> None:
        if not coords:
            self.x1, self.y1, self.x2, self.y2 = 1, 1, -1, -1
            return
        if len(coords) != 4:
            raise TypeError("Box() takes no arguments or exactly four coordinates")
        x1, y1, x2, y2 = coords
        self.x1, self.x2 = min(x1, x2), max(x1, x2)
        self.y1, self.y2 = min(y1, y2), max(y1, y2)

    @classmethod
    def _raw(cls, x1: int, y1: int, x2: int, y2: int) -> "Box":
        box = cls()
        box.x1, box.y1, box.x2, box.y2 = x1, y1, x2, y2
        return box

    def copy(self) -> "Box":
        """Return an independent copy of this box."""
        return Box._raw(self.x1, self.y1, self.x2, self.y2)

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1

    def is_empty(self) -> bool:
        """True when the box covers no area at all."""
        return self.x1 > self.x2 or self.y1 > self.y2

    def intersects(self, other: "Box") -> bool:
        """Tell whether two boxes overlap.

        Boxes are only considered apart when they are separated on both axes.
        """
        if self.is_empty() or other.is_empty():
            return False
        apart_x = self.x2 < other.x1 or self.x1 > other.x2
        apart_y = self.y2 < other.y1 or self.y1 > other.y2
        return not (apart_x and apart_y)

    def intersection(self, other: "Box") -> "Box":
        """Return the common part of two boxes, or an empty box."""
        if not self.intersects(other):
            return Box()
        return Box(
            max(self.x1, other.x1),
            max(self.y1, other.y1),
            min(self.x2, other.x2),
            min(self.y2, other.y2),
        )

    def inflate(self, *args: int) -> "Box":
        """Grow the box in place and return it.

        Takes one margin for all sides, ``(dx, dy)``, or
        ``(dx1, dy1, dx2, dy2)`` for the low and high sides.
        """
        if len(args) == 1:
            dx1 = dy1 = dx2 = dy2 = args[0]
        elif len(args) == 2:
            dx1, dy1 = args
            dx2, dy2 = args
        elif len(args) == 4:
            dx1, dy1, dx2, dy2 = args
        else:
            raise TypeError("inflate() takes 1, 2 or 4 arguments")
        self.x1 -= dx1
        self.y1 -= dy1
        self.x2 += dx2
        self.y2 += dy2
        return self

    def translate(self, dx: Union[int, Point], dy: Optional[int] = None) -> "Box":
        """Move the box in place and return it."""
        if isinstance(dx, Point):
            if dy is not None:
                raise TypeError("translate() takes a Point or two integers")
            dx, dy = dx.x, dx.y
        elif dy is None:
            raise TypeError("translate() needs both dx and dy")
        self.x1 += dx
        self.x2 += dx
        self.y1 += dy
        self.y2 += dy
        return self

    def merge(self, other: "Box") -> "Box":
        """Extend the box in place to cover ``other`` and return it."""
        if other.is_empty():
            return self
        if self.is_empty():
            self.x1, self.y1, self.x2, self.y2 = other.x1, other.y1, other.x2, other.y2
        else:
            self.x1 = min(self.x1, other.x1)
            self.y1 = min(self.y1, other.y1)
            self.x2 = max(self.x2, other.x2)
            self.y2 = max(self.y2, other.y2)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Box):
            return NotImplemented
        return (self.x1, self.y1, self.x2, self.y2) == (other.x1, other.y1, other.x2, other.y2)

    def __hash__(self) -> int:
        return hash((self.x1, self.y1, self.x2, self.y2))

    def __repr__(self) -> str:
        return f"Box({self.x1}, {self.y1}, {self.x2}, {self.y2})"

    def __str__(self) -> str:
        return f"<Box {self.x1} {self.y1} {self.x2} {self.y2}/>"