"""Integer grid rectangle used for anchors and particle footprints."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Rect:
    """Axis-aligned rectangle on the integer grid.

    (x, y) is the top-left corner; w and h are the extent in cells.
    """

    x: int
    y: int
    w: int
    h: int

    def is_empty(self) -> bool:
        """A rectangle with no area never intersects anything."""
        return self.w <= 0 or self.h <= 0

    def has_intersection(self, other: Rect) -> bool:
        """Check whether two rectangles share at least one cell of area.

        Touching edges do not count as an intersection.
        """
        if self.is_empty() or other.is_empty():
            return False
        return (
            self.x < other.x + other.w
            and other.x < self.x + self.w
            and self.y < other.y + other.h
            and other.y < self.y + self.h
        )

    def translate(self, dx: int, dy: int) -> None:
        """Move the rectangle in place by (dx, dy)."""
        self.x += dx
        self.y += dy

    def copy(self) -> Rect:
        """Return an independent copy."""
        return Rect(self.x, self.y, self.w, self.h)
