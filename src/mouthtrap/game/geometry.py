"""Axis-aligned boxes and the overlap test used for collisions."""

from typing import NamedTuple


class Box(NamedTuple):
    """Axis-aligned rectangle in playfield pixels (y grows downwards)."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


def overlaps(a: Box, b: Box) -> bool:
    """Return True if the boxes intersect on both axes.

    Comparisons are strict, so boxes that only share an edge do not overlap.
    """
    return a.left < b.right and a.right > b.left and a.top < b.bottom and a.bottom > b.top
