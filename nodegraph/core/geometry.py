"""Plain geometric value types shared by the graph model and the layouts."""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class SinglePolarCoordinates:
    """Polar coordinates of one vertex.

    ``r`` is normalized (0 to 1) or absolute depending on the layout that reads
    it. ``angle`` is in degrees, 0 pointing along +X and 90 along +Y.
    """

    r: float
    angle: float

    def __post_init__(self):
        if not (math.isfinite(self.r) and math.isfinite(self.angle)):
            raise ValueError(f"Polar coordinates must be finite, got r={self.r}, angle={self.angle}.")


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle in drawing units, ``y`` growing downwards."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_ltrb(cls, left, top, right, bottom) -> "Rectangle":
        return cls(float(left), float(top), float(right - left), float(bottom - top))

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def inflate(self, dx: float, dy: float) -> "Rectangle":
        """Grow (or shrink, for negative amounts) each side by ``dx``/``dy``."""
        return Rectangle(self.x - dx, self.y - dy, self.width + 2 * dx, self.height + 2 * dy)

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom
