# _geometry.py
"""Immutable planar value types: points and axis-aligned rectangles."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point2D:
    """
    A point in the plane.

    Attributes:
        x: X coordinate.
        y: Y coordinate.
    """

    x: float
    y: float

    def distance_squared_to(self, other: Point2D) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance_to(self, other: Point2D) -> float:
        return math.sqrt(self.distance_squared_to(other))

    def sort_key(self) -> tuple[float, float]:
        """Key ordering points by y, then by x."""
        return (self.y, self.x)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class RectHV:
    """
    Closed axis-aligned rectangle [xmin, xmax] x [ymin, ymax].

    Raises:
        ValueError: If xmin > xmax or ymin > ymax.
    """

    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self) -> None:
        if self.xmin > self.xmax or self.ymin > self.ymax:
            raise ValueError(
                f"invalid rectangle ({self.xmin}, {self.ymin}, {self.xmax}, {self.ymax})"
            )

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    def contains(self, p: Point2D) -> bool:
        return self.xmin <= p.x <= self.xmax and self.ymin <= p.y <= self.ymax

    def intersects(self, other: RectHV) -> bool:
        return (
            self.xmax >= other.xmin
            and self.ymax >= other.ymin
            and other.xmax >= self.xmin
            and other.ymax >= self.ymin
        )

    def distance_squared_to(self, p: Point2D) -> float:
        """Squared distance from p to the closest point of the rectangle (0 if inside)."""
        dx = 0.0
        dy = 0.0
        if p.x < self.xmin:
            dx = p.x - self.xmin
        elif p.x > self.xmax:
            dx = p.x - self.xmax
        if p.y < self.ymin:
            dy = p.y - self.ymin
        elif p.y > self.ymax:
            dy = p.y - self.ymax
        return dx * dx + dy * dy

    def distance_to(self, p: Point2D) -> float:
        return math.sqrt(self.distance_squared_to(p))

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.xmin, self.ymin, self.xmax, self.ymax)


UNIT_SQUARE = RectHV(0.0, 0.0, 1.0, 1.0)
