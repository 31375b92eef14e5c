# _node.py
"""Tree node and split-axis types for the 2d-tree."""

from __future__ import annotations

from enum import Enum

from ._geometry import Point2D, RectHV


class Axis(Enum):
    """Which coordinate a node compares on when routing a point to a child."""

    VERTICAL = "vertical"  # splits on x
    HORIZONTAL = "horizontal"  # splits on y

    def flip(self) -> Axis:
        return Axis.HORIZONTAL if self is Axis.VERTICAL else Axis.VERTICAL

    def coord(self, p: Point2D) -> float:
        return p.x if self is Axis.VERTICAL else p.y

    def less(self, p: Point2D, q: Point2D) -> bool:
        """True if p goes to the left of q. Ties go right."""
        return self.coord(p) < self.coord(q)


class _Node:
    """
    One stored point plus the region its subtree is confined to.

    Attributes:
        point: The stored point.
        axis: Split axis of this node.
        bounds: Bounding rectangle of this node's subtree. Fixed at creation.
        left: Subtree of points strictly less along axis.
        right: Subtree of the remaining points.
    """

    __slots__ = ("axis", "bounds", "left", "point", "right")

    def __init__(self, point: Point2D, axis: Axis, bounds: RectHV):
        self.point = point
        self.axis = axis
        self.bounds = bounds
        self.left: _Node | None = None
        self.right: _Node | None = None

    def child_bounds(self, p: Point2D) -> RectHV:
        """Half of this node's bounds, cut by its splitting line, that holds p."""
        b = self.bounds
        if self.axis is Axis.VERTICAL:
            x = self.point.x
            if p.x < x:
                return RectHV(b.xmin, b.ymin, x, b.ymax)
            return RectHV(x, b.ymin, b.xmax, b.ymax)
        y = self.point.y
        if p.y < y:
            return RectHV(b.xmin, b.ymin, b.xmax, y)
        return RectHV(b.xmin, y, b.xmax, b.ymax)

    def make_child(self, p: Point2D) -> _Node:
        return _Node(p, self.axis.flip(), self.child_bounds(p))
