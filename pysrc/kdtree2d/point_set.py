# point_set.py
"""PointSet - brute-force point collection with the same operations as KdTree."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from ._base_index import _BasePointIndex
from ._geometry import Point2D, RectHV


class PointSet(_BasePointIndex):
    """
    Linear-scan point collection.

    Every query looks at every point. Useful as a correctness oracle for
    KdTree and for small inputs. Points are scanned in (y, x) order, so
    nearest() returns the first of several equidistant points in that order.

    Example:
        ```python
        ps = PointSet()
        ps.insert((0.2, 0.3))
        assert ps.nearest((0.0, 0.0)) == Point2D(0.2, 0.3)
        ```
    """

    __slots__ = ("_points", "_sorted")

    def __init__(self):
        self._points: set[Point2D] = set()
        self._sorted: list[Point2D] | None = []

    def _config(self) -> dict[str, Any]:
        return {}

    def _ordered(self) -> list[Point2D]:
        if self._sorted is None:
            self._sorted = sorted(self._points, key=Point2D.sort_key)
        return self._sorted

    def _insert_point(self, p: Point2D) -> None:
        if p not in self._points:
            self._points.add(p)
            self._sorted = None

    def _contains_point(self, p: Point2D) -> bool:
        return p in self._points

    def _range_points(self, rect: RectHV) -> list[Point2D]:
        return [p for p in self._ordered() if rect.contains(p)]

    def _nearest_point(self, p: Point2D) -> Point2D | None:
        best = None
        best_dist = float("inf")
        for q in self._ordered():
            dist = q.distance_squared_to(p)
            if dist < best_dist:
                best = q
                best_dist = dist
        return best

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point2D]:
        """Iterate over points in (y, x) order."""
        return iter(list(self._ordered()))
