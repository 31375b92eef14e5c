# kd_tree.py
"""KdTree - 2d-tree over points in an axis-aligned domain."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from ._base_index import _BasePointIndex
from ._common import Bounds, RectLike, validate_bounds
from ._geometry import UNIT_SQUARE, Point2D, RectHV
from ._logging import get_logger
from ._node import Axis, _Node

_log = get_logger("kd_tree")


class KdTree(_BasePointIndex):
    """
    Unbalanced 2d-tree supporting insertion, membership, range and nearest queries.

    Each node splits its region on x (VERTICAL) or y (HORIZONTAL), alternating
    with depth starting from VERTICAL at the root. Every node remembers the
    rectangle its subtree is confined to, which lets range and nearest
    queries skip whole subtrees.

    Performance characteristics:
        Inserts: average O(log n), worst case O(n) for sorted input
        Range queries: average O(sqrt(n) + k) where k is matches returned
        Nearest neighbor: average O(log n)

    Thread-safety:
        Instances are not thread-safe. Use external synchronization if you
        mutate the same tree from multiple threads.

    Args:
        bounds: Domain as RectHV or (min_x, min_y, max_x, max_y). Defaults to
            the unit square.

    Raises:
        ValueError: If bounds are invalid or inserts are out of bounds.

    Example:
        ```python
        tree = KdTree()
        tree.insert((0.7, 0.2))
        tree.insert(Point2D(0.5, 0.4))
        tree.range((0.0, 0.0, 1.0, 0.5))
        tree.nearest((0.41, 0.71))
        ```
    """

    __slots__ = ("_bounds", "_count", "_root")

    def __init__(self, bounds: RectLike = UNIT_SQUARE):
        self._bounds: RectHV = RectHV(*validate_bounds(bounds))
        self._root: _Node | None = None
        self._count = 0

    def _config(self) -> dict[str, Any]:
        return {"bounds": self._bounds.as_tuple()}

    @property
    def bounds(self) -> RectHV:
        return self._bounds

    # ---- Insertion & membership ----

    def _insert_point(self, p: Point2D) -> None:
        if not self._bounds.contains(p):
            bx0, by0, bx1, by1 = self._bounds.as_tuple()
            raise ValueError(
                f"Point {p.as_tuple()!r} is outside bounds ({bx0}, {by0}, {bx1}, {by1})"
            )

        if self._root is None:
            self._root = _Node(p, Axis.VERTICAL, self._bounds)
            self._count = 1
            return

        node = self._root
        while True:
            if node.point == p:
                _log.debug("ignoring duplicate point %r", p.as_tuple())
                return
            if node.axis.less(p, node.point):
                if node.left is None:
                    node.left = node.make_child(p)
                    break
                node = node.left
            else:
                if node.right is None:
                    node.right = node.make_child(p)
                    break
                node = node.right

        self._count += 1

    def _contains_point(self, p: Point2D) -> bool:
        node = self._root
        while node is not None:
            if node.point == p:
                return True
            node = node.left if node.axis.less(p, node.point) else node.right
        return False

    # ---- Queries ----

    def _range_points(self, rect: RectHV) -> list[Point2D]:
        found: list[Point2D] = []
        stack = [self._root] if self._root is not None else []
        visited = 0
        pruned = 0

        # Pre-order: node, then left subtree, then right subtree.
        while stack:
            node = stack.pop()
            visited += 1
            if rect.contains(node.point):
                found.append(node.point)
            if not rect.intersects(node.bounds):
                pruned += 1
                continue
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

        _log.debug(
            "range %r: %d found, %d nodes visited, %d subtrees pruned",
            rect.as_tuple(),
            len(found),
            visited,
            pruned,
        )
        return found

    def _nearest_point(self, p: Point2D) -> Point2D | None:
        if self._root is None:
            return None

        best = self._root.point
        best_dist = best.distance_squared_to(p)
        stack = [self._root]
        visited = 0
        pruned = 0

        # The near child is pushed last, so its whole subtree is searched
        # before the far child is checked against the tightened bound.
        while stack:
            node = stack.pop()
            if node.bounds.distance_squared_to(p) > best_dist:
                pruned += 1
                continue
            visited += 1

            dist = node.point.distance_squared_to(p)
            if dist < best_dist:
                best = node.point
                best_dist = dist

            if node.axis.less(p, node.point):
                near, far = node.left, node.right
            else:
                near, far = node.right, node.left
            if far is not None:
                stack.append(far)
            if near is not None:
                stack.append(near)

        _log.debug(
            "nearest %r -> %r: %d nodes visited, %d subtrees pruned",
            p.as_tuple(),
            best.as_tuple(),
            visited,
            pruned,
        )
        return best

    # ---- Utilities ----

    def __len__(self) -> int:
        """Return the number of points in the tree."""
        return self._count

    def _iter_nodes(self) -> Iterator[_Node]:
        stack = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def __iter__(self) -> Iterator[Point2D]:
        """
        Iterate over stored points in pre-order.

        Reinserting points in this order into an empty tree rebuilds the
        same shape.
        """
        return (node.point for node in self._iter_nodes())

    def get_all_node_boundaries(self) -> list[RectHV]:
        """
        Return every node's bounding rectangle in pre-order. Useful for visualization.
        """
        return [node.bounds for node in self._iter_nodes()]

    def get_all_splits(self) -> list[tuple[Point2D, Axis, Bounds]]:
        """
        Return (point, axis, bounds) for every node in pre-order.

        Each entry describes one splitting segment: the line through point
        along axis, clipped to bounds.
        """
        return [(n.point, n.axis, n.bounds.as_tuple()) for n in self._iter_nodes()]

    def height(self) -> int:
        """Return the number of levels in the tree (0 when empty)."""
        if self._root is None:
            return 0
        levels = 0
        frontier = [self._root]
        while frontier:
            levels += 1
            frontier = [
                child
                for node in frontier
                for child in (node.left, node.right)
                if child is not None
            ]
        return levels
