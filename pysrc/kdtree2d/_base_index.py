# _base_index.py
"""Base class shared by the 2d-tree and the brute-force point set."""

from __future__ import annotations

import pickle
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any

from ._common import PointLike, RectLike, as_point, as_rect
from ._geometry import Point2D, RectHV


class _BasePointIndex(ABC):
    """
    Shared public surface for point indexes over the plane.

    Argument validation happens here, before any hook runs, so a rejected
    argument never mutates the index. Concrete subclasses must implement:
      - _insert_point(p)
      - _contains_point(p)
      - _range_points(rect)
      - _nearest_point(p)
      - _config()
      - __iter__ and __len__
    """

    __slots__ = ()

    # ---- Required hooks for subclasses ----

    @abstractmethod
    def _insert_point(self, p: Point2D) -> None:
        """Store p unless an equal point is already present."""

    @abstractmethod
    def _contains_point(self, p: Point2D) -> bool:
        """Return True if a point equal to p is stored."""

    @abstractmethod
    def _range_points(self, rect: RectHV) -> list[Point2D]:
        """Return every stored point inside rect."""

    @abstractmethod
    def _nearest_point(self, p: Point2D) -> Point2D | None:
        """Return the stored point closest to p, or None when empty."""

    @abstractmethod
    def _config(self) -> dict[str, Any]:
        """Constructor keyword arguments needed to rebuild an empty instance."""

    @abstractmethod
    def __iter__(self) -> Iterator[Point2D]:
        """Iterate over all stored points."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of stored points."""

    # ---- Public operations ----

    def insert(self, point: PointLike) -> None:
        """
        Add a point. Inserting a point that is already stored is a no-op.

        Args:
            point: Point2D or (x, y).

        Raises:
            InvalidArgumentError: If point is None.
            ValueError: If the index has a bounded domain (KdTree) and point
                lies outside it. The index is left unchanged.
        """
        self._insert_point(as_point(point))

    def contains(self, point: PointLike) -> bool:
        """
        Check whether a point with exactly these coordinates is stored.

        Raises:
            InvalidArgumentError: If point is None.
        """
        return self._contains_point(as_point(point))

    def range(self, rect: RectLike) -> list[Point2D]:
        """
        Return all stored points inside an axis-aligned rectangle (inclusive).

        Args:
            rect: RectHV or (min_x, min_y, max_x, max_y).

        Returns:
            List of Point2D. Order is implementation-defined.

        Raises:
            InvalidArgumentError: If rect is None.

        Example:
            ```python
            for p in index.range((0.0, 0.0, 1.0, 0.5)):
                print(p.x, p.y)
            ```
        """
        return self._range_points(as_rect(rect))

    def nearest(self, point: PointLike) -> Point2D | None:
        """
        Return the stored point closest to the query point.

        Returns:
            The nearest Point2D, or None if the index is empty.

        Raises:
            InvalidArgumentError: If point is None.
        """
        return self._nearest_point(as_point(point))

    def size(self) -> int:
        return len(self)

    def is_empty(self) -> bool:
        return len(self) == 0

    # ---- NumPy helpers ----

    def range_np(self, rect: RectLike) -> Any:
        """
        Return all stored points inside a rectangle as a NumPy array.

        Returns:
            NDArray[np.float64] with shape (N, 2).

        Raises:
            InvalidArgumentError: If rect is None.
            ImportError: If NumPy is not installed.
        """
        import numpy as np

        found = self.range(rect)
        out = np.empty((len(found), 2), dtype=np.float64)
        for i, p in enumerate(found):
            out[i, 0] = p.x
            out[i, 1] = p.y
        return out

    # ---- Utilities ----

    def __contains__(self, point: PointLike) -> bool:
        """
        Check membership with the ``in`` operator.

        Example:
            ```python
            index.insert((0.5, 0.5))
            assert (0.5, 0.5) in index
            ```
        """
        return self.contains(point)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={len(self)})"

    # ---- Serialization ----

    def to_bytes(self) -> bytes:
        """
        Serialize the index to bytes.

        Points are stored in iteration order, so rebuilding by reinsertion
        reproduces the same structure.

        Returns:
            Bytes representing the serialized index.
        """
        data = {
            "kind": type(self).__name__,
            "config": self._config(),
            "points": [p.as_tuple() for p in self],
        }
        return pickle.dumps(data)

    @classmethod
    def from_bytes(cls, data: bytes):
        """
        Deserialize an index from bytes.

        Args:
            data: Bytes from to_bytes().

        Returns:
            A new instance.

        Raises:
            TypeError: If the bytes were produced by a different index class.
        """
        in_dict = pickle.loads(data)

        if in_dict["kind"] != cls.__name__:
            raise TypeError(
                f"cannot load a {in_dict['kind']} snapshot into {cls.__name__}"
            )

        index = cls(**in_dict["config"])
        for x, y in in_dict["points"]:
            index._insert_point(Point2D(x, y))
        return index
