# _common.py
"""Common utilities and argument validation shared across index implementations."""

from __future__ import annotations

from typing import Any, Union

from ._geometry import Point2D, RectHV

# Type aliases
Bounds = tuple[float, float, float, float]
"""Axis-aligned rectangle as (min_x, min_y, max_x, max_y)."""

Point = tuple[float, float]
"""2D point as (x, y)."""

PointLike = Union[Point2D, Point, Any]
"""Anything accepted where a point is expected: Point2D, (x, y) or a NumPy pair."""

RectLike = Union[RectHV, Bounds, Any]
"""Anything accepted where a rectangle is expected: RectHV or (min_x, min_y, max_x, max_y)."""


class InvalidArgumentError(TypeError):
    """Raised when a public index operation receives ``None`` for a point or rectangle."""


def _is_np_array(x: Any) -> bool:
    """
    Check if x is a NumPy array without importing NumPy.

    This allows accepting arrays without forcing NumPy as a hard dependency.

    Args:
        x: Object to check.

    Returns:
        True if x is a NumPy array.
    """
    mod = getattr(x.__class__, "__module__", "")
    return mod.startswith("numpy") and hasattr(x, "ndim") and hasattr(x, "shape")


def check_not_none(arg: Any, what: str) -> None:
    """
    Reject an absent argument.

    Raises:
        InvalidArgumentError: If arg is None.
    """
    if arg is None:
        raise InvalidArgumentError(f"{what} must not be None")


def validate_bounds(bounds: Any) -> Bounds:
    """
    Validate and normalize bounds to a tuple.

    Args:
        bounds: RectHV or a sequence of 4 numbers.

    Returns:
        Validated bounds as (min_x, min_y, max_x, max_y).

    Raises:
        ValueError: If bounds are invalid.
    """
    if isinstance(bounds, RectHV):
        return bounds.as_tuple()
    if type(bounds) is not tuple:
        bounds = tuple(bounds)
    if len(bounds) != 4:
        raise ValueError(
            "bounds must be a tuple of four numeric values (x min, y min, x max, y max)"
        )
    x0, y0, x1, y1 = (float(v) for v in bounds)
    if x0 > x1 or y0 > y1:
        raise ValueError(f"bounds ({x0}, {y0}, {x1}, {y1}) have min greater than max")
    return (x0, y0, x1, y1)


def as_point(point: PointLike) -> Point2D:
    """
    Coerce a point argument to Point2D.

    Args:
        point: Point2D, (x, y) sequence, or NumPy array of shape (2,).

    Returns:
        The point as Point2D.

    Raises:
        InvalidArgumentError: If point is None.
        TypeError: If point is not a point-like value.
        ValueError: If a sequence does not hold exactly two coordinates.
    """
    check_not_none(point, "point")
    if isinstance(point, Point2D):
        return point
    if _is_np_array(point):
        if point.shape != (2,):
            raise ValueError(f"point array must have shape (2,), got {point.shape}")
        return Point2D(float(point[0]), float(point[1]))
    try:
        coords = tuple(point)
    except TypeError:
        raise TypeError(f"expected a point, got {type(point).__name__}") from None
    if len(coords) != 2:
        raise ValueError(f"point must have exactly two coordinates, got {len(coords)}")
    return Point2D(float(coords[0]), float(coords[1]))


def as_rect(rect: RectLike) -> RectHV:
    """
    Coerce a rectangle argument to RectHV.

    Args:
        rect: RectHV or (min_x, min_y, max_x, max_y) sequence.

    Returns:
        The rectangle as RectHV.

    Raises:
        InvalidArgumentError: If rect is None.
        TypeError: If rect is not a rectangle-like value.
        ValueError: If a sequence is malformed or inverted.
    """
    check_not_none(rect, "rect")
    if isinstance(rect, RectHV):
        return rect
    try:
        coords = tuple(rect)
    except TypeError:
        raise TypeError(f"expected a rectangle, got {type(rect).__name__}") from None
    return RectHV(*validate_bounds(coords))
