"""kdtree2d - 2d-tree spatial index for planar points."""

from ._common import InvalidArgumentError
from ._geometry import UNIT_SQUARE, Point2D, RectHV
from ._logging import set_debug
from ._node import Axis
from .kd_tree import KdTree
from .point_set import PointSet

__all__ = [
    "UNIT_SQUARE",
    "Axis",
    "InvalidArgumentError",
    "KdTree",
    "Point2D",
    "PointSet",
    "RectHV",
    "set_debug",
]
