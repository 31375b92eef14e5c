import numpy as np
import pytest

from kdtree2d import KdTree, Point2D, PointSet

SCENARIO = [(0.7, 0.2), (0.5, 0.4), (0.2, 0.3), (0.4, 0.7), (0.9, 0.6)]


@pytest.fixture(params=[KdTree, PointSet], ids=["kdtree", "pointset"])
def index_cls(request):
    return request.param


@pytest.fixture
def scenario_points():
    return [Point2D(x, y) for x, y in SCENARIO]


@pytest.fixture
def scenario_tree(scenario_points):
    tree = KdTree()
    for p in scenario_points:
        tree.insert(p)
    return tree


@pytest.fixture
def rng():
    return np.random.default_rng(12345)
