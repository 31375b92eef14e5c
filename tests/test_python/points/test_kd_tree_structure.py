import logging

import pytest

from kdtree2d import Axis, KdTree, Point2D, RectHV, set_debug


def test_scenario_shape(scenario_tree):
    assert list(scenario_tree) == [
        Point2D(0.7, 0.2),
        Point2D(0.5, 0.4),
        Point2D(0.2, 0.3),
        Point2D(0.4, 0.7),
        Point2D(0.9, 0.6),
    ]
    assert scenario_tree.get_all_node_boundaries() == [
        RectHV(0.0, 0.0, 1.0, 1.0),
        RectHV(0.0, 0.0, 0.7, 1.0),
        RectHV(0.0, 0.0, 0.7, 0.4),
        RectHV(0.0, 0.4, 0.7, 1.0),
        RectHV(0.7, 0.0, 1.0, 1.0),
    ]
    assert scenario_tree.height() == 3


def test_axis_alternates_with_depth(scenario_tree):
    axes = [axis for _, axis, _ in scenario_tree.get_all_splits()]
    # pre-order depths: 0, 1, 2, 2, 1
    assert axes == [
        Axis.VERTICAL,
        Axis.HORIZONTAL,
        Axis.VERTICAL,
        Axis.VERTICAL,
        Axis.HORIZONTAL,
    ]


def test_every_point_lies_in_its_node_bounds(rng):
    tree = KdTree()
    for x, y in rng.random((300, 2)):
        tree.insert((x, y))
    for point, _, bounds in tree.get_all_splits():
        assert RectHV(*bounds).contains(point)


def test_equal_coordinate_on_split_axis_goes_right():
    tree = KdTree()
    tree.insert((0.5, 0.5))
    tree.insert((0.5, 0.2))
    tree.insert((0.8, 0.5))

    # (0.5, 0.2) ties the root on x, so it sits in the right half.
    assert tree.get_all_node_boundaries() == [
        RectHV(0.0, 0.0, 1.0, 1.0),
        RectHV(0.5, 0.0, 1.0, 1.0),
        RectHV(0.5, 0.2, 1.0, 1.0),
    ]
    assert tree.contains((0.5, 0.2))
    assert tree.contains((0.8, 0.5))
    assert tree.size() == 3


def test_axis_flip():
    assert Axis.VERTICAL.flip() is Axis.HORIZONTAL
    assert Axis.HORIZONTAL.flip() is Axis.VERTICAL
    assert Axis.VERTICAL.less(Point2D(0.1, 0.9), Point2D(0.2, 0.0))
    assert not Axis.HORIZONTAL.less(Point2D(0.1, 0.9), Point2D(0.2, 0.0))


def test_sorted_inserts_degenerate_without_recursion_errors():
    n = 2000
    tree = KdTree()
    for i in range(n):
        tree.insert((i / n, i / n))

    assert tree.size() == n
    assert tree.height() == n
    assert len(tree.range((0.0, 0.0, 1.0, 1.0))) == n
    assert tree.nearest((0.0, 1.0)) == Point2D(0.5, 0.5)
    assert tree.contains(((n - 1) / n, (n - 1) / n))


def test_out_of_bounds_insert_is_rejected():
    tree = KdTree()
    tree.insert((0.5, 0.5))
    with pytest.raises(ValueError, match=r"Point \([^)]*\) is outside bounds \([^)]*\)"):
        tree.insert((1.5, -0.1))
    assert tree.size() == 1
    assert not tree.contains((1.5, -0.1))


def test_query_point_outside_domain():
    tree = KdTree()
    tree.insert((0.9, 0.9))
    tree.insert((0.1, 0.1))
    assert tree.nearest((5.0, 5.0)) == Point2D(0.9, 0.9)
    assert tree.nearest((-2.0, -1.0)) == Point2D(0.1, 0.1)


def test_custom_bounds():
    tree = KdTree(bounds=(0, 0, 100, 100))
    assert tree.bounds == RectHV(0.0, 0.0, 100.0, 100.0)
    for p in [(10, 10), (20, 20), (35, 35), (90, 5)]:
        tree.insert(p)
    assert tree.get_all_node_boundaries()[0] == RectHV(0.0, 0.0, 100.0, 100.0)
    assert tree.nearest((22, 22)) == Point2D(20.0, 20.0)
    assert set(tree.range((0, 0, 25, 25))) == {Point2D(10.0, 10.0), Point2D(20.0, 20.0)}


def test_invalid_bounds():
    with pytest.raises(ValueError):
        KdTree(bounds=(0.0, 0.0, 1.0))
    with pytest.raises(ValueError):
        KdTree(bounds=(1.0, 0.0, 0.0, 1.0))


def test_nearest_tie_goes_to_near_side_child():
    tree = KdTree()
    for p in [(0.5, 0.1), (0.4, 0.5), (0.6, 0.5)]:
        tree.insert(p)

    # (0.4, 0.5) and (0.6, 0.5) are equally close. The query ties the root
    # on x, so the right child is searched first and keeps the tie.
    assert tree.nearest((0.5, 0.5)) == Point2D(0.6, 0.5)
    assert tree.nearest((0.49, 0.5)) == Point2D(0.4, 0.5)


def test_nearest_tie_keeps_earlier_candidate():
    tree = KdTree()
    for p in [(0.1, 0.5), (0.5, 0.4), (0.5, 0.6)]:
        tree.insert(p)

    # (0.5, 0.6) is only as close as its parent, not strictly closer.
    assert tree.nearest((0.5, 0.5)) == Point2D(0.5, 0.4)


def count_calls(monkeypatch, cls, name):
    """Wrap cls.name so every call is recorded; return the call list."""
    calls = []
    original = getattr(cls, name)

    def wrapper(self, *args):
        calls.append(args)
        return original(self, *args)

    monkeypatch.setattr(cls, name, wrapper)
    return calls


@pytest.fixture
def random_tree(rng):
    tree = KdTree()
    for x, y in rng.random((2000, 2)):
        tree.insert((x, y))
    return tree


def test_range_prunes_subtrees_outside_rect(monkeypatch, random_tree):
    n = len(random_tree)
    rect = RectHV(0.40, 0.40, 0.45, 0.45)
    expected = {p for p in random_tree if rect.contains(p)}

    visits = count_calls(monkeypatch, RectHV, "intersects")
    found = random_tree.range(rect)

    assert set(found) == expected
    assert len(visits) < n // 4

    visits.clear()
    assert len(random_tree.range((0.0, 0.0, 1.0, 1.0))) == n
    assert len(visits) == n


def test_nearest_prunes_far_subtrees(monkeypatch, random_tree):
    n = len(random_tree)
    points = list(random_tree)
    checks = count_calls(monkeypatch, RectHV, "distance_squared_to")

    for q in [Point2D(0.5, 0.5), Point2D(0.01, 0.99), Point2D(0.77, 0.13)]:
        checks.clear()
        got = random_tree.nearest(q)
        best = min(p.distance_squared_to(q) for p in points)
        assert got.distance_squared_to(q) == best
        assert 0 < len(checks) < n // 10


def test_debug_log_reports_pruning(caplog, random_tree):
    with caplog.at_level(logging.DEBUG, logger="kdtree2d"):
        random_tree.range((0.1, 0.1, 0.2, 0.2))
    message = [r.getMessage() for r in caplog.records if r.getMessage().startswith("range")][-1]
    pruned = int(message.split(", ")[-1].split()[0])
    assert pruned > 0


def test_duplicate_insert_is_logged_at_debug(caplog):
    tree = KdTree()
    with caplog.at_level(logging.DEBUG, logger="kdtree2d"):
        tree.insert((0.3, 0.3))
        tree.insert((0.3, 0.3))
    assert "ignoring duplicate point" in caplog.text


def test_set_debug_toggles_level():
    base = logging.getLogger("kdtree2d")
    set_debug(True)
    try:
        assert base.level == logging.DEBUG
    finally:
        set_debug(False)
    assert base.level == logging.WARNING
