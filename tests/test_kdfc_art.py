import math
import random

import pytest

from rart.fault_zone import FaultZone
from rart.kdfc_art import KdfcArt, Node, backtrack_limits, split_select
from rart.point import Point

BOUND = [[-5000, 5000], [-5000, 5000]]


class _HitAfter(FaultZone):
    """Reports a hit on the k-th query."""

    def __init__(self, k):
        self.theta = 0.01
        self.k = k
        self.calls = 0

    def find_target(self, p):
        self.calls += 1
        return self.calls >= self.k


def _all_nodes(node):
    if node is None or node.point is None:
        return []
    return [node] + _all_nodes(node.left) + _all_nodes(node.right)


def _filled_tree(insert_name, n=60, seed=1):
    kd = KdfcArt(BOUND, rng=random.Random(seed))
    rng = random.Random(seed + 100)
    points = [Point.random(BOUND, rng) for _ in range(n)]
    for p in points:
        getattr(kd, insert_name)(p)
    return kd, points


def test_split_select_prefers_even_split():
    assert split_select([[0, 10], [0, 10]], Point((5, 1))) == 0
    assert split_select([[0, 10], [0, 10]], Point((1, 5))) == 1


def test_split_select_skips_zero_width_dimension():
    assert split_select([[3, 3], [0, 10]], Point((3, 5))) == 1


def test_backtrack_limits_shape():
    limits = backtrack_limits(50, 3)
    assert len(limits) == 50
    assert limits[0] == 1 and limits[1] == 1
    assert all(a <= b for a, b in zip(limits[2:], limits[3:]))


def test_insert_by_turn_cycles_splits():
    kd = KdfcArt(BOUND)
    kd.insert_by_turn(Point((0, 0)))
    kd.insert_by_turn(Point((10, 10)))
    kd.insert_by_turn(Point((20, 20)))
    assert kd.size == 3
    assert kd.root.split == 0 and kd.root.deep == 1
    child = kd.root.right
    assert child.split == 1 and child.deep == 2
    grandchild = child.right
    assert grandchild.split == 0 and grandchild.deep == 3
    assert kd.root.left is None


def test_tree_path_follows_splits():
    kd = KdfcArt(BOUND)
    kd.insert_by_turn(Point((0, 0)))
    kd.insert_by_turn(Point((-10, 0)))
    kd.insert_by_turn(Point((10, 0)))
    path = kd.tree_path(Point((-20, 5)))
    assert [n.point for n in path] == [Point((0, 0)), Point((-10, 0))]


def test_tree_path_on_empty_tree_is_root():
    kd = KdfcArt(BOUND)
    assert kd.tree_path(Point((1, 1))) == [kd.root]


@pytest.mark.parametrize("insert_name", ["insert_by_turn", "insert_by_strategy"])
def test_min_distance_matches_nearest_point(insert_name):
    kd, points = _filled_tree(insert_name)
    rng = random.Random(7)
    for _ in range(30):
        q = Point.random(BOUND, rng)
        expected = min(q.distance(p) for p in points)
        assert kd.min_distance(q) == pytest.approx(expected)


@pytest.mark.parametrize("back", [0, 1, 3, 10])
def test_backtracking_never_below_exact(back):
    kd, _ = _filled_tree("insert_by_strategy")
    rng = random.Random(11)
    for _ in range(20):
        q = Point.random(BOUND, rng)
        assert kd.min_distance_backtracking(q, back) >= kd.min_distance(q) - 1e-9


def test_backtracking_unlimited_equals_exact():
    kd, _ = _filled_tree("insert_by_strategy")
    rng = random.Random(3)
    q = Point.random(BOUND, rng)
    assert kd.min_distance_backtracking(q, 0) == pytest.approx(kd.min_distance(q))


def test_min_distance_on_empty_tree_raises():
    kd = KdfcArt(BOUND)
    with pytest.raises(ValueError):
        kd.min_distance(Point((0, 0)))


def test_insert_by_strategy_cells_contain_points():
    kd, points = _filled_tree("insert_by_strategy", n=80)
    nodes = _all_nodes(kd.root)
    assert len(nodes) == len(points) == kd.size
    for node in nodes:
        for c, (low, high) in zip(node.point.coordinates, node.boundary):
            assert low <= c <= high


def test_judge_direction_and_cross():
    node = Node(split=1, point=Point((0, 10)))
    kd = KdfcArt(BOUND)
    assert kd.judge_direction(Point((0, 5)), node) == 0
    assert kd.judge_direction(Point((0, 10)), node) == 1
    assert kd.is_cross_split_line(Point((0, 5)), 6.0, node)
    assert not kd.is_cross_split_line(Point((0, 5)), 5.0, node)


@pytest.mark.parametrize("k", [1, 5])
def test_naive_effectiveness_counts_until_hit(k):
    kd = KdfcArt(BOUND, rng=random.Random(2))
    assert kd.test_naive_effectiveness(_HitAfter(k)) == k
    assert kd.size == k


def test_semi_bal_effectiveness_counts_until_hit():
    kd = KdfcArt(BOUND, rng=random.Random(2))
    assert kd.test_semi_bal_effectiveness(_HitAfter(7)) == 7


def test_lim_bal_effectiveness_counts_until_hit():
    kd = KdfcArt(BOUND, rng=random.Random(2))
    assert kd.test_lim_bal_effectiveness(_HitAfter(6), backtrack_limits(100, 2)) == 6


@pytest.mark.parametrize(
    "method", ["test_naive_efficiency", "test_semi_bal_efficiency"]
)
def test_efficiency_generates_requested_count(method):
    kd = KdfcArt(BOUND, rng=random.Random(4))
    assert getattr(kd, method)(40) == 40
    assert len(_all_nodes(kd.root)) == 40


def test_lim_bal_efficiency_generates_requested_count():
    kd = KdfcArt(BOUND, rng=random.Random(4))
    assert kd.test_lim_bal_efficiency(30, backtrack_limits(30, 2)) == 30


def test_lim_bal_efficiency_short_limits_raise():
    kd = KdfcArt(BOUND, rng=random.Random(4))
    with pytest.raises(IndexError):
        kd.test_lim_bal_efficiency(10, backtrack_limits(3, 2))


def test_generated_points_stay_in_domain():
    kd = KdfcArt(BOUND, rng=random.Random(9))
    kd.test_semi_bal_efficiency(25)
    for node in _all_nodes(kd.root):
        assert all(-5000 <= c <= 5000 for c in node.point.coordinates)


def test_seeded_runs_are_reproducible():
    a = KdfcArt(BOUND, rng=random.Random(5))
    b = KdfcArt(BOUND, rng=random.Random(5))
    a.test_naive_efficiency(20)
    b.test_naive_efficiency(20)
    assert [n.point for n in _all_nodes(a.root)] == [n.point for n in _all_nodes(b.root)]


def test_zero_candidates_rejected():
    with pytest.raises(ValueError):
        KdfcArt(BOUND, candidate_num=0)


def test_spread_of_chosen_points_beats_nothing():
    kd = KdfcArt(BOUND, rng=random.Random(12))
    kd.test_naive_efficiency(10)
    pts = [n.point for n in _all_nodes(kd.root)]
    closest = min(p.distance(q) for i, p in enumerate(pts) for q in pts[i + 1:])
    assert closest > 0 and not math.isinf(closest)