"""KD-tree based fixed-size-candidate-set adaptive random testing."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Callable, Iterator, Sequence

from rart.fault_zone import FaultZone
from rart.point import Bound, Point


@dataclass
class Node:
    """A KD-tree node holding one executed test case."""

    split: int = 0
    left: Node | None = None
    right: Node | None = None
    point: Point | None = None
    boundary: list[list[float]] | None = field(default=None)
    deep: int = 0


def split_select(boundary: Sequence[Sequence[float]], p: Point) -> int:
    """Choose the dimension whose split at ``p`` divides its cell most evenly."""
    rate = 0.0
    split = 0
    for i, ((low, high), c) in enumerate(zip(boundary, p.coordinates)):
        length = high - low
        if length == 0:
            continue
        lx1 = (high - c) / length
        lx2 = (c - low) / length
        spread = length * (1.0 - lx1 * lx1 - lx2 * lx2)
        if rate < spread:
            rate = spread
            split = i
    return split


def backtrack_limits(count: int, n_dims: int) -> list[int]:
    """Number of nodes to visit when searching a tree of each size up to ``count``."""
    d = float(n_dims)
    factor = 0.5 * (d + 1.0 / d) ** 2
    return [
        1 if i < 2 else math.ceil(factor * (math.log(i) / math.log(2.0)))
        for i in range(count)
    ]


class KdfcArt:
    """Adaptive random testing that finds nearest neighbours through a KD-tree."""

    def __init__(
        self,
        bound: Bound = (),
        candidate_num: int = 10,
        rng: random.Random | None = None,
    ) -> None:
        if candidate_num < 1:
            raise ValueError("candidate_num must be at least 1")
        self.input_domain = bound
        self.candidate_num = candidate_num
        self.rng = rng if rng is not None else random.Random()
        self.size = 0
        self.root = Node()
        if bound:
            self.root.boundary = [[float(low), float(high)] for low, high in bound]

    def tree_path(self, point: Point) -> list[Node]:
        """Nodes visited when descending from the root towards ``point``."""
        node = self.root
        path = [node]
        while node.point is not None:
            split = node.split
            child = node.left if node.point.coordinates[split] > point.coordinates[split] else node.right
            if child is None:
                break
            node = child
            path.append(node)
        return path

    def judge_direction(self, p: Point, node: Node) -> int:
        """0 if ``p`` lies on the left of ``node``'s split plane, 1 otherwise."""
        split = node.split
        return 0 if p.coordinates[split] < node.point.coordinates[split] else 1

    def is_cross_split_line(self, p: Point, distance: float, node: Node) -> bool:
        """True if a ball of radius ``distance`` around ``p`` crosses ``node``'s split plane."""
        split = node.split
        return abs(node.point.coordinates[split] - p.coordinates[split]) < distance

    def _search(self, p: Point) -> Iterator[tuple[bool, float]]:
        """Walk the tree for the nearest neighbour of ``p``.

        Yields, for each node counted by the search, whether the node was
        examined and the best distance so far.
        """
        if self.root.point is None:
            raise ValueError("tree is empty")
        distance = math.inf
        for path_node in reversed(self.tree_path(p)):
            if not self.is_cross_split_line(p, distance, path_node):
                yield False, distance
                continue
            distance = min(distance, p.distance(path_node.point))
            yield True, distance

            far = path_node.right if self.judge_direction(p, path_node) == 0 else path_node.left
            stack = [far] if far is not None else []
            while stack:
                node = stack.pop()
                direction = self.judge_direction(p, node)
                if self.is_cross_split_line(p, distance, node):
                    distance = min(distance, p.distance(node.point))
                    yield True, distance
                    other = node.left if direction == 1 else node.right
                    if other is not None:
                        stack.append(other)
                near = node.left if direction == 0 else node.right
                if near is not None:
                    stack.append(near)
        yield True, distance

    def min_distance(self, p: Point) -> float:
        """Exact distance from ``p`` to its nearest point in the tree."""
        distance = math.inf
        for _, distance in self._search(p):
            pass
        return distance

    def min_distance_backtracking(self, p: Point, back: int) -> float:
        """Approximate nearest distance, stopping after ``back`` counted nodes."""
        if self.root.point is None:
            raise ValueError("tree is empty")
        search = self._search(p)
        num = 0
        distance = math.inf
        for _, distance in search:
            num += 1
            if num == back:
                return distance
        return distance

    def _descend_to_new_leaf(self, p: Point) -> tuple[Node, Node]:
        parent = self.root
        while True:
            split = parent.split
            if parent.point.coordinates[split] > p.coordinates[split]:
                if parent.left is None:
                    parent.left = Node()
                    return parent, parent.left
                parent = parent.left
            else:
                if parent.right is None:
                    parent.right = Node()
                    return parent, parent.right
                parent = parent.right

    def insert_by_strategy(self, p: Point) -> None:
        """Insert ``p``, choosing each node's split dimension by its cell's shape."""
        if self.root.point is None:
            if len(self.input_domain) < p.n:
                raise ValueError("input domain has fewer dimensions than the point")
            self.root.deep = 1
            self.root.point = p
            self.root.boundary = [
                [float(low), float(high)] for low, high in list(self.input_domain)[: p.n]
            ]
            self.root.split = split_select(self.root.boundary, p)
        else:
            parent, node = self._descend_to_new_leaf(p)
            node.point = p
            node.deep = parent.deep + 1
            node.boundary = [list(b) for b in parent.boundary[: p.n]]
            split = parent.split
            pivot = parent.point.coordinates[split]
            if p.coordinates[split] < pivot:
                node.boundary[split][1] = pivot
            else:
                node.boundary[split][0] = pivot
            node.split = split_select(node.boundary, p)
        self.size += 1

    def insert_by_turn(self, p: Point) -> None:
        """Insert ``p``, cycling the split dimension with depth."""
        if self.root.point is None:
            self.root.point = p
            self.root.split = 0
            self.root.deep = 1
        else:
            parent, node = self._descend_to_new_leaf(p)
            node.point = p
            node.deep = parent.deep + 1
            node.split = 0 if parent.split == p.n - 1 else parent.split + 1
        self.size += 1

    def _best_candidate(self, score: Callable[[Point], float]) -> Point:
        candidates = [Point.random(self.input_domain, self.rng) for _ in range(self.candidate_num)]
        best = candidates[0]
        best_score = score(best)
        for cand in candidates[1:]:
            d = score(cand)
            if best_score < d:
                best_score = d
                best = cand
        return best

    def _run_effectiveness(
        self,
        fault_zone: FaultZone,
        insert: Callable[[Point], None],
        score: Callable[[Point], float],
    ) -> int:
        p = Point.random(self.input_domain, self.rng)
        insert(p)
        if fault_zone.find_target(p):
            return self.size
        while True:
            chosen = self._best_candidate(score)
            insert(chosen)
            if fault_zone.find_target(chosen):
                return self.size

    def _run_efficiency(
        self,
        point_num: int,
        insert: Callable[[Point], None],
        score: Callable[[Point], float],
    ) -> int:
        insert(Point.random(self.input_domain, self.rng))
        for _ in range(1, point_num):
            insert(self._best_candidate(score))
        return self.size

    def _lim_bal_score(self, back_num: Sequence[int]) -> Callable[[Point], float]:
        cache: dict[int, int] = {}

        def score(p: Point) -> float:
            size = self.size
            if size not in cache:
                cache.clear()
                cache[size] = back_num[size]
            return self.min_distance_backtracking(p, cache[size])

        return score

    def test_naive_effectiveness(self, fault_zone: FaultZone) -> int:
        """Generate cases with round-robin splits until ``fault_zone`` is hit; return the count."""
        return self._run_effectiveness(fault_zone, self.insert_by_turn, self.min_distance)

    def test_semi_bal_effectiveness(self, fault_zone: FaultZone) -> int:
        """Generate cases with shape-chosen splits until ``fault_zone`` is hit; return the count."""
        return self._run_effectiveness(fault_zone, self.insert_by_strategy, self.min_distance)

    def test_lim_bal_effectiveness(self, fault_zone: FaultZone, back_num: Sequence[int]) -> int:
        """As the semi-balanced run, with nearest-neighbour search limited by ``back_num``."""
        return self._run_effectiveness(
            fault_zone, self.insert_by_strategy, self._lim_bal_score(back_num)
        )

    def test_naive_efficiency(self, point_num: int) -> int:
        """Generate ``point_num`` cases with round-robin splits; return the tree size."""
        return self._run_efficiency(point_num, self.insert_by_turn, self.min_distance)

    def test_semi_bal_efficiency(self, point_num: int) -> int:
        """Generate ``point_num`` cases with shape-chosen splits; return the tree size."""
        return self._run_efficiency(point_num, self.insert_by_strategy, self.min_distance)

    def test_lim_bal_efficiency(self, point_num: int, back_num: Sequence[int]) -> int:
        """Generate ``point_num`` cases with limited backtracking; return the tree size."""
        return self._run_efficiency(
            point_num, self.insert_by_strategy, self._lim_bal_score(back_num)
        )