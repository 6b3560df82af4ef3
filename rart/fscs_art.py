"""Fixed-size-candidate-set adaptive random testing."""

from __future__ import annotations

import random
from typing import Sequence

from rart.fault_zone import FaultZone
from rart.point import Bound, Point


class FscsArt:
    """Picks, from each candidate set, the candidate furthest from all executed cases."""

    def __init__(self, cand_num: int = 10, rng: random.Random | None = None) -> None:
        if cand_num < 1:
            raise ValueError("cand_num must be at least 1")
        self.cand_num = cand_num
        self.rng = rng if rng is not None else random.Random()
        self.input_domain: Bound = ()

    def find_furthest_candidate(
        self, tcp: Sequence[Point], candidates: Sequence[Point]
    ) -> int:
        """Index of the candidate whose nearest executed case is furthest away."""
        if not tcp:
            raise ValueError("no executed test cases to compare against")
        best_index = 0
        best_dist = 0.0
        for i, cand in enumerate(candidates):
            dist = min(cand.distance(t) for t in tcp)
            if i == 0 or best_dist < dist:
                best_dist = dist
                best_index = i
        return best_index

    def _candidates(self, bound: Bound) -> list[Point]:
        return [Point.random(bound, self.rng) for _ in range(self.cand_num)]

    def _next(self, tcp: Sequence[Point], bound: Bound) -> Point:
        candidates = self._candidates(bound)
        return candidates[self.find_furthest_candidate(tcp, candidates)]

    def test_effectiveness(self, bound: Bound, fault_zone: FaultZone) -> int:
        """Count generated cases until one hits ``fault_zone`` or 30 / theta is reached."""
        self.input_domain = bound
        max_try = int(30.0 / fault_zone.theta)
        tcp = [Point.random(bound, self.rng)]
        while True:
            chosen = self._next(tcp, bound)
            tcp.append(chosen)
            if fault_zone.find_target(chosen):
                break
            if len(tcp) >= max_try:
                break
        return len(tcp)

    def test_efficiency(self, num: int, bound: Bound) -> list[Point]:
        """Generate ``num`` test cases and return them."""
        self.input_domain = bound
        tcp = [Point.random(bound, self.rng)]
        for _ in range(1, num):
            tcp.append(self._next(tcp, bound))
        return tcp