"""Pure random testing: draw test cases uniformly until a failure is hit."""

from __future__ import annotations

import random

from rart.fault_zone import FaultZone
from rart.point import Bound, Point


class RandomTester:
    """Generates independent uniform test cases over an input domain."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.input_domain: Bound = ()

    def test_effectiveness(self, bound: Bound, fault_zone: FaultZone) -> int:
        """Count test cases drawn until one hits ``fault_zone``, capped at 30 / theta."""
        self.input_domain = bound
        max_tries = int(30.0 / fault_zone.theta)
        n_generated = 0
        while n_generated < max_tries:
            test_case = Point.random(bound, self.rng)
            n_generated += 1
            if fault_zone.find_target(test_case):
                break
        if n_generated == max_tries:
            print(f"random art max tries ({max_tries}) reached")
        return n_generated

    def test_efficiency(self, n_generated: int, bound: Bound) -> list[Point]:
        """Draw ``n_generated`` test cases and return them."""
        self.input_domain = bound
        return [Point.random(bound, self.rng) for _ in range(n_generated)]