"""Latin hypercube sampling as a test case generator."""

from __future__ import annotations

import random
from typing import Sequence

from rart.fault_zone import FaultZone
from rart.point import Bound, Point

_EXHAUSTIVE_BATCH = 1000
_MAX_INDICES = 2**32 - 1


class LhsArt:
    """Generates test cases by latin hypercube sampling.

    In the default mode each batch holds ``n_partitions`` points, one per stratum
    in every dimension, combined at random. In exhaustive mode every hypercube
    cell of the ``n_partitions ** n`` grid gets one point, in random order.
    """

    def __init__(
        self,
        n_partitions: int = 10,
        input_domain: Bound = (),
        exhaustive: bool = False,
        rng: random.Random | None = None,
    ) -> None:
        self.n_partitions = n_partitions
        self.input_domain = input_domain
        self.exhaustive = exhaustive
        self.rng = rng if rng is not None else random.Random()
        self._cell_indices: list[int] = []

    def compute_steps(self) -> list[float]:
        """Width of one partition in each dimension."""
        return [(high - low) / self.n_partitions for low, high in self.input_domain]

    def lower_bounds_by_index(self, index: int, steps: Sequence[float]) -> list[float]:
        """Lower corner of the hypercube cell with the given flat index."""
        return [
            low + ((index // self.n_partitions**d) % self.n_partitions) * step
            for d, ((low, _), step) in enumerate(zip(self.input_domain, steps))
        ]

    def _uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.rng.random()

    def _populate_random(self) -> list[Point]:
        steps = self.compute_steps()
        lower_bounds: list[list[float]] = []
        for (low, high), step in zip(self.input_domain, steps):
            stride = int(step)
            if stride < 1:
                raise ValueError("partition width must be at least 1")
            lower_bounds.append([float(b) for b in range(low, high, stride)])

        points = []
        for _ in range(self.n_partitions):
            coordinates = []
            for (_, high), step, available in zip(self.input_domain, steps, lower_bounds):
                if not available:
                    raise ValueError("no strata left to sample from")
                lower = available.pop(self.rng.randrange(len(available)))
                upper = min(lower + step, float(high))
                coordinates.append(self._uniform(lower, upper))
            points.append(Point(tuple(coordinates)))
        return points

    def _reset_cell_indices(self) -> None:
        n = len(self.input_domain)
        n_points = self.n_partitions**n
        if n_points > _MAX_INDICES:
            raise ValueError(
                f"Too many points to randomise with {n} dimensions "
                f"and {self.n_partitions} partitions"
            )
        self._cell_indices = list(range(n_points))
        self.rng.shuffle(self._cell_indices)

    def _populate_exhaustive(self) -> list[Point]:
        steps = self.compute_steps()
        points = []
        for _ in range(_EXHAUSTIVE_BATCH):
            if not self._cell_indices:
                self._reset_cell_indices()
            lowers = self.lower_bounds_by_index(self._cell_indices.pop(), steps)
            points.append(
                Point(
                    tuple(
                        self._uniform(lower, min(lower + step, float(high)))
                        for lower, step, (_, high) in zip(lowers, steps, self.input_domain)
                    )
                )
            )
        return points

    def populate_test_cases(self, test_cases: list[Point]) -> list[Point]:
        """Append a new batch of test cases to ``test_cases`` and return the batch."""
        batch = self._populate_exhaustive() if self.exhaustive else self._populate_random()
        test_cases.extend(batch)
        return batch

    def test_effectiveness(self, fault_zone: FaultZone) -> int:
        """Number of test cases run until ``fault_zone`` is hit, capped by 30 / theta."""
        max_tries = int(30.0 / fault_zone.theta)
        suite: list[Point] = []
        self.populate_test_cases(suite)

        index = 0
        while index < max_tries:
            if fault_zone.find_target(suite[index]):
                break
            index += 1
            if index == len(suite):
                self.populate_test_cases(suite)

        if index == max_tries:
            print(f"lhs art max tries ({max_tries}) reached")
        return index + 1

    def test_efficiency(self, n_generated_values: int, bound: Bound) -> list[Point]:
        """Generate at least ``n_generated_values`` test cases (one batch minimum)."""
        self.input_domain = bound
        suite: list[Point] = []
        if n_generated_values <= self.n_partitions:
            self.populate_test_cases(suite)
        else:
            while len(suite) < n_generated_values:
                self.populate_test_cases(suite)
        return suite