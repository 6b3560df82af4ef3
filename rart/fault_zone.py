"""Failure regions that a test case can hit: block, strip and point patterns."""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from typing import Sequence

from rart.point import Bound, Point

_MAX_OVERLAPS = 1_000_000


def _volume(bound: Bound) -> float:
    return math.prod(float(high - low) for low, high in bound)


class FaultZone(ABC):
    """A region of the input domain that reveals a failure."""

    theta: float

    @abstractmethod
    def find_target(self, p: Point) -> bool:
        """Return True if ``p`` lies in the failure region."""


class FaultZoneBlock(FaultZone):
    """A single hypercube covering a fraction ``area`` of the domain."""

    def __init__(self, boundary: Bound, area: float, rng: random.Random | None = None) -> None:
        rng = rng if rng is not None else random.Random()
        n = len(boundary)
        self.input_domain = [tuple(b) for b in boundary]
        self.theta = area
        self.delta = (_volume(boundary) * area) ** (1.0 / n)
        self.fault_point = Point(
            tuple(low + ((high - low) - self.delta) * rng.random() for low, high in boundary)
        )

    def find_target(self, p: Point) -> bool:
        return all(
            corner <= c <= corner + self.delta
            for c, corner in zip(p.coordinates, self.fault_point.coordinates)
        )


class FaultZoneStrip(FaultZone):
    """A band between two parallel lines in the first two dimensions."""

    def __init__(
        self,
        boundary: Bound,
        area: float,
        rate: float = 0.9,
        rng: random.Random | None = None,
    ) -> None:
        rng = rng if rng is not None else random.Random()
        self.input_domain = [tuple(b) for b in boundary]
        self.edge = boundary[0][1] - boundary[0][0]
        self.theta = area
        self.ratio = 0.0

        location = rng.randrange(3)
        if location == 0:
            p1x, p1y, p4x, p4y = self._corner_top(area, rate, rng)
        elif location == 1:
            p1x, p1y, p4x, p4y = self._across(area, rng)
        else:
            p1x, p1y, p4x, p4y = self._corner_bottom(area, rate, rng)

        self.above_line_delta = p1y - self.ratio * p1x
        self.below_line_delta = p4y - self.ratio * p4x

    def _corner_top(self, area: float, rate: float, rng: random.Random) -> tuple[float, ...]:
        threshold_x = -5000.0 + 10000.0 * (1.0 - rate)
        threshold_y = -5000.0 + 10000.0 * rate
        while True:
            p2x = -5000.0
            p2y = -5000.0 + 10000.0 * rate * rng.random()
            p4x = threshold_x + 10000.0 * rate * rng.random()
            p4y = 5000.0
            if p4x == p2x:
                continue
            big_triangle_area = (5000.0 - p2y) * (p4x + 5000.0) / 2.0
            self.ratio = (p4y - p2y) / (p4x - p2x)
            temp = 2.0 * (big_triangle_area - 10000.0 * 10000.0 * area) / self.ratio
            if temp < 0:
                continue
            p3x = math.sqrt(temp) - 5000.0
            p1y = 5000.0 - self.ratio * (p3x + 5000.0)
            if p3x >= threshold_x and p1y <= threshold_y:
                return -5000.0, p1y, p4x, p4y

    def _across(self, area: float, rng: random.Random) -> tuple[float, ...]:
        while True:
            p2y = -5000.0 + 10000.0 * rng.random()
            p4y = -5000.0 + 10000.0 * rng.random()
            p1y = p2y + 10000.0 * area
            p3y = p4y + 10000.0 * area
            self.ratio = (p4y - p2y) / 10000.0
            if p1y <= 5000.0 and p3y <= 5000.0:
                return -5000.0, p1y, 5000.0, p4y

    def _corner_bottom(self, area: float, rate: float, rng: random.Random) -> tuple[float, ...]:
        threshold = -5000.0 + 10000.0 * (1.0 - rate)
        while True:
            p1x = -5000.0
            p1y = threshold + 10000.0 * rate * rng.random()
            p3x = threshold + 10000.0 * rate * rng.random()
            p3y = -5000.0
            p4y = -5000.0
            if p3x == p1x:
                continue
            self.ratio = (p3y - p1y) / (p3x - p1x)
            if self.ratio == 0:
                continue
            big_triangle_area = (p1y + 5000.0) * (p3x + 5000.0) / 2.0
            temp = 2.0 * (10000.0 * 10000.0 * area - big_triangle_area) / self.ratio
            if temp < 0:
                continue
            p4x = math.sqrt(temp) - 5000.0
            p2y = -self.ratio * (p4x + 5000.0) - 5000.0
            if p4x >= threshold and p2y >= threshold:
                return p1x, p1y, p4x, p4y

    def find_target(self, p: Point) -> bool:
        offset = p.coordinates[1] - self.ratio * p.coordinates[0]
        return self.below_line_delta <= offset <= self.above_line_delta


class FaultZonePointSquare(FaultZone):
    """Many small non-overlapping hypercubes sharing a total fraction ``theta``."""

    N_POINTS = 25

    def __init__(
        self,
        input_domain: Bound,
        theta: float,
        rng: random.Random | None = None,
    ) -> None:
        rng = rng if rng is not None else random.Random()
        n_dims = len(input_domain)
        self.input_domain = [tuple(b) for b in input_domain]
        self.theta = theta
        self.n_points = self.N_POINTS
        self.delta = (_volume(input_domain) * theta / self.n_points) ** (1.0 / n_dims)

        fault_points: list[Point] = []
        n_overlaps = 0
        while len(fault_points) < self.n_points:
            while True:
                candidate = Point(
                    tuple(
                        low + ((high - low) - self.delta) * rng.random()
                        for low, high in input_domain
                    )
                )
                if not self._overlaps(candidate, fault_points):
                    break
                n_overlaps += 1
                if n_overlaps > _MAX_OVERLAPS:
                    fault_points.clear()
                    n_overlaps = 0
            fault_points.append(candidate)
        self.fault_points = fault_points

    def _overlaps(self, p: Point, fault_points: Sequence[Point]) -> bool:
        return any(
            all(abs(a - b) <= self.delta for a, b in zip(p.coordinates, fp.coordinates))
            for fp in fault_points
        )

    def find_target(self, p: Point) -> bool:
        return any(
            all(
                corner <= c <= corner + self.delta
                for c, corner in zip(p.coordinates, fp.coordinates)
            )
            for fp in self.fault_points
        )