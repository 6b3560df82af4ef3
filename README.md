# rart

Adaptive random testing (ART) algorithms and simulated failure regions, for
comparing how many test cases each strategy needs before it hits a fault in a
bounded numeric input domain.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Concepts

An input domain is a list of `[low, high]` integer bounds, one per dimension,
for example `[[-5000, 5000], [-5000, 5000]]`. Every generator and fault zone
accepts an optional `random.Random` instance; pass a seeded one to make a run
repeatable.

## Modules

- `rart.point.Point`: an immutable test case with float `coordinates` and
  dimension count `n`. `Point.random(bound, rng)` draws one uniformly from
  the domain; `p.distance(q)` is the Euclidean distance.
- `rart.fault_zone`: failure regions sharing the abstract `FaultZone`
  interface, `find_target(p)` plus the failure rate attribute `theta`.
  - `FaultZoneBlock(boundary, area, rng)`: one hypercube covering the fraction
    `area` of the domain, placed at random.
  - `FaultZoneStrip(boundary, area, rate=0.9, rng)`: a band between two
    parallel lines in the first two dimensions. Its geometry is laid out for
    the square `[-5000, 5000]` in each of those dimensions.
  - `FaultZonePointSquare(input_domain, theta, rng)`: 25 small,
    non-overlapping hypercubes that together cover the fraction `theta`.
- `rart.rt.RandomTester(rng)`: plain random testing, the baseline.
- `rart.fscs_art.FscsArt(cand_num=10, rng)`: fixed-size-candidate-set ART;
  from each set of `cand_num` random candidates it keeps the one furthest from
  every case already chosen. `find_furthest_candidate(tcp, candidates)`
  returns that candidate's index.
- `rart.lhs_art.LhsArt(n_partitions=10, input_domain=(), exhaustive=False, rng)`:
  Latin hypercube sampling. In the default mode each batch holds
  `n_partitions` points, one per stratum in every dimension. In exhaustive
  mode batches of 1000 points visit every cell of the `n_partitions ** n`
  grid once, in random order, before starting over. `compute_steps()` and
  `lower_bounds_by_index(index, steps)` expose the grid layout, and
  `populate_test_cases(test_cases)` appends one batch to a list and returns it.
- `rart.kdfc_art.KdfcArt(bound, candidate_num=10, rng)`: FSCS-ART whose
  nearest-neighbour search goes through a KD-tree, in three forms:
  naive (split dimension by depth, `insert_by_turn`), semi-balanced (split
  dimension chosen by the cell's shape, `insert_by_strategy`) and
  limited-balanced (semi-balanced with a search cut off after a set number of
  nodes, `min_distance_backtracking`). `backtrack_limits(count, n_dims)` builds
  the per-tree-size cut-off list the limited-balanced form takes, and
  `split_select(boundary, p)` is the split rule used by the balanced forms.

## Example

```python
import random

from rart.fault_zone import FaultZoneBlock
from rart.fscs_art import FscsArt
from rart.kdfc_art import KdfcArt, backtrack_limits
from rart.lhs_art import LhsArt
from rart.rt import RandomTester

rng = random.Random(42)
bounds = [[-5000, 5000], [-5000, 5000]]
zone = FaultZoneBlock(bounds, 0.001, rng)

print("random:", RandomTester(rng).test_effectiveness(bounds, zone))
print("fscs:  ", FscsArt(10, rng).test_effectiveness(bounds, zone))
print("lhs:   ", LhsArt(31, bounds, exhaustive=True, rng=rng).test_effectiveness(zone))

kdfc = KdfcArt(bounds, 10, rng)
print("lim-bal kdfc:", kdfc.test_lim_bal_effectiveness(zone, backtrack_limits(100_000, len(bounds))))
```

## Effectiveness and efficiency runs

The `test_effectiveness` methods (and the KD-tree `test_*_effectiveness`
methods) generate test cases until one falls in the fault zone and return how
many were generated. The random, FSCS and LHS runs also stop once they reach
`30 / theta` tries; the KD-tree runs have no cap and return the tree size.

The `test_efficiency` methods only generate the requested number of test
cases, which makes them suitable for timing. `RandomTester`, `FscsArt` and
`LhsArt` return the generated points (LHS always produces whole batches); the
KD-tree `test_*_efficiency` methods return the tree size.

## What this package does not do

It is a library only. It has no command that runs a whole experiment over
several domains, failure rates and zone shapes, and it writes no result or
timing files; repeating runs, averaging the counts and timing them is left to
the caller.