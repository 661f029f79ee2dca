"""Enumeration of partitions, distinct orderings of partitions, and lattice points."""

from typing import Iterator, Sequence, Tuple

import numpy as np
from sympy.utilities.iterables import multiset_permutations, partitions as generate_multiplicities

from .basics import Array


def partitions(dimensions: int, total: int) -> Iterator[Tuple[int, ...]]:
    """Generate every partition of a total into exactly a number of nonnegative parts. Parts are in non-increasing order
    and zeros pad partitions with fewer positive parts than dimensions.
    """
    if total == 0:
        yield (0,) * dimensions
        return

    # multiplicity dictionaries are reused between iterations, so they are consumed immediately
    for multiplicities in generate_multiplicities(total, m=dimensions):
        parts = sorted((p for p, c in multiplicities.items() if p > 0 for _ in range(c)), reverse=True)
        yield tuple(parts) + (0,) * (dimensions - len(parts))


def permutations(partition: Sequence[int]) -> Iterator[Tuple[int, ...]]:
    """Generate every distinct ordering of a partition, treating equal parts as indistinguishable."""
    for ordering in multiset_permutations(list(partition)):
        yield tuple(ordering)


def lattice_points(dimensions: int, total: int) -> Array:
    """Compute all sequences of nonnegative integers with a fixed size that sum to a fixed number, in reverse
    lexicographic order.
    """
    point = np.zeros(dimensions, np.int64)
    point[0] = total
    points = [point.copy()]
    forward = 0
    while point[-1] < total:
        if forward == dimensions - 1:
            for backward in reversed(range(forward)):
                forward = backward
                if point[backward] != 0:
                    break
        point[forward] -= 1
        forward += 1
        point[forward] = total - point[:forward].sum()
        if forward < dimensions - 1:
            point[forward + 1:] = 0
        points.append(point.copy())
    return np.vstack(points)
