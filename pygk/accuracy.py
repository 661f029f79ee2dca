"""Verification of the accuracy of interval nodes and weights."""

from typing import Sequence

import mpmath

from .utilities.basics import Interval, Node
from .utilities.intervals import get_radius


def check_accuracy(value: Interval, target_precision: int) -> bool:
    """Determine whether the radius of an interval is certainly below 2^-target_precision."""
    if not isinstance(target_precision, int):
        raise TypeError("target_precision must be an int.")
    return bool(get_radius(value) < mpmath.ldexp(1, -target_precision))


def check_rule_accuracy(nodes: Sequence[Node], weights: Sequence[Interval], target_precision: int) -> bool:
    """Determine whether every coordinate of every node and every weight is accurate to the target precision."""
    if len(nodes) != len(weights):
        raise ValueError("nodes and weights must have the same length.")
    for node in nodes:
        if not all(check_accuracy(x, target_precision) for x in node):
            return False
    return all(check_accuracy(w, target_precision) for w in weights)
