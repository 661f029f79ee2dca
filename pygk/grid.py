"""Assembly of fully symmetric sparse grids from partitions, generators, and weight factors."""

from typing import List, Sequence, Tuple

from . import exceptions
from .utilities.basics import Interval, Node
from .utilities.enumeration import lattice_points, partitions, permutations
from .utilities.intervals import get_context, is_exact_zero
from .weight_factors import WeightFactorTable


# admissibility defects of part values 0 through 26 for nested Hermite extensions
DEFECTS = (0, 0, 1, 0, 0, 3, 2, 1, 0, 0, 5, 4, 3, 2, 1, 0, 0, 0, 8, 7, 6, 5, 4, 3, 2, 1, 0)


def get_defect(part: int) -> int:
    """Get the admissibility defect of a part value."""
    if part < 0:
        raise ValueError("Part values must be nonnegative.")
    try:
        return DEFECTS[part]
    except IndexError:
        raise exceptions.UnsupportedPartSizeError(part, len(DEFECTS))


def is_admissible(partition: Sequence[int], level: int) -> bool:
    """Determine whether a partition contributes to the sparse grid of a level."""
    return sum(p + get_defect(p) for p in partition) <= level


def validate_partition(partition: Sequence[int]) -> Tuple[int, ...]:
    """Validate that a partition is a nonempty sequence of nonnegative ints."""
    partition = tuple(partition)
    if not partition or any(not isinstance(p, int) or p < 0 for p in partition):
        raise ValueError("partition must be a nonempty sequence of nonnegative ints.")
    return partition


def compute_nodes(partition: Sequence[int], generators: Sequence[Interval]) -> List[Node]:
    """Compute the fully symmetric set of nodes generated by a partition: every distinct ordering of its parts across
    axes, combined with every choice of signs for the coordinates of nonzero parts. Part value i selects generator i.
    """
    partition = validate_partition(partition)
    for part in partition:
        if part >= len(generators):
            raise exceptions.InsufficientGeneratorsError(part, len(generators))

    # each nonzero part consumes one bit of the sign pattern, in axis order
    nonzero = sum(1 for p in partition if p != 0)
    nodes: List[Node] = []
    for ordering in permutations(partition):
        for signs in range(2**nonzero):
            node = []
            bit = 0
            for part in ordering:
                coordinate = generators[part]
                if part != 0:
                    if (signs >> bit) & 1:
                        coordinate = -coordinate
                    bit += 1
                node.append(coordinate)
            nodes.append(tuple(node))
    return nodes


def compute_weights(partition: Sequence[int], level: int, table: WeightFactorTable, precision: int) -> Interval:
    r"""Compute the weight shared by all nodes of a partition :math:`P` in the sparse grid of level :math:`K`:

    .. math:: \frac{1}{2^k} \sum_{|Q| \leq K - |P|} \prod_d W_{P_d, P_d + Q_d},

    in which :math:`Q` ranges over tuples of nonnegative integers and :math:`k` is the number of nonzero parts.

    """
    partition = validate_partition(partition)
    context = get_context(precision)
    weight = context.mpf(0)
    for total in range(level - sum(partition) + 1):
        for offsets in lattice_points(len(partition), total):
            product = context.mpf(1)
            for part, offset in zip(partition, offsets):
                product *= table[part, part + int(offset)]
            weight += product

    # divide out the sign multiplicity of the partition
    nonzero = sum(1 for p in partition if p != 0)
    if nonzero > 0:
        weight /= 2**nonzero
    return weight


def genz_keister_construction(
        dimensions: int, level: int, generators: Sequence[Interval], table: WeightFactorTable,
        precision: int) -> Tuple[List[Node], List[Interval]]:
    """Construct the nodes and weights of the sparse grid of a level in a number of dimensions. Every partition of every
    total up to the level is visited in order of increasing totals and each admissible one adds its symmetric nodes,
    all paired with the same weight. Levels must be below the number of generators, or equal to it when the last
    moment coefficient is exactly zero.
    """
    if not isinstance(dimensions, int) or isinstance(dimensions, bool) or dimensions < 1:
        raise ValueError("dimensions must be a positive int.")
    if not isinstance(level, int) or isinstance(level, bool) or level < 0:
        raise ValueError("level must be a nonnegative int.")
    if not generators or not is_exact_zero(generators[0]):
        raise ValueError("The first generator must be exactly zero.")

    nodes: List[Node] = []
    weights: List[Interval] = []
    for total in range(level + 1):
        for partition in partitions(dimensions, total):
            if not is_admissible(partition, level):
                continue
            partition_nodes = compute_nodes(partition, generators)
            weight = compute_weights(partition, level, table, precision)
            nodes.extend(partition_nodes)
            weights.extend([weight] * len(partition_nodes))
    return nodes, weights
