"""Construction of the triangular table of weight factors from generators and moments."""

from typing import List, Optional, Sequence, Tuple

from . import exceptions
from .configurations.family import Family
from .utilities.basics import Interval, StringRepresentation, format_number, format_table
from .utilities.intervals import from_rational, get_context, get_midpoint, is_exact_zero


class WeightFactorTable(StringRepresentation):
    r"""Upper-triangular table of weight factors :math:`W_{\xi\theta}`, the contribution of generator :math:`\xi` to
    the weight of a node when the Smolyak difference of level :math:`\theta` is taken along an axis.

    Rows and columns are indexed from zero through the number of generators. Entries below the diagonal are exactly
    zero. Entries that depend on a generator beyond the computed ones are only defined when they are exactly zero, so
    reading any other such entry raises an error. Since the weights of a rule of level :math:`K` read columns :math:`0`
    through :math:`K`, rules can be built for levels below the number of generators :math:`n`, and for level :math:`n`
    only when :math:`a_n` is exactly zero.

    """

    size: int
    _entries: Tuple[Tuple[Optional[Interval], ...], ...]

    def __init__(self, entries: Sequence[Sequence[Optional[Interval]]]) -> None:
        """Freeze the entries."""
        self._entries = tuple(tuple(r) for r in entries)
        self.size = len(self._entries)

    def __str__(self) -> str:
        """Format the midpoints of defined entries as a string."""
        header = ["Generator"] + [f"Level {t}" for t in range(self.size)]
        data = []
        for xi, row in enumerate(self._entries):
            data.append([str(xi)] + ["" if e is None else format_number(get_midpoint(e)) for e in row])
        return format_table(header, *data, title="Weight Factors", line_indices=[0])

    def __getitem__(self, index: Tuple[int, int]) -> Interval:
        """Get a defined entry."""
        xi, theta = index
        if xi < 0 or theta < 0:
            raise IndexError("Weight factor indices must be nonnegative.")
        if xi >= self.size or theta >= self.size:
            raise exceptions.InsufficientGeneratorsError(max(xi, theta), self.size - 1)
        entry = self._entries[xi][theta]
        if entry is None:
            raise exceptions.InsufficientGeneratorsError(self.size - 1, self.size - 1)
        return entry

    def is_defined(self, xi: int, theta: int) -> bool:
        """Determine whether an entry can be read."""
        return 0 <= xi < self.size and 0 <= theta < self.size and self._entries[xi][theta] is not None


def compute_weightfactors(generators: Sequence[Interval], precision: int, family: Family) -> WeightFactorTable:
    r"""Compute the table of weight factors for generators of a symmetric family.

    With :math:`a_i` the moment of :math:`\prod_{j < i} (x^2 - g_j^2)`, the entries are

    .. math:: W_{\xi\theta} = \frac{a_\theta}{\prod_{j \leq \theta, j \neq \xi} (g_\xi^2 - g_j^2)}

    for :math:`\theta \geq \xi`. Moment coefficients with a midpoint of exactly zero are taken to be exactly zero.

    """
    if not family.symmetric:
        raise ValueError("Weight factors can only be computed for symmetric families.")
    context = get_context(precision)
    size = len(generators)
    zero = context.mpf(0)

    # enclose the rational parts of moments, keeping odd ones exactly zero
    moments = [from_rational(context, m) for m in family.moments(2 * size)]
    squares = [g**2 for g in generators]

    # compute moment coefficients from the running polynomial prod_{j < i} (x^2 - g_j^2)
    coefficients: List[Interval] = [context.mpf(1)]
    a = [moments[0]]
    for square in squares:
        shifted = [zero, zero] + coefficients
        scaled = [c * square for c in coefficients] + [zero, zero]
        coefficients = [s - t for s, t in zip(shifted, scaled)]
        value = zero
        for degree, coefficient in enumerate(coefficients):
            if degree % 2 == 0:
                value += coefficient * moments[degree]
        if get_midpoint(value) == 0:
            value = zero
        a.append(value)

    # fill rows while keeping a running product of squared differences
    entries: List[List[Optional[Interval]]] = [[zero] * (size + 1) for _ in range(size + 1)]
    for xi in range(size + 1):
        product: Optional[Interval] = context.mpf(1)
        for theta in range(size + 1):
            if theta != xi and product is not None:
                product = None if size in {xi, theta} else product * (squares[xi] - squares[theta])
            if theta >= xi:
                if is_exact_zero(a[theta]):
                    entries[xi][theta] = zero
                elif product is None:
                    entries[xi][theta] = None
                else:
                    entries[xi][theta] = a[theta] / product
    return WeightFactorTable(entries)
