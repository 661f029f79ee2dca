"""Computation of generators, the nonnegative roots of nested polynomial extensions."""

import functools
import operator
from typing import Iterable, List, Optional, Sequence, Tuple

import sympy

from . import exceptions
from .configurations.family import Family, X
from .utilities.basics import Interval, output
from .utilities.intervals import enclose, get_context, get_midpoint


class PolynomialChain(object):
    """Exact rational factors of a nested polynomial: a base polynomial followed by its extensions, and their product.
    Chains are never modified, extending one creates another.
    """

    factors: Tuple[sympy.Poly, ...]
    polynomial: sympy.Poly

    def __init__(self, factors: Iterable[sympy.Poly]) -> None:
        """Multiply the factors."""
        self.factors = tuple(factors)
        if not self.factors:
            raise ValueError("A polynomial chain needs at least one factor.")
        self.polynomial = functools.reduce(operator.mul, self.factors)

    def __len__(self) -> int:
        """The number of factors."""
        return len(self.factors)

    @property
    def degree(self) -> int:
        """The degree of the product."""
        return self.polynomial.degree()

    def extend(self, extension: sympy.Poly) -> 'PolynomialChain':
        """Create a chain with an additional factor."""
        return PolynomialChain(self.factors + (extension,))


def find_extension(chain: PolynomialChain, degree: int, family: Family) -> Optional[sympy.Poly]:
    r"""Find the monic extension :math:`E` of a degree such that :math:`\int P(x) E(x) x^k w(x) dx = 0` for
    :math:`k = 0, \dots, p - 1`, in which :math:`P` is the accumulated polynomial. Return None if the linear system is
    singular or if its solution is not a valid extension.
    """
    coefficients = chain.polynomial.all_coeffs()[::-1]
    moments = family.moments(chain.degree + 2 * degree)
    inner = [sum(c * moments[d + m] for d, c in enumerate(coefficients) if c != 0) for m in range(2 * degree)]

    # solve for the non-leading coefficients of the extension in the Hankel system
    matrix = sympy.Matrix(degree, degree, lambda k, j: inner[j + k])
    vector = sympy.Matrix(degree, 1, lambda k, _: -inner[degree + k])
    if matrix.rank() < degree:
        return None
    solution = list(matrix.LUsolve(vector))
    extension = sympy.Poly([1] + solution[::-1], X, domain=sympy.QQ)
    if not is_valid_extension(chain, extension, family):
        return None
    return extension


def is_valid_extension(chain: PolynomialChain, extension: sympy.Poly, family: Family) -> bool:
    """Determine whether all roots of an extension are simple, real, new, and inside the open support."""
    if extension.gcd(extension.diff(X)).degree() > 0:
        return False
    if extension.gcd(chain.polynomial).degree() > 0:
        return False
    lower, upper = family.support
    for bound in (lower, upper):
        if bound is not None and extension.eval(bound) == 0:
            return False
    return extension.count_roots(lower, upper) == extension.degree()


def extract_roots(polynomial: sympy.Poly, precision: int) -> List[Interval]:
    """Isolate the real roots of an exact rational polynomial to a width below 2^-(precision + 1) and enclose them in
    intervals at the working precision.
    """
    context = get_context(precision)
    eps = sympy.Rational(1, 2**(precision + 1))
    roots = []
    for (lower, upper), multiplicity in polynomial.intervals(eps=eps):
        if multiplicity != 1:
            raise ValueError(f"Roots of {polynomial.as_expr()} must be simple.")
        roots.append(enclose(context, lower, upper))
    return roots


def maxmin_sort(roots: Sequence[Interval]) -> List[Interval]:
    """Order roots with nonnegative midpoints by alternately taking the largest and smallest remaining one, starting
    with the largest. Roots with negative midpoints are dropped and ties go to the first root.
    """
    candidates = [(get_midpoint(r), r) for r in roots]
    candidates = [(m, r) for m, r in candidates if m >= 0]
    ordered = []
    largest = True
    while candidates:
        index = 0
        for candidate_index, (midpoint, _) in enumerate(candidates[1:], start=1):
            best = candidates[index][0]
            if (midpoint > best) if largest else (midpoint < best):
                index = candidate_index
        ordered.append(candidates.pop(index)[1])
        largest = not largest
    return ordered


@functools.lru_cache()
def build_chain(levels: Tuple[int, ...], family: Family) -> PolynomialChain:
    """Build the chain of nested extensions for the extension levels, stopping at the first level that cannot be solved.
    Chains are exact, so they are shared by all working precisions.
    """
    chain = PolynomialChain([family.polynomial(levels[0])])
    for index, degree in enumerate(levels[1:], start=1):
        extension = find_extension(chain, degree, family)
        if extension is None:
            output(exceptions.UnsolvableExtensionError(index, degree))
            break
        chain = chain.extend(extension)
    return chain


def compute_generators(levels: Sequence[int], precision: int, family: Family) -> List[Interval]:
    """Compute the generators of nested rules with the extension levels at a working precision. The roots of each factor
    are ordered by the max-min heuristic and appended to the list. If an extension level cannot be solved, generators
    of earlier levels are returned.
    """
    levels = tuple(levels)
    if not levels or any(not isinstance(p, int) or isinstance(p, bool) or p < 1 for p in levels):
        raise ValueError("levels must be a nonempty sequence of positive ints.")
    generators: List[Interval] = []
    for factor in build_chain(levels, family).factors:
        generators.extend(maxmin_sort(extract_roots(factor, precision)))
    return generators


def count_generators(levels: Sequence[int], family: Family) -> int:
    """Count the generators that extension levels produce when every level can be solved."""
    if family.symmetric:
        return sum((p + 1) // 2 for p in levels)
    return sum(levels)
