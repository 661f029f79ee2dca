"""Classical orthogonal polynomial families and their exact moments."""

from typing import Any, Callable, List, Optional, Tuple

import sympy

from ..utilities.basics import Interval, StringRepresentation
from ..utilities.intervals import get_context


# define the symbol in which all polynomials are expressed
X = sympy.Symbol('x')


class Family(StringRepresentation):
    r"""Configuration for a classical weight function and its orthogonal polynomials.

    A family supplies exact rational orthogonal polynomials, the exact rational part of each moment of its weight
    function, and the transcendental factor by which the rational part of every moment is multiplied. Rules constructed
    with unscaled weights integrate against the weight function divided by this factor.

    Parameters
    ----------
    specification : `str`
        The weight function. One of the following:

            - ``'hermite_probabilist'`` - Probabilists' Hermite polynomials :math:`He_n` and the weight
              :math:`\exp(-x^2 / 2)` on the real line. Unscaled weights integrate against the standard normal density.

            - ``'hermite_physicist'`` - Physicists' Hermite polynomials :math:`H_n` and the weight :math:`\exp(-x^2)` on
              the real line.

            - ``'legendre'`` - Legendre polynomials :math:`P_n` and the unit weight on :math:`[-1, 1]`.

            - ``'laguerre'`` - Laguerre polynomials :math:`L_n` and the weight :math:`\exp(-x)` on :math:`[0, \infty)`.
              This weight is not symmetric, so it only supports computing generators.

            - ``'chebyshev_first'`` - Chebyshev polynomials of the first kind :math:`T_n` and the weight
              :math:`(1 - x^2)^{-1/2}` on :math:`[-1, 1]`.

            - ``'chebyshev_second'`` - Chebyshev polynomials of the second kind :math:`U_n` and the weight
              :math:`(1 - x^2)^{1/2}` on :math:`[-1, 1]`.

    """

    symmetric: bool
    support: Tuple[Optional[sympy.Rational], Optional[sympy.Rational]]
    _specification: str
    _description: str
    _polynomial: Callable
    _moment: Callable[[int], sympy.Rational]
    _factor: Callable[[Any], Interval]

    def __init__(self, specification: str) -> None:
        """Validate the specification and identify the polynomials and moments."""
        unbounded = (None, None)
        bounded = (sympy.Integer(-1), sympy.Integer(1))
        specifications = {
            'hermite_probabilist': (
                sympy.hermite_prob_poly, hermite_probabilist_moment, sqrt_two_pi, True, unbounded,
                "probabilists' Hermite polynomials"
            ),
            'hermite_physicist': (
                sympy.hermite_poly, hermite_physicist_moment, sqrt_pi, True, unbounded,
                "physicists' Hermite polynomials"
            ),
            'legendre': (sympy.legendre_poly, legendre_moment, one, True, bounded, "Legendre polynomials"),
            'laguerre': (
                sympy.laguerre_poly, laguerre_moment, one, False, (sympy.Integer(0), None), "Laguerre polynomials"
            ),
            'chebyshev_first': (
                sympy.chebyshevt_poly, chebyshev_first_moment, pi, True, bounded,
                "Chebyshev polynomials of the first kind"
            ),
            'chebyshev_second': (
                sympy.chebyshevu_poly, chebyshev_second_moment, pi, True, bounded,
                "Chebyshev polynomials of the second kind"
            ),
        }

        # validate the configuration
        if specification not in specifications:
            raise ValueError(f"specification must be one of {list(specifications.keys())}.")

        # initialize class attributes
        self._specification = specification
        self._polynomial, self._moment, self._factor, self.symmetric, self.support, self._description = (
            specifications[specification]
        )

    def __str__(self) -> str:
        """Format the configuration as a string."""
        return f"Configured to use {self._description} ('{self._specification}')."

    def __eq__(self, other: Any) -> bool:
        """Families with the same specification are interchangeable."""
        return isinstance(other, Family) and self._specification == other._specification

    def __hash__(self) -> int:
        """Hash the specification."""
        return hash((type(self).__name__, self._specification))

    @property
    def specification(self) -> str:
        """The name of the weight function."""
        return self._specification

    def polynomial(self, degree: int) -> sympy.Poly:
        """Construct the exact orthogonal polynomial of a degree with rational coefficients."""
        if not isinstance(degree, int) or degree < 0:
            raise ValueError("degree must be a nonnegative int.")
        return self._polynomial(degree, X, polys=True).set_domain(sympy.QQ)

    def integrate(self, order: int) -> sympy.Rational:
        """Compute the rational part of the moment of an order."""
        if not isinstance(order, int) or order < 0:
            raise ValueError("order must be a nonnegative int.")
        if self.symmetric and order % 2 == 1:
            return sympy.Integer(0)
        return sympy.Rational(self._moment(order))

    def moments(self, order: int) -> List[sympy.Rational]:
        """Compute the rational parts of all moments up to and including an order."""
        return [self.integrate(o) for o in range(order + 1)]

    def transcendental_factor(self, precision: int) -> Interval:
        """Enclose the factor that turns rational parts of moments into moments at a working precision."""
        return self._factor(get_context(precision))


def hermite_probabilist_moment(order: int) -> sympy.Rational:
    """Compute the even moment (n - 1)!! of the standard normal distribution."""
    return sympy.factorial2(order - 1)


def hermite_physicist_moment(order: int) -> sympy.Rational:
    """Compute the even moment (n - 1)!! / 2^(n / 2) of exp(-x^2) divided by sqrt(pi)."""
    return sympy.factorial2(order - 1) / sympy.Integer(2)**(order // 2)


def legendre_moment(order: int) -> sympy.Rational:
    """Compute the even moment 2 / (n + 1) of the unit weight on [-1, 1]."""
    return sympy.Rational(2, order + 1)


def laguerre_moment(order: int) -> sympy.Rational:
    """Compute the moment n! of exp(-x) on [0, infinity)."""
    return sympy.factorial(order)


def chebyshev_first_moment(order: int) -> sympy.Rational:
    """Compute the even moment of (1 - x^2)^(-1/2) divided by pi."""
    half = order // 2
    return sympy.factorial2(2 * half - 1) / (sympy.Integer(2)**half * sympy.factorial(half))


def chebyshev_second_moment(order: int) -> sympy.Rational:
    """Compute the even moment of (1 - x^2)^(1/2) divided by pi."""
    half = order // 2
    return sympy.factorial2(2 * half - 1) / (sympy.Integer(2)**(half + 1) * sympy.factorial(half + 1))


def sqrt_two_pi(context: Any) -> Interval:
    """Enclose sqrt(2 pi)."""
    return context.sqrt(2 * context.pi)


def sqrt_pi(context: Any) -> Interval:
    """Enclose sqrt(pi)."""
    return context.sqrt(context.pi)


def pi(context: Any) -> Interval:
    """Enclose pi."""
    return context.mpf(1) * context.pi


def one(context: Any) -> Interval:
    """The exact unit factor."""
    return context.mpf(1)

