"""Interval numbers backed by the mpmath interval context."""

import functools
from typing import Any, Tuple

import mpmath
from mpmath.ctx_iv import MPIntervalContext
import sympy

from .basics import Interval


# define common types
Context = Any


@functools.lru_cache()
def get_context(precision: int) -> Context:
    """Create an interval context for a working precision in bits. Contexts are cached by precision and their precision
    is never changed after creation, so all stages that run at the same precision share a context.
    """
    if not isinstance(precision, int) or precision < 2:
        raise ValueError("precision must be an int of at least 2 bits.")
    context = MPIntervalContext()
    context.prec = precision
    return context


def from_rational(context: Context, value: Any) -> Interval:
    """Enclose an exact rational number in an interval."""
    rational = sympy.Rational(value)
    return context.mpf(int(rational.p)) / int(rational.q)


def enclose(context: Context, lower: Any, upper: Any) -> Interval:
    """Enclose the rational interval [lower, upper] in an interval of the context."""
    if lower == upper:
        return from_rational(context, lower)
    lower_interval = from_rational(context, lower)
    upper_interval = from_rational(context, upper)
    center = (lower_interval + upper_interval) / 2
    half_width = (upper_interval - lower_interval) / 2
    return center + half_width * context.mpf([-1, 1])


def get_endpoints(value: Interval) -> Tuple[mpmath.mpf, mpmath.mpf]:
    """Extract exact lower and upper endpoints. Unlike intervals, these can be pickled."""
    lower, upper = value._mpi_
    return mpmath.mp.make_mpf(lower), mpmath.mp.make_mpf(upper)


def get_midpoint(value: Interval) -> mpmath.mpf:
    """Extract the exact midpoint of an interval, rounded to its context's precision."""
    return get_endpoints(value.mid)[0]


def get_radius(value: Interval) -> mpmath.mpf:
    """Compute an upper bound on the radius of an interval."""
    return get_endpoints((value.b - value.a) / 2)[1]


def is_exact_zero(value: Interval) -> bool:
    """Determine whether an interval is the point zero."""
    lower, upper = get_endpoints(value)
    return lower == 0 and upper == 0
