"""Fixtures used by tests."""

import os
from typing import cast, Any, Iterator, List

import numpy as np
import pytest

from pygk import Family, compute_generators, options
from pygk.utilities.basics import Interval


# working precision shared by tests of individual stages
PRECISION = 96


@pytest.fixture(scope='session', autouse=True)
def configure() -> Iterator[None]:
    """Configure NumPy so that it raises all warnings as exceptions and turn off status updates. Next, if a DTYPE
    environment variable is set in this testing environment that is different from the default data type, use it for
    the floating point views of rules.
    """
    old_error = np.seterr(all='raise')
    old_verbose = options.verbose
    options.verbose = False

    # use any different data type for rule results
    old_dtype = options.dtype
    dtype_string = os.environ.get('DTYPE')
    if dtype_string:
        options.dtype = cast(Any, np.dtype(dtype_string).type)
        if np.finfo(options.dtype).dtype == old_dtype:
            pytest.skip(f"The {dtype_string} data type is the same as the default one in this environment.")

    yield

    options.verbose = old_verbose
    options.dtype = old_dtype
    np.seterr(**old_error)


@pytest.fixture(scope='session')
def hermite() -> Family:
    """Configure the probabilists' Hermite family."""
    return Family('hermite_probabilist')


@pytest.fixture(scope='session')
def legendre() -> Family:
    """Configure the Legendre family."""
    return Family('legendre')


@pytest.fixture(scope='session')
def hermite_generators(hermite: Family) -> List[Interval]:
    """Compute the generators of the nested Gauss-Hermite rules with 1, 3, and 9 nodes."""
    return compute_generators((1, 2, 6), PRECISION, hermite)


@pytest.fixture(scope='session')
def legendre_generators(legendre: Family) -> List[Interval]:
    """Compute the generators of the nested Gauss-Legendre rules with 1, 3, and 7 nodes."""
    return compute_generators((1, 2, 4), PRECISION, legendre)
