"""Tests of verification of the accuracy of intervals."""

import pytest

from pygk import check_accuracy, check_rule_accuracy
from pygk.utilities.intervals import get_context
from .conftest import PRECISION


@pytest.mark.parametrize(['target_precision', 'accurate'], [
    pytest.param(8, True, id="loose"),
    pytest.param(10, True, id="just below"),
    pytest.param(11, False, id="equal radius"),
    pytest.param(12, False, id="tight"),
])
def test_radius(target_precision: int, accurate: bool) -> None:
    """Test that an interval of radius 2^-11 is accurate exactly to targets of at most 10 bits."""
    context = get_context(PRECISION)
    interval = context.mpf([0, 1]) / 1024
    assert check_accuracy(interval, target_precision) == accurate


def test_monotonicity() -> None:
    """Test that an interval accurate to some target is accurate to all lower targets and that point intervals are
    accurate to any target.
    """
    context = get_context(PRECISION)
    interval = context.mpf(1) / 3
    results = [check_accuracy(interval, t) for t in range(1, 2 * PRECISION)]
    assert results == sorted(results, reverse=True)
    assert results[0] and not results[-1]
    assert check_accuracy(context.mpf(3), 10 * PRECISION)


def test_rule_accuracy() -> None:
    """Test that a single inaccurate node coordinate or weight fails a rule."""
    context = get_context(PRECISION)
    accurate = context.mpf(1) / 3
    inaccurate = context.mpf([0, 1])
    assert check_rule_accuracy([(accurate, accurate)], [accurate], 53)
    assert not check_rule_accuracy([(accurate, inaccurate)], [accurate], 53)
    assert not check_rule_accuracy([(accurate, accurate)], [inaccurate], 53)
    with pytest.raises(ValueError):
        check_rule_accuracy([(accurate,)], [], 53)
