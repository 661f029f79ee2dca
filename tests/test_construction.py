"""Tests of construction of verified rules, their results, and persistence."""

from pathlib import Path
from typing import Any, Dict

import mpmath
import numpy as np
import pytest

from pygk import (
    Family, GenzKeister, RuleResults, build_rule, build_rules, check_accuracy, exceptions, options, parallel,
    read_pickle, save_pickle
)
from pygk.utilities.intervals import get_context


@pytest.fixture(scope='module')
def genz_keister() -> GenzKeister:
    """Configure nested Gauss-Hermite rules with 1, 3, and 9 nodes."""
    return GenzKeister(levels=(1, 2, 6))


@pytest.fixture(scope='module')
def rule(genz_keister: GenzKeister) -> RuleResults:
    """Build a verified level-2 rule in two dimensions."""
    return build_rule(genz_keister, 2, 2)


def test_rule_summary(genz_keister: GenzKeister, rule: RuleResults) -> None:
    """Test that results describe the verified rule."""
    assert rule.genz_keister is genz_keister
    assert rule.family == Family('hermite_probabilist')
    assert rule.levels == (1, 2, 6)
    assert (rule.dimensions, rule.level, rule.target_precision) == (2, 2, 53)
    assert rule.precision >= 53 + options.guard_bits
    assert rule.attempts >= 1
    assert rule.nodes.shape == (rule.size, 2)
    assert rule.weights.shape == (rule.size,)
    assert len(rule.node_bounds) == len(rule.weight_bounds) == rule.size
    assert rule.max_radius < 2**-53
    assert len({tuple(n) for n in rule.nodes}) == rule.size
    np.testing.assert_allclose(rule.weights.sum(), 1, rtol=1e-14, atol=0)
    summary = str(rule)
    assert "Rule Results Summary" in summary and "Working" in summary
    assert "extension levels [1, 2, 6]" in str(genz_keister)


def test_bounds_enclose_midpoints(rule: RuleResults) -> None:
    """Test that exact bounds are ordered, narrow, and enclose the floating point views."""
    for weight, (lower, upper) in zip(rule.weights, rule.weight_bounds):
        assert isinstance(lower, mpmath.mpf) and isinstance(upper, mpmath.mpf)
        assert lower <= upper
        assert upper - lower < mpmath.ldexp(1, -52)
        assert abs(float(weight) - float((lower + upper) / 2)) <= 2**-52
    for node, bounds in zip(rule.nodes, rule.node_bounds):
        for coordinate, (lower, upper) in zip(node, bounds):
            assert lower <= upper
            assert abs(float(coordinate) - float((lower + upper) / 2)) <= 2**-50


def test_integrate(rule: RuleResults) -> None:
    """Test that results integrate polynomials of total degree up to five against the standard normal density."""
    np.testing.assert_allclose(rule.integrate(lambda x: x[:, 0]**2 * x[:, 1]**2), 1, rtol=1e-14, atol=0)
    np.testing.assert_allclose(rule.integrate(lambda x: x[:, 0]**4), 3, rtol=1e-14, atol=0)
    np.testing.assert_allclose(rule.integrate(lambda x: x**2), [1, 1], rtol=1e-14, atol=0)
    with pytest.raises(ValueError):
        rule.integrate(lambda x: x[:1])


def test_scaled_weights() -> None:
    """Test that scaled weights integrate against the unnormalized weight function."""
    rule = build_rule(GenzKeister(levels=(1, 2, 6), scale_weights=True), 1, 3)
    np.testing.assert_allclose(rule.weights.sum(), np.sqrt(2 * np.pi), rtol=1e-14, atol=0)
    assert rule.max_radius < 2**-53


def test_legendre_rule() -> None:
    """Test that a Legendre rule in three dimensions has the volume of the cube as its total weight."""
    rule = build_rule(GenzKeister(levels=(1, 2, 4), family='legendre', target_precision=80), 3, 2)
    assert rule.target_precision == 80
    np.testing.assert_allclose(rule.weights.sum(), 8, rtol=1e-14, atol=0)
    np.testing.assert_allclose(rule.integrate(lambda x: x[:, 0]**2 * x[:, 2]**2), 8 / 9, rtol=1e-13, atol=0)


def test_precision_increase(monkeypatch: Any) -> None:
    """Test that without guard bits the working precision is increased until the rule is verified."""
    monkeypatch.setattr(options, 'guard_bits', 0)
    rule = build_rule(GenzKeister(levels=(1, 2, 6), target_precision=200), 2, 1)
    assert rule.attempts == 2
    assert rule.precision == 200 * options.precision_factor
    assert rule.max_radius < 2**-200


def test_precision_insufficient(monkeypatch: Any) -> None:
    """Test that exceeding the maximum working precision gives rise to an exception."""
    monkeypatch.setattr(options, 'guard_bits', 0)
    monkeypatch.setattr(options, 'max_precision', 300)
    with pytest.raises(exceptions.PrecisionInsufficientError) as error_info:
        build_rule(GenzKeister(levels=(1, 2, 6), target_precision=200), 2, 1)
    assert "200" in str(error_info.value)


def test_insufficient_generators_warning() -> None:
    """Test that an unsolvable extension level is reported and that rules needing the missing generators fail."""
    genz_keister = GenzKeister(levels=(1, 2, 2))
    with pytest.warns(UserWarning):
        rule = build_rule(genz_keister, 1, 1)
    assert rule.generators.size == 2
    np.testing.assert_allclose(rule.weights.sum(), 1, rtol=1e-14, atol=0)
    with pytest.warns(UserWarning):
        with pytest.raises(exceptions.InsufficientGeneratorsError):
            build_rule(genz_keister, 1, 3)


def test_accuracy_of_results(genz_keister: GenzKeister) -> None:
    """Test that results can be checked against their exact bounds."""
    rule = build_rule(genz_keister, 3, 1)
    context = get_context(rule.precision)
    for lower, upper in rule.weight_bounds:
        assert check_accuracy(context.mpf([lower, upper]), rule.target_precision)


@pytest.mark.parametrize('processes', [
    pytest.param(None, id="serial"),
    pytest.param(2, id="parallel"),
])
def test_build_rules(genz_keister: GenzKeister, processes: Any) -> None:
    """Test that building multiple rules gives the same results as building them one at a time, in key order and
    without duplicates, regardless of whether a process pool is used.
    """
    keys = [(2, 2), (1, 3), (2, 2), (3, 0)]
    if processes is None:
        rules = build_rules(genz_keister, keys)
    else:
        with parallel(processes):
            rules = build_rules(genz_keister, keys)
    assert list(rules) == [(2, 2), (1, 3), (3, 0)]
    for (dimensions, level), rule in rules.items():
        expected = build_rule(genz_keister, dimensions, level)
        assert rule.size == expected.size
        np.testing.assert_array_equal(rule.nodes, expected.nodes)
        np.testing.assert_array_equal(rule.weights, expected.weights)
        assert rule.weight_bounds == expected.weight_bounds


def test_pickle(tmp_path: Path, rule: RuleResults) -> None:
    """Test that results survive pickling with both the method and the function."""
    method_path = tmp_path / 'method.pkl'
    function_path = tmp_path / 'function.pkl'
    rule.to_pickle(method_path)
    save_pickle(rule, function_path)
    for path in [method_path, function_path]:
        loaded = read_pickle(path)
        assert isinstance(loaded, RuleResults)
        np.testing.assert_array_equal(loaded.nodes, rule.nodes)
        assert loaded.weight_bounds == rule.weight_bounds
        assert loaded.family == rule.family


def test_to_dict(rule: RuleResults) -> None:
    """Test conversion of results into a dictionary."""
    mapping: Dict[str, Any] = rule.to_dict()
    assert 'genz_keister' not in mapping and 'family' not in mapping
    assert mapping['size'] == rule.size
    assert mapping['nodes'] is rule.nodes
    assert set(rule.to_dict(['level', 'precision'])) == {'level', 'precision'}


@pytest.mark.parametrize(['arguments', 'error'], [
    pytest.param({'levels': ()}, ValueError, id="empty levels"),
    pytest.param({'levels': (2, 2)}, ValueError, id="even first level"),
    pytest.param({'levels': (3, 6)}, ValueError, id="odd first level above one"),
    pytest.param({'levels': (1, True)}, ValueError, id="boolean level"),
    pytest.param({'levels': (1, 0)}, ValueError, id="zero level"),
    pytest.param({'levels': 3}, ValueError, id="scalar levels"),
    pytest.param({'family': 'unknown'}, ValueError, id="unknown family"),
    pytest.param({'family': 3}, TypeError, id="invalid family"),
    pytest.param({'family': 'laguerre'}, ValueError, id="asymmetric family"),
    pytest.param({'target_precision': 0}, ValueError, id="nonpositive precision"),
    pytest.param({'target_precision': 53.0}, ValueError, id="float precision"),
    pytest.param({'scale_weights': 1}, TypeError, id="integer scaling"),
])
def test_invalid_configuration(arguments: Dict[str, Any], error: type) -> None:
    """Test that invalid configurations give rise to exceptions."""
    with pytest.raises(error):
        GenzKeister(**arguments)


@pytest.mark.parametrize(['dimensions', 'level'], [
    pytest.param(0, 1, id="zero dimensions"),
    pytest.param(2, -1, id="negative level"),
    pytest.param(2.0, 1, id="float dimensions"),
    pytest.param(True, 1, id="boolean dimensions"),
    pytest.param(2, False, id="boolean level"),
])
def test_invalid_rule(genz_keister: GenzKeister, dimensions: Any, level: Any) -> None:
    """Test that invalid dimensions and levels give rise to exceptions."""
    with pytest.raises(ValueError):
        build_rule(genz_keister, dimensions, level)
    with pytest.raises(ValueError):
        build_rules(genz_keister, [(dimensions, level)])
    with pytest.raises(TypeError):
        build_rule(None, 1, 1)
