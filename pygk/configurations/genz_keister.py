"""Configuration and construction of verified Genz-Keister sparse grids."""

import time
from typing import Sequence, Tuple, Union

from .family import Family
from .. import exceptions, options
from ..accuracy import check_rule_accuracy
from ..generators import compute_generators, count_generators
from ..grid import genz_keister_construction
from ..results.rule_results import RuleResults
from ..utilities.basics import StringRepresentation, format_seconds, output, warn
from ..weight_factors import compute_weightfactors


class GenzKeister(StringRepresentation):
    r"""Configuration for constructing nested, fully symmetric sparse grids of Genz-Keister type with verified accuracy.

    One-dimensional rules are nested: the nodes of each rule are the roots of the orthogonal polynomial of degree
    :math:`p_0` followed by the roots of minimal Kronrod-Patterson extensions of degrees :math:`p_1, p_2, \dots`. The
    nonnegative roots are called generators. Multidimensional rules combine generators in every fully symmetric way that
    is admissible for a sparse grid of level :math:`K`, which integrates polynomials of total degree up to
    :math:`2K + 1` exactly.

    All computation is done in interval arithmetic at a working precision that starts a number of guard bits above the
    target precision and is increased until every node coordinate and weight is verified to the target precision.

    Parameters
    ----------
    levels : `sequence of int, optional`
        Degrees :math:`p_0, p_1, \dots` of the orthogonal polynomial and its nested extensions. The default degrees,
        ``(1, 2, 6, 10, 16)``, are those of the nested Gauss-Hermite rules of Genz and Keister. The first degree must be
        ``1``: generators are ordered largest first within each level, so only the single root of the first-degree
        polynomial is the exactly zero center of the grid.
    family : `str or Family, optional`
        Weight function. By default, this is ``'hermite_probabilist'``, for which unscaled weights integrate against the
        standard normal density. See :class:`Family` for the other options.
    target_precision : `int, optional`
        Number of bits to which every node coordinate and weight will be verified. By default, this is ``53``, the
        precision of double precision floating point numbers.
    scale_weights : `bool, optional`
        Whether to multiply weights by the transcendental factor of the weight function, for example :math:`\sqrt{2\pi}`
        for ``'hermite_probabilist'``, so that weights integrate against the unnormalized weight function. By default,
        weights are not scaled and sum to a rational number.

    """

    _levels: Tuple[int, ...]
    _family: Family
    _target_precision: int
    _scale_weights: bool

    def __init__(
            self, levels: Sequence[int] = (1, 2, 6, 10, 16), family: Union[str, Family] = 'hermite_probabilist',
            target_precision: int = 53, scale_weights: bool = False) -> None:
        """Validate the configuration."""
        if isinstance(family, str):
            family = Family(family)
        if not isinstance(family, Family):
            raise TypeError("family must be a str or a Family.")
        if not isinstance(levels, (list, tuple)) or not levels:
            raise ValueError("levels must be a nonempty sequence.")
        if any(not isinstance(p, int) or isinstance(p, bool) or p < 1 for p in levels):
            raise ValueError("levels must be positive ints.")
        if not family.symmetric:
            raise ValueError("family must be symmetric to construct sparse grids.")
        if levels[0] != 1:
            raise ValueError("The first level must be 1 for the first generator to be the exactly zero center.")
        if not isinstance(target_precision, int) or target_precision < 1:
            raise ValueError("target_precision must be a positive int.")
        if not isinstance(scale_weights, bool):
            raise TypeError("scale_weights must be a bool.")

        # initialize class attributes
        self._levels = tuple(levels)
        self._family = family
        self._target_precision = target_precision
        self._scale_weights = scale_weights

    def __str__(self) -> str:
        """Format the configuration as a string."""
        scaled = "scaled" if self._scale_weights else "unscaled"
        return (
            f"Configured to construct nested rules with extension levels {list(self._levels)} from "
            f"{self._family._description}, verified to {self._target_precision} bits, with {scaled} weights."
        )

    @property
    def levels(self) -> Tuple[int, ...]:
        """Extension levels."""
        return self._levels

    @property
    def family(self) -> Family:
        """Weight function."""
        return self._family

    @property
    def target_precision(self) -> int:
        """Number of bits to which rules are verified."""
        return self._target_precision

    def _build(self, dimensions: int, level: int) -> RuleResults:
        """Construct nodes and weights, increasing the working precision until they are verified."""
        if not isinstance(options.guard_bits, int) or options.guard_bits < 0:
            raise ValueError("options.guard_bits must be a nonnegative int.")
        if not isinstance(options.precision_factor, int) or options.precision_factor < 2:
            raise ValueError("options.precision_factor must be an int of at least 2.")

        output(f"Constructing a level-{level} rule in {dimensions} dimensions ...")
        output(self)
        start_time = time.time()
        precision = self._target_precision + options.guard_bits
        expected = count_generators(self._levels, self._family)
        attempts = 0
        while True:
            attempts += 1
            generators = compute_generators(self._levels, precision, self._family)
            if attempts == 1 and len(generators) < expected:
                warn(
                    f"Computed only {len(generators)} out of {expected} generators because an extension level could "
                    f"not be solved. Rules that need more generators cannot be constructed."
                )
            table = compute_weightfactors(generators, precision, self._family)
            nodes, weights = genz_keister_construction(dimensions, level, generators, table, precision)
            if self._scale_weights:
                factor = self._family.transcendental_factor(precision)
                weights = [w * factor for w in weights]
            if check_rule_accuracy(nodes, weights, self._target_precision):
                break

            # increase the working precision unless it would exceed the limit
            next_precision = precision * options.precision_factor
            if next_precision > options.max_precision:
                raise exceptions.PrecisionInsufficientError(self._target_precision, precision)
            output(
                f"Failed to verify {len(nodes)} nodes and weights at {precision} bits of working precision. "
                f"Trying again with {next_precision} bits ..."
            )
            precision = next_precision

        end_time = time.time()
        results = RuleResults(
            self, dimensions, level, precision, attempts, generators, nodes, weights, start_time, end_time
        )
        output(f"Constructed and verified {results.size} nodes after {format_seconds(results.computation_time)}.")
        output("")
        output(results)
        return results
