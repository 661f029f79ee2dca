"""Structuring of verified quadrature rules."""

from pathlib import Path
import pickle
from typing import Callable, List, Sequence, Tuple, TYPE_CHECKING, Union

import mpmath
import numpy as np

from .. import options
from ..configurations.family import Family
from ..utilities.basics import (
    Array, Interval, Node, StringRepresentation, format_number, format_seconds, format_table
)
from ..utilities.intervals import get_endpoints, get_midpoint, get_radius


# only import objects that create import cycles when checking types
if TYPE_CHECKING:
    from ..configurations.genz_keister import GenzKeister  # noqa


class RuleResults(StringRepresentation):
    r"""Results of a verified Genz-Keister sparse grid.

    Nodes and weights were computed in interval arithmetic and every interval was verified to have a radius below
    :math:`2^{-p}` for the target precision :math:`p`. Floating point views of midpoints are convenient for integration,
    while exact interval endpoints are kept for applications that need verified bounds.

    Attributes
    ----------
    genz_keister : `GenzKeister`
        :class:`GenzKeister` configuration that created these results.
    family : `Family`
        :class:`Family` of the weight function.
    levels : `tuple of int`
        Extension levels of the nested one-dimensional rules.
    dimensions : `int`
        Number of dimensions, :math:`D`.
    level : `int`
        Level of the sparse grid, :math:`K`.
    target_precision : `int`
        Number of bits to which every node coordinate and weight was verified.
    precision : `int`
        Working precision in bits at which verification succeeded.
    attempts : `int`
        Number of working precisions that were tried.
    computation_time : `float`
        Number of seconds it took to construct and verify the rule.
    size : `int`
        Number of nodes.
    generators : `ndarray`
        Midpoints of the generators that were used.
    nodes : `ndarray`
        Midpoints of node coordinates, one row for each node.
    weights : `ndarray`
        Midpoints of weights.
    node_bounds : `list of tuple`
        For each node, a tuple of exact lower and upper :class:`mpmath.mpf` bounds for each coordinate.
    weight_bounds : `list of tuple`
        Exact lower and upper :class:`mpmath.mpf` bounds for each weight.
    max_radius : `float`
        Largest radius among all node coordinates and weights.

    """

    genz_keister: 'GenzKeister'
    family: Family
    levels: Tuple[int, ...]
    dimensions: int
    level: int
    target_precision: int
    precision: int
    attempts: int
    computation_time: float
    size: int
    generators: Array
    nodes: Array
    weights: Array
    node_bounds: List[Tuple[Tuple[mpmath.mpf, mpmath.mpf], ...]]
    weight_bounds: List[Tuple[mpmath.mpf, mpmath.mpf]]
    max_radius: float

    def __init__(
            self, genz_keister: 'GenzKeister', dimensions: int, level: int, precision: int, attempts: int,
            generators: Sequence[Interval], nodes: Sequence[Node], weights: Sequence[Interval], start_time: float,
            end_time: float) -> None:
        """Structure rule results."""
        self.genz_keister = genz_keister
        self.family = genz_keister.family
        self.levels = genz_keister.levels
        self.dimensions = dimensions
        self.level = level
        self.target_precision = genz_keister.target_precision
        self.precision = precision
        self.attempts = attempts
        self.computation_time = end_time - start_time
        self.size = len(nodes)
        self.generators = to_array([get_midpoint(g) for g in generators])
        self.nodes = to_array([get_midpoint(x) for n in nodes for x in n]).reshape(self.size, dimensions)
        self.weights = to_array([get_midpoint(w) for w in weights])
        self.node_bounds = [tuple(get_endpoints(x) for x in n) for n in nodes]
        self.weight_bounds = [get_endpoints(w) for w in weights]
        radii = [get_radius(x) for n in nodes for x in n] + [get_radius(w) for w in weights]
        self.max_radius = float(max(radii, default=mpmath.mpf(0)))

    def __str__(self) -> str:
        """Format rule results as a string."""
        header = [
            "Dimensions",
            "Level",
            "Nodes",
            "Generators",
            ("Target", "Precision"),
            ("Working", "Precision"),
            "Attempts",
            ("Max", "Radius"),
            ("Weight", "Sum"),
            ("Computation", "Time"),
        ]
        values = [
            self.dimensions,
            self.level,
            self.size,
            self.generators.size,
            self.target_precision,
            self.precision,
            self.attempts,
            format_number(self.max_radius),
            format_number(self.weights.sum()),
            format_seconds(self.computation_time),
        ]
        return format_table(header, values, title="Rule Results Summary")

    def integrate(self, function: Callable[[Array], Array]) -> Array:
        """Integrate a function against the weight function with the rule.

        Parameters
        ----------
        function : `callable`
            Function that is evaluated at :attr:`RuleResults.nodes`, an array with one row for each node, and that
            returns an array with one row of values for each node.

        Returns
        -------
        `ndarray`
            Weighted sum of values.

        """
        values = np.asarray(function(self.nodes), dtype=self.weights.dtype)
        if values.shape[:1] != (self.size,):
            raise ValueError(f"function must return an array with {self.size} rows.")
        return self.weights @ values

    def to_pickle(self, path: Union[str, Path]) -> None:
        """Save these results as a pickle file.

        Parameters
        ----------
        path: `str or Path`
            File path to which these results will be saved.

        """
        with open(path, 'wb') as handle:
            pickle.dump(self, handle)

    def to_dict(
            self, attributes: Sequence[str] = (
                'levels', 'dimensions', 'level', 'target_precision', 'precision', 'attempts', 'computation_time',
                'size', 'generators', 'nodes', 'weights', 'node_bounds', 'weight_bounds', 'max_radius'
            )) -> dict:
        """Convert these results into a dictionary that maps attribute names to values.

        Parameters
        ----------
        attributes : `sequence of str, optional`
            Name of attributes that will be added to the dictionary. By default, all :class:`RuleResults` attributes are
            added except for :attr:`RuleResults.genz_keister` and :attr:`RuleResults.family`.

        Returns
        -------
        `dict`
            Mapping from attribute names to values.

        """
        return {k: getattr(self, k) for k in attributes}


def to_array(values: Sequence[mpmath.mpf]) -> Array:
    """Round exact values to an array of the configured floating point type."""
    if not values:
        return np.array([], options.dtype)
    digits = int(np.finfo(options.dtype).precision) + 3
    return np.array([mpmath.nstr(v, digits, strip_zeros=False) for v in values]).astype(options.dtype)
