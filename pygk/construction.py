"""Construction of verified rules and persistence of results."""

from pathlib import Path
import pickle
import time
from typing import Dict, Iterable, Tuple, Union

from .configurations.genz_keister import GenzKeister
from .results.rule_results import RuleResults
from .utilities.basics import format_seconds, generate_items, output, output_progress


def build_rule(genz_keister: GenzKeister, dimensions: int, level: int) -> RuleResults:
    r"""Build the nodes and weights of a verified sparse grid.

    The working precision starts at the target precision plus ``options.guard_bits`` and is multiplied by
    ``options.precision_factor`` until every node coordinate and weight has been verified to the target precision, or
    until it would exceed ``options.max_precision``, in which case a
    :class:`~pygk.exceptions.PrecisionInsufficientError` is raised.

    Parameters
    ----------
    genz_keister : `GenzKeister`
        :class:`GenzKeister` configuration for the nested one-dimensional rules and the target precision.
    dimensions : `int`
        Number of dimensions, :math:`D`.
    level : `int`
        Level of the sparse grid, :math:`K`. Polynomials of total degree up to :math:`2K + 1` are integrated exactly.
        Levels below the number of generators, which is counted by :func:`count_generators`, are always supported.

    Returns
    -------
    `RuleResults`
        :class:`RuleResults` of the verified rule.

    """
    if not isinstance(genz_keister, GenzKeister):
        raise TypeError("genz_keister must be a GenzKeister instance.")
    if not isinstance(dimensions, int) or isinstance(dimensions, bool) or dimensions < 1:
        raise ValueError("dimensions must be a positive integer.")
    if not isinstance(level, int) or isinstance(level, bool) or level < 0:
        raise ValueError("level must be a nonnegative integer.")
    return genz_keister._build(dimensions, level)


def build_rules(
        genz_keister: GenzKeister, keys: Iterable[Tuple[int, int]]) -> Dict[Tuple[int, int], RuleResults]:
    r"""Build verified sparse grids for multiple dimensions and levels.

    Rules are independent, so when this function is called in a :func:`parallel` context, they are built by a pool of
    processes. Otherwise, they are built one after another.

    Parameters
    ----------
    genz_keister : `GenzKeister`
        :class:`GenzKeister` configuration shared by all rules.
    keys : `iterable of tuple`
        Pairs of dimensions :math:`D` and levels :math:`K`, one for each rule.

    Returns
    -------
    `dict`
        Mapping from ``(dimensions, level)`` pairs to :class:`RuleResults`.

    """
    if not isinstance(genz_keister, GenzKeister):
        raise TypeError("genz_keister must be a GenzKeister instance.")
    keys = list(dict.fromkeys(tuple(k) for k in keys))
    for dimensions, level in keys:
        if not isinstance(dimensions, int) or isinstance(dimensions, bool) or dimensions < 1:
            raise ValueError("dimensions in keys must be positive integers.")
        if not isinstance(level, int) or isinstance(level, bool) or level < 0:
            raise ValueError("levels in keys must be nonnegative integers.")

    output(f"Building {len(keys)} rules ...")
    start_time = time.time()
    rules: Dict[Tuple[int, int], RuleResults] = {}
    generator = generate_items(keys, lambda k: (genz_keister, *k), GenzKeister._build)
    for key, results in output_progress(generator, len(keys), start_time):
        rules[key] = results
    output(f"Built {len(keys)} rules after {format_seconds(time.time() - start_time)}.")
    return {k: rules[k] for k in keys}


def save_pickle(x: object, path: Union[str, Path]) -> None:
    """Save an object as a pickle file.

    This is a simple wrapper around `pickle.dump`.

    Parameters
    ----------
    x : `object`
        Object to be pickled.
    path : `str or Path`
        File path to which the object will be saved.

    """
    with open(path, 'wb') as handle:
        pickle.dump(x, handle)


def read_pickle(path: Union[str, Path]) -> object:
    """Load a pickled object into memory.

    This is a simple wrapper around `pickle.load`.

    Parameters
    ----------
    path : `str or Path`
        File path of a pickled object.

    Returns
    -------
    `object`
        The unpickled object.

    """
    with open(path, 'rb') as handle:
        return pickle.load(handle)
