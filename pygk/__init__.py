"""Public-facing objects."""

from . import exceptions, options
from .accuracy import check_accuracy, check_rule_accuracy
from .configurations.family import Family
from .configurations.genz_keister import GenzKeister
from .construction import build_rule, build_rules, save_pickle, read_pickle
from .generators import compute_generators, count_generators, maxmin_sort
from .grid import compute_nodes, compute_weights, genz_keister_construction
from .results.rule_results import RuleResults
from .utilities.basics import parallel
from .version import __version__
from .weight_factors import WeightFactorTable, compute_weightfactors

__all__ = [
    'exceptions', 'options', 'check_accuracy', 'check_rule_accuracy', 'Family', 'GenzKeister', 'build_rule',
    'build_rules', 'save_pickle', 'read_pickle', 'compute_generators', 'count_generators', 'maxmin_sort',
    'compute_nodes', 'compute_weights', 'genz_keister_construction', 'RuleResults', 'parallel', '__version__',
    'WeightFactorTable', 'compute_weightfactors'
]
