r"""Global options.

Attributes
----------
digits : `int`
    Number of digits displayed by status updates and formatted tables. The default number of digits is ``7``. The number
    of digits can be changed to, for example, ``2``, with ``pygk.options.digits = 2``.
verbose : `bool`
    Whether to output status updates. By default, verbosity is turned on. Verbosity can be turned off with
    ``pygk.options.verbose = False``.
verbose_tracebacks : `bool`
    Whether to include full tracebacks in error messages. By default, full tracebacks are turned off. These can be
    useful when attempting to find the source of an error message. Tracebacks can be turned on with
    ``pygk.options.verbose_tracebacks = True``.
verbose_output : `callable`
    Function used to output status updates. The default function is simply ``print``. The function can be changed, for
    example, to include an indicator that statuses are from this package, with
    ``pygk.options.verbose_output = lambda x: print(f"pygk: {x}")``.
flush_output : `bool`
    Whether to call ``sys.stdout.flush()`` after outputting a status update. By default, output is not flushed to
    standard output.
dtype : `dtype`
    The floating point type of the node and weight arrays in :class:`RuleResults`, which is by default
    ``numpy.float64``. All computation happens in interval arithmetic at the working precision, so this only affects
    the rounded views of verified rules. The other sensible option is ``numpy.longdouble``.
guard_bits : `int`
    Number of bits added to the target precision to get the first working precision tried by :func:`build_rule`. The
    default is ``32``. Root isolation and the weight factor table lose a handful of bits to cancellation, so a working
    precision equal to the target precision almost never verifies.
precision_factor : `int`
    Factor by which the working precision is multiplied after a rule fails verification. The default is ``2``.
max_precision : `int`
    Largest working precision in bits that :func:`build_rule` will try before raising
    :class:`~pygk.exceptions.PrecisionInsufficientError`. The default is ``4096``.

"""

import numpy as _np


digits = 7
verbose = True
verbose_tracebacks = False
verbose_output = print
flush_output = False
dtype = _np.float64
guard_bits = 32
precision_factor = 2
max_precision = 4096
