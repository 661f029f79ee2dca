"""Rule construction exceptions."""

from .utilities.basics import Error


class UnsolvableExtensionError(Error):
    """Failed to find a nested extension of the accumulated polynomial.

    The linear system that defines the extension is singular, or its solution does not have distinct real roots that lie
    inside the support of the weight function and differ from all earlier generators. Generators from earlier extension
    levels are kept. A different sequence of extension levels can sometimes be solved.

    """

    _index: int
    _degree: int

    def __init__(self, index: int, degree: int) -> None:
        """Store the extension level."""
        super().__init__()
        self._index = index
        self._degree = degree

    def __str__(self) -> str:
        """Supplement the error with the extension level."""
        return f"{super().__str__()} Extension level index: {self._index}. Extension degree: {self._degree}."


class PrecisionInsufficientError(Error):
    """Failed to verify the accuracy of nodes and weights at the largest allowed working precision.

    This problem can sometimes be mitigated by increasing options.max_precision or by lowering the target precision.

    """

    _target_precision: int
    _precision: int

    def __init__(self, target_precision: int, precision: int) -> None:
        """Store the precisions."""
        super().__init__()
        self._target_precision = target_precision
        self._precision = precision

    def __str__(self) -> str:
        """Supplement the error with the precisions."""
        return (
            f"{super().__str__()} Target precision: {self._target_precision} bits. Largest working precision: "
            f"{self._precision} bits."
        )


class UnsupportedPartSizeError(Error):
    """Encountered a partition part beyond the range of the admissibility defect table.

    Defects are only tabulated for small part values, which limits the levels of rules that can be constructed.

    """

    _part: int
    _limit: int

    def __init__(self, part: int, limit: int) -> None:
        """Store the part value and the table size."""
        super().__init__()
        self._part = part
        self._limit = limit

    def __str__(self) -> str:
        """Supplement the error with the part value."""
        return f"{super().__str__()} Part value: {self._part}. Part values must be less than {self._limit}."


class InsufficientGeneratorsError(Error):
    """Needed a generator that was not computed.

    Nodes with a part value use the generator with that index, and the weights of a rule read weight factors that depend
    on generators up to its level. So a rule needs more generators than its level, unless the last moment coefficient
    is exactly zero. This problem can sometimes be mitigated by adding extension levels or lowering the level of the
    rule. If an extension level could not be solved, choosing different extension levels can also help.

    """

    _index: int
    _available: int

    def __init__(self, index: int, available: int) -> None:
        """Store the index of the missing generator and the number of generators."""
        super().__init__()
        self._index = index
        self._available = available

    def __str__(self) -> str:
        """Supplement the error with the generator counts."""
        return (
            f"{super().__str__()} Index of the needed generator: {self._index}. Number of computed generators: "
            f"{self._available}."
        )
