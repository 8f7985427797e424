"""Error kinds raised by the graph model, metadata and metric calculators.

Cancellation is not an error: a cancelled calculation reports
``CalculationStatus.CANCELLED`` instead of raising.
"""


class NodeGraphError(Exception):
    """Base class for every error raised by nodegraph."""


class StructuralViolation(NodeGraphError, ValueError):
    """An invalid graph construction: a cross-graph edge, a disallowed self-loop
    or parallel edge, or a bad directedness/restriction argument."""


class MetadataContractViolation(NodeGraphError, KeyError):
    """Required metadata is missing or has the wrong type.

    Parameters
    ----------
    key : str
        Name of the offending metadata key.
    message : str, optional
        Human readable description. Defaults to a message naming the key.
    """

    def __init__(self, key, message=None):
        self.key = key
        self.message = message or f"The metadata key {key!r} is missing or has the wrong type."
        super().__init__(self.message)

    # KeyError.__str__ quotes its argument
    def __str__(self):
        return self.message


class MissingSortKeyError(MetadataContractViolation):
    """A vertex lacks the sort key of a metadata sorter, or its value has the wrong type."""


class CalculationFailure(NodeGraphError, RuntimeError):
    """A metric calculation could not produce a result.

    Parameters
    ----------
    message : str
        Description of the failure.
    calculator : str, optional
        Name of the calculator that failed.
    """

    def __init__(self, message, calculator=None):
        self.calculator = calculator
        super().__init__(message)
