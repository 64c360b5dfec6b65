"""
Exception hierarchy for kselect.

All errors raised by the library derive from ``KSelectError``. The concrete
classes also inherit the closest built-in exception so callers that already
catch ``ValueError``/``RuntimeError`` keep working.
"""


class KSelectError(Exception):
    """Base class for all kselect errors."""


class InvalidInputError(KSelectError, ValueError):
    """Malformed or empty data, invalid K bounds or unsupported options."""


class NotFittedError(KSelectError, RuntimeError):
    """A model was used before ``fit`` completed."""


class DegenerateClusterError(KSelectError, ArithmeticError):
    """A cluster has too few members for its silhouette to be defined.

    Attributes:
        cluster_index: Index of the offending cluster
        size: Number of points assigned to it (0 or 1)
    """

    def __init__(self, cluster_index: int, size: int):
        self.cluster_index = cluster_index
        self.size = size
        kind = "is empty" if size == 0 else "has a single member"
        super().__init__(
            f"cluster {cluster_index} {kind}; silhouette needs at least 2 points per cluster"
        )


class NoSatisfactoryKError(KSelectError):
    """No cluster count in a cascade scored a positive mean silhouette."""


class CascadeCancelledError(KSelectError):
    """A cascade scan or evaluation was cancelled by the caller."""
