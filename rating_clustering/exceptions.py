"""
Errors raised by the clustering routines.

Every error subclasses ``ValueError`` so callers that already guard against
bad input with ``except ValueError`` keep working.
"""


class ClusteringError(ValueError):
    """Base class for invalid clustering input."""


class DimensionMismatch(ClusteringError):
    """Vectors or points of unequal (or zero) length were supplied."""


class InvalidK(ClusteringError):
    """The requested number of clusters is outside ``[1, n_points]``."""


class EmptyInput(ClusteringError):
    """No points were supplied."""
