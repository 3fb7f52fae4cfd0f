import numpy as np
from scipy.spatial.distance import euclidean
from typing import Sequence, Union

from .exceptions import DimensionMismatch

Vector = Union[Sequence[float], np.ndarray]


def distance(a: Vector, b: Vector) -> float:
    """
    Euclidean (L2) distance between two rating vectors.

    The distance is computed with `scipy.spatial.distance.euclidean <https://docs.scipy.org/doc/scipy/reference/generated/scipy.spatial.distance.euclidean.html>`_
    as sqrt(sum((a_i - b_i)^2)).

    Parameters
    ----------
    a : Sequence[float] or np.ndarray
        First vector.
    b : Sequence[float] or np.ndarray
        Second vector, same length as ``a``.

    Returns
    -------
    float
        Non-negative distance. ``distance(a, a) == 0`` and ``distance(a, b) == distance(b, a)``.

    Raises
    ------
    DimensionMismatch
        If ``a`` and ``b`` differ in length or are not one-dimensional.
    """
    u = np.asarray(a, dtype=float)
    v = np.asarray(b, dtype=float)

    if u.ndim != 1 or v.ndim != 1:
        raise DimensionMismatch(f"Expected one-dimensional vectors, got shapes {u.shape} and {v.shape}.")
    if u.shape[0] != v.shape[0]:
        raise DimensionMismatch(f"Vectors must have equal length for Euclidean distance ({u.shape[0]} != {v.shape[0]}).")

    return float(euclidean(u, v))
