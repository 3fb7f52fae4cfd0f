from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Union

import logging
import random

import numpy as np

from ._distance_euclidean import distance
from .exceptions import DimensionMismatch, EmptyInput, InvalidK

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITER = 100

# None, an int seed, a numpy Generator, a random.Random, or anything with ``choice(n, size=k, replace=False)``
RandomState = Any


@dataclass(frozen=True, eq=False)
class ClusterResult:
    """
    Final state of one k-means run.

    Attributes
    ----------
    assignments : np.ndarray
        Cluster index in ``[0, k)`` for every input point, shape (n_points,).
    centroids : np.ndarray
        Final centroids, shape (k, dim).
    n_iter : int
        Number of assignment passes performed.
    converged : bool
        True if the run stopped because no assignment changed, False if it
        ran out of iterations.
    inertia : float
        Sum of squared distances from each point to its assigned centroid.
    """

    assignments: np.ndarray
    centroids: np.ndarray
    n_iter: int
    converged: bool
    inertia: float

    def __post_init__(self) -> None:
        assignments = np.array(self.assignments, dtype=int, copy=True)
        centroids = np.array(self.centroids, dtype=float, copy=True)
        assignments.setflags(write=False)
        centroids.setflags(write=False)
        object.__setattr__(self, 'assignments', assignments)
        object.__setattr__(self, 'centroids', centroids)

    @property
    def n_clusters(self) -> int:
        return self.centroids.shape[0]

    def cluster_sizes(self) -> np.ndarray:
        """Number of points assigned to each cluster, including empty ones."""
        return np.bincount(self.assignments, minlength=self.n_clusters)


def cluster(points: Union[Sequence[Sequence[float]], np.ndarray], k: int, max_iter: int = DEFAULT_MAX_ITER,
            random_state: RandomState = None, init: Union[str, np.ndarray] = 'random') -> ClusterResult:
    """
    Cluster points into ``k`` groups with Lloyd's algorithm.

    Each pass assigns every point to its nearest centroid (Euclidean distance,
    ties going to the lowest cluster index). If no assignment changed since the
    previous pass the run stops; otherwise every centroid is moved to the mean
    of its members. A centroid that attracts no points keeps its position.

    Parameters
    ----------
    points : Sequence[Sequence[float]] or np.ndarray
        Points of equal dimension, shape (n_points, dim). Not modified.
    k : int
        Number of clusters, ``1 <= k <= n_points``.
    max_iter : int, default=100
        Maximum number of assignment passes. Running out of passes is not an
        error; the result simply has ``converged=False``.
    random_state : None, int or np.random.Generator, default=None
        Source of randomness for seeding. ``None`` draws fresh entropy, an int
        gives reproducible seeding. A ``random.Random`` is drawn from with
        ``sample(range(n_points), k)``. Any other object with a numpy-style
        ``choice(n, size=k, replace=False)`` method is also accepted.
    init : str or np.ndarray, default='random'
        ``'random'`` seeds the centroids with ``k`` distinct points drawn
        uniformly without replacement. An array of shape (k, dim) is used as
        the starting centroids directly.

    Returns
    -------
    ClusterResult
        Final assignments and centroids with run diagnostics.

    Raises
    ------
    EmptyInput
        If ``points`` is empty.
    DimensionMismatch
        If the points do not all share the same, non-zero dimension.
    InvalidK
        If ``k`` is not an integer in ``[1, n_points]``.
    """
    data = _as_points(points)
    _check_k(k, data.shape[0])
    if isinstance(max_iter, bool) or not isinstance(max_iter, (int, np.integer)) or max_iter < 1:
        raise ValueError(f"max_iter must be a positive integer, got {max_iter!r}")

    centroids = _initial_centroids(data, k, init, random_state)
    assignments: Optional[np.ndarray] = None
    converged = False
    n_iter = 0

    for n_iter in range(1, max_iter + 1):
        # Assign step
        new_assignments = assign_points(data, centroids)
        if assignments is None:
            n_changed = data.shape[0]
        else:
            n_changed = int(np.count_nonzero(new_assignments != assignments))
        assignments = new_assignments
        logger.debug("Iteration %d: %d assignment(s) changed", n_iter, n_changed)

        # Check convergence
        if n_changed == 0:
            converged = True
            break

        # Update step
        centroids = update_centroids(data, assignments, centroids)

    if converged:
        logger.info("k-means converged after %d iteration(s)", n_iter)
    else:
        logger.info("k-means stopped at max_iter=%d without converging", max_iter)

    return ClusterResult(assignments=assignments, centroids=centroids, n_iter=n_iter, converged=converged,
                         inertia=_inertia(data, assignments, centroids))


def assign_points(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Index of the nearest centroid for every point.

    Exact ties are broken in favour of the lowest centroid index.

    Parameters
    ----------
    points : np.ndarray
        Points, shape (n_points, dim).
    centroids : np.ndarray
        Centroids, shape (k, dim).

    Returns
    -------
    np.ndarray
        Integer array of shape (n_points,) with values in ``[0, k)``.
    """
    points = np.asarray(points, dtype=float)
    centroids = np.asarray(centroids, dtype=float)

    assignments = np.empty(points.shape[0], dtype=int)
    for i, point in enumerate(points):
        distances = [distance(point, centroid) for centroid in centroids]
        # argmin returns the first occurrence of the minimum
        assignments[i] = int(np.argmin(distances))
    return assignments


def update_centroids(points: np.ndarray, assignments: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Move every centroid to the mean of the points assigned to it.

    A cluster with no members keeps its current centroid. The input
    ``centroids`` array is not modified.

    Parameters
    ----------
    points : np.ndarray
        Points, shape (n_points, dim).
    assignments : np.ndarray
        Cluster index for every point, shape (n_points,).
    centroids : np.ndarray
        Current centroids, shape (k, dim).

    Returns
    -------
    np.ndarray
        New centroids, shape (k, dim).
    """
    points = np.asarray(points, dtype=float)
    assignments = np.asarray(assignments)
    new_centroids = np.array(centroids, dtype=float)

    for c in range(new_centroids.shape[0]):
        members = points[assignments == c]
        if members.shape[0] > 0:
            new_centroids[c] = members.mean(axis=0)
        else:
            logger.debug("Cluster %d has no members; keeping its centroid", c)
    return new_centroids


def _init_random(points: np.ndarray, k: int, random_state: RandomState) -> np.ndarray:
    """Copy ``k`` distinct, uniformly chosen points as the starting centroids."""
    rng = _check_random_state(random_state)
    if isinstance(rng, random.Random):
        indices = np.asarray(rng.sample(range(points.shape[0]), k), dtype=int)
    else:
        indices = np.asarray(rng.choice(points.shape[0], size=k, replace=False), dtype=int).ravel()

    if indices.shape[0] != k or len(set(indices.tolist())) != k:
        raise ValueError(f"Random source must return {k} distinct indices, got {indices.tolist()}")
    if indices.min() < 0 or indices.max() >= points.shape[0]:
        raise ValueError(f"Random source returned indices outside [0, {points.shape[0]}): {indices.tolist()}")

    logger.debug("Seeding centroids from points %s", indices.tolist())
    return points[indices].copy()


_init_methods: Dict[str, Callable[[np.ndarray, int, RandomState], np.ndarray]] = {
    'random': _init_random,
}


def _initial_centroids(points: np.ndarray, k: int, init: Union[str, np.ndarray], random_state: RandomState) -> np.ndarray:
    if isinstance(init, str):
        try:
            init_method = _init_methods[init]
        except KeyError:
            raise ValueError(f"Unknown initialization method: {init}") from None
        return init_method(points, k, random_state)

    centroids = np.array(init, dtype=float)
    if centroids.shape != (k, points.shape[1]):
        raise DimensionMismatch(f"Initial centroids must have shape {(k, points.shape[1])}, got {centroids.shape}")
    return centroids


def _check_random_state(random_state: RandomState):
    if random_state is None or isinstance(random_state, (int, np.integer)):
        return np.random.default_rng(random_state)
    if isinstance(random_state, random.Random) or hasattr(random_state, 'choice'):
        return random_state
    raise ValueError(f"{random_state!r} cannot be used as a random source")


def _check_k(k: int, n_points: int) -> None:
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidK(f"k must be an integer, got {k!r}")
    if k < 1 or k > n_points:
        raise InvalidK(f"k must be in [1, {n_points}], got {k}")


def _as_points(points: Union[Sequence[Sequence[float]], np.ndarray]) -> np.ndarray:
    """Copy the input into a (n_points, dim) float array, validating its shape."""
    rows = [np.asarray(p, dtype=float) for p in points]
    if not rows:
        raise EmptyInput("Cannot cluster an empty set of points.")
    if any(row.ndim != 1 for row in rows):
        raise DimensionMismatch("Every point must be a one-dimensional sequence of numbers.")

    dim = rows[0].shape[0]
    if dim == 0:
        raise DimensionMismatch("Points must have at least one dimension.")
    if any(row.shape[0] != dim for row in rows):
        raise DimensionMismatch("All points must have the same dimension.")
    return np.vstack(rows)


def _inertia(points: np.ndarray, assignments: np.ndarray, centroids: np.ndarray) -> float:
    return float(np.sum((points - centroids[assignments]) ** 2))


@dataclass
class RatingKMeans:
    """K-Means clustering for rating vectors with Euclidean distance.

    Estimator wrapper around :func:`cluster` that keeps the fitted centroids
    so further items can be assigned with :meth:`predict`.

    Parameters
    ----------
    n_clusters : int
        Number of clusters.
    max_iter : int, optional
        Maximum number of iterations. Default is 100.
    random_state : None, int or np.random.Generator, optional
        Random source for seeding. An int gives the same seeding on every fit.
    init : str or np.ndarray, optional
        ``'random'`` or an explicit (n_clusters, dim) array of starting centroids.

    Notes
    -----
    - Input format `X` is a list of rating vectors of equal length.
    - Reaching `max_iter` is not an error; check `converged_` afterwards.
    """

    n_clusters: int
    max_iter: int = DEFAULT_MAX_ITER
    random_state: RandomState = None
    init: Union[str, np.ndarray] = 'random'

    centroids_: Optional[np.ndarray] = None
    labels_: Optional[np.ndarray] = None
    n_iter_: Optional[int] = None
    converged_: Optional[bool] = None
    inertia_: Optional[float] = None

    def fit(self, X: Union[Sequence[Sequence[float]], np.ndarray]) -> "RatingKMeans":
        """Fit the model on a dataset of equal-length rating vectors.

        Parameters
        ----------
        X : Sequence[Sequence[float]] or np.ndarray
            Dataset of shape (n_items, n_ratings).

        Returns
        -------
        RatingKMeans
            The fitted estimator.
        """
        result = cluster(X, self.n_clusters, max_iter=self.max_iter, random_state=self.random_state, init=self.init)

        self.centroids_ = result.centroids
        self.labels_ = result.assignments
        self.n_iter_ = result.n_iter
        self.converged_ = result.converged
        self.inertia_ = result.inertia
        return self

    def predict(self, X: Union[Sequence[Sequence[float]], np.ndarray]) -> np.ndarray:
        """Assign each vector in `X` to the nearest learned centroid.

        Parameters
        ----------
        X : Sequence[Sequence[float]] or np.ndarray
            Dataset of shape (n_items, n_ratings).

        Returns
        -------
        np.ndarray
            Cluster label for each input vector.
        """
        if self.centroids_ is None:
            raise RuntimeError("Model is not fitted. Call fit(X) first.")
        data = _as_points(X)
        if data.shape[1] != self.centroids_.shape[1]:
            raise DimensionMismatch("All vectors must have the same length as the centroids.")
        return assign_points(data, self.centroids_)

    def fit_predict(self, X: Union[Sequence[Sequence[float]], np.ndarray]) -> np.ndarray:
        """Fit the model to `X` and return the cluster labels."""
        return self.fit(X).labels_
