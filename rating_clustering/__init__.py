"""Top-level package for rating_clustering.

This package groups rated items (products scored on quality, value, design,
...) with k-means. The primary entry points are
`rating_clustering.kmeans.cluster` and `rating_clustering.items.cluster_items`.
"""

from ._distance_euclidean import distance
from .exceptions import ClusteringError, DimensionMismatch, EmptyInput, InvalidK
from .items import (
    RATING_DATA,
    RatedItem,
    cluster_items,
    format_assignments,
    load_sample_ratings,
    read_ratings
)
from .kmeans import ClusterResult, RatingKMeans, assign_points, cluster, update_centroids
from .plotting import plot_clusters

__all__ = [
    "distance",
    "cluster",
    "assign_points",
    "update_centroids",
    "ClusterResult",
    "RatingKMeans",
    "RatedItem",
    "RATING_DATA",
    "load_sample_ratings",
    "read_ratings",
    "cluster_items",
    "format_assignments",
    "plot_clusters",
    "ClusteringError",
    "DimensionMismatch",
    "InvalidK",
    "EmptyInput",
]

__version__ = "0.1.0"
