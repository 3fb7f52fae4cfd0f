"""
Plotting utilities for clustering results.

This module draws rated items in two of their rating dimensions, coloured by
cluster, with the cluster centroids marked.
"""
import matplotlib.pyplot as plt
import numpy as np
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .items import RatedItem
    from .kmeans import ClusterResult


def plot_clusters(items: List["RatedItem"], result: "ClusterResult", dims: Tuple[int, int] = (0, 1),
                  axis_labels: Optional[Sequence[str]] = None, mode: str = 'show', fname: str = 'results') -> plt.Figure:
    """
    Scatter rated items by cluster in two rating dimensions.

    Each cluster gets its own colour and legend entry ('Cluster 1', 'Cluster 2', ...).
    Centroids are drawn as black crosses and item names are written next to
    their points.

    Parameters
    ----------
    items : List[RatedItem]
        Clustered items, in the same order as ``result.assignments``.
    result : ClusterResult
        Output of :func:`rating_clustering.kmeans.cluster` or
        :func:`rating_clustering.items.cluster_items`.
    dims : Tuple[int, int], default=(0, 1)
        Indices of the two rating dimensions to draw on the x and y axes.
    axis_labels : Sequence[str], optional
        Names of all rating dimensions, e.g. ``('Quality', 'Value', 'Design')``.
        Defaults to 'Rating 1', 'Rating 2', ...
    mode : str, default='show'
        Display mode for the plot:

        - 'show': Display the plot interactively using matplotlib.pyplot.show()
        - 'save': Save the plot to a PNG file without displaying it

    fname : str, default='results'
        Base filename for saving the plot (without extension). Only used when
        mode='save'. The file will be saved as '{fname}.png'.

    Returns
    -------
    matplotlib.figure.Figure
        The drawn figure.
    """
    if mode not in ('show', 'save'):
        raise ValueError(f"Unknown mode: {mode}")
    if len(items) != len(result.assignments):
        raise ValueError("Number of items does not match the number of assignments")

    n_dims = result.centroids.shape[1]
    x_dim, y_dim = dims
    if x_dim == y_dim or not (0 <= x_dim < n_dims and 0 <= y_dim < n_dims):
        raise ValueError(f"dims must be two distinct indices in [0, {n_dims}), got {dims}")

    if axis_labels is None:
        axis_labels = [f"Rating {d + 1}" for d in range(n_dims)]

    ratings = np.array([item.ratings for item in items])

    fig, ax = plt.subplots(figsize=(8, 6))
    for c in range(result.n_clusters):
        members = ratings[result.assignments == c]
        ax.scatter(members[:, x_dim], members[:, y_dim], s=60, label=f"Cluster {c + 1}")

    ax.scatter(result.centroids[:, x_dim], result.centroids[:, y_dim], marker='x', s=120, c='black', label='Centroids')

    for item, row in zip(items, ratings):
        ax.annotate(item.name, (row[x_dim], row[y_dim]), textcoords='offset points', xytext=(4, 4), fontsize=8)

    ax.set_xlabel(axis_labels[x_dim])
    ax.set_ylabel(axis_labels[y_dim])
    ax.set_title(f"k-means clusters (k={result.n_clusters})", weight='bold')
    ax.legend()

    fig.tight_layout()
    if mode == 'show':
        plt.show()
    elif mode == 'save':
        fig.savefig('{0}.png'.format(fname))
    return fig
