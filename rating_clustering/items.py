"""
Rated-item helpers.

This module provides the container for named rating vectors, the bundled
sample dataset, a reader for .csv/.xlsx rating files, and the glue that
clusters items and labels them for display.
"""

import logging
import os
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .kmeans import ClusterResult, cluster

logger = logging.getLogger(__name__)

# Quality, value and design scores on a 1-5 scale
RATING_DATA: List[Tuple[str, Tuple[float, float, float]]] = [
    ('Product A', (4.8, 4.2, 4.5)),
    ('Product B', (3.2, 4.8, 3.0)),
    ('Product C', (4.5, 3.5, 4.8)),
    ('Product D', (2.5, 2.8, 2.2)),
    ('Product E', (4.9, 4.0, 4.7)),
    ('Product F', (3.0, 4.5, 3.2)),
    ('Product G', (2.2, 2.0, 2.5)),
    ('Product H', (4.6, 4.4, 4.3)),
    ('Product I', (3.5, 3.8, 3.6)),
    ('Product J', (1.8, 2.2, 2.0)),
    ('Product K', (4.2, 3.9, 4.1)),
    ('Product L', (2.8, 3.2, 2.9)),
    ('Product M', (4.7, 4.6, 4.4)),
    ('Product N', (3.8, 4.1, 3.9)),
    ('Product O', (2.0, 2.5, 2.3)),
]


class RatedItem:
    """
    Container for a named rating vector.

    Attributes
    ----------
    name : str
        Label of the item, used only for display.
    ratings : np.ndarray
        Rating scores, one per dimension.
    cluster_id : Optional[int]
        0-based cluster index, set by :func:`cluster_items`.
    """
    def __init__(self, name: str, ratings: Sequence[float]):
        self.name = name
        self.ratings = np.asarray(ratings, dtype=float)
        self.cluster_id: Optional[int] = None

    def __repr__(self) -> str:
        return f"RatedItem({self.name!r}, {self.ratings.tolist()})"


def load_sample_ratings() -> List[RatedItem]:
    """Return fresh RatedItem objects for the bundled 15-product sample."""
    return [RatedItem(name, ratings) for name, ratings in RATING_DATA]


def read_ratings(file_path: str) -> List[RatedItem]:
    """
    Import rated items from .xlsx or .csv files.

    **For Excel files (.xlsx):** sheet 'data' holds the table.

    **For CSV files (.csv):** the first row is a header row.

    In both cases column A holds the item name and column B onwards holds the
    ratings, one item per row:

    +-----------+---------+-------+--------+
    | Name      | Quality | Value | Design |
    +===========+=========+=======+========+
    | Product A | 4.8     | 4.2   | 4.5    |
    +-----------+---------+-------+--------+
    | Product B | 3.2     | 4.8   | 3.0    |
    +-----------+---------+-------+--------+

    Rows that are entirely empty are skipped. A row with ratings but no name
    raises ``ValueError``.

    Parameters
    ----------
    ``file_path`` : str
        Path to the .xlsx or .csv file.

    Returns
    -------
    List[RatedItem]
        One RatedItem per data row, in file order.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Could not find file: {file_path}")

    file_extension = os.path.splitext(file_path)[1].lower()

    if file_extension not in ['.xlsx', '.csv']:
        raise ValueError("File must have .xlsx or .csv extension")

    if file_extension == '.xlsx':
        df_data = pd.read_excel(file_path, sheet_name='data')
    else:
        df_data = pd.read_csv(file_path)

    if df_data.shape[1] < 2:
        raise ValueError("Rating file needs a name column and at least one rating column")

    n_rows = len(df_data)
    df_data = df_data.dropna(how='all')
    if len(df_data) < n_rows:
        logger.warning("Skipped %d empty row(s) in %s", n_rows - len(df_data), file_path)

    missing_names = df_data.iloc[:, 0].isna().to_numpy()
    if missing_names.any():
        bad_rows = [str(position + 1) for position in np.flatnonzero(missing_names)]
        raise ValueError(f"Missing item name in data row(s): {', '.join(bad_rows)}")

    ratings = df_data.iloc[:, 1:].apply(pd.to_numeric, errors='coerce')
    if ratings.isna().any().any():
        bad_rows = [str(name) for name in df_data.loc[ratings.isna().any(axis=1)].iloc[:, 0]]
        raise ValueError(f"Missing or non-numeric ratings for: {', '.join(bad_rows)}")

    names = [str(name) for name in df_data.iloc[:, 0]]
    return [RatedItem(name, row) for name, row in zip(names, ratings.to_numpy(dtype=float))]


def cluster_items(items: Sequence[RatedItem], k: int, **cluster_kwargs) -> ClusterResult:
    """
    Cluster rated items on their rating vectors.

    Names are not looked at; each item's ``cluster_id`` is set to its 0-based
    cluster index so it can be labelled afterwards.

    Parameters
    ----------
    items : Sequence[RatedItem]
        Items to cluster.
    k : int
        Number of clusters.
    **cluster_kwargs
        Passed through to :func:`rating_clustering.kmeans.cluster`
        (``max_iter``, ``random_state``, ``init``).

    Returns
    -------
    ClusterResult
    """
    result = cluster([item.ratings for item in items], k, **cluster_kwargs)
    for item, cluster_id in zip(items, result.assignments):
        item.cluster_id = int(cluster_id)
    return result


def format_assignments(items: Sequence[RatedItem], result: ClusterResult) -> List[str]:
    """One ``"<name> -> Cluster <n>"`` line per item, with 1-based cluster numbers."""
    if len(items) != len(result.assignments):
        raise ValueError("Number of items does not match the number of assignments")
    return [f"{item.name} -> Cluster {int(cluster_id) + 1}" for item, cluster_id in zip(items, result.assignments)]
