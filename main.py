from __future__ import annotations

import logging

from rating_clustering import cluster_items, format_assignments, load_sample_ratings


def demo() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # Fifteen products rated on quality, value and design
    items = load_sample_ratings()
    result = cluster_items(items, k=3)

    print("Centroids:", result.centroids.round(3).tolist())
    print("Assignments:", result.assignments.tolist())
    for line in format_assignments(items, result):
        print(line)


if __name__ == "__main__":
    demo()
