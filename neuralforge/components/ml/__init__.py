"""
Ml package.
"""

from .kmeans_comp import (
    DEFAULT_ITERATIONS,
    DEFAULT_K_MAX,
    assign_clusters,
    compute_wcss,
    elbow_method,
    elbow_rule,
    initialize_centroids,
    run_kmeans,
    update_centroids,
)

__all__ = [
    "DEFAULT_ITERATIONS",
    "DEFAULT_K_MAX",
    "assign_clusters",
    "compute_wcss",
    "elbow_method",
    "elbow_rule",
    "initialize_centroids",
    "run_kmeans",
    "update_centroids",
]
