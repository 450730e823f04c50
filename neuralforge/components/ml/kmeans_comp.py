"""K-means and elbow-rule computation for spectrogram vectors.

Stateless, pure component: takes a stacked data matrix ``[num_records, W*H]``
and returns WCSS values / cluster counts. No filesystem or config access.

Lloyd iterations assign by squared Euclidean distance (scipy cdist); WCSS sums
the plain Euclidean distance of each row to its centroid. A centroid that
loses all its rows keeps its previous position.
"""

from __future__ import annotations

import logging

import numpy as np
from scipy.spatial.distance import cdist

logger = logging.getLogger(__name__)

DEFAULT_K_MAX = 10
DEFAULT_ITERATIONS = 100


def initialize_centroids(data: np.ndarray, k: int, rng: np.random.Generator) -> np.ndarray:
    """Pick ``k`` rows of ``data`` uniformly at random, with replacement."""
    indices = rng.integers(0, data.shape[0], size=k)
    return data[indices].astype(np.float64, copy=True)


def assign_clusters(data: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Index of the nearest centroid per row (ties go to the lowest index)."""
    distances = cdist(data, centroids, "sqeuclidean")
    return np.argmin(distances, axis=1)


def update_centroids(data: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Mean of each cluster's rows; empty clusters keep their previous centroid."""
    updated = centroids.copy()
    for c in range(centroids.shape[0]):
        members = labels == c
        if np.any(members):
            updated[c] = data[members].mean(axis=0)
    return updated


def run_kmeans(
    data: np.ndarray,
    k: int,
    rng: np.random.Generator,
    iterations: int = DEFAULT_ITERATIONS,
) -> tuple[np.ndarray, np.ndarray]:
    """Run up to ``iterations`` Lloyd steps.

    Stops early once assignments stop changing, which is a fixed point: further
    iterations would produce the same centroids.

    Returns:
        (centroids [k, dim], labels [num_rows])

    """
    if data.ndim != 2 or data.shape[0] == 0:
        msg = f"data must be a non-empty 2D matrix, got shape {data.shape}"
        raise ValueError(msg)
    if k < 1:
        msg = f"k must be >= 1, got {k}"
        raise ValueError(msg)

    centroids = initialize_centroids(data, k, rng)
    labels: np.ndarray | None = None

    for _ in range(iterations):
        new_labels = assign_clusters(data, centroids)
        if labels is not None and np.array_equal(new_labels, labels):
            break
        labels = new_labels
        centroids = update_centroids(data, labels, centroids)

    if labels is None:
        labels = assign_clusters(data, centroids)
    return centroids, labels


def compute_wcss(data: np.ndarray, centroids: np.ndarray, labels: np.ndarray) -> float:
    """Sum of Euclidean (not squared) distances from each row to its centroid."""
    total = 0.0
    for row, label in zip(data, labels):
        total += float(np.linalg.norm(row - centroids[label]))
    return total


def elbow_rule(wcss_values: list[float]) -> int:
    """Pick k from a WCSS curve with the second-difference heuristic.

    Starts at 1; for i in 1..len-2, sets k = i + 1 whenever
    ``|w[i+1] - w[i]| - |w[i] - w[i-1]| > 0``. The last match wins.
    """
    optimal_k = 1
    for i in range(1, len(wcss_values) - 1):
        if abs(wcss_values[i + 1] - wcss_values[i]) - abs(wcss_values[i] - wcss_values[i - 1]) > 0:
            optimal_k = i + 1
    return optimal_k


def elbow_method(
    data: np.ndarray,
    k_max: int = DEFAULT_K_MAX,
    iterations: int = DEFAULT_ITERATIONS,
    seed: int | None = None,
) -> tuple[list[float], int]:
    """Run k-means for k = 1..k_max and apply the elbow rule.

    One generator, seeded once, drives every k so a seed reproduces the whole
    curve.

    Returns:
        (wcss_values of length k_max, optimal_k in [1, k_max])

    """
    if k_max < 1:
        msg = f"k_max must be >= 1, got {k_max}"
        raise ValueError(msg)

    rng = np.random.default_rng(seed)
    wcss_values: list[float] = []
    for k in range(1, k_max + 1):
        centroids, labels = run_kmeans(data, k, rng, iterations=iterations)
        wcss = compute_wcss(data, centroids, labels)
        logger.debug("[kmeans] k=%d wcss=%.6f", k, wcss)
        wcss_values.append(wcss)

    return wcss_values, elbow_rule(wcss_values)
