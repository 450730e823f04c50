"""Tests for kmeans_comp.py."""

from __future__ import annotations

import numpy as np
import pytest

from neuralforge.components.ml.kmeans_comp import (
    assign_clusters,
    compute_wcss,
    elbow_method,
    elbow_rule,
    initialize_centroids,
    run_kmeans,
    update_centroids,
)


@pytest.fixture
def blobs() -> np.ndarray:
    """Two tight, well separated groups of 4-dim points."""
    rng = np.random.default_rng(0)
    low = rng.normal(0.1, 0.01, size=(10, 4))
    high = rng.normal(0.9, 0.01, size=(10, 4))
    return np.vstack([low, high])


class TestLloydSteps:
    @pytest.mark.unit
    def test_initial_centroids_are_data_rows(self, blobs):
        centroids = initialize_centroids(blobs, 3, np.random.default_rng(5))
        assert centroids.shape == (3, 4)
        for c in centroids:
            assert any(np.array_equal(c, row) for row in blobs)

    @pytest.mark.unit
    def test_assignment_picks_nearest(self):
        data = np.array([[0.0, 0.0], [0.9, 1.0], [0.4, 0.0]])
        centroids = np.array([[0.0, 0.0], [1.0, 1.0]])
        assert assign_clusters(data, centroids).tolist() == [0, 1, 0]

    @pytest.mark.unit
    def test_assignment_ties_go_to_lowest_index(self):
        data = np.array([[0.5]])
        centroids = np.array([[0.0], [1.0]])
        assert assign_clusters(data, centroids).tolist() == [0]

    @pytest.mark.unit
    def test_update_is_cluster_mean(self):
        data = np.array([[0.0], [2.0], [10.0]])
        labels = np.array([0, 0, 1])
        updated = update_centroids(data, labels, np.array([[5.0], [5.0]]))
        assert updated.tolist() == [[1.0], [10.0]]

    @pytest.mark.unit
    def test_empty_cluster_keeps_previous_centroid(self):
        data = np.array([[0.0], [2.0]])
        labels = np.array([0, 0])
        updated = update_centroids(data, labels, np.array([[5.0], [7.0]]))
        assert updated.tolist() == [[1.0], [7.0]]


class TestRunKmeans:
    @pytest.mark.unit
    def test_separates_two_groups(self, blobs):
        _, labels = run_kmeans(blobs, 2, np.random.default_rng(7))
        assert len(set(labels[:10].tolist())) == 1
        assert len(set(labels[10:].tolist())) == 1
        assert labels[0] != labels[10]

    @pytest.mark.unit
    def test_k_one_is_the_mean(self, blobs):
        centroids, labels = run_kmeans(blobs, 1, np.random.default_rng(1))
        assert np.allclose(centroids[0], blobs.mean(axis=0))
        assert set(labels.tolist()) == {0}

    @pytest.mark.unit
    def test_single_row(self):
        data = np.array([[0.2, 0.4]])
        centroids, labels = run_kmeans(data, 3, np.random.default_rng(0))
        assert centroids.shape == (3, 2)
        assert labels.tolist() == [0]

    @pytest.mark.unit
    @pytest.mark.parametrize("data", [np.zeros((0, 3)), np.zeros(3)])
    def test_rejects_bad_data(self, data):
        with pytest.raises(ValueError, match="non-empty 2D"):
            run_kmeans(data, 1, np.random.default_rng(0))

    @pytest.mark.unit
    def test_rejects_bad_k(self, blobs):
        with pytest.raises(ValueError, match="k must be"):
            run_kmeans(blobs, 0, np.random.default_rng(0))


class TestWcss:
    @pytest.mark.unit
    def test_sums_unsquared_distances(self):
        data = np.array([[0.0, 0.0], [3.0, 4.0]])
        centroids = np.array([[0.0, 0.0]])
        labels = np.array([0, 0])
        assert compute_wcss(data, centroids, labels) == pytest.approx(5.0)

    @pytest.mark.unit
    def test_zero_when_rows_are_centroids(self):
        data = np.array([[1.0], [2.0]])
        assert compute_wcss(data, data.copy(), np.array([0, 1])) == 0.0


class TestElbowRule:
    @pytest.mark.unit
    def test_second_difference_increase_picks_k(self):
        # |w2-w1| - |w1-w0| = 6 - 2 > 0 at i=1 only
        assert elbow_rule([10.0, 8.0, 2.0, 1.5]) == 2

    @pytest.mark.unit
    def test_last_match_wins(self):
        # Increases at i=1 and at i=3
        assert elbow_rule([10.0, 9.0, 7.0, 6.5, 3.0]) == 4

    @pytest.mark.unit
    def test_steadily_flattening_curve_gives_one(self):
        assert elbow_rule([100.0, 50.0, 25.0, 12.5, 6.25]) == 1

    @pytest.mark.unit
    def test_curve_dropping_to_zero_gives_one(self):
        """Two distinct points: wcss hits 0 at k=2 and stays there."""
        assert elbow_rule([4.0, 0.0, 0.0, 0.0]) == 1

    @pytest.mark.unit
    @pytest.mark.parametrize("wcss", [[], [3.0], [3.0, 1.0]])
    def test_short_curves_give_one(self, wcss):
        assert elbow_rule(wcss) == 1


class TestElbowMethod:
    @pytest.mark.unit
    def test_curve_length_and_bounds(self, blobs):
        wcss, optimal_k = elbow_method(blobs, k_max=6, seed=3)
        assert len(wcss) == 6
        assert all(v >= 0.0 for v in wcss)
        assert 1 <= optimal_k <= 6

    @pytest.mark.unit
    def test_seed_reproduces_curve(self, blobs):
        assert elbow_method(blobs, k_max=5, seed=42) == elbow_method(blobs, k_max=5, seed=42)

    @pytest.mark.unit
    def test_two_distinct_points(self):
        data = np.array([[0.0, 0.0], [1.0, 1.0]])
        wcss, optimal_k = elbow_method(data, k_max=10, seed=0)
        assert wcss[0] > 0.0
        assert optimal_k == 1

    @pytest.mark.unit
    def test_rejects_bad_k_max(self, blobs):
        with pytest.raises(ValueError, match="k_max"):
            elbow_method(blobs, k_max=0)
