"""
Tests for k-means++ seeding and cosine k-means.
"""
import numpy as np
import pytest

from topictree.clustering.kmeans import (
    choose_initial_indices,
    compute_centroids,
    cosine_distance,
    init_kmeans_plus_plus,
    kmeans_cosine,
    l2_normalize,
    roulette_pick,
)
from topictree.clustering.rng import Mulberry32
from topictree.core.config import MAX_ITERATIONS


def _unit(*values):
    v = np.array(values, dtype=np.float32)
    return v / np.linalg.norm(v)


class FixedDraws:
    """Generator stand-in that replays a fixed list of draws."""

    def __init__(self, values):
        self._values = iter(values)

    def random(self):
        return next(self._values)

    __call__ = random


@pytest.fixture
def two_groups():
    """Two tight groups on orthogonal axes."""
    return np.stack([
        _unit(1, 0.05, 0),
        _unit(1, 0, 0.05),
        _unit(0.05, 1, 0),
        _unit(0, 1, 0.05),
    ])


class TestHelpers:
    def test_l2_normalize(self):
        np.testing.assert_allclose(l2_normalize(np.array([3.0, 4.0])), [0.6, 0.8])

    def test_l2_normalize_zero_vector_is_noop(self):
        z = np.zeros(3)
        assert not np.any(l2_normalize(z))

    def test_l2_normalize_empty(self):
        assert l2_normalize(np.zeros(0)).size == 0

    def test_cosine_distance(self):
        assert cosine_distance(_unit(1, 0), _unit(1, 0)) == pytest.approx(0.0, abs=1e-6)
        assert cosine_distance(_unit(1, 0), _unit(0, 1)) == pytest.approx(1.0)


class TestKMeansPlusPlus:
    def test_first_index_from_first_draw(self, two_groups):
        expected_first = int(Mulberry32(7).random() * 4)
        indices = choose_initial_indices(two_groups, 2, Mulberry32(7))
        assert indices[0] == expected_first

    def test_second_centroid_comes_from_other_group(self, two_groups):
        for seed in range(20):
            first, second = choose_initial_indices(two_groups, 2, Mulberry32(seed))
            assert (first < 2) != (second < 2)

    def test_centroids_are_copies(self, two_groups):
        centroids = init_kmeans_plus_plus(two_groups, 2, Mulberry32(1))
        centroids[:] = 0
        assert np.any(two_groups)

    def test_default_rng_seeded_from_shape(self, two_groups):
        a = init_kmeans_plus_plus(two_groups, 2)
        b = init_kmeans_plus_plus(two_groups.copy(), 2)
        np.testing.assert_array_equal(a, b)

    def test_same_shape_same_choices(self):
        """Corpora of identical shape draw the same random numbers."""
        a = np.eye(4, dtype=np.float32)
        b = np.eye(4, dtype=np.float32)[::-1].copy()
        ia = choose_initial_indices(a, 3, Mulberry32.for_corpus(4, 4))
        ib = choose_initial_indices(b, 3, Mulberry32.for_corpus(4, 4))
        assert ia == ib

    def test_all_zero_weights_pick_first_document(self):
        same = np.tile(_unit(1, 0), (3, 1))
        indices = choose_initial_indices(same, 2, Mulberry32(3))
        assert indices[1] == 0

    def test_draw_past_cumulative_total_picks_last(self):
        weights = np.array([0.2, 0.3, 0.5])
        assert roulette_pick(weights, 1.0 + 1e-12) == 2
        assert roulette_pick(weights, 5.0) == 2

    def test_roulette_boundaries(self):
        weights = np.array([0.2, 0.3, 0.5])
        assert roulette_pick(weights, 0.0) == 0
        assert roulette_pick(weights, 0.2) == 0
        assert roulette_pick(weights, 0.2000001) == 1
        assert roulette_pick(weights, 1.0) == 2

    def test_top_of_wheel_picks_last_document(self):
        """A draw just under 1 lands on the last row even when summation order differs."""
        rng = np.random.default_rng(0)
        vectors = rng.random((40, 5))
        vectors /= np.linalg.norm(vectors, axis=1, keepdims=True)
        indices = choose_initial_indices(vectors, 2, FixedDraws([0.0, 1 - 2 ** -32]))
        assert indices == [0, 39]

    def test_zero_dimension_vectors(self):
        empty = np.zeros((3, 0), dtype=np.float32)
        indices = choose_initial_indices(empty, 2, Mulberry32(5))
        assert len(indices) == 2
        assert all(0 <= i < 3 for i in indices)


class TestKMeansCosine:
    def test_separates_groups(self, two_groups):
        initial = np.stack([_unit(1, 0, 0), _unit(0, 1, 0)])
        result = kmeans_cosine(two_groups, 2, initial_centroids=initial)
        assert result.assignments == [0, 0, 1, 1]
        assert result.converged
        assert result.iterations == 2

    def test_centroids_renormalized(self, two_groups):
        result = kmeans_cosine(two_groups, 2)
        np.testing.assert_allclose(np.linalg.norm(result.centroids, axis=1), 1.0, atol=1e-5)

    def test_empty_cluster_keeps_centroid(self):
        vectors = np.stack([_unit(1, 0), _unit(1, 0)])
        initial = np.stack([_unit(1, 0), _unit(0, 1)])
        result = kmeans_cosine(vectors, 2, initial_centroids=initial)
        assert result.assignments == [0, 0]
        np.testing.assert_allclose(result.centroids[1], [0.0, 1.0])

    def test_ties_go_to_lowest_index(self):
        vectors = np.zeros((2, 2), dtype=np.float32)
        initial = np.stack([_unit(1, 0), _unit(0, 1)])
        result = kmeans_cosine(vectors, 2, initial_centroids=initial)
        assert result.assignments == [0, 0]

    def test_iteration_cap(self):
        rng = np.random.default_rng(0)
        vectors = rng.random((60, 12)).astype(np.float32)
        vectors /= np.linalg.norm(vectors, axis=1, keepdims=True)
        result = kmeans_cosine(vectors, 6)
        assert 1 <= result.iterations <= MAX_ITERATIONS
        capped = kmeans_cosine(vectors, 6, max_iterations=1)
        assert capped.iterations == 1

    def test_input_not_mutated(self, two_groups):
        before = two_groups.copy()
        initial = two_groups[[0, 2]].copy()
        kmeans_cosine(two_groups, 2, initial_centroids=initial)
        np.testing.assert_array_equal(two_groups, before)
        np.testing.assert_array_equal(initial, before[[0, 2]])


class TestComputeCentroids:
    def test_empty_cluster_without_previous_is_zero(self):
        vectors = np.stack([_unit(1, 0), _unit(0, 1)])
        centroids = compute_centroids(vectors, [0, 0], 2)
        np.testing.assert_allclose(centroids[0], _unit(1, 1), atol=1e-6)
        assert not np.any(centroids[1])

    def test_zero_mean_keeps_previous(self):
        vectors = np.zeros((2, 2), dtype=np.float32)
        previous = np.stack([_unit(1, 0), _unit(0, 1)])
        centroids = compute_centroids(vectors, [1, 1], 2, previous=previous)
        np.testing.assert_allclose(centroids, previous)
