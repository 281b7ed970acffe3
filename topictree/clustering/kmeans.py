"""
Cosine k-means with deterministic k-means++ seeding.

Vectors are expected to be L2-normalized rows, so cosine distance reduces to
``1 - dot(a, b)``. Seeding draws from a Mulberry32 stream seeded by corpus
shape, which makes the whole clustering reproducible.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from sklearn.preprocessing import normalize as sk_normalize

from topictree.clustering.rng import Mulberry32
from topictree.core.config import MAX_ITERATIONS

logger = logging.getLogger(__name__)


@dataclass
class KMeansResult:
    """
    Outcome of a k-means run.

    Attributes
    ----------
    assignments : List[int]
        Cluster index per document
    centroids : np.ndarray
        (k, dim) centroid matrix after the last update
    iterations : int
        Assign/update rounds performed (at most MAX_ITERATIONS)
    converged : bool
        True when the last round changed no assignment
    """

    assignments: List[int]
    centroids: np.ndarray
    iterations: int
    converged: bool


def l2_normalize(v: np.ndarray) -> np.ndarray:
    """Unit-length copy of ``v``; a zero vector is returned unchanged."""
    if v.size == 0:
        return v
    return sk_normalize(v.reshape(1, -1), norm="l2").ravel()


def cosine_distance(a: np.ndarray, b: np.ndarray) -> float:
    # both vectors already unit length (or zero)
    return 1.0 - float(np.dot(a, b))


def _nearest_distances(vectors: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """(n, k) matrix of cosine distances between rows and centroids."""
    return 1.0 - vectors.astype(np.float64) @ centroids.astype(np.float64).T


def roulette_pick(weights: np.ndarray, draw: float) -> int:
    """
    Index of the first row whose cumulative weight reaches ``draw``.

    Falls back to the last row when rounding leaves the draw above the
    cumulative total.
    """
    cumulative = np.cumsum(weights)
    idx = int(np.searchsorted(cumulative, draw, side="left"))
    return min(idx, len(weights) - 1)


def choose_initial_indices(vectors: np.ndarray, k: int, rng: Mulberry32) -> List[int]:
    """
    k-means++ seeding: pick ``k`` row indices.

    The first index is uniform. Each further index is drawn with probability
    proportional to the squared distance from the row to its nearest chosen
    centroid (roulette wheel over the cumulative weights).
    """
    n = vectors.shape[0]
    chosen = [int(rng.random() * n)]

    for _ in range(1, k):
        dists = _nearest_distances(vectors, vectors[chosen])
        weights = dists.min(axis=1) ** 2
        draw = rng.random() * float(weights.sum())
        chosen.append(roulette_pick(weights, draw))

    return chosen


def init_kmeans_plus_plus(
    vectors: np.ndarray,
    k: int,
    rng: Optional[Mulberry32] = None,
) -> np.ndarray:
    """
    Initial (k, dim) centroid matrix.

    Rows are copied out of ``vectors`` so later updates never touch the input.
    When no generator is given one is seeded from the corpus shape.
    """
    if rng is None:
        rng = Mulberry32.for_corpus(vectors.shape[0], vectors.shape[1])
    indices = choose_initial_indices(vectors, k, rng)
    logger.debug("k-means++ seeds: %s", indices)
    return vectors[indices].copy()


def compute_centroids(
    vectors: np.ndarray,
    assignments: List[int],
    k: int,
    previous: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Renormalized mean vector per cluster.

    Clusters without members keep their ``previous`` centroid (zeros when
    there is none). With ``previous`` given, a member mean that sums to zero
    also keeps the previous centroid.
    """
    dim = vectors.shape[1]
    if previous is None:
        centroids = np.zeros((k, dim), dtype=vectors.dtype)
    else:
        centroids = previous.copy()

    labels = np.asarray(assignments, dtype=np.int64)
    for c in range(k):
        members = vectors[labels == c]
        if len(members) == 0:
            continue
        mean = members.astype(np.float64).mean(axis=0)
        if previous is not None and not np.any(mean):
            continue
        centroids[c] = l2_normalize(mean)
    return centroids


def kmeans_cosine(
    vectors: np.ndarray,
    k: int,
    initial_centroids: Optional[np.ndarray] = None,
    max_iterations: int = MAX_ITERATIONS,
) -> KMeansResult:
    """
    Lloyd's iteration under cosine distance.

    Stops when an assign step changes nothing or after ``max_iterations``
    rounds. Ties go to the lowest centroid index.
    """
    n = vectors.shape[0]
    centroids = (
        initial_centroids.copy()
        if initial_centroids is not None
        else init_kmeans_plus_plus(vectors, k)
    )
    assignments = [0] * n

    changed = True
    iterations = 0
    while changed and iterations < max_iterations:
        changed = False
        iterations += 1

        best = np.argmin(_nearest_distances(vectors, centroids), axis=1)
        for i in range(n):
            if assignments[i] != int(best[i]):
                assignments[i] = int(best[i])
                changed = True

        centroids = compute_centroids(vectors, assignments, k, previous=centroids)

    logger.debug(
        "k-means: k=%d, %d iterations, converged=%s", k, iterations, not changed
    )
    return KMeansResult(
        assignments=assignments,
        centroids=centroids,
        iterations=iterations,
        converged=not changed,
    )
