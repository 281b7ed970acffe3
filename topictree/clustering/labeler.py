"""
Cluster labels from centroid terms.
"""
from typing import List, Sequence

import numpy as np

from topictree.core.config import DEFAULT_MAX_TERMS_PER_LABEL, LABEL_SEPARATOR


def top_terms(
    vocab_terms: Sequence[str],
    centroid: np.ndarray,
    max_terms: int = DEFAULT_MAX_TERMS_PER_LABEL,
) -> List[str]:
    """
    Highest-weighted vocabulary terms of a centroid.

    Only strictly positive weights count; equal weights keep vocabulary order.
    """
    scored = [(term, float(w)) for term, w in zip(vocab_terms, centroid) if w > 0]
    scored = sorted(scored, key=lambda item: item[1], reverse=True)
    return [term for term, _ in scored[:max(0, max_terms)]]


def fallback_label(index: int) -> str:
    """Generic label for a cluster without positive terms (``index`` is 0-based)."""
    return f"Topic {index + 1}"


def make_label(terms: Sequence[str], index: int) -> str:
    return LABEL_SEPARATOR.join(terms) if terms else fallback_label(index)
