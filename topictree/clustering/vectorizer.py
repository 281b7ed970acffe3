"""
Bounded-vocabulary TF-IDF vectorizer.

The vocabulary is ranked by corpus term frequency times smoothed inverse
document frequency and capped, so vector width stays small even for long
conversations. Each document becomes one L2-normalized row.
"""
import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np
from sklearn.preprocessing import normalize as sk_normalize

from topictree.core.config import DEFAULT_MAX_VOCAB

logger = logging.getLogger(__name__)


def smoothed_idf(num_docs: int, df: int) -> float:
    """ln(1 + N / (1 + df)); the +1 guards against a zero document frequency."""
    return math.log(1 + num_docs / (1 + df))


@dataclass
class Vocabulary:
    """
    Ordered vocabulary terms with their corpus statistics.

    Attributes
    ----------
    terms : List[str]
        Terms in vector-position order
    document_frequency : List[int]
        Number of documents containing each term
    idf : np.ndarray
        Smoothed inverse document frequency per term
    """

    terms: List[str]
    document_frequency: List[int]
    idf: np.ndarray
    index: Dict[str, int] = field(init=False)

    def __post_init__(self):
        self.index = {term: i for i, term in enumerate(self.terms)}

    def __len__(self) -> int:
        return len(self.terms)

    def __contains__(self, term: str) -> bool:
        return term in self.index


def count_terms(tokenized: Sequence[Sequence[str]]) -> Tuple[List[Counter], Dict[str, int]]:
    """
    Per-document term counts and corpus document frequencies.

    The document-frequency table keeps first-seen order, which is the
    tie-break order for vocabulary ranking.
    """
    term_counts: List[Counter] = []
    df: Dict[str, int] = {}
    for tokens in tokenized:
        counts = Counter(tokens)
        term_counts.append(counts)
        for term in counts:
            df[term] = df.get(term, 0) + 1
    return term_counts, df


def build_vocabulary(
    tokenized: Sequence[Sequence[str]],
    max_vocab: int = DEFAULT_MAX_VOCAB,
) -> Tuple[Vocabulary, List[Counter]]:
    """
    Rank terms by ``ctf * idf`` and keep the top ``max_vocab``.

    Returns the vocabulary together with the per-document counts so callers
    do not need a second counting pass.
    """
    term_counts, df = count_terms(tokenized)
    num_docs = len(tokenized)

    corpus_tf: Dict[str, int] = dict.fromkeys(df, 0)
    for counts in term_counts:
        for term, c in counts.items():
            corpus_tf[term] += c

    scored = [
        (term, corpus_tf[term] * smoothed_idf(num_docs, dfi))
        for term, dfi in df.items()
    ]
    # sorted() is stable, so equal scores keep first-seen order
    scored = sorted(scored, key=lambda item: item[1], reverse=True)
    terms = [term for term, _ in scored[:max(0, max_vocab)]]

    doc_freq = [df[t] for t in terms]
    idf = np.array([smoothed_idf(num_docs, d) for d in doc_freq], dtype=np.float32)
    return Vocabulary(terms=terms, document_frequency=doc_freq, idf=idf), term_counts


def vectorize(term_counts: Sequence[Counter], vocab: Vocabulary) -> np.ndarray:
    """
    Build the (n_docs, vocab_size) TF-IDF matrix.

    Term frequency is each count divided by the document's largest vocabulary
    count. Rows are L2-normalized; rows with no vocabulary terms stay zero.
    """
    dim = len(vocab)
    matrix = np.zeros((len(term_counts), dim), dtype=np.float32)

    for row, counts in enumerate(term_counts):
        for term, c in counts.items():
            j = vocab.index.get(term)
            if j is not None:
                matrix[row, j] = c
        peak = matrix[row].max() if dim else 0.0
        if peak > 0:
            matrix[row] = (matrix[row] / peak) * vocab.idf

    if dim and len(term_counts):
        matrix = sk_normalize(matrix, norm="l2")
    return matrix


def build_tfidf(
    tokenized: Sequence[Sequence[str]],
    max_vocab: int = DEFAULT_MAX_VOCAB,
) -> Tuple[Vocabulary, np.ndarray]:
    """Vocabulary plus normalized document vectors for a tokenized corpus."""
    vocab, term_counts = build_vocabulary(tokenized, max_vocab=max_vocab)
    vectors = vectorize(term_counts, vocab)
    logger.debug("TF-IDF: %d documents, vocabulary %d", len(tokenized), len(vocab))
    return vocab, vectors
