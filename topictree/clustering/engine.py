"""
Topic clustering entry point.

Ties the pipeline together: tokenize -> TF-IDF -> k-means++ -> cosine
k-means -> centroid labels. Always returns a well-formed (possibly empty)
list; degenerate inputs are handled with guards and clamping rather than
exceptions.
"""
import logging
import math
from typing import Any, Iterable, List, Mapping, Optional

from topictree.clustering.kmeans import compute_centroids, init_kmeans_plus_plus, kmeans_cosine
from topictree.clustering.labeler import make_label, top_terms
from topictree.clustering.rng import Mulberry32
from topictree.clustering.tokenizer import tokenize
from topictree.clustering.vectorizer import build_tfidf
from topictree.core.config import MAX_AUTO_CLUSTERS, MAX_CLUSTERS, MIN_CLUSTERS
from topictree.core.models import ChatNode, ClusterOptions, Document, TopicCluster

logger = logging.getLogger(__name__)

SINGLE_DOCUMENT_LABEL = "Topic"


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def auto_k(num_docs: int) -> int:
    """Cluster count heuristic for chat logs: round(sqrt(n / 2)) within [2, 8]."""
    return _clamp(_round_half_up(math.sqrt(num_docs / 2)), MIN_CLUSTERS, MAX_AUTO_CLUSTERS)


def resolve_k(num_docs: int, requested: Optional[int] = None) -> int:
    """Requested (or automatic) k clamped into [2, min(10, n)]."""
    wanted = requested if requested is not None else auto_k(num_docs)
    return _clamp(int(wanted), MIN_CLUSTERS, min(MAX_CLUSTERS, num_docs))


def as_document(item: Any) -> Document:
    """
    Coerce a message-like object into a Document.

    Accepts Documents, ChatNodes, mappings with ``id`` and ``text`` (or
    ``content``), and objects exposing the same attributes. Ids are kept as
    given, so integer ids come back as integers.
    """
    if isinstance(item, Document):
        return item
    if isinstance(item, ChatNode):
        return Document(id=item.id, text=item.content or "")
    if isinstance(item, Mapping):
        text = item.get("text")
        if text is None:
            text = item.get("content")
        return Document(id=item["id"], text=text or "")
    text = getattr(item, "text", None)
    if text is None:
        text = getattr(item, "content", None)
    return Document(id=item.id, text=text or "")


def cluster_conversation_topics(
    documents: Iterable[Any],
    options: Optional[ClusterOptions] = None,
    *,
    k: Optional[int] = None,
    max_vocab: Optional[int] = None,
    max_terms_per_label: Optional[int] = None,
) -> List[TopicCluster]:
    """
    Group documents into labeled topic clusters.

    Parameters
    ----------
    documents : Iterable
        Ordered ``{id, text}`` items (see :func:`as_document`)
    options : ClusterOptions, optional
        Clustering options; keyword arguments override individual fields
    k : int, optional
        Desired number of clusters, clamped into [2, min(10, n)]
    max_vocab : int, optional
        Vocabulary cap (default 250)
    max_terms_per_label : int, optional
        Number of terms joined into a label (default 4)

    Returns
    -------
    List[TopicCluster]
        Non-empty clusters, largest first. Cluster ids reflect the index the
        cluster had before empty clusters were dropped and the list sorted.
    """
    opts = options or ClusterOptions()
    overrides = {
        name: value
        for name, value in (
            ("k", k),
            ("max_vocab", max_vocab),
            ("max_terms_per_label", max_terms_per_label),
        )
        if value is not None
    }
    if overrides:
        opts = opts.model_copy(update=overrides)

    docs = []
    for item in documents:
        doc = as_document(item)
        text = doc.text.strip()
        if text:
            docs.append(Document(id=doc.id, text=text))

    if not docs:
        return []
    if len(docs) == 1:
        return [
            TopicCluster(
                id="topic-0",
                label=SINGLE_DOCUMENT_LABEL,
                terms=[],
                member_document_ids=[docs[0].id],
            )
        ]

    n = len(docs)
    num_clusters = resolve_k(n, opts.k)

    tokenized = [tokenize(d.text) for d in docs]
    vocab, vectors = build_tfidf(tokenized, max_vocab=opts.max_vocab)

    rng = Mulberry32.for_corpus(n, len(vocab))
    initial = init_kmeans_plus_plus(vectors, num_clusters, rng)
    result = kmeans_cosine(vectors, num_clusters, initial_centroids=initial)

    members: List[List[str]] = [[] for _ in range(num_clusters)]
    for doc, c in zip(docs, result.assignments):
        members[c].append(doc.id)

    centroids = compute_centroids(vectors, result.assignments, num_clusters)

    labeled = []
    for idx in range(num_clusters):
        terms = top_terms(vocab.terms, centroids[idx], opts.max_terms_per_label)
        labeled.append(
            TopicCluster(
                id=f"topic-{idx}",
                label=make_label(terms, idx),
                terms=terms,
                member_document_ids=members[idx],
            )
        )

    clusters = [c for c in labeled if c.member_document_ids]
    clusters.sort(key=lambda c: len(c.member_document_ids), reverse=True)

    logger.debug(
        "Clustered %d documents into %d topics (k=%d, vocabulary=%d, iterations=%d)",
        n, len(clusters), num_clusters, len(vocab), result.iterations,
    )
    return clusters
