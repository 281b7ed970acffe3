"""
Document clustering engine.

Pipeline, leaves first:
- tokenizer: text -> filtered terms
- vectorizer: bounded TF-IDF vocabulary and normalized document vectors
- rng: corpus-shape seeded Mulberry32 stream
- kmeans: k-means++ seeding and cosine Lloyd's iteration
- labeler: centroid top terms -> display label
- engine: orchestration and degenerate-input handling
"""
from .engine import auto_k, cluster_conversation_topics, resolve_k
from .kmeans import KMeansResult, init_kmeans_plus_plus, kmeans_cosine
from .rng import Mulberry32
from .tokenizer import STOPWORDS, tokenize
from .vectorizer import Vocabulary, build_tfidf

__all__ = [
    "cluster_conversation_topics",
    "auto_k",
    "resolve_k",
    "KMeansResult",
    "init_kmeans_plus_plus",
    "kmeans_cosine",
    "Mulberry32",
    "STOPWORDS",
    "tokenize",
    "Vocabulary",
    "build_tfidf",
]
