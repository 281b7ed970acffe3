"""
Deterministic random source for centroid seeding.

The seed is derived from the shape of the corpus only (document count and
vocabulary size), never from the text, so repeated runs over the same
conversation pick the same initial centroids. Two different corpora with the
same shape share the same random stream.
"""

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET_BASIS = 2166136261
_FNV_PRIME = 16777619
_MULBERRY_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiplication."""
    return (a * b) & _MASK32


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a hash over the UTF-16 code units of ``text``."""
    h = _FNV_OFFSET_BASIS
    encoded = text.encode("utf-16-le")
    for i in range(0, len(encoded), 2):
        h ^= encoded[i] | (encoded[i + 1] << 8)
        h = _imul(h, _FNV_PRIME)
    return h


def seed_from_corpus_shape(num_docs: int, dim: int) -> int:
    return fnv1a_32(f"{num_docs}:{dim}")


class Mulberry32:
    """
    Small counter-based 32-bit generator.

    Each call to :meth:`random` advances the state by a fixed odd increment
    and scrambles it into a float in ``[0, 1)``.
    """

    def __init__(self, seed: int):
        self.state = seed & _MASK32

    @classmethod
    def for_corpus(cls, num_docs: int, dim: int) -> "Mulberry32":
        return cls(seed_from_corpus_shape(num_docs, dim))

    def next_uint32(self) -> int:
        self.state = (self.state + _MULBERRY_INCREMENT) & _MASK32
        a = self.state
        t = _imul(a ^ (a >> 15), 1 | a)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK32) ^ t
        return (t ^ (t >> 14)) & _MASK32

    def random(self) -> float:
        return self.next_uint32() / _TWO_POW_32

    __call__ = random
