"""
Tokenizer for topic clustering.

Lower-cases text, splits it on anything that is not an ASCII letter or digit,
and drops numbers, short tokens and common English function words.
"""
import re
from typing import List

MIN_TOKEN_LENGTH = 3

STOPWORDS = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "but", "by", "for", "from",
    "has", "have", "had", "he", "her", "his", "i", "if", "in", "into", "is",
    "it", "its", "me", "my", "not", "of", "on", "or", "our", "she", "so",
    "than", "that", "the", "their", "them", "then", "there", "these", "they",
    "this", "to", "too", "up", "was", "we", "were", "what", "when", "where",
    "which", "who", "why", "will", "with", "you", "your",
})

_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")


def tokenize(text: str) -> List[str]:
    """
    Split text into normalized terms.

    Order is preserved and duplicates are kept, since term counts matter
    downstream.

    >>> tokenize("The cat sat on 123 mats")
    ['cat', 'sat', 'mats']
    """
    tokens = _TOKEN_PATTERN.findall((text or "").lower())
    # pure numbers collapse to "" and fall out with the length filter
    tokens = ["" if t.isdigit() else t for t in tokens]
    return [t for t in tokens if len(t) >= MIN_TOKEN_LENGTH and t not in STOPWORDS]
