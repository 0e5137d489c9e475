"""
Keyword extraction for heuristic patch generation.

Ranks the words of a job description by frequency after dropping a fixed list
of stop words. Deterministic: ties keep first-seen order.
"""

import re
from collections import Counter
from typing import List

# Common English filler plus words every job description uses
STOP_WORDS = frozenset(
    [
        "the", "and", "with", "for", "you", "your", "our", "are", "will", "this", "that",
        "from", "into", "have", "has", "had", "a", "an", "to", "of", "in", "on", "at", "as",
        "by", "or", "is", "be", "we", "they", "it", "their", "than", "but",
        "experience", "years", "required", "preferred", "responsibilities", "requirements",
        "skills", "role", "team", "work", "using",
    ]
)

MIN_TOKEN_LENGTH = 3
DEFAULT_MAX_KEYWORDS = 8

# Anything outside lowercase alphanumerics, + . # - and whitespace becomes a space
_NON_TOKEN_CHARS = re.compile(r"[^a-z0-9+.#\-\s]")


def tokenize(text: str) -> List[str]:
    """
    Split text into lowercase candidate keywords.

    Keeps +, ., # and - inside tokens (c++, node.js, c#, ci-cd); drops stop
    words and tokens shorter than three characters.

    Example:
        >>> tokenize("Senior C++ and Node.js engineer")
        ['senior', 'c++', 'node.js', 'engineer']
    """
    cleaned = _NON_TOKEN_CHARS.sub(" ", text.lower())
    return [
        token
        for token in cleaned.split()
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]


def pick_top_keywords(text: str, max_keywords: int = DEFAULT_MAX_KEYWORDS) -> List[str]:
    """
    Most frequent keywords in text, highest count first.

    Args:
        text: Job description or other guidance text
        max_keywords: Maximum number of keywords to return

    Returns:
        Up to max_keywords tokens; equal counts keep first-seen order
    """
    # Counter preserves insertion order and sorted() is stable
    counts = Counter(tokenize(text))
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return [token for token, _ in ranked[:max_keywords]]
