from __future__ import annotations

import re
from collections import Counter
from typing import List, Optional

# Runs of letters (any script) or apostrophes.
_TOKEN_RE = re.compile(r"(?:[^\W\d_]|')+")

SUFFIX_LENGTH = 2


def tokenize(text: Optional[str]) -> List[str]:
    return _TOKEN_RE.findall((text or "").lower())


def rhyme_suffix(word: str) -> str:
    return word[-SUFFIX_LENGTH:]


def doom_score(text: Optional[str]) -> int:
    """
    Share of words that collide with at least one other word on their last
    two characters, as an integer percentage in [0, 100].

    Every member of a collision group counts, not just the extras.
    Halves round up.
    """
    words = tokenize(text)
    if not words:
        return 0

    groups = Counter(rhyme_suffix(w) for w in words)
    rhyming = sum(n for n in groups.values() if n > 1)

    # Integer form of round-half-up(rhyming / total * 100).
    score = (200 * rhyming + len(words)) // (2 * len(words))
    return min(100, max(0, score))
