from __future__ import annotations

import re

_WORD_RE = re.compile(r"[A-Za-z']+")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")


def word_syllables(word: str) -> int:
    """
    Estimate syllables in a single word by counting vowel groups.

    Rules, applied in order:
      - apostrophes and non-letters are ignored
      - no vowel group at all -> 0
      - trailing silent "e" (but not "le") drops one
      - trailing "ed" (but not "ted"/"ded") drops one
    A word with at least one vowel group never goes below 1.
    """
    w = re.sub(r"[^a-z]", "", (word or "").lower())
    groups = len(_VOWEL_GROUP_RE.findall(w))
    if groups == 0:
        return 0

    if w.endswith("e") and not w.endswith("le") and groups > 1:
        groups -= 1
    if w.endswith("ed") and not w.endswith(("ted", "ded")) and groups > 1:
        groups -= 1
    return groups


def estimate_syllables(line: str) -> int:
    if not line:
        return 0
    return sum(word_syllables(w) for w in _WORD_RE.findall(line))
