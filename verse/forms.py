from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from verse.schemas import FREE_VERSE, ValidationResult
from verse.syllables import estimate_syllables

HAIKU_SYLLABLES = [5, 7, 5]

# Newlines only; form feeds and Unicode line separators stay inside a line.
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")

HAIKU_LINE_COUNT_MESSAGE = "A haiku should have exactly three lines."
HAIKU_SYLLABLE_MESSAGE = "Haiku lines should have 5, 7, and 5 syllables respectively."
HAIKU_SUCCESS_MESSAGE = "This poem structure looks like a Haiku!"


@dataclass(frozen=True)
class LineRule:
    accepts: Callable[[int], bool]
    failure: str
    success: str


# Haiku is handled separately because it also checks syllables.
LINE_RULES: Dict[str, LineRule] = {
    "Sonnet": LineRule(
        lambda n: n == 14,
        "A sonnet should have exactly 14 lines.",
        "This poem has the correct number of lines for a Sonnet.",
    ),
    "Limerick": LineRule(
        lambda n: n == 5,
        "A limerick should have exactly 5 lines.",
        "This poem has the correct number of lines for a Limerick.",
    ),
    "Ode": LineRule(
        lambda n: n >= 3,
        "An ode should have at least 3 lines.",
        "This poem has the correct structure for an Ode.",
    ),
    "Villanelle": LineRule(
        lambda n: n == 19,
        "A villanelle should have exactly 19 lines.",
        "This poem has the correct structure for a Villanelle.",
    ),
    "Elegy": LineRule(
        lambda n: n >= 3,
        "An elegy should have at least 3 lines.",
        "This poem has the correct structure for an Elegy.",
    ),
    "Ballad": LineRule(
        lambda n: n >= 4,
        "A ballad should have at least 4 lines.",
        "This poem has the correct structure for a Ballad.",
    ),
    "Epigram": LineRule(
        lambda n: n in (2, 4),
        "An epigram should have either 2 or 4 lines.",
        "This poem has the correct structure for an Epigram.",
    ),
    "Acrostic": LineRule(
        lambda n: n >= 1,
        "An acrostic should have at least 1 line.",
        "This poem has the correct structure for an Acrostic.",
    ),
}


def non_blank_lines(text: Optional[str]) -> List[str]:
    stripped = (line.strip() for line in _NEWLINE_RE.split(text or ""))
    return [line for line in stripped if line]


def has_strict_rules(form: Optional[str]) -> bool:
    return form == "Haiku" or form in LINE_RULES


def _free_message(form: Optional[str]) -> str:
    return f'"{form or FREE_VERSE}" has no strict rules, write freely!'


def _validate_haiku(lines: List[str]) -> ValidationResult:
    if len(lines) != len(HAIKU_SYLLABLES):
        return ValidationResult(False, HAIKU_LINE_COUNT_MESSAGE)

    counts = [estimate_syllables(line) for line in lines]
    if counts != HAIKU_SYLLABLES:
        return ValidationResult(False, HAIKU_SYLLABLE_MESSAGE)
    return ValidationResult(True, HAIKU_SUCCESS_MESSAGE)


def validate(form: Optional[str], text: Optional[str]) -> ValidationResult:
    """
    Check a draft against the structural rules of a named form.

    Only non-blank lines count. Unknown forms (and Free Verse) always pass,
    so this never raises for any input.
    """
    lines = non_blank_lines(text)

    if form == "Haiku":
        return _validate_haiku(lines)

    rule = LINE_RULES.get(form) if form else None
    if rule is None:
        return ValidationResult(True, _free_message(form))

    if not rule.accepts(len(lines)):
        return ValidationResult(False, rule.failure)
    return ValidationResult(True, rule.success)
