"""
Common-name normalization and synonym extraction.

The common-name segment of a plant entry carries a primary name and,
in parentheses, alternate names: ``Lily (Madonna Lily, Easter Lily)``.
This module splits such a segment into a normalized primary name and
a set of synonyms, dropping boilerplate and noise words.
"""

import re
from typing import FrozenSet, List, Tuple


# Whole-word noise terms; a candidate containing any of them is not a synonym
NOISE_WORDS = [
    "varieties",
    "variety",
    "species",
    "group",
    "includes",
    "include",
    "including",
    "assorted",
    "mixed",
    "type",
    "cultivars",
    "cultivar",
]

NOISE_PATTERN = re.compile(r"\b(?:" + "|".join(NOISE_WORDS) + r")\b", re.IGNORECASE)

# Only the first matching prefix is stripped
LEADING_BOILERPLATE_PATTERN = re.compile(
    r"^(?:and\s+|including:?\s+|includes\s+|group also includes\s+|group includes\s+)",
    re.IGNORECASE,
)

TRAILING_EMPTY_PARENS_PATTERN = re.compile(r"\(\s*\)\s*$")
INNERMOST_PARENS_PATTERN = re.compile(r"\(([^()]*)\)")
TRAILING_PUNCTUATION_PATTERN = re.compile(r"[.,;:]+$")
WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_name(text: str) -> str:
    """
    Normalize a single name token.

    Lowercases, collapses whitespace, trims and removes any trailing run
    of ``.``, ``,``, ``;`` or ``:``.

    Args:
        text: Raw name text

    Returns:
        Normalized name (possibly empty)

    Examples:
        >>> normalize_name("  Easter   Lily.; ")
        'easter lily'
    """
    if not text:
        return ""
    text = WHITESPACE_PATTERN.sub(" ", text.lower()).strip()
    return TRAILING_PUNCTUATION_PATTERN.sub("", text).strip()


def is_noise(candidate: str) -> bool:
    """Check whether a candidate synonym contains a noise word."""
    return bool(NOISE_PATTERN.search(candidate))


def strip_boilerplate(text: str) -> str:
    """Remove one leading boilerplate phrase and a trailing empty ``()``."""
    text = LEADING_BOILERPLATE_PATTERN.sub("", text).strip()
    return TRAILING_EMPTY_PARENS_PATTERN.sub("", text).strip()


def pop_parentheticals(text: str) -> Tuple[str, List[str]]:
    """
    Remove every parenthetical group from ``text``.

    Innermost groups are removed first and the pass repeats until no
    group is left, so one level of nesting is unwrapped into separate
    chunks. Unbalanced parentheses are left in place.

    Args:
        text: Normalized common-name segment

    Returns:
        Tuple of (text without parentheticals, list of normalized chunks)
    """
    chunks: List[str] = []

    def _collect(match: re.Match) -> str:
        inner = normalize_name(match.group(1))
        if inner:
            chunks.append(inner)
        return " "

    while True:
        text, count = INNERMOST_PARENS_PATTERN.subn(_collect, text)
        if count == 0:
            break

    return normalize_name(text), chunks


def extract_primary_and_synonyms(common_raw: str) -> Tuple[str, FrozenSet[str]]:
    """
    Split a raw common-name segment into a primary name and synonyms.

    Steps:
    1. Normalize (entities are expected to be decoded already)
    2. Strip leading boilerplate ("and ", "including:", "includes ",
       "group also includes ", "group includes ") and a trailing ``()``
    3. Pull out all parenthetical chunks; what remains is the primary
    4. Split chunks on commas and normalize each candidate
    5. Drop empty candidates, noise words and the primary itself

    Args:
        common_raw: Common-name segment of an entry line

    Returns:
        Tuple of (primary name, frozenset of synonyms)

    Examples:
        >>> extract_primary_and_synonyms("Lily (Madonna Lily, Easter Lily)")
        ('lily', frozenset({'madonna lily', 'easter lily'}))
    """
    text = normalize_name(common_raw or "")
    text = strip_boilerplate(text)

    primary, chunks = pop_parentheticals(text)

    synonyms = set()
    for chunk in chunks:
        for candidate in chunk.split(","):
            candidate = normalize_name(candidate)
            if not candidate or candidate == primary or is_noise(candidate):
                continue
            synonyms.add(candidate)

    return primary, frozenset(synonyms)
