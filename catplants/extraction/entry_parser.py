"""
Entry line parser.

Parses a single plant entry of the form::

    <common names> | Scientific Name(s): <names> [| Family: <family>]

into a ParsedEntry. Parsing is all-or-nothing: a line either yields a
complete entry or None.
"""

import logging
import re
from typing import Optional

from ..dataset.types import ParsedEntry
from ..normalization.synonyms import extract_primary_and_synonyms

logger = logging.getLogger(__name__)

ENTRY_PATTERN = re.compile(
    r"^(.*?)\s*\|\s*Scientific Names?:\s*([^|]+?)\s*(?:\|\s*Family:\s*(.*))?$",
    re.IGNORECASE,
)

# Placeholder scientific names that do not identify a plant
UNUSABLE_SCIENTIFIC_PATTERN = re.compile(r"^(?:n/a|unknown|various|see|multiple)", re.IGNORECASE)

SCIENTIFIC_SEPARATOR_PATTERN = re.compile(r"\s*(?:,|;|\s+or\s+)\s*", re.IGNORECASE)
GENUS_INVALID_CHARS_PATTERN = re.compile(r"[^A-Za-z-]+")
WHITESPACE_PATTERN = re.compile(r"\s+")


def first_scientific_name(raw: str) -> Optional[str]:
    """
    Pick the first usable scientific name from a scientific-name segment.

    Args:
        raw: Text after "Scientific Name(s):"

    Returns:
        The first listed name, or None for placeholders ("Unknown",
        "N/A", "Various", "See ...", "Multiple ...") and empty segments.

    Examples:
        >>> first_scientific_name("Ficus benjamina, Ficus elastica")
        'Ficus benjamina'
        >>> first_scientific_name("Unknown") is None
        True
    """
    text = WHITESPACE_PATTERN.sub(" ", raw or "").strip()
    if not text or UNUSABLE_SCIENTIFIC_PATTERN.match(text):
        return None

    first = SCIENTIFIC_SEPARATOR_PATTERN.split(text, maxsplit=1)[0].strip()
    return first or None


def guess_genus(scientific_name: str) -> Optional[str]:
    """
    Best-effort genus: the first token with non-letter characters removed.

    Not validated against any taxonomy; a leading qualifier such as
    "x" or "cf." is returned as the genus.
    """
    tokens = (scientific_name or "").split()
    if not tokens:
        return None
    return GENUS_INVALID_CHARS_PATTERN.sub("", tokens[0]) or None


def parse_entry_line(line: str) -> Optional[ParsedEntry]:
    """
    Parse one entry line.

    Args:
        line: Normalized text line

    Returns:
        ParsedEntry, or None when the line does not follow the entry
        grammar, its scientific name is unusable, or no primary common
        name remains after synonym extraction.

    Examples:
        >>> entry = parse_entry_line(
        ...     "Lily (Madonna Lily, Easter Lily) | Scientific Name: Lilium candidum | Family: Liliaceae")
        >>> entry.primary, entry.genus, entry.family
        ('lily', 'Lilium', 'Liliaceae')
    """
    if not line:
        return None

    match = ENTRY_PATTERN.match(line)
    if not match:
        logger.debug(f"Skipping line outside entry grammar: {line[:80]}")
        return None

    common_raw, scientific_raw, family_raw = match.groups()

    scientific_name = first_scientific_name(scientific_raw)
    if not scientific_name:
        logger.debug(f"Skipping unusable scientific name: {scientific_raw!r}")
        return None

    primary, synonyms = extract_primary_and_synonyms(common_raw.strip())
    if not primary:
        logger.debug(f"Skipping entry without common name: {scientific_name}")
        return None

    family = WHITESPACE_PATTERN.sub(" ", family_raw or "").strip() or None

    return ParsedEntry(
        primary=primary,
        synonyms=synonyms,
        scientific_name=scientific_name,
        family=family,
        genus=guess_genus(scientific_name),
    )
