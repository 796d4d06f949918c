"""
Plant list extraction module.

Slices the normalized page text into toxic and non-toxic sections,
selects entry lines and parses each into a ParsedEntry.

Usage:
    from catplants.extraction import split_sections, entry_lines, parse_entry_line

    toxic, non_toxic = split_sections(text)
    entries = [parse_entry_line(l) for l in entry_lines(toxic)]
"""

from typing import List

from ..dataset.types import ParsedEntry
from .entry_parser import first_scientific_name, guess_genus, parse_entry_line
from .filters import ENTRY_LINE_PATTERN, entry_lines, is_entry_line
from .sections import (
    DEFAULT_NON_TOXIC_HEADER,
    DEFAULT_TOXIC_HEADER,
    section_between,
    split_sections,
)


def parse_section(block: str) -> List[ParsedEntry]:
    """
    Parse every accepted entry in a section, in document order.

    Lines outside the entry grammar and lines with unusable scientific
    names are skipped.
    """
    entries = []
    for line in entry_lines(block):
        entry = parse_entry_line(line)
        if entry is not None:
            entries.append(entry)
    return entries


__all__ = [
    'DEFAULT_TOXIC_HEADER',
    'DEFAULT_NON_TOXIC_HEADER',
    'ENTRY_LINE_PATTERN',
    'section_between',
    'split_sections',
    'is_entry_line',
    'entry_lines',
    'first_scientific_name',
    'guess_genus',
    'parse_entry_line',
    'parse_section',
]
