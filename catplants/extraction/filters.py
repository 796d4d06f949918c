"""
Line-level filters for plant list extraction.

Separates real plant entries from narrative prose, headers and
navigation text that survive markup stripping.
"""

import re
from typing import List

# "<common names> | Scientific Name(s): <names>" marks an entry line
ENTRY_LINE_PATTERN = re.compile(r".+\|\s*Scientific Names?:\s*\S", re.IGNORECASE)


def is_entry_line(line: str) -> bool:
    """
    Determine whether a text line is a plant entry.

    Args:
        line: One normalized line of section text

    Returns:
        True if the line carries the scientific-name marker.
    """
    if not line:
        return False
    return bool(ENTRY_LINE_PATTERN.match(line))


def entry_lines(block: str) -> List[str]:
    """Split a section into lines and keep only entry lines."""
    if not block:
        return []
    return [line for line in block.split("\n") if is_entry_line(line)]
