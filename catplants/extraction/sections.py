"""
Section slicing for the plant list page.

The page lists toxic plants under one header and non-toxic plants under
a second header that follows it. Both headers are treated as unique
landmarks in reading order.
"""

import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_TOXIC_HEADER = "Plants Toxic to Cats"
DEFAULT_NON_TOXIC_HEADER = "Plants Non-Toxic to Cats"


def section_between(text: str, start: str, end: Optional[str] = None) -> str:
    """
    Return the text strictly between ``start`` and the next ``end``.

    Args:
        text: Normalized page text
        start: Literal header opening the section
        end: Literal header closing the section; None or empty runs to
            end of text

    Returns:
        Section body, or an empty string if ``start`` does not occur.
        If ``end`` is not found after ``start`` the section runs to the
        end of the text.

    Examples:
        >>> section_between("a START body END tail", "START", "END")
        ' body '
    """
    if not text or not start:
        return ""

    begin = text.find(start)
    if begin == -1:
        return ""
    begin += len(start)

    if not end:
        return text[begin:]

    finish = text.find(end, begin)
    return text[begin:] if finish == -1 else text[begin:finish]


def split_sections(
    text: str,
    toxic_header: str = DEFAULT_TOXIC_HEADER,
    non_toxic_header: str = DEFAULT_NON_TOXIC_HEADER,
) -> Tuple[str, str]:
    """
    Cut the toxic and non-toxic sections out of the page text.

    A missing header yields an empty section for that verdict; the
    other section is still returned.

    Returns:
        Tuple of (toxic section, non-toxic section)
    """
    toxic = section_between(text, toxic_header, non_toxic_header)
    non_toxic = section_between(text, non_toxic_header)

    if toxic_header not in text:
        logger.warning(f"Section header not found: '{toxic_header}'")
    if non_toxic_header not in text:
        logger.warning(f"Section header not found: '{non_toxic_header}'")

    return toxic, non_toxic
