"""
Text normalization package for plant list processing.

This package converts the source page markup into clean text and
splits common-name segments into normalized primary names and synonyms.
"""

from .html_text import HtmlTextNormalizer, decode_entities, html_to_text
from .synonyms import (
    NOISE_WORDS,
    extract_primary_and_synonyms,
    is_noise,
    normalize_name,
)

__all__ = [
    'HtmlTextNormalizer',
    'html_to_text',
    'decode_entities',
    'NOISE_WORDS',
    'normalize_name',
    'is_noise',
    'extract_primary_and_synonyms',
]
