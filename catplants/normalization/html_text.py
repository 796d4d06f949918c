"""
HTML to plain-text conversion for the plant list page.

Turns the raw markup of the source document into a line-oriented text
stream: block-level closings become newlines, scripts and styles are
dropped, remaining tags are stripped, entities are decoded and each
line's whitespace is collapsed.
"""

import re
from typing import Dict


class HtmlTextNormalizer:
    """
    Converts raw markup into clean, line-oriented text.

    Handles:
    - Script and style blocks (removed with their content)
    - Line breaks and paragraph/list/heading closings (converted to newlines)
    - Any other ``<...>`` span (removed without tag-name validation)
    - Numeric (decimal and hex) and a fixed table of named entities
    - Per-line whitespace collapse and trimming

    Stripping is regex based and tolerant of malformed or unclosed tags;
    it targets one known document, not arbitrary HTML.
    """

    # Named entities recognised by the decoder; anything else is left as-is
    NAMED_ENTITIES: Dict[str, str] = {
        'nbsp': ' ',
        'amp': '&',
        'quot': '"',
        'apos': "'",
        'lsquo': "'",
        'rsquo': "'",
        'ldquo': '"',
        'rdquo': '"',
        'middot': '·',
    }

    SCRIPT_PATTERN = re.compile(r'<script\b[\s\S]*?</script\s*>', re.IGNORECASE)
    STYLE_PATTERN = re.compile(r'<style\b[\s\S]*?</style\s*>', re.IGNORECASE)
    BREAK_PATTERN = re.compile(r'<br\s*/?>', re.IGNORECASE)
    BLOCK_CLOSE_PATTERN = re.compile(r'</(?:p|li|h\d)\s*>', re.IGNORECASE)
    TAG_PATTERN = re.compile(r'<[^>]+>')
    ENTITY_PATTERN = re.compile(r'&(#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z]+);')
    WHITESPACE_PATTERN = re.compile(r'\s+')

    def to_text(self, html: str) -> str:
        """
        Apply the complete markup-to-text pipeline.

        Pipeline order:
        1. Remove script and style blocks
        2. Convert line breaks and block closings to newlines
        3. Strip all remaining tags
        4. Decode entities (single pass)
        5. Drop carriage returns
        6. Collapse whitespace per line and trim

        Args:
            html: Raw markup text

        Returns:
            Plain text with one logical line per block element

        Examples:
            >>> HtmlTextNormalizer().to_text("<p>Aloe&nbsp; <b>Vera</b></p>")
            'Aloe Vera\\n'
        """
        if not html or not isinstance(html, str):
            return ''

        text = self._remove_scripts_and_styles(html)
        text = self._convert_block_breaks(text)
        text = self._strip_tags(text)
        text = self.decode_entities(text)
        text = text.replace('\r', '')

        return '\n'.join(self._collapse_line(line) for line in text.split('\n'))

    def decode_entities(self, text: str) -> str:
        """
        Decode entity references exactly once.

        Decimal (``&#39;``) and hex (``&#x27;``) references are resolved to
        their code points; named references are looked up in
        ``NAMED_ENTITIES``. A single regex pass means the output of one
        replacement is never decoded again, so ``&amp;quot;`` yields
        ``&quot;``.

        Args:
            text: Text possibly containing entity references

        Returns:
            Text with known references decoded
        """
        if not text:
            return ''
        return self.ENTITY_PATTERN.sub(self._replace_entity, text)

    def _replace_entity(self, match: re.Match) -> str:
        body = match.group(1)

        if body.startswith(('#x', '#X')):
            return self._code_point(int(body[2:], 16), match.group(0))
        if body.startswith('#'):
            return self._code_point(int(body[1:]), match.group(0))

        return self.NAMED_ENTITIES.get(body.lower(), match.group(0))

    def _code_point(self, value: int, original: str) -> str:
        # Out-of-range references stay literal
        if value <= 0 or value > 0x10FFFF:
            return original
        return chr(value)

    def _remove_scripts_and_styles(self, text: str) -> str:
        text = self.SCRIPT_PATTERN.sub('', text)
        return self.STYLE_PATTERN.sub('', text)

    def _convert_block_breaks(self, text: str) -> str:
        text = self.BREAK_PATTERN.sub('\n', text)
        return self.BLOCK_CLOSE_PATTERN.sub('\n', text)

    def _strip_tags(self, text: str) -> str:
        return self.TAG_PATTERN.sub('', text)

    def _collapse_line(self, line: str) -> str:
        return self.WHITESPACE_PATTERN.sub(' ', line).strip()


# Module-level singleton for the convenience functions
_normalizer_instance = None


def _get_normalizer() -> HtmlTextNormalizer:
    """Get or create the module-level HtmlTextNormalizer singleton."""
    global _normalizer_instance
    if _normalizer_instance is None:
        _normalizer_instance = HtmlTextNormalizer()
    return _normalizer_instance


def html_to_text(html: str) -> str:
    """
    Convenience function for markup-to-text conversion.

    Args:
        html: Raw markup text

    Returns:
        Normalized line-oriented text
    """
    return _get_normalizer().to_text(html)


def decode_entities(text: str) -> str:
    """Decode entity references in ``text`` using the shared normalizer."""
    return _get_normalizer().decode_entities(text)
