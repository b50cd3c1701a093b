"""Text processing utilities for message content."""

import re
from typing import Optional, Sequence


class TextProcessor:
    """Text processing utilities for chat messages."""

    LINK_MARKER = "http"

    def __init__(self):
        """Initialize text processor."""
        self.whitespace_pattern = re.compile(r'\s+')

    def fold_case(self, text: Optional[str]) -> str:
        """
        Case-fold text without changing its length.

        Characters whose lowercase form has a different length (for example
        'İ', which lowercases to two code points) are kept as-is, so every
        offset into the folded text is also a valid offset into the original.

        Args:
            text: Raw text, possibly None

        Returns:
            Folded text of the same length
        """
        if not text:
            return ""

        if text.isascii():
            return text.lower()

        folded = []
        for ch in text:
            low = ch.lower()
            folded.append(low if len(low) == 1 else ch)
        return "".join(folded)

    def normalize_query(self, text: Optional[str]) -> str:
        """Trim surrounding whitespace from a raw query."""
        if not text:
            return ""
        return text.strip()

    def is_blank(self, text: Optional[str]) -> bool:
        return not text

    def contains_link(self, text: Optional[str]) -> bool:
        """Heuristic link check: the literal substring 'http' anywhere in text."""
        return bool(text) and self.LINK_MARKER in text

    def collapse_whitespace(self, text: str) -> str:
        return self.whitespace_pattern.sub(' ', text).strip()

    def generate_context_snippet(
        self,
        text: str,
        spans: Sequence,
        max_length: int = 120
    ) -> str:
        """
        Generate context snippet around the first match span.

        Args:
            text: Full message content
            spans: Match spans (objects with start and end offsets)
            max_length: Maximum snippet length, ellipses excluded

        Returns:
            Snippet containing the first match, with ellipses where trimmed
        """
        if not text:
            return ""
        if len(text) <= max_length:
            return self.collapse_whitespace(text)
        if not spans:
            return self.collapse_whitespace(text[:max_length]) + "..."

        first = spans[0]
        match_length = first.end - first.start
        lead = max(0, (max_length - match_length) // 2)
        best_pos = max(0, min(first.start - lead, len(text) - max_length))

        end_pos = best_pos + max_length
        snippet = text[best_pos:end_pos]

        # Ensure we don't cut words before the match
        if best_pos > 0 and not snippet.startswith(' '):
            space_pos = snippet.find(' ')
            if 0 < space_pos < first.start - best_pos:
                best_pos += space_pos + 1
                snippet = snippet[space_pos + 1:]

        snippet = self.collapse_whitespace(snippet)
        if best_pos > 0:
            snippet = "..." + snippet
        if end_pos < len(text):
            snippet = snippet + "..."

        return snippet
