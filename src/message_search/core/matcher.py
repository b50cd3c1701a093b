"""Literal substring matching with match-span extraction."""

from typing import Iterable, List, Optional

from ..models.message import Message
from ..models.result import MatchSpan, SearchResult
from ..utils.text_processing import TextProcessor

_text_processor = TextProcessor()


def find_matches(content: Optional[str], query: str) -> List[MatchSpan]:
    """
    Find every case-insensitive occurrence of query in content.

    Overlapping occurrences are reported: scanning resumes one character
    after the start of the previous match, so "aa" in "aaa" yields [0, 2)
    and [1, 3).

    Args:
        content: Message content, possibly None
        query: Trimmed, non-empty query text

    Returns:
        Match spans in ascending start order
    """
    if not content or not query:
        return []

    folded_content = _text_processor.fold_case(content)
    folded_query = _text_processor.fold_case(query)
    length = len(folded_query)

    matches = []
    index = folded_content.find(folded_query)
    while index != -1:
        matches.append(MatchSpan(start=index, end=index + length, text=content[index:index + length]))
        index = folded_content.find(folded_query, index + 1)

    return matches


def match_messages(messages: Iterable[Message], query: str) -> List[SearchResult]:
    """
    Pair filtered messages with their match spans.

    With an empty query every message passes with no spans and no
    scanning is done. Otherwise messages without a match are dropped.

    Args:
        messages: Filtered messages
        query: Raw query text; trimmed here

    Returns:
        Search results in input order
    """
    query = _text_processor.normalize_query(query)
    if not query:
        return [SearchResult(message=message, matches=[]) for message in messages]

    results = []
    for message in messages:
        matches = find_matches(message.content, query)
        if matches:
            results.append(SearchResult(message=message, matches=matches))

    return results
