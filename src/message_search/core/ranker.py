"""Result ordering."""

from typing import List, Sequence

from ..models.query import SortOrder
from ..models.result import SearchResult


def rank_results(
    results: Sequence[SearchResult],
    sort_order: SortOrder,
    query_active: bool
) -> List[SearchResult]:
    """
    Order search results.

    Sorting is stable: results with equal keys keep their input order.

    Args:
        results: Matched results in base order
        sort_order: Requested ordering
        query_active: Whether a non-empty query produced the match spans

    Returns:
        A new, ordered list
    """
    if sort_order == SortOrder.OLDEST:
        return sorted(results, key=lambda r: r.message.timestamp)

    if sort_order == SortOrder.RELEVANCE and query_active:
        # Python's sort stays stable with reverse=True.
        return sorted(
            results,
            key=lambda r: (r.match_count, r.message.timestamp),
            reverse=True
        )

    # NEWEST, and RELEVANCE without a query
    return sorted(results, key=lambda r: r.message.timestamp, reverse=True)
