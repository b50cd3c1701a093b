"""Main message search engine implementation."""

import logging
import time
from typing import Any, Dict, Iterable, List, Sequence

from ..models.message import Message, User
from ..models.query import QueryState
from ..models.result import SearchResult, SearchResponse
from ..utils.validators import validate_query_state
from .exceptions import MessageSearchError, SearchError
from .filters import apply_filters
from .matcher import match_messages
from .paginator import DEFAULT_WINDOW_SIZE, paginate, page_window
from .ranker import rank_results
from .senders import compute_sender_directory

logger = logging.getLogger(__name__)


class MessageSearchEngine:
    """
    In-memory message search engine.

    Runs Filter -> Match -> Rank -> Paginate over a message collection
    resident in memory. Every call is synchronous and leaves its inputs
    untouched.
    """

    def __init__(self, page_window_size: int = DEFAULT_WINDOW_SIZE):
        """
        Initialize message search engine.

        Args:
            page_window_size: Number of page numbers offered for navigation
        """
        self.page_window_size = page_window_size

        # State tracking
        self._stats = {
            'total_searches': 0,
            'avg_search_time_ms': 0.0,
            'last_result_count': 0
        }

    def rank(self, messages: Iterable[Message], state: QueryState) -> List[SearchResult]:
        """
        Filter, match and rank messages without paginating.

        Args:
            messages: Message collection snapshot
            state: Query state; page fields are ignored

        Returns:
            The full ranked result sequence
        """
        filtered = apply_filters(messages, state.criteria)
        matched = match_messages(filtered, state.normalized_text)
        return rank_results(matched, state.sort_order, state.has_query)

    def paginate(self, ranked: Sequence[SearchResult], state: QueryState) -> SearchResponse:
        """Slice an already ranked sequence into the response envelope; timing is left at zero."""
        page = paginate(ranked, state.page_size, state.page)
        return SearchResponse(
            results=page.items,
            total_results=page.total_results,
            total_pages=page.total_pages,
            current_page=page.current_page,
            page_size=page.page_size,
            page_window=page_window(page.current_page, page.total_pages, self.page_window_size)
        )

    def search(self, messages: Iterable[Message], state: QueryState) -> SearchResponse:
        """
        Search messages for the given query state.

        Args:
            messages: Message collection snapshot
            state: Query text, filters, ordering and page

        Returns:
            The requested page with aggregate counts and timing

        Raises:
            ValidationError: If the query state is invalid
            SearchError: If the pipeline fails unexpectedly
        """
        start_time = time.perf_counter()

        try:
            validate_query_state(state)

            ranked = self.rank(messages, state)
            response = self.paginate(ranked, state)
            elapsed_millis = (time.perf_counter() - start_time) * 1000.0
            response.elapsed_millis = elapsed_millis

            self._update_search_stats(elapsed_millis, response.total_results)

            logger.debug(
                f"Search completed: {response.total_results} results in {elapsed_millis:.3f}ms"
            )
            return response

        except MessageSearchError:
            raise
        except Exception as e:
            logger.error(f"Search failed: {str(e)}")
            raise SearchError(f"Search failed: {str(e)}") from e

    def sender_directory(self, messages: Iterable[Message]) -> List[User]:
        return compute_sender_directory(messages)

    def _update_search_stats(self, elapsed_millis: float, result_count: int) -> None:
        """Update search performance statistics."""
        self._stats['total_searches'] += 1
        self._stats['last_result_count'] = result_count

        # Update rolling average
        total_searches = self._stats['total_searches']
        current_avg = self._stats['avg_search_time_ms']
        self._stats['avg_search_time_ms'] = (
            (current_avg * (total_searches - 1) + elapsed_millis) / total_searches
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        return {
            **self._stats,
            'page_window_size': self.page_window_size
        }


def search(messages: Iterable[Message], state: QueryState) -> SearchResponse:
    """Run a one-off search with a fresh engine."""
    return MessageSearchEngine().search(messages, state)
