"""Query controller: owns one search session's state and recomputes on change."""

import itertools
import time
from dataclasses import replace
from datetime import datetime
from typing import List, Optional, Sequence

from ..models.message import Message, User
from ..models.query import DEFAULT_PAGE_SIZE, DateRange, FilterCriteria, FilterType, QueryState, SortOrder
from ..models.result import SearchResult, SearchResponse
from ..utils.logging_config import StructuredLogger
from ..utils.validators import validate_query_state
from .engine import MessageSearchEngine
from .exceptions import ValidationError
from .senders import compute_sender_directory

_session_ids = itertools.count(1)


class QueryController:
    """
    Search session over one message collection.

    Any change to the query text, filters or sort order marks the pipeline
    dirty and resets the page to 1; the next read of ``response`` re-runs
    Filter -> Match -> Rank -> Paginate. Page changes only re-slice the
    cached ranking.
    """

    def __init__(
        self,
        messages: Sequence[Message],
        page_size: Optional[int] = None,
        engine: Optional[MessageSearchEngine] = None,
        state: Optional[QueryState] = None
    ):
        """
        Open a search session.

        Args:
            messages: Message collection snapshot
            page_size: Results per page, chosen by the host; overrides the
                page size of a given state
            engine: Engine to run the pipeline with
            state: Initial query state (defaults: no query, all, relevance, page 1)
        """
        self.engine = engine or MessageSearchEngine()
        if state is None:
            state = QueryState(page_size=DEFAULT_PAGE_SIZE if page_size is None else page_size)
        elif page_size is not None:
            state = replace(state, page_size=page_size)
        self.state = state
        validate_query_state(self.state)

        self.session_id = next(_session_ids)
        self.log = StructuredLogger(__name__).with_context(session=self.session_id)

        self._messages: List[Message] = list(messages)
        self._senders: List[User] = compute_sender_directory(self._messages)
        self._ranked: List[SearchResult] = []
        self._elapsed_millis = 0.0
        self._slice_untimed = False
        self._dirty = True
        self._cursor: Optional[int] = None

        self.log.debug(f"Search session opened over {len(self._messages)} messages")

    @property
    def messages(self) -> List[Message]:
        return self._messages

    @property
    def senders(self) -> List[User]:
        """Distinct senders of the current collection, first-seen order."""
        return self._senders

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def elapsed_millis(self) -> float:
        return self._elapsed_millis

    def set_messages(self, messages: Sequence[Message]) -> None:
        """Swap the message collection and rebuild the sender directory."""
        self._messages = list(messages)
        self._senders = compute_sender_directory(self._messages)
        self._invalidate()

    def set_query(self, text: str) -> None:
        if text == self.state.text:
            return
        self.state.text = text
        self._invalidate()

    def set_sort_order(self, sort_order: SortOrder) -> None:
        sort_order = SortOrder(sort_order)
        if sort_order == self.state.sort_order:
            return
        self.state.sort_order = sort_order
        self._invalidate()

    def set_filter_type(self, filter_type: FilterType) -> None:
        self._update_criteria(filter_type=FilterType(filter_type))

    def set_sender(self, sender_id: Optional[str]) -> None:
        self._update_criteria(sender_id=sender_id or None)

    def set_date_range(self, start: Optional[datetime] = None, end: Optional[datetime] = None) -> None:
        date_range = None
        if start is not None or end is not None:
            date_range = DateRange(start=start, end=end)
        self._update_criteria(date_range=date_range)

    def set_chat(self, chat_id: Optional[str]) -> None:
        self._update_criteria(chat_id=chat_id or None)

    def set_has_attachments(self, has_attachments: Optional[bool]) -> None:
        self._update_criteria(has_attachments=has_attachments)

    def reset_filters(self) -> None:
        """Drop every filter, keeping the query text and sort order."""
        if self.state.criteria.is_default:
            return
        self.state.criteria = FilterCriteria()
        self._invalidate()

    def clear(self) -> None:
        """Clear the query text and every filter."""
        if not self.state.text and self.state.criteria.is_default:
            return
        self.state.text = ""
        self.state.criteria = FilterCriteria()
        self._invalidate()

    def set_page(self, page: int) -> None:
        """
        Request a page; does not re-run filtering, matching or ranking.

        Raises:
            ValidationError: If page is not a positive integer
        """
        if not isinstance(page, int) or page < 1:
            raise ValidationError("Page must be a positive integer")
        self.state.page = page

    def next_page(self) -> None:
        response = self.response
        if response.has_next:
            self.state.page = response.current_page + 1

    def previous_page(self) -> None:
        response = self.response
        self.state.page = max(1, response.current_page - 1)

    @property
    def response(self) -> SearchResponse:
        """Current page envelope, recomputing the pipeline first if dirty."""
        if self._dirty:
            self.recompute()

        start_time = time.perf_counter()
        response = self.engine.paginate(self._ranked, self.state)
        if self._slice_untimed:
            # first slice after a recompute completes the pipeline run
            self._elapsed_millis += (time.perf_counter() - start_time) * 1000.0
            self._slice_untimed = False

        response.elapsed_millis = self._elapsed_millis
        self.state.page = response.current_page
        return response

    def recompute(self) -> List[SearchResult]:
        """Re-run Filter -> Match -> Rank and clear the dirty flag."""
        start_time = time.perf_counter()
        self._ranked = self.engine.rank(self._messages, self.state)
        self._elapsed_millis = (time.perf_counter() - start_time) * 1000.0
        self._dirty = False
        self._slice_untimed = True
        self._cursor = None

        self.log.debug(
            f"Recomputed {len(self._ranked)} results in {self._elapsed_millis:.3f}ms"
        )
        return self._ranked

    @property
    def ranked_results(self) -> List[SearchResult]:
        if self._dirty:
            self.recompute()
        return list(self._ranked)

    @property
    def selected(self) -> Optional[SearchResult]:
        if self._dirty or self._cursor is None or not self._ranked:
            return None
        return self._ranked[self._cursor]

    def select_next(self) -> Optional[SearchResult]:
        """Move the cursor to the next result, wrapping to the first."""
        return self._move_cursor(1)

    def select_previous(self) -> Optional[SearchResult]:
        """Move the cursor to the previous result, wrapping to the last."""
        return self._move_cursor(-1)

    def _move_cursor(self, step: int) -> Optional[SearchResult]:
        ranked = self.ranked_results
        if not ranked:
            self._cursor = None
            return None

        if self._cursor is None:
            self._cursor = 0 if step > 0 else len(ranked) - 1
        else:
            self._cursor = (self._cursor + step) % len(ranked)
        return ranked[self._cursor]

    def _update_criteria(self, **changes) -> None:
        updated = self.state.with_criteria(**changes)
        if updated.criteria == self.state.criteria:
            return
        self.state.criteria = updated.criteria
        self._invalidate()

    def _invalidate(self) -> None:
        self._dirty = True
        self._cursor = None
        self.state.page = 1
