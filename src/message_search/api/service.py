"""High-level API service for message search."""

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from ..config import SearchSettings
from ..core.controller import QueryController
from ..core.engine import MessageSearchEngine
from ..core.exceptions import MessageSearchError, ValidationError
from ..models.message import Message, User, message_from_record
from ..models.query import FilterType, QueryState, QueryStateModel, SortOrder
from ..models.result import SearchResponse
from ..utils.logging_config import setup_logging
from ..utils.validators import validate_messages_batch

logger = logging.getLogger(__name__)

MessageRecord = Union[Dict[str, Any], Message]


class MessageSearchService:
    """
    High-level service interface for message search.

    Holds the message snapshot supplied by the host, validates it at
    ingestion, and hands out search sessions over it.
    """

    def __init__(self, settings: Optional[SearchSettings] = None, **overrides):
        """
        Initialize message search service.

        Args:
            settings: Search settings; defaults are used when omitted
            **overrides: Individual SearchSettings fields to override
        """
        if settings is None:
            settings = SearchSettings(**overrides)
        elif overrides:
            settings = replace(settings, **overrides)
        self.settings = settings

        # Setup logging
        setup_logging(level=self.settings.log_level)

        self.engine = MessageSearchEngine(page_window_size=self.settings.page_window_size)
        self._messages: List[Message] = []
        self._sessions_opened = 0
        self._closed = False

        logger.info("Message search service initialized")

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    def load_messages(self, records: Iterable[MessageRecord]) -> int:
        """
        Replace the message snapshot with validated records.

        Args:
            records: Raw message dicts (e.g. decoded JSON) or Message objects

        Returns:
            Number of messages loaded

        Raises:
            MalformedTimestampError: If any record has an unusable timestamp
            ValidationError: If any record is otherwise invalid
        """
        self._check_open()
        messages = validate_messages_batch(message_from_record(record) for record in records)
        self._messages = messages
        logger.info(f"Loaded {len(messages)} messages")
        return len(messages)

    def add_messages(self, records: Iterable[MessageRecord]) -> int:
        """
        Append validated records to the message snapshot.

        Raises:
            ValidationError: If any record is invalid or repeats an existing ID
        """
        self._check_open()
        new_messages = [message_from_record(record) for record in records]
        self._messages = validate_messages_batch([*self._messages, *new_messages])
        logger.debug(f"Added {len(new_messages)} messages")
        return len(new_messages)

    def senders(self) -> List[User]:
        """Distinct senders of the loaded messages, first-seen order."""
        return self.engine.sender_directory(self._messages)

    def open_session(
        self,
        page_size: Optional[int] = None,
        variant: Optional[str] = None
    ) -> QueryController:
        """
        Open a search session over the current snapshot.

        Args:
            page_size: Results per page; wins over variant
            variant: Display variant name from settings.page_sizes

        Returns:
            A controller with default query state
        """
        self._check_open()
        if page_size is None:
            page_size = self.settings.page_size_for(variant)

        self._sessions_opened += 1
        return QueryController(self._messages, page_size=page_size, engine=self.engine)

    def search(self, state: Union[QueryState, QueryStateModel, Dict[str, Any]]) -> SearchResponse:
        """
        Search the loaded messages.

        Args:
            state: Query state, pydantic query model, or raw query dict

        Returns:
            Paginated search response

        Raises:
            ValidationError: If the query is invalid
            SearchError: If the search fails
        """
        self._check_open()
        state = self._to_query_state(state)

        try:
            response = self.engine.search(self._messages, state)
            logger.debug(f"Search returned {response.total_results} results")
            return response

        except MessageSearchError as e:
            logger.error(f"Search failed: {str(e)}")
            raise

    def search_text(
        self,
        text: str,
        filter_type: Union[FilterType, str] = FilterType.ALL,
        sender_id: Optional[str] = None,
        sort_order: Union[SortOrder, str] = SortOrder.RELEVANCE,
        page: int = 1,
        page_size: Optional[int] = None
    ) -> SearchResponse:
        """
        Convenience method for simple text search.

        Args:
            text: Search text
            filter_type: Message type filter
            sender_id: Optional sender filter
            sort_order: Result ordering
            page: Requested page
            page_size: Results per page (settings default when omitted)

        Returns:
            Paginated search response
        """
        return self.search(dict(
            text=text,
            filter_type=filter_type,
            sender_id=sender_id,
            sort_order=sort_order,
            page=page,
            page_size=page_size or self.settings.default_page_size
        ))

    def get_stats(self) -> Dict[str, Any]:
        """Get service and engine statistics."""
        return {
            'service': {
                'total_messages': len(self._messages),
                'total_senders': len(self.senders()),
                'sessions_opened': self._sessions_opened,
                'closed': self._closed
            },
            'engine': self.engine.get_stats()
        }

    def health_check(self) -> Dict[str, Any]:
        """Report whether the service can serve searches."""
        if self._closed:
            return {'status': 'closed', 'message': 'Service closed'}
        if not self._messages:
            return {'status': 'empty', 'message': 'No messages loaded', 'stats': self.get_stats()}
        return {'status': 'healthy', 'stats': self.get_stats()}

    def _to_query_state(
        self,
        state: Union[QueryState, QueryStateModel, Dict[str, Any]]
    ) -> QueryState:
        """Convert raw query input to a QueryState, raising ValidationError on bad input."""
        try:
            if isinstance(state, dict):
                state = QueryStateModel.model_validate(state)
            if isinstance(state, QueryStateModel):
                state = state.to_query_state()
        except ValueError as e:
            raise ValidationError(f"Invalid query: {e}") from e
        return state

    def _check_open(self) -> None:
        if self._closed:
            raise MessageSearchError("Service is closed")

    def close(self) -> None:
        """Release the message snapshot."""
        self._messages = []
        self._closed = True
        logger.info("Service closed successfully")

    @classmethod
    @contextmanager
    def create(
        cls,
        records: Optional[Iterable[MessageRecord]] = None,
        **kwargs
    ) -> Iterator['MessageSearchService']:
        """
        Create and manage service lifecycle with context manager.

        Args:
            records: Optional messages to load up front
            **kwargs: Service configuration

        Yields:
            Ready message search service
        """
        service = cls(**kwargs)

        try:
            if records is not None:
                service.load_messages(records)
            yield service
        finally:
            service.close()
