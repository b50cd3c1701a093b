"""
Message Search Engine for Chat Applications

An in-memory search engine over chat messages: type, sender and date
filtering, case-insensitive substring matching with match spans, three
result orderings and fixed-size pagination.
"""

from .core.exceptions import (
    MessageSearchError,
    ValidationError,
    MalformedTimestampError,
    SearchError,
    ConfigurationError,
)
from .core.engine import MessageSearchEngine, search
from .core.controller import QueryController
from .core.senders import compute_sender_directory
from .models.message import Message, MessageModel, MessageType, User, Attachment
from .models.query import QueryState, FilterCriteria, FilterType, SortOrder, DateRange
from .models.result import MatchSpan, SearchResult, SearchResponse
from .config import SearchSettings
from .api.service import MessageSearchService

__version__ = "1.0.0"

__all__ = [
    "MessageSearchService",
    "MessageSearchEngine",
    "QueryController",
    "SearchSettings",
    "search",
    "compute_sender_directory",
    "Message",
    "MessageModel",
    "MessageType",
    "User",
    "Attachment",
    "QueryState",
    "FilterCriteria",
    "FilterType",
    "SortOrder",
    "DateRange",
    "MatchSpan",
    "SearchResult",
    "SearchResponse",
    "MessageSearchError",
    "ValidationError",
    "MalformedTimestampError",
    "SearchError",
    "ConfigurationError",
]
