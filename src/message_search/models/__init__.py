"""Data models for the message search engine."""

from .message import Message, MessageModel, MessageType, User, Attachment
from .query import QueryState, QueryStateModel, FilterCriteria, FilterType, SortOrder, DateRange
from .result import MatchSpan, SearchResult, SearchResponse

__all__ = [
    "Message",
    "MessageModel",
    "MessageType",
    "User",
    "Attachment",
    "QueryState",
    "QueryStateModel",
    "FilterCriteria",
    "FilterType",
    "SortOrder",
    "DateRange",
    "MatchSpan",
    "SearchResult",
    "SearchResponse",
]
