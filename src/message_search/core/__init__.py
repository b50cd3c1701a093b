"""Core engine components for message search."""

from .exceptions import (
    MessageSearchError,
    ValidationError,
    MalformedTimestampError,
    SearchError,
    ConfigurationError
)
from .senders import compute_sender_directory
from .filters import apply_filters, matches_criteria
from .matcher import find_matches, match_messages
from .ranker import rank_results
from .paginator import Page, paginate, page_window
from .engine import MessageSearchEngine, search
from .controller import QueryController

__all__ = [
    "MessageSearchEngine",
    "QueryController",
    "search",
    "compute_sender_directory",
    "apply_filters",
    "matches_criteria",
    "find_matches",
    "match_messages",
    "rank_results",
    "Page",
    "paginate",
    "page_window",
    "MessageSearchError",
    "ValidationError",
    "MalformedTimestampError",
    "SearchError",
    "ConfigurationError"
]
