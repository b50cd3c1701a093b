"""Search result data models."""

from typing import Any, Dict, List, Tuple
from dataclasses import dataclass, field

from .message import Message
from ..utils.text_processing import TextProcessor

_text_processor = TextProcessor()


@dataclass(frozen=True)
class MatchSpan:
    """
    One substring match inside a message's content.

    Attributes:
        start: Offset of the first matched character
        end: Offset one past the last matched character
        text: Matched slice of the content, original casing
    """
    start: int
    end: int
    text: str

    def __post_init__(self) -> None:
        """Validate match span."""
        if self.start < 0:
            raise ValueError("Match start must be non-negative")
        if self.end <= self.start:
            raise ValueError("Match end must be greater than start")

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start, "end": self.end, "text": self.text}


@dataclass
class SearchResult:
    """
    Message paired with its match spans for the current query.

    Attributes:
        message: The matched (or merely filtered) message
        matches: Match spans in content order; empty when no query is active
    """
    message: Message
    matches: List[MatchSpan] = field(default_factory=list)

    @property
    def match_count(self) -> int:
        return len(self.matches)

    @property
    def location(self) -> Tuple[str, str]:
        """(message_id, chat_id) pair handed to the host's selection callback."""
        return self.message.id, self.message.chat_id

    def snippet(self, max_length: int = 120) -> str:
        """Context snippet centred on the first match."""
        return _text_processor.generate_context_snippet(
            self.message.content or "", self.matches, max_length=max_length
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        message = self.message
        return {
            "message": {
                "id": message.id,
                "content": message.content,
                "type": message.type.value,
                "sender": {
                    "id": message.sender.id,
                    "name": message.sender.name,
                    "avatar": message.sender.avatar,
                },
                "timestamp": message.timestamp.isoformat(),
                "chat_id": message.chat_id,
                "chat_name": message.chat_name,
                "attachments": [
                    {"id": a.id, "name": a.name, "type": a.type, "url": a.url}
                    for a in message.attachments
                ],
            },
            "matches": [span.to_dict() for span in self.matches],
            "snippet": self.snippet(),
        }


@dataclass
class SearchResponse:
    """
    Paginated envelope returned by a search.

    Attributes:
        results: Results on the current page, in ranked order
        total_results: Number of results across all pages
        total_pages: Number of pages (0 when there are no results)
        current_page: Page actually returned, after clamping
        elapsed_millis: Wall-clock milliseconds of the last full filter, match,
            rank and paginate run; page-only changes repeat it
        page_size: Results per page
        page_window: Page numbers to offer for direct navigation
    """
    results: List[SearchResult]
    total_results: int
    total_pages: int
    current_page: int
    elapsed_millis: float = 0.0
    page_size: int = 20
    page_window: List[int] = field(default_factory=list)

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "results": [result.to_dict() for result in self.results],
            "total_results": self.total_results,
            "total_pages": self.total_pages,
            "current_page": self.current_page,
            "page_size": self.page_size,
            "page_window": list(self.page_window),
            "elapsed_millis": round(self.elapsed_millis, 3),
        }
