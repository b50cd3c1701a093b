"""Query state model with filtering and ordering options."""

from datetime import datetime
from enum import Enum
from typing import Optional
from dataclasses import dataclass, field, replace
from pydantic import BaseModel, Field, field_validator

from .message import normalize_timestamp

DEFAULT_PAGE_SIZE = 20


class FilterType(str, Enum):
    """Message type filters offered by the search UI."""
    ALL = "all"
    TEXT = "text"
    IMAGES = "images"
    FILES = "files"
    MEDIA = "media"
    LINKS = "links"


class SortOrder(str, Enum):
    """Result orderings."""
    RELEVANCE = "relevance"
    NEWEST = "newest"
    OLDEST = "oldest"


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive date range filter; either bound may be open.

    A start after the end is accepted and contains no dates.
    """
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Validate date range."""
        if self.start is not None:
            object.__setattr__(self, "start", normalize_timestamp(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", normalize_timestamp(self.end))

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, date: datetime) -> bool:
        """Check if date falls within range."""
        if self.start and date < self.start:
            return False
        if self.end and date > self.end:
            return False
        return True


@dataclass(frozen=True)
class FilterCriteria:
    """
    Conjunction of constraints applied before text matching.

    Attributes:
        filter_type: Message type filter
        sender_id: Only messages from this sender (None = all senders)
        date_range: Only messages inside this range (None = all dates)
        chat_id: Only messages from this chat (None = all chats)
        has_attachments: Require (True) or exclude (False) attachments
    """
    filter_type: FilterType = FilterType.ALL
    sender_id: Optional[str] = None
    date_range: Optional[DateRange] = None
    chat_id: Optional[str] = None
    has_attachments: Optional[bool] = None

    def __post_init__(self) -> None:
        if not isinstance(self.filter_type, FilterType):
            object.__setattr__(self, "filter_type", FilterType(self.filter_type))

    @property
    def is_default(self) -> bool:
        return self == FilterCriteria()


@dataclass
class QueryState:
    """
    Mutable state of one search session.

    Attributes:
        text: Raw query text as typed (trimmed before matching)
        criteria: Filters applied before matching
        sort_order: Result ordering
        page: Requested 1-based page number
        page_size: Results per page, chosen by the host
    """
    text: str = ""
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    sort_order: SortOrder = SortOrder.RELEVANCE
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        """Validate query state parameters."""
        if not isinstance(self.sort_order, SortOrder):
            self.sort_order = SortOrder(self.sort_order)
        if self.page < 1:
            raise ValueError("Page must be positive")
        if self.page_size < 1:
            raise ValueError("Page size must be positive")

    @property
    def normalized_text(self) -> str:
        return (self.text or "").strip()

    @property
    def has_query(self) -> bool:
        return bool(self.normalized_text)

    def with_criteria(self, **changes) -> 'QueryState':
        """Return a copy with updated filter criteria and the page reset to 1."""
        return replace(self, criteria=replace(self.criteria, **changes), page=1)


class QueryStateModel(BaseModel):
    """Pydantic model for query validation in API contexts."""

    text: str = Field("", description="Search query text")
    filter_type: FilterType = Field(FilterType.ALL, description="Message type filter")
    sender_id: Optional[str] = Field(None, description="Sender filter")
    chat_id: Optional[str] = Field(None, description="Chat filter")
    has_attachments: Optional[bool] = Field(None, description="Attachment filter")
    date_from: Optional[datetime] = Field(None, description="Inclusive lower date bound")
    date_to: Optional[datetime] = Field(None, description="Inclusive upper date bound")
    sort_order: SortOrder = Field(SortOrder.RELEVANCE, description="Result ordering")
    page: int = Field(1, ge=1, description="1-based page number")
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=1000, description="Results per page")

    @field_validator('sender_id', 'chat_id')
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank identifiers and the 'all' sentinel as no filter."""
        if v is None or not v.strip() or v == "all":
            return None
        return v.strip()

    def to_query_state(self) -> QueryState:
        """Convert to QueryState dataclass."""
        date_range = None
        if self.date_from is not None or self.date_to is not None:
            date_range = DateRange(start=self.date_from, end=self.date_to)

        return QueryState(
            text=self.text,
            criteria=FilterCriteria(
                filter_type=self.filter_type,
                sender_id=self.sender_id,
                date_range=date_range,
                chat_id=self.chat_id,
                has_attachments=self.has_attachments,
            ),
            sort_order=self.sort_order,
            page=self.page,
            page_size=self.page_size,
        )
