"""Fixed-size pagination over ranked results."""

import math
from typing import Generic, List, Sequence, TypeVar
from dataclasses import dataclass

from .exceptions import ValidationError

T = TypeVar("T")

DEFAULT_WINDOW_SIZE = 5


@dataclass
class Page(Generic[T]):
    """
    One page of a ranked sequence.

    Attributes:
        items: Items on this page
        total_results: Length of the full sequence
        total_pages: ceil(total_results / page_size), 0 when empty
        current_page: Page number after clamping
        page_size: Requested page size
    """
    items: List[T]
    total_results: int
    total_pages: int
    current_page: int
    page_size: int

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1


def count_pages(total_results: int, page_size: int) -> int:
    if page_size < 1:
        raise ValidationError("Page size must be positive")
    if total_results <= 0:
        return 0
    return math.ceil(total_results / page_size)


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp a requested page into [1, max(total_pages, 1)]."""
    return max(1, min(page, max(total_pages, 1)))


def paginate(items: Sequence[T], page_size: int, page: int = 1) -> Page[T]:
    """
    Slice a ranked sequence into a page.

    Pages past the end return the last valid page instead of an empty one.

    Args:
        items: Full ranked sequence
        page_size: Items per page, at least 1
        page: Requested 1-based page number

    Returns:
        The clamped page with aggregate counts

    Raises:
        ValidationError: If page_size is less than 1
    """
    total_results = len(items)
    total_pages = count_pages(total_results, page_size)
    current_page = clamp_page(page, total_pages)

    start = (current_page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        total_results=total_results,
        total_pages=total_pages,
        current_page=current_page,
        page_size=page_size
    )


def page_window(current_page: int, total_pages: int, size: int = DEFAULT_WINDOW_SIZE) -> List[int]:
    """
    Page numbers offered for direct navigation.

    Up to size consecutive pages starting two before the current page,
    never below 1 and never past total_pages.
    """
    if total_pages <= 0 or size <= 0:
        return []
    first = max(1, current_page - 2)
    return [number for number in range(first, first + size) if number <= total_pages]
