"""Filter pipeline applied before text matching."""

import logging
from typing import Callable, Dict, Iterable, List

from ..models.message import Message, MessageType
from ..models.query import FilterCriteria, FilterType
from ..utils.text_processing import TextProcessor

logger = logging.getLogger(__name__)

_text_processor = TextProcessor()

MEDIA_TYPES = frozenset({MessageType.IMAGE, MessageType.VIDEO, MessageType.VOICE})

_TYPE_PREDICATES: Dict[FilterType, Callable[[Message], bool]] = {
    FilterType.ALL: lambda message: True,
    FilterType.TEXT: lambda message: (
        message.type == MessageType.TEXT and not _text_processor.is_blank(message.content)
    ),
    FilterType.IMAGES: lambda message: message.type == MessageType.IMAGE,
    FilterType.FILES: lambda message: message.type == MessageType.FILE,
    FilterType.MEDIA: lambda message: message.type in MEDIA_TYPES,
    FilterType.LINKS: lambda message: _text_processor.contains_link(message.content),
}


def matches_criteria(message: Message, criteria: FilterCriteria) -> bool:
    """Check a single message against every constraint in criteria."""
    # Message type filter
    if not _TYPE_PREDICATES[criteria.filter_type](message):
        return False

    # Sender filter
    if criteria.sender_id is not None and message.sender.id != criteria.sender_id:
        return False

    # Date range filter
    if criteria.date_range is not None and not criteria.date_range.contains(message.timestamp):
        return False

    # Chat filter
    if criteria.chat_id is not None and message.chat_id != criteria.chat_id:
        return False

    # Attachment filter
    if criteria.has_attachments is not None and message.has_attachments != criteria.has_attachments:
        return False

    return True


def apply_filters(messages: Iterable[Message], criteria: FilterCriteria) -> List[Message]:
    """
    Apply filter criteria to a message collection.

    Args:
        messages: Messages in their base order
        criteria: Constraints, combined with AND

    Returns:
        Matching messages, relative order preserved
    """
    if criteria.is_default:
        return list(messages)

    filtered = [message for message in messages if matches_criteria(message, criteria)]
    logger.debug(f"Filter {criteria.filter_type.value} kept {len(filtered)} messages")
    return filtered
