"""Input validation utilities."""

from datetime import datetime
from typing import Iterable, List

from ..models.message import Message, MessageType, User
from ..models.query import QueryState, FilterCriteria, FilterType, SortOrder, DateRange
from ..core.exceptions import MalformedTimestampError, ValidationError

MAX_PAGE_SIZE = 1000


def validate_message(message: Message) -> None:
    """
    Validate message object.

    Args:
        message: Message to validate

    Raises:
        MalformedTimestampError: If the timestamp is not a usable datetime
        ValidationError: If the message is otherwise invalid
    """
    try:
        if not isinstance(message, Message):
            raise ValidationError("Invalid message type")

        if not message.id or not message.id.strip():
            raise ValidationError("Message ID is required")

        if not isinstance(message.type, MessageType):
            raise ValidationError(f"Invalid message type: {message.type}")

        if not isinstance(message.sender, User) or not message.sender.id:
            raise ValidationError(f"Message {message.id} has no sender")

        if message.content is not None and not isinstance(message.content, str):
            raise ValidationError(f"Message {message.id} content must be text")

        if not isinstance(message.timestamp, datetime) or message.timestamp.tzinfo is None:
            raise MalformedTimestampError(message.id, message.timestamp)

    except Exception as e:
        if isinstance(e, ValidationError):
            raise
        raise ValidationError(f"Message validation failed: {str(e)}")


def validate_messages_batch(messages: Iterable[Message]) -> List[Message]:
    """
    Validate a batch of messages.

    Args:
        messages: Messages to validate

    Returns:
        The messages as a list, in their original order

    Raises:
        ValidationError: If any message is invalid or an ID repeats
    """
    batch = list(messages)

    message_ids = set()
    for message in batch:
        validate_message(message)

        if message.id in message_ids:
            raise ValidationError(f"Duplicate message ID found: {message.id}")
        message_ids.add(message.id)

    return batch


def validate_query_state(state: QueryState) -> None:
    """
    Validate query state object.

    Args:
        state: Query state to validate

    Raises:
        ValidationError: If the query state is invalid
    """
    try:
        if not isinstance(state, QueryState):
            raise ValidationError("Invalid query state type")

        if state.text is not None and not isinstance(state.text, str):
            raise ValidationError("Query text must be a string")

        if not isinstance(state.sort_order, SortOrder):
            raise ValidationError(f"Invalid sort order: {state.sort_order}")

        if not isinstance(state.page, int) or state.page < 1:
            raise ValidationError("Page must be a positive integer")

        if not isinstance(state.page_size, int) or state.page_size < 1:
            raise ValidationError("Page size must be a positive integer")

        if state.page_size > MAX_PAGE_SIZE:
            raise ValidationError(f"Page size cannot exceed {MAX_PAGE_SIZE}")

        criteria = state.criteria
        if not isinstance(criteria, FilterCriteria):
            raise ValidationError("Invalid filter criteria")

        if not isinstance(criteria.filter_type, FilterType):
            raise ValidationError(f"Invalid filter type: {criteria.filter_type}")

        if criteria.sender_id is not None and not criteria.sender_id.strip():
            raise ValidationError("Empty sender ID in filter")

        if criteria.chat_id is not None and not criteria.chat_id.strip():
            raise ValidationError("Empty chat ID in filter")

        # Validate date range if provided
        if criteria.date_range is not None:
            if not isinstance(criteria.date_range, DateRange):
                raise ValidationError("Invalid date range")

    except Exception as e:
        if isinstance(e, ValidationError):
            raise
        raise ValidationError(f"Query state validation failed: {str(e)}")
