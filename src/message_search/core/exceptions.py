"""Custom exceptions for the message search engine."""

from typing import Any, Optional


class MessageSearchError(Exception):
    """Base exception for message search operations."""
    pass


class ValidationError(MessageSearchError):
    """Exception raised during input validation."""
    pass


class MalformedTimestampError(ValidationError):
    """Exception raised when a message timestamp cannot be used for ordering."""

    def __init__(self, message_id: Optional[str], value: Any):
        self.message_id = message_id
        self.value = value
        super().__init__(
            f"Malformed timestamp for message {message_id or '<unknown>'}: {value!r}"
        )


class SearchError(MessageSearchError):
    """Exception raised during search operations."""
    pass


class ConfigurationError(MessageSearchError):
    """Exception raised for configuration issues."""
    pass
