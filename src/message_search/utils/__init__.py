"""Utility modules for message search."""

from .text_processing import TextProcessor
from .logging_config import setup_logging, StructuredLogger
from .validators import validate_message, validate_messages_batch, validate_query_state

__all__ = [
    "TextProcessor",
    "setup_logging",
    "StructuredLogger",
    "validate_message",
    "validate_messages_batch",
    "validate_query_state",
]
