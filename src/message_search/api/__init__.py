"""Service API for message search."""

from .service import MessageSearchService

__all__ = ["MessageSearchService"]
