"""Logging configuration for the message search engine."""

import logging
import sys
from typing import Any, MutableMapping, Optional, TextIO, Tuple, Union

from ..core.exceptions import ConfigurationError

PACKAGE_LOGGER = "message_search"

_HANDLER_NAME = "message_search.console"


def resolve_level(level: Union[str, int]) -> int:
    """
    Turn a level name or number into a logging level.

    Raises:
        ConfigurationError: If the level name is unknown
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ConfigurationError(f"Unknown log level: {level}")
    return resolved


def setup_logging(
    level: Union[str, int] = "INFO",
    format_string: Optional[str] = None,
    include_timestamp: bool = True,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Attach a console handler to the package logger.

    Only the ``message_search`` logger is touched, so a host application's
    own logging setup is left alone. Calling this again replaces the
    handler instead of stacking another one.

    Args:
        level: Logging level name or number
        format_string: Custom format string
        include_timestamp: Whether to include timestamps
        stream: Output stream (stdout by default)

    Returns:
        The configured package logger
    """
    if format_string is None:
        if include_timestamp:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(name)s - %(levelname)s - %(message)s"

    numeric_level = resolve_level(level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)

    for handler in list(package_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(format_string))
    package_logger.addHandler(handler)

    package_logger.debug(f"Logging configured with level: {logging.getLevelName(numeric_level)}")
    return package_logger


class StructuredLogger(logging.LoggerAdapter):
    """Logger adapter that appends key=value context to every message."""

    def __init__(self, name: str, context: Optional[MutableMapping[str, Any]] = None):
        super().__init__(logging.getLogger(name), dict(context or {}))

    @property
    def context(self) -> MutableMapping[str, Any]:
        return self.extra

    def with_context(self, **kwargs) -> 'StructuredLogger':
        """Return a logger carrying this logger's context plus kwargs."""
        return StructuredLogger(self.logger.name, {**self.extra, **kwargs})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        if not self.extra:
            return msg, kwargs

        context_str = " ".join(f"{k}={v}" for k, v in self.extra.items())
        return f"{msg} [{context_str}]", kwargs
