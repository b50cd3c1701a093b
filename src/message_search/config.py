"""Engine settings."""

from typing import Dict, Optional
from dataclasses import dataclass, field

from .core.exceptions import ConfigurationError

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _default_page_sizes() -> Dict[str, int]:
    return {"default": 20, "compact": 10, "minimal": 5}


@dataclass
class SearchSettings:
    """
    Host-tunable settings for search sessions.

    Attributes:
        default_page_size: Page size used when a session names none
        page_sizes: Page sizes by display variant
        page_window_size: How many page numbers to offer for navigation
        log_level: Level passed to setup_logging
    """
    default_page_size: int = 20
    page_sizes: Dict[str, int] = field(default_factory=_default_page_sizes)
    page_window_size: int = 5
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.default_page_size < 1:
            raise ConfigurationError("Default page size must be positive")
        for variant, size in self.page_sizes.items():
            if size < 1:
                raise ConfigurationError(f"Page size for variant '{variant}' must be positive")
        if self.page_window_size < 1:
            raise ConfigurationError("Page window size must be positive")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {self.log_level}")

    def page_size_for(self, variant: Optional[str] = None) -> int:
        """
        Resolve the page size for a display variant.

        Raises:
            ConfigurationError: If the variant is unknown
        """
        if variant is None:
            return self.default_page_size
        try:
            return self.page_sizes[variant]
        except KeyError:
            raise ConfigurationError(f"Unknown display variant: {variant}") from None
