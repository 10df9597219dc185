"""Base provider interfaces."""
from abc import ABC
from typing import Any, Optional

from ..config import Config
from ..utils.rate_limiter import rate_limit_api


class BaseProvider(ABC):
    """Base class for all providers."""

    #: Name used for logging and rate limiting
    name: str = "provider"

    def __init__(self, config: Optional[Any] = None):
        """Initialize provider with optional configuration.

        Args:
            config: Configuration object (defaults to Config())
        """
        self.config = config if config is not None else Config()

    def _rate_limit(self) -> None:
        """Apply the configured per-minute call limit for this provider."""
        if getattr(self.config, "enable_rate_limiting", False):
            rate_limit_api(self.name, self.config.max_calls_per_minute, 60)
