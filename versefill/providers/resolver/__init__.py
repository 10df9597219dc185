"""Citation resolver implementations."""
import logging

from .base import BaseResolver
from .static import StaticResolver
from .lookup_api import LookupAPIResolver
from .bolls import BollsResolver
from ...exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def build_resolver(config) -> BaseResolver:
    """Create the resolver selected by ``config.resolver``.

    Args:
        config: Config instance

    Returns:
        Resolver instance

    Raises:
        ConfigurationError: If the resolver name is unknown or misconfigured
    """
    if config.resolver == "static":
        if config.verses_file:
            return StaticResolver.from_json(config.verses_file, config=config)
        logger.warning("No verse table configured; every lookup will fail")
        return StaticResolver(config=config)
    if config.resolver == "lookup_api":
        return LookupAPIResolver(config)
    if config.resolver == "bolls":
        return BollsResolver(config)

    raise ConfigurationError(f"Unsupported resolver: {config.resolver}")


__all__ = [
    "BaseResolver",
    "StaticResolver",
    "LookupAPIResolver",
    "BollsResolver",
    "build_resolver",
]
