"""Resolver and notifier providers."""
from .base import BaseProvider
from .resolver import (
    BaseResolver,
    StaticResolver,
    LookupAPIResolver,
    BollsResolver,
    build_resolver,
)
from .notifier import BaseNotifier, LoggingNotifier, CallbackNotifier

__all__ = [
    "BaseProvider",
    "BaseResolver",
    "StaticResolver",
    "LookupAPIResolver",
    "BollsResolver",
    "build_resolver",
    "BaseNotifier",
    "LoggingNotifier",
    "CallbackNotifier",
]
