"""User notification sinks."""
from .base import BaseNotifier, LoggingNotifier, CallbackNotifier

__all__ = ["BaseNotifier", "LoggingNotifier", "CallbackNotifier"]
