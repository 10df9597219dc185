"""Notifier interfaces.

Notifiers are fire-and-forget: the engine never waits on them and logs,
rather than raises, anything they throw.
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable

from ...core.models import NotificationKind

logger = logging.getLogger(__name__)


class BaseNotifier(ABC):
    """Abstract base class for notification sinks."""

    @abstractmethod
    def notify(self, kind: NotificationKind, message: str) -> None:
        """Report a non-blocking message to the user.

        Args:
            kind: SUCCESS or ERROR
            message: Human-readable message
        """
        pass


class LoggingNotifier(BaseNotifier):
    """Write notifications to the log."""

    def notify(self, kind: NotificationKind, message: str) -> None:
        if kind == NotificationKind.ERROR:
            logger.warning(message)
        else:
            logger.info(message)


class CallbackNotifier(BaseNotifier):
    """Forward notifications to a callable, e.g. a UI toast."""

    def __init__(self, callback: Callable[[NotificationKind, str], None]):
        self.callback = callback

    def notify(self, kind: NotificationKind, message: str) -> None:
        self.callback(kind, message)
