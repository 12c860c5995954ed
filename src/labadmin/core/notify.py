"""
Notification channel for lab administration.

Short, non-blocking user messages with two severities, delivered to
pluggable handlers (log, web flash, terminal).
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class NotificationLevel(Enum):
    """Notification severity levels."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass
class Notification:
    """A message for the user."""

    level: NotificationLevel
    message: str
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self) -> str:
        """Format notification as a string."""
        return f"[{self.level.value.upper()}] {self.message}"


class NotificationHandler(ABC):
    """Abstract base class for notification handlers."""

    @abstractmethod
    def send(self, notification: Notification) -> None:
        """
        Deliver a notification.

        Args:
            notification: Notification to deliver
        """
        pass


class LogNotificationHandler(NotificationHandler):
    """Handler that writes notifications to the application log."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def send(self, notification: Notification) -> None:
        if notification.level == NotificationLevel.ERROR:
            self.log.error(notification.message)
        else:
            self.log.info(notification.message)


class MemoryNotificationHandler(NotificationHandler):
    """Handler that keeps notifications in a list."""

    def __init__(self):
        self.notifications: list[Notification] = []

    def send(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def messages(self) -> list[tuple[str, str]]:
        """(level, message) pairs in delivery order."""
        return [(n.level.value, n.message) for n in self.notifications]

    def clear(self) -> None:
        self.notifications.clear()


class Notifier:
    """
    Dispatches notifications to all registered handlers.

    A failing handler is logged and skipped so the remaining handlers
    still receive the message.
    """

    def __init__(self, handlers: Optional[list[NotificationHandler]] = None):
        self.handlers: list[NotificationHandler] = list(handlers or [])

    def add_handler(self, handler: NotificationHandler) -> None:
        """Register a handler."""
        self.handlers.append(handler)

    def notify(self, level: NotificationLevel, message: str) -> Notification:
        """Send a notification to every handler."""
        notification = Notification(level=level, message=message)
        for handler in self.handlers:
            try:
                handler.send(notification)
            except Exception as e:
                logger.error(f"Handler {handler.__class__.__name__} failed: {e}")
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(NotificationLevel.SUCCESS, message)

    def error(self, message: str) -> Notification:
        return self.notify(NotificationLevel.ERROR, message)


def create_notifier(*handlers: NotificationHandler) -> Notifier:
    """
    Create a notifier that always logs, plus any extra handlers.

    Args:
        handlers: Additional handlers (flash, terminal, memory)

    Returns:
        Configured Notifier
    """
    return Notifier([LogNotificationHandler(), *handlers])
