"""Messaging, notification and cache-invalidation implementations."""

from reposync.notify.cache import LoggingCacheInvalidator
from reposync.notify.messenger import ConsoleMessenger, LoggingMessenger
from reposync.notify.sink import MessengerNotificationSink, NullNotificationSink, format_change_message

__all__ = [
    "ConsoleMessenger",
    "LoggingCacheInvalidator",
    "LoggingMessenger",
    "MessengerNotificationSink",
    "NullNotificationSink",
    "format_change_message",
]
