"""Notification sinks for reconciliation change events."""

from __future__ import annotations

import logging

from reposync.contracts.notify import Messenger, NotificationSink
from reposync.contracts.sync import ChangeEvent

_LOG = logging.getLogger(__name__)


def format_change_message(event: ChangeEvent) -> str:
    record = event.record
    return (
        f"The repository named {record.label} has been {event.action.value} ({record.url}). "
        f"The repository is owned by {record.owner_id}."
    )


class MessengerNotificationSink(NotificationSink):
    """Posts one status message per change event."""

    def __init__(self, messenger: Messenger) -> None:
        self._messenger = messenger

    def notify(self, event: ChangeEvent) -> None:
        self._messenger.add_status(format_change_message(event))


class NullNotificationSink(NotificationSink):
    def notify(self, event: ChangeEvent) -> None:
        _LOG.debug("Dropping %s event for %s", event.action.value, event.record.key)
