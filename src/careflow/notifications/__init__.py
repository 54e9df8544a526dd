"""Notification delivery interfaces."""

from careflow.notifications.sink import (
    LoggingNotificationSink,
    NotificationSink,
    OutboxNotificationSink,
)

__all__ = ["LoggingNotificationSink", "NotificationSink", "OutboxNotificationSink"]
