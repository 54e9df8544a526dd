"""Notification sinks: where structured messages are delivered."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from careflow.core.models import NotificationResult


if TYPE_CHECKING:
    from careflow.core.models import Notification

logger = logging.getLogger(__name__)


class NotificationSink(ABC):
    """Accepts structured messages and reports whether delivery succeeded."""

    @abstractmethod
    async def notify(self, message: Notification) -> NotificationResult:
        """Deliver one message."""
        ...


class LoggingNotificationSink(NotificationSink):
    """Logs every message and reports success; stands in for SMS/pager gateways."""

    async def notify(self, message: Notification) -> NotificationResult:
        logger.info(
            "[%s -> %s] (%s) %s", message.channel.value, message.recipient, message.priority, message.text
        )
        return NotificationResult(success=True, channel=message.channel, recipient=message.recipient)


class OutboxNotificationSink(NotificationSink):
    """Keeps delivered messages in memory.

    Recipients listed in ``fail_recipients`` are rejected, which lets callers
    exercise delivery failures.
    """

    def __init__(self, fail_recipients: set[str] | None = None) -> None:
        self.outbox: list[Notification] = []
        self.fail_recipients = fail_recipients or set()

    async def notify(self, message: Notification) -> NotificationResult:
        if message.recipient in self.fail_recipients:
            logger.warning("Delivery to %s rejected", message.recipient)
            return NotificationResult(
                success=False,
                channel=message.channel,
                recipient=message.recipient,
                error=f"Recipient {message.recipient} unreachable",
            )
        self.outbox.append(message)
        return NotificationResult(success=True, channel=message.channel, recipient=message.recipient)
