"""Outbound notification delivery collaborator."""

from abc import ABC, abstractmethod
from typing import List

from passportx.lib.logger import configure_logger
from passportx.services.integrations.webhooks.chainhook.models import (
    NotificationPayload,
)


class NotificationDelivery(ABC):
    """Hands notifications to a transport (push, socket broadcast, email)."""

    def __init__(self):
        self.logger = configure_logger(self.__class__.__name__)

    @abstractmethod
    async def deliver(self, notifications: List[NotificationPayload]) -> None:
        """Deliver a batch of notifications."""


class LoggingNotificationDelivery(NotificationDelivery):
    """Delivery that only logs; used when no transport is configured."""

    async def deliver(self, notifications: List[NotificationPayload]) -> None:
        for notification in notifications:
            self.logger.info(
                f"Notification for {notification.user_id}: {notification.title}",
                extra={"event_type": notification.type},
            )
