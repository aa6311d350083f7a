"""Chainhook webhook service implementation."""

from typing import List, Optional

from passportx.lib.logger import configure_logger
from passportx.services.integrations.webhooks.base import WebhookService
from passportx.services.integrations.webhooks.chainhook.delivery import (
    NotificationDelivery,
)
from passportx.services.integrations.webhooks.chainhook.handler import ChainhookHandler
from passportx.services.integrations.webhooks.chainhook.models import WebhookPayload
from passportx.services.integrations.webhooks.chainhook.parser import ChainhookParser
from passportx.services.integrations.webhooks.chainhook.registry import (
    EventHandlerRegistry,
)


class ChainhookService(WebhookService[List[WebhookPayload]]):
    """Service for handling Chainhook webhooks.

    Build one instance at startup and reuse it for every delivery so the
    registry is configured once.
    """

    source = "chainhook"

    def __init__(
        self,
        registry: Optional[EventHandlerRegistry] = None,
        delivery: Optional[NotificationDelivery] = None,
    ):
        handler = ChainhookHandler(registry=registry, delivery=delivery)
        super().__init__(parser=ChainhookParser(), handler=handler)
        self.logger = configure_logger(self.__class__.__name__)

    @property
    def registry(self) -> EventHandlerRegistry:
        return self.handler.registry
