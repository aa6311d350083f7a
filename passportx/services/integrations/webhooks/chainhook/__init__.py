"""Chainhook webhook module.

Parses chainhook deliveries, classifies them into PassportX domain events
and dispatches them to registered handlers and actions.
"""

from passportx.services.integrations.webhooks.chainhook.actions import ActionExecutor
from passportx.services.integrations.webhooks.chainhook.builder import (
    EventHandlerBuilder,
)
from passportx.services.integrations.webhooks.chainhook.delivery import (
    LoggingNotificationDelivery,
    NotificationDelivery,
)
from passportx.services.integrations.webhooks.chainhook.handler import (
    ChainhookHandler,
    build_registry,
)
from passportx.services.integrations.webhooks.chainhook.handlers import (
    BadgeIssuedHandler,
    BadgeMintHandler,
    BadgeRevokeHandler,
    BadgeVerificationHandler,
    ChainhookEventHandler,
    CommunityCreationHandler,
)
from passportx.services.integrations.webhooks.chainhook.models import (
    NotificationPayload,
    PredicateMatchResult,
    WebhookPayload,
)
from passportx.services.integrations.webhooks.chainhook.parser import ChainhookParser
from passportx.services.integrations.webhooks.chainhook.registry import (
    EventHandlerRegistry,
)
from passportx.services.integrations.webhooks.chainhook.service import ChainhookService

__all__ = [
    "ActionExecutor",
    "BadgeIssuedHandler",
    "BadgeMintHandler",
    "BadgeRevokeHandler",
    "BadgeVerificationHandler",
    "ChainhookEventHandler",
    "ChainhookHandler",
    "ChainhookParser",
    "ChainhookService",
    "CommunityCreationHandler",
    "EventHandlerBuilder",
    "EventHandlerRegistry",
    "LoggingNotificationDelivery",
    "NotificationDelivery",
    "NotificationPayload",
    "PredicateMatchResult",
    "WebhookPayload",
    "build_registry",
]
