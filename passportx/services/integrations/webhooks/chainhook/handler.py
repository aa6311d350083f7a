"""Chainhook webhook handler implementation."""

from typing import Any, Dict, List, Optional

from passportx.lib.logger import configure_logger
from passportx.services.integrations.webhooks.base import WebhookHandler
from passportx.services.integrations.webhooks.chainhook.builder import (
    EventHandlerBuilder,
)
from passportx.services.integrations.webhooks.chainhook.delivery import (
    LoggingNotificationDelivery,
    NotificationDelivery,
)
from passportx.services.integrations.webhooks.chainhook.event_mapper import (
    ANY_EVENT,
    extract_event_types,
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
    DispatchResult,
    DomainEvent,
    NotificationPayload,
    OutcomeStatus,
    WebhookPayload,
)
from passportx.services.integrations.webhooks.chainhook.registry import (
    EventHandlerRegistry,
)

logger = configure_logger(__name__)


def build_registry(delivery: NotificationDelivery) -> EventHandlerRegistry:
    """Create a registry wired with the standard domain handlers.

    Registers the badge and community handlers, an error observer that logs
    failed handlers and a `notify` action that delivers the notification
    for a predicate-matched event.
    """
    registry = EventHandlerRegistry()
    domain_handlers: List[ChainhookEventHandler] = [
        BadgeMintHandler(),
        BadgeIssuedHandler(),
        BadgeVerificationHandler(),
        BadgeRevokeHandler(),
        CommunityCreationHandler(),
    ]
    mint, issued, verification, revoke, community = domain_handlers

    def log_handler_error(error: Exception, payload: Any) -> None:
        block = getattr(payload, "block_identifier", None)
        logger.warning(
            f"Chainhook handler failed: {str(error)}",
            extra={"block_height": getattr(block, "index", None)},
        )

    async def notify(event: DomainEvent) -> Optional[Dict[str, Any]]:
        for handler in domain_handlers:
            if isinstance(event, handler.event_class) and handler.is_notifiable(event):
                notification = handler.create_notification(event)
                await delivery.deliver([notification])
                return notification.to_dict()
        logger.debug(f"No notification for {type(event).__name__}")
        return None

    (
        EventHandlerBuilder(registry)
        .on_badge_mint(mint)
        .on_badge_issued(issued)
        .on_badge_verification(verification)
        .on_revocation(revoke)
        .on_community_creation(community)
        .on_error(log_handler_error)
        .action("notify", notify)
    )
    return registry


class ChainhookHandler(WebhookHandler[List[WebhookPayload]]):
    """Classifies each delivered block, dispatches it through the registry and
    hands the resulting notifications to the delivery collaborator."""

    def __init__(
        self,
        registry: Optional[EventHandlerRegistry] = None,
        delivery: Optional[NotificationDelivery] = None,
    ):
        super().__init__()
        self.logger = configure_logger(self.__class__.__name__)
        self.delivery = delivery or LoggingNotificationDelivery()
        self.registry = registry or build_registry(self.delivery)

    async def handle(self, parsed_data: List[WebhookPayload]) -> Dict[str, Any]:
        """Handle Chainhook webhook data.

        Every distinct event type found in a block is dispatched once, so a
        block mixing mints and community creations reaches both handler
        sets. Handlers registered under ANY_EVENT run once per block that
        has at least one recognized event.

        Args:
            parsed_data: One payload per applied block

        Returns:
            Dict containing the result of handling the webhook
        """
        self.logger.info(f"Processing chainhook webhook with {len(parsed_data)} block(s)")

        blocks: List[Dict[str, Any]] = []
        notifications: List[NotificationPayload] = []
        for payload in parsed_data:
            height = payload.block_identifier.index
            event_types = extract_event_types(payload)
            if not event_types:
                self.logger.debug(f"Block {height} has no recognized events, skipping")
                blocks.append(
                    {
                        "block_height": height,
                        "event_types": [],
                        "dispatches": [],
                        "notifications": 0,
                    }
                )
                continue

            if self.registry.get_handlers(ANY_EVENT):
                event_types = event_types + [ANY_EVENT]

            dispatches: List[Dict[str, Any]] = []
            block_notifications: List[NotificationPayload] = []
            for event_type in event_types:
                dispatch = await self.registry.dispatch(event_type, payload)
                collected = self.collect_notifications(dispatch)
                block_notifications.extend(collected)
                dispatches.append(self.summarize_dispatch(event_type, dispatch, collected))

            notifications.extend(block_notifications)
            blocks.append(
                {
                    "block_height": height,
                    "event_types": event_types,
                    "dispatches": dispatches,
                    "notifications": len(block_notifications),
                }
            )

        if notifications:
            await self.delivery.deliver(notifications)

        return {
            "success": True,
            "message": f"Processed {len(parsed_data)} block(s)",
            "data": {"blocks": blocks, "notifications": len(notifications)},
        }

    @staticmethod
    def summarize_dispatch(
        event_type: str,
        dispatch: DispatchResult,
        notifications: List[NotificationPayload],
    ) -> Dict[str, Any]:
        return {
            "event_type": event_type,
            "dispatched": dispatch.success,
            "event_hash": dispatch.event_hash,
            "handlers": [
                {
                    "name": outcome.name,
                    "status": outcome.status.value,
                    "error": outcome.error,
                }
                for outcome in dispatch.actions
            ],
            "notifications": len(notifications),
            "processing_time_ms": dispatch.processing_time_ms,
        }

    @staticmethod
    def collect_notifications(dispatch: DispatchResult) -> List[NotificationPayload]:
        """Notifications returned by the successful handlers of one dispatch."""
        collected: List[NotificationPayload] = []
        for outcome in dispatch.actions:
            if outcome.status != OutcomeStatus.SUCCESS or not isinstance(
                outcome.result, list
            ):
                continue
            collected.extend(
                item for item in outcome.result if isinstance(item, NotificationPayload)
            )
        return collected
