"""Fluent registration over an EventHandlerRegistry."""

from passportx.services.integrations.webhooks.chainhook.actions import ActionHandler
from passportx.services.integrations.webhooks.chainhook.event_mapper import (
    ANY_EVENT,
    BADGE_ISSUED,
    BADGE_MINT,
    BADGE_REVOKE,
    BADGE_VERIFY,
    COMMUNITY_CREATION,
    METADATA_UPDATE,
)
from passportx.services.integrations.webhooks.chainhook.registry import (
    ErrorHandler,
    EventHandler,
    EventHandlerRegistry,
)


class EventHandlerBuilder:
    """Registers handlers for the well-known event types with chained calls.

    Example:
        EventHandlerBuilder(registry)
            .on_badge_mint(BadgeMintHandler())
            .on_error(report_error)
            .action("notify", send_notification)
    """

    def __init__(self, registry: EventHandlerRegistry):
        self.registry = registry

    def on(self, event_type: str, handler: EventHandler) -> "EventHandlerBuilder":
        self.registry.register_handler(event_type, handler)
        return self

    def on_badge_mint(self, handler: EventHandler) -> "EventHandlerBuilder":
        return self.on(BADGE_MINT, handler)

    def on_badge_issued(self, handler: EventHandler) -> "EventHandlerBuilder":
        return self.on(BADGE_ISSUED, handler)

    def on_badge_verification(self, handler: EventHandler) -> "EventHandlerBuilder":
        return self.on(BADGE_VERIFY, handler)

    def on_revocation(self, handler: EventHandler) -> "EventHandlerBuilder":
        return self.on(BADGE_REVOKE, handler)

    def on_community_creation(self, handler: EventHandler) -> "EventHandlerBuilder":
        return self.on(COMMUNITY_CREATION, handler)

    def on_metadata_update(self, handler: EventHandler) -> "EventHandlerBuilder":
        return self.on(METADATA_UPDATE, handler)

    def on_any_event(self, handler: EventHandler) -> "EventHandlerBuilder":
        """Register a handler that ChainhookHandler runs once for every recognized block."""
        return self.on(ANY_EVENT, handler)

    def on_error(self, handler: ErrorHandler) -> "EventHandlerBuilder":
        self.registry.register_error_handler(handler)
        return self

    def action(self, name: str, handler: ActionHandler) -> "EventHandlerBuilder":
        self.registry.register_action_handler(name, handler)
        return self
