"""Handler for badge revocation events."""

from typing import Any, Sequence

from passportx.services.integrations.webhooks.chainhook.event_mapper import (
    BADGE_REVOKE,
    arg_at,
    get_notification_type,
)
from passportx.services.integrations.webhooks.chainhook.handlers.base import (
    ChainhookEventHandler,
)
from passportx.services.integrations.webhooks.chainhook.models import (
    BadgeRevokeEvent,
    EventContext,
    NotificationPayload,
)


class BadgeRevokeHandler(ChainhookEventHandler):
    """Tells a former holder that a badge was revoked.

    Contract-call args: user id, badge id, badge name, reason.
    """

    event_type = BADGE_REVOKE
    event_class = BadgeRevokeEvent
    method_aliases = ("revoke", "revoke-badge")
    topic_keywords = ("revoke",)

    def event_from_args(
        self, args: Sequence[Any], context: EventContext
    ) -> BadgeRevokeEvent:
        return BadgeRevokeEvent(
            user_id=arg_at(args, 0),
            badge_id=arg_at(args, 1),
            badge_name=arg_at(args, 2),
            reason=arg_at(args, 3),
            contract_address=context.contract_address,
            transaction_hash=context.transaction_hash,
            block_height=context.block_height,
            timestamp=context.timestamp,
        )

    def create_notification(self, event: BadgeRevokeEvent) -> NotificationPayload:
        badge = event.badge_name or event.badge_id
        message = f"Your {badge} badge has been revoked"
        if event.reason:
            message += f": {event.reason}"
        data = self.base_notification_data(event)
        data.update(
            {
                "badgeId": event.badge_id,
                "badgeName": event.badge_name,
                "reason": event.reason,
            }
        )
        return NotificationPayload(
            user_id=event.user_id,
            type=get_notification_type(self.event_type),
            title=f"Badge Revoked: {badge}",
            message=message,
            data=data,
        )
