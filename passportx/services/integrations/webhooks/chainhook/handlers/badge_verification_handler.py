"""Handler for badge verification events."""

from typing import Any, Dict, Sequence

from passportx.services.integrations.webhooks.chainhook.event_mapper import (
    BADGE_VERIFY,
    arg_at,
    get_notification_type,
    narrow_arg,
)
from passportx.services.integrations.webhooks.chainhook.handlers.base import (
    ChainhookEventHandler,
)
from passportx.services.integrations.webhooks.chainhook.models import (
    BadgeVerificationEvent,
    EventContext,
    NotificationPayload,
)


class BadgeVerificationHandler(ChainhookEventHandler):
    """Notifies a badge holder when their badge is verified."""

    event_type = BADGE_VERIFY
    event_class = BadgeVerificationEvent
    method_aliases = ("verify", "verify-badge")
    topic_keywords = ("verify",)

    def event_from_args(
        self, args: Sequence[Any], context: EventContext
    ) -> BadgeVerificationEvent:
        return BadgeVerificationEvent(
            user_id=arg_at(args, 0),
            badge_id=arg_at(args, 1),
            badge_name=arg_at(args, 2),
            verification_data=self._verification_data(args),
            contract_address=context.contract_address,
            transaction_hash=context.transaction_hash,
            block_height=context.block_height,
            timestamp=context.timestamp,
        )

    @staticmethod
    def _verification_data(args: Sequence[Any]) -> Dict[str, Any]:
        if len(args) < 4:
            return {}
        data = args[3]
        if isinstance(data, dict):
            inner = data.get("value", data)
            if isinstance(inner, dict):
                return dict(inner)
        return {"raw": narrow_arg(data)}

    def create_notification(
        self, event: BadgeVerificationEvent
    ) -> NotificationPayload:
        status = event.verification_data.get("status") or "verified"
        data = self.base_notification_data(event)
        data.update(
            {
                "badgeId": event.badge_id,
                "badgeName": event.badge_name,
                "verificationStatus": status,
                "verificationData": event.verification_data,
            }
        )
        return NotificationPayload(
            user_id=event.user_id,
            type=get_notification_type(self.event_type),
            title=f"Badge Verification Update: {event.badge_name}",
            message=f"Your {event.badge_name} badge has been verified. Status: {status}",
            data=data,
        )
