"""Handler for badge mint events."""

from typing import Any, Sequence

from passportx.services.integrations.webhooks.chainhook.event_mapper import (
    BADGE_MINT,
    arg_at,
    get_notification_type,
)
from passportx.services.integrations.webhooks.chainhook.handlers.base import (
    ChainhookEventHandler,
)
from passportx.services.integrations.webhooks.chainhook.models import (
    BadgeMintEvent,
    EventContext,
    NotificationPayload,
)


class BadgeMintHandler(ChainhookEventHandler):
    """Notifies a user when a badge is minted to them.

    Recognizes `mint` / `mint-badge` contract calls with positional args
    (user id, badge id, badge name, criteria) and print events whose topic
    contains "mint".
    """

    event_type = BADGE_MINT
    event_class = BadgeMintEvent
    method_aliases = ("mint", "mint-badge")
    topic_keywords = ("mint",)

    def event_from_args(
        self, args: Sequence[Any], context: EventContext
    ) -> BadgeMintEvent:
        return BadgeMintEvent(
            user_id=arg_at(args, 0),
            badge_id=arg_at(args, 1),
            badge_name=arg_at(args, 2),
            criteria=arg_at(args, 3),
            contract_address=context.contract_address,
            transaction_hash=context.transaction_hash,
            block_height=context.block_height,
            timestamp=context.timestamp,
        )

    def create_notification(self, event: BadgeMintEvent) -> NotificationPayload:
        data = self.base_notification_data(event)
        data.update(
            {
                "badgeId": event.badge_id,
                "badgeName": event.badge_name,
                "criteria": event.criteria,
            }
        )
        return NotificationPayload(
            user_id=event.user_id,
            type=get_notification_type(self.event_type),
            title=f"Badge Received: {event.badge_name}",
            message=(
                f"Congratulations! You've received the {event.badge_name} badge"
                f" for {event.criteria}"
            ),
            data=data,
        )
