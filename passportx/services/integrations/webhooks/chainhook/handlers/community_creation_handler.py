"""Handler for community creation events."""

from typing import Any, Sequence

from passportx.services.integrations.webhooks.chainhook.event_mapper import (
    COMMUNITY_CREATION,
    arg_at,
    get_notification_type,
)
from passportx.services.integrations.webhooks.chainhook.handlers.base import (
    ChainhookEventHandler,
)
from passportx.services.integrations.webhooks.chainhook.models import (
    CommunityCreationEvent,
    DomainEvent,
    EventContext,
    NotificationPayload,
)


class CommunityCreationHandler(ChainhookEventHandler):
    """Confirms to the owner that their community was created on chain.

    The `create-community` call carries (community id, name, description,
    owner); when the owner argument is missing the transaction sender is
    used. Print events must mention both "community" and "created".
    """

    event_type = COMMUNITY_CREATION
    event_class = CommunityCreationEvent
    method_aliases = ("create-community",)
    topic_keywords = ("community", "created")

    def event_from_args(
        self, args: Sequence[Any], context: EventContext
    ) -> CommunityCreationEvent:
        return CommunityCreationEvent(
            community_id=arg_at(args, 0),
            community_name=arg_at(args, 1),
            description=arg_at(args, 2),
            owner_address=arg_at(args, 3) or context.sender,
            contract_address=context.contract_address,
            transaction_hash=context.transaction_hash,
            block_height=context.block_height,
            timestamp=context.timestamp,
        )

    def is_notifiable(self, event: DomainEvent) -> bool:
        if not isinstance(event, CommunityCreationEvent):
            return False
        valid = all(
            [
                event.community_id,
                event.community_name,
                event.owner_address,
                event.contract_address,
                event.transaction_hash,
            ]
        )
        if not valid:
            self.logger.warning(
                "Skipping incomplete community creation event",
                extra={"transaction_hash": event.transaction_hash or None},
            )
        return valid

    def create_notification(
        self, event: CommunityCreationEvent
    ) -> NotificationPayload:
        data = self.base_notification_data(event)
        data.update(
            {
                "communityId": event.community_id,
                "communityName": event.community_name,
                "description": event.description,
                "ownerAddress": event.owner_address,
            }
        )
        return NotificationPayload(
            user_id=event.owner_address,
            type=get_notification_type(self.event_type),
            title=f"Community Created: {event.community_name}",
            message=(
                f'Your new community "{event.community_name}" has been'
                " successfully created on the blockchain"
            ),
            data=data,
        )
