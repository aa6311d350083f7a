"""Handler for badge issuance events."""

from passportx.services.integrations.webhooks.chainhook.event_mapper import (
    BADGE_ISSUED,
    get_notification_type,
)
from passportx.services.integrations.webhooks.chainhook.handlers.badge_mint_handler import (
    BadgeMintHandler,
)
from passportx.services.integrations.webhooks.chainhook.models import (
    BadgeMintEvent,
    NotificationPayload,
)


class BadgeIssuedHandler(BadgeMintHandler):
    """Notifies a user when an issuer grants them a badge.

    `issue-badge` takes the same positional args as `mint-badge`; print
    events must mention "issue".
    """

    event_type = BADGE_ISSUED
    method_aliases = ("issue-badge",)
    topic_keywords = ("issue",)

    def create_notification(self, event: BadgeMintEvent) -> NotificationPayload:
        notification = super().create_notification(event)
        notification.type = get_notification_type(self.event_type)
        notification.title = f"Badge Issued: {event.badge_name}"
        notification.message = f"You've been issued the {event.badge_name} badge"
        if event.criteria:
            notification.message += f" for {event.criteria}"
        return notification
