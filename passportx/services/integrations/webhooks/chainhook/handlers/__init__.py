"""Chainhook domain event handlers.

Each handler turns one kind of on-chain event into notification payloads.
"""

from passportx.services.integrations.webhooks.chainhook.handlers.badge_issued_handler import (
    BadgeIssuedHandler,
)
from passportx.services.integrations.webhooks.chainhook.handlers.badge_mint_handler import (
    BadgeMintHandler,
)
from passportx.services.integrations.webhooks.chainhook.handlers.badge_revoke_handler import (
    BadgeRevokeHandler,
)
from passportx.services.integrations.webhooks.chainhook.handlers.badge_verification_handler import (
    BadgeVerificationHandler,
)
from passportx.services.integrations.webhooks.chainhook.handlers.base import (
    ChainhookEventHandler,
)
from passportx.services.integrations.webhooks.chainhook.handlers.community_creation_handler import (
    CommunityCreationHandler,
)

__all__ = [
    "ChainhookEventHandler",
    "BadgeIssuedHandler",
    "BadgeMintHandler",
    "BadgeRevokeHandler",
    "BadgeVerificationHandler",
    "CommunityCreationHandler",
]
