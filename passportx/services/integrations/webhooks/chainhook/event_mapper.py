"""Normalization of chainhook operations into domain events.

Two ingestion paths describe the same logical event: a direct contract call
with positional arguments, and a print event whose topic names the event.
Both are classified by the ordered rule tables below and mapped into the
domain event dataclasses in `models`.

Every function here is best effort: unexpected shapes produce empty strings,
zeros or the unknown event type, never an exception.
"""

import time
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from passportx.lib.logger import configure_logger
from passportx.services.integrations.webhooks.chainhook.models import (
    BadgeMintEvent,
    BadgeRevokeEvent,
    BadgeVerificationEvent,
    CommunityCreationEvent,
    DomainEvent,
    EventContext,
    WebhookPayload,
)
from passportx.services.integrations.webhooks.chainhook.parser import parse_block

logger = configure_logger(__name__)

# Canonical event types
BADGE_MINT = "badge-mint"
BADGE_VERIFY = "badge-verify"
BADGE_ISSUED = "badge-issued"
BADGE_REVOKE = "badge-revoke"
COMMUNITY_CREATION = "community-creation"
UNKNOWN_EVENT_TYPE = ""

# Registration keys not produced by classification
METADATA_UPDATE = "metadata-update"
ANY_EVENT = "*"

# Contract methods by alias; evaluated in order, first match wins.
METHOD_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("mint", "mint-badge"), BADGE_MINT),
    (("verify", "verify-badge"), BADGE_VERIFY),
    (("issue-badge",), BADGE_ISSUED),
    (("revoke", "revoke-badge"), BADGE_REVOKE),
    (("create-community",), COMMUNITY_CREATION),
)

# Print-event topics; every substring must be present. Evaluated in order,
# first match wins, so "badge-mint-revoke" classifies as a mint.
TOPIC_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("badge", "mint"), BADGE_MINT),
    (("badge", "verify"), BADGE_VERIFY),
    (("badge", "issue"), BADGE_ISSUED),
    (("badge", "revoke"), BADGE_REVOKE),
    (("community", "created"), COMMUNITY_CREATION),
)

NOTIFICATION_TYPES = {
    "badge-mint": "badge_received",
    "badge_mint": "badge_received",
    "badge-issued": "badge_issued",
    "badge_issued": "badge_issued",
    "badge-verify": "badge_verified",
    "badge_verify": "badge_verified",
    "badge-verified": "badge_verified",
    "badge_verified": "badge_verified",
    "badge-revoke": "badge_revoked",
    "badge_revoke": "badge_revoked",
    "community-creation": "community_created",
    "community_creation": "community_created",
    "community-update": "community_update",
    "community_update": "community_update",
    "community-invite": "community_invite",
    "community_invite": "community_invite",
    "system-announcement": "system_announcement",
    "system_announcement": "system_announcement",
}
DEFAULT_NOTIFICATION_TYPE = "system_announcement"


def now_ms() -> int:
    return int(time.time() * 1000)


def narrow_arg(arg: Any) -> str:
    """Reduce a contract-call argument to a string.

    Priority: the argument's `value` (mapping key or attribute) when present,
    else the argument itself when it is a scalar, else "".
    """
    if arg is None:
        return ""
    if isinstance(arg, Mapping):
        value = arg.get("value")
    else:
        value = getattr(arg, "value", arg)
    if value is None or isinstance(value, (Mapping, list, tuple, set)):
        return ""
    return str(value)


def arg_at(args: Any, index: int) -> str:
    """Positional argument `index` narrowed with `narrow_arg`, or ""."""
    if not isinstance(args, (list, tuple)) or len(args) <= index:
        return ""
    return narrow_arg(args[index])


def coerce_payload(payload: Union[WebhookPayload, Mapping]) -> WebhookPayload:
    """Accept a parsed payload or a JSON-decoded block."""
    if isinstance(payload, Mapping):
        return parse_block(payload)
    return payload


def resolve_timestamp(payload: WebhookPayload) -> int:
    """Chain-supplied position when available, wall-clock receipt time otherwise."""
    metadata = getattr(payload, "metadata", None)
    position = getattr(metadata, "pox_cycle_position", None)
    if position:
        return position
    return now_ms()


def _match_method(method: Any) -> str:
    if not isinstance(method, str):
        return UNKNOWN_EVENT_TYPE
    for aliases, event_type in METHOD_RULES:
        if method in aliases:
            return event_type
    return UNKNOWN_EVENT_TYPE


def _match_topic(topic: Any) -> str:
    if not isinstance(topic, str):
        return UNKNOWN_EVENT_TYPE
    for keywords, event_type in TOPIC_RULES:
        if all(keyword in topic for keyword in keywords):
            return event_type
    return UNKNOWN_EVENT_TYPE


def _iter_event_types(payload: WebhookPayload) -> Iterator[str]:
    for tx in payload.transactions or []:
        for op in tx.operations or []:
            call = op.contract_call
            if call is not None:
                event_type = _match_method(call.method)
                if event_type:
                    yield event_type
            for event in op.events or []:
                event_type = _match_topic(event.topic)
                if event_type:
                    yield event_type


def extract_event_type(payload: Union[WebhookPayload, Mapping, None]) -> str:
    """Classify a payload by the first recognizable operation it contains.

    Transactions and operations are walked in order; within an operation the
    contract call is checked before its print events.

    Returns:
        str: A canonical event type, or UNKNOWN_EVENT_TYPE
    """
    if payload is None:
        return UNKNOWN_EVENT_TYPE
    try:
        return next(_iter_event_types(coerce_payload(payload)), UNKNOWN_EVENT_TYPE)
    except Exception as e:
        logger.warning(f"Could not classify chainhook payload: {str(e)}")
    return UNKNOWN_EVENT_TYPE


def extract_event_types(payload: Union[WebhookPayload, Mapping, None]) -> List[str]:
    """Every distinct event type in the payload, in order of first appearance.

    A block can carry transactions of different kinds; each kind is listed
    once. Never raises; an unreadable payload yields an empty list.
    """
    if payload is None:
        return []
    event_types: List[str] = []
    try:
        for event_type in _iter_event_types(coerce_payload(payload)):
            if event_type not in event_types:
                event_types.append(event_type)
    except Exception as e:
        logger.warning(f"Could not classify chainhook payload: {str(e)}")
    return event_types


def get_notification_type(event_type: str) -> str:
    return NOTIFICATION_TYPES.get(event_type, DEFAULT_NOTIFICATION_TYPE)


def _pick(value: Mapping, *keys: str, default: Any = "") -> Any:
    for key in keys:
        found = value.get(key)
        if found:
            return found
    return default


def _context_fields(value: Mapping, context: Optional[EventContext]) -> Dict[str, Any]:
    context = context or EventContext()
    return {
        "contract_address": context.contract_address
        or _pick(value, "contractAddress", "contract_address"),
        "transaction_hash": context.transaction_hash
        or _pick(value, "transactionHash", "tx_hash", "transaction_hash"),
        "block_height": context.block_height
        or _pick(value, "blockHeight", "block_height", default=0),
        "timestamp": context.timestamp or _pick(value, "timestamp", default=0) or now_ms(),
    }


def map_badge_mint_event(
    value: Mapping, context: Optional[EventContext] = None
) -> BadgeMintEvent:
    return BadgeMintEvent(
        user_id=_pick(value, "userId", "user_id", "recipient"),
        badge_id=_pick(value, "badgeId", "badge_id"),
        badge_name=_pick(value, "badgeName", "badge_name"),
        criteria=_pick(value, "criteria"),
        **_context_fields(value, context),
    )


def map_badge_verification_event(
    value: Mapping, context: Optional[EventContext] = None
) -> BadgeVerificationEvent:
    verification_data = _pick(
        value, "verificationData", "verification_data", default={}
    )
    return BadgeVerificationEvent(
        user_id=_pick(value, "userId", "user_id"),
        badge_id=_pick(value, "badgeId", "badge_id"),
        badge_name=_pick(value, "badgeName", "badge_name"),
        verification_data=dict(verification_data)
        if isinstance(verification_data, Mapping)
        else {"raw": verification_data},
        **_context_fields(value, context),
    )


def map_badge_revoke_event(
    value: Mapping, context: Optional[EventContext] = None
) -> BadgeRevokeEvent:
    return BadgeRevokeEvent(
        user_id=_pick(value, "userId", "user_id", "holder"),
        badge_id=_pick(value, "badgeId", "badge_id"),
        badge_name=_pick(value, "badgeName", "badge_name"),
        reason=_pick(value, "reason"),
        **_context_fields(value, context),
    )


def map_community_creation_event(
    value: Mapping, context: Optional[EventContext] = None
) -> CommunityCreationEvent:
    owner = _pick(value, "ownerAddress", "owner_address", "owner", "creator")
    return CommunityCreationEvent(
        community_id=_pick(value, "communityId", "community_id"),
        community_name=_pick(value, "communityName", "community_name", "name"),
        description=_pick(value, "description"),
        owner_address=owner or (context.sender if context else ""),
        **_context_fields(value, context),
    )


EVENT_MAPPERS: Dict[str, Callable[[Mapping, Optional[EventContext]], DomainEvent]] = {
    BADGE_MINT: map_badge_mint_event,
    BADGE_ISSUED: map_badge_mint_event,
    BADGE_VERIFY: map_badge_verification_event,
    BADGE_REVOKE: map_badge_revoke_event,
    COMMUNITY_CREATION: map_community_creation_event,
}


def map_domain_event(
    event_type: str, raw_value: Any, context: Optional[EventContext] = None
) -> DomainEvent:
    """Merge a print-event value with its on-chain context.

    Unknown event types and non-mapping values still produce a struct; the
    caller decides whether it carries enough to act on.
    """
    value = raw_value if isinstance(raw_value, Mapping) else {}
    mapper = EVENT_MAPPERS.get(event_type)
    if mapper is None:
        return DomainEvent(**_context_fields(value, context))
    return mapper(value, context)
