"""Chainhook webhook data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass
class BlockIdentifier:
    """Block identifier with index and hash."""

    index: int = 0
    hash: str = ""


@dataclass
class BlockMetadata:
    """Metadata about a block."""

    bitcoin_anchor_block_identifier: Optional[BlockIdentifier] = None
    pox_cycle_index: Optional[int] = None
    pox_cycle_length: Optional[int] = None
    pox_cycle_position: Optional[int] = None


@dataclass
class ContractCall:
    """Contract call recorded on an operation."""

    contract: str = ""
    method: str = ""
    args: List[Any] = field(default_factory=list)


@dataclass
class PrintEvent:
    """Print event emitted by a contract during an operation."""

    topic: str = ""
    contract_address: str = ""
    value: Dict[str, Any] = field(default_factory=dict)
    type: str = "contract_event"


@dataclass
class Operation:
    """One step of a transaction's execution trace.

    A contract call and print events may both be present, or neither.
    """

    type: str = ""
    contract_call: Optional[ContractCall] = None
    events: List[PrintEvent] = field(default_factory=list)


@dataclass
class Transaction:
    """Transaction with its operations."""

    transaction_hash: str = ""
    operations: List[Operation] = field(default_factory=list)
    sender: str = ""


@dataclass
class WebhookPayload:
    """A single block delivered by chainhook."""

    block_identifier: BlockIdentifier = field(default_factory=BlockIdentifier)
    transactions: List[Transaction] = field(default_factory=list)
    metadata: Optional[BlockMetadata] = None
    parent_block_identifier: Optional[BlockIdentifier] = None
    timestamp: Optional[int] = None


@dataclass
class EventContext:
    """Where an event was observed on chain."""

    contract_address: str = ""
    transaction_hash: str = ""
    block_height: int = 0
    timestamp: int = 0
    sender: str = ""


# ----------------------------------------------------------------
# Domain events
# ----------------------------------------------------------------
@dataclass
class DomainEvent:
    """Base for normalized events; carries the on-chain location fields."""

    contract_address: str = ""
    transaction_hash: str = ""
    block_height: int = 0
    timestamp: int = 0


@dataclass
class BadgeMintEvent(DomainEvent):
    user_id: str = ""
    badge_id: str = ""
    badge_name: str = ""
    criteria: str = ""


@dataclass
class BadgeVerificationEvent(DomainEvent):
    user_id: str = ""
    badge_id: str = ""
    badge_name: str = ""
    verification_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class BadgeRevokeEvent(DomainEvent):
    user_id: str = ""
    badge_id: str = ""
    badge_name: str = ""
    reason: str = ""


@dataclass
class CommunityCreationEvent(DomainEvent):
    community_id: str = ""
    community_name: str = ""
    description: str = ""
    owner_address: str = ""


@dataclass
class NotificationPayload:
    """Notification handed to the delivery collaborator."""

    user_id: str
    type: str
    title: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "data": dict(self.data),
        }


# ----------------------------------------------------------------
# Dispatch and action results
# ----------------------------------------------------------------
class OutcomeStatus(str, Enum):
    """Outcome of a single handler or action invocation."""

    SUCCESS = "success"
    FAILED = "failed"

    def __str__(self):
        return self.value


@dataclass
class HandlerOutcome:
    name: str
    status: OutcomeStatus
    result: Any = None
    error: Optional[str] = None


@dataclass
class DispatchResult:
    """Result of dispatching one payload to the handlers of one event type."""

    success: bool
    actions: List[HandlerOutcome] = field(default_factory=list)
    processing_time_ms: float = 0.0
    event_hash: str = ""
    handled_at: int = 0

    @property
    def failed(self) -> List[HandlerOutcome]:
        return [a for a in self.actions if a.status == OutcomeStatus.FAILED]


@dataclass
class ActionResult:
    action: str
    status: OutcomeStatus
    result: Any = None
    error: Optional[str] = None


@dataclass
class PredicateMatchResult:
    """Produced by the predicate matcher; consumed by the action executor."""

    predicate_id: str
    matched: bool
    event: Any
    matched_at: int
    actions: List[str] = field(default_factory=list)
