"""Base class for Chainhook domain event handlers."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Type, Union

from passportx.lib.logger import configure_logger
from passportx.services.integrations.webhooks.chainhook.event_mapper import (
    coerce_payload,
    extract_event_types,
    map_domain_event,
    resolve_timestamp,
)
from passportx.services.integrations.webhooks.chainhook.models import (
    DomainEvent,
    EventContext,
    NotificationPayload,
    Operation,
    PrintEvent,
    Transaction,
    WebhookPayload,
)


class ChainhookEventHandler(ABC):
    """Base class for handlers that turn one kind of on-chain event into notifications.

    Subclasses declare which contract methods and print-event topics they
    react to and how positional contract-call arguments map onto their
    domain event. The base class walks the payload, runs both ingestion
    paths independently for every operation and guarantees that `handle`
    never raises.

    Instances are callable with `(payload, context)` so they can be
    registered directly on an EventHandlerRegistry.
    """

    event_type: str = ""
    event_class: Type[DomainEvent] = DomainEvent
    method_aliases: Tuple[str, ...] = ()
    topic_keywords: Tuple[str, ...] = ()

    def __init__(self):
        """Initialize the handler with a logger."""
        self.logger = configure_logger(self.__class__.__name__)

    def get_event_type(self) -> str:
        return self.event_type

    def can_handle(self, payload: Union[WebhookPayload, Mapping]) -> bool:
        """Check whether any operation in the payload is this handler's event type."""
        return self.event_type in extract_event_types(payload)

    async def handle(
        self, payload: Union[WebhookPayload, Mapping]
    ) -> List[NotificationPayload]:
        """Build notifications for every matching event in the payload.

        Args:
            payload: The block payload to walk

        Returns:
            List[NotificationPayload]: Possibly empty; never raises
        """
        try:
            parsed = coerce_payload(payload)
            notifications: List[NotificationPayload] = []
            if not parsed.transactions:
                return notifications

            timestamp = resolve_timestamp(parsed)
            for tx in parsed.transactions:
                for op in tx.operations or []:
                    for event in self.events_from_operation(
                        parsed, tx, op, timestamp
                    ):
                        if self.is_notifiable(event):
                            notifications.append(self.create_notification(event))

            if notifications:
                self.logger.info(
                    f"Built {len(notifications)} notification(s)",
                    extra={
                        "event_type": self.event_type,
                        "block_height": parsed.block_identifier.index,
                    },
                )
            return notifications
        except Exception as e:
            self.logger.error(
                f"Error in {self.__class__.__name__}: {str(e)}", exc_info=True
            )
            return []

    async def __call__(
        self, payload: Union[WebhookPayload, Mapping], context: Any = None
    ) -> List[NotificationPayload]:
        """Registry entry point; `context` is accepted for the call shape and unused."""
        return await self.handle(payload)

    # ----------------------------------------------------------------
    # Operation walking
    # ----------------------------------------------------------------
    def events_from_operation(
        self,
        payload: WebhookPayload,
        tx: Transaction,
        op: Operation,
        timestamp: int,
    ) -> List[DomainEvent]:
        """Collect events from the contract call and from print events.

        The two paths are independent; both may fire for one operation.
        """
        events: List[DomainEvent] = []
        call = op.contract_call
        if call is not None and call.method in self.method_aliases:
            context = EventContext(
                contract_address=call.contract,
                transaction_hash=tx.transaction_hash,
                block_height=payload.block_identifier.index,
                timestamp=timestamp,
                sender=tx.sender,
            )
            events.append(self.event_from_args(call.args or [], context))

        for print_event in op.events or []:
            if self.matches_topic(print_event):
                context = EventContext(
                    contract_address=print_event.contract_address,
                    transaction_hash=tx.transaction_hash,
                    block_height=payload.block_identifier.index,
                    timestamp=timestamp,
                    sender=tx.sender,
                )
                events.append(
                    map_domain_event(self.event_type, print_event.value, context)
                )
        return events

    def matches_topic(self, print_event: PrintEvent) -> bool:
        topic = print_event.topic
        if not topic or not self.topic_keywords:
            return False
        return all(keyword in topic for keyword in self.topic_keywords)

    def is_notifiable(self, event: DomainEvent) -> bool:
        """Events without a recipient are dropped silently."""
        return bool(getattr(event, "user_id", ""))

    # ----------------------------------------------------------------
    # Subclass hooks
    # ----------------------------------------------------------------
    @abstractmethod
    def event_from_args(
        self, args: Sequence[Any], context: EventContext
    ) -> DomainEvent:
        """Build the domain event from positional contract-call arguments."""

    @abstractmethod
    def create_notification(self, event: Any) -> NotificationPayload:
        """Build the notification for a notifiable event."""

    def base_notification_data(self, event: DomainEvent) -> Dict[str, Any]:
        return {
            "eventType": self.event_type,
            "contractAddress": event.contract_address,
            "transactionHash": event.transaction_hash,
            "blockHeight": event.block_height,
            "timestamp": event.timestamp,
        }
