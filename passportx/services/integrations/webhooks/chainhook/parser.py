"""Chainhook webhook parser implementation."""

from typing import Any, Dict, List, Mapping, Optional

from passportx.lib.logger import configure_logger
from passportx.services.integrations.webhooks.base import WebhookParser
from passportx.services.integrations.webhooks.chainhook.models import (
    BlockIdentifier,
    BlockMetadata,
    ContractCall,
    Operation,
    PrintEvent,
    Transaction,
    WebhookPayload,
)


def _get(data: Any, *keys: str, default: Any = None) -> Any:
    """Return the first present, non-None value among `keys` (snake or camel case)."""
    if not isinstance(data, Mapping):
        return default
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _parse_block_identifier(data: Any) -> Optional[BlockIdentifier]:
    if not isinstance(data, Mapping):
        return None
    return BlockIdentifier(
        index=_get(data, "index", default=0),
        hash=_get(data, "hash", default=""),
    )


def _parse_print_event(data: Mapping) -> PrintEvent:
    # Raw Stacks receipts nest the print under "data" with topic "print";
    # the meaningful topic lives inside the printed value.
    inner = _get(data, "data", default=data)
    value = _get(inner, "value", default={})
    topic = _get(data, "topic", default="") or _get(inner, "topic", default="")
    if topic == "print" and isinstance(value, Mapping):
        topic = _get(value, "event", "topic", "notification", default=topic)
    return PrintEvent(
        topic=topic if isinstance(topic, str) else "",
        contract_address=_get(
            data,
            "contract_address",
            "contractAddress",
            default=_get(inner, "contract_identifier", default=""),
        ),
        value=dict(value) if isinstance(value, Mapping) else {"value": value},
        type=_get(data, "type", default="contract_event"),
    )


def _parse_contract_call(data: Any) -> Optional[ContractCall]:
    if not isinstance(data, Mapping):
        return None
    return ContractCall(
        contract=_get(data, "contract", "contract_identifier", default=""),
        method=_get(data, "method", default=""),
        args=_as_list(_get(data, "args", default=[])),
    )


def _parse_operation(data: Mapping) -> Operation:
    contract_call = _parse_contract_call(_get(data, "contract_call", "contractCall"))
    return Operation(
        type=_get(data, "type", default="contract_call" if contract_call else ""),
        contract_call=contract_call,
        events=[
            _parse_print_event(event)
            for event in _as_list(_get(data, "events", default=[]))
            if isinstance(event, Mapping)
        ],
    )


def _operation_from_stacks_metadata(metadata: Mapping) -> Optional[Operation]:
    """Build an operation from a raw Stacks transaction's kind and receipt."""
    kind = _get(metadata, "kind", default={})
    receipt = _get(metadata, "receipt", default={})
    print_events = [
        _parse_print_event(event)
        for event in _as_list(_get(receipt, "events", default=[]))
        if isinstance(event, Mapping)
        and _get(event, "type", default="") == "SmartContractEvent"
    ]

    contract_call = None
    if _get(kind, "type", default="") == "ContractCall":
        contract_call = _parse_contract_call(_get(kind, "data", default={}))

    if contract_call is None and not print_events:
        return None
    return Operation(
        type="contract_call" if contract_call else "contract_event",
        contract_call=contract_call,
        events=print_events,
    )


def _parse_transaction(data: Mapping) -> Transaction:
    metadata = _get(data, "metadata", default={})
    operations = [
        _parse_operation(op)
        for op in _as_list(_get(data, "operations", default=[]))
        if isinstance(op, Mapping) and (
            _get(op, "contract_call", "contractCall") is not None
            or _get(op, "events") is not None
        )
    ]
    if not operations and isinstance(metadata, Mapping):
        derived = _operation_from_stacks_metadata(metadata)
        if derived is not None:
            operations.append(derived)

    return Transaction(
        transaction_hash=_get(
            data,
            "transaction_hash",
            "transactionHash",
            default=_get(
                _get(data, "transaction_identifier", default={}), "hash", default=""
            ),
        ),
        operations=operations,
        sender=_get(
            data,
            "transaction_sender",
            "sender",
            default=_get(metadata, "sender", default=""),
        ),
    )


def parse_block(data: Mapping) -> WebhookPayload:
    """Parse one block (an `apply` entry or a bare payload) into a WebhookPayload."""
    metadata = None
    raw_metadata = _get(data, "metadata")
    if isinstance(raw_metadata, Mapping):
        metadata = BlockMetadata(
            bitcoin_anchor_block_identifier=_parse_block_identifier(
                _get(raw_metadata, "bitcoin_anchor_block_identifier")
            ),
            pox_cycle_index=_get(raw_metadata, "pox_cycle_index", "poxCycleIndex"),
            pox_cycle_length=_get(raw_metadata, "pox_cycle_length", "poxCycleLength"),
            pox_cycle_position=_get(
                raw_metadata, "pox_cycle_position", "poxCyclePosition"
            ),
        )

    return WebhookPayload(
        block_identifier=_parse_block_identifier(
            _get(data, "block_identifier", "blockIdentifier")
        )
        or BlockIdentifier(),
        transactions=[
            _parse_transaction(tx)
            for tx in _as_list(_get(data, "transactions", default=[]))
            if isinstance(tx, Mapping)
        ],
        metadata=metadata,
        parent_block_identifier=_parse_block_identifier(
            _get(data, "parent_block_identifier", "parentBlockIdentifier")
        ),
        timestamp=_get(data, "timestamp"),
    )


class ChainhookParser(WebhookParser[List[WebhookPayload]]):
    """Parser for Chainhook webhook payloads."""

    def __init__(self):
        super().__init__()
        self.logger = configure_logger(self.__class__.__name__)

    def parse(self, raw_data: Dict[str, Any]) -> List[WebhookPayload]:
        """Parse Chainhook webhook data.

        Accepts either a full chainhook envelope with an `apply` list or a
        single block payload.

        Args:
            raw_data: The raw webhook payload

        Returns:
            List[WebhookPayload]: One payload per applied block
        """
        if not isinstance(raw_data, Mapping):
            raise TypeError(
                f"Chainhook payload must be a JSON object, got {type(raw_data).__name__}"
            )

        rollback = _as_list(raw_data.get("rollback"))
        if rollback:
            self.logger.warning(
                f"Ignoring {len(rollback)} rollback block(s) in chainhook payload"
            )

        if "apply" in raw_data:
            blocks = [b for b in _as_list(raw_data["apply"]) if isinstance(b, Mapping)]
        else:
            blocks = [raw_data]

        payloads = [parse_block(block) for block in blocks]
        self.logger.debug(f"Parsed {len(payloads)} block(s) from chainhook payload")
        return payloads
