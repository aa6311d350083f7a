"""Shared chainhook payload fixtures."""

import pytest

from passportx.services.integrations.webhooks.chainhook.models import (
    BlockIdentifier,
    BlockMetadata,
    ContractCall,
    Operation,
    PrintEvent,
    Transaction,
    WebhookPayload,
)

USER_ADDRESS = "SP2J6ZY48GV1EZ5V2V5RB9MP66SW86PYKKNRV9EJ7"


def _make_payload(*operations, tx_hash="0xabc123", sender="", height=100, position=500):
    """Build a single-transaction block from the given operations."""
    return WebhookPayload(
        block_identifier=BlockIdentifier(index=height, hash="0xblock"),
        transactions=[
            Transaction(
                transaction_hash=tx_hash,
                operations=list(operations),
                sender=sender,
            )
        ],
        metadata=BlockMetadata(pox_cycle_position=position),
    )


def _contract_call(method, args=None, contract="SP101YT8S9464KE0S0TQDGWV83V5H3A37DKEFYSJ0.passport-nft"):
    return Operation(
        type="contract_call",
        contract_call=ContractCall(contract=contract, method=method, args=args or []),
    )


def _print_event(topic, value, contract="SP101YT8S9464KE0S0TQDGWV83V5H3A37DKEFYSJ0.passport-nft"):
    return Operation(
        type="contract_event",
        events=[PrintEvent(topic=topic, contract_address=contract, value=value)],
    )


@pytest.fixture
def mint_payload():
    return _make_payload(
        _contract_call("mint-badge", [USER_ADDRESS, "42", "Pro Coder", "10 PRs"])
    )


@pytest.fixture
def raw_chainhook_envelope():
    """A chainhook delivery in the node's native Stacks transaction shape."""
    return {
        "apply": [
            {
                "block_identifier": {"index": 150000, "hash": "0xblock1"},
                "parent_block_identifier": {"index": 149999, "hash": "0xblock0"},
                "timestamp": 1700000000,
                "metadata": {"pox_cycle_position": 1200, "pox_cycle_length": 2100},
                "transactions": [
                    {
                        "transaction_identifier": {"hash": "0xmint"},
                        "operations": [
                            {
                                "account": {"address": USER_ADDRESS},
                                "amount": {},
                                "operation_identifier": {"index": 0},
                                "status": "SUCCESS",
                                "type": "CONTRACT_CALL",
                            }
                        ],
                        "metadata": {
                            "sender": USER_ADDRESS,
                            "success": True,
                            "kind": {
                                "type": "ContractCall",
                                "data": {
                                    "contract_identifier": "SP101YT8S9464KE0S0TQDGWV83V5H3A37DKEFYSJ0.badge-issuer",
                                    "method": "mint-badge",
                                    "args": [USER_ADDRESS, "7", "Early Adopter", "joined in 2024"],
                                },
                            },
                            "receipt": {
                                "events": [
                                    {
                                        "type": "SmartContractEvent",
                                        "data": {
                                            "contract_identifier": "SP101YT8S9464KE0S0TQDGWV83V5H3A37DKEFYSJ0.badge-issuer",
                                            "topic": "print",
                                            "value": {
                                                "event": "badge-mint-event",
                                                "user_id": USER_ADDRESS,
                                                "badge_id": "7",
                                                "badge_name": "Early Adopter",
                                            },
                                        },
                                    },
                                    {
                                        "type": "STXTransferEvent",
                                        "data": {"amount": "1000"},
                                    },
                                ]
                            },
                        },
                    }
                ],
            },
            {
                "block_identifier": {"index": 150001, "hash": "0xblock2"},
                "transactions": [],
            },
        ],
        "rollback": [],
        "chainhook": {"uuid": "passportx-badge-mint", "is_streaming_blocks": True},
    }


@pytest.fixture
def make_payload():
    return _make_payload


@pytest.fixture
def contract_call():
    return _contract_call


@pytest.fixture
def print_event():
    return _print_event


@pytest.fixture
def user_address():
    return USER_ADDRESS
