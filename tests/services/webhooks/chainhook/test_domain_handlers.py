"""Tests for the badge and community domain handlers."""

from unittest.mock import patch

import pytest

from passportx.services.integrations.webhooks.chainhook.handlers import (
    BadgeIssuedHandler,
    BadgeMintHandler,
    BadgeRevokeHandler,
    BadgeVerificationHandler,
    CommunityCreationHandler,
)
from passportx.services.integrations.webhooks.chainhook.models import (
    ContractCall,
    NotificationPayload,
    Operation,
    PrintEvent,
    WebhookPayload,
)


@pytest.mark.asyncio
async def test_badge_mint_from_contract_call(mint_payload, user_address):
    """Test a mint-badge call produces one notification for the recipient."""
    notifications = await BadgeMintHandler().handle(mint_payload)

    assert len(notifications) == 1
    notification = notifications[0]
    assert isinstance(notification, NotificationPayload)
    assert notification.user_id == user_address
    assert notification.type == "badge_received"
    assert notification.title == "Badge Received: Pro Coder"
    assert (
        notification.message
        == "Congratulations! You've received the Pro Coder badge for 10 PRs"
    )
    assert notification.data["badgeId"] == "42"
    assert notification.data["transactionHash"] == "0xabc123"
    assert notification.data["blockHeight"] == 100
    assert notification.data["timestamp"] == 500
    assert notification.data["eventType"] == "badge-mint"


@pytest.mark.asyncio
async def test_badge_mint_call_and_print_both_fire(make_payload, user_address):
    """Test both ingestion paths on one operation produce a notification each."""
    op = Operation(
        type="contract_call",
        contract_call=ContractCall(
            contract="SP1.passport",
            method="mint",
            args=[{"value": user_address}, {"value": 1}, "Builder", "shipping"],
        ),
        events=[
            PrintEvent(
                topic="badge-mint-event",
                contract_address="SP1.passport",
                value={"userId": user_address, "badgeName": "Builder"},
            )
        ],
    )

    notifications = await BadgeMintHandler().handle(make_payload(op))

    assert len(notifications) == 2
    assert all(n.user_id == user_address for n in notifications)
    assert notifications[0].data["badgeId"] == "1"
    assert notifications[1].data["contractAddress"] == "SP1.passport"


@pytest.mark.asyncio
async def test_badge_mint_drops_events_without_user(make_payload, contract_call, print_event):
    """Test events with an empty user id are dropped silently."""
    payload = make_payload(
        contract_call("mint-badge", [None, "1"]),
        print_event("badge-mint", {"badgeId": "1"}),
    )

    assert await BadgeMintHandler().handle(payload) == []


@pytest.mark.asyncio
async def test_badge_mint_ignores_other_methods(make_payload, contract_call):
    payload = make_payload(contract_call("revoke-badge", ["SP1", "1"]))

    assert await BadgeMintHandler().handle(payload) == []


@pytest.mark.asyncio
async def test_badge_mint_with_empty_args(make_payload, contract_call):
    payload = make_payload(contract_call("mint-badge", []))

    assert await BadgeMintHandler().handle(payload) == []


@pytest.mark.asyncio
async def test_handle_empty_payload():
    assert await BadgeMintHandler().handle(WebhookPayload()) == []
    assert await BadgeMintHandler().handle({"block_identifier": {"index": 1}}) == []


@pytest.mark.asyncio
async def test_handle_never_raises(mint_payload):
    """Test an exception inside the walk is logged and swallowed."""
    handler = BadgeMintHandler()
    with patch.object(
        handler, "create_notification", side_effect=RuntimeError("boom")
    ), patch.object(handler.logger, "error") as mock_error:
        assert await handler.handle(mint_payload) == []

    mock_error.assert_called_once()
    assert "boom" in mock_error.call_args[0][0]


@pytest.mark.asyncio
async def test_handle_accepts_raw_mapping(user_address):
    raw = {
        "block_identifier": {"index": 5, "hash": "0x5"},
        "transactions": [
            {
                "transaction_hash": "0xtx",
                "operations": [
                    {
                        "contract_call": {
                            "contract": "SP1.passport",
                            "method": "mint",
                            "args": [user_address, "3", "Early", "first"],
                        }
                    }
                ],
            }
        ],
    }

    notifications = await BadgeMintHandler().handle(raw)

    assert [n.user_id for n in notifications] == [user_address]


@pytest.mark.asyncio
async def test_handler_is_registry_callable(mint_payload):
    """Test handlers accept the registry's (payload, context) call shape."""
    notifications = await BadgeMintHandler()(mint_payload, {"source": "test"})

    assert len(notifications) == 1


def test_can_handle(mint_payload, make_payload, contract_call):
    handler = BadgeMintHandler()

    assert handler.can_handle(mint_payload) is True
    assert handler.can_handle(make_payload(contract_call("verify", ["SP1"]))) is False
    assert handler.get_event_type() == "badge-mint"


@pytest.mark.asyncio
async def test_badge_verification_with_tuple_data(make_payload, contract_call, user_address):
    payload = make_payload(
        contract_call(
            "verify-badge",
            [
                user_address,
                "42",
                "Pro Coder",
                {"type": "tuple", "value": {"status": "approved", "verifier": "SP3"}},
            ],
        )
    )

    notifications = await BadgeVerificationHandler().handle(payload)

    assert len(notifications) == 1
    notification = notifications[0]
    assert notification.type == "badge_verified"
    assert notification.title == "Badge Verification Update: Pro Coder"
    assert notification.data["verificationStatus"] == "approved"
    assert notification.data["verificationData"]["verifier"] == "SP3"


@pytest.mark.asyncio
async def test_badge_verification_defaults_status(make_payload, contract_call, user_address):
    payload = make_payload(contract_call("verify", [user_address, "42", "Pro Coder"]))

    notifications = await BadgeVerificationHandler().handle(payload)

    assert notifications[0].data["verificationStatus"] == "verified"
    assert notifications[0].data["verificationData"] == {}
    assert "Status: verified" in notifications[0].message


@pytest.mark.asyncio
async def test_badge_verification_scalar_data(make_payload, contract_call, user_address):
    payload = make_payload(
        contract_call("verify", [user_address, "42", "Pro Coder", {"value": "0xsig"}])
    )

    notifications = await BadgeVerificationHandler().handle(payload)

    assert notifications[0].data["verificationData"] == {"raw": "0xsig"}


@pytest.mark.asyncio
async def test_badge_revoke(make_payload, contract_call, print_event, user_address):
    payload = make_payload(
        contract_call("revoke-badge", [user_address, "42", "Pro Coder", "duplicate"]),
        print_event("badge-revoked", {"badgeId": "42"}),
    )

    notifications = await BadgeRevokeHandler().handle(payload)

    assert len(notifications) == 1
    notification = notifications[0]
    assert notification.type == "badge_revoked"
    assert notification.title == "Badge Revoked: Pro Coder"
    assert notification.message == "Your Pro Coder badge has been revoked: duplicate"
    assert notification.data["reason"] == "duplicate"


@pytest.mark.asyncio
async def test_community_creation_from_call(make_payload, contract_call):
    payload = make_payload(
        contract_call(
            "create-community",
            ["c-1", "Stackers", "Builders on Stacks", "SPOWNER"],
            contract="SP1.community-manager",
        ),
        tx_hash="0xcommunity",
    )

    notifications = await CommunityCreationHandler().handle(payload)

    assert len(notifications) == 1
    notification = notifications[0]
    assert notification.user_id == "SPOWNER"
    assert notification.type == "community_created"
    assert notification.title == "Community Created: Stackers"
    assert notification.data["communityId"] == "c-1"
    assert notification.data["contractAddress"] == "SP1.community-manager"


@pytest.mark.asyncio
async def test_community_creation_owner_defaults_to_sender(make_payload, contract_call):
    payload = make_payload(
        contract_call("create-community", ["c-1", "Stackers", "desc"]),
        sender="SPSENDER",
    )

    notifications = await CommunityCreationHandler().handle(payload)

    assert notifications[0].user_id == "SPSENDER"
    assert notifications[0].data["ownerAddress"] == "SPSENDER"


@pytest.mark.asyncio
async def test_community_creation_from_print_event(make_payload, print_event):
    payload = make_payload(
        print_event(
            "community-created",
            {"communityId": "c-2", "communityName": "Guild", "owner": "SPOWNER"},
        )
    )

    notifications = await CommunityCreationHandler().handle(payload)

    assert [n.data["communityName"] for n in notifications] == ["Guild"]


@pytest.mark.asyncio
async def test_community_creation_skips_incomplete(make_payload, contract_call):
    handler = CommunityCreationHandler()
    payload = make_payload(contract_call("create-community", ["c-1", "", "desc", "SPOWNER"]))

    with patch.object(handler.logger, "warning") as mock_warning:
        assert await handler.handle(payload) == []

    mock_warning.assert_called_once()


@pytest.mark.asyncio
async def test_community_topic_requires_both_keywords(make_payload, print_event):
    payload = make_payload(
        print_event("community-updated", {"communityId": "c-1", "name": "x", "owner": "SP1"})
    )

    assert await CommunityCreationHandler().handle(payload) == []


@pytest.mark.asyncio
async def test_badge_issued(make_payload, contract_call, print_event, user_address):
    payload = make_payload(
        contract_call("issue-badge", [user_address, "5", "Mentor", "helping others"]),
        contract_call("mint-badge", ["SPOTHER", "6", "Builder", "shipping"]),
        print_event("badge-issued", {"userId": user_address, "badgeName": "Mentor"}),
    )

    notifications = await BadgeIssuedHandler().handle(payload)

    assert [n.user_id for n in notifications] == [user_address, user_address]
    notification = notifications[0]
    assert notification.type == "badge_issued"
    assert notification.title == "Badge Issued: Mentor"
    assert notification.message == "You've been issued the Mentor badge for helping others"
    assert notification.data["eventType"] == "badge-issued"


def test_can_handle_any_operation(make_payload, contract_call):
    payload = make_payload(
        contract_call("mint-badge", ["SP1"]),
        contract_call("create-community", ["c-1"]),
    )

    assert BadgeMintHandler().can_handle(payload) is True
    assert CommunityCreationHandler().can_handle(payload) is True
    assert BadgeRevokeHandler().can_handle(payload) is False
