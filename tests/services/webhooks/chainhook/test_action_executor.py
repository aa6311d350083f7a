"""Tests for predicate-match action execution."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from passportx.services.integrations.webhooks.chainhook.actions import ActionExecutor
from passportx.services.integrations.webhooks.chainhook.models import (
    BadgeMintEvent,
    OutcomeStatus,
    PredicateMatchResult,
)


@pytest.fixture
def executor():
    return ActionExecutor()


@pytest.fixture
def match():
    def _match(*actions):
        return PredicateMatchResult(
            predicate_id="passportx-badge-mint",
            matched=True,
            event=BadgeMintEvent(user_id="SP1", badge_name="Builder"),
            matched_at=1700000000000,
            actions=list(actions),
        )

    return _match


@pytest.mark.asyncio
async def test_execute_in_order_with_event(executor, match):
    notify = MagicMock(return_value="notified")
    record = AsyncMock(return_value={"stored": True})
    executor.register("notify", notify)
    executor.register("record", record)
    predicate_result = match("record", "notify")

    results = await executor.execute(predicate_result)

    assert [r.action for r in results] == ["record", "notify"]
    assert [r.status for r in results] == [OutcomeStatus.SUCCESS, OutcomeStatus.SUCCESS]
    assert results[0].result == {"stored": True}
    assert results[1].result == "notified"
    notify.assert_called_once_with(predicate_result.event)
    record.assert_awaited_once_with(predicate_result.event)


@pytest.mark.asyncio
async def test_unregistered_actions_are_skipped(executor, match):
    executor.register("notify", lambda event: "ok")

    results = await executor.execute(match("missing", "notify", "also-missing"))

    assert [r.action for r in results] == ["notify"]


@pytest.mark.asyncio
async def test_failure_does_not_stop_siblings(executor, match):
    def broken(event):
        raise RuntimeError("push service down")

    executor.register("push", broken)
    executor.register("email", lambda event: "queued")

    results = await executor.execute(match("push", "email"))

    assert results[0].status == OutcomeStatus.FAILED
    assert results[0].error == "push service down"
    assert results[1].status == OutcomeStatus.SUCCESS
    assert results[1].result == "queued"


@pytest.mark.asyncio
async def test_register_replaces_previous(executor, match):
    executor.register("notify", lambda event: "first")
    executor.register("notify", lambda event: "second")

    results = await executor.execute(match("notify"))

    assert [r.result for r in results] == ["second"]
    assert executor.get_action_names() == ["notify"]


@pytest.mark.asyncio
async def test_empty_action_list(executor, match):
    executor.register("notify", lambda event: "ok")

    assert await executor.execute(match()) == []


def test_register_validation(executor):
    with pytest.raises(TypeError):
        executor.register(None, lambda event: None)
    with pytest.raises(TypeError):
        executor.register("notify", 42)


def test_clear(executor):
    executor.register("notify", lambda event: None)

    executor.clear()

    assert executor.get("notify") is None
    assert executor.get_action_names() == []
