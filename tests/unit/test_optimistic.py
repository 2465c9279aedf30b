"""Tests for the optimistic command runner."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from taskboard.core.errors import TaskStoreTransportError
from taskboard.services.optimistic import run_optimistic


@pytest.mark.unit
class TestRunOptimistic:
    """apply -> attempt -> inverse on failure."""

    async def test_success_keeps_local_change(self):
        rollback = MagicMock()
        apply = MagicMock(return_value=rollback)
        attempt = AsyncMock(return_value="confirmed")

        outcome = await run_optimistic(name="toggle", apply=apply, attempt=attempt)

        assert outcome.succeeded is True
        assert outcome.result == "confirmed"
        assert outcome.error is None
        apply.assert_called_once()
        rollback.assert_not_called()

    async def test_failure_runs_inverse(self):
        state = {"completed": False}

        def apply():
            previous = state["completed"]
            state["completed"] = True

            def rollback():
                state["completed"] = previous

            return rollback

        error = TaskStoreTransportError("timeout")
        outcome = await run_optimistic(name="toggle", apply=apply, attempt=AsyncMock(side_effect=error))

        assert outcome.succeeded is False
        assert outcome.error is error
        assert state["completed"] is False

    async def test_apply_happens_before_attempt(self):
        order = []

        def apply():
            order.append("apply")
            return lambda: order.append("rollback")

        async def attempt():
            order.append("attempt")

        await run_optimistic(name="delete", apply=apply, attempt=attempt)

        assert order == ["apply", "attempt"]

    async def test_unexpected_errors_roll_back_and_propagate(self):
        rollback = MagicMock()

        with pytest.raises(RuntimeError):
            await run_optimistic(
                name="update",
                apply=lambda: rollback,
                attempt=AsyncMock(side_effect=RuntimeError("bug")),
            )

        rollback.assert_called_once()
