"""Unit tests for write exclusivity and compensating rollback."""

import pytest

from opsdesk.application.services import WriteGuard, compensating
from opsdesk.domain.exceptions import DataServiceError, WriteInProgressError


@pytest.mark.asyncio
async def test_overlapping_write_on_the_same_record_is_rejected(guard: WriteGuard):
    async with guard.hold("tasks", "t1"):
        assert guard.is_busy("tasks", "t1")
        with pytest.raises(WriteInProgressError):
            async with guard.hold("tasks", "t1"):
                pass
        async with guard.hold("tasks", "t2"):
            pass
    assert not guard.is_busy("tasks", "t1")


@pytest.mark.asyncio
async def test_guard_is_released_when_the_write_fails(guard: WriteGuard):
    with pytest.raises(DataServiceError):
        async with guard.hold("tasks", "t1"):
            raise DataServiceError("update", "tasks", "timeout")
    assert not guard.is_busy("tasks", "t1")


@pytest.mark.asyncio
async def test_undo_steps_run_newest_first_and_error_propagates():
    undone = []

    async def undo(name):
        undone.append(name)

    with pytest.raises(DataServiceError):
        async with compensating("create") as steps:
            steps.add("first", lambda: undo("first"))
            steps.add("second", lambda: undo("second"))
            raise DataServiceError("insert", "rows", "duplicate key")
    assert undone == ["second", "first"]


@pytest.mark.asyncio
async def test_failing_undo_step_does_not_stop_the_rest():
    undone = []

    async def broken():
        raise DataServiceError("delete", "objects", "gone")

    async def undo():
        undone.append("rows")

    with pytest.raises(ValueError):
        async with compensating("create") as steps:
            steps.add("rows", undo)
            steps.add("objects", broken)
            raise ValueError("bad input")
    assert undone == ["rows"]


@pytest.mark.asyncio
async def test_successful_write_runs_no_undo():
    undone = []

    async def undo():
        undone.append("x")

    async with compensating("create") as steps:
        steps.add("x", undo)
    assert undone == []
