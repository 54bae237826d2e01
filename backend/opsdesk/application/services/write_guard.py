"""Write coordination — per-record exclusivity and compensating rollback."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from opsdesk.domain.exceptions import DataServiceError, WriteInProgressError
from opsdesk.infrastructure.logging.colored_logger import Stage, StageLogger

logger = logging.getLogger(__name__)
wlog = StageLogger("WritePipeline")


class WriteGuard:
    """Rejects a write on a record while another write on it is still pending.

    All services of one process share a single guard; the check and the
    claim happen without an intervening ``await``, so no lock is needed on
    a single event loop.
    """

    def __init__(self) -> None:
        self._active: set[tuple[str, str]] = set()

    def is_busy(self, table: str, record_id: str) -> bool:
        return (table, record_id) in self._active

    @asynccontextmanager
    async def hold(self, table: str, record_id: str) -> AsyncIterator[None]:
        key = (table, record_id)
        if key in self._active:
            logger.info("Rejected overlapping write on %s/%s", table, record_id)
            raise WriteInProgressError(f"{table}/{record_id}")
        self._active.add(key)
        try:
            yield
        finally:
            self._active.discard(key)


UndoAction = Callable[[], Awaitable[Any]]


class Compensation:
    """Undo steps registered while a multi-row write progresses."""

    def __init__(self, label: str):
        self.label = label
        self._steps: list[tuple[str, UndoAction]] = []

    def add(self, description: str, action: UndoAction) -> None:
        self._steps.append((description, action))

    async def rollback(self, error: Exception) -> None:
        """Run the undo steps newest-first; a failing step is logged and the rest still run."""
        if not self._steps:
            return
        wlog.step_start(Stage.ROLLBACK, f"{self.label} failed, undoing {len(self._steps)} step(s)",
                        error=type(error).__name__)
        for description, action in reversed(self._steps):
            try:
                await action()
                wlog.detail(f"undone: {description}")
            except DataServiceError as exc:
                wlog.step_error(Stage.ROLLBACK, f"could not undo: {description}", error=exc)
        self._steps.clear()


@asynccontextmanager
async def compensating(label: str) -> AsyncIterator[Compensation]:
    """Run a multi-step write; on any exception the registered undo steps run before it propagates.

    Usage:
        async with compensating("Create document") as undo:
            url = await storage.upload(path, content)
            undo.add("delete uploaded file", lambda: storage.delete(path))
            row = await data.insert("documents", {...})
    """
    undo = Compensation(label)
    wlog.step_start(Stage.WRITE, label)
    try:
        yield undo
    except Exception as exc:
        await undo.rollback(exc)
        raise
    wlog.step_complete(Stage.WRITE, label)
