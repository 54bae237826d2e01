"""Shared behaviour of the per-domain services: list pages, boards and lookups."""

import logging
import time
import uuid
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from pathlib import PurePosixPath

from pydantic import BaseModel

from opsdesk.application.interfaces import DataService
from opsdesk.application.listing import (
    ASSIGNEE_DIMENSION,
    ColumnVisibility,
    ListProfile,
    ListQuery,
    board,
    run_pipeline,
)
from opsdesk.application.services.entity_store import EntityStore
from opsdesk.application.services.write_guard import WriteGuard
from opsdesk.domain.entities import KanbanColumn, ListPage, LoadWarning, Record
from opsdesk.domain.exceptions import EntityNotFoundError, ValidationError

logger = logging.getLogger(__name__)


def changes_from(data: BaseModel, required: Iterable[str] = ()) -> Record:
    """Fields the client actually sent, with enums and dates as plain JSON values.

    An explicit ``null`` clears the field; sending one for a field in
    ``required`` is a validation error.
    """
    changes = data.model_dump(mode="json", exclude_unset=True)
    for name in required:
        if name in changes and changes[name] is None:
            raise ValidationError(f"'{name}' cannot be cleared", field=name)
    return changes


def object_path(prefix: str, filename: str) -> str:
    """``<prefix>/<epoch ms>_<short id><ext>``; only the extension of the upload survives."""
    suffix = "".join(ch for ch in PurePosixPath(filename or "").suffix if ch.isalnum() or ch == ".")
    return f"{prefix}/{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}{suffix[:16].lower()}"


class ListingService:
    """Base for services whose entities are shown in a list screen."""

    profile: ListProfile

    def __init__(self, data_service: DataService, guard: WriteGuard | None = None):
        self._data = data_service
        self._guard = guard or WriteGuard()
        self._store = EntityStore(self.profile, data_service)

    @property
    def store(self) -> EntityStore:
        return self._store

    # ── Reads ────────────────────────────────────────────────────────

    async def list_page(
        self,
        query: ListQuery,
        now: datetime,
        hidden_columns: Iterable[str] = (),
    ) -> tuple[ListPage, list[LoadWarning]]:
        """Load the store and run the full list pipeline over it."""
        columns = ColumnVisibility.all_visible(self.profile.column_keys)
        for key in hidden_columns:
            columns = columns.set(key, False)
        result = await self._store.load()
        return run_pipeline(result.records, query, self.profile, now, columns), result.warnings

    async def assigned_page(
        self,
        employee_id: str,
        query: ListQuery,
        now: datetime,
        hidden_columns: Iterable[str] = (),
    ) -> tuple[ListPage, list[LoadWarning]]:
        """The list as one employee sees it: only records assigned to them."""
        if self.profile.dimension(ASSIGNEE_DIMENSION) is None:
            raise ValidationError(
                f"{self.profile.entity_label} lists are not assigned to employees",
                field=ASSIGNEE_DIMENSION,
            )
        scoped = {**query.filters, ASSIGNEE_DIMENSION: frozenset({employee_id})}
        filters = self._assigned_filters(scoped)
        return await self.list_page(replace(query, filters=filters), now, hidden_columns)

    def _assigned_filters(self, filters: dict[str, frozenset[str]]) -> dict[str, frozenset[str]]:
        return filters

    async def kanban(
        self, query: ListQuery, now: datetime
    ) -> tuple[list[KanbanColumn], list[LoadWarning]]:
        if self.profile.kanban_field is None:
            raise ValidationError(f"{self.profile.entity_label} lists have no board view")
        result = await self._store.load()
        return board(result.records, query, self.profile, now), result.warnings

    async def get(self, record_id: str) -> Record:
        """A single record with its relations resolved."""
        result = await self._store.load_one(record_id)
        return result.records[0]

    async def _require(self, record_id: str, table: str | None = None) -> Record:
        """The raw row, or ``EntityNotFoundError``."""
        row = await self._data.get(table or self.profile.table, record_id)
        if row is None:
            raise EntityNotFoundError(self.profile.entity_label, record_id)
        return row

    # ── Writes ───────────────────────────────────────────────────────

    def _check_board_value(self, value: str) -> str:
        allowed = self.profile.kanban_columns
        if value not in allowed:
            raise ValidationError(
                f"'{value}' is not a valid {self.profile.kanban_field} "
                f"(expected one of: {', '.join(allowed)})",
                field=self.profile.kanban_field,
            )
        return value

    async def apply_move(self, record_id: str, value: str) -> None:
        """Kanban move without reading the record back; done once the update returns."""
        self._check_board_value(value)
        await self._write_board_value(record_id, value)
        logger.info("Moved %s %s to %s", self.profile.entity_label, record_id, value)

    async def move(self, record_id: str, value: str) -> Record:
        await self.apply_move(record_id, value)
        return await self.get(record_id)

    async def _write_board_value(self, record_id: str, value: str) -> None:
        async with self._guard.hold(self.profile.table, record_id):
            await self._require(record_id)
            await self._data.update(self.profile.table, record_id, {self.profile.kanban_field: value})
