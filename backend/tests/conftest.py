"""Shared in-memory fakes for the DataService and ObjectStorage ports."""

import copy
import itertools
from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from opsdesk.application.interfaces import DataService, ObjectStorage
from opsdesk.application.services import WriteGuard
from opsdesk.domain.entities import Record
from opsdesk.domain.exceptions import DataServiceError

# Column defaults the database would otherwise fill in.
_TABLE_DEFAULTS: dict[str, Record] = {
    "documents": {"status": "Active"},
    "document_assignments": {"can_view": True, "can_download": True},
    "tasks": {"attachments": []},
}


def _order_key(column: str):
    def key(row: Record) -> tuple:
        value = row.get(column)
        return (value is None, "" if value is None else value)

    return key


class FakeDataService(DataService):
    """In-memory fake data service for unit testing.

    ``fail(operation, table)`` makes the next matching calls raise
    ``DataServiceError``; ``times`` limits how many.
    """

    def __init__(self):
        self.tables: dict[str, dict[str, Record]] = defaultdict(dict)
        self.calls: list[tuple[str, str]] = []
        self._failures: dict[tuple[str, str], list] = {}
        self._ids = itertools.count(1)
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    # ── Test helpers ─────────────────────────────────────────────────

    def fail(self, operation: str, table: str, message: str = "connection reset", times: int | None = None):
        self._failures[(operation, table)] = [message, times]

    def seed(self, table: str, *rows: Record) -> list[Record]:
        stored = []
        for row in rows:
            stored.append(self._store(table, row))
        return stored

    def rows(self, table: str) -> list[Record]:
        return [copy.deepcopy(row) for row in self.tables[table].values()]

    def _check(self, operation: str, table: str) -> None:
        self.calls.append((operation, table))
        failure = self._failures.get((operation, table))
        if failure is None:
            return
        message, times = failure
        if times is not None:
            if times <= 0:
                return
            failure[1] = times - 1
        raise DataServiceError(operation, table, message)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _store(self, table: str, row: Record) -> Record:
        stamp = self._tick()
        stored = {**_TABLE_DEFAULTS.get(table, {}), **copy.deepcopy(row)}
        stored.setdefault("id", f"{table}-{next(self._ids)}")
        stored.setdefault("created_at", stamp)
        stored.setdefault("updated_at", stamp)
        self.tables[table][stored["id"]] = stored
        return copy.deepcopy(stored)

    # ── DataService port ─────────────────────────────────────────────

    async def fetch_all(
        self, table: str, *, order_by: str | None = None, descending: bool = False
    ) -> list[Record]:
        self._check("select", table)
        rows = self.rows(table)
        if order_by:
            rows.sort(key=_order_key(order_by), reverse=descending)
        return rows

    async def select_in(
        self,
        table: str,
        column: str,
        values: Iterable[Any],
        *,
        order_by: str | None = None,
    ) -> list[Record]:
        self._check("select", table)
        wanted = set(values)
        rows = [row for row in self.rows(table) if row.get(column) in wanted]
        if order_by:
            rows.sort(key=_order_key(order_by))
        return rows

    async def get(self, table: str, record_id: str) -> Record | None:
        self._check("get", table)
        row = self.tables[table].get(record_id)
        return copy.deepcopy(row) if row is not None else None

    async def insert(self, table: str, row: Record) -> Record:
        self._check("insert", table)
        return self._store(table, row)

    async def insert_many(self, table: str, rows: list[Record]) -> list[Record]:
        self._check("insert", table)
        return [self._store(table, row) for row in rows]

    async def update(self, table: str, record_id: str, changes: Record) -> Record | None:
        self._check("update", table)
        row = self.tables[table].get(record_id)
        if row is None:
            return None
        row.update(copy.deepcopy({k: v for k, v in changes.items() if k != "id"}))
        row["updated_at"] = self._tick()
        return copy.deepcopy(row)

    async def delete(self, table: str, record_id: str) -> bool:
        self._check("delete", table)
        return self.tables[table].pop(record_id, None) is not None

    async def delete_where(self, table: str, column: str, values: Iterable[Any]) -> int:
        self._check("delete", table)
        wanted = set(values)
        doomed = [key for key, row in self.tables[table].items() if row.get(column) in wanted]
        for key in doomed:
            del self.tables[table][key]
        return len(doomed)

    async def max_value(self, table: str, column: str) -> Any:
        self._check("select", table)
        values = [row.get(column) for row in self.tables[table].values()]
        values = [value for value in values if value is not None]
        return max(values) if values else None


class FakeObjectStorage(ObjectStorage):
    """In-memory fake object storage."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.fail_upload = False
        self.fail_delete = False

    async def upload(self, path: str, content: bytes) -> str:
        if self.fail_upload:
            raise DataServiceError("upload", path, "bucket unavailable")
        self.objects[path] = content
        return f"/files/{path}"

    async def download(self, path: str) -> bytes:
        if path not in self.objects:
            raise DataServiceError("download", path, "object not found")
        return self.objects[path]

    async def delete(self, path: str) -> bool:
        if self.fail_delete:
            raise DataServiceError("delete", path, "bucket unavailable")
        return self.objects.pop(path, None) is not None


@pytest.fixture
def data() -> FakeDataService:
    return FakeDataService()


@pytest.fixture
def storage() -> FakeObjectStorage:
    return FakeObjectStorage()


@pytest.fixture
def guard() -> WriteGuard:
    return WriteGuard()


@pytest.fixture
def now() -> datetime:
    """Wednesday 12 March 2025, 10:00 UTC."""
    return datetime(2025, 3, 12, 10, 0, tzinfo=timezone.utc)
