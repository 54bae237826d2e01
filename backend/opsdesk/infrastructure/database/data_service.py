"""Concrete DataService backed by SQLAlchemy Core statements over the ORM metadata."""

import logging
from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from sqlalchemy import Date, DateTime, Table, delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from opsdesk.application.interfaces import DataService
from opsdesk.domain.entities import Record, parse_timestamp
from opsdesk.domain.exceptions import DataServiceError
from opsdesk.infrastructure.database import models  # noqa: F401  registers every table
from opsdesk.infrastructure.database.base import Base, new_id, utcnow

logger = logging.getLogger(__name__)


class SQLAlchemyDataService(DataService):
    """Implements the DataService port using an async SQLAlchemy session.

    Tables are addressed by name through ``Base.metadata``; rows come back
    as plain dictionaries. Driver errors surface as ``DataServiceError``.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    # ── Helpers ──────────────────────────────────────────────────────

    def _table(self, name: str) -> Table:
        table = Base.metadata.tables.get(name)
        if table is None:
            raise DataServiceError("resolve", name, "unknown table")
        return table

    def _column(self, table: Table, name: str):
        if name not in table.c:
            raise DataServiceError("resolve", f"{table.name}.{name}", "unknown column")
        return table.c[name]

    def _coerce(self, table: Table, row: Record) -> Record:
        """Check column names and convert ISO strings for date/time columns."""
        values: Record = {}
        for key, value in row.items():
            column = self._column(table, key)
            if isinstance(value, str) and isinstance(column.type, DateTime):
                parsed = parse_timestamp(value)
                if parsed is None:
                    raise DataServiceError("write", f"{table.name}.{key}", "invalid timestamp")
                value = parsed
            elif isinstance(value, str) and isinstance(column.type, Date):
                try:
                    value = date.fromisoformat(value[:10])
                except ValueError as exc:
                    raise DataServiceError("write", f"{table.name}.{key}", "invalid date") from exc
            elif isinstance(value, datetime) and isinstance(column.type, Date):
                value = value.date()
            values[key] = value
        return values

    async def _run(self, operation: str, target: str, stmt) -> Any:
        try:
            return await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            logger.error("%s on '%s' failed: %s", operation, target, exc)
            raise DataServiceError(operation, target, str(exc.__cause__ or exc)) from exc

    # ── Reads ────────────────────────────────────────────────────────

    async def fetch_all(
        self, table: str, *, order_by: str | None = None, descending: bool = False
    ) -> list[Record]:
        tbl = self._table(table)
        stmt = select(tbl)
        if order_by is not None:
            column = self._column(tbl, order_by)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        result = await self._run("select", table, stmt)
        return [dict(row._mapping) for row in result]

    async def select_in(
        self,
        table: str,
        column: str,
        values: Iterable[Any],
        *,
        order_by: str | None = None,
    ) -> list[Record]:
        values = list(dict.fromkeys(values))
        if not values:
            return []
        tbl = self._table(table)
        stmt = select(tbl).where(self._column(tbl, column).in_(values))
        if order_by is not None:
            stmt = stmt.order_by(self._column(tbl, order_by).asc())
        result = await self._run("select", table, stmt)
        return [dict(row._mapping) for row in result]

    async def get(self, table: str, record_id: str) -> Record | None:
        tbl = self._table(table)
        result = await self._run("select", table, select(tbl).where(tbl.c.id == record_id))
        row = result.first()
        return dict(row._mapping) if row else None

    async def max_value(self, table: str, column: str) -> Any:
        tbl = self._table(table)
        result = await self._run("select", table, select(func.max(self._column(tbl, column))))
        return result.scalar()

    # ── Writes ───────────────────────────────────────────────────────

    async def insert(self, table: str, row: Record) -> Record:
        rows = await self.insert_many(table, [row])
        return rows[0]

    async def insert_many(self, table: str, rows: list[Record]) -> list[Record]:
        if not rows:
            return []
        tbl = self._table(table)
        inserted: list[Record] = []
        for row in rows:
            values = self._coerce(tbl, row)
            values.setdefault("id", new_id())
            result = await self._run("insert", table, insert(tbl).values(**values).returning(tbl))
            inserted.append(dict(result.one()._mapping))
        logger.debug("Inserted %d row(s) into %s", len(inserted), table)
        return inserted

    async def update(self, table: str, record_id: str, changes: Record) -> Record | None:
        tbl = self._table(table)
        values = self._coerce(tbl, {k: v for k, v in changes.items() if k != "id"})
        if "updated_at" in tbl.c:
            values.setdefault("updated_at", utcnow())
        if not values:
            return await self.get(table, record_id)
        stmt = update(tbl).where(tbl.c.id == record_id).values(**values).returning(tbl)
        result = await self._run("update", table, stmt)
        row = result.first()
        return dict(row._mapping) if row else None

    async def delete(self, table: str, record_id: str) -> bool:
        tbl = self._table(table)
        stmt = delete(tbl).where(tbl.c.id == record_id).returning(tbl.c.id)
        result = await self._run("delete", table, stmt)
        return result.first() is not None

    async def delete_where(self, table: str, column: str, values: Iterable[Any]) -> int:
        values = list(dict.fromkeys(values))
        if not values:
            return 0
        tbl = self._table(table)
        stmt = delete(tbl).where(self._column(tbl, column).in_(values)).returning(tbl.c.id)
        result = await self._run("delete", table, stmt)
        return len(result.all())
