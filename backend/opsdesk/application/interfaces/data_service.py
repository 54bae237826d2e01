"""Abstract data service interface (port) — row-oriented access to named tables."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from opsdesk.domain.entities import Record


class DataService(ABC):
    """Port for table persistence — implemented in the infrastructure layer.

    Rows travel as plain dictionaries. Every failure surfaces as
    :class:`~opsdesk.domain.exceptions.DataServiceError`.
    """

    @abstractmethod
    async def fetch_all(
        self, table: str, *, order_by: str | None = None, descending: bool = False
    ) -> list[Record]:
        """Retrieve every row of a table, optionally ordered by one column."""
        ...

    @abstractmethod
    async def select_in(
        self,
        table: str,
        column: str,
        values: Iterable[Any],
        *,
        order_by: str | None = None,
    ) -> list[Record]:
        """Retrieve rows whose ``column`` is one of ``values``."""
        ...

    @abstractmethod
    async def get(self, table: str, record_id: str) -> Record | None:
        """Retrieve a single row by id."""
        ...

    @abstractmethod
    async def insert(self, table: str, row: Record) -> Record:
        """Insert a row and return it as stored (with generated id and timestamps)."""
        ...

    @abstractmethod
    async def insert_many(self, table: str, rows: list[Record]) -> list[Record]:
        """Insert several rows in one call."""
        ...

    @abstractmethod
    async def update(self, table: str, record_id: str, changes: Record) -> Record | None:
        """Overwrite the given fields of a row. Returns None if the row is missing."""
        ...

    @abstractmethod
    async def delete(self, table: str, record_id: str) -> bool:
        """Delete a row by id. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def delete_where(self, table: str, column: str, values: Iterable[Any]) -> int:
        """Delete rows whose ``column`` is one of ``values``. Returns the count."""
        ...

    @abstractmethod
    async def max_value(self, table: str, column: str) -> Any:
        """Return the largest value of a column, or None for an empty table."""
        ...
