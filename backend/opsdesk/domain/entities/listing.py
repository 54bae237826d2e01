"""Domain entities for list views — load results, pages and kanban boards."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .records import Record


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TimeBucket(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    OVERDUE = "overdue"


class PageNavigation(str, Enum):
    FIRST = "first"
    PREVIOUS = "previous"
    NEXT = "next"
    LAST = "last"


@dataclass(frozen=True)
class SortSpec:
    """Active sort column and direction of a list view."""

    field: str
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class LoadWarning:
    """A relation that could not be resolved while loading a store."""

    relation: str
    message: str


@dataclass
class LoadResult:
    """Records produced by an entity store load, plus non-fatal warnings."""

    records: list[Record] = field(default_factory=list)
    warnings: list[LoadWarning] = field(default_factory=list)


@dataclass
class Page:
    """One slice of an already filtered and sorted sequence."""

    items: list[Record]
    total_count: int
    total_pages: int
    page_index: int
    page_size: int

    @property
    def has_next(self) -> bool:
        return (self.page_index + 1) * self.page_size < self.total_count

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0


@dataclass
class ListPage:
    """A rendered list view: the page plus its projected rows and columns."""

    page: Page
    rows: list[dict[str, Any]]
    columns: dict[str, bool]


@dataclass
class KanbanColumn:
    """Records sharing one value of the board field, in sorted order."""

    key: str
    records: list[Record] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.records)
