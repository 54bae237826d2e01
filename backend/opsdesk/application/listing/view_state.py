"""List view state and its reducer.

A :class:`ViewState` is everything one open list screen holds: the loaded
records, the search and facet selections, the sort, the page cursor, the
column flags, the open overlay and whether a write is in flight. State is
immutable; :func:`reduce` applies one action and returns the next state.

Loads are tagged with a generation number. ``LoadStarted`` bumps it and a
``LoadSucceeded``/``LoadFailed`` carrying an older generation is ignored,
so a slow superseded load can never overwrite a newer one.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any

from opsdesk.domain.entities import ListPage, LoadWarning, Record, SortDirection, SortSpec
from opsdesk.domain.exceptions import ValidationError, WriteInProgressError

from .columns import ColumnVisibility
from .pagination import DEFAULT_PAGE_SIZE, validate_page_size
from .pipeline import ListQuery, run_pipeline, validate_filters, validate_sort_field
from .profiles import ListProfile, get_profile
from .sorting import next_sort


class ViewStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class Overlay(str, Enum):
    """Modal surfaces of a list screen; at most one is open at a time."""

    CREATE = "create"
    EDIT = "edit"
    ASSIGN = "assign"
    SHARE = "share"
    DETAILS = "details"


@dataclass(frozen=True)
class ViewState:
    domain: str
    columns: ColumnVisibility
    sort: SortSpec
    status: ViewStatus = ViewStatus.LOADING
    generation: int = 0
    records: tuple[Record, ...] = ()
    warnings: tuple[LoadWarning, ...] = ()
    error_message: str | None = None
    search_term: str = ""
    filters: Mapping[str, frozenset[str]] = field(default_factory=dict)
    page_index: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    overlay: Overlay | None = None
    selected_id: str | None = None
    write_in_flight: bool = False

    @property
    def profile(self) -> ListProfile:
        return get_profile(self.domain)

    @property
    def query(self) -> ListQuery:
        return ListQuery(
            search_term=self.search_term,
            filters=self.filters,
            sort=self.sort,
            page_index=self.page_index,
            page_size=self.page_size,
        )

    def snapshot(self) -> dict[str, Any]:
        """Plain-data view of the state, without the records themselves."""
        return {
            "domain": self.domain,
            "status": self.status.value,
            "generation": self.generation,
            "record_count": len(self.records),
            "warnings": [
                {"relation": w.relation, "message": w.message} for w in self.warnings
            ],
            "error_message": self.error_message,
            "search_term": self.search_term,
            "filters": {name: sorted(values) for name, values in self.filters.items()},
            "sort": {"field": self.sort.field, "direction": self.sort.direction.value},
            "page_index": self.page_index,
            "page_size": self.page_size,
            "columns": self.columns.to_dict(),
            "overlay": self.overlay.value if self.overlay else None,
            "selected_id": self.selected_id,
            "write_in_flight": self.write_in_flight,
        }


def initial_state(profile: ListProfile, page_size: int = DEFAULT_PAGE_SIZE) -> ViewState:
    return ViewState(
        domain=profile.name,
        columns=ColumnVisibility.all_visible(profile.column_keys),
        sort=profile.default_sort,
        page_size=validate_page_size(page_size),
    )


# ── Actions ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class LoadStarted:
    pass


@dataclass(frozen=True)
class LoadSucceeded:
    generation: int
    records: tuple[Record, ...]
    warnings: tuple[LoadWarning, ...] = ()


@dataclass(frozen=True)
class LoadFailed:
    generation: int
    message: str


@dataclass(frozen=True)
class SearchChanged:
    term: str


@dataclass(frozen=True)
class FilterChanged:
    dimension: str
    values: frozenset[str]


@dataclass(frozen=True)
class FiltersCleared:
    pass


@dataclass(frozen=True)
class SortRequested:
    """Sort by ``field``; without an explicit direction it behaves like a header click."""

    field: str
    direction: SortDirection | None = None


@dataclass(frozen=True)
class PageRequested:
    page_index: int


@dataclass(frozen=True)
class PageSizeChanged:
    page_size: int


@dataclass(frozen=True)
class ColumnToggled:
    key: str
    visible: bool | None = None


@dataclass(frozen=True)
class ColumnsReset:
    pass


@dataclass(frozen=True)
class OverlayOpened:
    overlay: Overlay
    record_id: str | None = None


@dataclass(frozen=True)
class OverlayClosed:
    pass


@dataclass(frozen=True)
class WriteStarted:
    pass


@dataclass(frozen=True)
class WriteFinished:
    pass


Action = (
    LoadStarted
    | LoadSucceeded
    | LoadFailed
    | SearchChanged
    | FilterChanged
    | FiltersCleared
    | SortRequested
    | PageRequested
    | PageSizeChanged
    | ColumnToggled
    | ColumnsReset
    | OverlayOpened
    | OverlayClosed
    | WriteStarted
    | WriteFinished
)


# ── Reducer ──────────────────────────────────────────────────────────────


def reduce(state: ViewState, action: Action) -> ViewState:
    """Apply ``action`` to ``state``.

    Search, facet and page-size changes send the cursor back to the first
    page. Invalid input raises :class:`ValidationError` and leaves the
    caller's state untouched.
    """
    profile = state.profile

    if isinstance(action, LoadStarted):
        return replace(
            state,
            status=ViewStatus.LOADING,
            generation=state.generation + 1,
            error_message=None,
        )

    if isinstance(action, LoadSucceeded):
        if action.generation != state.generation:
            return state
        return replace(
            state,
            status=ViewStatus.READY,
            records=tuple(action.records),
            warnings=tuple(action.warnings),
            error_message=None,
        )

    if isinstance(action, LoadFailed):
        if action.generation != state.generation:
            return state
        return replace(
            state,
            status=ViewStatus.ERROR,
            records=(),
            warnings=(),
            error_message=action.message,
        )

    if isinstance(action, SearchChanged):
        return replace(state, search_term=action.term, page_index=0)

    if isinstance(action, FilterChanged):
        merged = {**state.filters, action.dimension: frozenset(action.values)}
        return replace(state, filters=validate_filters(merged, profile), page_index=0)

    if isinstance(action, FiltersCleared):
        return replace(state, filters={}, search_term="", page_index=0)

    if isinstance(action, SortRequested):
        validate_sort_field(action.field, profile)
        if action.direction is None:
            sort = next_sort(state.sort, action.field)
        else:
            sort = SortSpec(action.field, SortDirection(action.direction))
        return replace(state, sort=sort)

    if isinstance(action, PageRequested):
        if action.page_index < 0:
            raise ValidationError("Page index cannot be negative", field="page_index")
        return replace(state, page_index=action.page_index)

    if isinstance(action, PageSizeChanged):
        return replace(state, page_size=validate_page_size(action.page_size), page_index=0)

    if isinstance(action, ColumnToggled):
        if action.visible is None:
            columns = state.columns.toggle(action.key)
        else:
            columns = state.columns.set(action.key, action.visible)
        return replace(state, columns=columns)

    if isinstance(action, ColumnsReset):
        return replace(state, columns=state.columns.reset())

    if isinstance(action, OverlayOpened):
        overlay = Overlay(action.overlay)
        if overlay is not Overlay.CREATE and action.record_id is None:
            raise ValidationError(f"The {overlay.value} overlay needs a record", field="record_id")
        return replace(state, overlay=overlay, selected_id=action.record_id)

    if isinstance(action, OverlayClosed):
        return replace(state, overlay=None, selected_id=None)

    if isinstance(action, WriteStarted):
        if state.write_in_flight:
            raise WriteInProgressError(profile.table)
        return replace(state, write_in_flight=True)

    if isinstance(action, WriteFinished):
        return replace(state, write_in_flight=False)

    raise ValidationError(f"Unsupported action {type(action).__name__}", field="action")


def render(state: ViewState, now: datetime) -> ListPage:
    """Run the list pipeline over the state's records."""
    return run_pipeline(state.records, state.query, state.profile, now, state.columns)
