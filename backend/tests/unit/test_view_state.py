"""Unit tests for the list view state reducer."""

from datetime import datetime, timedelta, timezone

import pytest

from opsdesk.application.listing import Overlay, ViewStatus, initial_state, reduce, render
from opsdesk.application.listing.profiles import TASKS
from opsdesk.application.listing.view_state import (
    ColumnsReset,
    ColumnToggled,
    FilterChanged,
    FiltersCleared,
    LoadFailed,
    LoadStarted,
    LoadSucceeded,
    OverlayClosed,
    OverlayOpened,
    PageRequested,
    PageSizeChanged,
    SearchChanged,
    SortRequested,
    WriteFinished,
    WriteStarted,
)
from opsdesk.domain.entities import LoadWarning, SortDirection, SortSpec
from opsdesk.domain.exceptions import ValidationError, WriteInProgressError

_BASE = datetime(2025, 3, 1, tzinfo=timezone.utc)

RECORDS = tuple(
    {
        "id": f"task-{i}",
        "title": f"Task {i:02d}",
        "status": "completed" if i % 3 == 0 else "pending",
        "priority": "high" if i % 2 else "low",
        "due_date": None,
        "created_at": _BASE + timedelta(minutes=i),
    }
    for i in range(1, 31)
)


@pytest.fixture
def loaded():
    state = reduce(initial_state(TASKS), LoadStarted())
    return reduce(state, LoadSucceeded(state.generation, RECORDS))


def test_initial_state():
    state = initial_state(TASKS, page_size=50)
    assert state.status is ViewStatus.LOADING
    assert state.sort == TASKS.default_sort
    assert state.page_size == 50
    assert state.columns.visible_keys() == list(TASKS.column_keys)


def test_load_succeeded_stores_records_and_warnings():
    state = reduce(initial_state(TASKS), LoadStarted())
    warning = LoadWarning("assignee", "timeout")
    state = reduce(state, LoadSucceeded(state.generation, RECORDS, (warning,)))
    assert state.status is ViewStatus.READY
    assert len(state.records) == 30
    assert state.warnings == (warning,)


def test_stale_load_results_are_ignored(loaded):
    first = reduce(loaded, LoadStarted())
    second = reduce(first, LoadStarted())
    stale = reduce(second, LoadSucceeded(first.generation, ()))
    assert stale.records == loaded.records
    assert stale.status is ViewStatus.LOADING
    assert reduce(second, LoadFailed(first.generation, "boom")) == second


def test_load_failure_clears_records(loaded):
    started = reduce(loaded, LoadStarted())
    failed = reduce(started, LoadFailed(started.generation, "connection refused"))
    assert failed.status is ViewStatus.ERROR
    assert failed.records == ()
    assert failed.error_message == "connection refused"


def test_search_resets_the_page(loaded):
    state = reduce(loaded, PageRequested(1))
    state = reduce(state, SearchChanged("task 1"))
    assert state.page_index == 0
    assert state.search_term == "task 1"


def test_filter_change_resets_the_page_and_is_validated(loaded):
    state = reduce(reduce(loaded, PageRequested(1)), FilterChanged("status", frozenset({"pending"})))
    assert state.page_index == 0
    assert state.filters == {"status": frozenset({"pending"})}
    with pytest.raises(ValidationError):
        reduce(state, FilterChanged("status", frozenset({"archived"})))


def test_clearing_filters_also_clears_search(loaded):
    state = reduce(loaded, SearchChanged("x"))
    state = reduce(state, FilterChanged("priority", frozenset({"high"})))
    cleared = reduce(state, FiltersCleared())
    assert cleared.filters == {}
    assert cleared.search_term == ""


def test_sort_click_toggles_direction(loaded):
    state = reduce(loaded, SortRequested("title"))
    assert state.sort == SortSpec("title", SortDirection.ASC)
    state = reduce(state, SortRequested("title"))
    assert state.sort == SortSpec("title", SortDirection.DESC)
    state = reduce(state, SortRequested("due_date", SortDirection.DESC))
    assert state.sort == SortSpec("due_date", SortDirection.DESC)


def test_sort_by_unknown_field_is_rejected(loaded):
    with pytest.raises(ValidationError):
        reduce(loaded, SortRequested("salary"))


def test_sort_keeps_the_page(loaded):
    state = reduce(reduce(loaded, PageRequested(1)), SortRequested("title"))
    assert state.page_index == 1


def test_negative_page_is_rejected(loaded):
    with pytest.raises(ValidationError):
        reduce(loaded, PageRequested(-1))


def test_page_size_change(loaded):
    state = reduce(reduce(loaded, PageRequested(1)), PageSizeChanged(10))
    assert (state.page_size, state.page_index) == (10, 0)
    with pytest.raises(ValidationError):
        reduce(state, PageSizeChanged(15))


def test_column_toggle_and_reset(loaded):
    state = reduce(loaded, ColumnToggled("priority"))
    assert not state.columns.is_visible("priority")
    state = reduce(state, ColumnToggled("priority", visible=True))
    assert state.columns.is_visible("priority")
    state = reduce(reduce(state, ColumnToggled("status", visible=False)), ColumnsReset())
    assert state.columns.visible_keys() == list(TASKS.column_keys)


def test_overlays(loaded):
    state = reduce(loaded, OverlayOpened(Overlay.CREATE))
    assert state.overlay is Overlay.CREATE and state.selected_id is None
    state = reduce(state, OverlayOpened(Overlay.EDIT, "task-3"))
    assert state.overlay is Overlay.EDIT and state.selected_id == "task-3"
    state = reduce(state, OverlayClosed())
    assert state.overlay is None and state.selected_id is None


def test_record_overlays_need_a_record(loaded):
    with pytest.raises(ValidationError):
        reduce(loaded, OverlayOpened(Overlay.SHARE))


def test_only_one_write_at_a_time(loaded):
    busy = reduce(loaded, WriteStarted())
    assert busy.write_in_flight
    with pytest.raises(WriteInProgressError):
        reduce(busy, WriteStarted())
    assert not reduce(busy, WriteFinished()).write_in_flight


def test_reducer_does_not_mutate_state(loaded):
    reduce(loaded, SearchChanged("abc"))
    assert loaded.search_term == ""


def test_unsupported_action_is_rejected(loaded):
    with pytest.raises(ValidationError):
        reduce(loaded, object())


def test_render_runs_the_pipeline(loaded, now):
    state = reduce(loaded, FilterChanged("status", frozenset({"completed"})))
    state = reduce(state, PageSizeChanged(10))
    page = render(state, now)
    assert page.page.total_count == 10
    assert page.rows[0]["id"] == "task-30"


def test_snapshot_is_plain_data(loaded):
    snapshot = reduce(loaded, FilterChanged("priority", frozenset({"low", "high"}))).snapshot()
    assert snapshot["status"] == "ready"
    assert snapshot["record_count"] == 30
    assert snapshot["filters"] == {"priority": ["high", "low"]}
    assert snapshot["sort"] == {"field": "created_at", "direction": "desc"}
