"""Unit tests for type-aware, stable sorting."""

from datetime import datetime, timezone

from opsdesk.application.listing import next_sort, sort_records
from opsdesk.application.listing.profiles import SUBSCRIPTIONS, TASKS, TICKETS
from opsdesk.domain.entities import SortDirection, SortSpec


def _ids(records):
    return [r["id"] for r in records]


def test_text_sort_is_case_insensitive():
    rows = [{"id": "1", "title": "banana"}, {"id": "2", "title": "Apple"}, {"id": "3", "title": "cherry"}]
    assert _ids(sort_records(rows, "title", "asc", TASKS)) == ["2", "1", "3"]


def test_equal_keys_keep_input_order_in_both_directions():
    rows = [
        {"id": "a", "priority": "high"},
        {"id": "b", "priority": "low"},
        {"id": "c", "priority": "high"},
        {"id": "d", "priority": "low"},
    ]
    assert _ids(sort_records(rows, "priority", SortDirection.ASC, TASKS)) == ["a", "c", "b", "d"]
    assert _ids(sort_records(rows, "priority", SortDirection.DESC, TASKS)) == ["b", "d", "a", "c"]


def test_sorting_twice_gives_the_same_order():
    rows = [{"id": str(i), "status": s} for i, s in enumerate(["New", "Resolved", "New", "Escalated"])]
    once = sort_records(rows, "status", "asc", TICKETS)
    assert _ids(sort_records(once, "status", "asc", TICKETS)) == _ids(once)


def test_numbers_compare_numerically_with_missing_as_zero():
    rows = [
        {"id": "a", "ticket_number": 10},
        {"id": "b", "ticket_number": 9},
        {"id": "c", "ticket_number": None},
    ]
    assert _ids(sort_records(rows, "ticket_number", "asc", TICKETS)) == ["c", "b", "a"]


def test_dates_compare_by_instant_with_missing_first():
    rows = [
        {"id": "a", "expiry_date": "2025-06-01"},
        {"id": "b", "expiry_date": None},
        {"id": "c", "expiry_date": datetime(2025, 1, 1, tzinfo=timezone.utc)},
    ]
    assert _ids(sort_records(rows, "expiry_date", "asc", SUBSCRIPTIONS)) == ["b", "c", "a"]
    assert _ids(sort_records(rows, "expiry_date", "desc", SUBSCRIPTIONS)) == ["a", "c", "b"]


def test_relation_field_sorts_by_display_name():
    rows = [
        {"id": "a", "assignee": "e-1", "assignee_name": "Zoe"},
        {"id": "b", "assignee": "e-2", "assignee_name": "adam"},
        {"id": "c", "assignee": "e-3", "assignee_name": None},
    ]
    assert _ids(sort_records(rows, "assignee", "asc", TASKS)) == ["c", "b", "a"]


def test_sort_returns_a_new_list():
    rows = [{"id": "b", "title": "b"}, {"id": "a", "title": "a"}]
    result = sort_records(rows, "title", "asc", TASKS)
    assert _ids(rows) == ["b", "a"]
    assert result is not rows


def test_clicking_the_active_field_flips_direction():
    current = SortSpec("title", SortDirection.ASC)
    assert next_sort(current, "title") == SortSpec("title", SortDirection.DESC)
    assert next_sort(next_sort(current, "title"), "title") == current


def test_clicking_another_field_sorts_ascending():
    current = SortSpec("title", SortDirection.DESC)
    assert next_sort(current, "due_date") == SortSpec("due_date", SortDirection.ASC)
