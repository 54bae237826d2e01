"""Unit tests for kanban grouping."""

from dataclasses import replace

from opsdesk.application.listing import group_by_column
from opsdesk.application.listing.profiles import TASKS, TICKETS


def test_columns_follow_the_board_enumeration():
    records = [
        {"id": "1", "status": "completed"},
        {"id": "2", "status": "pending"},
        {"id": "3", "status": "pending"},
    ]
    board = group_by_column(records, TASKS)
    assert [c.key for c in board] == ["pending", "in_progress", "completed"]
    assert [r["id"] for r in board[0].records] == ["2", "3"]
    assert board[1].count == 0
    assert board[2].count == 1


def test_unknown_values_land_in_a_trailing_other_column():
    records = [{"id": "1", "status": "New"}, {"id": "2", "status": "On hold"}]
    board = group_by_column(records, TICKETS)
    assert board[-1].key == "Other"
    assert [r["id"] for r in board[-1].records] == ["2"]


def test_other_column_is_omitted_when_empty():
    board = group_by_column([{"id": "1", "status": "New"}], TICKETS)
    assert "Other" not in [c.key for c in board]


def test_profile_without_board_field_has_no_columns():
    assert group_by_column([{"id": "1"}], replace(TASKS, kanban_field=None)) == []
