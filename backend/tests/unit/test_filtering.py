"""Unit tests for search, facet and time-bucket filtering."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from opsdesk.application.listing import filter_records, in_time_bucket, matches_search
from opsdesk.application.listing.profiles import DOCUMENTS, TASKS, TICKETS

TICKET_ROWS = [
    {"id": "t1", "client_name": "Dana", "company": "Acme", "issue": "Login fails", "status": "New", "priority": "High"},
    {"id": "t2", "client_name": "Eli", "company": "Globex", "issue": "Invoice wrong", "status": "Escalated", "priority": "Low"},
    {"id": "t3", "client_name": "Fay", "company": "acme labs", "issue": "VPN down", "status": "Resolved", "priority": "High"},
    {"id": "t4", "client_name": "Gus", "company": None, "issue": "Printer", "status": "Waiting", "priority": "High"},
]


def _ids(records):
    return [r["id"] for r in records]


def test_blank_search_matches_everything():
    assert matches_search({"title": "x"}, "", ["title"])
    assert matches_search({"title": "x"}, "   ", ["title"])
    assert matches_search({"title": "x"}, None, ["title"])


def test_search_is_case_insensitive_substring_over_fields(now):
    result = filter_records(TICKET_ROWS, "ACME", {}, TICKETS, now)
    assert _ids(result) == ["t1", "t3"]


def test_search_skips_missing_fields(now):
    assert filter_records(TICKET_ROWS, "printer", {}, TICKETS, now)[0]["id"] == "t4"


def test_values_in_one_dimension_combine_with_or(now):
    result = filter_records(TICKET_ROWS, "", {"status": {"New", "Escalated"}}, TICKETS, now)
    assert _ids(result) == ["t1", "t2"]


def test_dimensions_and_search_combine_with_and(now):
    filters = {"status": {"New", "Resolved"}, "priority": {"High"}}
    assert _ids(filter_records(TICKET_ROWS, "", filters, TICKETS, now)) == ["t1", "t3"]
    assert _ids(filter_records(TICKET_ROWS, "vpn", filters, TICKETS, now)) == ["t3"]


def test_empty_accepted_set_places_no_constraint(now):
    result = filter_records(TICKET_ROWS, "", {"status": set(), "priority": set()}, TICKETS, now)
    assert len(result) == len(TICKET_ROWS)


def test_out_of_enumeration_value_is_read_as_other(now):
    result = filter_records(TICKET_ROWS, "", {"status": {"Other"}}, TICKETS, now)
    assert _ids(result) == ["t4"]


def test_unknown_dimension_matches_nothing(now):
    assert filter_records(TICKET_ROWS, "", {"colour": {"red"}}, TICKETS, now) == []


def test_filter_preserves_input_order(now):
    reversed_rows = list(reversed(TICKET_ROWS))
    result = filter_records(reversed_rows, "", {"priority": {"High"}}, TICKETS, now)
    assert _ids(result) == ["t4", "t3", "t1"]


# ── Time buckets ─────────────────────────────────────────────────────


def _task(due, status="pending"):
    return {"id": "x", "due_date": due, "status": status}


def test_today_bucket(now):
    assert in_time_bucket(_task("2025-03-12"), "today", TASKS, now)
    assert not in_time_bucket(_task("2025-03-13"), "today", TASKS, now)


def test_week_bucket_starts_on_sunday(now):
    assert in_time_bucket(_task("2025-03-09"), "week", TASKS, now)
    assert in_time_bucket(_task("2025-03-15"), "week", TASKS, now)
    assert not in_time_bucket(_task("2025-03-08"), "week", TASKS, now)
    assert not in_time_bucket(_task("2025-03-16"), "week", TASKS, now)


def test_month_bucket(now):
    assert in_time_bucket(_task("2025-03-31"), "month", TASKS, now)
    assert not in_time_bucket(_task("2025-04-01"), "month", TASKS, now)
    assert not in_time_bucket(_task("2024-03-12"), "month", TASKS, now)


def test_overdue_excludes_completed_tasks(now):
    assert in_time_bucket(_task("2025-03-01"), "overdue", TASKS, now)
    assert not in_time_bucket(_task("2025-03-01", status="completed"), "overdue", TASKS, now)
    assert not in_time_bucket(_task("2025-03-20"), "overdue", TASKS, now)


def test_missing_reference_date_is_in_no_bucket(now):
    for bucket in ("today", "week", "month", "overdue"):
        assert not in_time_bucket(_task(None), bucket, TASKS, now)
        assert not in_time_bucket(_task("not a date"), bucket, TASKS, now)


def test_profile_without_time_field_has_no_buckets(now):
    assert not in_time_bucket({"created_at": now}, "today", DOCUMENTS, now)


def test_selected_buckets_combine_with_or(now):
    rows = [
        {"id": "a", "due_date": "2025-03-12", "status": "pending"},
        {"id": "b", "due_date": "2025-02-01", "status": "pending"},
        {"id": "c", "due_date": "2025-05-01", "status": "pending"},
    ]
    result = filter_records(rows, "", {"time": {"today", "overdue"}}, TASKS, now)
    assert _ids(result) == ["a", "b"]


def test_calendar_date_is_read_in_the_display_timezone():
    late_evening = datetime(2025, 3, 12, 23, 30, tzinfo=ZoneInfo("America/New_York"))
    assert in_time_bucket(_task("2025-03-12"), "today", TASKS, late_evening)


def test_timestamps_are_converted_to_the_display_timezone():
    pacific_morning = datetime(2025, 3, 12, 10, 0, tzinfo=ZoneInfo("America/Los_Angeles"))
    ticket = {"id": "t", "created_at": datetime(2025, 3, 12, 2, 0, tzinfo=timezone.utc)}
    # 02:00 UTC is still the 11th in California.
    assert not in_time_bucket(ticket, "today", TICKETS, pacific_morning)
    assert in_time_bucket(ticket, "week", TICKETS, pacific_morning)


# ── Assignees ────────────────────────────────────────────────────────


def test_assignee_facet_matches_any_assigned_employee(now):
    tickets = [
        {"id": "t1", "status": "New", "assignees": [{"employee_id": "e1"}, {"employee_id": "e2"}]},
        {"id": "t2", "status": "New", "assignees": [{"employee_id": "e2"}]},
        {"id": "t3", "status": "New", "assignees": []},
    ]
    assert _ids(filter_records(tickets, "", {"assignee": {"e1"}}, TICKETS, now)) == ["t1"]
    assert _ids(filter_records(tickets, "", {"assignee": {"e2"}}, TICKETS, now)) == ["t1", "t2"]
    assert _ids(filter_records(tickets, "", {"assignee": {"Other"}}, TICKETS, now)) == ["t3"]


def test_assignee_facet_on_document_assignments_and_task_assignee(now):
    documents = [
        {"id": "d1", "title": "Policy", "assignments": [{"employee_id": "e1", "can_view": True}]},
        {"id": "d2", "title": "Handbook"},
    ]
    tasks = [{"id": "k1", "assignee": "e1"}, {"id": "k2", "assignee": "e2"}, {"id": "k3", "assignee": None}]
    assert _ids(filter_records(documents, "", {"assignee": {"e1"}}, DOCUMENTS, now)) == ["d1"]
    assert _ids(filter_records(tasks, "", {"assignee": {"e1"}}, TASKS, now)) == ["k1"]
    assert _ids(filter_records(tasks, "", {"assignee": {"Other"}}, TASKS, now)) == ["k3"]
