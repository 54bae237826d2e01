"""Unit tests for the TicketService."""

import pytest

from opsdesk.application.listing import ListQuery
from opsdesk.application.schemas import TicketCreate
from opsdesk.application.services import TicketService
from opsdesk.domain.exceptions import DataServiceError, EntityNotFoundError, ValidationError


@pytest.fixture
def service(data, guard) -> TicketService:
    data.seed(
        "employees",
        {"id": "e1", "full_name": "Priya Nair"},
        {"id": "e2", "full_name": "Tom Berg"},
    )
    return TicketService(data, guard)


def _intake(**overrides) -> TicketCreate:
    fields = {"client_name": "Dana", "company": "Acme", "issue": "Cannot log in", "priority": "High"}
    return TicketCreate(**{**fields, **overrides})


async def _history(data, ticket_id):
    return [h["action"] for h in data.rows("ticket_history") if h["ticket_id"] == ticket_id]


@pytest.mark.asyncio
async def test_create_numbers_tickets_sequentially(service: TicketService, data):
    first = await service.create(_intake())
    second = await service.create(_intake(client_name="Eli"))
    assert (first["ticket_number"], second["ticket_number"]) == (1, 2)
    assert first["status"] == "New"
    assert first["assigned_to"] == "Operations"
    assert await _history(data, first["id"]) == ["Ticket created via Admin Portal."]


@pytest.mark.asyncio
async def test_failed_history_insert_removes_the_ticket(service: TicketService, data):
    data.fail("insert", "ticket_history")
    with pytest.raises(DataServiceError):
        await service.create(_intake())
    assert data.rows("tickets") == []


@pytest.mark.asyncio
async def test_status_change_is_logged(service: TicketService, data):
    ticket = await service.create(_intake())
    updated = await service.update_status(ticket["id"], "Escalated")
    assert updated["status"] == "Escalated"
    assert (await _history(data, ticket["id"]))[-1] == "Ticket status changed from New to Escalated."


@pytest.mark.asyncio
async def test_move_rejects_unknown_status(service: TicketService):
    ticket = await service.create(_intake())
    with pytest.raises(ValidationError):
        await service.move(ticket["id"], "Closed")


@pytest.mark.asyncio
async def test_apply_move_does_not_read_the_ticket_back(service: TicketService, data):
    ticket = await service.create(_intake())
    data.calls.clear()
    await service.apply_move(ticket["id"], "In Progress")
    assert data.calls == [("get", "tickets"), ("update", "tickets"), ("insert", "ticket_history")]
    assert data.rows("tickets")[0]["status"] == "In Progress"


@pytest.mark.asyncio
async def test_chat_message(service: TicketService, data):
    ticket = await service.create(_intake())
    chat = await service.send_chat(ticket["id"], "  We are on it  ")
    assert chat["message"] == "We are on it"
    assert chat["sender_type"] == "sent"
    assert (await _history(data, ticket["id"]))[-1] == "Admin sent a chat message."
    with pytest.raises(ValidationError):
        await service.send_chat(ticket["id"], "   ")
    with pytest.raises(EntityNotFoundError):
        await service.send_chat("missing", "hello")


@pytest.mark.asyncio
async def test_assign_replaces_assignees_and_logs_names(service: TicketService, data):
    ticket = await service.create(_intake())
    await service.assign(ticket["id"], ["e1"])
    updated = await service.assign(ticket["id"], ["e2", "e1"])
    assert [a["employee_name"] for a in updated["assignees"]] == ["Tom Berg", "Priya Nair"]
    assert (await _history(data, ticket["id"]))[-1] == "Ticket assigned to: Tom Berg, Priya Nair"


@pytest.mark.asyncio
async def test_share_only_adds_new_assignees(service: TicketService, data):
    ticket = await service.create(_intake())
    await service.assign(ticket["id"], ["e1"])
    shared = await service.share(ticket["id"], ["e1", "e2"])
    assert sorted(a["employee_id"] for a in shared["assignees"]) == ["e1", "e2"]
    assert (await _history(data, ticket["id"]))[-1] == "Ticket shared with 1 employee(s)."
    with pytest.raises(ValidationError):
        await service.share(ticket["id"], [])


@pytest.mark.asyncio
async def test_details_returns_history_and_chat_in_order(service: TicketService):
    ticket = await service.create(_intake())
    await service.send_chat(ticket["id"], "first")
    await service.send_chat(ticket["id"], "second")
    found, history, chat = await service.details(ticket["id"])
    assert found["id"] == ticket["id"]
    assert [c["message"] for c in chat] == ["first", "second"]
    assert history[0]["action"] == "Ticket created via Admin Portal."
    assert len(history) == 3


@pytest.mark.asyncio
async def test_delete_cascades(service: TicketService, data):
    ticket = await service.create(_intake())
    await service.assign(ticket["id"], ["e1"])
    await service.send_chat(ticket["id"], "hello")
    assert await service.delete(ticket["id"]) is True
    for table in ("tickets", "ticket_history", "ticket_chat", "ticket_assignments"):
        assert data.rows(table) == []


@pytest.mark.asyncio
async def test_stats(service: TicketService):
    for _ in range(3):
        await service.create(_intake())
    ticket = await service.create(_intake())
    await service.update_status(ticket["id"], "Resolved")
    stats = await service.stats()
    assert (stats.total, stats.new, stats.resolved, stats.escalated) == (4, 3, 1, 0)


@pytest.mark.asyncio
async def test_assigned_page_keeps_other_filters(service: TicketService, now):
    first = await service.create(_intake())
    second = await service.create(_intake(client_name="Eli"))
    await service.create(_intake(client_name="Fay"))
    await service.assign(first["id"], ["e1"])
    await service.assign(second["id"], ["e1", "e2"])
    await service.update_status(second["id"], "Escalated")

    page, _ = await service.assigned_page("e1", ListQuery(), now)
    assert sorted(r["id"] for r in page.rows) == sorted([first["id"], second["id"]])

    escalated, _ = await service.assigned_page("e1", ListQuery(filters={"status": frozenset({"Escalated"})}), now)
    assert [r["id"] for r in escalated.rows] == [second["id"]]

    # The employee scope replaces any assignee facet sent along.
    scoped, _ = await service.assigned_page("e2", ListQuery(filters={"assignee": frozenset({"e1"})}), now)
    assert [r["id"] for r in scoped.rows] == [second["id"]]
