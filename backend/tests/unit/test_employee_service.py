"""Unit tests for the EmployeeService."""

import pytest

from opsdesk.application.listing import ListQuery
from opsdesk.application.schemas import EmployeeCreate, EmployeeUpdate, TeamCreate
from opsdesk.application.services import EmployeeService
from opsdesk.domain.exceptions import EntityNotFoundError, ValidationError, WriteInProgressError


@pytest.fixture
def service(data, guard) -> EmployeeService:
    return EmployeeService(data, guard)


@pytest.mark.asyncio
async def test_create_employee_resolves_team_and_manager(service: EmployeeService, data):
    team = await service.create_team(TeamCreate(team_name="  Operations "))
    manager = await service.create(EmployeeCreate(full_name="Ada Lovelace"))
    employee = await service.create(
        EmployeeCreate(full_name="Priya Nair", team_id=team["id"], reporting_manager_id=manager["id"])
    )
    assert team["team_name"] == "Operations"
    assert employee["team_name"] == "Operations"
    assert employee["manager_name"] == "Ada Lovelace"
    assert employee["status"] == "Active"


@pytest.mark.asyncio
async def test_duplicate_team_is_rejected(service: EmployeeService):
    await service.create_team(TeamCreate(team_name="Finance"))
    with pytest.raises(ValidationError):
        await service.create_team(TeamCreate(team_name="Finance "))


@pytest.mark.asyncio
async def test_list_teams_is_alphabetical(service: EmployeeService):
    for name in ("Sales", "Engineering", "HR"):
        await service.create_team(TeamCreate(team_name=name))
    assert [t["team_name"] for t in await service.list_teams()] == ["Engineering", "HR", "Sales"]


@pytest.mark.asyncio
async def test_employee_cannot_report_to_themselves(service: EmployeeService):
    employee = await service.create(EmployeeCreate(full_name="Sam"))
    with pytest.raises(ValidationError):
        await service.update(employee["id"], EmployeeUpdate(reporting_manager_id=employee["id"]))


@pytest.mark.asyncio
async def test_update_changes_only_sent_fields(service: EmployeeService):
    employee = await service.create(EmployeeCreate(full_name="Sam", job_title="Analyst"))
    updated = await service.update(employee["id"], EmployeeUpdate(status="Resigned"))
    assert updated["status"] == "Resigned"
    assert updated["job_title"] == "Analyst"


@pytest.mark.asyncio
async def test_update_missing_employee(service: EmployeeService):
    with pytest.raises(EntityNotFoundError):
        await service.update("nope", EmployeeUpdate(full_name="X"))


@pytest.mark.asyncio
async def test_delete_removes_assignments_and_seats(service: EmployeeService, data):
    employee = await service.create(EmployeeCreate(full_name="Sam"))
    data.seed("document_assignments", {"document_id": "d1", "employee_id": employee["id"]})
    data.seed("ticket_assignments", {"ticket_id": "k1", "employee_id": employee["id"]})
    data.seed("subscription_users", {"subscription_id": "s1", "user_id": employee["id"]})

    assert await service.delete(employee["id"]) is True
    assert data.rows("document_assignments") == []
    assert data.rows("ticket_assignments") == []
    assert data.rows("subscription_users") == []
    with pytest.raises(EntityNotFoundError):
        await service.get(employee["id"])


@pytest.mark.asyncio
async def test_write_on_a_busy_record_is_rejected(service: EmployeeService, guard):
    employee = await service.create(EmployeeCreate(full_name="Sam"))
    async with guard.hold("employees", employee["id"]):
        with pytest.raises(WriteInProgressError):
            await service.update(employee["id"], EmployeeUpdate(job_title="Lead"))


@pytest.mark.asyncio
async def test_list_page_filters_by_team(service: EmployeeService, now):
    team = await service.create_team(TeamCreate(team_name="Ops"))
    await service.create(EmployeeCreate(full_name="Zed", team_id=team["id"]))
    await service.create(EmployeeCreate(full_name="amy", team_id=team["id"]))
    await service.create(EmployeeCreate(full_name="Bob"))

    page, warnings = await service.list_page(ListQuery(filters={"team": frozenset({team["id"]})}), now)
    assert [r["full_name"] for r in page.rows] == ["amy", "Zed"]
    assert warnings == []


@pytest.mark.asyncio
async def test_list_page_hides_columns(service: EmployeeService, now):
    await service.create(EmployeeCreate(full_name="Bob", phone="555"))
    page, _ = await service.list_page(ListQuery(), now, hidden_columns=["email"])
    assert "official_email" not in page.rows[0]
    assert page.columns["email"] is False
