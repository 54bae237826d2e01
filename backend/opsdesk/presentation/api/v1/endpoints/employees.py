"""Employee directory endpoints and the per-employee assigned views."""

from datetime import datetime

from fastapi import APIRouter, Depends, status

from opsdesk.application.schemas import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    KanbanBoardResponse,
    ListPageResponse,
    TeamCreate,
    TeamResponse,
)
from opsdesk.application.services import (
    DocumentService,
    EmployeeService,
    ListingService,
    TaskService,
    TicketService,
)
from opsdesk.infrastructure.dependencies import (
    get_document_service,
    get_employee_service,
    get_now,
    get_task_service,
    get_ticket_service,
)
from opsdesk.presentation.api.v1.endpoints.boards import to_board_response
from opsdesk.presentation.api.v1.params import ListParams

router = APIRouter(prefix="/employees", tags=["Employees"])


@router.get("", response_model=ListPageResponse)
async def list_employees(
    params: ListParams = Depends(),
    now: datetime = Depends(get_now),
    service: EmployeeService = Depends(get_employee_service),
) -> ListPageResponse:
    """Search, filter, sort and page the employee directory."""
    page, warnings = await service.list_page(params.query(service.profile), now, params.hidden)
    return ListPageResponse.from_page(page, warnings)


@router.get("/kanban", response_model=KanbanBoardResponse)
async def employee_board(
    params: ListParams = Depends(),
    now: datetime = Depends(get_now),
    service: EmployeeService = Depends(get_employee_service),
) -> KanbanBoardResponse:
    columns, warnings = await service.kanban(params.query(service.profile), now)
    return to_board_response(columns, warnings)


@router.get("/teams", response_model=list[TeamResponse])
async def list_teams(
    service: EmployeeService = Depends(get_employee_service),
) -> list[TeamResponse]:
    return [TeamResponse.model_validate(t) for t in await service.list_teams()]


@router.post("/teams", response_model=TeamResponse, status_code=status.HTTP_201_CREATED)
async def create_team(
    data: TeamCreate,
    service: EmployeeService = Depends(get_employee_service),
) -> TeamResponse:
    return TeamResponse.model_validate(await service.create_team(data))


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeResponse:
    return EmployeeResponse.model_validate(await service.get(employee_id))


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    data: EmployeeCreate,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeResponse:
    return EmployeeResponse.model_validate(await service.create(data))


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: str,
    data: EmployeeUpdate,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeResponse:
    return EmployeeResponse.model_validate(await service.update(employee_id, data))


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
) -> None:
    """Delete an employee and their assignments and subscription seats."""
    await service.delete(employee_id)


async def _assigned(
    employee_id: str,
    params: ListParams,
    now: datetime,
    employees: EmployeeService,
    service: ListingService,
) -> ListPageResponse:
    await employees.get(employee_id)
    page, warnings = await service.assigned_page(
        employee_id, params.query(service.profile), now, params.hidden
    )
    return ListPageResponse.from_page(page, warnings)


@router.get("/{employee_id}/tasks", response_model=ListPageResponse)
async def employee_tasks(
    employee_id: str,
    params: ListParams = Depends(),
    now: datetime = Depends(get_now),
    employees: EmployeeService = Depends(get_employee_service),
    service: TaskService = Depends(get_task_service),
) -> ListPageResponse:
    """Tasks assigned to one employee, with the usual list parameters."""
    return await _assigned(employee_id, params, now, employees, service)


@router.get("/{employee_id}/documents", response_model=ListPageResponse)
async def employee_documents(
    employee_id: str,
    params: ListParams = Depends(),
    now: datetime = Depends(get_now),
    employees: EmployeeService = Depends(get_employee_service),
    service: DocumentService = Depends(get_document_service),
) -> ListPageResponse:
    """Documents shared with one employee; only active ones unless ``status`` is given."""
    return await _assigned(employee_id, params, now, employees, service)


@router.get("/{employee_id}/tickets", response_model=ListPageResponse)
async def employee_tickets(
    employee_id: str,
    params: ListParams = Depends(),
    now: datetime = Depends(get_now),
    employees: EmployeeService = Depends(get_employee_service),
    service: TicketService = Depends(get_ticket_service),
) -> ListPageResponse:
    return await _assigned(employee_id, params, now, employees, service)
