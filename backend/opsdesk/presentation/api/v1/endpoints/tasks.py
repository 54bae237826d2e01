"""Task endpoints — list, board, stats, CRUD, kanban moves and sharing."""

from datetime import datetime

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from opsdesk.application.schemas import (
    KanbanBoardResponse,
    ListPageResponse,
    TaskCreate,
    TaskResponse,
    TaskShare,
    TaskStats,
    TaskStatusUpdate,
    TaskUpdate,
)
from opsdesk.application.services import TaskService
from opsdesk.infrastructure.dependencies import get_now, get_task_service
from opsdesk.presentation.api.v1.endpoints.boards import to_board_response
from opsdesk.presentation.api.v1.params import ListParams, parse_form, read_uploads

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("", response_model=ListPageResponse)
async def list_tasks(
    params: ListParams = Depends(),
    now: datetime = Depends(get_now),
    service: TaskService = Depends(get_task_service),
) -> ListPageResponse:
    page, warnings = await service.list_page(params.query(service.profile), now, params.hidden)
    return ListPageResponse.from_page(page, warnings)


@router.get("/kanban", response_model=KanbanBoardResponse)
async def task_board(
    params: ListParams = Depends(),
    now: datetime = Depends(get_now),
    service: TaskService = Depends(get_task_service),
) -> KanbanBoardResponse:
    columns, warnings = await service.kanban(params.query(service.profile), now)
    return to_board_response(columns, warnings)


@router.get("/stats", response_model=TaskStats)
async def task_stats(
    now: datetime = Depends(get_now),
    service: TaskService = Depends(get_task_service),
) -> TaskStats:
    return await service.stats(now)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return TaskResponse.model_validate(await service.get(task_id))


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    title: str = Form(...),
    assignee: str = Form(...),
    description: str | None = Form(None),
    priority: str | None = Form(None),
    due_date: str | None = Form(None),
    files: list[UploadFile] = File([]),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """Create a pending task, uploading any attachments under the task's folder."""
    data = parse_form(
        TaskCreate,
        title=title,
        assignee=assignee,
        description=description,
        priority=priority,
        due_date=due_date or None,
    )
    attachments = await read_uploads(files)
    return TaskResponse.model_validate(await service.create(data, attachments))


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    data: TaskUpdate,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return TaskResponse.model_validate(await service.update(task_id, data))


@router.patch("/{task_id}/status", response_model=TaskResponse)
async def update_task_status(
    task_id: str,
    data: TaskStatusUpdate,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return TaskResponse.model_validate(await service.update_status(task_id, data.status))


@router.post("/{task_id}/share", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def share_task(
    task_id: str,
    assignee: str = Form(...),
    message: str | None = Form(None),
    files: list[UploadFile] = File([]),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """Copy the task to another employee, optionally with a note and new attachments."""
    data = parse_form(TaskShare, assignee=assignee, message=message)
    attachments = await read_uploads(files)
    return TaskResponse.model_validate(await service.share(task_id, data, attachments))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: str,
    service: TaskService = Depends(get_task_service),
) -> None:
    await service.delete(task_id)
