"""Unit tests for the TaskService."""

from datetime import date

import pytest

from opsdesk.application.schemas import FileUpload, TaskCreate, TaskShare, TaskUpdate
from opsdesk.application.services import TaskService
from opsdesk.domain.exceptions import DataServiceError, EntityNotFoundError, ValidationError


@pytest.fixture
def service(data, storage, guard) -> TaskService:
    data.seed(
        "employees",
        {"id": "e1", "full_name": "Priya Nair"},
        {"id": "e2", "full_name": "Tom Berg"},
    )
    return TaskService(data, storage, guard)


def _note(name: str = "notes.txt", content: bytes = b"checklist") -> FileUpload:
    return FileUpload(filename=name, content=content, content_type="text/plain")


@pytest.mark.asyncio
async def test_new_tasks_start_pending(service: TaskService):
    task = await service.create(TaskCreate(title="Renew SSL", assignee="e1", priority="high", due_date=date(2025, 3, 20)))
    assert task["status"] == "pending"
    assert task["priority"] == "high"
    assert task["assignee_name"] == "Priya Nair"
    assert task["attachments"] == []


@pytest.mark.asyncio
async def test_attachments_are_stored_under_the_task(service: TaskService, storage):
    task = await service.create(TaskCreate(title="Audit", assignee="e1"), [_note(), _note("scan.PNG", b"png")])
    paths = [a["path"] for a in task["attachments"]]
    assert all(p.startswith(f"tasks/{task['id']}/") for p in paths)
    assert paths[1].endswith(".png")
    assert task["attachments"][0]["name"] == "notes.txt"
    assert task["attachments"][0]["url"] == f"/files/{paths[0]}"
    assert set(storage.objects) == set(paths)


@pytest.mark.asyncio
async def test_failed_attachment_upload_rolls_back_the_task(service: TaskService, data, storage):
    storage.fail_upload = True
    with pytest.raises(DataServiceError):
        await service.create(TaskCreate(title="Audit", assignee="e1"), [_note()])
    assert data.rows("tasks") == []


@pytest.mark.asyncio
async def test_empty_attachment_is_rejected_and_rolled_back(service: TaskService, data, storage):
    with pytest.raises(ValidationError):
        await service.create(TaskCreate(title="Audit", assignee="e1"), [_note(), _note("empty.txt", b"")])
    assert data.rows("tasks") == []
    assert storage.objects == {}


@pytest.mark.asyncio
async def test_completing_a_task_stamps_completed_on(service: TaskService):
    task = await service.create(TaskCreate(title="Audit", assignee="e1"))
    done = await service.update_status(task["id"], "completed")
    assert done["status"] == "completed"
    assert done["completed_on"] is not None
    reopened = await service.update(task["id"], TaskUpdate(status="in_progress"))
    assert reopened["completed_on"] is None


@pytest.mark.asyncio
async def test_kanban_move_validates_the_column(service: TaskService):
    task = await service.create(TaskCreate(title="Audit", assignee="e1"))
    moved = await service.move(task["id"], "in_progress")
    assert moved["status"] == "in_progress"
    with pytest.raises(ValidationError):
        await service.move(task["id"], "archived")


@pytest.mark.asyncio
async def test_share_creates_a_linked_copy(service: TaskService, data):
    task = await service.create(TaskCreate(title="Audit", assignee="e1", priority="high"))
    await service.update_status(task["id"], "in_progress")
    copy = await service.share(task["id"], TaskShare(assignee="e2", message="Please take over"))
    assert copy["id"] != task["id"]
    assert copy["status"] == "pending"
    assert copy["priority"] == "high"
    assert copy["shared_from"] == task["id"]
    assert copy["share_message"] == "Please take over"
    assert copy["assignee_name"] == "Tom Berg"
    assert len(data.rows("tasks")) == 2


@pytest.mark.asyncio
async def test_share_with_the_current_assignee_is_rejected(service: TaskService):
    task = await service.create(TaskCreate(title="Audit", assignee="e1"))
    with pytest.raises(ValidationError):
        await service.share(task["id"], TaskShare(assignee="e1"))


@pytest.mark.asyncio
async def test_delete_removes_attachments(service: TaskService, storage):
    task = await service.create(TaskCreate(title="Audit", assignee="e1"), [_note()])
    assert await service.delete(task["id"]) is True
    assert storage.objects == {}
    with pytest.raises(EntityNotFoundError):
        await service.get(task["id"])


@pytest.mark.asyncio
async def test_stats(service: TaskService, now):
    overdue = await service.create(TaskCreate(title="A", assignee="e1", due_date=date(2025, 3, 1)))
    await service.create(TaskCreate(title="B", assignee="e1", due_date=date(2025, 3, 30)))
    late_but_done = await service.create(TaskCreate(title="C", assignee="e2", due_date=date(2025, 2, 1)))
    await service.update_status(late_but_done["id"], "completed")
    await service.update_status(overdue["id"], "in_progress")

    stats = await service.stats(now)
    assert stats.model_dump() == {
        "total": 3,
        "pending": 1,
        "in_progress": 1,
        "completed": 1,
        "overdue": 1,
    }


@pytest.mark.asyncio
async def test_explicit_null_clears_an_optional_field(service: TaskService):
    task = await service.create(
        TaskCreate(title="Audit", assignee="e1", description="Q1 books", due_date=date(2025, 3, 20))
    )
    updated = await service.update(task["id"], TaskUpdate(due_date=None, description=None))
    assert updated["due_date"] is None
    assert updated["description"] is None
    assert updated["title"] == "Audit"


@pytest.mark.asyncio
async def test_null_for_a_required_field_is_rejected_before_writing(service: TaskService, data):
    task = await service.create(TaskCreate(title="Audit", assignee="e1"))
    data.calls.clear()
    with pytest.raises(ValidationError) as exc:
        await service.update(task["id"], TaskUpdate(status=None))
    assert exc.value.field == "status"
    assert data.calls == []
