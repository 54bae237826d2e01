"""Application service (use case) for tasks."""

import logging
from collections import Counter
from datetime import datetime, timezone

from opsdesk.application.interfaces import DataService, ObjectStorage
from opsdesk.application.listing import in_time_bucket
from opsdesk.application.listing.profiles import TASKS
from opsdesk.application.schemas.files import AttachmentSchema, FileUpload
from opsdesk.application.schemas.task import TaskCreate, TaskShare, TaskStats, TaskUpdate
from opsdesk.application.services.listing_service import ListingService, changes_from, object_path
from opsdesk.application.services.write_guard import Compensation, WriteGuard, compensating
from opsdesk.domain.entities import Record, TaskStatus, TimeBucket
from opsdesk.domain.exceptions import DataServiceError, ValidationError

logger = logging.getLogger(__name__)

_REQUIRED = ("title", "status", "priority")


def _completion_fields(status: str) -> Record:
    """``completed_on`` follows the status: stamped on completion, cleared otherwise."""
    if status == TaskStatus.COMPLETED.value:
        return {"status": status, "completed_on": datetime.now(timezone.utc)}
    return {"status": status, "completed_on": None}


class TaskService(ListingService):
    """Orchestrates task CRUD, kanban moves, sharing and attachments."""

    profile = TASKS

    def __init__(
        self,
        data_service: DataService,
        storage: ObjectStorage,
        guard: WriteGuard | None = None,
    ):
        super().__init__(data_service, guard)
        self._storage = storage

    async def _upload_attachments(
        self, task_id: str, files: list[FileUpload], undo: Compensation
    ) -> list[Record]:
        attachments: list[Record] = []
        for file in files:
            if not file.filename or file.size == 0:
                raise ValidationError(f"Attachment '{file.filename}' is empty", field="attachments")
            path = object_path(f"tasks/{task_id}", file.filename)
            url = await self._storage.upload(path, file.content)
            undo.add(f"delete object {path}", lambda path=path: self._storage.delete(path))
            attachments.append(
                AttachmentSchema(
                    name=file.filename,
                    path=path,
                    url=url,
                    size=file.size,
                    content_type=file.content_type,
                ).model_dump()
            )
        return attachments

    async def _insert_with_attachments(
        self, label: str, row: Record, files: list[FileUpload]
    ) -> str:
        async with compensating(label) as undo:
            inserted = await self._data.insert("tasks", row)
            task_id = inserted["id"]
            undo.add(f"delete task {task_id}", lambda: self._data.delete("tasks", task_id))
            if files:
                attachments = await self._upload_attachments(task_id, files, undo)
                await self._data.update("tasks", task_id, {"attachments": attachments})
        return task_id

    async def create(self, data: TaskCreate, attachments: list[FileUpload] | None = None) -> Record:
        row = {
            "title": data.title,
            "description": data.description,
            "priority": data.priority.value,
            "due_date": data.due_date,
            "assignee": data.assignee,
            "status": TaskStatus.PENDING.value,
            "attachments": [],
        }
        task_id = await self._insert_with_attachments(
            f"Create task '{data.title}'", row, attachments or []
        )
        logger.info("Created task %s for %s", task_id, data.assignee)
        return await self.get(task_id)

    async def update(self, task_id: str, data: TaskUpdate) -> Record:
        changes = changes_from(data, required=_REQUIRED)
        if "status" in changes:
            changes.update(_completion_fields(changes["status"]))
        async with self._guard.hold("tasks", task_id):
            await self._require(task_id)
            await self._data.update("tasks", task_id, changes)
        return await self.get(task_id)

    async def update_status(self, task_id: str, status: TaskStatus | str) -> Record:
        await self._write_board_value(task_id, TaskStatus(status).value)
        return await self.get(task_id)

    async def _write_board_value(self, task_id: str, status: str) -> None:
        async with self._guard.hold("tasks", task_id):
            await self._require(task_id)
            await self._data.update("tasks", task_id, _completion_fields(status))
        logger.info("Task %s moved to %s", task_id, status)

    async def share(
        self, task_id: str, data: TaskShare, attachments: list[FileUpload] | None = None
    ) -> Record:
        """Copy a task to another assignee as a new pending task linked to the original."""
        source = await self._require(task_id)
        if data.assignee == source.get("assignee"):
            raise ValidationError("The task is already assigned to this employee", field="assignee")
        row = {
            "title": source["title"],
            "description": source.get("description"),
            "priority": source.get("priority"),
            "due_date": source.get("due_date"),
            "assignee": data.assignee,
            "status": TaskStatus.PENDING.value,
            "attachments": [],
            "shared_from": task_id,
            "share_message": data.message,
        }
        new_id = await self._insert_with_attachments(
            f"Share task {task_id}", row, attachments or []
        )
        logger.info("Shared task %s as %s with %s", task_id, new_id, data.assignee)
        return await self.get(new_id)

    async def delete(self, task_id: str) -> bool:
        """Delete the task; its stored attachments are removed best-effort."""
        async with self._guard.hold("tasks", task_id):
            row = await self._require(task_id)
            deleted = await self._data.delete("tasks", task_id)

        for attachment in row.get("attachments") or []:
            path = attachment.get("path") if isinstance(attachment, dict) else None
            if not path:
                continue
            try:
                await self._storage.delete(path)
            except DataServiceError as exc:
                logger.warning("Task %s deleted but attachment %s was not: %s", task_id, path, exc)
        return deleted

    async def stats(self, now: datetime) -> TaskStats:
        result = await self._store.load()
        counts = Counter(record.get("status") for record in result.records)
        overdue = sum(
            1
            for record in result.records
            if in_time_bucket(record, TimeBucket.OVERDUE.value, self.profile, now)
        )
        return TaskStats(
            total=len(result.records),
            pending=counts[TaskStatus.PENDING.value],
            in_progress=counts[TaskStatus.IN_PROGRESS.value],
            completed=counts[TaskStatus.COMPLETED.value],
            overdue=overdue,
        )
