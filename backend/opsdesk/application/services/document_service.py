"""Application service (use case) for the document library."""

import logging

from opsdesk.application.interfaces import DataService, ObjectStorage
from opsdesk.application.listing.profiles import DOCUMENTS
from opsdesk.application.schemas.document import DocumentAssign, DocumentCreate, DocumentUpdate
from opsdesk.application.schemas.files import FileUpload
from opsdesk.application.services.listing_service import ListingService, changes_from, object_path
from opsdesk.application.services.write_guard import WriteGuard, compensating
from opsdesk.domain.entities import DocumentStatus, Record
from opsdesk.domain.exceptions import DataServiceError, ValidationError

logger = logging.getLogger(__name__)

_REQUIRED = ("title", "category", "status")


class DocumentService(ListingService):
    """Orchestrates document upload, metadata, assignment and removal."""

    profile = DOCUMENTS

    def __init__(
        self,
        data_service: DataService,
        storage: ObjectStorage,
        guard: WriteGuard | None = None,
        max_upload_bytes: int | None = None,
    ):
        super().__init__(data_service, guard)
        self._storage = storage
        self._max_upload_bytes = max_upload_bytes

    def _assigned_filters(self, filters: dict[str, frozenset[str]]) -> dict[str, frozenset[str]]:
        # Employees see active documents unless they ask for a status.
        return {"status": frozenset({DocumentStatus.ACTIVE.value}), **filters}

    def _check_file(self, file: FileUpload) -> None:
        if not file.filename:
            raise ValidationError("A file is required", field="file")
        if file.size == 0:
            raise ValidationError("The uploaded file is empty", field="file")
        if self._max_upload_bytes is not None and file.size > self._max_upload_bytes:
            raise ValidationError(
                f"File exceeds the {self._max_upload_bytes // (1024 * 1024)} MB upload limit",
                field="file",
            )

    async def create(self, data: DocumentCreate, file: FileUpload) -> Record:
        """Upload the file, insert the document row, then its assignments.

        If any step after the upload fails, the stored object and the
        document row are removed again before the error propagates.
        """
        self._check_file(file)
        path = object_path("documents", file.filename)

        async with compensating(f"Create document '{data.title}'") as undo:
            url = await self._storage.upload(path, file.content)
            undo.add(f"delete object {path}", lambda: self._storage.delete(path))

            row = await self._data.insert(
                "documents",
                {
                    "title": data.title,
                    "description": data.description,
                    "category": data.category.value,
                    "file_name": file.filename,
                    "file_type": file.content_type,
                    "file_size": file.size,
                    "file_path": path,
                    "file_url": url,
                    "created_by": data.created_by,
                },
            )
            document_id = row["id"]
            undo.add(f"delete document {document_id}", lambda: self._data.delete("documents", document_id))

            employee_ids = list(dict.fromkeys(data.employee_ids))
            if employee_ids:
                await self._data.insert_many(
                    "document_assignments",
                    [{"document_id": document_id, "employee_id": e} for e in employee_ids],
                )

        logger.info("Created document %s with %d assignment(s)", document_id, len(employee_ids))
        return await self.get(document_id)

    async def update(self, document_id: str, data: DocumentUpdate) -> Record:
        changes = changes_from(data, required=_REQUIRED)
        async with self._guard.hold("documents", document_id):
            await self._require(document_id)
            await self._data.update("documents", document_id, changes)
        return await self.get(document_id)

    async def assign(self, document_id: str, data: DocumentAssign) -> Record:
        """Replace the document's assignments; the old set is restored if the insert fails."""
        async with self._guard.hold("documents", document_id):
            await self._require(document_id)
            previous = await self._data.select_in("document_assignments", "document_id", [document_id])

            async with compensating(f"Assign document {document_id}") as undo:
                await self._data.delete_where("document_assignments", "document_id", [document_id])
                if previous:
                    undo.add(
                        "restore previous assignments",
                        lambda: self._data.insert_many("document_assignments", previous),
                    )
                employee_ids = list(dict.fromkeys(data.employee_ids))
                if employee_ids:
                    await self._data.insert_many(
                        "document_assignments",
                        [
                            {
                                "document_id": document_id,
                                "employee_id": employee_id,
                                "can_view": data.can_view,
                                "can_download": data.can_download,
                            }
                            for employee_id in employee_ids
                        ],
                    )
        return await self.get(document_id)

    async def delete(self, document_id: str) -> bool:
        """Delete assignments and the row; the stored file is removed best-effort."""
        async with self._guard.hold("documents", document_id):
            row = await self._require(document_id)
            await self._data.delete_where("document_assignments", "document_id", [document_id])
            deleted = await self._data.delete("documents", document_id)

        path = row.get("file_path")
        if path:
            try:
                await self._storage.delete(path)
            except DataServiceError as exc:
                logger.warning("Document %s deleted but its file %s was not: %s", document_id, path, exc)
        return deleted

    async def download(self, document_id: str) -> tuple[Record, bytes]:
        row = await self._require(document_id)
        content = await self._storage.download(row["file_path"])
        return row, content
