"""Shared request parsing for list endpoints and multipart forms."""

from typing import Any, TypeVar

from fastapi import Query, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from opsdesk.application.listing import (
    ASSIGNEE_DIMENSION,
    TIME_DIMENSION,
    ListProfile,
    ListQuery,
    validate_filters,
    validate_page_size,
    validate_sort_field,
)
from opsdesk.application.schemas.files import FileUpload
from opsdesk.config import get_settings
from opsdesk.domain.entities import SortDirection, SortSpec

ModelT = TypeVar("ModelT", bound=BaseModel)


class ListParams:
    """Query parameters accepted by every ``GET`` list and kanban endpoint.

    Facet parameters repeat, e.g. ``?status=New&status=Escalated&time=today``.
    """

    def __init__(
        self,
        search: str | None = Query(None, description="Case-insensitive substring search"),
        status: list[str] = Query([], description="Accepted status values"),
        priority: list[str] = Query([], description="Accepted priority values"),
        category: list[str] = Query([], description="Accepted category values"),
        team: list[str] = Query([], description="Accepted team ids"),
        assignee: list[str] = Query([], description="Accepted assignee employee ids"),
        time: list[str] = Query([], description="Time buckets: today, week, month, overdue"),
        sort: str | None = Query(None, description="Sort field; defaults per list"),
        direction: SortDirection | None = Query(None),
        page: int = Query(0, description="Zero-based page index"),
        page_size: int | None = Query(None, description="One of 10, 20, 50, 100"),
        hidden: list[str] = Query([], description="Column keys to hide"),
    ):
        self.search = search
        self.facets = {
            "status": status,
            "priority": priority,
            "category": category,
            "team": team,
            ASSIGNEE_DIMENSION: assignee,
            TIME_DIMENSION: time,
        }
        self.sort = sort
        self.direction = direction
        self.page = page
        self.page_size = page_size
        self.hidden = hidden

    def query(self, profile: ListProfile) -> ListQuery:
        """Validate the parameters against ``profile`` and build the pipeline query."""
        sort = None
        if self.sort:
            validate_sort_field(self.sort, profile)
            sort = SortSpec(self.sort, self.direction or SortDirection.ASC)
        elif self.direction is not None:
            sort = SortSpec(profile.default_sort.field, self.direction)

        return ListQuery(
            search_term=self.search or "",
            filters=validate_filters(self.facets, profile),
            sort=sort,
            page_index=self.page,
            page_size=validate_page_size(self.page_size or get_settings().default_page_size),
        )


def parse_form(model: type[ModelT], **fields: Any) -> ModelT:
    """Build a schema from multipart form fields, reporting errors like a JSON body would."""
    try:
        return model.model_validate({k: v for k, v in fields.items() if v is not None})
    except PydanticValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


async def read_uploads(files: list[UploadFile] | None) -> list[FileUpload]:
    uploads = []
    for file in files or []:
        content = await file.read()
        uploads.append(
            FileUpload(filename=file.filename or "", content=content, content_type=file.content_type)
        )
    return uploads
