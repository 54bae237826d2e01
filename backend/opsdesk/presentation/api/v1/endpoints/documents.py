"""Document library endpoints — multipart upload, metadata, assignment and download."""

from datetime import datetime
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from opsdesk.application.schemas import (
    DocumentAssign,
    DocumentCreate,
    DocumentResponse,
    DocumentUpdate,
    KanbanBoardResponse,
    ListPageResponse,
)
from opsdesk.application.services import DocumentService
from opsdesk.infrastructure.dependencies import get_document_service, get_now
from opsdesk.presentation.api.v1.endpoints.boards import to_board_response
from opsdesk.presentation.api.v1.params import ListParams, parse_form, read_uploads

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.get("", response_model=ListPageResponse)
async def list_documents(
    params: ListParams = Depends(),
    now: datetime = Depends(get_now),
    service: DocumentService = Depends(get_document_service),
) -> ListPageResponse:
    page, warnings = await service.list_page(params.query(service.profile), now, params.hidden)
    return ListPageResponse.from_page(page, warnings)


@router.get("/kanban", response_model=KanbanBoardResponse)
async def document_board(
    params: ListParams = Depends(),
    now: datetime = Depends(get_now),
    service: DocumentService = Depends(get_document_service),
) -> KanbanBoardResponse:
    columns, warnings = await service.kanban(params.query(service.profile), now)
    return to_board_response(columns, warnings)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    return DocumentResponse.model_validate(await service.get(document_id))


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    file: UploadFile = File(...),
    title: str = Form(...),
    description: str | None = Form(None),
    category: str | None = Form(None),
    employee_ids: list[str] = Form([]),
    created_by: str | None = Form(None),
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Upload a document file with its metadata and initial assignees."""
    data = parse_form(
        DocumentCreate,
        title=title,
        description=description,
        category=category,
        employee_ids=employee_ids,
        created_by=created_by,
    )
    uploads = await read_uploads([file])
    return DocumentResponse.model_validate(await service.create(data, uploads[0]))


@router.put("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: str,
    data: DocumentUpdate,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    return DocumentResponse.model_validate(await service.update(document_id, data))


@router.put("/{document_id}/assignments", response_model=DocumentResponse)
async def assign_document(
    document_id: str,
    data: DocumentAssign,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Replace the set of employees the document is assigned to."""
    return DocumentResponse.model_validate(await service.assign(document_id, data))


@router.get("/{document_id}/download")
async def download_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
) -> Response:
    row, content = await service.download(document_id)
    filename = quote(row.get("file_name") or "document")
    return Response(
        content=content,
        media_type=row.get("file_type") or "application/octet-stream",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{filename}"},
    )


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
) -> None:
    await service.delete(document_id)
