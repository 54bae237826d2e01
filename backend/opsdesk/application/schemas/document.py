"""Pydantic DTOs for documents and their assignments."""

from datetime import datetime

from pydantic import BaseModel, Field

from opsdesk.domain.entities import DocumentCategory, DocumentStatus


class DocumentCreate(BaseModel):
    """Metadata for a new document; the file itself travels separately."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Travel policy 2025"])
    description: str | None = None
    category: DocumentCategory = DocumentCategory.GENERAL
    employee_ids: list[str] = Field(default_factory=list)
    created_by: str | None = Field(None, max_length=36)


class DocumentUpdate(BaseModel):
    """Schema for updating a document — all fields optional."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    category: DocumentCategory | None = None
    status: DocumentStatus | None = None


class DocumentAssign(BaseModel):
    """Replaces the full set of employees a document is assigned to."""

    employee_ids: list[str] = Field(default_factory=list)
    can_view: bool = True
    can_download: bool = True


class DocumentAssignmentResponse(BaseModel):
    employee_id: str
    employee_name: str | None = None
    employee_photo: str | None = None
    can_view: bool = True
    can_download: bool = True


class DocumentResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    title: str
    description: str | None = None
    category: str
    status: str
    file_name: str
    file_type: str | None = None
    file_size: int
    file_url: str
    created_by: str | None = None
    creator_name: str | None = None
    assignments: list[DocumentAssignmentResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
