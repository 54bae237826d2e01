"""Schemas for uploaded files and stored attachments."""

from pydantic import BaseModel, Field


class FileUpload(BaseModel):
    """An uploaded file as handed to a service, already read into memory."""

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)


class AttachmentSchema(BaseModel):
    """A stored attachment reference, as kept in a task's ``attachments`` list."""

    name: str
    path: str
    url: str
    size: int = Field(0, ge=0)
    content_type: str | None = None
