"""Pydantic DTOs for support tickets."""

from datetime import datetime

from pydantic import BaseModel, Field

from opsdesk.domain.entities import TicketPriority, TicketStatus


class TicketCreate(BaseModel):
    """Schema for opening a ticket; status, number and queue are assigned by the service."""

    client_name: str = Field(..., min_length=1, max_length=200, examples=["Dana Whitfield"])
    client_email: str | None = Field(None, max_length=255)
    company: str | None = Field(None, max_length=200, examples=["Acme Logistics"])
    issue: str = Field(..., min_length=1, examples=["Cannot log in to the portal"])
    priority: TicketPriority = TicketPriority.MEDIUM


class TicketStatusUpdate(BaseModel):
    status: TicketStatus


class ChatMessageCreate(BaseModel):
    message: str = Field(..., min_length=1)


class TicketAssign(BaseModel):
    """Replaces the ticket's assignees."""

    employee_ids: list[str] = Field(default_factory=list)


class TicketShare(BaseModel):
    """Adds assignees without removing existing ones."""

    employee_ids: list[str] = Field(..., min_length=1)


class TicketAssigneeResponse(BaseModel):
    employee_id: str
    employee_name: str | None = None
    employee_photo: str | None = None
    assigned_by: str | None = None
    assigned_at: datetime | None = None


class TicketResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    ticket_number: int
    client_name: str
    client_email: str | None = None
    company: str | None = None
    issue: str
    status: str
    priority: str
    assigned_to: str | None = None
    assignees: list[TicketAssigneeResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TicketHistoryResponse(BaseModel):
    id: str
    user_name: str
    action: str
    created_at: datetime


class TicketChatResponse(BaseModel):
    id: str
    user_name: str
    message: str
    sender_type: str
    created_at: datetime


class TicketDetailsResponse(BaseModel):
    ticket: TicketResponse
    history: list[TicketHistoryResponse]
    chat: list[TicketChatResponse]


class TicketStats(BaseModel):
    total: int
    new: int
    in_progress: int
    escalated: int
    resolved: int
