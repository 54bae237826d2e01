"""Support ticket endpoints — intake, workflow, chat and assignment."""

from datetime import datetime

from fastapi import APIRouter, Depends, status

from opsdesk.application.schemas import (
    ChatMessageCreate,
    KanbanBoardResponse,
    ListPageResponse,
    TicketAssign,
    TicketCreate,
    TicketDetailsResponse,
    TicketResponse,
    TicketShare,
    TicketStats,
    TicketStatusUpdate,
)
from opsdesk.application.schemas.ticket import TicketChatResponse, TicketHistoryResponse
from opsdesk.application.services import TicketService
from opsdesk.infrastructure.dependencies import get_now, get_ticket_service
from opsdesk.presentation.api.v1.endpoints.boards import to_board_response
from opsdesk.presentation.api.v1.params import ListParams

router = APIRouter(prefix="/tickets", tags=["Tickets"])


@router.get("", response_model=ListPageResponse)
async def list_tickets(
    params: ListParams = Depends(),
    now: datetime = Depends(get_now),
    service: TicketService = Depends(get_ticket_service),
) -> ListPageResponse:
    page, warnings = await service.list_page(params.query(service.profile), now, params.hidden)
    return ListPageResponse.from_page(page, warnings)


@router.get("/kanban", response_model=KanbanBoardResponse)
async def ticket_board(
    params: ListParams = Depends(),
    now: datetime = Depends(get_now),
    service: TicketService = Depends(get_ticket_service),
) -> KanbanBoardResponse:
    columns, warnings = await service.kanban(params.query(service.profile), now)
    return to_board_response(columns, warnings)


@router.get("/stats", response_model=TicketStats)
async def ticket_stats(service: TicketService = Depends(get_ticket_service)) -> TicketStats:
    return await service.stats()


@router.get("/{ticket_id}", response_model=TicketResponse)
async def get_ticket(
    ticket_id: str,
    service: TicketService = Depends(get_ticket_service),
) -> TicketResponse:
    return TicketResponse.model_validate(await service.get(ticket_id))


@router.get("/{ticket_id}/details", response_model=TicketDetailsResponse)
async def ticket_details(
    ticket_id: str,
    service: TicketService = Depends(get_ticket_service),
) -> TicketDetailsResponse:
    """The ticket with its full history and chat transcript."""
    ticket, history, chat = await service.details(ticket_id)
    return TicketDetailsResponse(
        ticket=TicketResponse.model_validate(ticket),
        history=[TicketHistoryResponse.model_validate(h) for h in history],
        chat=[TicketChatResponse.model_validate(c) for c in chat],
    )


@router.post("", response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    data: TicketCreate,
    service: TicketService = Depends(get_ticket_service),
) -> TicketResponse:
    return TicketResponse.model_validate(await service.create(data))


@router.patch("/{ticket_id}/status", response_model=TicketResponse)
async def update_ticket_status(
    ticket_id: str,
    data: TicketStatusUpdate,
    service: TicketService = Depends(get_ticket_service),
) -> TicketResponse:
    return TicketResponse.model_validate(await service.update_status(ticket_id, data.status))


@router.post(
    "/{ticket_id}/chat",
    response_model=TicketChatResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_chat_message(
    ticket_id: str,
    data: ChatMessageCreate,
    service: TicketService = Depends(get_ticket_service),
) -> TicketChatResponse:
    return TicketChatResponse.model_validate(await service.send_chat(ticket_id, data.message))


@router.put("/{ticket_id}/assignments", response_model=TicketResponse)
async def assign_ticket(
    ticket_id: str,
    data: TicketAssign,
    service: TicketService = Depends(get_ticket_service),
) -> TicketResponse:
    return TicketResponse.model_validate(await service.assign(ticket_id, data.employee_ids))


@router.post("/{ticket_id}/share", response_model=TicketResponse)
async def share_ticket(
    ticket_id: str,
    data: TicketShare,
    service: TicketService = Depends(get_ticket_service),
) -> TicketResponse:
    return TicketResponse.model_validate(await service.share(ticket_id, data.employee_ids))


@router.delete("/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ticket(
    ticket_id: str,
    service: TicketService = Depends(get_ticket_service),
) -> None:
    await service.delete(ticket_id)
