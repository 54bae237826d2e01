"""Subscription endpoints — CRUD, seats and the spend/renewal summary."""

from datetime import datetime

from fastapi import APIRouter, Depends, status

from opsdesk.application.schemas import (
    KanbanBoardResponse,
    ListPageResponse,
    SubscriptionCreate,
    SubscriptionResponse,
    SubscriptionSummary,
    SubscriptionUpdate,
)
from opsdesk.application.services import SubscriptionService
from opsdesk.infrastructure.dependencies import get_now, get_subscription_service
from opsdesk.presentation.api.v1.endpoints.boards import to_board_response
from opsdesk.presentation.api.v1.params import ListParams

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.get("", response_model=ListPageResponse)
async def list_subscriptions(
    params: ListParams = Depends(),
    now: datetime = Depends(get_now),
    service: SubscriptionService = Depends(get_subscription_service),
) -> ListPageResponse:
    page, warnings = await service.list_page(params.query(service.profile), now, params.hidden)
    return ListPageResponse.from_page(page, warnings)


@router.get("/kanban", response_model=KanbanBoardResponse)
async def subscription_board(
    params: ListParams = Depends(),
    now: datetime = Depends(get_now),
    service: SubscriptionService = Depends(get_subscription_service),
) -> KanbanBoardResponse:
    columns, warnings = await service.kanban(params.query(service.profile), now)
    return to_board_response(columns, warnings)


@router.get("/summary", response_model=SubscriptionSummary)
async def subscription_summary(
    now: datetime = Depends(get_now),
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionSummary:
    """Active count, auto-renewals, upcoming renewals and annual spend per category."""
    return await service.summary(now)


@router.get("/{subscription_id}", response_model=SubscriptionResponse)
async def get_subscription(
    subscription_id: str,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    return SubscriptionResponse.model_validate(await service.get(subscription_id))


@router.post("", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED)
async def create_subscription(
    data: SubscriptionCreate,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    return SubscriptionResponse.model_validate(await service.create(data))


@router.put("/{subscription_id}", response_model=SubscriptionResponse)
async def update_subscription(
    subscription_id: str,
    data: SubscriptionUpdate,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    return SubscriptionResponse.model_validate(await service.update(subscription_id, data))


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subscription(
    subscription_id: str,
    service: SubscriptionService = Depends(get_subscription_service),
) -> None:
    await service.delete(subscription_id)
