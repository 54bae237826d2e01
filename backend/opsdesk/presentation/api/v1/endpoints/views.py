"""Server-held list views.

A view keeps one list screen's records, search, facets, sort, page cursor,
column flags and overlay between requests. Clients post actions and get
back a snapshot: the state, the rendered page and any notifications
raised since the last snapshot.
"""

from datetime import datetime

from fastapi import APIRouter, Body, Depends, status

from opsdesk.application.listing import get_profile
from opsdesk.application.listing.view_state import (
    Action,
    ColumnsReset,
    ColumnToggled,
    FilterChanged,
    FiltersCleared,
    OverlayClosed,
    OverlayOpened,
    PageRequested,
    PageSizeChanged,
    SearchChanged,
    SortRequested,
)
from opsdesk.application.schemas import (
    ListPageResponse,
    MoveRequest,
    ViewActionRequest,
    ViewCreateRequest,
    ViewSnapshotResponse,
)
from opsdesk.application.schemas.listing import (
    ClearFiltersAction,
    CloseOverlayAction,
    FilterAction,
    NavigateAction,
    NotificationSchema,
    OpenOverlayAction,
    PageAction,
    PageSizeAction,
    ResetColumnsAction,
    SearchAction,
    SortAction,
    ToggleColumnAction,
)
from opsdesk.application.services import ListingService, ListView, ViewRegistry
from opsdesk.config import get_settings
from opsdesk.infrastructure.dependencies import get_listing_services, get_now, get_view_registry
from opsdesk.infrastructure.notifications import NotificationFeed

router = APIRouter(prefix="/views", tags=["List views"])


def _to_action(request) -> Action:
    if isinstance(request, SearchAction):
        return SearchChanged(request.term)
    if isinstance(request, FilterAction):
        return FilterChanged(request.dimension, frozenset(request.values))
    if isinstance(request, ClearFiltersAction):
        return FiltersCleared()
    if isinstance(request, SortAction):
        return SortRequested(request.field, request.direction)
    if isinstance(request, PageAction):
        return PageRequested(request.page_index)
    if isinstance(request, PageSizeAction):
        return PageSizeChanged(request.page_size)
    if isinstance(request, ToggleColumnAction):
        return ColumnToggled(request.key, request.visible)
    if isinstance(request, ResetColumnsAction):
        return ColumnsReset()
    if isinstance(request, OpenOverlayAction):
        return OverlayOpened(request.overlay, request.record_id)
    if isinstance(request, CloseOverlayAction):
        return OverlayClosed()
    raise TypeError(f"Unhandled view action {type(request).__name__}")


def _snapshot(view: ListView, now: datetime) -> ViewSnapshotResponse:
    state = view.state
    notifications = []
    if isinstance(view.notifier, NotificationFeed):
        notifications = [
            NotificationSchema(level=n.level, message=n.message, created_at=n.created_at)
            for n in view.notifier.drain()
        ]
    return ViewSnapshotResponse(
        view_id=view.view_id,
        state=state.snapshot(),
        page=ListPageResponse.from_page(view.page(now), state.warnings),
        notifications=notifications,
    )


def _service_for(view: ListView, services: dict[str, ListingService]) -> ListingService:
    return services[view.profile.name]


@router.post("/{domain}", response_model=ViewSnapshotResponse, status_code=status.HTTP_201_CREATED)
async def open_view(
    domain: str,
    data: ViewCreateRequest | None = Body(None),
    now: datetime = Depends(get_now),
    registry: ViewRegistry = Depends(get_view_registry),
    services: dict[str, ListingService] = Depends(get_listing_services),
) -> ViewSnapshotResponse:
    """Open a view on one of the list screens and run its first load."""
    profile = get_profile(domain)
    data = data or ViewCreateRequest()
    view = registry.create(
        profile,
        page_size=data.page_size or get_settings().default_page_size,
        columns=data.columns,
    )
    await view.reload(services[profile.name].store)
    return _snapshot(view, now)


@router.get("/{view_id}", response_model=ViewSnapshotResponse)
async def get_view(
    view_id: str,
    now: datetime = Depends(get_now),
    registry: ViewRegistry = Depends(get_view_registry),
) -> ViewSnapshotResponse:
    return _snapshot(registry.get(view_id), now)


@router.post("/{view_id}/actions", response_model=ViewSnapshotResponse)
async def apply_action(
    view_id: str,
    request: ViewActionRequest,
    now: datetime = Depends(get_now),
    registry: ViewRegistry = Depends(get_view_registry),
) -> ViewSnapshotResponse:
    """Apply one search, facet, sort, paging, column or overlay action."""
    view = registry.get(view_id)
    if isinstance(request, NavigateAction):
        view.navigate(request.navigation, now)
    else:
        view.dispatch(_to_action(request))
    return _snapshot(view, now)


@router.post("/{view_id}/reload", response_model=ViewSnapshotResponse)
async def reload_view(
    view_id: str,
    now: datetime = Depends(get_now),
    registry: ViewRegistry = Depends(get_view_registry),
    services: dict[str, ListingService] = Depends(get_listing_services),
) -> ViewSnapshotResponse:
    view = registry.get(view_id)
    await view.reload(_service_for(view, services).store)
    return _snapshot(view, now)


@router.post("/{view_id}/move", response_model=ViewSnapshotResponse)
async def move_record(
    view_id: str,
    data: MoveRequest,
    now: datetime = Depends(get_now),
    registry: ViewRegistry = Depends(get_view_registry),
    services: dict[str, ListingService] = Depends(get_listing_services),
) -> ViewSnapshotResponse:
    """Kanban drag-and-drop. Failures are reported as notifications, not HTTP errors."""
    view = registry.get(view_id)
    service = _service_for(view, services)
    await view.perform_write(
        lambda: service.apply_move(data.record_id, data.status),
        f"{view.profile.entity_label} moved to {data.status}",
        service.store,
    )
    return _snapshot(view, now)


@router.delete("/{view_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_view(
    view_id: str,
    registry: ViewRegistry = Depends(get_view_registry),
) -> None:
    registry.get(view_id)
    registry.remove(view_id)
