"""Pydantic DTOs for list pages, kanban boards and server-held list views."""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from opsdesk.application.listing.view_state import Overlay
from opsdesk.domain.entities import ListPage, LoadWarning, PageNavigation, SortDirection


class LoadWarningSchema(BaseModel):
    relation: str
    message: str


class ListPageResponse(BaseModel):
    """One rendered page of a list screen."""

    items: list[dict[str, Any]]
    total_count: int
    total_pages: int
    page_index: int
    page_size: int
    has_next: bool
    has_previous: bool
    columns: dict[str, bool]
    warnings: list[LoadWarningSchema] = Field(default_factory=list)

    @classmethod
    def from_page(
        cls, list_page: ListPage, warnings: list[LoadWarning] | tuple[LoadWarning, ...] = ()
    ) -> "ListPageResponse":
        page = list_page.page
        return cls(
            items=list_page.rows,
            total_count=page.total_count,
            total_pages=page.total_pages,
            page_index=page.page_index,
            page_size=page.page_size,
            has_next=page.has_next,
            has_previous=page.has_previous,
            columns=list_page.columns,
            warnings=[LoadWarningSchema(relation=w.relation, message=w.message) for w in warnings],
        )


class KanbanColumnResponse(BaseModel):
    key: str
    count: int
    items: list[dict[str, Any]]


class KanbanBoardResponse(BaseModel):
    columns: list[KanbanColumnResponse]
    warnings: list[LoadWarningSchema] = Field(default_factory=list)


# ── View sessions ────────────────────────────────────────────────────


class ViewCreateRequest(BaseModel):
    page_size: int | None = None
    columns: dict[str, bool] | None = None


class SearchAction(BaseModel):
    type: Literal["search"]
    term: str = ""


class FilterAction(BaseModel):
    type: Literal["filter"]
    dimension: str
    values: list[str] = Field(default_factory=list)


class ClearFiltersAction(BaseModel):
    type: Literal["clear_filters"]


class SortAction(BaseModel):
    type: Literal["sort"]
    field: str
    direction: SortDirection | None = None


class PageAction(BaseModel):
    type: Literal["page"]
    page_index: int = Field(..., ge=0)


class NavigateAction(BaseModel):
    type: Literal["navigate"]
    navigation: PageNavigation


class PageSizeAction(BaseModel):
    type: Literal["page_size"]
    page_size: int


class ToggleColumnAction(BaseModel):
    type: Literal["toggle_column"]
    key: str
    visible: bool | None = None


class ResetColumnsAction(BaseModel):
    type: Literal["reset_columns"]


class OpenOverlayAction(BaseModel):
    type: Literal["open_overlay"]
    overlay: Overlay
    record_id: str | None = None


class CloseOverlayAction(BaseModel):
    type: Literal["close_overlay"]


ViewActionRequest = Annotated[
    SearchAction
    | FilterAction
    | ClearFiltersAction
    | SortAction
    | PageAction
    | NavigateAction
    | PageSizeAction
    | ToggleColumnAction
    | ResetColumnsAction
    | OpenOverlayAction
    | CloseOverlayAction,
    Field(discriminator="type"),
]


class MoveRequest(BaseModel):
    """Kanban move: set ``record_id``'s board field to ``status``."""

    record_id: str
    status: str


class NotificationSchema(BaseModel):
    level: str
    message: str
    created_at: datetime


class ViewSnapshotResponse(BaseModel):
    view_id: str
    state: dict[str, Any]
    page: ListPageResponse
    notifications: list[NotificationSchema] = Field(default_factory=list)
