"""Response helpers shared by the kanban endpoints."""

from opsdesk.application.schemas.listing import (
    KanbanBoardResponse,
    KanbanColumnResponse,
    LoadWarningSchema,
)
from opsdesk.domain.entities import KanbanColumn, LoadWarning


def to_board_response(
    columns: list[KanbanColumn], warnings: list[LoadWarning]
) -> KanbanBoardResponse:
    return KanbanBoardResponse(
        columns=[
            KanbanColumnResponse(key=c.key, count=c.count, items=c.records) for c in columns
        ],
        warnings=[LoadWarningSchema(relation=w.relation, message=w.message) for w in warnings],
    )
