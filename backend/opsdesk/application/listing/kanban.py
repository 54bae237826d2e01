"""Kanban grouping — buckets shaped records by their board field."""

from collections.abc import Iterable

from opsdesk.domain.entities import OTHER_CATEGORY, KanbanColumn, Record

from .filtering import categorical_value
from .profiles import ListProfile


def group_by_column(records: Iterable[Record], profile: ListProfile) -> list[KanbanColumn]:
    """Group records into the profile's kanban columns, preserving record order.

    Values outside the board enumeration land in a trailing ``Other`` column,
    which is only present when it has cards.
    """
    if profile.kanban_field is None:
        return []
    dimension = profile.dimension(profile.kanban_field)
    if dimension is None:
        return []

    columns = {key: KanbanColumn(key) for key in profile.kanban_columns}
    overflow = KanbanColumn(OTHER_CATEGORY)

    for record in records:
        value = categorical_value(record, dimension)
        columns.get(value, overflow).records.append(record)

    board = list(columns.values())
    if overflow.records and OTHER_CATEGORY not in columns:
        board.append(overflow)
    return board
