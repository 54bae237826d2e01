"""The list pipeline: filter -> sort -> paginate, with the column projection on top."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime

from opsdesk.domain.entities import KanbanColumn, ListPage, Record, SortSpec
from opsdesk.domain.exceptions import ValidationError

from .columns import ColumnVisibility, project
from .filtering import active_filters, filter_records
from .kanban import group_by_column
from .pagination import DEFAULT_PAGE_SIZE, paginate
from .profiles import TIME_DIMENSION, ListProfile
from .sorting import sort_records


@dataclass(frozen=True)
class ListQuery:
    """Everything that shapes one rendered page, independent of where records come from."""

    search_term: str = ""
    filters: Mapping[str, frozenset[str]] = field(default_factory=dict)
    sort: SortSpec | None = None
    page_index: int = 0
    page_size: int = DEFAULT_PAGE_SIZE


def validate_filters(
    filters: Mapping[str, Iterable[str]], profile: ListProfile
) -> dict[str, frozenset[str]]:
    """Check facet names and values against the profile; returns the non-empty facets."""
    cleaned = active_filters({name: frozenset(values) for name, values in filters.items()})
    for name, values in cleaned.items():
        if name == TIME_DIMENSION:
            if profile.time_field is None:
                raise ValidationError(f"{profile.entity_label} lists have no time filter", field=name)
            unknown = values - set(profile.time_buckets)
        else:
            dimension = profile.dimension(name)
            if dimension is None:
                raise ValidationError(
                    f"{profile.entity_label} lists cannot be filtered by '{name}'", field=name
                )
            if not dimension.values:
                continue
            unknown = values - set(dimension.values) - {"Other"}
        if unknown:
            raise ValidationError(
                f"Unsupported {name} value(s): {', '.join(sorted(unknown))}", field=name
            )
    return cleaned


def validate_sort_field(field_name: str, profile: ListProfile) -> str:
    if field_name not in profile.sort_fields:
        raise ValidationError(
            f"{profile.entity_label} lists cannot be sorted by '{field_name}'", field="sort"
        )
    return field_name


def shape(
    records: Iterable[Record], query: ListQuery, profile: ListProfile, now: datetime
) -> list[Record]:
    """Filter then sort; the result is a fresh list and ``records`` is left untouched."""
    sort = query.sort or profile.default_sort
    filtered = filter_records(records, query.search_term, query.filters, profile, now)
    return sort_records(filtered, sort.field, sort.direction, profile)


def run_pipeline(
    records: Iterable[Record],
    query: ListQuery,
    profile: ListProfile,
    now: datetime,
    columns: ColumnVisibility | None = None,
) -> ListPage:
    """Produce one page of shaped records and its projected rows."""
    visibility = columns or ColumnVisibility.all_visible(profile.column_keys)
    page = paginate(shape(records, query, profile, now), query.page_index, query.page_size)
    return ListPage(
        page=page,
        rows=project(page.items, visibility, profile),
        columns=visibility.to_dict(),
    )


def board(
    records: Iterable[Record], query: ListQuery, profile: ListProfile, now: datetime
) -> list[KanbanColumn]:
    """Kanban view of the shaped (unpaginated) records."""
    return group_by_column(shape(records, query, profile, now), profile)
