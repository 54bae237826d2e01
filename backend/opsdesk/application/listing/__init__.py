from .columns import ColumnVisibility, project
from .filtering import filter_records, in_time_bucket, matches_search
from .kanban import group_by_column
from .pagination import (
    ALLOWED_PAGE_SIZES,
    DEFAULT_PAGE_SIZE,
    navigation_target,
    paginate,
    validate_page_size,
)
from .pipeline import (
    ListQuery,
    board,
    run_pipeline,
    shape,
    validate_filters,
    validate_sort_field,
)
from .profiles import (
    ASSIGNEE_DIMENSION,
    PROFILES,
    TIME_DIMENSION,
    Dimension,
    FieldKind,
    JoinRelation,
    ListProfile,
    LookupRelation,
    get_profile,
)
from .sorting import next_sort, sort_records
from .view_state import Overlay, ViewState, ViewStatus, initial_state, reduce, render

__all__ = [
    "ColumnVisibility",
    "project",
    "filter_records",
    "in_time_bucket",
    "matches_search",
    "group_by_column",
    "ALLOWED_PAGE_SIZES",
    "DEFAULT_PAGE_SIZE",
    "navigation_target",
    "paginate",
    "validate_page_size",
    "ListQuery",
    "board",
    "run_pipeline",
    "shape",
    "validate_filters",
    "validate_sort_field",
    "ASSIGNEE_DIMENSION",
    "PROFILES",
    "TIME_DIMENSION",
    "Dimension",
    "FieldKind",
    "JoinRelation",
    "ListProfile",
    "LookupRelation",
    "get_profile",
    "next_sort",
    "sort_records",
    "Overlay",
    "ViewState",
    "ViewStatus",
    "initial_state",
    "reduce",
    "render",
]
