from .records import (
    OTHER_CATEGORY,
    BillingCycle,
    DocumentCategory,
    DocumentStatus,
    EmployeeStatus,
    Record,
    SubscriptionCategory,
    SubscriptionStatus,
    TaskPriority,
    TaskStatus,
    TicketPriority,
    TicketStatus,
    enum_values,
    normalize_category,
    parse_timestamp,
    timestamp_millis,
)
from .listing import (
    KanbanColumn,
    ListPage,
    LoadResult,
    LoadWarning,
    Page,
    PageNavigation,
    SortDirection,
    SortSpec,
    TimeBucket,
)

__all__ = [
    "OTHER_CATEGORY",
    "BillingCycle",
    "DocumentCategory",
    "DocumentStatus",
    "EmployeeStatus",
    "Record",
    "SubscriptionCategory",
    "SubscriptionStatus",
    "TaskPriority",
    "TaskStatus",
    "TicketPriority",
    "TicketStatus",
    "enum_values",
    "normalize_category",
    "parse_timestamp",
    "timestamp_millis",
    "KanbanColumn",
    "ListPage",
    "LoadResult",
    "LoadWarning",
    "Page",
    "PageNavigation",
    "SortDirection",
    "SortSpec",
    "TimeBucket",
]
