"""List profiles — the per-domain configuration of the shared list pipeline.

Each list screen (documents, tasks, tickets, subscriptions, employees) runs
the same filter -> sort -> paginate pipeline. A :class:`ListProfile` names
the table it loads, which fields the search box looks at, the categorical
dimensions and their enumerations, the time-bucket reference field, how
each sortable field compares, the column model, and the relations the
entity store resolves before a load is considered complete.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from opsdesk.domain.billing import annual_cost
from opsdesk.domain.entities import (
    DocumentCategory,
    DocumentStatus,
    EmployeeStatus,
    Record,
    SortDirection,
    SortSpec,
    SubscriptionCategory,
    SubscriptionStatus,
    TaskPriority,
    TaskStatus,
    TicketPriority,
    TicketStatus,
    TimeBucket,
    enum_values,
)
from opsdesk.domain.exceptions import ValidationError

TIME_DIMENSION = "time"
ASSIGNEE_DIMENSION = "assignee"


class FieldKind(str, Enum):
    """How a sortable field is compared."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    RELATION = "relation"


@dataclass(frozen=True)
class Dimension:
    """A categorical filter facet. Empty ``values`` means free-form (e.g. team ids).

    With ``member_key`` the field holds a list of related rows (e.g. a
    document's assignments) and the record matches when any row's
    ``member_key`` is accepted.
    """

    name: str
    field: str
    values: tuple[str, ...] = ()
    member_key: str | None = None


@dataclass(frozen=True)
class LookupRelation:
    """Many-to-one reference resolved by id, e.g. a task's assignee name."""

    name: str
    source_field: str
    table: str
    fields: dict[str, str]
    key_column: str = "id"


@dataclass(frozen=True)
class JoinRelation:
    """One-to-many rows of a join table, optionally resolved to employee names."""

    name: str
    join_table: str
    parent_column: str
    target_field: str
    columns: tuple[str, ...] = ()
    member_column: str | None = None
    member_table: str = "employees"
    member_fields: dict[str, str] = field(default_factory=dict)
    first_only: bool = False


Relation = LookupRelation | JoinRelation


@dataclass(frozen=True)
class ListProfile:
    name: str
    table: str
    entity_label: str
    search_fields: tuple[str, ...]
    dimensions: tuple[Dimension, ...]
    columns: dict[str, tuple[str, ...]]
    sort_fields: dict[str, FieldKind]
    default_sort: SortSpec
    order_field: str = "created_at"
    order_descending: bool = True
    time_field: str | None = None
    time_buckets: tuple[str, ...] = ()
    status_field: str = "status"
    terminal_statuses: frozenset[str] = frozenset()
    relation_sort_fields: dict[str, str] = field(default_factory=dict)
    kanban_field: str | None = "status"
    relations: tuple[Relation, ...] = ()
    derive: Callable[[Record], Record] | None = None

    def dimension(self, name: str) -> Dimension | None:
        for dimension in self.dimensions:
            if dimension.name == name:
                return dimension
        return None

    def field_kind(self, field_name: str) -> FieldKind:
        return self.sort_fields.get(field_name, FieldKind.TEXT)

    @property
    def column_keys(self) -> tuple[str, ...]:
        return tuple(self.columns)

    @property
    def filter_dimensions(self) -> tuple[str, ...]:
        names = tuple(d.name for d in self.dimensions)
        if self.time_field:
            names += (TIME_DIMENSION,)
        return names

    @property
    def kanban_columns(self) -> tuple[str, ...]:
        if self.kanban_field is None:
            return ()
        dimension = self.dimension(self.kanban_field)
        return dimension.values if dimension else ()


_EMPLOYEE_NAME = {"full_name": "employee_name", "profile_photo": "employee_photo"}


DOCUMENTS = ListProfile(
    name="documents",
    table="documents",
    entity_label="Document",
    search_fields=("title", "description"),
    dimensions=(
        Dimension("category", "category", enum_values(DocumentCategory)),
        Dimension("status", "status", enum_values(DocumentStatus)),
        Dimension(ASSIGNEE_DIMENSION, "assignments", member_key="employee_id"),
    ),
    columns={
        "document": ("title", "description", "file_name"),
        "category": ("category",),
        "file_info": ("file_type", "file_size", "file_url"),
        "assigned_to": ("assignments",),
        "status": ("status",),
        "created": ("created_at", "creator_name"),
    },
    sort_fields={
        "title": FieldKind.TEXT,
        "category": FieldKind.TEXT,
        "status": FieldKind.TEXT,
        "file_size": FieldKind.NUMBER,
        "created_by": FieldKind.RELATION,
        "created_at": FieldKind.DATE,
    },
    default_sort=SortSpec("created_at", SortDirection.DESC),
    relation_sort_fields={"created_by": "creator_name"},
    relations=(
        LookupRelation("creator", "created_by", "employees", {"full_name": "creator_name"}),
        JoinRelation(
            "assignments",
            join_table="document_assignments",
            parent_column="document_id",
            target_field="assignments",
            columns=("employee_id", "can_view", "can_download"),
            member_column="employee_id",
            member_fields=_EMPLOYEE_NAME,
        ),
    ),
)

TASKS = ListProfile(
    name="tasks",
    table="tasks",
    entity_label="Task",
    search_fields=("title", "description"),
    dimensions=(
        Dimension("status", "status", enum_values(TaskStatus)),
        Dimension("priority", "priority", enum_values(TaskPriority)),
        Dimension(ASSIGNEE_DIMENSION, "assignee"),
    ),
    columns={
        "task": ("title", "description", "attachments"),
        "assignee": ("assignee", "assignee_name", "assignee_photo"),
        "status": ("status",),
        "priority": ("priority",),
        "due_date": ("due_date",),
    },
    sort_fields={
        "title": FieldKind.TEXT,
        "assignee": FieldKind.RELATION,
        "status": FieldKind.TEXT,
        "priority": FieldKind.TEXT,
        "due_date": FieldKind.DATE,
        "created_at": FieldKind.DATE,
    },
    default_sort=SortSpec("created_at", SortDirection.DESC),
    time_field="due_date",
    time_buckets=tuple(b.value for b in TimeBucket),
    terminal_statuses=frozenset({TaskStatus.COMPLETED.value}),
    relation_sort_fields={"assignee": "assignee_name"},
    relations=(
        LookupRelation(
            "assignee",
            "assignee",
            "employees",
            {"full_name": "assignee_name", "profile_photo": "assignee_photo"},
        ),
    ),
)

TICKETS = ListProfile(
    name="tickets",
    table="tickets",
    entity_label="Ticket",
    search_fields=("client_name", "company", "issue"),
    dimensions=(
        Dimension("status", "status", enum_values(TicketStatus)),
        Dimension("priority", "priority", enum_values(TicketPriority)),
        Dimension(ASSIGNEE_DIMENSION, "assignees", member_key="employee_id"),
    ),
    columns={
        "ticket_number": ("ticket_number",),
        "company": ("company",),
        "client": ("client_name", "client_email"),
        "issue": ("issue",),
        "status": ("status",),
        "priority": ("priority",),
        "assigned_to": ("assigned_to", "assignees"),
        "created": ("created_at",),
    },
    sort_fields={
        "ticket_number": FieldKind.NUMBER,
        "company": FieldKind.TEXT,
        "client_name": FieldKind.TEXT,
        "issue": FieldKind.TEXT,
        "status": FieldKind.TEXT,
        "priority": FieldKind.TEXT,
        "assigned_to": FieldKind.TEXT,
        "created_at": FieldKind.DATE,
    },
    default_sort=SortSpec("created_at", SortDirection.DESC),
    time_field="created_at",
    time_buckets=(TimeBucket.TODAY.value, TimeBucket.WEEK.value, TimeBucket.MONTH.value),
    relations=(
        JoinRelation(
            "assignees",
            join_table="ticket_assignments",
            parent_column="ticket_id",
            target_field="assignees",
            columns=("employee_id", "assigned_at", "assigned_by"),
            member_column="employee_id",
            member_fields=_EMPLOYEE_NAME,
        ),
    ),
)


def _subscription_costs(record: Record) -> Record:
    return {"annual_cost": annual_cost(record)}


SUBSCRIPTIONS = ListProfile(
    name="subscriptions",
    table="subscriptions",
    entity_label="Subscription",
    search_fields=("subscription_name", "vendor_name"),
    dimensions=(
        Dimension("status", "status", enum_values(SubscriptionStatus)),
        Dimension("category", "category", enum_values(SubscriptionCategory)),
    ),
    columns={
        "subscription": ("subscription_name", "vendor_name", "portal_url"),
        "plan": ("plan_tier", "billing_cycle"),
        "cost": ("cost_per_period", "cost_per_user"),
        "users": ("number_of_users", "users"),
        "annual_cost": ("annual_cost",),
        "status": ("status",),
        "renewal": ("expiry_date", "auto_renewal_status"),
    },
    sort_fields={
        "subscription_name": FieldKind.TEXT,
        "plan_tier": FieldKind.TEXT,
        "status": FieldKind.TEXT,
        "category": FieldKind.TEXT,
        "cost_per_user": FieldKind.NUMBER,
        "cost_per_period": FieldKind.NUMBER,
        "number_of_users": FieldKind.NUMBER,
        "annual_cost": FieldKind.NUMBER,
        "expiry_date": FieldKind.DATE,
        "created_at": FieldKind.DATE,
    },
    default_sort=SortSpec("created_at", SortDirection.DESC),
    relations=(
        LookupRelation("vendor", "vendor_id", "employees", {"full_name": "vendor_name"}),
        LookupRelation(
            "owner",
            "owner_id",
            "employees",
            {"full_name": "owner_name", "official_email": "owner_email"},
        ),
        JoinRelation(
            "users",
            join_table="subscription_users",
            parent_column="subscription_id",
            target_field="users",
            columns=("user_id",),
            member_column="user_id",
            member_fields={"full_name": "full_name", "profile_photo": "profile_photo"},
        ),
        JoinRelation(
            "credentials",
            join_table="credentials",
            parent_column="subscription_id",
            target_field="credentials",
            columns=("email",),
            first_only=True,
        ),
    ),
    derive=_subscription_costs,
)

EMPLOYEES = ListProfile(
    name="employees",
    table="employees",
    entity_label="Employee",
    search_fields=("full_name", "official_email"),
    dimensions=(
        Dimension("status", "status", enum_values(EmployeeStatus)),
        Dimension("team", "team_id"),
    ),
    columns={
        "name": ("full_name", "profile_photo"),
        "email": ("official_email",),
        "job_title": ("job_title",),
        "team": ("team_id", "team_name"),
        "manager": ("reporting_manager_id", "manager_name"),
        "status": ("status",),
        "joined": ("date_of_joining",),
        "employment_type": ("employment_type",),
    },
    sort_fields={
        "full_name": FieldKind.TEXT,
        "job_title": FieldKind.TEXT,
        "team_id": FieldKind.RELATION,
        "employment_type": FieldKind.TEXT,
        "status": FieldKind.TEXT,
        "date_of_joining": FieldKind.DATE,
    },
    default_sort=SortSpec("full_name", SortDirection.ASC),
    order_field="full_name",
    order_descending=False,
    relation_sort_fields={"team_id": "team_name"},
    relations=(
        LookupRelation("team", "team_id", "teams", {"team_name": "team_name"}),
        LookupRelation(
            "manager", "reporting_manager_id", "employees", {"full_name": "manager_name"}
        ),
    ),
)

PROFILES: dict[str, ListProfile] = {
    profile.name: profile
    for profile in (DOCUMENTS, TASKS, TICKETS, SUBSCRIPTIONS, EMPLOYEES)
}


def get_profile(name: str) -> ListProfile:
    """Look up a list profile by domain name."""
    try:
        return PROFILES[name]
    except KeyError:
        raise ValidationError(f"Unknown list '{name}'", field="domain") from None
