"""Domain records — entity rows as plain mappings plus their enumerations.

Every list screen works on rows fetched from the data service. A row is a
``dict[str, Any]`` keyed by column name, with a stable string ``id``.
Categorical columns draw from the enumerations below; any value outside its
enumeration is read as :data:`OTHER_CATEGORY` instead of failing.
"""

from collections.abc import Iterable
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

Record = dict[str, Any]

OTHER_CATEGORY = "Other"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TicketStatus(str, Enum):
    NEW = "New"
    IN_PROGRESS = "In Progress"
    ESCALATED = "Escalated"
    RESOLVED = "Resolved"


class TicketPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class DocumentStatus(str, Enum):
    ACTIVE = "Active"
    ARCHIVED = "Archived"
    DELETED = "Deleted"


class DocumentCategory(str, Enum):
    GENERAL = "General"
    HR = "HR"
    FINANCE = "Finance"
    MARKETING = "Marketing"
    SALES = "Sales"
    TECHNICAL = "Technical"
    LEGAL = "Legal"
    OTHER = "Other"


class SubscriptionStatus(str, Enum):
    ACTIVE = "Active"
    PAUSED = "Paused"
    INACTIVE = "Inactive"
    CANCELLED = "Cancelled"


class SubscriptionCategory(str, Enum):
    SAAS = "SaaS"
    MARKETING = "Marketing"
    CLOUD = "Cloud"
    PRODUCTIVITY = "Productivity"
    SECURITY = "Security"
    FINANCE = "Finance"
    COMMUNICATION = "Communication"
    OTHER = "Other"
    JOB_PORTAL = "Job Portal"


class BillingCycle(str, Enum):
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    YEARLY = "Yearly"
    BI_ANNUAL = "Bi-Annual"
    ONE_TIME = "One-Time"


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    ONBOARDING = "Onboarding"
    RESIGNED = "Resigned"


def enum_values(enum_cls: type[Enum]) -> tuple[str, ...]:
    """Return the string values of an enumeration in declaration order."""
    return tuple(member.value for member in enum_cls)


def normalize_category(value: Any, allowed: Iterable[str]) -> str:
    """Map a categorical value onto its enumeration, unknowns become ``Other``."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str) and value in allowed:
        return value
    return OTHER_CATEGORY


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 string, ``date`` or ``datetime`` into an aware datetime.

    Naive values are taken as UTC. Returns ``None`` for missing or
    unparseable input — callers decide how to rank those.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def timestamp_millis(value: Any) -> float:
    """Epoch milliseconds for sorting; missing or unparseable values are 0."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return 0.0
    return parsed.timestamp() * 1000
