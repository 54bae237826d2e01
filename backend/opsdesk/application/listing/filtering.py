"""Predicate filter — free-text search AND categorical facets AND time buckets.

Facet semantics:
    * an empty accepted-set places no constraint on its dimension;
    * values within one dimension combine with OR;
    * dimensions (and the search term) combine with AND.

Time buckets are evaluated against the profile's reference timestamp,
relative to ``now``. Selected buckets always combine with OR.
"""

from collections.abc import Collection, Iterable, Mapping
from datetime import date, datetime, timedelta
from typing import Any

from opsdesk.domain.entities import (
    OTHER_CATEGORY,
    Record,
    TimeBucket,
    normalize_category,
    parse_timestamp,
)

from .profiles import TIME_DIMENSION, Dimension, ListProfile

CategoricalFilters = Mapping[str, Collection[str]]


def matches_search(record: Record, search_term: str | None, fields: Iterable[str]) -> bool:
    """Case-insensitive substring match against any of ``fields``; blank matches all."""
    term = (search_term or "").strip().lower()
    if not term:
        return True
    for name in fields:
        value = record.get(name)
        if value is None:
            continue
        if term in str(value).lower():
            return True
    return False


def categorical_value(record: Record, dimension: Dimension) -> str:
    """The record's value on a dimension, with out-of-enumeration values as ``Other``."""
    value = record.get(dimension.field)
    if dimension.values:
        return normalize_category(value, dimension.values)
    if value is None or value == "":
        return OTHER_CATEGORY
    return str(value)


def member_values(record: Record, dimension: Dimension) -> set[str]:
    """Ids on a list-valued dimension; a record without related rows counts as ``Other``."""
    members = record.get(dimension.field) or []
    values = {
        str(member[dimension.member_key])
        for member in members
        if isinstance(member, Mapping) and member.get(dimension.member_key)
    }
    return values or {OTHER_CATEGORY}


def _week_start(day: date) -> date:
    # Weeks start on Sunday; weekday() is Monday=0 .. Sunday=6.
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _is_date_only(value: Any) -> bool:
    if isinstance(value, datetime):
        return False
    if isinstance(value, date):
        return True
    return isinstance(value, str) and len(value.strip()) == 10


def in_time_bucket(
    record: Record, bucket: str, profile: ListProfile, now: datetime
) -> bool:
    """Whether the record's reference timestamp falls into ``bucket`` at ``now``."""
    if profile.time_field is None:
        return False
    raw = record.get(profile.time_field)
    moment = parse_timestamp(raw)
    if moment is None:
        return False

    if _is_date_only(raw):
        # A bare calendar date means that day in the display timezone.
        moment = moment.replace(tzinfo=now.tzinfo)
    elif now.tzinfo is not None:
        moment = moment.astimezone(now.tzinfo)
    else:
        moment = moment.replace(tzinfo=None)
    day, today = moment.date(), now.date()

    if bucket == TimeBucket.TODAY.value:
        return day == today
    if bucket == TimeBucket.WEEK.value:
        return _week_start(day) == _week_start(today)
    if bucket == TimeBucket.MONTH.value:
        return (day.year, day.month) == (today.year, today.month)
    if bucket == TimeBucket.OVERDUE.value:
        status = record.get(profile.status_field)
        return moment < now and status not in profile.terminal_statuses
    return False


def _matches_dimensions(
    record: Record,
    filters: CategoricalFilters,
    profile: ListProfile,
    now: datetime,
) -> bool:
    for name, accepted in filters.items():
        if not accepted:
            continue
        if name == TIME_DIMENSION:
            if not any(in_time_bucket(record, bucket, profile, now) for bucket in accepted):
                return False
            continue
        dimension = profile.dimension(name)
        if dimension is None:
            # Unknown facet: nothing can satisfy it.
            return False
        if dimension.member_key:
            if member_values(record, dimension).isdisjoint(accepted):
                return False
        elif categorical_value(record, dimension) not in accepted:
            return False
    return True


def filter_records(
    records: Iterable[Record],
    search_term: str | None,
    categorical_filters: CategoricalFilters,
    profile: ListProfile,
    now: datetime,
) -> list[Record]:
    """Return the records passing the search AND every non-empty facet, in input order."""
    return [
        record
        for record in records
        if matches_search(record, search_term, profile.search_fields)
        and _matches_dimensions(record, categorical_filters, profile, now)
    ]


def active_filters(filters: Mapping[str, Any]) -> dict[str, frozenset[str]]:
    """Drop empty dimensions and freeze the accepted sets."""
    return {name: frozenset(values) for name, values in filters.items() if values}
