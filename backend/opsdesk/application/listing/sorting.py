"""Comparator/sort — stable, type-aware ordering of list records."""

import math
from collections.abc import Callable, Iterable
from typing import Any

from opsdesk.domain.entities import Record, SortDirection, SortSpec, timestamp_millis

from .profiles import FieldKind, ListProfile

SortKey = Callable[[Record], Any]


def _number(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).lower()


def sort_key(field_name: str, profile: ListProfile) -> SortKey:
    """Build the key function for ``field_name`` according to its declared kind."""
    kind = profile.field_kind(field_name)

    if kind is FieldKind.DATE:
        return lambda record: timestamp_millis(record.get(field_name))
    if kind is FieldKind.NUMBER:
        return lambda record: _number(record.get(field_name))
    if kind is FieldKind.RELATION:
        display_field = profile.relation_sort_fields.get(field_name, field_name)
        return lambda record: _text(record.get(display_field))
    return lambda record: _text(record.get(field_name))


def sort_records(
    records: Iterable[Record],
    field_name: str,
    direction: SortDirection | str,
    profile: ListProfile,
) -> list[Record]:
    """Return a new list ordered by ``field_name``; equal keys keep their input order.

    ``sorted`` is stable in both directions (``reverse`` preserves the
    relative order of equal elements), so re-sorting is idempotent.
    """
    descending = SortDirection(direction) is SortDirection.DESC
    return sorted(records, key=sort_key(field_name, profile), reverse=descending)


def next_sort(current: SortSpec, clicked_field: str) -> SortSpec:
    """Header-click behaviour: same field flips direction, a new field sorts ascending."""
    if current.field == clicked_field:
        flipped = (
            SortDirection.DESC if current.direction is SortDirection.ASC else SortDirection.ASC
        )
        return SortSpec(clicked_field, flipped)
    return SortSpec(clicked_field, SortDirection.ASC)
