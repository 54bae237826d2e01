"""Column visibility model — a render-time projection independent of the pipeline."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from opsdesk.domain.entities import Record
from opsdesk.domain.exceptions import ValidationError

from .profiles import ListProfile

ID_FIELD = "id"


@dataclass(frozen=True)
class ColumnVisibility:
    """Immutable column key -> visible flag mapping.

    Every mutator returns a new instance, so a view state holding one can be
    compared and serialised as plain data.
    """

    flags: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", MappingProxyType(dict(self.flags)))

    @classmethod
    def all_visible(cls, keys: Iterable[str]) -> "ColumnVisibility":
        return cls({key: True for key in keys})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], keys: Iterable[str]) -> "ColumnVisibility":
        """Restore saved flags; keys missing from ``data`` default to visible."""
        keys = tuple(keys)
        unknown = set(data) - set(keys)
        if unknown:
            raise ValidationError(
                f"Unknown column(s): {', '.join(sorted(unknown))}", field="columns"
            )
        return cls({key: bool(data.get(key, True)) for key in keys})

    def _require(self, key: str) -> None:
        if key not in self.flags:
            raise ValidationError(f"Unknown column '{key}'", field="columns")

    def is_visible(self, key: str) -> bool:
        self._require(key)
        return self.flags[key]

    def set(self, key: str, visible: bool) -> "ColumnVisibility":
        self._require(key)
        return ColumnVisibility({**self.flags, key: visible})

    def toggle(self, key: str) -> "ColumnVisibility":
        self._require(key)
        return self.set(key, not self.flags[key])

    def reset(self) -> "ColumnVisibility":
        return ColumnVisibility.all_visible(self.flags)

    def visible_keys(self) -> list[str]:
        return [key for key, visible in self.flags.items() if visible]

    def to_dict(self) -> dict[str, bool]:
        return dict(self.flags)


def project(
    records: Iterable[Record], visibility: ColumnVisibility, profile: ListProfile
) -> list[dict[str, Any]]:
    """Keep ``id`` plus the fields backing each visible column."""
    fields: list[str] = [ID_FIELD]
    for key in visibility.visible_keys():
        for name in profile.columns.get(key, ()):
            if name not in fields:
                fields.append(name)
    return [{name: record.get(name) for name in fields} for record in records]
