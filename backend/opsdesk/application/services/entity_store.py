"""Entity store — loads one table's records with their relations resolved."""

import logging
import time
from collections import defaultdict

from opsdesk.application.interfaces import DataService
from opsdesk.application.listing.profiles import JoinRelation, ListProfile, LookupRelation, Relation
from opsdesk.domain.entities import LoadResult, LoadWarning, Record
from opsdesk.domain.exceptions import DataServiceError, EntityNotFoundError, RecordLoadError
from opsdesk.infrastructure.logging.colored_logger import Stage, StageLogger

logger = logging.getLogger(__name__)
slog = StageLogger("EntityStore")


class EntityStore:
    """Owns the canonical record sequence of one list profile.

    A load is complete only once every relation declared by the profile has
    been resolved. A failing relation degrades to empty display fields and a
    :class:`LoadWarning`; a failing primary query raises
    :class:`RecordLoadError`.
    """

    def __init__(self, profile: ListProfile, data_service: DataService):
        self._profile = profile
        self._data = data_service

    @property
    def profile(self) -> ListProfile:
        return self._profile

    async def load(self) -> LoadResult:
        profile = self._profile
        slog.step_start(Stage.LOAD, f"Loading {profile.table}")
        start = time.perf_counter()
        try:
            rows = await self._data.fetch_all(
                profile.table,
                order_by=profile.order_field,
                descending=profile.order_descending,
            )
        except DataServiceError as exc:
            slog.step_error(Stage.LOAD, f"Primary query on {profile.table} failed", error=exc)
            raise RecordLoadError(profile.table, exc) from exc

        result = await self._complete([dict(row) for row in rows])
        slog.step_complete(
            Stage.COMPLETE,
            f"{profile.table} ready",
            records=len(result.records),
            warnings=len(result.warnings),
            elapsed=f"{time.perf_counter() - start:.2f}s",
        )
        return result

    async def load_one(self, record_id: str) -> LoadResult:
        """Load a single record with the same relation resolution as :meth:`load`."""
        profile = self._profile
        try:
            row = await self._data.get(profile.table, record_id)
        except DataServiceError as exc:
            raise RecordLoadError(profile.table, exc) from exc
        if row is None:
            raise EntityNotFoundError(profile.entity_label, record_id)
        return await self._complete([dict(row)])

    async def _complete(self, records: list[Record]) -> LoadResult:
        warnings: list[LoadWarning] = []
        for relation in self._profile.relations:
            try:
                resolved = await self._resolve(relation, records)
            except DataServiceError as exc:
                warning = LoadWarning(relation.name, exc.message)
                warnings.append(warning)
                slog.step_warning(
                    Stage.RELATIONS,
                    f"Could not resolve '{relation.name}' for {self._profile.table}",
                    error=exc.message,
                )
                resolved = [_degraded(relation) for _ in records]
            for record, fields in zip(records, resolved):
                record.update(fields)

        if self._profile.derive is not None:
            for record in records:
                record.update(self._profile.derive(record))
        return LoadResult(records=records, warnings=warnings)

    async def _resolve(self, relation: Relation, records: list[Record]) -> list[Record]:
        """Compute the relation's fields for each record without touching the records."""
        if not records:
            return []
        if isinstance(relation, LookupRelation):
            return await self._resolve_lookup(relation, records)
        return await self._resolve_join(relation, records)

    async def _resolve_lookup(
        self, relation: LookupRelation, records: list[Record]
    ) -> list[Record]:
        ids = {r.get(relation.source_field) for r in records} - {None, ""}
        targets = await self._data.select_in(relation.table, relation.key_column, ids)
        by_key = {t.get(relation.key_column): t for t in targets}

        resolved = []
        for record in records:
            target = by_key.get(record.get(relation.source_field))
            resolved.append(
                {dst: (target.get(src) if target else None) for src, dst in relation.fields.items()}
            )
        return resolved

    async def _resolve_join(self, relation: JoinRelation, records: list[Record]) -> list[Record]:
        parent_ids = [r["id"] for r in records if r.get("id") is not None]
        rows = await self._data.select_in(
            relation.join_table, relation.parent_column, parent_ids
        )

        members: dict = {}
        if relation.member_column:
            member_ids = {row.get(relation.member_column) for row in rows} - {None}
            found = await self._data.select_in(relation.member_table, "id", member_ids)
            members = {m["id"]: m for m in found}

        grouped: dict = defaultdict(list)
        for row in rows:
            entry = {column: row.get(column) for column in relation.columns}
            if relation.member_column:
                member = members.get(row.get(relation.member_column))
                for src, dst in relation.member_fields.items():
                    entry[dst] = member.get(src) if member else None
            grouped[row.get(relation.parent_column)].append(entry)

        resolved = []
        for record in records:
            entries = grouped.get(record.get("id"), [])
            if relation.first_only:
                resolved.append({relation.target_field: entries[0] if entries else None})
            else:
                resolved.append({relation.target_field: entries})
        return resolved


def _degraded(relation: Relation) -> Record:
    if isinstance(relation, LookupRelation):
        return {dst: None for dst in relation.fields.values()}
    return {relation.target_field: None if relation.first_only else []}
