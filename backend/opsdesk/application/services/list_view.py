"""Server-held list views — a ViewState driven by loads, user actions and writes."""

import logging
import uuid
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import replace
from datetime import datetime
from typing import Any

from opsdesk.application.interfaces import Notifier
from opsdesk.application.listing import (
    DEFAULT_PAGE_SIZE,
    ColumnVisibility,
    ListProfile,
    initial_state,
    navigation_target,
    reduce,
    render,
)
from opsdesk.application.listing.view_state import (
    Action,
    LoadFailed,
    LoadStarted,
    LoadSucceeded,
    PageRequested,
    ViewState,
    WriteFinished,
    WriteStarted,
)
from opsdesk.application.services.entity_store import EntityStore
from opsdesk.domain.entities import ListPage, PageNavigation
from opsdesk.domain.exceptions import (
    DataServiceError,
    EntityNotFoundError,
    RecordLoadError,
    ValidationError,
    WriteInProgressError,
)

logger = logging.getLogger(__name__)

WriteOperation = Callable[[], Awaitable[Any]]


class ListView:
    """One open list screen.

    Loads never raise for data failures: the state moves to ``error`` and
    the notifier is told. There is no automatic retry; callers reload.
    """

    def __init__(
        self,
        view_id: str,
        profile: ListProfile,
        notifier: Notifier,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        columns: dict[str, bool] | None = None,
    ):
        state = initial_state(profile, page_size)
        if columns:
            state = replace(state, columns=ColumnVisibility.from_dict(columns, profile.column_keys))
        self.view_id = view_id
        self.profile = profile
        self.notifier = notifier
        self._state = state

    @property
    def state(self) -> ViewState:
        return self._state

    def dispatch(self, action: Action) -> ViewState:
        self._state = reduce(self._state, action)
        return self._state

    async def reload(self, store: EntityStore) -> ViewState:
        generation = self.dispatch(LoadStarted()).generation
        try:
            result = await store.load()
        except RecordLoadError as exc:
            logger.warning("View %s failed to load %s: %s", self.view_id, self.profile.table, exc)
            self.notifier.error(f"Failed to load {self.profile.name}")
            return self.dispatch(LoadFailed(generation, str(exc)))

        for warning in result.warnings:
            self.notifier.error(f"Some {warning.relation} details could not be loaded")
        return self.dispatch(
            LoadSucceeded(generation, tuple(result.records), tuple(result.warnings))
        )

    def page(self, now: datetime) -> ListPage:
        return render(self._state, now)

    def navigate(self, navigation: PageNavigation | str, now: datetime) -> ListPage:
        """Move to the first/previous/next/last page, clamped to the filtered result."""
        current = self.page(now).page
        target = navigation_target(
            navigation, current.page_index, current.page_size, current.total_count
        )
        self.dispatch(PageRequested(target))
        return self.page(now)

    async def perform_write(
        self, operation: WriteOperation, success_message: str, store: EntityStore
    ) -> bool:
        """Run one write for this view, then reload on success.

        Records are never patched locally; the reload is the only way new
        data reaches the view. Returns False when the write was rejected or
        failed.
        """
        if self._state.write_in_flight:
            self.notifier.error("Another change is still being saved")
            return False

        self.dispatch(WriteStarted())
        try:
            await operation()
        except (
            DataServiceError,
            EntityNotFoundError,
            ValidationError,
            WriteInProgressError,
        ) as exc:
            logger.warning("Write on view %s failed: %s", self.view_id, exc)
            self.notifier.error(str(exc))
            return False
        finally:
            self.dispatch(WriteFinished())

        self.notifier.success(success_message)
        await self.reload(store)
        return True


class ViewRegistry:
    """In-process store of open list views, oldest evicted first."""

    def __init__(self, notifier_factory: Callable[[], Notifier], max_views: int = 200):
        self._views: OrderedDict[str, ListView] = OrderedDict()
        self._notifier_factory = notifier_factory
        self._max_views = max_views

    def __len__(self) -> int:
        return len(self._views)

    def create(
        self,
        profile: ListProfile,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        columns: dict[str, bool] | None = None,
    ) -> ListView:
        view = ListView(
            uuid.uuid4().hex,
            profile,
            self._notifier_factory(),
            page_size=page_size,
            columns=columns,
        )
        self._views[view.view_id] = view
        while len(self._views) > self._max_views:
            evicted, _ = self._views.popitem(last=False)
            logger.info("Evicted list view %s", evicted)
        return view

    def get(self, view_id: str) -> ListView:
        view = self._views.get(view_id)
        if view is None:
            raise EntityNotFoundError("View", view_id)
        self._views.move_to_end(view_id)
        return view

    def remove(self, view_id: str) -> bool:
        return self._views.pop(view_id, None) is not None
