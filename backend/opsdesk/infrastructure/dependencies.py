"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from datetime import datetime
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from opsdesk.application.interfaces import DataService, ObjectStorage
from opsdesk.application.services import (
    DocumentService,
    EmployeeService,
    ListingService,
    SubscriptionService,
    TaskService,
    TicketService,
    ViewRegistry,
    WriteGuard,
)
from opsdesk.config import get_settings
from opsdesk.infrastructure.database.data_service import SQLAlchemyDataService
from opsdesk.infrastructure.database.session import get_db_session
from opsdesk.infrastructure.notifications import NotificationFeed
from opsdesk.infrastructure.storage import LocalObjectStorage


# ── Process-wide singletons ──────────────────────────────────────────


@lru_cache
def get_object_storage() -> ObjectStorage:
    settings = get_settings()
    return LocalObjectStorage(settings.storage_dir, settings.storage_base_url)


@lru_cache
def get_write_guard() -> WriteGuard:
    """One guard per process, shared by every request's services."""
    return WriteGuard()


@lru_cache
def get_view_registry() -> ViewRegistry:
    return ViewRegistry(notifier_factory=NotificationFeed)


def get_now() -> datetime:
    """Reference time for time buckets and renewal windows, in the display timezone."""
    return get_settings().now()


# ── Per-request wiring ───────────────────────────────────────────────


async def get_data_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[DataService, None]:
    """Provides a DataService bound to the request's session."""
    yield SQLAlchemyDataService(session)


async def get_employee_service(
    data: DataService = Depends(get_data_service),
    guard: WriteGuard = Depends(get_write_guard),
) -> AsyncGenerator[EmployeeService, None]:
    yield EmployeeService(data, guard)


async def get_document_service(
    data: DataService = Depends(get_data_service),
    storage: ObjectStorage = Depends(get_object_storage),
    guard: WriteGuard = Depends(get_write_guard),
) -> AsyncGenerator[DocumentService, None]:
    """Provides a DocumentService with storage and the upload limit wired up."""
    settings = get_settings()
    yield DocumentService(data, storage, guard, max_upload_bytes=settings.max_upload_bytes)


async def get_task_service(
    data: DataService = Depends(get_data_service),
    storage: ObjectStorage = Depends(get_object_storage),
    guard: WriteGuard = Depends(get_write_guard),
) -> AsyncGenerator[TaskService, None]:
    yield TaskService(data, storage, guard)


async def get_ticket_service(
    data: DataService = Depends(get_data_service),
    guard: WriteGuard = Depends(get_write_guard),
) -> AsyncGenerator[TicketService, None]:
    yield TicketService(data, guard)


async def get_subscription_service(
    data: DataService = Depends(get_data_service),
    guard: WriteGuard = Depends(get_write_guard),
) -> AsyncGenerator[SubscriptionService, None]:
    """Provides a SubscriptionService using the configured renewal window."""
    settings = get_settings()
    yield SubscriptionService(data, guard, renewal_window_days=settings.renewal_window_days)


async def get_listing_services(
    employees: EmployeeService = Depends(get_employee_service),
    documents: DocumentService = Depends(get_document_service),
    tasks: TaskService = Depends(get_task_service),
    tickets: TicketService = Depends(get_ticket_service),
    subscriptions: SubscriptionService = Depends(get_subscription_service),
) -> AsyncGenerator[dict[str, ListingService], None]:
    """Every list screen's service keyed by its domain name, for the view endpoints."""
    yield {
        service.profile.name: service
        for service in (employees, documents, tasks, tickets, subscriptions)
    }
