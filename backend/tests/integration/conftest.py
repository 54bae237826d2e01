"""API fixtures: the real app with the data service and storage swapped for fakes."""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from opsdesk.application.services import ViewRegistry, WriteGuard
from opsdesk.infrastructure.dependencies import (
    get_data_service,
    get_now,
    get_object_storage,
    get_view_registry,
    get_write_guard,
)
from opsdesk.infrastructure.notifications import NotificationFeed
from opsdesk.main import app


@pytest_asyncio.fixture
async def client(data, storage, now):
    app.dependency_overrides[get_data_service] = lambda: data
    app.dependency_overrides[get_object_storage] = lambda: storage
    app.dependency_overrides[get_now] = lambda: now
    guard = WriteGuard()
    app.dependency_overrides[get_write_guard] = lambda: guard
    registry = ViewRegistry(notifier_factory=NotificationFeed)
    app.dependency_overrides[get_view_registry] = lambda: registry

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()
