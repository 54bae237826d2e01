"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from opsdesk.presentation.api.v1.endpoints.health import router as health_router
from opsdesk.presentation.api.v1.endpoints.employees import router as employees_router
from opsdesk.presentation.api.v1.endpoints.documents import router as documents_router
from opsdesk.presentation.api.v1.endpoints.tasks import router as tasks_router
from opsdesk.presentation.api.v1.endpoints.tickets import router as tickets_router
from opsdesk.presentation.api.v1.endpoints.subscriptions import router as subscriptions_router
from opsdesk.presentation.api.v1.endpoints.views import router as views_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(employees_router)
router.include_router(documents_router)
router.include_router(tasks_router)
router.include_router(tickets_router)
router.include_router(subscriptions_router)
router.include_router(views_router)
