from .entity_store import EntityStore
from .write_guard import Compensation, WriteGuard, compensating
from .listing_service import ListingService
from .employee_service import EmployeeService
from .document_service import DocumentService
from .task_service import TaskService
from .ticket_service import TicketService
from .subscription_service import SubscriptionService
from .list_view import ListView, ViewRegistry

__all__ = [
    "EntityStore",
    "Compensation",
    "WriteGuard",
    "compensating",
    "ListingService",
    "EmployeeService",
    "DocumentService",
    "TaskService",
    "TicketService",
    "SubscriptionService",
    "ListView",
    "ViewRegistry",
]
