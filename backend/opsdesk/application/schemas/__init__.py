from .files import AttachmentSchema, FileUpload
from .employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate, TeamCreate, TeamResponse
from .document import (
    DocumentAssign,
    DocumentAssignmentResponse,
    DocumentCreate,
    DocumentResponse,
    DocumentUpdate,
)
from .task import TaskCreate, TaskResponse, TaskShare, TaskStats, TaskStatusUpdate, TaskUpdate
from .ticket import (
    ChatMessageCreate,
    TicketAssign,
    TicketCreate,
    TicketDetailsResponse,
    TicketResponse,
    TicketShare,
    TicketStats,
    TicketStatusUpdate,
)
from .subscription import (
    CredentialInput,
    RenewalDue,
    SubscriptionCreate,
    SubscriptionResponse,
    SubscriptionSummary,
    SubscriptionUpdate,
)
from .listing import (
    KanbanBoardResponse,
    KanbanColumnResponse,
    ListPageResponse,
    MoveRequest,
    ViewActionRequest,
    ViewCreateRequest,
    ViewSnapshotResponse,
)

__all__ = [
    "AttachmentSchema",
    "FileUpload",
    "EmployeeCreate",
    "EmployeeResponse",
    "EmployeeUpdate",
    "TeamCreate",
    "TeamResponse",
    "DocumentAssign",
    "DocumentAssignmentResponse",
    "DocumentCreate",
    "DocumentResponse",
    "DocumentUpdate",
    "TaskCreate",
    "TaskResponse",
    "TaskShare",
    "TaskStats",
    "TaskStatusUpdate",
    "TaskUpdate",
    "ChatMessageCreate",
    "TicketAssign",
    "TicketCreate",
    "TicketDetailsResponse",
    "TicketResponse",
    "TicketShare",
    "TicketStats",
    "TicketStatusUpdate",
    "CredentialInput",
    "RenewalDue",
    "SubscriptionCreate",
    "SubscriptionResponse",
    "SubscriptionSummary",
    "SubscriptionUpdate",
    "KanbanBoardResponse",
    "KanbanColumnResponse",
    "ListPageResponse",
    "MoveRequest",
    "ViewActionRequest",
    "ViewCreateRequest",
    "ViewSnapshotResponse",
]
