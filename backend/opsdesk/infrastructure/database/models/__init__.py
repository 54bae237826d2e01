from .employee import EmployeeModel, TeamModel
from .document import DocumentAssignmentModel, DocumentModel
from .task import TaskModel
from .ticket import TicketAssignmentModel, TicketChatModel, TicketHistoryModel, TicketModel
from .subscription import CredentialModel, SubscriptionModel, SubscriptionUserModel

__all__ = [
    "EmployeeModel",
    "TeamModel",
    "DocumentAssignmentModel",
    "DocumentModel",
    "TaskModel",
    "TicketAssignmentModel",
    "TicketChatModel",
    "TicketHistoryModel",
    "TicketModel",
    "CredentialModel",
    "SubscriptionModel",
    "SubscriptionUserModel",
]
