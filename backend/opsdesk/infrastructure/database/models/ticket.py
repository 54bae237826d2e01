"""SQLAlchemy ORM models for support tickets, their history, chat and assignments."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from opsdesk.infrastructure.database.base import Base, IdMixin, TimestampMixin, utcnow


class TicketModel(IdMixin, TimestampMixin, Base):
    """ORM model — maps to the 'tickets' table."""

    __tablename__ = "tickets"

    ticket_number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    client_name: Mapped[str] = mapped_column(String(200), nullable=False)
    client_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    company: Mapped[str | None] = mapped_column(String(200), nullable=True)
    issue: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="New")
    priority: Mapped[str] = mapped_column(String(30), nullable=False, default="Medium")
    assigned_to: Mapped[str | None] = mapped_column(String(100), nullable=True)

    __table_args__ = (Index("ix_tickets_status", "status"),)

    def __repr__(self) -> str:
        return f"<TicketModel(id={self.id}, number={self.ticket_number})>"


class TicketHistoryModel(IdMixin, Base):
    """ORM model — maps to the 'ticket_history' table."""

    __tablename__ = "ticket_history"

    ticket_id: Mapped[str] = mapped_column(String(36), nullable=False)
    user_name: Mapped[str] = mapped_column(String(200), nullable=False)
    action: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    __table_args__ = (Index("ix_ticket_history_ticket", "ticket_id"),)


class TicketChatModel(IdMixin, Base):
    """ORM model — maps to the 'ticket_chat' table."""

    __tablename__ = "ticket_chat"

    ticket_id: Mapped[str] = mapped_column(String(36), nullable=False)
    user_name: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    sender_type: Mapped[str] = mapped_column(String(20), nullable=False, default="sent")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    __table_args__ = (Index("ix_ticket_chat_ticket", "ticket_id"),)


class TicketAssignmentModel(IdMixin, Base):
    """ORM model — maps to the 'ticket_assignments' join table."""

    __tablename__ = "ticket_assignments"

    ticket_id: Mapped[str] = mapped_column(String(36), nullable=False)
    employee_id: Mapped[str] = mapped_column(String(36), nullable=False)
    assigned_by: Mapped[str | None] = mapped_column(String(200), nullable=True)
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_ticket_assignments_ticket", "ticket_id"),
        Index("ix_ticket_assignments_employee", "employee_id"),
    )
