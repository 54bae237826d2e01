"""SQLAlchemy ORM model for the Task entity."""

from datetime import date, datetime

from sqlalchemy import JSON, Date, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from opsdesk.infrastructure.database.base import Base, IdMixin, TimestampMixin


class TaskModel(IdMixin, TimestampMixin, Base):
    """ORM model — maps to the 'tasks' table."""

    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="pending")
    priority: Mapped[str] = mapped_column(String(30), nullable=False, default="medium")
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    assignee: Mapped[str | None] = mapped_column(String(36), nullable=True)
    attachments: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    completed_on: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    shared_from: Mapped[str | None] = mapped_column(String(36), nullable=True)
    share_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_tasks_assignee", "assignee"),
        Index("ix_tasks_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<TaskModel(id={self.id}, title='{self.title}', status='{self.status}')>"
