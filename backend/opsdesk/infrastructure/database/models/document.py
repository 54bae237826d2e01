"""SQLAlchemy ORM models for documents and their employee assignments."""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from opsdesk.infrastructure.database.base import Base, IdMixin, TimestampMixin, utcnow


class DocumentModel(IdMixin, TimestampMixin, Base):
    """ORM model — maps to the 'documents' table."""

    __tablename__ = "documents"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, default="General")
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="Active")
    file_name: Mapped[str] = mapped_column(String(500), nullable=False)
    file_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    file_path: Mapped[str] = mapped_column(String(1000), nullable=False)
    file_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    created_by: Mapped[str | None] = mapped_column(String(36), nullable=True)

    __table_args__ = (
        Index("ix_documents_status", "status"),
        Index("ix_documents_category", "category"),
    )

    def __repr__(self) -> str:
        return f"<DocumentModel(id={self.id}, title='{self.title}')>"


class DocumentAssignmentModel(IdMixin, Base):
    """ORM model — maps to the 'document_assignments' join table."""

    __tablename__ = "document_assignments"

    document_id: Mapped[str] = mapped_column(String(36), nullable=False)
    employee_id: Mapped[str] = mapped_column(String(36), nullable=False)
    can_view: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    can_download: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_document_assignments_document", "document_id"),
        Index("ix_document_assignments_employee", "employee_id"),
    )
