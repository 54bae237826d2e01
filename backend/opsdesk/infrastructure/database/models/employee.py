"""SQLAlchemy ORM models for employees and teams."""

from datetime import date

from sqlalchemy import Date, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from opsdesk.infrastructure.database.base import Base, IdMixin, TimestampMixin


class TeamModel(IdMixin, TimestampMixin, Base):
    """ORM model — maps to the 'teams' table."""

    __tablename__ = "teams"

    team_name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)


class EmployeeModel(IdMixin, TimestampMixin, Base):
    """ORM model — maps to the 'employees' table."""

    __tablename__ = "employees"

    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    official_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    personal_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    job_title: Mapped[str | None] = mapped_column(String(150), nullable=True)
    team_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    reporting_manager_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    employment_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="Active")
    date_of_joining: Mapped[date | None] = mapped_column(Date, nullable=True)
    profile_photo: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    __table_args__ = (
        Index("ix_employees_team", "team_id"),
        Index("ix_employees_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<EmployeeModel(id={self.id}, name='{self.full_name}')>"
