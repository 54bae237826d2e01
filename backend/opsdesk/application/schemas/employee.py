"""Pydantic DTOs for employees and teams."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from opsdesk.domain.entities import EmployeeStatus


class EmployeeCreate(BaseModel):
    """Schema for creating a new employee."""

    full_name: str = Field(..., min_length=1, max_length=200, examples=["Priya Nair"])
    official_email: str | None = Field(None, max_length=255, examples=["priya@example.com"])
    personal_email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    job_title: str | None = Field(None, max_length=150)
    team_id: str | None = Field(None, max_length=36)
    reporting_manager_id: str | None = Field(None, max_length=36)
    employment_type: str | None = Field(None, max_length=50, examples=["Full-time"])
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    date_of_joining: date | None = None
    profile_photo: str | None = None


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee — all fields optional."""

    full_name: str | None = Field(None, min_length=1, max_length=200)
    official_email: str | None = None
    personal_email: str | None = None
    phone: str | None = None
    job_title: str | None = None
    team_id: str | None = None
    reporting_manager_id: str | None = None
    employment_type: str | None = None
    status: EmployeeStatus | None = None
    date_of_joining: date | None = None
    profile_photo: str | None = None


class EmployeeResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    full_name: str
    official_email: str | None = None
    personal_email: str | None = None
    phone: str | None = None
    job_title: str | None = None
    team_id: str | None = None
    team_name: str | None = None
    reporting_manager_id: str | None = None
    manager_name: str | None = None
    employment_type: str | None = None
    status: str
    date_of_joining: date | None = None
    profile_photo: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TeamCreate(BaseModel):
    team_name: str = Field(..., min_length=1, max_length=120, examples=["Operations"])
    description: str | None = Field(None, max_length=500)


class TeamResponse(BaseModel):
    id: str
    team_name: str
    description: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
