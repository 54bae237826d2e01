"""Pydantic DTOs for subscriptions and the subscription dashboard."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from opsdesk.domain.entities import BillingCycle, SubscriptionCategory, SubscriptionStatus


class CredentialInput(BaseModel):
    email: str | None = None
    password: str | None = None


class SubscriptionCreate(BaseModel):
    """Schema for creating a subscription.

    ``subscription_name`` and ``owner_id`` are checked by the service so the
    client gets the same error shape as for other rejected writes.
    """

    subscription_name: str = Field("", max_length=255, examples=["Figma Organization"])
    owner_id: str | None = Field(None, max_length=36)
    vendor_id: str | None = Field(None, max_length=36)
    plan_tier: str | None = Field("Team Plan", max_length=100)
    category: SubscriptionCategory | None = None
    cost_per_period: float | None = Field(None, ge=0)
    cost_per_user: float | None = Field(None, ge=0)
    number_of_users: int = Field(0, ge=0)
    billing_cycle: BillingCycle = BillingCycle.MONTHLY
    auto_renewal_status: str = Field("Enabled", max_length=30)
    start_date: date | None = None
    expiry_date: date | None = None
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    portal_url: str | None = None
    notes: str | None = None
    user_ids: list[str] = Field(default_factory=list)
    credentials: CredentialInput | None = None


class SubscriptionUpdate(BaseModel):
    """Schema for updating a subscription — all fields optional.

    When ``user_ids`` is given, it replaces the subscription's seats.
    """

    subscription_name: str | None = Field(None, min_length=1, max_length=255)
    owner_id: str | None = Field(None, min_length=1, max_length=36)
    vendor_id: str | None = None
    plan_tier: str | None = None
    category: SubscriptionCategory | None = None
    cost_per_period: float | None = Field(None, ge=0)
    cost_per_user: float | None = Field(None, ge=0)
    number_of_users: int | None = Field(None, ge=0)
    billing_cycle: BillingCycle | None = None
    auto_renewal_status: str | None = None
    start_date: date | None = None
    expiry_date: date | None = None
    status: SubscriptionStatus | None = None
    portal_url: str | None = None
    notes: str | None = None
    user_ids: list[str] | None = None


class SubscriptionUserResponse(BaseModel):
    user_id: str
    full_name: str | None = None
    profile_photo: str | None = None


class CredentialSummary(BaseModel):
    """Login email of a subscription; passwords are never returned."""

    email: str | None = None


class SubscriptionResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    subscription_name: str
    owner_id: str
    owner_name: str | None = None
    owner_email: str | None = None
    vendor_id: str | None = None
    vendor_name: str | None = None
    plan_tier: str | None = None
    category: str | None = None
    cost_per_period: float | None = None
    cost_per_user: float | None = None
    number_of_users: int = 0
    billing_cycle: str
    auto_renewal_status: str
    start_date: date | None = None
    expiry_date: date | None = None
    status: str
    portal_url: str | None = None
    notes: str | None = None
    annual_cost: float = 0.0
    users: list[SubscriptionUserResponse] = Field(default_factory=list)
    credentials: CredentialSummary | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RenewalDue(BaseModel):
    id: str
    subscription_name: str
    expiry_date: date | None = None
    days_left: int
    annual_cost: float
    auto_renewal_status: str | None = None


class SubscriptionSummary(BaseModel):
    """Dashboard figures for the subscriptions screen."""

    total: int
    active_count: int
    auto_renew_count: int
    renewals_due: list[RenewalDue]
    annual_spend_by_category: dict[str, float]
    total_annual_spend: float
