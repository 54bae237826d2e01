"""SQLAlchemy ORM models for subscriptions, their seats and stored credentials."""

from datetime import date

from sqlalchemy import Date, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from opsdesk.infrastructure.database.base import Base, IdMixin, TimestampMixin


class SubscriptionModel(IdMixin, TimestampMixin, Base):
    """ORM model — maps to the 'subscriptions' table."""

    __tablename__ = "subscriptions"

    subscription_name: Mapped[str] = mapped_column(String(255), nullable=False)
    vendor_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    owner_id: Mapped[str] = mapped_column(String(36), nullable=False)
    plan_tier: Mapped[str | None] = mapped_column(String(100), nullable=True)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    cost_per_period: Mapped[float | None] = mapped_column(Float, nullable=True)
    cost_per_user: Mapped[float | None] = mapped_column(Float, nullable=True)
    number_of_users: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    billing_cycle: Mapped[str] = mapped_column(String(30), nullable=False, default="Monthly")
    auto_renewal_status: Mapped[str] = mapped_column(
        String(30), nullable=False, default="Enabled"
    )
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="Active")
    portal_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_subscriptions_status", "status"),
        Index("ix_subscriptions_owner", "owner_id"),
    )

    def __repr__(self) -> str:
        return f"<SubscriptionModel(id={self.id}, name='{self.subscription_name}')>"


class SubscriptionUserModel(IdMixin, Base):
    """ORM model — maps to the 'subscription_users' seat table."""

    __tablename__ = "subscription_users"

    subscription_id: Mapped[str] = mapped_column(String(36), nullable=False)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)

    __table_args__ = (
        Index("ix_subscription_users_subscription", "subscription_id"),
        Index("ix_subscription_users_user", "user_id"),
    )


class CredentialModel(IdMixin, Base):
    """ORM model — maps to the 'credentials' table."""

    __tablename__ = "credentials"

    subscription_id: Mapped[str] = mapped_column(String(36), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    password: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (Index("ix_credentials_subscription", "subscription_id"),)
