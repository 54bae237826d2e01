"""Application service (use case) for subscriptions, seats and the spend dashboard."""

import logging
import math
from collections import defaultdict
from datetime import datetime

from opsdesk.application.interfaces import DataService
from opsdesk.application.listing.profiles import SUBSCRIPTIONS
from opsdesk.application.schemas.subscription import (
    RenewalDue,
    SubscriptionCreate,
    SubscriptionSummary,
    SubscriptionUpdate,
)
from opsdesk.application.services.listing_service import ListingService, changes_from
from opsdesk.application.services.write_guard import WriteGuard, compensating
from opsdesk.domain.billing import annual_cost, days_until_expiry
from opsdesk.domain.entities import OTHER_CATEGORY, Record, SubscriptionStatus
from opsdesk.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

_REQUIRED = (
    "subscription_name",
    "owner_id",
    "number_of_users",
    "billing_cycle",
    "auto_renewal_status",
    "status",
)

AUTO_RENEW_ENABLED = "Enabled"


class SubscriptionService(ListingService):
    """Orchestrates subscription CRUD, seat management and renewal tracking."""

    profile = SUBSCRIPTIONS

    def __init__(
        self,
        data_service: DataService,
        guard: WriteGuard | None = None,
        renewal_window_days: int = 30,
    ):
        super().__init__(data_service, guard)
        self._renewal_window_days = renewal_window_days

    async def create(self, data: SubscriptionCreate) -> Record:
        """Insert the subscription, its seats and optional credentials as one unit."""
        name = data.subscription_name.strip()
        if not name:
            raise ValidationError("Please enter a subscription name", field="subscription_name")
        if not data.owner_id:
            raise ValidationError("Please select an owner", field="owner_id")

        row = data.model_dump(mode="json", exclude={"user_ids", "credentials"})
        row["subscription_name"] = name
        user_ids = list(dict.fromkeys(data.user_ids))

        async with compensating(f"Create subscription '{name}'") as undo:
            inserted = await self._data.insert("subscriptions", row)
            subscription_id = inserted["id"]
            undo.add(
                f"delete subscription {subscription_id}",
                lambda: self._data.delete("subscriptions", subscription_id),
            )
            if user_ids:
                await self._data.insert_many(
                    "subscription_users",
                    [{"subscription_id": subscription_id, "user_id": u} for u in user_ids],
                )
                undo.add(
                    "delete seats",
                    lambda: self._data.delete_where(
                        "subscription_users", "subscription_id", [subscription_id]
                    ),
                )
            credentials = data.credentials
            if credentials and (credentials.email or credentials.password):
                await self._data.insert(
                    "credentials",
                    {
                        "subscription_id": subscription_id,
                        "email": credentials.email or None,
                        "password": credentials.password or None,
                    },
                )

        logger.info("Created subscription %s with %d seat(s)", subscription_id, len(user_ids))
        return await self.get(subscription_id)

    async def update(self, subscription_id: str, data: SubscriptionUpdate) -> Record:
        changes = changes_from(data, required=_REQUIRED)
        user_ids = changes.pop("user_ids", None)
        if "subscription_name" in changes:
            changes["subscription_name"] = changes["subscription_name"].strip()
            if not changes["subscription_name"]:
                raise ValidationError("Please enter a subscription name", field="subscription_name")

        async with self._guard.hold("subscriptions", subscription_id):
            await self._require(subscription_id)
            await self._data.update("subscriptions", subscription_id, changes)
            if user_ids is not None:
                await self._replace_seats(subscription_id, list(dict.fromkeys(user_ids)))
        return await self.get(subscription_id)

    async def _replace_seats(self, subscription_id: str, user_ids: list[str]) -> None:
        previous = await self._data.select_in(
            "subscription_users", "subscription_id", [subscription_id]
        )
        async with compensating(f"Replace seats of {subscription_id}") as undo:
            await self._data.delete_where("subscription_users", "subscription_id", [subscription_id])
            if previous:
                undo.add(
                    "restore previous seats",
                    lambda: self._data.insert_many("subscription_users", previous),
                )
            if user_ids:
                await self._data.insert_many(
                    "subscription_users",
                    [{"subscription_id": subscription_id, "user_id": u} for u in user_ids],
                )

    async def delete(self, subscription_id: str) -> bool:
        async with self._guard.hold("subscriptions", subscription_id):
            await self._require(subscription_id)
            await self._data.delete_where("subscription_users", "subscription_id", [subscription_id])
            await self._data.delete_where("credentials", "subscription_id", [subscription_id])
            deleted = await self._data.delete("subscriptions", subscription_id)
        logger.info("Deleted subscription %s", subscription_id)
        return deleted

    async def summary(self, now: datetime) -> SubscriptionSummary:
        """Dashboard figures, computed over active subscriptions only."""
        result = await self._store.load()
        active = [
            r for r in result.records if r.get("status") == SubscriptionStatus.ACTIVE.value
        ]

        spend: dict[str, float] = defaultdict(float)
        renewals: list[RenewalDue] = []
        for record in active:
            cost = record.get("annual_cost", annual_cost(record))
            spend[record.get("category") or OTHER_CATEGORY] += cost

            days = days_until_expiry(record.get("expiry_date"), now)
            if not math.isinf(days) and 0 <= days <= self._renewal_window_days:
                renewals.append(
                    RenewalDue(
                        id=record["id"],
                        subscription_name=record["subscription_name"],
                        expiry_date=record.get("expiry_date"),
                        days_left=int(days),
                        annual_cost=cost,
                        auto_renewal_status=record.get("auto_renewal_status"),
                    )
                )
        renewals.sort(key=lambda r: r.days_left)

        return SubscriptionSummary(
            total=len(result.records),
            active_count=len(active),
            auto_renew_count=sum(
                1 for r in active if r.get("auto_renewal_status") == AUTO_RENEW_ENABLED
            ),
            renewals_due=renewals,
            annual_spend_by_category=dict(spend),
            total_annual_spend=sum(spend.values()),
        )
