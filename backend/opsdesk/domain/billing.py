"""Subscription cost and renewal arithmetic."""

import math
from datetime import datetime
from typing import Any

from opsdesk.domain.entities import BillingCycle, Record, parse_timestamp

CYCLE_MULTIPLIERS: dict[str, int] = {
    BillingCycle.MONTHLY.value: 12,
    BillingCycle.QUARTERLY.value: 4,
    BillingCycle.YEARLY.value: 1,
    BillingCycle.BI_ANNUAL.value: 2,
    BillingCycle.ONE_TIME.value: 0,
}

_DAY_SECONDS = 24 * 60 * 60


def _number(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def annual_cost(subscription: Record) -> float:
    """Yearly spend: per-seat pricing wins when both seat price and seats are set."""
    cost_per_user = _number(subscription.get("cost_per_user"))
    users = _number(subscription.get("number_of_users"))
    cost_per_period = _number(subscription.get("cost_per_period"))
    multiplier = CYCLE_MULTIPLIERS.get(subscription.get("billing_cycle") or "", 0)

    if cost_per_user > 0 and users > 0:
        return cost_per_user * users * multiplier
    return cost_per_period * multiplier


def days_until_expiry(expiry: Any, now: datetime) -> float:
    """Whole days left until ``expiry`` (rounded up); ``inf`` when unknown."""
    parsed = parse_timestamp(expiry)
    if parsed is None:
        return math.inf
    return math.ceil((parsed - now).total_seconds() / _DAY_SECONDS)
