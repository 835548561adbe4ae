"""Recurring fixed-cost aggregation."""

from collections.abc import Iterable
from decimal import Decimal

from chanchito.domain.models import RecurringPlan


def active_recurring_plans(plans: Iterable[RecurringPlan]) -> list[RecurringPlan]:
    """Return only the plans currently charged every month."""
    return [plan for plan in plans if plan.is_active]


def monthly_burn_rate(plans: Iterable[RecurringPlan]) -> Decimal:
    """Return the monthly total of active recurring plans.

    Every view reporting fixed costs goes through this function.
    """
    return sum(
        (abs(plan.amount) for plan in active_recurring_plans(plans)),
        Decimal("0"),
    )


def fixed_costs_for_method(
    plans: Iterable[RecurringPlan],
    method_id: str,
) -> Decimal:
    """Return the monthly burn rate charged to one payment method."""
    return monthly_burn_rate(
        plan for plan in plans if plan.payment_method_id == method_id
    )


__all__ = [
    "active_recurring_plans",
    "monthly_burn_rate",
    "fixed_costs_for_method",
]
