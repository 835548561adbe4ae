"""Tests for recurring plan aggregation."""

from decimal import Decimal

from chanchito.domain.models import RecurringPlan
from chanchito.domain.services.recurring import (
    active_recurring_plans,
    fixed_costs_for_method,
    monthly_burn_rate,
)


def _plan(plan_id: str, amount: str, active: bool = True, method: str | None = None):
    return RecurringPlan(
        id=plan_id,
        user_id="u1",
        description=f"Plan {plan_id}",
        amount=Decimal(amount),
        is_active=active,
        payment_method_id=method,
    )


def test_burn_rate_sums_active_plans_only() -> None:
    plans = [_plan("a", "1000"), _plan("b", "250.50"), _plan("c", "999", active=False)]

    assert monthly_burn_rate(plans) == Decimal("1250.50")
    assert [plan.id for plan in active_recurring_plans(plans)] == ["a", "b"]


def test_burn_rate_of_nothing_is_zero() -> None:
    assert monthly_burn_rate([]) == Decimal("0")


def test_burn_rate_uses_absolute_amounts() -> None:
    assert monthly_burn_rate([_plan("a", "-300")]) == Decimal("300")


def test_fixed_costs_for_method_filters_by_method() -> None:
    plans = [
        _plan("a", "1000", method="visa"),
        _plan("b", "200", method="debit"),
        _plan("c", "50", active=False, method="visa"),
    ]

    assert fixed_costs_for_method(plans, "visa") == Decimal("1000")
    assert fixed_costs_for_method(plans, "cash") == Decimal("0")
