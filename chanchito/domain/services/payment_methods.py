"""Payment method cycle consumption."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from chanchito.domain.constants import EXPENSE
from chanchito.domain.models import (
    PaymentMethod,
    PaymentMethodStatus,
    RecurringPlan,
    Transaction,
)
from chanchito.domain.services.billing_cycle import (
    billing_cycle_for,
    cycle_adjusted_date,
)
from chanchito.domain.services.recurring import (
    active_recurring_plans,
    fixed_costs_for_method,
)


def compute_payment_method_status(
    method: PaymentMethod,
    transactions: Iterable[Transaction],
    recurring_plans: Iterable[RecurringPlan],
    today: date,
) -> PaymentMethodStatus:
    """Compute current cycle consumption for a payment method.

    Credit cards with closing and payment days only count transactions whose
    cycle-adjusted date falls in the payment month of the cycle containing
    ``today``. Other methods sum every linked transaction; that all-time
    figure is reported with ``is_cycle_scoped=False``.

    Args:
        method: Payment method to evaluate.
        transactions: Transactions of the user (filtered by method here).
        recurring_plans: Recurring plans of the user.
        today: Reference date.

    Returns:
        PaymentMethodStatus: Consumption, fixed costs and projections.
    """
    plans = list(recurring_plans)
    # Charges generated by an active plan are already counted in fixed_costs.
    fixed_plan_ids = {
        plan.id
        for plan in active_recurring_plans(plans)
        if plan.payment_method_id == method.id
    }
    linked = [
        transaction
        for transaction in transactions
        if transaction.payment_method_id == method.id
        and transaction.recurring_plan_id not in fixed_plan_ids
    ]
    next_closing_date = None
    next_payment_date = None
    if method.has_billing_cycle:
        cycle = billing_cycle_for(
            today,
            method.default_closing_day,
            method.default_payment_day,
        )
        next_closing_date = cycle.closing_date
        next_payment_date = cycle.payment_date
        in_scope = [
            transaction
            for transaction in linked
            if _same_month(
                cycle_adjusted_date(transaction, method),
                next_payment_date,
            )
        ]
    else:
        in_scope = linked

    cycle_net = sum(
        (transaction.signed_amount for transaction in in_scope),
        Decimal("0"),
    )
    cycle_spent = sum(
        (
            abs(transaction.amount)
            for transaction in in_scope
            if transaction.type == EXPENSE
        ),
        Decimal("0"),
    )
    fixed_costs = fixed_costs_for_method(plans, method.id)
    current_consumption = cycle_net - fixed_costs
    return PaymentMethodStatus(
        method_id=method.id,
        cycle_net=cycle_net,
        cycle_spent=cycle_spent,
        fixed_costs=fixed_costs,
        current_consumption=current_consumption,
        projected_total=current_consumption,
        projected_spend=cycle_spent + fixed_costs,
        is_cycle_scoped=method.has_billing_cycle,
        next_closing_date=next_closing_date,
        next_payment_date=next_payment_date,
    )


def _same_month(value: date, reference: date) -> bool:
    return value.year == reference.year and value.month == reference.month


__all__ = ["compute_payment_method_status"]
