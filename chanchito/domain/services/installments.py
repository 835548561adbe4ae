"""Installment plan amortization."""

from collections.abc import Iterable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from chanchito.domain.constants import INSTALLMENT_FINISHED_TOLERANCE
from chanchito.domain.models import (
    AmortizationPolicy,
    InstallmentPlan,
    InstallmentScheduleItem,
    InstallmentStatus,
    PaymentMethod,
    Transaction,
)
from chanchito.domain.services.billing_cycle import (
    add_months,
    cycle_adjusted_date,
    months_between,
)
from chanchito.utils.decimal_utils import safe_divide

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def installment_value(total_amount: Decimal, installments_count: int) -> Decimal:
    """Return the per-installment value, or zero for an empty plan."""
    if installments_count <= 0:
        return Decimal("0")
    return total_amount / installments_count


def build_installment_schedule(
    total_amount: Decimal,
    installments_count: int,
    purchase_date: date,
) -> list[InstallmentScheduleItem]:
    """Return the monthly installments of a purchase.

    Args:
        total_amount: Purchase total.
        installments_count: Number of equal installments.
        purchase_date: Date of the first installment.

    Returns:
        list[InstallmentScheduleItem]: One item per month starting on the
        purchase date, each for the same amount rounded to cents.
    """
    amount = installment_value(total_amount, installments_count).quantize(
        CENT,
        rounding=ROUND_HALF_UP,
    )
    return [
        InstallmentScheduleItem(
            number=index + 1,
            due_date=add_months(purchase_date, index, day=purchase_date.day),
            amount=amount,
        )
        for index in range(max(installments_count, 0))
    ]


def calendar_installment_status(
    plan: InstallmentPlan,
    today: date,
) -> InstallmentStatus:
    """Compute plan progress from the calendar months elapsed.

    Args:
        plan: Installment plan to evaluate.
        today: Reference date.

    Returns:
        InstallmentStatus: Progress assuming one installment is paid per
        month since the purchase date.
    """
    count = plan.installments_count
    total = plan.total_amount
    value = installment_value(total, count)
    months_passed = max(months_between(today, plan.purchase_date), 0)
    remaining_installments = max(count - months_passed, 0)
    remaining_amount = remaining_installments * value
    paid_amount = total - remaining_amount
    return InstallmentStatus(
        plan_id=plan.id,
        policy=AmortizationPolicy.CALENDAR,
        installment_amount=value,
        paid_amount=paid_amount,
        remaining_amount=remaining_amount,
        progress_percent=_progress(paid_amount, total),
        installments_paid=count - remaining_installments if count > 0 else 0,
        remaining_installments=remaining_installments,
        current_installment=min(months_passed + 1, count) if count > 0 else 0,
        is_finished=remaining_installments == 0,
    )


def ledger_installment_status(
    plan: InstallmentPlan,
    transactions: Iterable[Transaction],
    today: date,
    payment_method: PaymentMethod | None = None,
) -> InstallmentStatus:
    """Compute plan progress from the plan's recorded transactions.

    Transactions whose cycle-adjusted date is on or before ``today`` count as
    paid. The plan is finished once the remaining amount is within
    ``INSTALLMENT_FINISHED_TOLERANCE`` of zero.
    """
    count = plan.installments_count
    total = plan.total_amount
    paid = [
        transaction
        for transaction in transactions
        if transaction.installment_plan_id == plan.id
        and cycle_adjusted_date(transaction, payment_method) <= today
    ]
    paid_amount = sum((abs(item.amount) for item in paid), Decimal("0"))
    remaining_amount = max(total - paid_amount, Decimal("0"))
    installments_paid = len(paid)
    return InstallmentStatus(
        plan_id=plan.id,
        policy=AmortizationPolicy.LEDGER,
        installment_amount=installment_value(total, count),
        paid_amount=paid_amount,
        remaining_amount=remaining_amount,
        progress_percent=_progress(paid_amount, total),
        installments_paid=installments_paid,
        remaining_installments=max(count - installments_paid, 0),
        current_installment=min(installments_paid + 1, count) if count > 0 else 0,
        is_finished=remaining_amount <= INSTALLMENT_FINISHED_TOLERANCE,
    )


def compute_installment_status(
    plan: InstallmentPlan,
    transactions: Iterable[Transaction],
    today: date,
    policy: AmortizationPolicy = AmortizationPolicy.LEDGER,
    payment_method: PaymentMethod | None = None,
) -> InstallmentStatus:
    """Compute plan progress with the requested amortization policy."""
    if policy == AmortizationPolicy.CALENDAR:
        return calendar_installment_status(plan, today)
    return ledger_installment_status(
        plan,
        transactions,
        today,
        payment_method=payment_method,
    )


def _progress(paid_amount: Decimal, total_amount: Decimal) -> Decimal:
    if total_amount <= 0:
        return Decimal("0")
    percent = safe_divide(paid_amount, total_amount) * HUNDRED
    return min(max(percent, Decimal("0")), HUNDRED)


__all__ = [
    "installment_value",
    "build_installment_schedule",
    "calendar_installment_status",
    "ledger_installment_status",
    "compute_installment_status",
]
