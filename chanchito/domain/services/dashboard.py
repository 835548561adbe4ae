"""Home dashboard aggregations."""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from chanchito.domain.constants import EXPENSE, INCOME, UNCATEGORIZED_LABEL
from chanchito.domain.models import (
    Category,
    DashboardSummary,
    PaymentMethod,
    RecurringPlan,
    Transaction,
)
from chanchito.domain.services.billing_cycle import cycle_closing_in_month
from chanchito.domain.services.recurring import monthly_burn_rate

GLOBAL_SCOPE = "global"
CURRENT_MONTH_SCOPE = "current_month"


def is_expense_in_current_month(
    transaction: Transaction,
    methods_by_id: dict[str, PaymentMethod],
    today: date,
) -> bool:
    """Return True when an expense is charged in the current month.

    Installments on a configured credit card count in the payment month of
    the cycle closing this month. Everything else uses the calendar month.
    """
    if transaction.type != EXPENSE:
        return False
    method = methods_by_id.get(transaction.payment_method_id)
    if transaction.is_installment and method is not None and method.has_billing_cycle:
        cycle = cycle_closing_in_month(
            today.year,
            today.month,
            method.default_closing_day,
            method.default_payment_day,
        )
        reference = cycle.payment_date
    else:
        reference = today
    return (
        transaction.date.year == reference.year
        and transaction.date.month == reference.month
    )


def global_income(transactions: Iterable[Transaction]) -> Decimal:
    """Return the all-time income total."""
    return sum(
        (abs(t.amount) for t in transactions if t.type == INCOME),
        Decimal("0"),
    )


def non_installment_expenses(transactions: Iterable[Transaction]) -> Decimal:
    """Return the all-time total of expenses outside installment plans."""
    return sum(
        (
            abs(t.amount)
            for t in transactions
            if t.type == EXPENSE and not t.is_installment
        ),
        Decimal("0"),
    )


def current_month_installments(
    transactions: Iterable[Transaction],
    methods: Sequence[PaymentMethod],
    today: date,
) -> list[Transaction]:
    """Return the installment transactions charged this month."""
    methods_by_id = {method.id: method for method in methods}
    return [
        t
        for t in transactions
        if t.is_installment and is_expense_in_current_month(t, methods_by_id, today)
    ]


def current_month_installments_total(
    transactions: Iterable[Transaction],
    methods: Sequence[PaymentMethod],
    today: date,
) -> Decimal:
    return sum(
        (abs(t.amount) for t in current_month_installments(transactions, methods, today)),
        Decimal("0"),
    )


def global_balance(
    transactions: Sequence[Transaction],
    methods: Sequence[PaymentMethod],
    recurring_plans: Iterable[RecurringPlan],
    today: date,
) -> Decimal:
    """Return income minus spending committed so far.

    Only this month's installments and fixed costs are subtracted; future
    installments are not yet owed.
    """
    return (
        global_income(transactions)
        - non_installment_expenses(transactions)
        - current_month_installments_total(transactions, methods, today)
        - monthly_burn_rate(recurring_plans)
    )


def global_effective_expenses(
    transactions: Sequence[Transaction],
    methods: Sequence[PaymentMethod],
    recurring_plans: Iterable[RecurringPlan],
    today: date,
) -> Decimal:
    return (
        non_installment_expenses(transactions)
        + current_month_installments_total(transactions, methods, today)
        + monthly_burn_rate(recurring_plans)
    )


def expenses_by_category(
    transactions: Iterable[Transaction],
    methods: Sequence[PaymentMethod],
    categories: Iterable[Category],
    today: date,
    scope: str = GLOBAL_SCOPE,
) -> dict[str, Decimal]:
    """Return expense totals keyed by category name.

    Args:
        transactions: Transactions of the user.
        methods: Payment methods, used for the current-month scope.
        categories: Known categories; unknown ids are grouped as "Otros".
        today: Reference date.
        scope: ``global`` for all history, ``current_month`` for this month.

    Returns:
        dict[str, Decimal]: Expense totals per category name.
    """
    if scope not in (GLOBAL_SCOPE, CURRENT_MONTH_SCOPE):
        raise ValueError(f"Unsupported expenses scope: {scope}")
    names = {category.id: category.name for category in categories}
    methods_by_id = {method.id: method for method in methods}
    totals: dict[str, Decimal] = {}
    for transaction in transactions:
        if transaction.type != EXPENSE:
            continue
        if scope == CURRENT_MONTH_SCOPE and not is_expense_in_current_month(
            transaction,
            methods_by_id,
            today,
        ):
            continue
        name = names.get(transaction.category_id, UNCATEGORIZED_LABEL)
        totals[name] = totals.get(name, Decimal("0")) + abs(transaction.amount)
    return totals


def build_dashboard_summary(
    transactions: Sequence[Transaction],
    methods: Sequence[PaymentMethod],
    recurring_plans: Sequence[RecurringPlan],
    categories: Sequence[Category],
    today: date,
    scope: str = CURRENT_MONTH_SCOPE,
) -> DashboardSummary:
    """Compute every home dashboard figure from one snapshot."""
    return DashboardSummary(
        global_balance=global_balance(transactions, methods, recurring_plans, today),
        global_income=global_income(transactions),
        effective_expenses=global_effective_expenses(
            transactions,
            methods,
            recurring_plans,
            today,
        ),
        monthly_burn_rate=monthly_burn_rate(recurring_plans),
        current_month_installments_total=current_month_installments_total(
            transactions,
            methods,
            today,
        ),
        expenses_by_category=expenses_by_category(
            transactions,
            methods,
            categories,
            today,
            scope=scope,
        ),
    )


__all__ = [
    "GLOBAL_SCOPE",
    "CURRENT_MONTH_SCOPE",
    "is_expense_in_current_month",
    "global_income",
    "non_installment_expenses",
    "current_month_installments",
    "current_month_installments_total",
    "global_balance",
    "global_effective_expenses",
    "expenses_by_category",
    "build_dashboard_summary",
]
