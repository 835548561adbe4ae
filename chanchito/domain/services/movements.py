"""Month-grouped transaction listing."""

from collections.abc import Iterable, Sequence
from datetime import date

from chanchito.domain.constants import CREDIT
from chanchito.domain.models import PaymentMethod, Transaction
from chanchito.domain.services.billing_cycle import statement_period_date


def period_date(
    transaction: Transaction,
    payment_method: PaymentMethod | None,
) -> date:
    """Return the date used to place a transaction in a month list.

    Credit card charges made just after the payment day are shown with the
    previous month's statement. Other transactions keep their own date.
    """
    if payment_method is None or payment_method.type != CREDIT:
        return transaction.date
    return statement_period_date(
        transaction.date,
        payment_method.default_payment_day,
    )


def transactions_for_month(
    transactions: Iterable[Transaction],
    methods: Sequence[PaymentMethod],
    year: int,
    month: int,
    payment_method_id: str | None = None,
) -> list[Transaction]:
    """Return the transactions listed under ``year``/``month``.

    Args:
        transactions: Transactions of the user.
        methods: Payment methods, used to find credit cards.
        year: Year of the month shown.
        month: Month shown (1-12).
        payment_method_id: Optional filter on a single payment method.

    Returns:
        list[Transaction]: Matching transactions, newest first.
    """
    methods_by_id = {method.id: method for method in methods}
    selected = []
    for transaction in transactions:
        if payment_method_id and transaction.payment_method_id != payment_method_id:
            continue
        shown_on = period_date(
            transaction,
            methods_by_id.get(transaction.payment_method_id),
        )
        if shown_on.year == year and shown_on.month == month:
            selected.append(transaction)
    return sorted(selected, key=lambda item: (item.date, item.id), reverse=True)


__all__ = ["period_date", "transactions_for_month"]
