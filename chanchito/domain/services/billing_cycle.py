"""Credit card billing-cycle arithmetic.

Closing and payment days configured near the end of a month (29-31) are
clamped to the last valid day of the target month, so a card closing on the
31st closes on the 30th in April and on the 28th/29th in February.
"""

from calendar import monthrange
from datetime import date, timedelta

from chanchito.domain.models import BillingCycle, PaymentMethod, Transaction


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, clamping ``day`` to the last day of the month.

    Args:
        year: Calendar year.
        month: Calendar month (1-12).
        day: Requested day of month; values below 1 are treated as 1.

    Returns:
        date: The requested date or the month's last day.
    """
    last_day = monthrange(year, month)[1]
    return date(year, month, min(max(day, 1), last_day))


def add_months(value: date, months: int, day: int | None = None) -> date:
    """Shift a date by whole months.

    Args:
        value: Starting date.
        months: Number of months to add (may be negative).
        day: Day of month for the result; defaults to ``value.day``.

    Returns:
        date: Shifted date clamped to the end of the target month.
    """
    month_index = value.year * 12 + (value.month - 1) + months
    year, month_zero = divmod(month_index, 12)
    return clamp_day(year, month_zero + 1, day if day is not None else value.day)


def months_between(later: date, earlier: date) -> int:
    """Return the number of whole calendar months from ``earlier`` to ``later``.

    A month is counted once ``later`` reaches the anchor day of ``earlier``
    in the following month (clamped to month end). The result is negative
    when ``later`` precedes ``earlier``.
    """
    if later < earlier:
        return -months_between(earlier, later)
    months = (later.year - earlier.year) * 12 + (later.month - earlier.month)
    if months and add_months(earlier, months) > later:
        months -= 1
    return months


def billing_cycle_for(
    transaction_date: date,
    closing_day: int,
    payment_day: int,
) -> BillingCycle:
    """Return the billing cycle a charge falls into.

    A charge on or before the closing day belongs to the cycle closing this
    month and is payable next month; later charges roll into the cycle
    closing next month, payable the month after.

    Args:
        transaction_date: Date of the charge.
        closing_day: Card closing day of month (1-31).
        payment_day: Card payment day of month (1-31).

    Returns:
        BillingCycle: Cycle boundaries and due date.
    """
    closing_this_month = clamp_day(
        transaction_date.year,
        transaction_date.month,
        closing_day,
    )
    if transaction_date <= closing_this_month:
        closing_date = closing_this_month
    else:
        closing_date = add_months(transaction_date, 1, day=closing_day)
    return _cycle_from_closing(closing_date, closing_day, payment_day)


def cycle_closing_in_month(
    year: int,
    month: int,
    closing_day: int,
    payment_day: int,
) -> BillingCycle:
    """Return the cycle whose closing date falls in the given month."""
    closing_date = clamp_day(year, month, closing_day)
    return _cycle_from_closing(closing_date, closing_day, payment_day)


def cycle_adjusted_date(
    transaction: Transaction,
    payment_method: PaymentMethod | None,
) -> date:
    """Return the date a transaction counts on for balance purposes.

    Installment transactions are already dated on their billing month, so
    they keep their own date. Other charges on a configured credit card are
    moved to the payment date of their cycle.
    """
    if (
        transaction.installment_plan_id is not None
        or payment_method is None
        or not payment_method.has_billing_cycle
    ):
        return transaction.date
    cycle = billing_cycle_for(
        transaction.date,
        payment_method.default_closing_day,
        payment_method.default_payment_day,
    )
    return cycle.payment_date


def statement_period_date(
    transaction_date: date,
    payment_day: int | None,
) -> date:
    """Return the month a credit card charge is grouped under.

    Charges dated up to two days after the payment day belong to the
    previous month's statement.
    """
    if payment_day and transaction_date.day <= payment_day + 2:
        return add_months(transaction_date, -1)
    return transaction_date


def _cycle_from_closing(
    closing_date: date,
    closing_day: int,
    payment_day: int,
) -> BillingCycle:
    previous_closing = add_months(closing_date, -1, day=closing_day)
    return BillingCycle(
        start_date=previous_closing + timedelta(days=1),
        closing_date=closing_date,
        payment_date=add_months(closing_date, 1, day=payment_day),
    )


__all__ = [
    "clamp_day",
    "add_months",
    "months_between",
    "billing_cycle_for",
    "cycle_closing_in_month",
    "cycle_adjusted_date",
    "statement_period_date",
]
