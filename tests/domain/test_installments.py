"""Tests for installment amortization."""

from datetime import date
from decimal import Decimal

from chanchito.domain.models import (
    AmortizationPolicy,
    InstallmentPlan,
    PaymentMethod,
    Transaction,
)
from chanchito.domain.services.installments import (
    build_installment_schedule,
    calendar_installment_status,
    compute_installment_status,
    ledger_installment_status,
)


def _plan(
    total: str = "1200",
    count: int = 6,
    purchase: date = date(2024, 1, 10),
) -> InstallmentPlan:
    return InstallmentPlan(
        id="p1",
        user_id="u1",
        description="Notebook",
        total_amount=Decimal(total),
        installments_count=count,
        purchase_date=purchase,
        payment_method_id="visa",
    )


def _children(plan: InstallmentPlan) -> list[Transaction]:
    return [
        Transaction(
            id=f"c{item.number}",
            user_id=plan.user_id,
            description=f"{plan.description} ({item.number}/{plan.installments_count})",
            amount=item.amount,
            type="expense",
            date=item.due_date,
            payment_method_id=plan.payment_method_id,
            installment_plan_id=plan.id,
        )
        for item in build_installment_schedule(
            plan.total_amount,
            plan.installments_count,
            plan.purchase_date,
        )
    ]


def test_schedule_splits_total_into_monthly_items() -> None:
    schedule = build_installment_schedule(Decimal("1200"), 6, date(2024, 1, 10))

    assert [item.amount for item in schedule] == [Decimal("200.00")] * 6
    assert [item.due_date for item in schedule] == [
        date(2024, 1, 10),
        date(2024, 2, 10),
        date(2024, 3, 10),
        date(2024, 4, 10),
        date(2024, 5, 10),
        date(2024, 6, 10),
    ]
    assert [item.number for item in schedule] == [1, 2, 3, 4, 5, 6]


def test_schedule_keeps_purchase_day_after_short_months() -> None:
    schedule = build_installment_schedule(Decimal("300"), 3, date(2024, 1, 31))

    assert [item.due_date for item in schedule] == [
        date(2024, 1, 31),
        date(2024, 2, 29),
        date(2024, 3, 31),
    ]


def test_schedule_rounds_uneven_amounts_to_cents() -> None:
    schedule = build_installment_schedule(Decimal("1000"), 3, date(2024, 1, 1))

    assert {item.amount for item in schedule} == {Decimal("333.33")}


def test_calendar_policy_scenario() -> None:
    status = calendar_installment_status(_plan(), date(2024, 3, 10))

    assert status.policy == AmortizationPolicy.CALENDAR
    assert status.current_installment == 3
    assert status.remaining_installments == 4
    assert status.remaining_amount == Decimal("800")
    assert status.paid_amount == Decimal("400")
    assert round(status.progress_percent, 2) == Decimal("33.33")
    assert status.is_finished is False


def test_calendar_policy_future_purchase_has_nothing_paid() -> None:
    status = calendar_installment_status(
        _plan(purchase=date(2024, 5, 1)),
        date(2024, 3, 10),
    )

    assert status.paid_amount == Decimal("0")
    assert status.remaining_installments == 6
    assert status.current_installment == 1
    assert status.progress_percent == Decimal("0")


def test_calendar_policy_finishes_after_last_month() -> None:
    status = calendar_installment_status(_plan(), date(2025, 1, 1))

    assert status.remaining_installments == 0
    assert status.remaining_amount == Decimal("0")
    assert status.current_installment == 6
    assert status.progress_percent == Decimal("100")
    assert status.is_finished is True


def test_zero_count_plan_does_not_divide_by_zero() -> None:
    plan = _plan(count=0)

    calendar = calendar_installment_status(plan, date(2024, 3, 10))
    ledger = ledger_installment_status(plan, [], date(2024, 3, 10))

    assert calendar.installment_amount == Decimal("0")
    assert calendar.current_installment == 0
    assert ledger.installment_amount == Decimal("0")
    assert ledger.current_installment == 0


def test_ledger_policy_counts_transactions_up_to_today() -> None:
    plan = _plan()
    status = ledger_installment_status(plan, _children(plan), date(2024, 3, 10))

    assert status.policy == AmortizationPolicy.LEDGER
    assert status.installments_paid == 3
    assert status.paid_amount == Decimal("600.00")
    assert status.remaining_amount == Decimal("600.00")
    assert status.current_installment == 4
    assert status.is_finished is False


def test_ledger_policy_ignores_other_plans() -> None:
    plan = _plan()
    other = Transaction(
        id="x",
        user_id="u1",
        description="Other plan",
        amount=Decimal("500"),
        type="expense",
        date=date(2024, 1, 1),
        installment_plan_id="p2",
    )

    status = ledger_installment_status(plan, [other], date(2024, 3, 10))

    assert status.paid_amount == Decimal("0")


def test_ledger_policy_tolerates_rounding_drift() -> None:
    plan = _plan(total="1000", count=3)
    status = ledger_installment_status(plan, _children(plan), date(2024, 12, 1))

    assert status.remaining_amount == Decimal("0.01")
    assert status.is_finished is True


def test_ledger_policy_finished_within_tolerance() -> None:
    plan = _plan()
    paid = _children(plan)[:5]
    partial = Transaction(
        id="c6",
        user_id="u1",
        description="Notebook (6/6)",
        amount=Decimal("120"),
        type="expense",
        date=date(2024, 6, 10),
        installment_plan_id=plan.id,
    )

    status = ledger_installment_status(plan, [*paid, partial], date(2024, 12, 1))

    assert status.remaining_amount == Decimal("80.00")
    assert status.is_finished is True


def test_paid_plus_remaining_equals_total_for_both_policies() -> None:
    plan = _plan(total="1000", count=7)
    children = _children(plan)
    for today in (date(2023, 12, 1), date(2024, 3, 10), date(2024, 6, 30)):
        for policy in AmortizationPolicy:
            status = compute_installment_status(plan, children, today, policy)
            assert status.paid_amount + status.remaining_amount == plan.total_amount
            assert Decimal("0") <= status.progress_percent <= Decimal("100")


def test_ledger_policy_shifts_card_installments_only_by_their_date() -> None:
    card = PaymentMethod(
        id="visa",
        user_id="u1",
        name="Visa",
        type="credit",
        default_closing_day=25,
        default_payment_day=5,
    )
    plan = _plan()

    status = compute_installment_status(
        plan,
        _children(plan),
        date(2024, 2, 10),
        payment_method=card,
    )

    assert status.installments_paid == 2
