"""Tests for transaction, recurring plan, payment method and category commands."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from chanchito.application.use_cases.manage_payment_methods import (
    CreateCategoryUseCase,
    CreatePaymentMethodUseCase,
    DeletePaymentMethodUseCase,
)
from chanchito.application.use_cases.manage_recurring_plans import (
    CreateRecurringPlanUseCase,
    DeleteRecurringPlanUseCase,
    ToggleRecurringPlanUseCase,
    UpdateRecurringPlanUseCase,
)
from chanchito.application.use_cases.manage_transactions import (
    CreateTransactionUseCase,
    DeleteTransactionUseCase,
    UpdateTransactionUseCase,
)
from chanchito.domain.errors import ValidationError


def test_create_transaction_normalizes_fields() -> None:
    repository = MagicMock()

    transaction = CreateTransactionUseCase(repository, logger=MagicMock()).execute(
        "u1",
        " Supermarket ",
        "1500.50",
        "Expense",
        "2024-03-10",
        category_id="",
        payment_method_id="visa",
    )

    repository.insert_transactions.assert_called_once_with([transaction])
    assert transaction.description == "Supermarket"
    assert transaction.amount == Decimal("1500.50")
    assert transaction.type == "expense"
    assert transaction.date == date(2024, 3, 10)
    assert transaction.category_id is None
    assert transaction.signed_amount == Decimal("-1500.50")


def test_create_transaction_rejects_negative_amount() -> None:
    repository = MagicMock()

    with pytest.raises(ValidationError):
        CreateTransactionUseCase(repository, logger=MagicMock()).execute(
            "u1",
            "Refund",
            "-10",
            "income",
            "2024-03-10",
        )

    repository.insert_transactions.assert_not_called()


def test_update_and_delete_transaction_report_missing_rows() -> None:
    repository = MagicMock()
    repository.update_transaction.return_value = False
    repository.delete_transaction.return_value = False
    logger = MagicMock()

    updated = UpdateTransactionUseCase(repository, logger=logger).execute(
        "u1",
        "t1",
        "Dinner",
        date(2024, 3, 1),
    )
    deleted = DeleteTransactionUseCase(repository, logger=logger).execute("u1", "t1")

    assert updated is False
    assert deleted is False
    assert logger.warning.call_count == 2
    assert set(repository.update_transaction.call_args.kwargs) == {
        "description",
        "transaction_date",
        "category_id",
    }


def test_recurring_plan_lifecycle() -> None:
    repository = MagicMock()
    repository.update_recurring_plan.return_value = True
    repository.delete_recurring_plan.return_value = True
    logger = MagicMock()

    plan = CreateRecurringPlanUseCase(repository, logger=logger).execute(
        "u1",
        "Streaming",
        "4500",
        payment_method_id="visa",
    )
    assert plan.is_active is True

    updated = UpdateRecurringPlanUseCase(repository, logger=logger).execute(
        plan,
        "Streaming HD",
        "6000",
        payment_method_id="visa",
    )
    assert updated.amount == Decimal("6000")
    assert updated.id == plan.id

    paused = ToggleRecurringPlanUseCase(repository, logger=logger).execute(updated)
    assert paused.is_active is False
    resumed = ToggleRecurringPlanUseCase(repository, logger=logger).execute(
        paused,
        is_active=True,
    )
    assert resumed.is_active is True

    assert DeleteRecurringPlanUseCase(repository, logger=logger).execute(
        "u1",
        plan.id,
    )
    assert repository.update_recurring_plan.call_count == 3


def test_toggle_missing_plan_returns_none() -> None:
    repository = MagicMock()
    repository.update_recurring_plan.return_value = False
    plan = CreateRecurringPlanUseCase(repository, logger=MagicMock()).execute(
        "u1",
        "Gym",
        "100",
    )

    assert ToggleRecurringPlanUseCase(repository, logger=MagicMock()).execute(plan) is None


def test_create_payment_method_drops_days_for_debit() -> None:
    repository = MagicMock()

    method = CreatePaymentMethodUseCase(repository, logger=MagicMock()).execute(
        "u1",
        "Cuenta sueldo",
        "debit",
        default_closing_day=25,
        default_payment_day=5,
    )

    repository.insert_payment_method.assert_called_once_with(method)
    assert method.default_closing_day is None
    assert method.has_billing_cycle is False


def test_create_credit_card_keeps_days() -> None:
    method = CreatePaymentMethodUseCase(MagicMock(), logger=MagicMock()).execute(
        "u1",
        "Visa",
        "credit",
        default_closing_day=31,
        default_payment_day=10,
    )

    assert method.has_billing_cycle is True
    assert method.default_closing_day == 31


def test_delete_payment_method() -> None:
    repository = MagicMock()
    repository.delete_payment_method.return_value = True

    assert DeletePaymentMethodUseCase(repository, logger=MagicMock()).execute(
        "u1",
        "visa",
    )


def test_create_category() -> None:
    repository = MagicMock()

    category = CreateCategoryUseCase(repository, logger=MagicMock()).execute(
        "u1",
        " Comida ",
        emoji=" ",
    )

    repository.insert_category.assert_called_once_with(category)
    assert category.name == "Comida"
    assert category.emoji is None
    with pytest.raises(ValidationError):
        CreateCategoryUseCase(repository, logger=MagicMock()).execute("u1", "  ")
