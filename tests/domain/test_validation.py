"""Tests for domain validation helpers."""

from datetime import date
from decimal import Decimal

import pytest

from chanchito.domain.errors import ValidationError
from chanchito.domain.services.validation import (
    validate_amount,
    validate_asset_type,
    validate_currency,
    validate_date,
    validate_description,
    validate_installments_count,
    validate_optional_price,
    validate_payment_method,
    validate_ticker,
    validate_transaction_type,
)


def test_validate_amount_accepts_positive_numbers() -> None:
    assert validate_amount("1500.50") == Decimal("1500.50")
    assert validate_amount(3) == Decimal("3")


@pytest.mark.parametrize("value", [0, -1, "abc", "NaN", None])
def test_validate_amount_rejects_invalid(value) -> None:
    with pytest.raises(ValidationError):
        validate_amount(value)


def test_validate_description_trims_and_requires_three_chars() -> None:
    assert validate_description("  Rent  ") == "Rent"
    with pytest.raises(ValidationError):
        validate_description(" ab ")
    with pytest.raises(ValidationError):
        validate_description(None)


def test_validate_transaction_type() -> None:
    assert validate_transaction_type("Income") == "income"
    with pytest.raises(ValidationError):
        validate_transaction_type("transfer")


def test_validate_date() -> None:
    assert validate_date("2024-03-10") == date(2024, 3, 10)
    assert validate_date(date(2024, 3, 10)) == date(2024, 3, 10)
    with pytest.raises(ValidationError):
        validate_date("10/03/2024")
    with pytest.raises(ValidationError):
        validate_date(None)


@pytest.mark.parametrize("value", [1, 6, "12", 3.0])
def test_validate_installments_count_accepts_integers(value) -> None:
    assert validate_installments_count(value) == int(value)


@pytest.mark.parametrize("value", [0, -3, 2.5, "x", True, None])
def test_validate_installments_count_rejects_invalid(value) -> None:
    with pytest.raises(ValidationError):
        validate_installments_count(value)


def test_validate_payment_method_keeps_days_for_credit_only() -> None:
    assert validate_payment_method(" Visa ", "credit", 25, 5) == (
        "Visa",
        "credit",
        25,
        5,
    )
    assert validate_payment_method("Wallet", "cash", 25, 5) == (
        "Wallet",
        "cash",
        None,
        None,
    )


@pytest.mark.parametrize(
    ("name", "method_type", "closing", "payment"),
    [
        ("", "credit", 25, 5),
        ("x" * 51, "debit", None, None),
        ("Visa", "prepaid", None, None),
        ("Visa", "credit", 32, 5),
        ("Visa", "credit", 25, 0),
    ],
)
def test_validate_payment_method_rejects_invalid(
    name,
    method_type,
    closing,
    payment,
) -> None:
    with pytest.raises(ValidationError):
        validate_payment_method(name, method_type, closing, payment)


def test_portfolio_validators() -> None:
    assert validate_ticker(" ggal ") == "GGAL"
    assert validate_asset_type("CEDEAR") == "cedear"
    assert validate_currency("usd") == "USD"
    assert validate_optional_price(None) is None
    assert validate_optional_price("12.5") == Decimal("12.5")
    with pytest.raises(ValidationError):
        validate_ticker("   ")
    with pytest.raises(ValidationError):
        validate_currency("EUR")
    with pytest.raises(ValidationError):
        validate_optional_price("-1")
